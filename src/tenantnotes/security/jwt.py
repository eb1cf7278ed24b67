"""Identity token issuance and verification."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from jose import JWTError, jwt

from ..config import Settings
from ..core.logging import get_logger
from ..core.models.user import Role

logger = get_logger("tokens")

TOKEN_TYPE = "access"


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a token."""

    user_id: UUID
    tenant_id: UUID
    role: Role
    email: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "sub": str(self.user_id),
            "tenant_id": str(self.tenant_id),
            "role": self.role.value,
            "email": self.email,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> Optional["TokenClaims"]:
        """Rebuild claims from a decoded payload, or None if anything is missing."""
        try:
            user_id = UUID(str(payload["sub"]))
            tenant_id = UUID(str(payload["tenant_id"]))
            role = Role(payload["role"])
            email = payload["email"]
        except (KeyError, TypeError, ValueError):
            return None
        if not isinstance(email, str) or not email:
            return None
        return cls(user_id=user_id, tenant_id=tenant_id, role=role, email=email)


class TokenService:
    """Signs and checks identity tokens with an immutable secret."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_hours: int = 24):
        if not secret_key:
            raise ValueError("Token signing secret is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expires_delta = timedelta(hours=expire_hours)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expire_hours=settings.token_expire_hours,
        )

    @property
    def expires_in_seconds(self) -> int:
        return int(self._expires_delta.total_seconds())

    def issue(self, claims: TokenClaims, now: Optional[datetime] = None) -> str:
        """Create a signed token for the claims, valid for the configured lifetime."""
        issued_at = now or datetime.now(timezone.utc)
        to_encode = claims.to_payload()
        to_encode.update(
            {
                "type": TOKEN_TYPE,
                "iat": issued_at,
                "exp": issued_at + self._expires_delta,
            }
        )
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[TokenClaims]:
        """Return the embedded claims, or None for any bad token.

        Signature and expiry are both checked by jose; a token that decodes
        but lacks a claim is rejected as a whole.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            return None
        except Exception:
            # garbage input can surface as non-JWTError from the decoders
            logger.debug("Token decode failed on malformed input", exc_info=True)
            return None

        if payload.get("type") != TOKEN_TYPE or "exp" not in payload:
            return None

        return TokenClaims.from_payload(payload)
