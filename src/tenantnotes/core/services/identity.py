"""Per-request identity: bearer parsing and resolution to a live user."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ...security.jwt import TokenClaims, TokenService
from ..logging import get_logger
from ..models.user import Role, User
from ..repositories.user_repository import UserRepository

logger = get_logger("identity")

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class RequestContext:
    """Verified identity attached to a request by the access gateway."""

    user_id: UUID
    tenant_id: UUID
    role: Role
    email: str

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "RequestContext":
        return cls(
            user_id=claims.user_id,
            tenant_id=claims.tenant_id,
            role=claims.role,
            email=claims.email,
        )


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


class IdentityResolver:
    """Resolves bearer credentials to the current user with its tenant.

    Role and plan always come from the stored rows, never from the token.
    """

    def __init__(self, session: AsyncSession, token_service: TokenService):
        self.session = session
        self.token_service = token_service
        self.user_repo = UserRepository(session)

    async def resolve(self, authorization: Optional[str]) -> Optional[User]:
        """Full resolution from a raw Authorization header value."""
        token = parse_bearer(authorization)
        if token is None:
            return None

        claims = self.token_service.verify(token)
        if claims is None:
            return None

        return await self.resolve_claims(claims)

    async def resolve_claims(self, claims: TokenClaims | RequestContext) -> Optional[User]:
        """Load the user named by already verified claims."""
        user = await self.user_repo.get_by_id(claims.user_id)
        if user is None:
            logger.warning(
                "Verified token for missing user", extra={"user_id": str(claims.user_id)}
            )
            return None
        return user
