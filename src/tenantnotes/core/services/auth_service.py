"""Authentication service implementation."""

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ...security import TokenClaims, TokenService, verify_password
from ..logging import get_logger
from ..models.user import User
from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginRequest, LoginResponse, TenantResponse, UserResponse
from .interfaces import IAuthService

logger = get_logger("auth")

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession, token_service: TokenService):
        self.session = session
        self.user_repo = UserRepository(session)
        self.token_service = token_service

    async def login(self, request: LoginRequest) -> LoginResponse:
        """Login user and return an identity token."""
        if not request.email or not request.password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email and password are required",
            )

        # unknown email and wrong password answer the same way
        user = await self.user_repo.get_by_email(request.email)
        if not user:
            logger.info("Login rejected: unknown account")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        # bcrypt is CPU bound, keep it off the event loop
        password_ok = await run_in_threadpool(verify_password, request.password, user.password_hash)
        if not password_ok:
            logger.info("Login rejected: bad password", extra={"user_id": str(user.id)})
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

        token = self.token_service.issue(
            TokenClaims(
                user_id=user.id,
                tenant_id=user.tenant_id,
                role=user.role_value,
                email=user.email,
            )
        )

        logger.info(
            "User logged in",
            extra={"user_id": str(user.id), "tenant_id": str(user.tenant_id)},
        )

        return LoginResponse(
            token=token,
            token_type="bearer",
            expires_in=self.token_service.expires_in_seconds,
            user=self.describe_user(user),
        )

    def describe_user(self, user: User) -> UserResponse:
        """Build the user view with its tenant."""
        return UserResponse(
            id=user.id,
            email=user.email,
            role=user.role_value,
            tenant=TenantResponse.model_validate(user.tenant),
        )
