"""Authentication API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.auth import CurrentUserResponse, LoginRequest, LoginResponse
from ..core.services import AuthService, IdentityResolver
from ..database import get_db_session
from ..middleware.auth import get_token_service
from ..middleware.gateway import AUTHENTICATION_REQUIRED
from ..security.jwt import TokenService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Login with email/password and get an identity token."""
    auth_service = AuthService(session, token_service)
    return await auth_service.login(request)


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    authorization: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    """Get the current user and tenant.

    /api/auth is public at the gateway, so the header is resolved here.
    """
    user = await IdentityResolver(session, token_service).resolve(authorization)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTHENTICATION_REQUIRED)
    auth_service = AuthService(session, token_service)
    return CurrentUserResponse(user=auth_service.describe_user(user))
