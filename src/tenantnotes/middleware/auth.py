"""Request dependencies exposing the identity resolved by the gateway."""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.models.user import User
from ..core.services.identity import IdentityResolver, RequestContext
from ..database import get_db_session
from ..security.jwt import TokenService
from .gateway import AUTHENTICATION_REQUIRED, INVALID_TOKEN


def get_token_service(request: Request) -> TokenService:
    """Token service the app was built with."""
    return request.app.state.token_service


def get_request_context(request: Request) -> RequestContext:
    """Identity stored by the access gateway for this request."""
    context = getattr(request.state, "request_context", None)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=AUTHENTICATION_REQUIRED
        )
    return context


async def get_current_user(
    context: RequestContext = Depends(get_request_context),
    session: AsyncSession = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
) -> User:
    """Live user (tenant loaded) behind the verified token."""
    user = await IdentityResolver(session, token_service).resolve_claims(context)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_TOKEN)
    return user
