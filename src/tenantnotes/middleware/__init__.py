"""Middleware for authentication and other cross-cutting concerns."""

from .auth import get_current_user, get_request_context, get_token_service
from .gateway import AccessGateway

__all__ = ["AccessGateway", "get_current_user", "get_request_context", "get_token_service"]
