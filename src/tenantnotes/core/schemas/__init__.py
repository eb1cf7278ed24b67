"""Pydantic request/response schemas."""

from .auth import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    TenantResponse,
    UserResponse,
)
from .common import ErrorResponse, HealthCheckResponse, MessageResponse
from .notes import NoteCreate, NoteEnvelope, NoteListResponse, NoteResponse, NoteUpdate
from .tenants import UpgradeResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "CurrentUserResponse",
    "TenantResponse",
    "UserResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "MessageResponse",
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteEnvelope",
    "NoteListResponse",
    "UpgradeResponse",
]
