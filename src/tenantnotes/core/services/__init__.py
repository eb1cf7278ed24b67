"""
Service layer interfaces and implementations.
"""

from .interfaces import (
    IAuthService,
    IHealthService,
    INoteService,
    ITenantService,
)

from .auth_service import AuthService
from .health_service import HealthService
from .identity import IdentityResolver, RequestContext, parse_bearer
from .note_service import NoteService
from .quota import NoteGate, QuotaPolicy
from .tenant_service import TenantService

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteService",
    "ITenantService",
    "IHealthService",

    # Implementations
    "AuthService",
    "NoteService",
    "TenantService",
    "HealthService",
    "IdentityResolver",
    "RequestContext",
    "parse_bearer",
    "QuotaPolicy",
    "NoteGate",
]
