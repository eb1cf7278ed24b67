"""API routers for TenantNotes."""

from .auth import router as auth_router
from .health import router as health_router
from .notes import router as notes_router
from .tenants import router as tenants_router

__all__ = ["auth_router", "notes_router", "tenants_router", "health_router"]
