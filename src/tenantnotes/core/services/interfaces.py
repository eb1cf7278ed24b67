"""
Service interfaces for TenantNotes.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
from uuid import UUID

from ..models.user import User
from ..schemas.auth import LoginRequest, LoginResponse, UserResponse
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from ..schemas.tenants import UpgradeResponse


class IAuthService(ABC):
    """Login and profile lookups."""

    @abstractmethod
    async def login(self, request: LoginRequest) -> LoginResponse:
        """Check credentials and issue an identity token."""
        pass

    @abstractmethod
    def describe_user(self, user: User) -> UserResponse:
        """Denormalized user + tenant view."""
        pass


class INoteService(ABC):
    """Tenant-scoped note CRUD."""

    @abstractmethod
    async def list_notes(self, current_user: User) -> List[NoteResponse]:
        """All notes of the caller's tenant, newest first."""
        pass

    @abstractmethod
    async def get_note(self, current_user: User, note_id: UUID) -> NoteResponse:
        """Get note by ID within the caller's tenant."""
        pass

    @abstractmethod
    async def create_note(self, current_user: User, request: NoteCreate) -> NoteResponse:
        """Create a note subject to the plan quota."""
        pass

    @abstractmethod
    async def update_note(
        self, current_user: User, note_id: UUID, request: NoteUpdate
    ) -> NoteResponse:
        """Update a note within the caller's tenant."""
        pass

    @abstractmethod
    async def delete_note(self, current_user: User, note_id: UUID) -> bool:
        """Delete a note within the caller's tenant."""
        pass


class ITenantService(ABC):
    """Tenant plan management."""

    @abstractmethod
    async def upgrade(self, current_user: User, slug: str) -> UpgradeResponse:
        """Move the caller's own tenant to PRO."""
        pass


class IHealthService(ABC):
    """System health checks."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Get overall health status."""
        pass

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Check database connectivity."""
        pass
