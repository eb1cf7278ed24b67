"""Repository layer for data access."""

from .note_repository import NoteRepository
from .tenant_repository import TenantRepository
from .user_repository import UserRepository

__all__ = [
    "UserRepository",
    "TenantRepository",
    "NoteRepository",
]
