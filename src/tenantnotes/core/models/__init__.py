"""
Database models for TenantNotes.

Models included:
    - Tenant: organization with a subscription plan
    - User: account bound to one tenant, with a role
    - Note: short text note owned by a tenant
"""

from .base import BaseModel
from .note import Note
from .tenant import Plan, Tenant
from .user import Role, User

__all__ = [
    "BaseModel",
    "Tenant",
    "Plan",
    "User",
    "Role",
    "Note",
]
