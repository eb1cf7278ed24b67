"""
User model for authentication.
"""

import uuid
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .tenant import Tenant


class Role(str, Enum):
    """User roles inside a tenant."""

    ADMIN = "ADMIN"
    USER = "USER"


class User(BaseModel):
    """User account, bound to exactly one tenant."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(String(10), default=Role.USER.value, nullable=False)

    # never reassigned after creation
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    )

    tenant: Mapped["Tenant"] = relationship("Tenant", lazy="selectin")

    __table_args__ = (
        CheckConstraint("role IN ('ADMIN', 'USER')", name="ck_users_role"),
        Index("idx_users_email", "email"),
        Index("idx_users_tenant_id", "tenant_id"),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}', role='{self.role_value}')>"

    @property
    def role_value(self) -> Role:
        return Role(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role_value is Role.ADMIN
