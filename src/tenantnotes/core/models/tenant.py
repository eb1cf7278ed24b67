"""
Tenant model - an organization owning its own users and notes.
"""

from enum import Enum

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Plan(str, Enum):
    """Subscription tiers."""

    FREE = "FREE"
    PRO = "PRO"


class Tenant(BaseModel):
    """Isolated organizational namespace."""

    __tablename__ = "tenants"

    slug: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    plan: Mapped[Plan] = mapped_column(String(10), default=Plan.FREE.value, nullable=False)

    __table_args__ = (
        CheckConstraint("plan IN ('FREE', 'PRO')", name="ck_tenants_plan"),
        Index("idx_tenants_slug", "slug"),
    )

    def __repr__(self) -> str:
        return f"<Tenant(slug='{self.slug}', plan='{self.plan_value}')>"

    @property
    def plan_value(self) -> Plan:
        # SQLite hands back the raw string
        return Plan(self.plan)
