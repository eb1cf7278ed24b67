# Note model for tenant content
import uuid
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .user import User


class Note(BaseModel):
    """Short text note owned by a tenant and written by one of its users."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # tenant_id always equals author.tenant_id at creation time
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    author: Mapped["User"] = relationship("User", lazy="selectin")

    __table_args__ = (
        CheckConstraint("length(title) > 0", name="ck_notes_title_not_empty"),
        CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
        Index("idx_notes_tenant_id", "tenant_id"),
        Index("idx_notes_tenant_created", "tenant_id", "created_at"),
        Index("idx_notes_author_id", "author_id"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', tenant_id={self.tenant_id})>"

    @property
    def author_email(self) -> Optional[str]:
        return self.author.email if self.author is not None else None
