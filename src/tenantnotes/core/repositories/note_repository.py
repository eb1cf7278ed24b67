"""Note repository for database operations.

Every read and delete takes a tenant id; there is no unscoped lookup.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..logging import get_logger
from ..models.note import Note

logger = get_logger("notes.repository")


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def add_note(self, note_data: dict) -> Note:
        """Stage a new note in the current transaction without committing."""
        note = Note(**note_data)
        self.session.add(note)
        return note

    async def get_by_id_in_tenant(self, note_id: UUID, tenant_id: UUID) -> Optional[Note]:
        """Get note by ID only if it belongs to the tenant."""
        stmt = (
            select(Note)
            .options(selectinload(Note.author))
            .where(and_(Note.id == note_id, Note.tenant_id == tenant_id))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_for_tenant(self, tenant_id: UUID) -> int:
        """Count notes owned by the tenant."""
        stmt = select(func.count(Note.id)).where(Note.tenant_id == tenant_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_for_tenant(self, tenant_id: UUID) -> List[Note]:
        """All notes of the tenant, newest first."""
        stmt = (
            select(Note)
            .options(selectinload(Note.author))
            .where(Note.tenant_id == tenant_id)
            .order_by(desc(Note.created_at))
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update_note(
        self, note_id: UUID, tenant_id: UUID, update_data: dict
    ) -> Optional[Note]:
        """Update note if it belongs to the tenant."""
        note = await self.get_by_id_in_tenant(note_id, tenant_id)
        if not note:
            return None

        for key, value in update_data.items():
            setattr(note, key, value)

        await self.session.commit()
        return await self.get_by_id_in_tenant(note_id, tenant_id)

    async def delete_note(self, note_id: UUID, tenant_id: UUID) -> bool:
        """Delete note if it belongs to the tenant."""
        note = await self.get_by_id_in_tenant(note_id, tenant_id)
        if not note:
            logger.warning(
                "Note not found in tenant",
                extra={"note_id": str(note_id), "tenant_id": str(tenant_id)},
            )
            return False

        await self.session.delete(note)
        await self.session.commit()
        logger.info("Deleted note", extra={"note_id": str(note_id), "tenant_id": str(tenant_id)})
        return True
