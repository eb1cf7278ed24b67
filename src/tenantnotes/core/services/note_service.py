"""Note service implementation."""

from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..logging import get_logger
from ..models.note import Note
from ..models.user import User
from ..repositories.note_repository import NoteRepository
from ..repositories.tenant_repository import TenantRepository
from ..schemas.notes import NoteCreate, NoteResponse, NoteUpdate
from .interfaces import INoteService
from .quota import NoteGate, QuotaPolicy

logger = get_logger("notes")

QUOTA_EXCEEDED = "Note limit reached. Upgrade to Pro plan for unlimited notes."
NOTE_NOT_FOUND = "Note not found"
TITLE_REQUIRED = "Title is required"


def _clean_title(title: Optional[str]) -> Optional[str]:
    if title is None or not title.strip():
        return None
    return title


class NoteService(INoteService):
    """Note service implementation.

    Every query is scoped by the caller's tenant id, so a note of another
    tenant behaves exactly like a missing one.
    """

    def __init__(self, session: AsyncSession, quota_policy: Optional[QuotaPolicy] = None):
        self.session = session
        self.note_repo = NoteRepository(session)
        self.tenant_repo = TenantRepository(session)
        self.quota_policy = quota_policy or QuotaPolicy()

    async def list_notes(self, current_user: User) -> List[NoteResponse]:
        """List the tenant's notes, newest first."""
        notes = await self.note_repo.list_for_tenant(current_user.tenant_id)
        return [self._note_to_response(note) for note in notes]

    async def get_note(self, current_user: User, note_id: UUID) -> NoteResponse:
        """Get note by ID."""
        note = await self.note_repo.get_by_id_in_tenant(note_id, current_user.tenant_id)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOTE_NOT_FOUND)
        return self._note_to_response(note)

    async def create_note(self, current_user: User, request: NoteCreate) -> NoteResponse:
        """Create new note if the tenant's plan allows it.

        The tenant row is locked before counting so concurrent creates in one
        tenant cannot both pass the check.
        """
        title = _clean_title(request.title)
        if title is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=TITLE_REQUIRED)

        tenant_id = current_user.tenant_id
        try:
            tenant = await self.tenant_repo.lock_for_update(tenant_id)
            if tenant is None:
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")

            note_count = await self.note_repo.count_for_tenant(tenant_id)
            gate = self.quota_policy.evaluate(tenant.plan_value, note_count)
            if gate is NoteGate.AT_LIMIT:
                logger.info(
                    "Note creation blocked by plan quota",
                    extra={
                        "tenant_id": str(tenant_id),
                        "plan": tenant.plan_value.value,
                        "note_count": note_count,
                    },
                )
                raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=QUOTA_EXCEEDED)

            note = self.note_repo.add_note(
                {
                    "title": title,
                    "content": request.content or "",
                    "tenant_id": tenant_id,
                    "author_id": current_user.id,
                }
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        created = await self.note_repo.get_by_id_in_tenant(note.id, tenant_id)
        logger.info(
            "Note created",
            extra={"note_id": str(note.id), "tenant_id": str(tenant_id), "author_id": str(current_user.id)},
        )
        return self._note_to_response(created)

    async def update_note(
        self, current_user: User, note_id: UUID, request: NoteUpdate
    ) -> NoteResponse:
        """Update existing note."""
        update_data = {}
        if request.title is not None:
            title = _clean_title(request.title)
            if title is None:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=TITLE_REQUIRED)
            update_data["title"] = title
        if request.content is not None:
            update_data["content"] = request.content

        if not update_data:
            return await self.get_note(current_user, note_id)

        note = await self.note_repo.update_note(note_id, current_user.tenant_id, update_data)
        if not note:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOTE_NOT_FOUND)
        return self._note_to_response(note)

    async def delete_note(self, current_user: User, note_id: UUID) -> bool:
        """Delete note; any user of the owning tenant may do it."""
        deleted = await self.note_repo.delete_note(note_id, current_user.tenant_id)
        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOTE_NOT_FOUND)
        return True

    def _note_to_response(self, note: Note) -> NoteResponse:
        return NoteResponse.model_validate(note)
