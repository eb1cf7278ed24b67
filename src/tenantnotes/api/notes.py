"""Notes API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.models.user import User
from ..core.schemas.common import MessageResponse
from ..core.schemas.notes import NoteCreate, NoteEnvelope, NoteListResponse, NoteUpdate
from ..core.services import NoteService, QuotaPolicy
from ..database import get_db_session
from ..middleware.auth import get_current_user

router = APIRouter(prefix="/notes", tags=["notes"])


def get_note_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> NoteService:
    settings = request.app.state.settings
    return NoteService(session, QuotaPolicy(free_plan_limit=settings.free_plan_note_limit))


@router.get("", response_model=NoteListResponse)
async def list_notes(
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """List the tenant's notes, newest first."""
    return NoteListResponse(notes=await note_service.list_notes(current_user))


@router.post("", response_model=NoteEnvelope)
async def create_note(
    request: NoteCreate,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """Create a new note."""
    return NoteEnvelope(note=await note_service.create_note(current_user, request))


@router.get("/{note_id}", response_model=NoteEnvelope)
async def get_note(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """Get a specific note."""
    return NoteEnvelope(note=await note_service.get_note(current_user, note_id))


@router.put("/{note_id}", response_model=NoteEnvelope)
async def update_note(
    note_id: UUID,
    request: NoteUpdate,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """Update a note."""
    return NoteEnvelope(note=await note_service.update_note(current_user, note_id, request))


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
):
    """Delete a note."""
    await note_service.delete_note(current_user, note_id)
    return MessageResponse(message="Note deleted successfully")
