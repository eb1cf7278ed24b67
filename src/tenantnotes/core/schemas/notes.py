"""
Note management schemas.
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

TITLE_MAX_LENGTH = 200


class NoteCreate(BaseModel):
    """Note creation request schema.

    Title emptiness is checked by the service so it maps to the note-specific
    400 message.
    """

    title: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Q4 planning",
                "content": "Review Q3, set Q4 objectives",
            }
        }
    )


class NoteUpdate(BaseModel):
    """Note update request schema."""

    title: Optional[str] = Field(default=None, max_length=TITLE_MAX_LENGTH, description="Note title")
    content: Optional[str] = Field(default=None, description="Note content")


class NoteResponse(BaseModel):
    """Note response schema."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    tenant_id: uuid.UUID = Field(description="Owning tenant")
    author_id: uuid.UUID = Field(description="Author user ID")
    author_email: Optional[str] = Field(default=None, description="Author email")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class NoteEnvelope(BaseModel):
    """Single note wrapper."""

    note: NoteResponse


class NoteListResponse(BaseModel):
    """Tenant notes, newest first."""

    notes: List[NoteResponse]
