from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from .journal_line import JournalLineCreate, JournalLine
from .journal_attachment import JournalAttachmentCreate, JournalAttachment

class JournalEntryBase(BaseModel):
    date: Optional[datetime] = None
    description: Optional[str] = None

class JournalEntryCreate(JournalEntryBase):
    """
    Body of a new journal entry. `trans_id` is always assigned by the server.
    Debit/credit balance is not checked here; see crud.journal_entry.check_entry_balanced.
    """
    lines: List[JournalLineCreate] = []
    attachments: List[JournalAttachmentCreate] = []

class JournalEntryUpdate(BaseModel):
    # Lists, when given, replace the stored ones
    date: Optional[datetime] = None
    description: Optional[str] = None
    lines: Optional[List[JournalLineCreate]] = None
    attachments: Optional[List[JournalAttachmentCreate]] = None

class JournalEntry(JournalEntryBase):
    id: str = Field(serialization_alias="_id")
    trans_id: int
    date: datetime
    lines: List[JournalLine] = []
    attachments: List[JournalAttachment] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
