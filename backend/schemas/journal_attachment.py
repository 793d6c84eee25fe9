from pydantic import BaseModel, Field
from typing import Literal, Optional

AttachmentType = Literal["receipt", "check", "deposit_slip", "other"]

class JournalAttachmentBase(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = None
    type: AttachmentType = "other"
    mime_type: Optional[str] = None

class JournalAttachmentCreate(JournalAttachmentBase):
    pass

class JournalAttachment(JournalAttachmentBase):
    id: str = Field(serialization_alias="_id")

    class Config:
        from_attributes = True
