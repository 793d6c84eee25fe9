from sqlalchemy import Column, Integer, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from database import Base
from utils.object_id import new_object_id


class JournalAttachment(Base):
    __tablename__ = "journal_attachments"

    id = Column(String(24), primary_key=True, default=new_object_id)
    journal_entry_id = Column(String(24), ForeignKey("journal_entries.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(255), nullable=True)
    url = Column(Text, nullable=True)
    type = Column(String(20), nullable=False, default="other")
    mime_type = Column(String(100), nullable=True)

    # Relationships
    journal_entry = relationship("JournalEntry", back_populates="attachments")
