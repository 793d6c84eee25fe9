from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin, utc_now
from utils.object_id import new_object_id


class JournalEntry(Base, TimestampMixin):
    __tablename__ = "journal_entries"

    id = Column(String(24), primary_key=True, default=new_object_id)
    trans_id = Column(Integer, unique=True, nullable=False, index=True)
    date = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    description = Column(Text, nullable=True)

    # Relationships
    lines = relationship(
        "JournalLine",
        back_populates="journal_entry",
        cascade="all, delete-orphan",
        order_by="JournalLine.position",
    )
    attachments = relationship(
        "JournalAttachment",
        back_populates="journal_entry",
        cascade="all, delete-orphan",
        order_by="JournalAttachment.position",
    )
