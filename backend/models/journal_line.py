from sqlalchemy import Column, Integer, Numeric, ForeignKey, String
from sqlalchemy.orm import relationship
from database import Base
from utils.object_id import new_object_id


class JournalLine(Base):
    __tablename__ = "journal_lines"

    id = Column(String(24), primary_key=True, default=new_object_id)
    journal_entry_id = Column(String(24), ForeignKey("journal_entries.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False, default=0)
    account_no = Column(Integer, nullable=True)
    account_name = Column(String(100), nullable=True)
    # Plain reference to accounts.id; deleting the account leaves it dangling
    account_ref = Column(String(24), nullable=True, index=True)
    debit = Column(Numeric(14, 2), nullable=False, default=0)
    credit = Column(Numeric(14, 2), nullable=False, default=0)

    # Relationships
    journal_entry = relationship("JournalEntry", back_populates="lines")
