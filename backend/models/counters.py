from sqlalchemy import Column, Integer, String
from database import Base


class Counter(Base):
    """Named monotonically increasing integer, advanced with an atomic UPDATE."""
    __tablename__ = "counters"

    name = Column(String(100), primary_key=True)
    value = Column(Integer, nullable=False, default=0)
