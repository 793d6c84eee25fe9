from sqlalchemy import Column, Integer, String, Text
from database import Base
from models.audit_mixin import TimestampMixin
from utils.object_id import new_object_id


class Account(Base, TimestampMixin):
    __tablename__ = "accounts"

    id = Column(String(24), primary_key=True, default=new_object_id)
    # Uniqueness of the number is checked by the API, not by a constraint
    number = Column(Integer, nullable=True, index=True)
    name = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    type = Column(String(20), nullable=True)  # Asset, Liability, Equity, Revenue, Expense

    def __repr__(self):
        return f"<Account(id={self.id}, number={self.number}, name={self.name})>"
