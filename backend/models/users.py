from database import Base
from sqlalchemy import Column, DateTime, String, Boolean
from models.audit_mixin import TimestampMixin
from utils.object_id import new_object_id

class User(Base, TimestampMixin):
    __tablename__ = 'users'

    id = Column(String(24), primary_key=True, default=new_object_id)
    google_sub = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, index=True, nullable=True)
    name = Column(String, nullable=True)
    picture = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, is_active={self.is_active})>"
