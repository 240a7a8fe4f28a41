from sqlalchemy import Column, String, DateTime, JSON
from ..database import Base
from .student import utcnow

#Generic prefixed key/value overlay, e.g. "user:<subject>" -> profile dict
class KvEntry(Base):
    __tablename__ = "kv_entries"

    key = Column(String, primary_key=True)
    value = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
