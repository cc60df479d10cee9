# app/models/document.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from app.db.base import Base
from app.utils.helpers import new_id, utcnow


class Document(Base):
    __tablename__ = "documents"
    id = Column(String(36), primary_key=True, default=new_id)
    filename = Column(String, nullable=False, unique=True, index=True)
    original_name = Column(String, nullable=False)
    case_id = Column(String(36), ForeignKey("cases.id", ondelete="CASCADE"), nullable=False, index=True)
    case_title = Column(String(255), nullable=True)
    uploaded_by = Column(String(255), nullable=True)
    uploaded_by_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    size = Column(Integer)
    content_type = Column(String, nullable=True)
    path = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)
