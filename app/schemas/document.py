# app/schemas/document.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class DocumentOut(BaseModel):
    id: str
    filename: str
    original_name: str
    case_id: str
    case_title: Optional[str] = None
    uploaded_by: Optional[str] = None
    uploaded_by_id: str
    size: Optional[int] = None
    content_type: Optional[str] = None
    path: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
