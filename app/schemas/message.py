# app/schemas/message.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MessageCreate(BaseModel):
    receiver_id: str
    content: str = Field(..., min_length=1)
    case_id: Optional[str] = None


class MessageOut(BaseModel):
    id: str
    sender_id: str
    receiver_id: str
    case_id: Optional[str] = None
    content: str
    read: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UnreadCountOut(BaseModel):
    count: int
