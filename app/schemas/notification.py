# app/schemas/notification.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

NotificationType = Literal[
    "case_approved",
    "case_rejected",
    "case_under_review",
    "hearing_scheduled",
    "new_message",
    "case_created",
    "case_request",
    "case_request_update",
    "document",
    "info",
]


class NotificationCreate(BaseModel):
    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    type: NotificationType = "info"
    user_id: Optional[str] = None
    case_id: Optional[str] = None
    case_request_id: Optional[str] = None


class NotificationOut(BaseModel):
    id: str
    user_id: str
    title: str
    message: str
    type: NotificationType
    read: bool = False
    case_id: Optional[str] = None
    case_request_id: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
