# app/models/__init__.py
from app.models import case, case_request, document, message, notification, police_station, user  # noqa: F401
from app.models.case import Case
from app.models.case_request import CaseRequest
from app.models.document import Document
from app.models.message import Message
from app.models.notification import Notification
from app.models.police_station import PoliceStation
from app.models.user import User

__all__ = [
    "Case",
    "CaseRequest",
    "Document",
    "Message",
    "Notification",
    "PoliceStation",
    "User",
]
