# app/storage/base.py
"""Persistence interface shared by the database and in-memory backends.

Every method takes plain dicts for writes and returns pydantic records
(``UserInDB``, ``CaseOut`` ...), so callers never see ORM rows and the two
backends can be swapped freely.
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from app.schemas.case import CaseOut
from app.schemas.case_request import CaseRequestOut
from app.schemas.document import DocumentOut
from app.schemas.message import MessageOut
from app.schemas.notification import NotificationOut
from app.schemas.police_station import PoliceStationOut
from app.schemas.user import UserInDB

DEFAULT_STATS = {"total_cases": 0, "won_cases": 0, "lost_cases": 0}


class Storage(ABC):
    name = "abstract"

    # users
    @abstractmethod
    def create_user(self, data: dict) -> UserInDB: ...

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserInDB]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserInDB]: ...

    @abstractmethod
    def update_user(self, user_id: str, data: dict) -> Optional[UserInDB]: ...

    @abstractmethod
    def list_users(self, role: Optional[str] = None) -> List[UserInDB]: ...

    @abstractmethod
    def count_users(self) -> int: ...

    @abstractmethod
    def get_lawyers(self, city: Optional[str] = None, case_type: Optional[str] = None) -> List[UserInDB]: ...

    # police stations
    @abstractmethod
    def create_police_station(self, data: dict) -> PoliceStationOut: ...

    @abstractmethod
    def list_police_stations(self, city: Optional[str] = None) -> List[PoliceStationOut]: ...

    @abstractmethod
    def get_police_station(self, station_id: str) -> Optional[PoliceStationOut]: ...

    @abstractmethod
    def get_police_station_by_code(self, code: str) -> Optional[PoliceStationOut]: ...

    # cases
    @abstractmethod
    def create_case(self, data: dict) -> CaseOut: ...

    @abstractmethod
    def get_case(self, case_id: str) -> Optional[CaseOut]: ...

    @abstractmethod
    def list_cases(
        self,
        client_id: Optional[str] = None,
        lawyer_id: Optional[str] = None,
        police_station_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[CaseOut]: ...

    @abstractmethod
    def update_case(self, case_id: str, data: dict) -> Optional[CaseOut]: ...

    @abstractmethod
    def delete_case(self, case_id: str) -> bool: ...

    @abstractmethod
    def add_document_to_case(self, case_id: str, filename: str) -> Optional[CaseOut]: ...

    @abstractmethod
    def remove_document_from_case(self, case_id: str, filename: str) -> Optional[CaseOut]: ...

    # case requests
    @abstractmethod
    def create_case_request(self, data: dict) -> CaseRequestOut: ...

    @abstractmethod
    def get_case_request(self, request_id: str) -> Optional[CaseRequestOut]: ...

    @abstractmethod
    def list_case_requests(
        self,
        client_id: Optional[str] = None,
        lawyer_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[CaseRequestOut]: ...

    @abstractmethod
    def update_case_request(self, request_id: str, data: dict) -> Optional[CaseRequestOut]: ...

    @abstractmethod
    def delete_case_request(self, request_id: str) -> bool: ...

    # messages
    @abstractmethod
    def create_message(self, data: dict) -> MessageOut: ...

    @abstractmethod
    def get_message(self, message_id: str) -> Optional[MessageOut]: ...

    @abstractmethod
    def list_messages(self, user_id: str, other_user_id: Optional[str] = None) -> List[MessageOut]: ...

    @abstractmethod
    def mark_message_read(self, message_id: str) -> Optional[MessageOut]: ...

    @abstractmethod
    def delete_message(self, message_id: str) -> bool: ...

    @abstractmethod
    def count_unread_messages(self, user_id: str) -> int: ...

    # notifications
    @abstractmethod
    def create_notification(self, data: dict) -> NotificationOut: ...

    @abstractmethod
    def get_notification(self, notification_id: str) -> Optional[NotificationOut]: ...

    @abstractmethod
    def list_notifications(self, user_id: str, limit: int = 50) -> List[NotificationOut]: ...

    @abstractmethod
    def mark_notification_read(self, notification_id: str, user_id: str) -> Optional[NotificationOut]: ...

    @abstractmethod
    def mark_all_notifications_read(self, user_id: str) -> int: ...

    @abstractmethod
    def delete_notification(self, notification_id: str, user_id: str) -> bool: ...

    @abstractmethod
    def delete_read_notifications(self, user_id: str) -> int: ...

    # documents
    @abstractmethod
    def create_document(self, data: dict) -> DocumentOut: ...

    @abstractmethod
    def get_document(self, document_id: str) -> Optional[DocumentOut]: ...

    @abstractmethod
    def get_document_by_filename(self, filename: str) -> Optional[DocumentOut]: ...

    @abstractmethod
    def list_documents(self, case_ids: Optional[Iterable[str]] = None, limit: int = 100) -> List[DocumentOut]: ...

    @abstractmethod
    def delete_document(self, document_id: str) -> bool: ...
