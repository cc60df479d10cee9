# app/storage/memory.py
import logging
from threading import RLock
from typing import Dict, Iterable, List, Optional

from app.core.exceptions import DuplicateEmailError
from app.schemas.case import CaseOut
from app.schemas.case_request import CaseRequestOut
from app.schemas.document import DocumentOut
from app.schemas.message import MessageOut
from app.schemas.notification import NotificationOut
from app.schemas.police_station import PoliceStationOut
from app.schemas.user import UserInDB
from app.storage.base import DEFAULT_STATS, Storage
from app.utils.helpers import new_id, utcnow

logger = logging.getLogger(__name__)


def _newest_first(records):
    return sorted(records, key=lambda r: r.created_at, reverse=True)


class MemoryStorage(Storage):
    """Dict-backed store used when no database is reachable.

    Records are kept as pydantic models and copied on the way in and out,
    so callers can mutate what they get back without touching the store.
    """

    name = "memory"

    def __init__(self):
        self._lock = RLock()
        self.users: Dict[str, UserInDB] = {}
        self.police_stations: Dict[str, PoliceStationOut] = {}
        self.cases: Dict[str, CaseOut] = {}
        self.case_requests: Dict[str, CaseRequestOut] = {}
        self.messages: Dict[str, MessageOut] = {}
        self.notifications: Dict[str, NotificationOut] = {}
        self.documents: Dict[str, DocumentOut] = {}

    # ------------------------------------------------------------------
    # shared helpers
    # ------------------------------------------------------------------
    def _insert(self, table: dict, schema, data: dict, timestamps=("created_at",)):
        now = utcnow()
        record = schema.model_validate({"id": new_id(), **{k: now for k in timestamps}, **data})
        with self._lock:
            table[record.id] = record
        return record.model_copy(deep=True)

    def _get(self, table: dict, obj_id: str):
        with self._lock:
            record = table.get(obj_id)
            return record.model_copy(deep=True) if record else None

    def _update(self, table: dict, obj_id: str, data: dict):
        with self._lock:
            record = table.get(obj_id)
            if record is None:
                return None
            changes = dict(data)
            if "updated_at" in type(record).model_fields:
                changes["updated_at"] = utcnow()
            # re-validate so nested dicts become models again
            updated = type(record).model_validate({**record.model_dump(), **changes})
            table[obj_id] = updated
            return updated.model_copy(deep=True)

    def _delete(self, table: dict, obj_id: str) -> bool:
        with self._lock:
            return table.pop(obj_id, None) is not None

    def _select(self, table: dict, predicate=None):
        with self._lock:
            return [r.model_copy(deep=True) for r in table.values() if predicate is None or predicate(r)]

    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------
    def create_user(self, data: dict) -> UserInDB:
        with self._lock:
            if self.get_user_by_email(data["email"]) is not None:
                raise DuplicateEmailError("User with this email already exists")
            data = {"stats": dict(DEFAULT_STATS), "rating": 0, **data}
            user = self._insert(self.users, UserInDB, data, timestamps=("created_at", "updated_at"))
        logger.info("New user registered in memory store: %s (%s)", user.email, user.role)
        return user

    def get_user(self, user_id: str) -> Optional[UserInDB]:
        return self._get(self.users, user_id)

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        wanted = email.lower()
        matches = self._select(self.users, lambda u: u.email.lower() == wanted)
        return matches[0] if matches else None

    def update_user(self, user_id: str, data: dict) -> Optional[UserInDB]:
        return self._update(self.users, user_id, data)

    def list_users(self, role: Optional[str] = None) -> List[UserInDB]:
        return self._select(self.users, lambda u: role is None or u.role == role)

    def count_users(self) -> int:
        with self._lock:
            return len(self.users)

    def get_lawyers(self, city: Optional[str] = None, case_type: Optional[str] = None) -> List[UserInDB]:
        def matches(user):
            if user.role != "lawyer":
                return False
            if city and (user.city or "").lower() != city.lower():
                return False
            if case_type and case_type.lower() not in [s.lower() for s in (user.specialization or [])]:
                return False
            return True

        return self._select(self.users, matches)

    # ------------------------------------------------------------------
    # police stations
    # ------------------------------------------------------------------
    def create_police_station(self, data: dict) -> PoliceStationOut:
        return self._insert(self.police_stations, PoliceStationOut, data)

    def list_police_stations(self, city: Optional[str] = None) -> List[PoliceStationOut]:
        stations = self._select(
            self.police_stations, lambda s: city is None or s.city.lower() == city.lower()
        )
        return sorted(stations, key=lambda s: s.code)

    def get_police_station(self, station_id: str) -> Optional[PoliceStationOut]:
        return self._get(self.police_stations, station_id)

    def get_police_station_by_code(self, code: str) -> Optional[PoliceStationOut]:
        matches = self._select(self.police_stations, lambda s: s.code == code)
        return matches[0] if matches else None

    # ------------------------------------------------------------------
    # cases
    # ------------------------------------------------------------------
    def create_case(self, data: dict) -> CaseOut:
        data = {"status": "submitted", "documents": [], **data}
        return self._insert(self.cases, CaseOut, data, timestamps=("created_at", "updated_at"))

    def get_case(self, case_id: str) -> Optional[CaseOut]:
        return self._get(self.cases, case_id)

    def list_cases(self, client_id=None, lawyer_id=None, police_station_id=None, status=None) -> List[CaseOut]:
        def matches(case):
            return (
                (not client_id or case.client_id == client_id)
                and (not lawyer_id or case.lawyer_id == lawyer_id)
                and (not police_station_id or case.police_station_id == police_station_id)
                and (not status or case.status == status)
            )

        return _newest_first(self._select(self.cases, matches))

    def update_case(self, case_id: str, data: dict) -> Optional[CaseOut]:
        return self._update(self.cases, case_id, data)

    def delete_case(self, case_id: str) -> bool:
        with self._lock:
            if not self._delete(self.cases, case_id):
                return False
            for doc_id in [d.id for d in self.documents.values() if d.case_id == case_id]:
                del self.documents[doc_id]
            for request in self.case_requests.values():
                if request.case_id == case_id:
                    request.case_id = None
            return True

    def add_document_to_case(self, case_id: str, filename: str) -> Optional[CaseOut]:
        with self._lock:
            case = self.cases.get(case_id)
            if case is None:
                return None
            return self._update(self.cases, case_id, {"documents": list(case.documents) + [filename]})

    def remove_document_from_case(self, case_id: str, filename: str) -> Optional[CaseOut]:
        with self._lock:
            case = self.cases.get(case_id)
            if case is None:
                return None
            return self._update(self.cases, case_id, {"documents": [d for d in case.documents if d != filename]})

    # ------------------------------------------------------------------
    # case requests
    # ------------------------------------------------------------------
    def create_case_request(self, data: dict) -> CaseRequestOut:
        data = {"status": "pending", "documents": [], **data}
        return self._insert(self.case_requests, CaseRequestOut, data, timestamps=("created_at", "updated_at"))

    def get_case_request(self, request_id: str) -> Optional[CaseRequestOut]:
        return self._get(self.case_requests, request_id)

    def list_case_requests(self, client_id=None, lawyer_id=None, status=None) -> List[CaseRequestOut]:
        def matches(request):
            return (
                (not client_id or request.client_id == client_id)
                and (not lawyer_id or request.lawyer_id == lawyer_id)
                and (not status or request.status == status)
            )

        return _newest_first(self._select(self.case_requests, matches))

    def update_case_request(self, request_id: str, data: dict) -> Optional[CaseRequestOut]:
        return self._update(self.case_requests, request_id, data)

    def delete_case_request(self, request_id: str) -> bool:
        with self._lock:
            for notification in self.notifications.values():
                if notification.case_request_id == request_id:
                    notification.case_request_id = None
            return self._delete(self.case_requests, request_id)

    # ------------------------------------------------------------------
    # messages
    # ------------------------------------------------------------------
    def create_message(self, data: dict) -> MessageOut:
        return self._insert(self.messages, MessageOut, {"read": False, **data})

    def get_message(self, message_id: str) -> Optional[MessageOut]:
        return self._get(self.messages, message_id)

    def list_messages(self, user_id: str, other_user_id: Optional[str] = None) -> List[MessageOut]:
        if other_user_id:
            pair = {user_id, other_user_id}

            def matches(m):
                return {m.sender_id, m.receiver_id} == pair and m.sender_id != m.receiver_id
        else:
            def matches(m):
                return user_id in (m.sender_id, m.receiver_id)

        return sorted(self._select(self.messages, matches), key=lambda m: m.created_at)

    def mark_message_read(self, message_id: str) -> Optional[MessageOut]:
        return self._update(self.messages, message_id, {"read": True})

    def delete_message(self, message_id: str) -> bool:
        return self._delete(self.messages, message_id)

    def count_unread_messages(self, user_id: str) -> int:
        return len(self._select(self.messages, lambda m: m.receiver_id == user_id and not m.read))

    # ------------------------------------------------------------------
    # notifications
    # ------------------------------------------------------------------
    def create_notification(self, data: dict) -> NotificationOut:
        return self._insert(self.notifications, NotificationOut, {"read": False, **data})

    def get_notification(self, notification_id: str) -> Optional[NotificationOut]:
        return self._get(self.notifications, notification_id)

    def list_notifications(self, user_id: str, limit: int = 50) -> List[NotificationOut]:
        return _newest_first(self._select(self.notifications, lambda n: n.user_id == user_id))[:limit]

    def mark_notification_read(self, notification_id: str, user_id: str) -> Optional[NotificationOut]:
        with self._lock:
            notification = self.notifications.get(notification_id)
            if notification is None or notification.user_id != user_id:
                return None
            return self._update(self.notifications, notification_id, {"read": True})

    def mark_all_notifications_read(self, user_id: str) -> int:
        with self._lock:
            unread = [n for n in self.notifications.values() if n.user_id == user_id and not n.read]
            for notification in unread:
                notification.read = True
            return len(unread)

    def delete_notification(self, notification_id: str, user_id: str) -> bool:
        with self._lock:
            notification = self.notifications.get(notification_id)
            if notification is None or notification.user_id != user_id:
                return False
            return self._delete(self.notifications, notification_id)

    def delete_read_notifications(self, user_id: str) -> int:
        with self._lock:
            ids = [n.id for n in self.notifications.values() if n.user_id == user_id and n.read]
            for notification_id in ids:
                del self.notifications[notification_id]
            return len(ids)

    # ------------------------------------------------------------------
    # documents
    # ------------------------------------------------------------------
    def create_document(self, data: dict) -> DocumentOut:
        return self._insert(self.documents, DocumentOut, data)

    def get_document(self, document_id: str) -> Optional[DocumentOut]:
        return self._get(self.documents, document_id)

    def get_document_by_filename(self, filename: str) -> Optional[DocumentOut]:
        matches = self._select(self.documents, lambda d: d.filename == filename)
        return matches[0] if matches else None

    def list_documents(self, case_ids: Optional[Iterable[str]] = None, limit: int = 100) -> List[DocumentOut]:
        wanted = set(case_ids) if case_ids is not None else None
        documents = self._select(self.documents, lambda d: wanted is None or d.case_id in wanted)
        return _newest_first(documents)[:limit]

    def delete_document(self, document_id: str) -> bool:
        return self._delete(self.documents, document_id)
