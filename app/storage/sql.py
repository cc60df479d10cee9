# app/storage/sql.py
import logging
from typing import Iterable, List, Optional

from sqlalchemy import func, or_, text
from sqlalchemy.exc import IntegrityError

from app import models
from app.core.exceptions import DuplicateEmailError
from app.db.base import Base
from app.schemas.case import CaseOut
from app.schemas.case_request import CaseRequestOut
from app.schemas.document import DocumentOut
from app.schemas.message import MessageOut
from app.schemas.notification import NotificationOut
from app.schemas.police_station import PoliceStationOut
from app.schemas.user import UserInDB
from app.storage.base import DEFAULT_STATS, Storage
from app.utils.helpers import utcnow

logger = logging.getLogger(__name__)


class SqlStorage(Storage):
    """SQLAlchemy backend; one short-lived session per operation."""

    name = "database"

    def __init__(self, session_factory, engine=None):
        self._session = session_factory
        self.engine = engine

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def init_schema(self):
        Base.metadata.create_all(bind=self.engine)

    # ------------------------------------------------------------------
    # shared helpers
    # ------------------------------------------------------------------
    def _insert(self, model, schema, data: dict):
        with self._session() as db:
            row = model(**data)
            db.add(row)
            db.commit()
            db.refresh(row)
            return schema.model_validate(row)

    def _get(self, model, schema, obj_id: str):
        with self._session() as db:
            row = db.get(model, obj_id)
            return schema.model_validate(row) if row else None

    def _update(self, model, schema, obj_id: str, data: dict):
        with self._session() as db:
            row = db.get(model, obj_id)
            if row is None:
                return None
            for key, value in data.items():
                setattr(row, key, value)
            if hasattr(model, "updated_at"):
                row.updated_at = utcnow()
            db.commit()
            db.refresh(row)
            return schema.model_validate(row)

    def _delete(self, model, obj_id: str) -> bool:
        with self._session() as db:
            row = db.get(model, obj_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True

    # ------------------------------------------------------------------
    # users
    # ------------------------------------------------------------------
    def create_user(self, data: dict) -> UserInDB:
        data = {"stats": dict(DEFAULT_STATS), "rating": 0, **data}
        with self._session() as db:
            exists = db.query(models.User.id).filter(func.lower(models.User.email) == data["email"].lower()).first()
            if exists:
                raise DuplicateEmailError("User with this email already exists")
            user = models.User(**data)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise DuplicateEmailError("User with this email already exists")
            db.refresh(user)
            return UserInDB.model_validate(user)

    def get_user(self, user_id: str) -> Optional[UserInDB]:
        return self._get(models.User, UserInDB, user_id)

    def get_user_by_email(self, email: str) -> Optional[UserInDB]:
        with self._session() as db:
            user = db.query(models.User).filter(func.lower(models.User.email) == email.lower()).first()
            return UserInDB.model_validate(user) if user else None

    def update_user(self, user_id: str, data: dict) -> Optional[UserInDB]:
        return self._update(models.User, UserInDB, user_id, data)

    def list_users(self, role: Optional[str] = None) -> List[UserInDB]:
        with self._session() as db:
            query = db.query(models.User)
            if role:
                query = query.filter(models.User.role == role)
            return [UserInDB.model_validate(u) for u in query.order_by(models.User.created_at.asc()).all()]

    def count_users(self) -> int:
        with self._session() as db:
            return db.query(func.count(models.User.id)).scalar() or 0

    def get_lawyers(self, city: Optional[str] = None, case_type: Optional[str] = None) -> List[UserInDB]:
        with self._session() as db:
            query = db.query(models.User).filter(models.User.role == "lawyer")
            if city:
                query = query.filter(func.lower(models.User.city) == city.lower())
            lawyers = [UserInDB.model_validate(u) for u in query.order_by(models.User.created_at.asc()).all()]
        if case_type:
            # specialization is a JSON list, filtered here so it works on every dialect
            wanted = case_type.lower()
            lawyers = [l for l in lawyers if wanted in [s.lower() for s in (l.specialization or [])]]
        return lawyers

    # ------------------------------------------------------------------
    # police stations
    # ------------------------------------------------------------------
    def create_police_station(self, data: dict) -> PoliceStationOut:
        return self._insert(models.PoliceStation, PoliceStationOut, data)

    def list_police_stations(self, city: Optional[str] = None) -> List[PoliceStationOut]:
        with self._session() as db:
            query = db.query(models.PoliceStation)
            if city:
                query = query.filter(func.lower(models.PoliceStation.city) == city.lower())
            rows = query.order_by(models.PoliceStation.code.asc()).all()
            return [PoliceStationOut.model_validate(s) for s in rows]

    def get_police_station(self, station_id: str) -> Optional[PoliceStationOut]:
        return self._get(models.PoliceStation, PoliceStationOut, station_id)

    def get_police_station_by_code(self, code: str) -> Optional[PoliceStationOut]:
        with self._session() as db:
            row = db.query(models.PoliceStation).filter(models.PoliceStation.code == code).first()
            return PoliceStationOut.model_validate(row) if row else None

    # ------------------------------------------------------------------
    # cases
    # ------------------------------------------------------------------
    def create_case(self, data: dict) -> CaseOut:
        data = {"status": "submitted", "documents": [], **data}
        return self._insert(models.Case, CaseOut, data)

    def get_case(self, case_id: str) -> Optional[CaseOut]:
        return self._get(models.Case, CaseOut, case_id)

    def list_cases(self, client_id=None, lawyer_id=None, police_station_id=None, status=None) -> List[CaseOut]:
        Case = models.Case
        with self._session() as db:
            query = db.query(Case)
            if client_id:
                query = query.filter(Case.client_id == client_id)
            if lawyer_id:
                query = query.filter(Case.lawyer_id == lawyer_id)
            if police_station_id:
                query = query.filter(Case.police_station_id == police_station_id)
            if status:
                query = query.filter(Case.status == status)
            return [CaseOut.model_validate(c) for c in query.order_by(Case.created_at.desc()).all()]

    def update_case(self, case_id: str, data: dict) -> Optional[CaseOut]:
        return self._update(models.Case, CaseOut, case_id, data)

    def delete_case(self, case_id: str) -> bool:
        with self._session() as db:
            row = db.get(models.Case, case_id)
            if row is None:
                return False
            db.query(models.Document).filter(models.Document.case_id == case_id).delete(synchronize_session=False)
            db.query(models.CaseRequest).filter(models.CaseRequest.case_id == case_id).update(
                {models.CaseRequest.case_id: None}, synchronize_session=False
            )
            db.delete(row)
            db.commit()
            return True

    def add_document_to_case(self, case_id: str, filename: str) -> Optional[CaseOut]:
        with self._session() as db:
            row = db.get(models.Case, case_id)
            if row is None:
                return None
            # assign a fresh list so the JSON column is flagged dirty
            row.documents = list(row.documents or []) + [filename]
            row.updated_at = utcnow()
            db.commit()
            db.refresh(row)
            return CaseOut.model_validate(row)

    def remove_document_from_case(self, case_id: str, filename: str) -> Optional[CaseOut]:
        with self._session() as db:
            row = db.get(models.Case, case_id)
            if row is None:
                return None
            row.documents = [d for d in (row.documents or []) if d != filename]
            row.updated_at = utcnow()
            db.commit()
            db.refresh(row)
            return CaseOut.model_validate(row)

    # ------------------------------------------------------------------
    # case requests
    # ------------------------------------------------------------------
    def create_case_request(self, data: dict) -> CaseRequestOut:
        data = {"status": "pending", "documents": [], **data}
        return self._insert(models.CaseRequest, CaseRequestOut, data)

    def get_case_request(self, request_id: str) -> Optional[CaseRequestOut]:
        return self._get(models.CaseRequest, CaseRequestOut, request_id)

    def list_case_requests(self, client_id=None, lawyer_id=None, status=None) -> List[CaseRequestOut]:
        CaseRequest = models.CaseRequest
        with self._session() as db:
            query = db.query(CaseRequest)
            if client_id:
                query = query.filter(CaseRequest.client_id == client_id)
            if lawyer_id:
                query = query.filter(CaseRequest.lawyer_id == lawyer_id)
            if status:
                query = query.filter(CaseRequest.status == status)
            rows = query.order_by(CaseRequest.created_at.desc()).all()
            return [CaseRequestOut.model_validate(r) for r in rows]

    def update_case_request(self, request_id: str, data: dict) -> Optional[CaseRequestOut]:
        return self._update(models.CaseRequest, CaseRequestOut, request_id, data)

    def delete_case_request(self, request_id: str) -> bool:
        with self._session() as db:
            db.query(models.Notification).filter(models.Notification.case_request_id == request_id).update(
                {models.Notification.case_request_id: None}, synchronize_session=False
            )
            db.commit()
        return self._delete(models.CaseRequest, request_id)

    # ------------------------------------------------------------------
    # messages
    # ------------------------------------------------------------------
    def create_message(self, data: dict) -> MessageOut:
        data = {"read": False, **data}
        return self._insert(models.Message, MessageOut, data)

    def get_message(self, message_id: str) -> Optional[MessageOut]:
        return self._get(models.Message, MessageOut, message_id)

    def list_messages(self, user_id: str, other_user_id: Optional[str] = None) -> List[MessageOut]:
        Message = models.Message
        with self._session() as db:
            if other_user_id:
                condition = or_(
                    (Message.sender_id == user_id) & (Message.receiver_id == other_user_id),
                    (Message.sender_id == other_user_id) & (Message.receiver_id == user_id),
                )
            else:
                condition = or_(Message.sender_id == user_id, Message.receiver_id == user_id)
            rows = db.query(Message).filter(condition).order_by(Message.created_at.asc()).all()
            return [MessageOut.model_validate(m) for m in rows]

    def mark_message_read(self, message_id: str) -> Optional[MessageOut]:
        return self._update(models.Message, MessageOut, message_id, {"read": True})

    def delete_message(self, message_id: str) -> bool:
        return self._delete(models.Message, message_id)

    def count_unread_messages(self, user_id: str) -> int:
        Message = models.Message
        with self._session() as db:
            return (
                db.query(func.count(Message.id))
                .filter(Message.receiver_id == user_id, Message.read.is_(False))
                .scalar()
                or 0
            )

    # ------------------------------------------------------------------
    # notifications
    # ------------------------------------------------------------------
    def create_notification(self, data: dict) -> NotificationOut:
        data = {"read": False, **data}
        return self._insert(models.Notification, NotificationOut, data)

    def get_notification(self, notification_id: str) -> Optional[NotificationOut]:
        return self._get(models.Notification, NotificationOut, notification_id)

    def list_notifications(self, user_id: str, limit: int = 50) -> List[NotificationOut]:
        Notification = models.Notification
        with self._session() as db:
            rows = (
                db.query(Notification)
                .filter(Notification.user_id == user_id)
                .order_by(Notification.created_at.desc())
                .limit(limit)
                .all()
            )
            return [NotificationOut.model_validate(n) for n in rows]

    def mark_notification_read(self, notification_id: str, user_id: str) -> Optional[NotificationOut]:
        with self._session() as db:
            row = db.get(models.Notification, notification_id)
            if row is None or row.user_id != user_id:
                return None
            row.read = True
            db.commit()
            db.refresh(row)
            return NotificationOut.model_validate(row)

    def mark_all_notifications_read(self, user_id: str) -> int:
        Notification = models.Notification
        with self._session() as db:
            count = (
                db.query(Notification)
                .filter(Notification.user_id == user_id, Notification.read.is_(False))
                .update({Notification.read: True}, synchronize_session=False)
            )
            db.commit()
            return count

    def delete_notification(self, notification_id: str, user_id: str) -> bool:
        with self._session() as db:
            row = db.get(models.Notification, notification_id)
            if row is None or row.user_id != user_id:
                return False
            db.delete(row)
            db.commit()
            return True

    def delete_read_notifications(self, user_id: str) -> int:
        Notification = models.Notification
        with self._session() as db:
            count = (
                db.query(Notification)
                .filter(Notification.user_id == user_id, Notification.read.is_(True))
                .delete(synchronize_session=False)
            )
            db.commit()
            return count

    # ------------------------------------------------------------------
    # documents
    # ------------------------------------------------------------------
    def create_document(self, data: dict) -> DocumentOut:
        return self._insert(models.Document, DocumentOut, data)

    def get_document(self, document_id: str) -> Optional[DocumentOut]:
        return self._get(models.Document, DocumentOut, document_id)

    def get_document_by_filename(self, filename: str) -> Optional[DocumentOut]:
        with self._session() as db:
            row = db.query(models.Document).filter(models.Document.filename == filename).first()
            return DocumentOut.model_validate(row) if row else None

    def list_documents(self, case_ids: Optional[Iterable[str]] = None, limit: int = 100) -> List[DocumentOut]:
        Document = models.Document
        with self._session() as db:
            query = db.query(Document)
            if case_ids is not None:
                case_ids = list(case_ids)
                if not case_ids:
                    return []
                query = query.filter(Document.case_id.in_(case_ids))
            rows = query.order_by(Document.created_at.desc()).limit(limit).all()
            return [DocumentOut.model_validate(d) for d in rows]

    def delete_document(self, document_id: str) -> bool:
        return self._delete(models.Document, document_id)
