# app/services/case_service.py
import datetime
import logging
import secrets
import string
from typing import Iterable, List, Optional

from app.core.exceptions import (
    CaseValidationError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
)
from app.schemas.case import CaseCreate, CaseDetailOut, CaseOut
from app.services.access import case_scope, load_case_for
from app.services.email_service import send_quietly
from app.services.file_service import remove_stored_files

logger = logging.getLogger(__name__)

PNR_ALPHABET = string.ascii_uppercase + string.digits
REVIEWABLE_STATUSES = ("submitted", "under_review")
HEARING_WINDOW_DAYS = 30


def generate_pnr(today: Optional[datetime.date] = None) -> str:
    year = (today or datetime.date.today()).year
    suffix = "".join(secrets.choice(PNR_ALPHABET) for _ in range(6))
    return f"PNR-{year}-{suffix}"


def schedule_hearing(today: Optional[datetime.date] = None) -> datetime.date:
    # somewhere in the next HEARING_WINDOW_DAYS, never today
    return (today or datetime.date.today()) + datetime.timedelta(days=secrets.randbelow(HEARING_WINDOW_DAYS) + 1)


class CaseService:
    def __init__(self, storage, mailer=None):
        self.storage = storage
        self.mailer = mailer

    def list_cases(self, user, status: Optional[str] = None) -> List[CaseOut]:
        return self.storage.list_cases(status=status, **case_scope(self.storage, user))

    def get_case(self, user, case_id: str) -> CaseDetailOut:
        case = load_case_for(self.storage, user, case_id)
        station = self.storage.get_police_station(case.police_station_id)
        return CaseDetailOut(**case.model_dump(), police_station=station)

    def create_case(self, user, payload: CaseCreate, document_names: Iterable[str] = ()) -> CaseOut:
        if self.storage.get_police_station(payload.police_station_id) is None:
            raise CaseValidationError("Police station not found")
        if payload.lawyer_id:
            lawyer = self.storage.get_user(payload.lawyer_id)
            if lawyer is None or lawyer.role != "lawyer":
                raise CaseValidationError("Lawyer not found")

        data = payload.model_dump()
        data.update(client_id=user.id, status="submitted", documents=list(document_names))
        case = self.storage.create_case(data)
        logger.info("Case %s created by client %s", case.id, user.id)
        self._notify_created(case)
        return case

    def _notify_created(self, case: CaseOut):
        self.storage.create_notification({
            "user_id": case.client_id,
            "title": "Case Created",
            "message": f'New case "{case.title}" has been submitted for review',
            "type": "case_created",
            "case_id": case.id,
        })
        if case.lawyer_id:
            self.storage.create_notification({
                "user_id": case.lawyer_id,
                "title": "New Case Assigned",
                "message": f'Case "{case.title}" has been filed with you as the lawyer',
                "type": "case_created",
                "case_id": case.id,
            })

    def _get_reviewable(self, case_id: str) -> CaseOut:
        case = self.storage.get_case(case_id)
        if case is None:
            raise NotFoundError("Case not found")
        if case.status not in REVIEWABLE_STATUSES:
            raise InvalidTransitionError(f"Case is already {case.status}")
        return case

    def mark_under_review(self, case_id: str, officer) -> CaseOut:
        case = self._get_reviewable(case_id)
        if case.status == "under_review":
            return case
        updated = self.storage.update_case(case_id, {"status": "under_review"})
        logger.info("Case %s moved to review by officer %s", case_id, officer.id)
        self.storage.create_notification({
            "user_id": case.client_id,
            "title": "Case Under Review",
            "message": f'Your case "{case.title}" is now under police review',
            "type": "case_under_review",
            "case_id": case_id,
        })
        return updated

    def approve_case(self, case_id: str, officer) -> CaseOut:
        case = self._get_reviewable(case_id)
        pnr = generate_pnr()
        hearing_date = schedule_hearing()
        updated = self.storage.update_case(case_id, {
            "status": "approved",
            "pnr": pnr,
            "hearing_date": hearing_date,
        })
        logger.info("Case %s approved by officer %s with PNR %s", case_id, officer.id, pnr)

        client = self.storage.get_user(case.client_id)
        lawyer = self.storage.get_user(case.lawyer_id) if case.lawyer_id else None
        if client and self.mailer:
            send_quietly(
                self.mailer.send_case_approval,
                client.email,
                lawyer.email if lawyer else None,
                case.title,
                pnr,
                hearing_date.strftime("%a %b %d %Y"),
            )

        self.storage.create_notification({
            "user_id": case.client_id,
            "title": "Case Approved",
            "message": f'Your case "{case.title}" has been approved. PNR: {pnr}',
            "type": "case_approved",
            "case_id": case_id,
        })
        if lawyer:
            self.storage.create_notification({
                "user_id": lawyer.id,
                "title": "Hearing Scheduled",
                "message": f'Hearing for "{case.title}" is scheduled on {hearing_date.isoformat()}',
                "type": "hearing_scheduled",
                "case_id": case_id,
            })
        return updated

    def reject_case(self, case_id: str, officer, reason: Optional[str] = None) -> CaseOut:
        case = self._get_reviewable(case_id)
        updated = self.storage.update_case(case_id, {"status": "rejected"})
        logger.info("Case %s rejected by officer %s", case_id, officer.id)

        client = self.storage.get_user(case.client_id)
        lawyer = self.storage.get_user(case.lawyer_id) if case.lawyer_id else None
        if client and self.mailer:
            send_quietly(
                self.mailer.send_case_rejection,
                client.email,
                lawyer.email if lawyer else None,
                case.title,
                reason,
            )

        message = f'Your case "{case.title}" has been rejected.'
        if reason:
            message += f" Reason: {reason}"
        self.storage.create_notification({
            "user_id": case.client_id,
            "title": "Case Rejected",
            "message": message,
            "type": "case_rejected",
            "case_id": case_id,
        })
        return updated

    def delete_case(self, user, case_id: str):
        case = self.storage.get_case(case_id)
        if case is None:
            raise NotFoundError("Case not found")
        if not (user.role == "police" or (user.role == "client" and case.client_id == user.id)):
            raise PermissionDeniedError("Insufficient permissions")
        self.storage.delete_case(case_id)
        remove_stored_files(case.documents)
        logger.info("Case %s deleted by %s", case_id, user.id)
