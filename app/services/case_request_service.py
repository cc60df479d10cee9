# app/services/case_request_service.py
import logging
from typing import List, Optional, Tuple

from app.core.exceptions import (
    CaseValidationError,
    InvalidTransitionError,
    PermissionDeniedError,
)
from app.schemas.case import CaseOut
from app.schemas.case_request import (
    CaseOverrides,
    CaseRequestCreate,
    CaseRequestDetails,
    CaseRequestOut,
    CaseRequestRespond,
)
from app.schemas.user import UserOut
from app.services.access import load_request_for
from app.services.case_builder import build_case_from_request
from app.services.email_service import send_quietly

logger = logging.getLogger(__name__)


class CaseRequestService:
    def __init__(self, storage, mailer=None):
        self.storage = storage
        self.mailer = mailer

    def create_request(self, client, payload: CaseRequestCreate) -> CaseRequestOut:
        lawyer = self.storage.get_user(payload.lawyer_id)
        if lawyer is None or lawyer.role != "lawyer":
            raise CaseValidationError("Lawyer not found")
        if payload.police_station_id and self.storage.get_police_station(payload.police_station_id) is None:
            raise CaseValidationError("Police station not found")

        data = payload.model_dump()
        data.update(client_id=client.id, status="pending")
        request = self.storage.create_case_request(data)
        logger.info("Case request %s sent by client %s to lawyer %s", request.id, client.id, lawyer.id)

        self.storage.create_notification({
            "user_id": lawyer.id,
            "title": "New Case Request",
            "message": f'{client.name} has sent you a case request: "{request.title}"',
            "type": "case_request",
            "case_request_id": request.id,
        })
        if self.mailer:
            send_quietly(self.mailer.send_case_request, request.title, client.name, lawyer.email)
        return request

    def list_requests(self, user, status: Optional[str] = None) -> List[CaseRequestOut]:
        if user.role == "client":
            return self.storage.list_case_requests(client_id=user.id, status=status)
        if user.role == "lawyer":
            return self.storage.list_case_requests(lawyer_id=user.id, status=status)
        raise PermissionDeniedError("Insufficient permissions")

    def get_request(self, user, request_id: str) -> CaseRequestOut:
        return load_request_for(self.storage, user, request_id)

    def get_details(self, user, request_id: str) -> CaseRequestDetails:
        request = load_request_for(self.storage, user, request_id)
        client = self.storage.get_user(request.client_id)
        lawyer = self.storage.get_user(request.lawyer_id)
        city = request.city or (client.city if client else None)
        stations = self.storage.list_police_stations(city=city) if city else []
        if not stations:
            stations = self.storage.list_police_stations()
        return CaseRequestDetails(
            case_request=request,
            client=UserOut.model_validate(client.model_dump()) if client else None,
            lawyer=UserOut.model_validate(lawyer.model_dump()) if lawyer else None,
            available_police_stations=stations,
        )

    def _load_for_lawyer(self, lawyer, request_id: str) -> CaseRequestOut:
        request = load_request_for(self.storage, lawyer, request_id)
        if request.lawyer_id != lawyer.id:
            raise PermissionDeniedError("Only the requested lawyer can respond")
        return request

    def respond(self, lawyer, request_id: str, payload: CaseRequestRespond) -> Tuple[CaseRequestOut, Optional[CaseOut]]:
        request = self._load_for_lawyer(lawyer, request_id)
        if request.status != "pending":
            raise InvalidTransitionError(f"Case request is already {request.status}")

        if payload.status == "rejected":
            updated = self.storage.update_case_request(request_id, {
                "status": "rejected",
                "lawyer_response": payload.lawyer_response,
            })
            logger.info("Case request %s rejected by lawyer %s", request_id, lawyer.id)
            message = f'{lawyer.name} declined your case request "{request.title}".'
            if payload.lawyer_response:
                message += f" Response: {payload.lawyer_response}"
            self.storage.create_notification({
                "user_id": request.client_id,
                "title": "Case Request Rejected",
                "message": message,
                "type": "case_request_update",
                "case_request_id": request_id,
            })
            return updated, None

        # build before accepting so a missing police station leaves the request pending
        case_data = self._build_case_data(request, payload.overrides) if payload.auto_create else None
        updated = self.storage.update_case_request(request_id, {
            "status": "accepted",
            "lawyer_response": payload.lawyer_response,
        })
        logger.info("Case request %s accepted by lawyer %s", request_id, lawyer.id)
        self.storage.create_notification({
            "user_id": request.client_id,
            "title": "Case Request Accepted",
            "message": f'{lawyer.name} accepted your case request "{request.title}".',
            "type": "case_request_update",
            "case_request_id": request_id,
        })

        if case_data is None:
            return updated, None
        case = self._create_case(updated, case_data)
        return self.storage.get_case_request(request_id), case

    def create_case_from_request(self, lawyer, request_id: str, overrides: Optional[CaseOverrides] = None) -> Tuple[CaseRequestOut, CaseOut]:
        request = self._load_for_lawyer(lawyer, request_id)
        if request.status == "rejected":
            raise InvalidTransitionError("Case request was rejected")
        if request.case_id:
            raise InvalidTransitionError("A case has already been created for this request")

        case_data = self._build_case_data(request, overrides)
        if request.status == "pending":
            request = self.storage.update_case_request(request_id, {
                "status": "accepted",
                "lawyer_response": "Case request accepted. Creating official case.",
            })
        case = self._create_case(request, case_data)
        return self.storage.get_case_request(request_id), case

    def _build_case_data(self, request: CaseRequestOut, overrides: Optional[CaseOverrides]) -> dict:
        client = self.storage.get_user(request.client_id)
        stations = self.storage.list_police_stations()
        return build_case_from_request(request, client, stations, overrides)

    def _create_case(self, request: CaseRequestOut, case_data: dict) -> CaseOut:
        # not atomic: a failure after this point leaves the case without its notifications
        case = self.storage.create_case(case_data)
        self.storage.update_case_request(request.id, {"case_id": case.id})
        logger.info("Case %s created from request %s", case.id, request.id)

        self.storage.create_notification({
            "user_id": case.client_id,
            "title": "Case Created",
            "message": f'Your case "{case.title}" has been filed and submitted for police review',
            "type": "case_created",
            "case_id": case.id,
            "case_request_id": request.id,
        })
        return case

    def delete_request(self, user, request_id: str):
        load_request_for(self.storage, user, request_id)
        self.storage.delete_case_request(request_id)
        logger.info("Case request %s deleted by %s", request_id, user.id)
