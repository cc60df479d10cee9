# app/api/routes/case_requests.py
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from app.core.dependencies import get_current_user, get_mailer, get_storage, require_client, require_lawyer
from app.schemas.case_request import (
    CaseOverrides,
    CaseRequestCreate,
    CaseRequestDetails,
    CaseRequestOut,
    CaseRequestRespond,
    CaseRequestResult,
)
from app.schemas.common import MessageResponse
from app.services.case_request_service import CaseRequestService

router = APIRouter()


@router.get("", response_model=List[CaseRequestOut])
def list_case_requests(
    status: Optional[str] = None,
    storage=Depends(get_storage),
    current_user=Depends(get_current_user),
):
    svc = CaseRequestService(storage)
    return svc.list_requests(current_user, status=status)


@router.post("", response_model=CaseRequestOut, status_code=status.HTTP_201_CREATED)
def create_case_request(
    payload: CaseRequestCreate,
    storage=Depends(get_storage),
    mailer=Depends(get_mailer),
    current_user=Depends(require_client),
):
    svc = CaseRequestService(storage, mailer)
    return svc.create_request(current_user, payload)


@router.get("/{request_id}", response_model=CaseRequestOut)
def get_case_request(request_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = CaseRequestService(storage)
    return svc.get_request(current_user, request_id)


@router.get("/{request_id}/details", response_model=CaseRequestDetails)
def get_case_request_details(request_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    """
    Request plus both parties and the police stations a case could be filed with
    """
    svc = CaseRequestService(storage)
    return svc.get_details(current_user, request_id)


@router.patch("/{request_id}", response_model=CaseRequestResult)
def respond_to_case_request(
    request_id: str,
    payload: CaseRequestRespond,
    storage=Depends(get_storage),
    mailer=Depends(get_mailer),
    current_user=Depends(require_lawyer),
):
    svc = CaseRequestService(storage, mailer)
    request, case = svc.respond(current_user, request_id, payload)
    return {"case_request": request, "case": case}


@router.post("/{request_id}/create-case", response_model=CaseRequestResult, status_code=status.HTTP_201_CREATED)
def create_case_from_request(
    request_id: str,
    overrides: Optional[CaseOverrides] = Body(default=None),
    storage=Depends(get_storage),
    mailer=Depends(get_mailer),
    current_user=Depends(require_lawyer),
):
    svc = CaseRequestService(storage, mailer)
    request, case = svc.create_case_from_request(current_user, request_id, overrides)
    return {"case_request": request, "case": case}


@router.delete("/{request_id}", response_model=MessageResponse)
def delete_case_request(request_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = CaseRequestService(storage)
    svc.delete_request(current_user, request_id)
    return {"message": "Case request deleted"}
