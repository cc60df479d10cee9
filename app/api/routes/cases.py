# app/api/routes/cases.py
import json
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from pydantic import ValidationError

from app.core.dependencies import get_current_user, get_mailer, get_storage, require_client, require_police
from app.schemas.case import (
    CaseCreate,
    CaseDetailOut,
    CaseDocumentsOut,
    CaseOut,
    CaseRejectRequest,
    CaseStatus,
)
from app.schemas.common import MessageResponse
from app.services.case_service import CaseService
from app.services.file_service import FileService

router = APIRouter()


def _parse_json_field(name: str, raw: str) -> dict:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail=f"{name} must be a JSON object")
    if not isinstance(value, dict):
        raise HTTPException(status_code=400, detail=f"{name} must be a JSON object")
    return value


@router.get("", response_model=List[CaseOut])
def list_cases(
    status: Optional[CaseStatus] = None,
    storage=Depends(get_storage),
    current_user=Depends(get_current_user),
):
    """
    Cases visible to the caller: their own (client), assigned (lawyer) or their station's (police)
    """
    svc = CaseService(storage)
    return svc.list_cases(current_user, status=status)


@router.post("", response_model=CaseOut, status_code=status.HTTP_201_CREATED)
async def create_case(
    title: str = Form(...),
    description: str = Form(...),
    case_type: str = Form(...),
    victim: str = Form(...),
    accused: str = Form(...),
    police_station_id: str = Form(...),
    city: str = Form(...),
    lawyer_id: Optional[str] = Form(None),
    documents: List[UploadFile] = File(default=[]),
    storage=Depends(get_storage),
    mailer=Depends(get_mailer),
    current_user=Depends(require_client),
):
    # victim / accused arrive as JSON strings inside the multipart form
    try:
        payload = CaseCreate(
            title=title,
            description=description,
            case_type=case_type,
            victim=_parse_json_field("victim", victim),
            accused=_parse_json_field("accused", accused),
            police_station_id=police_station_id,
            city=city,
            lawyer_id=lawyer_id or None,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))

    file_service = FileService(storage, mailer)
    pending = await file_service.read_uploads(documents)

    svc = CaseService(storage, mailer)
    case = svc.create_case(current_user, payload)
    for upload in pending:
        file_service.store(current_user, case, upload)
    return storage.get_case(case.id)


@router.post("/documents", response_model=CaseDocumentsOut)
async def upload_case_documents(
    case_id: str = Form(...),
    documents: List[UploadFile] = File(...),
    storage=Depends(get_storage),
    mailer=Depends(get_mailer),
    current_user=Depends(get_current_user),
):
    file_service = FileService(storage, mailer)
    stored = await file_service.attach_documents(current_user, case_id, documents)
    return {"message": "Documents uploaded successfully", "documents": [d.filename for d in stored]}


@router.get("/{case_id}", response_model=CaseDetailOut)
def get_case(case_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = CaseService(storage)
    return svc.get_case(current_user, case_id)


@router.patch("/{case_id}/review", response_model=CaseOut)
def review_case(case_id: str, storage=Depends(get_storage), officer=Depends(require_police)):
    svc = CaseService(storage)
    return svc.mark_under_review(case_id, officer)


@router.patch("/{case_id}/approve", response_model=CaseOut)
def approve_case(
    case_id: str,
    storage=Depends(get_storage),
    mailer=Depends(get_mailer),
    officer=Depends(require_police),
):
    svc = CaseService(storage, mailer)
    return svc.approve_case(case_id, officer)


@router.patch("/{case_id}/reject", response_model=CaseOut)
def reject_case(
    case_id: str,
    payload: Optional[CaseRejectRequest] = None,
    storage=Depends(get_storage),
    mailer=Depends(get_mailer),
    officer=Depends(require_police),
):
    svc = CaseService(storage, mailer)
    return svc.reject_case(case_id, officer, reason=payload.reason if payload else None)


@router.delete("/{case_id}", response_model=MessageResponse)
def delete_case(case_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = CaseService(storage)
    svc.delete_case(current_user, case_id)
    return {"message": "Case deleted"}
