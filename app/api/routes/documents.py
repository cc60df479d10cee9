# app/api/routes/documents.py
from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.core.dependencies import get_current_user, get_mailer, get_storage
from app.schemas.common import MessageResponse
from app.schemas.document import DocumentOut
from app.services.file_service import FileService

router = APIRouter()


@router.get("", response_model=List[DocumentOut])
def list_documents(storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = FileService(storage)
    return svc.list_documents(current_user)


@router.post("/upload", response_model=DocumentOut, status_code=status.HTTP_201_CREATED)
async def upload_document(
    case_id: str = Form(...),
    document: UploadFile = File(...),
    storage=Depends(get_storage),
    mailer=Depends(get_mailer),
    current_user=Depends(get_current_user),
):
    svc = FileService(storage, mailer)
    return await svc.upload_document(current_user, case_id, document)


@router.get("/download/{filename}")
def download_document(filename: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = FileService(storage)
    return svc.get_file_response(current_user, filename, download=True)


@router.get("/view/{filename}")
def view_document(filename: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = FileService(storage)
    return svc.get_file_response(current_user, filename)


@router.delete("/{document_id}", response_model=MessageResponse)
def delete_document(document_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = FileService(storage)
    svc.delete_document(current_user, document_id)
    return {"message": "Document deleted"}
