# app/services/file_service.py
import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

from fastapi import UploadFile
from fastapi.responses import FileResponse

from app.core.config import settings
from app.core.exceptions import NotFoundError, PermissionDeniedError, UploadRejectedError
from app.schemas.document import DocumentOut
from app.services.access import can_access_case, case_scope, load_case_for
from app.services.email_service import send_quietly

logger = logging.getLogger(__name__)

DOCUMENTS_SUBDIR = "documents"


def documents_dir() -> Path:
    path = Path(settings.UPLOAD_DIR) / DOCUMENTS_SUBDIR
    path.mkdir(parents=True, exist_ok=True)
    return path


def document_path(filename: str) -> Path:
    # stored names are generated by us; strip any directory part anyway
    return documents_dir() / Path(filename).name


def remove_stored_files(filenames: Iterable[str]):
    for name in filenames:
        path = document_path(name)
        if path.exists():
            os.remove(path)


@dataclass
class PendingUpload:
    original_name: str
    content_type: str
    data: bytes
    extension: str

    @property
    def size(self) -> int:
        return len(self.data)


class FileService:
    def __init__(self, storage, mailer=None):
        self.storage = storage
        self.mailer = mailer

    async def read_upload(self, uploaded_file: UploadFile) -> PendingUpload:
        """Read an upload into memory and check it before anything is stored."""
        data = await uploaded_file.read()
        size = len(data)
        if size == 0:
            raise UploadRejectedError("Empty file")
        if size > settings.MAX_UPLOAD_SIZE_BYTES:
            raise UploadRejectedError("File too large", status_code=413)

        original_name = Path(uploaded_file.filename or "").name
        ext = Path(original_name).suffix.lower().lstrip(".")
        allowed = [e.lower() for e in settings.ALLOWED_UPLOAD_EXTENSIONS]
        if ext not in allowed:
            raise UploadRejectedError(
                "Only " + ", ".join(e.upper() for e in allowed) + " files are allowed"
            )
        return PendingUpload(
            original_name=original_name,
            content_type=uploaded_file.content_type or "application/octet-stream",
            data=data,
            extension=ext,
        )

    async def read_uploads(self, files: List[UploadFile]) -> List[PendingUpload]:
        if len(files) > settings.MAX_FILES_PER_REQUEST:
            raise UploadRejectedError(f"At most {settings.MAX_FILES_PER_REQUEST} files per upload")
        return [await self.read_upload(f) for f in files if f.filename]

    def store(self, user, case, pending: PendingUpload) -> DocumentOut:
        """Write the file to disk, record it and attach it to the case."""
        unique_name = f"{uuid.uuid4().hex}.{pending.extension}"
        local_path = document_path(unique_name)
        with open(local_path, "wb") as f:
            f.write(pending.data)

        try:
            document = self.storage.create_document({
                "filename": unique_name,
                "original_name": pending.original_name,
                "case_id": case.id,
                "case_title": case.title,
                "uploaded_by": user.name,
                "uploaded_by_id": user.id,
                "size": pending.size,
                "content_type": pending.content_type,
                "path": f"/uploads/{DOCUMENTS_SUBDIR}/{unique_name}",
            })
            self.storage.add_document_to_case(case.id, unique_name)
        except Exception:
            os.remove(local_path)
            raise
        logger.info("Stored %s (%d bytes) for case %s", unique_name, pending.size, case.id)
        return document

    async def upload_document(self, user, case_id: str, uploaded_file: UploadFile) -> DocumentOut:
        case = load_case_for(self.storage, user, case_id)
        pending = await self.read_upload(uploaded_file)
        document = self.store(user, case, pending)
        self.notify_upload(user, case, [document])
        return document

    async def attach_documents(self, user, case_id: str, files: List[UploadFile]) -> List[DocumentOut]:
        case = load_case_for(self.storage, user, case_id)
        pending = await self.read_uploads(files)
        documents = [self.store(user, case, p) for p in pending]
        if documents:
            self.notify_upload(user, case, documents)
        return documents

    def notify_upload(self, user, case, documents: List[DocumentOut]):
        """Tell the other parties on the case; failures never undo the upload."""
        recipients = []
        if case.client_id and case.client_id != user.id:
            recipients.append((case.client_id, "client"))
        if case.lawyer_id and case.lawyer_id != user.id:
            recipients.append((case.lawyer_id, "lawyer"))

        for recipient_id, role in recipients:
            recipient = self.storage.get_user(recipient_id)
            for document in documents:
                where = "your case" if role == "client" else "case"
                self.storage.create_notification({
                    "user_id": recipient_id,
                    "title": "New Document Uploaded",
                    "message": f'A new document "{document.original_name}" has been uploaded to {where} "{case.title}"',
                    "type": "document",
                        "case_id": case.id,
                })
                if recipient and recipient.email and self.mailer:
                    send_quietly(
                        self.mailer.send_document_upload,
                        document.original_name,
                        case.title,
                        user.name,
                        recipient.email,
                        role,
                    )

    def list_documents(self, user) -> List[DocumentOut]:
        # police are not limited to their station here
        if user.role == "police":
            return self.storage.list_documents()
        case_ids = [c.id for c in self.storage.list_cases(**case_scope(self.storage, user))]
        return self.storage.list_documents(case_ids=case_ids)

    def get_file_response(self, user, filename: str, download: bool = False) -> FileResponse:
        document = self.storage.get_document_by_filename(filename)
        if document is None:
            raise NotFoundError("Document not found")
        case = self.storage.get_case(document.case_id)
        if case is None or not can_access_case(user, case):
            raise PermissionDeniedError("Insufficient permissions")

        file_path = document_path(document.filename)
        if not file_path.exists():
            raise NotFoundError("File not found on disk")

        disposition = "attachment" if download else "inline"
        return FileResponse(
            path=str(file_path),
            media_type=document.content_type or "application/octet-stream",
            filename=document.original_name,
            content_disposition_type=disposition,
        )

    def delete_document(self, user, document_id: str):
        document = self.storage.get_document(document_id)
        if document is None:
            raise NotFoundError("Document not found")
        # only the uploader or the case's lawyer may delete
        case = self.storage.get_case(document.case_id)
        is_case_lawyer = user.role == "lawyer" and case is not None and can_access_case(user, case)
        if document.uploaded_by_id != user.id and not is_case_lawyer:
            raise PermissionDeniedError("Not authorized to delete this document")

        remove_stored_files([document.filename])
        self.storage.remove_document_from_case(document.case_id, document.filename)
        self.storage.delete_document(document_id)
        logger.info("Document %s deleted by %s", document_id, user.id)
