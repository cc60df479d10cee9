# app/api/routes/messages.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_current_user, get_mailer, get_storage
from app.schemas.common import MessageResponse
from app.schemas.message import MessageCreate, MessageOut, UnreadCountOut
from app.services.message_service import MessageService

router = APIRouter()


@router.get("", response_model=List[MessageOut])
def list_messages(
    other_user_id: Optional[str] = None,
    storage=Depends(get_storage),
    current_user=Depends(get_current_user),
):
    svc = MessageService(storage)
    return svc.conversation(current_user, other_user_id)


@router.post("", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    storage=Depends(get_storage),
    mailer=Depends(get_mailer),
    current_user=Depends(get_current_user),
):
    svc = MessageService(storage, mailer)
    return svc.send(current_user, payload)


@router.get("/unread-count", response_model=UnreadCountOut)
def unread_count(storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = MessageService(storage)
    return {"count": svc.unread_count(current_user)}


@router.patch("/{message_id}/read", response_model=MessageOut)
def mark_message_read(message_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = MessageService(storage)
    return svc.mark_read(current_user, message_id)


@router.delete("/{message_id}", response_model=MessageResponse)
def delete_message(message_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = MessageService(storage)
    svc.delete(current_user, message_id)
    return {"message": "Message deleted"}
