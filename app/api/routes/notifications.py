# app/api/routes/notifications.py
from typing import List

from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_current_user, get_storage
from app.schemas.common import MessageResponse
from app.schemas.notification import NotificationCreate, NotificationOut
from app.services.notification_service import NotificationService

router = APIRouter()


@router.get("", response_model=List[NotificationOut])
def list_notifications(storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = NotificationService(storage)
    return svc.list_for(current_user)


@router.post("", response_model=NotificationOut, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    storage=Depends(get_storage),
    current_user=Depends(get_current_user),
):
    svc = NotificationService(storage)
    return svc.create(current_user, payload)


# fixed paths before the /{notification_id} routes
@router.patch("/mark-all-read", response_model=MessageResponse)
def mark_all_read(storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = NotificationService(storage)
    count = svc.mark_all_read(current_user)
    return {"message": f"{count} notifications marked as read"}


@router.patch("/{notification_id}/read", response_model=NotificationOut)
def mark_read(notification_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = NotificationService(storage)
    return svc.mark_read(current_user, notification_id)


@router.delete("/read", response_model=MessageResponse)
def delete_read(storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = NotificationService(storage)
    count = svc.delete_read(current_user)
    return {"message": f"{count} read notifications deleted"}


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(notification_id: str, storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = NotificationService(storage)
    svc.delete(current_user, notification_id)
    return {"message": "Notification deleted"}
