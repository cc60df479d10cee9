# app/services/notification_service.py
from typing import List

from app.core.exceptions import NotFoundError
from app.schemas.notification import NotificationCreate, NotificationOut

NOTIFICATION_LIMIT = 50


class NotificationService:
    def __init__(self, storage):
        self.storage = storage

    def list_for(self, user) -> List[NotificationOut]:
        return self.storage.list_notifications(user.id, limit=NOTIFICATION_LIMIT)

    def create(self, user, payload: NotificationCreate) -> NotificationOut:
        data = payload.model_dump()
        data["user_id"] = payload.user_id or user.id
        if self.storage.get_user(data["user_id"]) is None:
            raise NotFoundError("User not found")
        return self.storage.create_notification(data)

    def mark_read(self, user, notification_id: str) -> NotificationOut:
        notification = self.storage.mark_notification_read(notification_id, user.id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification

    def mark_all_read(self, user) -> int:
        return self.storage.mark_all_notifications_read(user.id)

    def delete(self, user, notification_id: str):
        if not self.storage.delete_notification(notification_id, user.id):
            raise NotFoundError("Notification not found")

    def delete_read(self, user) -> int:
        return self.storage.delete_read_notifications(user.id)
