# app/services/message_service.py
import logging
from typing import List, Optional

from app.core.exceptions import CaseValidationError, NotFoundError, PermissionDeniedError
from app.schemas.message import MessageCreate, MessageOut
from app.services.email_service import send_quietly

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, storage, mailer=None):
        self.storage = storage
        self.mailer = mailer

    def send(self, sender, payload: MessageCreate) -> MessageOut:
        if payload.receiver_id == sender.id:
            raise CaseValidationError("Cannot send a message to yourself")
        receiver = self.storage.get_user(payload.receiver_id)
        if receiver is None:
            raise NotFoundError("Recipient not found")
        if payload.case_id and self.storage.get_case(payload.case_id) is None:
            raise NotFoundError("Case not found")

        message = self.storage.create_message({
            "sender_id": sender.id,
            "receiver_id": receiver.id,
            "case_id": payload.case_id,
            "content": payload.content.strip(),
        })
        self.storage.create_notification({
            "user_id": receiver.id,
            "title": "New Message",
            "message": f"You have a new message from {sender.name}",
            "type": "new_message",
            "case_id": payload.case_id,
        })
        if self.mailer:
            send_quietly(self.mailer.send_new_message, sender.name, receiver.email, message.content)
        return message

    def conversation(self, user, other_user_id: Optional[str] = None) -> List[MessageOut]:
        return self.storage.list_messages(user.id, other_user_id)

    def _load_party(self, user, message_id: str) -> MessageOut:
        message = self.storage.get_message(message_id)
        if message is None or user.id not in (message.sender_id, message.receiver_id):
            raise NotFoundError("Message not found")
        return message

    def mark_read(self, user, message_id: str) -> MessageOut:
        message = self._load_party(user, message_id)
        if message.receiver_id != user.id:
            raise PermissionDeniedError("Only the recipient can mark a message as read")
        return self.storage.mark_message_read(message_id)

    def delete(self, user, message_id: str):
        self._load_party(user, message_id)
        self.storage.delete_message(message_id)

    def unread_count(self, user) -> int:
        return self.storage.count_unread_messages(user.id)
