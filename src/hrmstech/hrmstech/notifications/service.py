from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Notification
from .repository import NotificationRepository


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def notify(self, org_id: str, uid: str, title: str, message: str, *, link: Optional[str] = None) -> int:
        return self._notifications.create(
            org_id=org_id,
            uid=uid,
            title=require_non_empty(title, "Title"),
            message=require_non_empty(message, "Message"),
            link=link,
        )

    def list_for_user(self, org_id: str, uid: str, *, unread_only: bool = False) -> Sequence[Notification]:
        return self._notifications.list_for_user(org_id, uid, unread_only=unread_only)

    def mark_read(self, org_id: str, uid: str, notification_id: int) -> None:
        if not self._notifications.mark_read(org_id, uid, int(notification_id)):
            raise NotFoundError("Notification not found")

    def mark_all_read(self, org_id: str, uid: str) -> int:
        return self._notifications.mark_all_read(org_id, uid)
