from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def create(self, *, org_id: str, uid: str, title: str, message: str, link: Optional[str] = None) -> int:
        raise NotImplementedError

    def list_for_user(self, org_id: str, uid: str, *, unread_only: bool = False) -> Sequence[Notification]:
        raise NotImplementedError

    def mark_read(self, org_id: str, uid: str, notification_id: int) -> bool:
        raise NotImplementedError

    def mark_all_read(self, org_id: str, uid: str) -> int:
        raise NotImplementedError
