from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Notification:
    notification_id: int
    org_id: str
    uid: str
    title: str
    message: str
    link: Optional[str] = None
    is_read: bool = False
    created_at: Optional[datetime] = None
