from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import MemberRole


@dataclass(frozen=True)
class UserAccount:
    """Sign-in identity, shared by every organization the person belongs to.

    Note: pure data object, no DB access here.
    """

    uid: str
    email: str
    password_hash: str
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Membership:
    """A user's seat in one organization (``organizations/{org}/users/{uid}``)."""

    org_id: str
    uid: str
    email: str
    role: MemberRole
    name: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PasswordReset:
    token: str
    uid: str
    expires_at: datetime
    used: bool = False
