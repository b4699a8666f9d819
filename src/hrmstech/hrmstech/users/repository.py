from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import MemberRole
from .model import Membership, PasswordReset, UserAccount


class UserRepository(Protocol):
    """Repository interface for sign-in accounts and password resets.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_uid(self, uid: str) -> Optional[UserAccount]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[UserAccount]:
        raise NotImplementedError

    def create_account(self, *, uid: str, email: str, password_hash: str) -> None:
        raise NotImplementedError

    def set_password(self, uid: str, password_hash: str) -> bool:
        raise NotImplementedError

    def set_active(self, uid: str, *, is_active: bool) -> bool:
        raise NotImplementedError

    def create_reset(self, *, token: str, uid: str, expires_at: datetime) -> None:
        raise NotImplementedError

    def get_reset(self, token: str) -> Optional[PasswordReset]:
        raise NotImplementedError

    def mark_reset_used(self, token: str) -> bool:
        raise NotImplementedError


class MembershipRepository(Protocol):
    def get(self, org_id: str, uid: str) -> Optional[Membership]:
        raise NotImplementedError

    def find_by_uid(self, uid: str) -> Sequence[Membership]:
        """All memberships of a user across organizations."""

        raise NotImplementedError

    def create(
        self,
        *,
        org_id: str,
        uid: str,
        email: str,
        role: MemberRole,
        name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    def set_role(self, org_id: str, uid: str, role: MemberRole) -> bool:
        raise NotImplementedError

    def list_for_org(self, org_id: str) -> Sequence[Membership]:
        raise NotImplementedError

    def delete(self, org_id: str, uid: str) -> bool:
        raise NotImplementedError
