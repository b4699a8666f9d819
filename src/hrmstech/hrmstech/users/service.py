from __future__ import annotations

import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import normalize_email, require_non_empty
from ..core.constants import DEFAULT_RESET_TTL_MINUTES, MIN_PASSWORD_LENGTH
from ..core.enums import MemberRole
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..organizations.repository import OrganizationRepository
from . import errors
from .model import Membership
from .repository import MembershipRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    uid: str
    email: str
    org_id: str
    role: MemberRole
    name: Optional[str]


def _check_password_strength(password: Optional[str]) -> str:
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise AuthenticationError(errors.WEAK_PASSWORD)
    return password


def _email_or_auth_error(email: Optional[str]) -> str:
    try:
        return normalize_email(email)
    except ValidationError:
        raise AuthenticationError(errors.INVALID_EMAIL)


class AuthService:
    """Use cases: sign-up, sign-in and password reset."""

    def __init__(
        self,
        users: UserRepository,
        memberships: MembershipRepository,
        orgs: OrganizationRepository,
        *,
        reset_ttl_minutes: int = DEFAULT_RESET_TTL_MINUTES,
    ):
        self._users = users
        self._memberships = memberships
        self._orgs = orgs
        self._reset_ttl = timedelta(minutes=int(reset_ttl_minutes))

    def create_account(self, email: str, password: str) -> str:
        email = _email_or_auth_error(email)
        _check_password_strength(password)
        if self._users.get_by_email(email):
            raise AuthenticationError(errors.EMAIL_IN_USE)

        uid = uuid.uuid4().hex
        self._users.create_account(uid=uid, email=email, password_hash=generate_password_hash(password))
        return uid

    def register_owner(
        self,
        *,
        company: str,
        full_name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
        company_size: Optional[str] = None,
    ) -> SessionUser:
        """Sign up a new organization owner.

        The organization id is the owner's uid; the owner becomes its first admin.
        """

        company = require_non_empty(company, "Company name")
        full_name = require_non_empty(full_name, "Full name")

        uid = self.create_account(email, password)
        email = normalize_email(email)
        self._orgs.create(org_id=uid, name=company, size=company_size, created_by=uid)
        self._memberships.create(
            org_id=uid,
            uid=uid,
            email=email,
            role=MemberRole.ADMIN,
            name=full_name,
            phone=(phone or "").strip() or None,
        )
        logger.info("registered organization %s for %s", uid, email)
        return SessionUser(uid=uid, email=email, org_id=uid, role=MemberRole.ADMIN, name=full_name)

    def authenticate(self, email: str, password: str, *, org_id: Optional[str] = None) -> SessionUser:
        email = _email_or_auth_error(email)
        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError(errors.INVALID_CREDENTIAL)
        if not user.is_active:
            raise AuthenticationError(errors.USER_DISABLED)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False
        if not ok:
            raise AuthenticationError(errors.INVALID_CREDENTIAL)

        membership = self._pick_membership(user.uid, org_id)
        return SessionUser(
            uid=user.uid,
            email=user.email,
            org_id=membership.org_id,
            role=membership.role,
            name=membership.name,
        )

    def _pick_membership(self, uid: str, org_id: Optional[str]) -> Membership:
        memberships = list(self._memberships.find_by_uid(uid))
        if org_id:
            memberships = [m for m in memberships if m.org_id == org_id]
        if not memberships:
            raise AuthenticationError(errors.NO_MEMBERSHIP)
        return memberships[0]

    def request_password_reset(self, email: str, *, now: Optional[datetime] = None) -> Optional[str]:
        """Issue a one-time reset token; ``None`` when the email is unknown."""

        email = _email_or_auth_error(email)
        user = self._users.get_by_email(email)
        if not user:
            return None

        token = secrets.token_urlsafe(32)
        self._users.create_reset(token=token, uid=user.uid, expires_at=(now or now_local()) + self._reset_ttl)
        return token

    def reset_password(self, token: str, new_password: str, *, now: Optional[datetime] = None) -> None:
        reset = self._users.get_reset((token or "").strip())
        if not reset or reset.used:
            raise AuthenticationError(errors.INVALID_ACTION_CODE)
        if (now or now_local()) > reset.expires_at:
            raise AuthenticationError(errors.EXPIRED_ACTION_CODE)

        _check_password_strength(new_password)
        if not self._users.mark_reset_used(reset.token):
            raise AuthenticationError(errors.INVALID_ACTION_CODE)
        self._users.set_password(reset.uid, generate_password_hash(new_password))

    def change_password(self, uid: str, current_password: str, new_password: str) -> None:
        user = self._users.get_by_uid(uid)
        if not user or not check_password_hash(user.password_hash, current_password or ""):
            raise AuthenticationError(errors.INVALID_CREDENTIAL)
        _check_password_strength(new_password)
        self._users.set_password(uid, generate_password_hash(new_password))


class UserService:
    """Use case: manage organization members (admin)."""

    def __init__(self, users: UserRepository, memberships: MembershipRepository):
        self._users = users
        self._memberships = memberships

    def list_members(self, org_id: str) -> Sequence[Membership]:
        return self._memberships.list_for_org(org_id)

    def set_role(self, *, org_id: str, acting_uid: str, uid: str, role: MemberRole) -> None:
        if acting_uid == uid:
            raise AuthorizationError("You cannot change your own role")
        if not self._memberships.get(org_id, uid):
            raise NotFoundError("Member not found")
        self._memberships.set_role(org_id, uid, role)

    def set_active(self, *, org_id: str, acting_uid: str, uid: str, is_active: bool) -> None:
        if acting_uid == uid:
            raise AuthorizationError("You cannot disable your own account")
        if not self._memberships.get(org_id, uid):
            raise NotFoundError("Member not found")
        self._users.set_active(uid, is_active=is_active)
