from datetime import datetime, timedelta

import pytest

from src.hrmstech.hrmstech.core.enums import MemberRole
from src.hrmstech.hrmstech.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from src.hrmstech.hrmstech.users import errors
from src.hrmstech.hrmstech.users.errors import GENERIC_MESSAGE, auth_error_message
from src.hrmstech.hrmstech.users.service import AuthService, UserService


def _service(repos, **kwargs):
    return AuthService(repos.users, repos.memberships, repos.orgs, **kwargs)


def _register(svc, email="owner@acme.io"):
    return svc.register_owner(company="Acme", full_name="Olive Owner", email=email, password="secret1")


def test_register_owner_creates_org_and_admin(repos):
    user = _register(_service(repos))

    assert user.org_id == user.uid
    assert user.role == MemberRole.ADMIN
    assert repos.orgs.get_by_id(user.uid).name == "Acme"
    assert repos.memberships.get(user.uid, user.uid).name == "Olive Owner"


def test_register_rejects_duplicate_email_and_weak_password(repos):
    svc = _service(repos)
    _register(svc)

    with pytest.raises(AuthenticationError) as dup:
        _register(svc, email="OWNER@acme.io ")
    assert dup.value.code == errors.EMAIL_IN_USE

    with pytest.raises(AuthenticationError) as weak:
        svc.register_owner(company="B", full_name="B", email="b@b.io", password="123")
    assert weak.value.code == errors.WEAK_PASSWORD


def test_register_requires_company(repos):
    with pytest.raises(ValidationError, match="Company name is required"):
        _service(repos).register_owner(company=" ", full_name="X", email="x@x.io", password="secret1")


def test_authenticate(repos):
    svc = _service(repos)
    owner = _register(svc)

    user = svc.authenticate("Owner@Acme.io", "secret1")
    assert user.uid == owner.uid
    assert user.role == MemberRole.ADMIN

    with pytest.raises(AuthenticationError) as wrong:
        svc.authenticate("owner@acme.io", "nope")
    assert wrong.value.code == errors.INVALID_CREDENTIAL

    with pytest.raises(AuthenticationError) as bad_email:
        svc.authenticate("not-an-email", "secret1")
    assert bad_email.value.code == errors.INVALID_EMAIL


def test_authenticate_disabled_and_unlinked_accounts(repos):
    svc = _service(repos)
    owner = _register(svc)
    repos.users.set_active(owner.uid, is_active=False)
    with pytest.raises(AuthenticationError) as disabled:
        svc.authenticate("owner@acme.io", "secret1")
    assert disabled.value.code == errors.USER_DISABLED

    svc.create_account("loner@acme.io", "secret1")
    with pytest.raises(AuthenticationError) as unlinked:
        svc.authenticate("loner@acme.io", "secret1")
    assert unlinked.value.code == errors.NO_MEMBERSHIP


def test_password_reset_flow(repos):
    svc = _service(repos, reset_ttl_minutes=30)
    _register(svc)
    now = datetime(2024, 5, 1, 9, 0)

    assert svc.request_password_reset("ghost@acme.io", now=now) is None
    token = svc.request_password_reset("owner@acme.io", now=now)

    svc.reset_password(token, "newsecret", now=now + timedelta(minutes=10))
    assert svc.authenticate("owner@acme.io", "newsecret").email == "owner@acme.io"

    with pytest.raises(AuthenticationError) as reused:
        svc.reset_password(token, "another1", now=now + timedelta(minutes=11))
    assert reused.value.code == errors.INVALID_ACTION_CODE


def test_password_reset_expires(repos):
    svc = _service(repos, reset_ttl_minutes=30)
    _register(svc)
    now = datetime(2024, 5, 1, 9, 0)
    token = svc.request_password_reset("owner@acme.io", now=now)

    with pytest.raises(AuthenticationError) as expired:
        svc.reset_password(token, "newsecret", now=now + timedelta(minutes=31))
    assert expired.value.code == errors.EXPIRED_ACTION_CODE


def test_change_password(repos):
    svc = _service(repos)
    owner = _register(svc)

    with pytest.raises(AuthenticationError):
        svc.change_password(owner.uid, "wrong", "newsecret")

    svc.change_password(owner.uid, "secret1", "newsecret")
    assert svc.authenticate("owner@acme.io", "newsecret").uid == owner.uid


def test_member_admin_cannot_change_self(repos):
    owner = _register(_service(repos))
    users = UserService(repos.users, repos.memberships)

    with pytest.raises(AuthorizationError):
        users.set_role(org_id=owner.org_id, acting_uid=owner.uid, uid=owner.uid, role=MemberRole.EMPLOYEE)
    with pytest.raises(AuthorizationError):
        users.set_active(org_id=owner.org_id, acting_uid=owner.uid, uid=owner.uid, is_active=False)


def test_auth_error_message_mapping():
    assert auth_error_message(AuthenticationError(errors.INVALID_CREDENTIAL)).startswith("Invalid email or password")
    assert auth_error_message(AuthenticationError("auth/something-new")) == GENERIC_MESSAGE
    assert auth_error_message(ValueError("plain")) == "plain"
    assert auth_error_message(ValueError()) == "An unexpected error occurred"
