import pytest
import requests

from src.hrmstech.hrmstech.core.exceptions import EmailDeliveryError
from src.hrmstech.hrmstech.mail.resend_mailer import RESEND_API_URL, ResendMailer, invite_subject, render_invite_html


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self._error:
            raise self._error
        return self._response


def test_send_invite_posts_to_resend():
    session = FakeSession(FakeResponse(200, {"id": "msg_1"}))
    mailer = ResendMailer("key-1", "HR <hr@acme.io>", session=session)

    assert mailer.send_invite(to="nina@acme.io", invite_url="https://hr.acme.io/invite?org=o", org_name="Acme") == "msg_1"

    url, kwargs = session.calls[0]
    assert url == RESEND_API_URL
    assert kwargs["headers"] == {"Authorization": "Bearer key-1"}
    assert kwargs["json"]["from"] == "HR <hr@acme.io>"
    assert kwargs["json"]["subject"] == "You're invited to Acme"
    assert "https://hr.acme.io/invite?org=o" in kwargs["json"]["html"]


def test_unconfigured_mailer_refuses():
    mailer = ResendMailer(None, "hr@acme.io", session=FakeSession())
    assert not mailer.configured
    with pytest.raises(EmailDeliveryError, match="RESEND_API_KEY"):
        mailer.send(to="a@b.io", subject="s", html="h")


def test_provider_error_message_is_surfaced():
    session = FakeSession(FakeResponse(422, {"message": "Invalid `to` field"}))
    with pytest.raises(EmailDeliveryError, match="Invalid `to` field"):
        ResendMailer("k", "f@x.io", session=session).send(to="bad", subject="s", html="h")

    session = FakeSession(FakeResponse(502, None))
    with pytest.raises(EmailDeliveryError, match="HTTP 502"):
        ResendMailer("k", "f@x.io", session=session).send(to="a@b.io", subject="s", html="h")


def test_accepted_email_without_json_body_still_counts_as_sent():
    assert ResendMailer("k", "f@x.io", session=FakeSession(FakeResponse(200, None))).send_invite(
        to="a@b.io", invite_url="https://x.io/invite"
    ) == ""
    assert ResendMailer("k", "f@x.io", session=FakeSession(FakeResponse(202, ["queued"]))).send(
        to="a@b.io", subject="s", html="h"
    ) == ""


def test_network_error_becomes_delivery_error():
    session = FakeSession(error=requests.ConnectionError("boom"))
    with pytest.raises(EmailDeliveryError, match="boom"):
        ResendMailer("k", "f@x.io", session=session).send(to="a@b.io", subject="s", html="h")


def test_invite_template_escapes_org_name():
    assert invite_subject(None) == "You're invited to our HRMS"
    html = render_invite_html("https://x.io/invite", "<Acme>")
    assert "&lt;Acme&gt;" in html
    assert "https://x.io/invite" in html


def test_password_reset_email():
    session = FakeSession(FakeResponse(200, {"id": "msg_2"}))
    mailer = ResendMailer("k", "f@x.io", session=session)

    mailer.send_password_reset(to="a@b.io", reset_url="https://x.io/login/reset?token=t", ttl_minutes=45)

    body = session.calls[0][1]["json"]
    assert body["subject"] == "Reset your HRMSTech password"
    assert "45" in body["html"]
