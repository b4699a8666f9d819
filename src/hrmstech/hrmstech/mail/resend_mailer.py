from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import requests
from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..core.constants import INVITE_TTL_DAYS
from ..core.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"

_templates = Environment(
    loader=FileSystemLoader(str(Path(__file__).resolve().parent / "templates")),
    autoescape=select_autoescape(["html"]),
)


def invite_subject(org_name: Optional[str]) -> str:
    return f"You're invited to {org_name or 'our HRMS'}"


def render_invite_html(invite_url: str, org_name: Optional[str] = None) -> str:
    return _templates.get_template("invite_email.html").render(
        invite_url=invite_url,
        org_name=org_name,
        ttl_days=INVITE_TTL_DAYS,
    )


class ResendMailer:
    """Transactional email through the Resend HTTP API."""

    def __init__(
        self,
        api_key: Optional[str],
        from_email: Optional[str],
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ):
        self._api_key = api_key
        self._from_email = from_email
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self._api_key and self._from_email)

    def send(self, *, to: str, subject: str, html: str) -> str:
        """Send one message; returns the provider's message id."""

        if not self.configured:
            raise EmailDeliveryError("Server missing RESEND_API_KEY or RESEND_FROM_EMAIL")

        try:
            resp = self._session.post(
                RESEND_API_URL,
                headers={"Authorization": f"Bearer {self._api_key}"},
                json={"from": self._from_email, "to": to, "subject": subject, "html": html},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            logger.warning("resend request failed: %s", exc)
            raise EmailDeliveryError(str(exc)) from exc

        if resp.status_code >= 400:
            try:
                message = resp.json().get("message") or "Failed to send"
            except ValueError:
                message = f"HTTP {resp.status_code}"
            logger.warning("resend rejected email to %s: %s", to, message)
            raise EmailDeliveryError(message)

        # Delivery already succeeded; a body we cannot read only loses the id.
        try:
            payload = resp.json()
        except ValueError:
            logger.info("resend accepted email to %s without a JSON body", to)
            return ""
        return payload.get("id", "") if isinstance(payload, dict) else ""

    def send_invite(self, *, to: str, invite_url: str, org_name: Optional[str] = None) -> str:
        return self.send(to=to, subject=invite_subject(org_name), html=render_invite_html(invite_url, org_name))

    def send_password_reset(self, *, to: str, reset_url: str, ttl_minutes: int) -> str:
        html = _templates.get_template("password_reset.html").render(reset_url=reset_url, ttl_minutes=ttl_minutes)
        return self.send(to=to, subject="Reset your HRMSTech password", html=html)
