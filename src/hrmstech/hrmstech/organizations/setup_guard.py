"""Gate portal pages until the owner has finished company setup."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .repository import OrganizationRepository

logger = logging.getLogger(__name__)

COMPANY_SETUP_PATH = "/onboarding/company-setup"
LOGIN_PATH = "/login"

ALLOWED_WITHOUT_SETUP = (
    "/login",
    "/register",
    "/invite",
    "/onboarding/company-setup",
    "/onboarding/select-plan",
    "/onboarding/getting-started",
    "/onboarding/quick-setup",
    "/logout",
    "/forgot",
    "/reset",
)


@dataclass(frozen=True)
class SetupStatus:
    is_setup_complete: bool
    redirect_to: Optional[str] = None


def check_setup_status(orgs: OrganizationRepository, org_id: Optional[str]) -> SetupStatus:
    if not org_id:
        return SetupStatus(is_setup_complete=False, redirect_to=LOGIN_PATH)

    try:
        org = orgs.get_by_id(org_id)
    except Exception:
        # Treat lookup failures as "not set up" so the user lands on the setup flow.
        logger.exception("setup status lookup failed for org %s", org_id)
        return SetupStatus(is_setup_complete=False, redirect_to=COMPANY_SETUP_PATH)

    if not org or not org.setup_completed:
        return SetupStatus(is_setup_complete=False, redirect_to=COMPANY_SETUP_PATH)
    return SetupStatus(is_setup_complete=True)


def is_allowed_without_setup(pathname: str) -> bool:
    return any(pathname == allowed or pathname.startswith(allowed + "/") for allowed in ALLOWED_WITHOUT_SETUP)
