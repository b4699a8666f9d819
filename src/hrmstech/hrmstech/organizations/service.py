from __future__ import annotations

from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_PREVIEW_COUNT
from ..core.exceptions import NotFoundError, ValidationError
from ..employee_ids import formatter
from .model import Organization
from .repository import OrganizationRepository

# Company-setup fields kept on the organization settings document.
COMPANY_FIELDS = (
    "legalName",
    "displayName",
    "industry",
    "website",
    "country",
    "timezone",
    "currency",
    "address",
    "fiscalYearStart",
    "workWeek",
)


class OrganizationService:
    """Use case: company setup and organization-wide settings (admin)."""

    def __init__(self, orgs: OrganizationRepository):
        self._orgs = orgs

    def get(self, org_id: str) -> Organization:
        org = self._orgs.get_by_id(org_id)
        if not org:
            raise NotFoundError("Organization not found")
        return org

    def complete_setup(self, org_id: str, company_info: dict) -> Organization:
        org = self.get(org_id)
        legal_name = require_non_empty(company_info.get("legalName"), "Legal name")

        settings = dict(org.settings)
        for key in COMPANY_FIELDS:
            if key in company_info:
                settings[key] = company_info[key]
        settings["legalName"] = legal_name
        settings["displayName"] = (company_info.get("displayName") or "").strip() or legal_name

        self._orgs.save_settings(org_id, settings=settings, setup_completed=True)
        return self.get(org_id)

    def update_settings(self, org_id: str, section: str, values: dict) -> Organization:
        """Merge one settings section (e.g. ``documentConfig``) into the org."""

        org = self.get(org_id)
        section = require_non_empty(section, "Section")
        if not isinstance(values, dict):
            raise ValidationError("Settings section must be an object")

        settings = dict(org.settings)
        merged = dict(settings.get(section) or {})
        merged.update(values)
        settings[section] = merged
        self._orgs.save_settings(org_id, settings=settings, setup_completed=org.setup_completed)
        return self.get(org_id)

    def update_employee_id_format(self, org_id: str, employee_id_format: str) -> Organization:
        self.get(org_id)
        fmt = (employee_id_format or "").strip()
        result = formatter.validate(fmt)
        if not result.valid:
            raise formatter.EmployeeIdFormatError(result.errors)
        self._orgs.set_employee_id_format(org_id, fmt)
        return self.get(org_id)

    @staticmethod
    def employee_id_preview(employee_id_format: str, count: Optional[int] = None) -> dict:
        result = formatter.validate(employee_id_format)
        return {
            "format": employee_id_format,
            "valid": result.valid,
            "errors": result.errors,
            "examples": formatter.preview_many(employee_id_format, count or DEFAULT_PREVIEW_COUNT),
            "variables": formatter.format_variables_help(),
        }
