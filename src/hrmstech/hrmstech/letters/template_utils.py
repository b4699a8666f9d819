"""Placeholder handling for HR letter templates (``{{employeeName}}`` ...)."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local, parse_iso_date

EMPLOYEE = "employee"
COMPANY = "company"
HR = "hr"
SYSTEM = "system"

AVAILABLE_FIELDS = (
    {"key": "employeeName", "label": "Employee Name", "description": "Full name of the employee", "category": EMPLOYEE},
    {"key": "employeeId", "label": "Employee ID", "description": "Unique employee identifier", "category": EMPLOYEE},
    {"key": "designation", "label": "Designation", "description": "Job title/position", "category": EMPLOYEE},
    {"key": "department", "label": "Department", "description": "Department name", "category": EMPLOYEE},
    {"key": "employmentType", "label": "Employment Type", "description": "Full-time, Part-time, etc.", "category": EMPLOYEE},
    {"key": "dateOfJoining", "label": "Date of Joining", "description": "Employment start date", "category": EMPLOYEE},
    {"key": "currentSalary", "label": "Current Salary", "description": "Current compensation", "category": EMPLOYEE},
    {"key": "companyName", "label": "Company Name", "description": "Organization name", "category": COMPANY},
    {"key": "companyStreet", "label": "Company Street", "description": "Street address", "category": COMPANY},
    {"key": "companyCity", "label": "Company City", "description": "City name", "category": COMPANY},
    {"key": "companyState", "label": "Company State", "description": "State/Province", "category": COMPANY},
    {"key": "companyZip", "label": "Company ZIP", "description": "Postal/ZIP code", "category": COMPANY},
    {"key": "companyCountry", "label": "Company Country", "description": "Country name", "category": COMPANY},
    {"key": "hrName", "label": "HR Name", "description": "HR contact person name", "category": HR},
    {"key": "hrTitle", "label": "HR Title", "description": "HR person job title", "category": HR},
    {"key": "hrEmail", "label": "HR Email", "description": "HR contact email", "category": HR},
    {"key": "hrWebsite", "label": "HR Website", "description": "Company website", "category": HR},
    {"key": "issueDate", "label": "Issue Date", "description": "Letter issue date", "category": SYSTEM},
    {"key": "currentDate", "label": "Current Date", "description": "Today's date", "category": SYSTEM},
    {"key": "currentTime", "label": "Current Time", "description": "Current time", "category": SYSTEM},
)

DEFAULT_LETTER_TEMPLATE = """
This letter is to confirm that **{{employeeName}}** is employed with **{{companyName}}** as a **{{designation}}** \
in the **{{department}}** department since {{dateOfJoining}}. The nature of employment is {{employmentType}} \
and the current compensation is {{currentSalary}}.

This letter is issued upon request of the employee for whatever purpose it may serve. For additional \
verification, please contact {{hrName}} ({{hrTitle}}) at {{hrEmail}} or visit {{hrWebsite}}.
"""

DATE_FIELDS = ("dateOfJoining", "issueDate")

_PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")
_UNCLOSED_RE = re.compile(r"\{\{[^}]*$")
_SINGLE_BRACE_RE = re.compile(r"(?<!\{)\{[^{}]*\}(?!\})")


@dataclass(frozen=True)
class TemplateCheck:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


def format_long_date(value) -> str:
    """``"2024-01-15"`` -> ``"15 January 2024"``; ``""`` when not a date."""
    if not value:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        try:
            value = parse_iso_date(str(value).strip()[:10])
        except ValueError:
            return ""
    return value.strftime("%d %B %Y")


def process_template(template: str, data: dict, *, now: Optional[datetime] = None) -> str:
    """Fill ``{{key}}`` placeholders from ``data``.

    Empty values become ``[key]`` so gaps stay visible in the letter. Unknown
    placeholders are left as they are.
    """

    now = now or now_local()
    values = {key: ("" if value is None else str(value)) for key, value in data.items()}
    for key in DATE_FIELDS:
        if key in data:
            values[key] = format_long_date(data[key])
    values["currentDate"] = format_long_date(now.date())
    values["currentTime"] = now.strftime("%H:%M:%S")

    def replace(m: re.Match) -> str:
        key = m.group(1)
        if key not in values:
            return m.group(0)
        return values[key] or f"[{key}]"

    return _PLACEHOLDER_RE.sub(replace, template)


def extract_placeholders(template: str) -> list[str]:
    return _PLACEHOLDER_RE.findall(template or "")


def validate_template(template: str) -> TemplateCheck:
    errors = []
    if _UNCLOSED_RE.search(template or ""):
        errors.append("Unclosed placeholders found")
    if _SINGLE_BRACE_RE.search(template or ""):
        errors.append("Invalid placeholder syntax found")
    return TemplateCheck(is_valid=not errors, errors=errors)
