from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..organizations.repository import OrganizationRepository
from .model import LetterTemplate
from .repository import LetterTemplateRepository
from .template_utils import DEFAULT_LETTER_TEMPLATE, process_template, validate_template


class LetterService:
    """Use case: HR letter templates and rendering them for an employee."""

    def __init__(
        self,
        templates: LetterTemplateRepository,
        employees: EmployeeRepository,
        orgs: OrganizationRepository,
    ):
        self._templates = templates
        self._employees = employees
        self._orgs = orgs

    def list_all(self, org_id: str) -> Sequence[LetterTemplate]:
        return self._templates.list_all(org_id)

    def get(self, org_id: str, template_id: int) -> LetterTemplate:
        template = self._templates.get(org_id, int(template_id))
        if not template:
            raise NotFoundError("Template not found")
        return template

    @staticmethod
    def _check(name: str, content: Optional[str]) -> tuple[str, str]:
        name = require_non_empty(name, "Template name")
        content = content if content and content.strip() else DEFAULT_LETTER_TEMPLATE
        check = validate_template(content)
        if not check.is_valid:
            raise ValidationError("; ".join(check.errors))
        return name, content

    def create(self, org_id: str, name: str, content: Optional[str] = None) -> LetterTemplate:
        name, content = self._check(name, content)
        return self.get(org_id, self._templates.create(org_id=org_id, name=name, content=content))

    def update(self, org_id: str, template_id: int, name: str, content: Optional[str]) -> LetterTemplate:
        self.get(org_id, template_id)
        name, content = self._check(name, content)
        self._templates.update(org_id, int(template_id), name=name, content=content)
        return self.get(org_id, template_id)

    def delete(self, org_id: str, template_id: int) -> None:
        if not self._templates.delete(org_id, int(template_id)):
            raise NotFoundError("Template not found")

    def render_for_employee(
        self,
        org_id: str,
        template_id: int,
        uid: str,
        hr: Optional[dict] = None,
        *,
        extra: Optional[dict] = None,
        now: Optional[datetime] = None,
    ) -> str:
        template = self.get(org_id, template_id)
        employee = self._employees.get(org_id, uid)
        if not employee:
            raise NotFoundError("Employee not found")
        org = self._orgs.get_by_id(org_id)
        if not org:
            raise NotFoundError("Organization not found")

        address = org.settings.get("address") or {}
        if not isinstance(address, dict):
            address = {"street": str(address)}
        hr = hr or {}
        data = {
            "employeeName": employee.name,
            "employeeId": employee.employee_id,
            "designation": employee.job_title,
            "department": employee.department,
            "employmentType": employee.employee_type.value,
            "dateOfJoining": employee.hire_date,
            "currentSalary": "",
            "companyName": org.display_name,
            "companyStreet": address.get("street", ""),
            "companyCity": address.get("city", ""),
            "companyState": address.get("state", ""),
            "companyZip": address.get("zip", ""),
            "companyCountry": address.get("country", "") or org.settings.get("country", ""),
            "issueDate": (now or now_local()).date(),
            "hrName": hr.get("name", ""),
            "hrTitle": hr.get("title", ""),
            "hrEmail": hr.get("email", ""),
            "hrWebsite": hr.get("website", "") or org.settings.get("website", ""),
        }
        data.update(extra or {})
        return process_template(template.content, data, now=now)
