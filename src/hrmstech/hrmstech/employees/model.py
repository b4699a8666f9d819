from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EmployeeStatus, EmployeeType


@dataclass(frozen=True)
class Employee:
    """Directory entry of one person inside an organization.

    ``uid`` links to the sign-in account; ``employee_id`` is the human-facing
    identifier rendered from the organization's format.
    """

    org_id: str
    uid: str
    employee_id: str
    name: str
    email: str
    department_id: Optional[int] = None
    department: str = ""
    job_title: str = ""
    role_id: Optional[int] = None
    manager: str = ""
    hire_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    location: str = ""
    employee_type: EmployeeType = EmployeeType.FULL_TIME
    dob: Optional[date] = None
    phone_number: Optional[str] = None
    nid_number: Optional[str] = None
    passport_number: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relation: Optional[str] = None
    present_address: Optional[str] = None
    permanent_address: Optional[str] = None
    onboarding_completed: bool = False
    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    updated_by: Optional[str] = None


# Columns an admin may edit from the directory.
ADMIN_EDITABLE = (
    "name",
    "department_id",
    "department",
    "job_title",
    "role_id",
    "manager",
    "hire_date",
    "status",
    "location",
    "employee_type",
)

# Columns the employee fills in during self-onboarding.
ONBOARDING_FIELDS = (
    "phone_number",
    "dob",
    "nid_number",
    "passport_number",
    "emergency_contact_name",
    "emergency_contact_phone",
    "emergency_contact_relation",
    "present_address",
    "permanent_address",
)
