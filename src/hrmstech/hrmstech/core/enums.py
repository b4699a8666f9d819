from __future__ import annotations

from enum import Enum


class MemberRole(str, Enum):
    """Portal a member of an organization signs into."""

    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    PROBATION = "Probation"
    INACTIVE = "Inactive"
    ON_LEAVE = "On Leave"


class EmployeeType(str, Enum):
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"
    INTERN = "Intern"


class InviteStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REVOKED = "revoked"


class LeaveType(str, Enum):
    CASUAL = "Casual"
    SICK = "Sick"
    ANNUAL = "Annual"
    UNPAID = "Unpaid"
    OTHER = "Other"


class LeaveStatus(str, Enum):
    """Review state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    PROCESSED = "processed"
    PAID = "paid"


class DepartmentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class RoleCategory(str, Enum):
    EXECUTIVE = "executive"
    MANAGEMENT = "management"
    PROFESSIONAL = "professional"
    SUPPORT = "support"
    INTERN = "intern"


class Seniority(str, Enum):
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    PRINCIPAL = "principal"


class RoleStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    DEPRECATED = "deprecated"
