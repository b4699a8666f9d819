from datetime import date

import pytest

from src.hrmstech.hrmstech.core.enums import EmployeeStatus, RoleCategory, Seniority
from src.hrmstech.hrmstech.core.exceptions import NotFoundError, ValidationError
from src.hrmstech.hrmstech.departments.service import DepartmentService
from src.hrmstech.hrmstech.employee_ids.formatter import EmployeeIdContext, EmployeeIdFormatError
from src.hrmstech.hrmstech.employees.model import Employee
from src.hrmstech.hrmstech.employees.service import EmployeeService
from src.hrmstech.hrmstech.invites.model import Invite
from src.hrmstech.hrmstech.organizations.service import OrganizationService
from src.hrmstech.hrmstech.roles.service import JobRoleService

ORG = "org-1"
TODAY = date(2024, 6, 1)


@pytest.fixture()
def org(repos):
    repos.orgs.create(org_id=ORG, name="Acme", size="11-50", created_by="owner")
    return repos.orgs.get_by_id(ORG)


def _employees(repos):
    return EmployeeService(repos.employees, repos.orgs, repos.invites, repos.departments, repos.roles)


def _hire(repos, uid, employee_id, name, **kwargs):
    repos.employees.create(
        Employee(org_id=ORG, uid=uid, employee_id=employee_id, name=name, email=f"{uid}@acme.io", **kwargs)
    )


def test_next_employee_id_uses_org_format(repos, org):
    _hire(repos, "u1", "EMP2024-001", "Ana")
    _hire(repos, "u2", "EMP2023-017", "Bo")

    assert _employees(repos).next_employee_id(ORG, today=TODAY) == "EMP2024-002"


def test_next_employee_id_counts_pending_invites(repos, org):
    _hire(repos, "u1", "EMP2024-001", "Ana")
    repos.invites.upsert(
        Invite(org_id=ORG, email="new@acme.io", name="New", employment_status="Full-time", employee_id="EMP2024-004")
    )

    assert _employees(repos).next_employee_id(ORG, today=TODAY) == "EMP2024-005"


def test_next_employee_id_keeps_text_context(repos, org):
    OrganizationService(repos.orgs).update_employee_id_format(ORG, "{DEPT}-{YY}-{###}")
    ctx = EmployeeIdContext(department="sales", sequence=99)

    assert _employees(repos).next_employee_id(ORG, ctx, today=TODAY) == "SAL-24-001"


def test_next_employee_id_unknown_org(repos):
    with pytest.raises(NotFoundError):
        _employees(repos).next_employee_id("missing", today=TODAY)


def test_update_employee_id_format_validates(repos, org):
    svc = OrganizationService(repos.orgs)

    with pytest.raises(EmployeeIdFormatError) as exc:
        svc.update_employee_id_format(ORG, "EMP-{YYYY}")
    assert len(exc.value.errors) == 1

    assert svc.update_employee_id_format(ORG, " HR{####} ").employee_id_format == "HR{####}"


def test_employee_id_preview_payload():
    preview = OrganizationService.employee_id_preview("X{###}", 2)
    assert preview["valid"] is True
    assert preview["examples"] == ["X001", "X002"]
    assert len(preview["variables"]) == 9


def test_complete_setup_fills_display_name(repos, org):
    svc = OrganizationService(repos.orgs)

    updated = svc.complete_setup(ORG, {"legalName": "Acme Ltd", "industry": "Retail", "ignored": "x"})

    assert updated.setup_completed
    assert updated.display_name == "Acme Ltd"
    assert "ignored" not in updated.settings


def test_directory_search_filter_sort(repos, org):
    _hire(repos, "u1", "E1", "Charlie", department="Sales", status=EmployeeStatus.ACTIVE)
    _hire(repos, "u2", "E2", "alice", department="Sales", status=EmployeeStatus.PROBATION)
    _hire(repos, "u3", "E3", "Bob", department="Ops")
    svc = _employees(repos)

    assert [e.name for e in svc.list_directory(ORG)] == ["alice", "Bob", "Charlie"]
    assert [e.uid for e in svc.list_directory(ORG, department="Sales", descending=True)] == ["u1", "u2"]
    assert [e.uid for e in svc.list_directory(ORG, status="Probation")] == ["u2"]
    assert [e.uid for e in svc.list_directory(ORG, search="e3")] == ["u3"]
    assert svc.departments_in_use(ORG) == ["Ops", "Sales"]
    with pytest.raises(ValidationError):
        svc.list_directory(ORG, sort_key="salary")


def test_update_profile_resolves_department_and_role(repos, org):
    dept = DepartmentService(repos.departments, repos.employees).create(ORG, {"name": "Engineering", "code": "eng"})
    role = JobRoleService(repos.roles, repos.departments, repos.employees).create(
        ORG,
        {"title": "Backend Engineer", "category": "professional", "seniority": "mid", "department_ids": [dept.dept_id]},
        created_by="owner",
    )
    _hire(repos, "u1", "E1", "Ana")

    updated = _employees(repos).update_profile(
        ORG, "u1", {"department_id": dept.dept_id, "role_id": role.role_id, "hire_date": "2024-01-15"}, updated_by="owner"
    )

    assert updated.department == "Engineering"
    assert updated.job_title == "Backend Engineer"
    assert updated.hire_date == date(2024, 1, 15)
    assert updated.updated_by == "owner"


def test_update_profile_rejects_non_numeric_ids(repos, org):
    _hire(repos, "u1", "E1", "Ana")
    svc = _employees(repos)

    with pytest.raises(ValidationError, match="Department must be a whole number"):
        svc.update_profile(ORG, "u1", {"department_id": "eng"}, updated_by="owner")
    with pytest.raises(ValidationError, match="Role must be a whole number"):
        svc.assign_role(ORG, "u1", "backend", updated_by="owner")


def test_update_profile_rejects_unknown_fields(repos, org):
    _hire(repos, "u1", "E1", "Ana")
    with pytest.raises(ValidationError, match="employee_id"):
        _employees(repos).update_profile(ORG, "u1", {"employee_id": "HACK"}, updated_by="owner")


def test_complete_onboarding(repos, org):
    _hire(repos, "u1", "E1", "Ana")
    svc = _employees(repos)

    with pytest.raises(ValidationError, match="Date of birth is required"):
        svc.complete_onboarding(ORG, "u1", {"phone_number": "123", "nid_number": "N1"})

    done = svc.complete_onboarding(ORG, "u1", {"phone_number": "123", "nid_number": "N1", "dob": "1990-02-03"})
    assert done.onboarding_completed
    assert done.dob == date(1990, 2, 3)


def test_department_rules(repos, org):
    svc = DepartmentService(repos.departments, repos.employees)
    dept = svc.create(ORG, {"name": "Ops", "code": "ops", "budget": "1000"})
    assert dept.code == "OPS"

    with pytest.raises(ValidationError, match="already in use"):
        svc.create(ORG, {"name": "Ops 2", "code": "OPS"})
    with pytest.raises(ValidationError, match="own parent"):
        svc.update(ORG, dept.dept_id, {"parent_id": dept.dept_id})
    with pytest.raises(ValidationError, match="negative"):
        svc.update(ORG, dept.dept_id, {"budget": -5})

    _hire(repos, "u1", "E1", "Ana", department_id=dept.dept_id)
    with pytest.raises(ValidationError, match="still has employees"):
        svc.delete(ORG, dept.dept_id)


def test_role_rules(repos, org):
    svc = JobRoleService(repos.roles, repos.departments, repos.employees)
    base = {"title": "Analyst", "category": RoleCategory.PROFESSIONAL.value, "seniority": Seniority.JUNIOR.value}

    with pytest.raises(ValidationError, match="Level must be at least 1"):
        svc.create(ORG, {**base, "level": 0}, created_by="owner")
    with pytest.raises(ValidationError, match="Department 9 not found"):
        svc.create(ORG, {**base, "department_ids": [9]}, created_by="owner")

    role = svc.create(ORG, {**base, "code": "an1", "level": "2"}, created_by="owner")
    assert (role.code, role.level, role.created_by) == ("AN1", 2, "owner")

    _hire(repos, "u1", "E1", "Ana", role_id=role.role_id)
    with pytest.raises(ValidationError, match="assigned to employees"):
        svc.delete(ORG, role.role_id)
