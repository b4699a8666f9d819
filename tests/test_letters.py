from datetime import date, datetime

import pytest

from src.hrmstech.hrmstech.core.exceptions import NotFoundError, ValidationError
from src.hrmstech.hrmstech.employees.model import Employee
from src.hrmstech.hrmstech.letters.service import LetterService
from src.hrmstech.hrmstech.letters.template_utils import (
    AVAILABLE_FIELDS,
    DEFAULT_LETTER_TEMPLATE,
    extract_placeholders,
    format_long_date,
    process_template,
    validate_template,
)

ORG = "org-1"
NOW = datetime(2024, 7, 4, 14, 30, 5)


def test_format_long_date():
    assert format_long_date("2024-01-15") == "15 January 2024"
    assert format_long_date(date(2023, 12, 1)) == "01 December 2023"
    assert format_long_date("soon") == ""
    assert format_long_date(None) == ""


def test_process_template_fills_and_marks_gaps():
    out = process_template(
        "{{employeeName}} joined {{dateOfJoining}}; salary {{currentSalary}}; {{unknownField}}",
        {"employeeName": "Ana", "dateOfJoining": "2022-03-01", "currentSalary": ""},
        now=NOW,
    )
    assert out == "Ana joined 01 March 2022; salary [currentSalary]; {{unknownField}}"


def test_process_template_system_fields():
    out = process_template("{{currentDate}} {{currentTime}}", {}, now=NOW)
    assert out == "04 July 2024 14:30:05"


def test_extract_placeholders():
    assert extract_placeholders("Hi {{a}} and {{b}}, {{a}}") == ["a", "b", "a"]
    assert extract_placeholders("") == []


def test_validate_template():
    assert validate_template(DEFAULT_LETTER_TEMPLATE).is_valid
    assert validate_template("Dear {{employeeName").errors == ["Unclosed placeholders found"]
    assert validate_template("Dear {employeeName}").errors == ["Invalid placeholder syntax found"]


def test_available_fields_cover_default_template():
    keys = {f["key"] for f in AVAILABLE_FIELDS}
    assert set(extract_placeholders(DEFAULT_LETTER_TEMPLATE)) <= keys


def test_letter_service_crud_and_render(repos):
    repos.orgs.create(org_id=ORG, name="Acme", size=None, created_by="owner")
    repos.orgs.save_settings(
        ORG, settings={"displayName": "Acme Corp", "address": {"city": "Dhaka"}}, setup_completed=True
    )
    repos.employees.create(
        Employee(
            org_id=ORG,
            uid="u1",
            employee_id="EMP2024-001",
            name="Ana",
            email="ana@acme.io",
            job_title="Analyst",
            hire_date=date(2024, 1, 15),
        )
    )
    svc = LetterService(repos.letters, repos.employees, repos.orgs)

    default = svc.create(ORG, "Employment", None)
    assert default.content == DEFAULT_LETTER_TEMPLATE

    custom = svc.create(ORG, "Short", "{{employeeName}} ({{employeeId}}), {{companyName}}, {{companyCity}} on {{issueDate}}")
    text = svc.render_for_employee(ORG, custom.template_id, "u1", now=NOW)
    assert text == "Ana (EMP2024-001), Acme Corp, Dhaka on 04 July 2024"

    with pytest.raises(ValidationError, match="Invalid placeholder syntax found"):
        svc.update(ORG, custom.template_id, "Short", "Hello {name}")
    with pytest.raises(NotFoundError):
        svc.render_for_employee(ORG, custom.template_id, "ghost", now=NOW)

    svc.delete(ORG, default.template_id)
    assert [t.name for t in svc.list_all(ORG)] == ["Short"]
