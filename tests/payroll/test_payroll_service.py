from decimal import Decimal

import pytest

from src.hrmstech.hrmstech.core.enums import PayrollStatus
from src.hrmstech.hrmstech.core.exceptions import NotFoundError, ValidationError
from src.hrmstech.hrmstech.employees.model import Employee
from src.hrmstech.hrmstech.payroll.calculator.standard_calculator import StandardNetPayCalculator
from src.hrmstech.hrmstech.payroll.service import PayrollService

ORG = "org-1"


@pytest.fixture()
def svc(repos):
    repos.employees.create(Employee(org_id=ORG, uid="u1", employee_id="E1", name="Ana", email="a@x.io", department="Ops"))
    repos.employees.create(Employee(org_id=ORG, uid="u2", employee_id="E2", name="Bo", email="b@x.io"))
    return PayrollService(repos.payroll, repos.employees)


def test_standard_calculator_rounds_to_cents():
    calc = StandardNetPayCalculator()
    assert calc.net_pay(Decimal("1000"), Decimal("150.555"), Decimal("200")) == Decimal("950.56")


def test_generate_items_keeps_existing_lines(svc, repos):
    run = svc.create_run(ORG, "2024-05", notes="May")
    assert svc.generate_items(ORG, run.run_id) == 2

    svc.save_item(ORG, run.run_id, "u1", base=3000, allowances="250.5", deductions=100)
    repos.employees.create(Employee(org_id=ORG, uid="u3", employee_id="E3", name="Cy", email="c@x.io"))

    assert svc.generate_items(ORG, run.run_id) == 1
    items = {i.uid: i for i in svc.list_items(ORG, run.run_id)}
    assert items["u1"].net == Decimal("3150.50")
    assert items["u1"].department == "Ops"
    assert items["u3"].net == Decimal("0")


def test_save_item_validates_amounts_and_status(svc):
    run = svc.create_run(ORG, "2024-05")

    with pytest.raises(ValidationError, match="Deductions cannot be negative"):
        svc.save_item(ORG, run.run_id, "u1", base=100, allowances=0, deductions=-1)
    with pytest.raises(ValidationError, match="Base must be a number"):
        svc.save_item(ORG, run.run_id, "u1", base="lots", allowances=0, deductions=0)
    with pytest.raises(NotFoundError):
        svc.save_item(ORG, run.run_id, "ghost", base=1, allowances=0, deductions=0)

    svc.set_run_status(ORG, run.run_id, "paid")
    with pytest.raises(ValidationError, match="paid payroll run"):
        svc.save_item(ORG, run.run_id, "u1", base=1, allowances=0, deductions=0)


def test_run_totals(svc):
    run = svc.create_run(ORG, "2024-06")
    svc.save_item(ORG, run.run_id, "u1", base=1000, allowances=100, deductions=50)
    svc.save_item(ORG, run.run_id, "u2", base=2000, allowances=0, deductions=500)

    totals = svc.run_totals(ORG, run.run_id)

    assert totals.employees == 2
    assert totals.base == Decimal("3000.00")
    assert totals.net == Decimal("2550.00")


def test_create_run_requires_period_and_delete_removes_items(svc, repos):
    with pytest.raises(ValidationError):
        svc.create_run(ORG, " ")

    run = svc.create_run(ORG, "2024-07")
    svc.generate_items(ORG, run.run_id)
    assert svc.get_run(ORG, run.run_id).status == PayrollStatus.DRAFT

    svc.delete_run(ORG, run.run_id)

    assert repos.payroll.items == {}
    with pytest.raises(NotFoundError):
        svc.get_run(ORG, run.run_id)
