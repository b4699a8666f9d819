from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from ..common.validators import require_choice, require_non_empty, require_non_negative
from ..core.enums import PayrollStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .calculator.base import NetPayCalculator
from .calculator.standard_calculator import StandardNetPayCalculator
from .model import PayrollItem, PayrollRun
from .repository import PayrollRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunTotals:
    employees: int
    base: Decimal
    allowances: Decimal
    deductions: Decimal
    net: Decimal


def _money(value, field_name: str) -> Decimal:
    return Decimal(str(require_non_negative(value, field_name))).quantize(Decimal("0.01"))


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[NetPayCalculator] = None,
    ):
        self._payroll = payroll
        self._employees = employees
        self._calculator = calculator or StandardNetPayCalculator()

    def create_run(self, org_id: str, period: str, notes: str = "") -> PayrollRun:
        run_id = self._payroll.create_run(
            org_id=org_id,
            period=require_non_empty(period, "Period"),
            notes=(notes or "").strip(),
        )
        return self.get_run(org_id, run_id)

    def get_run(self, org_id: str, run_id: int) -> PayrollRun:
        run = self._payroll.get_run(org_id, int(run_id))
        if not run:
            raise NotFoundError("Payroll run not found")
        return run

    def list_runs(self, org_id: str) -> Sequence[PayrollRun]:
        return self._payroll.list_runs(org_id)

    def list_items(self, org_id: str, run_id: int) -> Sequence[PayrollItem]:
        run = self.get_run(org_id, run_id)
        return self._payroll.list_items(run.run_id)

    def generate_items(self, org_id: str, run_id: int) -> int:
        """Add a zero line for every employee not yet in the run.

        Lines already in the run are left untouched. Returns how many were added.
        """

        run = self.get_run(org_id, run_id)
        existing = {item.uid for item in self._payroll.list_items(run.run_id)}
        added = 0
        for employee in self._employees.list_for_org(org_id):
            if employee.uid in existing:
                continue
            self._payroll.save_item(
                PayrollItem(
                    run_id=run.run_id,
                    uid=employee.uid,
                    employee_id=employee.employee_id,
                    name=employee.name,
                    department=employee.department,
                )
            )
            added += 1
        logger.info("payroll run %s: generated %d items", run.run_id, added)
        return added

    def save_item(self, org_id: str, run_id: int, uid: str, *, base, allowances, deductions) -> PayrollItem:
        run = self.get_run(org_id, run_id)
        if run.status == PayrollStatus.PAID:
            raise ValidationError("A paid payroll run cannot be edited")

        current = next((i for i in self._payroll.list_items(run.run_id) if i.uid == uid), None)
        if current is None:
            employee = self._employees.get(org_id, uid)
            if not employee:
                raise NotFoundError("Employee not found")
            current = PayrollItem(
                run_id=run.run_id,
                uid=uid,
                employee_id=employee.employee_id,
                name=employee.name,
                department=employee.department,
            )

        base_d = _money(base, "Base")
        allowances_d = _money(allowances, "Allowances")
        deductions_d = _money(deductions, "Deductions")
        item = PayrollItem(
            run_id=run.run_id,
            uid=uid,
            employee_id=current.employee_id,
            name=current.name,
            department=current.department,
            base=base_d,
            allowances=allowances_d,
            deductions=deductions_d,
            net=self._calculator.net_pay(base_d, allowances_d, deductions_d),
        )
        self._payroll.save_item(item)
        return item

    def set_run_status(self, org_id: str, run_id: int, status: str) -> PayrollRun:
        run = self.get_run(org_id, run_id)
        self._payroll.set_run_status(org_id, run.run_id, require_choice(status, PayrollStatus, "Status"))
        return self.get_run(org_id, run.run_id)

    def delete_run(self, org_id: str, run_id: int) -> None:
        run = self.get_run(org_id, run_id)
        self._payroll.delete_items(run.run_id)
        self._payroll.delete_run(org_id, run.run_id)

    def run_totals(self, org_id: str, run_id: int) -> RunTotals:
        items = self.list_items(org_id, run_id)
        zero = Decimal("0")
        return RunTotals(
            employees=len(items),
            base=sum((i.base for i in items), zero),
            allowances=sum((i.allowances for i in items), zero),
            deductions=sum((i.deductions for i in items), zero),
            net=sum((i.net for i in items), zero),
        )
