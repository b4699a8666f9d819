from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollRun:
    run_id: int
    org_id: str
    period: str
    status: PayrollStatus = PayrollStatus.DRAFT
    notes: str = ""
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PayrollItem:
    """One employee's line in a payroll run."""

    run_id: int
    uid: str
    employee_id: str
    name: str
    department: str = ""
    base: Decimal = Decimal("0")
    allowances: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")
    net: Decimal = Decimal("0")
