from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal


class NetPayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def net_pay(self, base: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        raise NotImplementedError
