from __future__ import annotations

from decimal import Decimal

from .base import NetPayCalculator

_CENTS = Decimal("0.01")


class StandardNetPayCalculator(NetPayCalculator):
    """Standard rule: base + allowances - deductions, rounded to cents."""

    def net_pay(self, base: Decimal, allowances: Decimal, deductions: Decimal) -> Decimal:
        return (base + allowances - deductions).quantize(_CENTS)
