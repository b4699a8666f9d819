from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollItem, PayrollRun


class PayrollRepository(Protocol):
    def create_run(self, *, org_id: str, period: str, notes: str) -> int:
        raise NotImplementedError

    def get_run(self, org_id: str, run_id: int) -> Optional[PayrollRun]:
        raise NotImplementedError

    def list_runs(self, org_id: str) -> Sequence[PayrollRun]:
        raise NotImplementedError

    def set_run_status(self, org_id: str, run_id: int, status: PayrollStatus) -> bool:
        raise NotImplementedError

    def delete_run(self, org_id: str, run_id: int) -> bool:
        raise NotImplementedError

    def list_items(self, run_id: int) -> Sequence[PayrollItem]:
        raise NotImplementedError

    def save_item(self, item: PayrollItem) -> None:
        """Insert or replace the item keyed by ``(run_id, uid)``."""

        raise NotImplementedError

    def delete_items(self, run_id: int) -> int:
        raise NotImplementedError
