from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_EMPLOYEE_ID_FORMAT


@dataclass(frozen=True)
class Organization:
    """Tenant that scopes every other record."""

    org_id: str
    name: str
    created_by: str
    size: Optional[str] = None
    setup_completed: bool = False
    employee_id_format: str = DEFAULT_EMPLOYEE_ID_FORMAT
    settings: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.settings.get("displayName") or self.settings.get("legalName") or self.name
