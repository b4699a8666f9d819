from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def to_dict(obj: Any, *, exclude: Iterable[str] = ()) -> dict:
    """JSON-ready dict for a domain dataclass (enums/dates flattened)."""
    data = asdict(obj) if is_dataclass(obj) else dict(obj)
    for key in exclude:
        data.pop(key, None)
    return {k: _plain(v) for k, v in data.items()}


def to_list(items: Iterable[Any], *, exclude: Iterable[str] = ()) -> list[dict]:
    return [to_dict(i, exclude=exclude) for i in items]
