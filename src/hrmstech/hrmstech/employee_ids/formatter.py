"""Employee identifier formatting.

An organization configures a pattern such as ``EMP-{YYYY}-{###}``; new hires
get an identifier rendered from that pattern. Everything here is pure string
and date handling so it can be used from services, controllers and tests
alike.

Recognised placeholders:

========== ============================================
``{YYYY}``  four digit year
``{YY}``    last two digits of the year
``{MM}``    month, zero padded
``{DD}``    day of month, zero padded
``{###}``   sequence number, padded to 3 digits
``{####}``  sequence number, padded to 4 digits
``{DEPT}``  department code (upper case, first 3 chars)
``{LOC}``   location code (upper case, first 2 chars)
``{TYPE}``  employee type (upper case, first 3 chars)
========== ============================================
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ..core.exceptions import ValidationError

_PLACEHOLDER_RE = re.compile(r"\{[^}]+\}")

YEAR = "{YYYY}"
SHORT_YEAR = "{YY}"
MONTH = "{MM}"
DAY = "{DD}"
SEQ3 = "{###}"
SEQ4 = "{####}"
DEPT = "{DEPT}"
LOC = "{LOC}"
TYPE = "{TYPE}"

DATE_PLACEHOLDERS = (YEAR, SHORT_YEAR, MONTH, DAY)
SEQUENCE_PLACEHOLDERS = (SEQ3, SEQ4)
VALID_PLACEHOLDERS = (YEAR, SHORT_YEAR, MONTH, DAY, SEQ3, SEQ4, DEPT, LOC, TYPE)

INVALID_FORMAT = "Invalid format"


@dataclass(frozen=True)
class EmployeeIdContext:
    """Values an identifier is rendered from (or parsed back into).

    Every field is optional: :func:`parse` only fills what the format
    carries, and :func:`generate` falls back to today's date and sequence 1.
    """

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    sequence: Optional[int] = None
    department: Optional[str] = None
    location: Optional[str] = None
    employee_type: Optional[str] = None


@dataclass(frozen=True)
class FormatValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)


class EmployeeIdFormatError(ValidationError):
    """Raised when an identifier is generated from an invalid format."""

    def __init__(self, errors: list[str]):
        super().__init__(f"Invalid format: {', '.join(errors)}")
        self.errors = list(errors)


SAMPLE_CONTEXT = EmployeeIdContext(sequence=1, department="HR", location="NY", employee_type="EMP")

# Wildcards for the free-text placeholders, bounded by what generate() emits.
_TEXT_PATTERNS = {
    DEPT: r"\S{0,3}",
    LOC: r"\S{0,2}",
    TYPE: r"\S{1,3}",
}

_SEQUENCE_PATTERNS = {
    SEQ3: r"\d{3,}",
    SEQ4: r"\d{4,}",
}

_GROUP_NAMES = {
    YEAR: "yyyy",
    SHORT_YEAR: "yy",
    MONTH: "mm",
    DAY: "dd",
    SEQ3: "seq3",
    SEQ4: "seq4",
    DEPT: "dept",
    LOC: "loc",
    TYPE: "type",
}

_PARSE_PATTERNS = {
    YEAR: r"\d{4}",
    SHORT_YEAR: r"\d{2}",
    MONTH: r"\d{2}",
    DAY: r"\d{2}",
    **_SEQUENCE_PATTERNS,
    **_TEXT_PATTERNS,
}


def _tokens(fmt: str) -> Iterable[tuple[bool, str]]:
    """Split ``fmt`` into ``(is_placeholder, text)`` pieces, left to right."""
    pos = 0
    for m in _PLACEHOLDER_RE.finditer(fmt):
        if m.start() > pos:
            yield False, fmt[pos:m.start()]
        yield True, m.group(0)
        pos = m.end()
    if pos < len(fmt):
        yield False, fmt[pos:]


def has_sequence(fmt: str) -> bool:
    return any(p in (fmt or "") for p in SEQUENCE_PLACEHOLDERS)


def validate(fmt: Optional[str]) -> FormatValidation:
    errors: list[str] = []

    if not fmt or not fmt.strip():
        return FormatValidation(valid=False, errors=["Format cannot be empty"])

    if not has_sequence(fmt):
        errors.append("Format must include at least one sequence placeholder ({###} or {####})")

    for placeholder in _PLACEHOLDER_RE.findall(fmt):
        if placeholder not in VALID_PLACEHOLDERS:
            errors.append(
                f"Invalid placeholder: {placeholder}. Valid placeholders are: {', '.join(VALID_PLACEHOLDERS)}"
            )

    if fmt.count("{") != fmt.count("}"):
        errors.append("Unbalanced braces in format")

    return FormatValidation(valid=not errors, errors=errors)


def _date_values(year: int, month: int, day: int) -> dict[str, str]:
    return {
        YEAR: f"{year:04d}",
        SHORT_YEAR: f"{year % 100:02d}",
        MONTH: f"{month:02d}",
        DAY: f"{day:02d}",
    }


def _code(value: Optional[str], width: int) -> str:
    # Whitespace is dropped so codes always match the \S wildcards.
    return re.sub(r"\s+", "", value or "").upper()[:width]


def _rendered_values(context: EmployeeIdContext, today: date) -> dict[str, str]:
    sequence = context.sequence or 1
    if sequence < 0:
        raise ValidationError("Sequence number cannot be negative")

    values = _date_values(context.year or today.year, context.month or today.month, context.day or today.day)
    values.update(
        {
            SEQ3: str(sequence).zfill(3),
            SEQ4: str(sequence).zfill(4),
            DEPT: _code(context.department, 3),
            LOC: _code(context.location, 2),
            TYPE: _code(context.employee_type, 3) or "EMP",
        }
    )
    return values


def generate(fmt: str, context: Optional[EmployeeIdContext] = None, *, today: Optional[date] = None) -> str:
    """Render an identifier.

    Date placeholders come from ``context`` when set, otherwise from
    ``today`` (default: the current local date).
    """

    result = validate(fmt)
    if not result.valid:
        raise EmployeeIdFormatError(result.errors)

    values = _rendered_values(context or EmployeeIdContext(), today or date.today())
    return "".join(values[text] if is_ph else text for is_ph, text in _tokens(fmt))


def preview(fmt: str) -> str:
    try:
        return generate(fmt, SAMPLE_CONTEXT)
    except ValidationError:
        return INVALID_FORMAT


def preview_many(fmt: str, count: int = 5) -> list[str]:
    out: list[str] = []
    for i in range(1, count + 1):
        ctx = EmployeeIdContext(sequence=i, department="HR", location="NY", employee_type="EMP")
        try:
            out.append(generate(fmt, ctx))
        except ValidationError:
            out.append(INVALID_FORMAT)
    return out


def _period_regex(fmt: str, today: date) -> re.Pattern:
    literals = _date_values(today.year, today.month, today.day)
    parts: list[str] = []
    captured = False
    for is_ph, text in _tokens(fmt):
        if not is_ph:
            parts.append(re.escape(text))
        elif text in literals:
            parts.append(re.escape(literals[text]))
        elif text in _SEQUENCE_PATTERNS:
            pattern = _SEQUENCE_PATTERNS[text]
            parts.append(f"(?P<seq>{pattern})" if not captured else f"(?:{pattern})")
            captured = True
        elif text in _TEXT_PATTERNS:
            parts.append(f"(?:{_TEXT_PATTERNS[text]})")
        else:
            parts.append(re.escape(text))
    return re.compile("^" + "".join(parts) + "$")


def next_sequence(fmt: str, existing_ids: Iterable[str], today: Optional[date] = None) -> int:
    """One more than the highest sequence used in the current period.

    Date placeholders are pinned to ``today`` so identifiers from another
    year/month/day do not count. Returns 1 when nothing matches or when the
    format has no sequence placeholder.
    """

    if not has_sequence(fmt):
        return 1

    regex = _period_regex(fmt, today or date.today())
    highest = 0
    for employee_id in existing_ids:
        m = regex.match(employee_id or "")
        if m:
            highest = max(highest, int(m.group("seq")))
    return highest + 1


def _parse_regex(fmt: str) -> tuple[re.Pattern, list[str]]:
    parts: list[str] = []
    seen: list[str] = []
    for is_ph, text in _tokens(fmt):
        if not is_ph or text not in _GROUP_NAMES:
            parts.append(re.escape(text))
            continue
        name = _GROUP_NAMES[text]
        if name in seen:
            parts.append(f"(?P={name})")
        else:
            parts.append(f"(?P<{name}>{_PARSE_PATTERNS[text]})")
            seen.append(name)
    return re.compile("^" + "".join(parts) + "$"), seen


def parse(employee_id: str, fmt: str) -> EmployeeIdContext:
    """Recover the context an identifier was generated from.

    Groups are named after the placeholder that produced them, so the order
    of placeholders in ``fmt`` does not matter. A repeated placeholder must
    carry the same value everywhere. Returns an empty context when
    ``employee_id`` does not match ``fmt``.
    """

    if not fmt or not employee_id:
        return EmployeeIdContext()

    regex, names = _parse_regex(fmt)
    m = regex.match(employee_id)
    if not m:
        return EmployeeIdContext()

    groups = m.groupdict()

    def as_int(name: str) -> Optional[int]:
        return int(groups[name]) if groups.get(name) else None

    year = as_int("yyyy")
    if year is None and groups.get("yy"):
        year = 2000 + int(groups["yy"])

    sequence = None
    for name in names:
        if name in ("seq3", "seq4"):
            sequence = as_int(name)
            break

    return EmployeeIdContext(
        year=year,
        month=as_int("mm"),
        day=as_int("dd"),
        sequence=sequence,
        department=groups.get("dept"),
        location=groups.get("loc"),
        employee_type=groups.get("type"),
    )


def format_variables_help() -> list[dict]:
    return [
        {"placeholder": YEAR, "description": "Full year (4 digits)", "example": "2024"},
        {"placeholder": SHORT_YEAR, "description": "Short year (2 digits)", "example": "24"},
        {"placeholder": MONTH, "description": "Month (01-12)", "example": "01"},
        {"placeholder": DAY, "description": "Day (01-31)", "example": "15"},
        {"placeholder": SEQ3, "description": "Sequential number (3 digits)", "example": "001"},
        {"placeholder": SEQ4, "description": "Sequential number (4 digits)", "example": "0001"},
        {"placeholder": DEPT, "description": "Department code (3 chars)", "example": "HR"},
        {"placeholder": LOC, "description": "Location code (2 chars)", "example": "NY"},
        {"placeholder": TYPE, "description": "Employee type (3 chars)", "example": "EMP"},
    ]
