"""
X9 Field Primitives

Fixed-width field formatting and parsing shared by every record layout:

- numeric: right-aligned, zero-padded integers
- alpha: left-aligned, blank-padded text
- string: left-zero-padded text (routing numbers)
- nbsm: right-aligned, blank-padded MICR on-us / auxiliary on-us
- YYYYMMDD dates and HHMM times

A FieldSpec names one field of a record layout by its 1-based inclusive
column range, the way the X9.100-187 record tables list them.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional

BLANK_DATE = " " * 8

_ACRONYMS = {
    "bofd": "BOFD",
    "ece": "ECE",
    "id": "ID",
    "micr": "MICR",
    "pod": "POD",
}


def numeric_field(value: int, width: int) -> str:
    """Zero-pad an integer; a longer value keeps its rightmost digits."""
    if value < 0:
        raise ValueError(f"negative value {value} cannot be formatted")
    s = str(value)
    if len(s) > width:
        return s[len(s) - width:]
    return s.rjust(width, "0")


def alpha_field(value: str, width: int) -> str:
    """Left-align and blank-pad; a longer value is truncated."""
    if len(value) > width:
        return value[:width]
    return value.ljust(width, " ")


def string_field(value: str, width: int) -> str:
    """Zero-pad on the left; a longer value is truncated."""
    if len(value) > width:
        return value[:width]
    return value.rjust(width, "0")


def nbsm_field(value: str, width: int) -> str:
    """Right-align and blank-pad; a longer value keeps its rightmost characters."""
    if len(value) > width:
        return value[len(value) - width:]
    return value.rjust(width, " ")


def parse_num_field(value: str) -> int:
    """Integer value of a numeric field; 0 when empty or not a number."""
    value = value.strip()
    if not value.isdigit() or not value.isascii():
        return 0
    return int(value)


def parse_string_field(value: str) -> str:
    """Left-aligned text field without its trailing blanks."""
    return value.rstrip(" ")


def parse_nbsm_field(value: str) -> str:
    """Right-aligned text field without its leading blanks."""
    return value.lstrip(" ")


def parse_yyyymmdd_date(value: str) -> Optional[date]:
    """Strict YYYYMMDD; None when blank, all zeros or invalid."""
    if len(value) != 8 or not value.isdigit():
        return None
    try:
        return datetime.strptime(value, "%Y%m%d").date()
    except ValueError:
        return None


def format_yyyymmdd_date(value: Optional[date]) -> str:
    if value is None:
        return BLANK_DATE
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def parse_simple_time(value: str) -> Optional[time]:
    """HHMM wall time; None when blank or invalid."""
    if len(value) != 4 or not value.isdigit():
        return None
    hour, minute = int(value[:2]), int(value[2:])
    if hour > 23 or minute > 59:
        return None
    return time(hour, minute)


def format_simple_time(value: Optional[time]) -> str:
    if value is None:
        return "0000"
    return f"{value.hour:02d}{value.minute:02d}"


def field_label(attr: str) -> str:
    """Standard field name for an attribute, e.g. bofd_indicator -> BOFDIndicator."""
    return "".join(_ACRONYMS.get(part, part.capitalize()) for part in attr.split("_"))


def json_name(attr: str) -> str:
    """camelCase JSON key for an attribute, e.g. cash_letter_id -> cashLetterID."""
    first, *rest = attr.split("_")
    return first + "".join(_ACRONYMS.get(part, part.capitalize()) for part in rest)


class FieldKind(Enum):
    """Wire representation of a fixed-width field."""

    NUMERIC = "numeric"
    ALPHA = "alpha"
    STRING = "string"
    NBSM = "nbsm"
    DATE = "date"
    TIME = "time"


_FORMATTERS = {
    FieldKind.NUMERIC: numeric_field,
    FieldKind.ALPHA: alpha_field,
    FieldKind.STRING: string_field,
    FieldKind.NBSM: nbsm_field,
    FieldKind.DATE: lambda value, width: format_yyyymmdd_date(value),
    FieldKind.TIME: lambda value, width: format_simple_time(value),
}

_PARSERS = {
    FieldKind.NUMERIC: parse_num_field,
    FieldKind.ALPHA: parse_string_field,
    FieldKind.STRING: parse_string_field,
    FieldKind.NBSM: parse_nbsm_field,
    FieldKind.DATE: parse_yyyymmdd_date,
    FieldKind.TIME: parse_simple_time,
}

_DEFAULTS = {
    FieldKind.NUMERIC: 0,
    FieldKind.ALPHA: "",
    FieldKind.STRING: "",
    FieldKind.NBSM: "",
    FieldKind.DATE: None,
    FieldKind.TIME: None,
}


@dataclass(frozen=True)
class FieldSpec:
    """One field of a record layout (columns are 1-based and inclusive)."""

    attr: str
    start: int
    end: int
    kind: FieldKind = FieldKind.ALPHA

    @property
    def width(self) -> int:
        return self.end - self.start + 1

    @property
    def label(self) -> str:
        return field_label(self.attr)

    @property
    def json_name(self) -> str:
        return json_name(self.attr)

    @property
    def default(self) -> Any:
        return _DEFAULTS[self.kind]

    def slice(self, line: str) -> str:
        return line[self.start - 1:self.end]

    def parse(self, line: str) -> Any:
        return _PARSERS[self.kind](self.slice(line))

    def format(self, value: Any) -> str:
        return _FORMATTERS[self.kind](value, self.width)
