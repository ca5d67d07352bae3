"""
X9 Record Base

Every record type is a dataclass whose LAYOUT lists its fields in column
order. Parsing slices each field out of the line, formatting concatenates
them back (blank-filling the reserved gaps), and validation runs the
record's inclusion checks followed by its field checks in positional order,
stopping at the first FieldError.
"""

import base64
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Callable, ClassVar, Dict, Optional, Tuple

from icl_engine.core.exceptions import FieldError
from icl_engine.protocols.x9.encoding import ASCII, CharacterCodec
from icl_engine.protocols.x9.fields import FieldKind, FieldSpec, alpha_field
from icl_engine.protocols.x9.options import ICLOptions
from icl_engine.protocols.x9.validators import FieldValidator, msg_record_type


def date_to_json(value: Optional[date]) -> str:
    """RFC 3339 rendering of a calendar date; empty when unset."""
    if value is None:
        return ""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}T00:00:00Z"


def date_from_json(value: Any) -> Optional[date]:
    """Accepts RFC 3339 timestamps, ISO dates and YYYYMMDD."""
    if not value:
        return None
    if isinstance(value, date):
        return value
    text = str(value)
    if len(text) == 8 and text.isdigit():
        return datetime.strptime(text, "%Y%m%d").date()
    return date.fromisoformat(text[:10])


def time_to_json(value: Optional[time]) -> str:
    if value is None:
        return ""
    return f"{value.hour:02d}:{value.minute:02d}"


def time_from_json(value: Any) -> Optional[time]:
    """Accepts HH:MM, HH:MM:SS, HHMM or an RFC 3339 timestamp."""
    if not value:
        return None
    if isinstance(value, time):
        return value
    text = str(value)
    if "T" in text:
        text = text.split("T", 1)[1]
    if len(text) == 4 and text.isdigit():
        return time(int(text[:2]), int(text[2:]))
    return time(int(text[0:2]), int(text[3:5]))


def bytes_to_json(value: bytes) -> str:
    return base64.b64encode(value).decode("ascii")


def bytes_from_json(value: Any) -> bytes:
    if not value:
        return b""
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return base64.b64decode(value)


_TO_JSON = {
    FieldKind.DATE: date_to_json,
    FieldKind.TIME: time_to_json,
}

_FROM_JSON = {
    FieldKind.NUMERIC: lambda value: int(value or 0),
    FieldKind.ALPHA: lambda value: "" if value is None else str(value),
    FieldKind.STRING: lambda value: "" if value is None else str(value),
    FieldKind.NBSM: lambda value: "" if value is None else str(value),
    FieldKind.DATE: date_from_json,
    FieldKind.TIME: time_from_json,
}


@dataclass
class X9Record:
    """
    Base for all X9.100-187 records.

    Subclasses declare RECORD_TYPE, RECORD_LENGTH and LAYOUT and implement
    field_inclusion() and validate_fields(). VARIABLE_LENGTH records carry
    payloads after RECORD_LENGTH and check their own declared lengths.
    """

    RECORD_TYPE: ClassVar[str] = ""
    RECORD_LENGTH: ClassVar[int] = 80
    MIN_LENGTH: ClassVar[int] = 80
    VARIABLE_LENGTH: ClassVar[bool] = False
    LAYOUT: ClassVar[Tuple[FieldSpec, ...]] = ()

    record_type: str = field(default="", repr=False)

    def __post_init__(self):
        if not self.record_type:
            self.record_type = self.RECORD_TYPE

    @classmethod
    def record_name(cls) -> str:
        return cls.__name__

    # Codec

    def parse(self, line: str) -> None:
        """Populate fields from a decoded line; a short line is left unparsed."""
        if len(line) < self.MIN_LENGTH:
            return
        self.parse_fields(line)

    def parse_fields(self, line: str) -> None:
        self.record_type = self.RECORD_TYPE
        for spec in self.LAYOUT:
            setattr(self, spec.attr, spec.parse(line))

    def format(self) -> str:
        """Render the fixed-width line, blank-filling reserved columns."""
        parts = [alpha_field(self.record_type, 2)]
        position = 3
        for spec in self.LAYOUT:
            if spec.start > position:
                parts.append(" " * (spec.start - position))
            parts.append(spec.format(getattr(self, spec.attr)))
            position = spec.end + 1
        if position <= self.RECORD_LENGTH:
            parts.append(" " * (self.RECORD_LENGTH - position + 1))
        return "".join(parts)

    def parse_raw(self, raw: bytes, codec: CharacterCodec = ASCII) -> None:
        """Populate fields from on-wire bytes."""
        self.parse(codec.decode(raw))

    def to_raw(self, codec: CharacterCodec = ASCII) -> bytes:
        """On-wire bytes for this record."""
        return codec.encode(self.format())

    @classmethod
    def read_wire(cls, head: bytes, read_exact: Callable[[int], bytes], codec: CharacterCodec = ASCII) -> bytes:
        """
        Read the rest of one fixed-framing record whose first bytes are head.

        Fixed-width records take RECORD_LENGTH bytes; records with
        variable payloads override this to follow their declared lengths.
        """
        return head + read_exact(cls.RECORD_LENGTH - len(head))

    @classmethod
    def from_line(cls, line: str) -> "X9Record":
        record = cls()
        record.parse(line)
        return record

    def __str__(self) -> str:
        return self.format()

    # Validation

    def validate(self, options: Optional[ICLOptions] = None) -> None:
        """
        Run X9 format rule checks.

        Raises the first FieldError encountered; inclusion checks run
        before field checks, and numeric fields must be non-negative and
        fit their columns.
        """
        v = FieldValidator(options)
        self.field_inclusion(v)
        if self.record_type != self.RECORD_TYPE:
            raise FieldError("recordType", self.record_type, msg_record_type(self.RECORD_TYPE))
        for spec in self.LAYOUT:
            if spec.kind is FieldKind.NUMERIC:
                v.non_negative(spec.label, getattr(self, spec.attr))
                v.fits_width(spec.label, getattr(self, spec.attr), spec.width)
        self.validate_fields(v)

    def field_inclusion(self, v: FieldValidator) -> None:
        if self.record_type == "":
            v.required("recordType", self.record_type, f", did you use {self.record_name()}()?")

    def validate_fields(self, v: FieldValidator) -> None:
        pass

    def label(self, attr: str) -> str:
        for spec in self.LAYOUT:
            if spec.attr == attr:
                return spec.label
        raise KeyError(attr)

    # JSON boundary

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for spec in self.LAYOUT:
            value = getattr(self, spec.attr)
            converter = _TO_JSON.get(spec.kind)
            result[spec.json_name] = converter(value) if converter else value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "X9Record":
        record = cls()
        for spec in cls.LAYOUT:
            if spec.json_name in data:
                setattr(record, spec.attr, _FROM_JSON[spec.kind](data[spec.json_name]))
        return record
