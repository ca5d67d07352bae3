"""
X9 Field Validators

Character-class and defined-value predicates, the message texts carried by
FieldError, and FieldValidator, which applies them with the dialect and FRB
compatibility rules of an ICLOptions value.
"""

import re
from typing import Any, Iterable, Optional

from icl_engine.core.exceptions import FieldError
from icl_engine.protocols.x9.options import DEFAULT_OPTIONS, ICLOptions
from icl_engine.protocols.x9.x9_codes import (
    COMPANION_DOCUMENT_CA,
    COMPANION_DOCUMENT_US,
    AccountTypeCode,
    BOFDIndicator,
    CashLetterRecordTypeIndicator,
    CollectionTypeIndicator,
    CreditTotalIndicator,
    DocumentationTypeIndicator,
    EndorsementIndicator,
    OwnerIdentifierIndicator,
    ResendIndicator,
    ReturnsIndicator,
    SourceWorkCode,
    StandardLevel,
    TestFileIndicator,
)

MSG_FIELD_INCLUSION = "is a mandatory field and has a default value"
MSG_NUMERIC = "has non numeric characters"
MSG_ALPHANUMERIC = "has non alphanumeric characters"
MSG_ALPHANUMERIC_SPECIAL = "has non alphanumeric or special characters"
MSG_NBSM = "has characters not allowed in a MICR field"
MSG_INVALID = "has an invalid value"
MSG_NEGATIVE = "must not be negative"
MSG_LENGTH_MISMATCH = "does not match the length of %s"
MSG_LENGTH_EXCEEDED = "exceeds the maximum length of %d"
MSG_FIELD_WIDTH = "does not fit in %d digits"
MSG_DECLARED_LENGTH = "declared segments total %d bytes and the record has %d"

MSG_CREDIT_TOTAL_INDICATOR = "is an invalid Credit Total Indicator"
MSG_DOCUMENTATION_TYPE_INDICATOR = "is an invalid Documentation Type Indicator"
MSG_CORRECTION_INDICATOR = "is an invalid Correction Indicator"
MSG_STANDARD_LEVEL = "is an invalid Standard Level"
MSG_RESEND_INDICATOR = "is an invalid Resend Indicator"
MSG_TEST_INDICATOR = "is an invalid Test Indicator"
MSG_COMPANION_DOCUMENT_INDICATOR = "is an invalid Companion Document Indicator"
MSG_COLLECTION_TYPE = "is an invalid Collection Type Indicator"
MSG_RECORD_TYPE_INDICATOR = "is an invalid Cash Letter Record Type Indicator"
MSG_RETURNS_INDICATOR = "is an invalid Returns Indicator"
MSG_RETURN_ACCEPTANCE_INDICATOR = "is an invalid Return Acceptance Indicator"
MSG_MICR_VALID_INDICATOR = "is an invalid MICR Valid Indicator"
MSG_BOFD_INDICATOR = "is an invalid Bank Of First Deposit Indicator"
MSG_ARCHIVE_TYPE_INDICATOR = "is an invalid Archive Type Indicator"
MSG_TRUNCATION_INDICATOR = "is an invalid Truncation Indicator"
MSG_CONVERSION_INDICATOR = "is an invalid Conversion Indicator"
MSG_IMAGE_REFERENCE_KEY_INDICATOR = "is an invalid Image Reference Key Indicator"
MSG_ACCOUNT_TYPE_CODE = "is an invalid Account Type Code"
MSG_SOURCE_WORK_CODE = "is an invalid Source Work Code"
MSG_OWNER_IDENTIFIER_INDICATOR = "is an invalid Owner Identifier Indicator"
MSG_ENDORSEMENT_INDICATOR = "is an invalid Endorsement Indicator"


def msg_record_type(expected: str) -> str:
    return "received expecting %d" % int(expected)


# Printable ASCII accepted by the standard; the backtick is excluded
_NUMERIC_RE = re.compile(r"[^0-9]")
_ALPHANUMERIC_RE = re.compile(r"[^ a-zA-Z0-9]")
_ALPHANUMERIC_SPECIAL_RE = re.compile(r"[^ \w!\"#$%&'()*+,\-./:;<>=?@\[\\\]^{}|~]", re.ASCII)
_NBSM_RE = re.compile(r"[^ 0-9\-/*]")


def is_numeric(value: str) -> bool:
    return _NUMERIC_RE.search(value) is None


def is_alphanumeric(value: str) -> bool:
    return _ALPHANUMERIC_RE.search(value) is None


def is_alphanumeric_special(value: str) -> bool:
    return _ALPHANUMERIC_SPECIAL_RE.search(value) is None


def is_nbsm(value: str) -> bool:
    """Digits, blanks and the MICR dash, on-us and asterisk symbols."""
    return _NBSM_RE.search(value) is None


def is_credit_total_indicator(value: Any) -> bool:
    return str(value) in CreditTotalIndicator.codes()


def is_collection_type_indicator(value: str) -> bool:
    return value in CollectionTypeIndicator.codes()


def is_record_type_indicator(value: str) -> bool:
    return value in CashLetterRecordTypeIndicator.codes()


def is_documentation_type_indicator(value: str) -> bool:
    return value in DocumentationTypeIndicator.codes()


def is_returns_indicator(value: str) -> bool:
    return value in ReturnsIndicator.codes()


def is_standard_level(value: str) -> bool:
    return value in StandardLevel.codes()


def is_test_file_indicator(value: str) -> bool:
    return value in TestFileIndicator.codes()


def is_resend_indicator(value: str) -> bool:
    return value in ResendIndicator.codes()


def is_bofd_indicator(value: str) -> bool:
    return value in BOFDIndicator.codes()


def is_companion_document_indicator_us(value: str) -> bool:
    return value in COMPANION_DOCUMENT_US


def is_companion_document_indicator_ca(value: str) -> bool:
    return value in COMPANION_DOCUMENT_CA


def is_account_type_code(value: str) -> bool:
    return value in AccountTypeCode.codes()


def is_source_work_code(value: str) -> bool:
    if value in SourceWorkCode.codes():
        return True
    return len(value) == 2 and value.isdigit() and 21 <= int(value) <= 50


def is_owner_identifier_indicator(value: Any) -> bool:
    return str(value) in OwnerIdentifierIndicator.codes()


def is_endorsement_indicator(value: Any) -> bool:
    return str(value) in EndorsementIndicator.codes()


class FieldValidator:
    """
    Applies field checks for one record and raises the first FieldError.

    Constructed with the ICLOptions of the reader, writer or caller so the
    FRB compatibility and DSTU relaxations are decided here rather than by
    each record.
    """

    def __init__(self, options: Optional[ICLOptions] = None):
        self.options = options or DEFAULT_OPTIONS

    @property
    def frb_compatibility_mode(self) -> bool:
        return self.options.frb_compatibility_mode

    @property
    def dstu(self) -> bool:
        return self.options.is_dstu

    # Inclusion

    def required(self, label: str, value: Any, hint: str = "") -> None:
        if value is None or value == "" or value == 0:
            raise FieldError(label, value, MSG_FIELD_INCLUSION + hint)

    def required_routing_number(
        self, label: str, value: str, zero_allowed: bool = False, hint: str = ""
    ) -> None:
        """Routing numbers are present and not all zeros unless zero_allowed."""
        if value == "":
            raise FieldError(label, value, MSG_FIELD_INCLUSION + hint)
        if not zero_allowed and value.strip("0") == "":
            raise FieldError(label, value, MSG_FIELD_INCLUSION + hint)

    def relaxed_routing_zero(self) -> bool:
        """ReturnLocation and EndorsingBank routing numbers may be zeros."""
        return self.frb_compatibility_mode or self.dstu

    # Character classes

    def numeric(self, label: str, value: str) -> None:
        if not is_numeric(value):
            raise FieldError(label, value, MSG_NUMERIC)

    def alphanumeric(self, label: str, value: str) -> None:
        if not is_alphanumeric(value):
            raise FieldError(label, value, MSG_ALPHANUMERIC)

    def alphanumeric_special(self, label: str, value: str) -> None:
        if not is_alphanumeric_special(value):
            raise FieldError(label, value, MSG_ALPHANUMERIC_SPECIAL)

    def nbsm(self, label: str, value: str) -> None:
        if not is_nbsm(value):
            raise FieldError(label, value, MSG_NBSM)

    # Defined values

    def one_of(self, label: str, value: Any, allowed: Iterable[str], msg: str = MSG_INVALID) -> None:
        if str(value) not in allowed:
            raise FieldError(label, value, msg)

    def optional_one_of(
        self, label: str, value: str, allowed: Iterable[str], msg: str = MSG_INVALID
    ) -> None:
        if value != "":
            self.one_of(label, value, allowed, msg)

    def non_negative(self, label: str, value: int) -> None:
        if value < 0:
            raise FieldError(label, value, MSG_NEGATIVE)

    def fits_width(self, label: str, value: int, width: int) -> None:
        if len(str(value)) > width:
            raise FieldError(label, value, MSG_FIELD_WIDTH % width)

    def payload_length(
        self, label: str, declared: int, actual: int, payload_label: str, width: Optional[int] = None
    ) -> None:
        """
        Declared length is bounded by max_payload_length and by the digits
        of its length field, and equals the payload length.
        """
        limit = self.options.max_payload_length
        if width is not None:
            limit = min(limit, 10 ** width - 1)
        if declared > limit:
            raise FieldError(label, declared, MSG_LENGTH_EXCEEDED % limit)
        if declared != actual:
            raise FieldError(label, declared, MSG_LENGTH_MISMATCH % payload_label)

    def truncation_indicator(self, label: str, value: str, allowed: Iterable[str], msg: str) -> None:
        """Empty is accepted under FRB compatibility mode."""
        if value == "" and self.frb_compatibility_mode:
            return
        self.one_of(label, value, allowed, msg)
