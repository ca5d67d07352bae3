"""
ICL Engine - Custom Exceptions

This module defines the exception hierarchy raised by the X9 codec, the
structural validator and the configuration layer.
"""

from typing import Any, Dict, Optional


class ICLException(Exception):
    """Base exception for all ICL Engine errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "ICL_ERROR"
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (Code: {self.error_code}, Context: {self.context})"
        return f"{self.message} (Code: {self.error_code})"


class ConfigurationException(ICLException):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            error_code="CONFIG_ERROR",
            context={"config_key": config_key} if config_key else {},
        )


class FieldError(ICLException):
    """
    A single record field failed a character-class, enumeration or
    inclusion check.

    Rendered as ``FieldName Value Msg``, e.g.
    ``PayorBankRoutingNumber 0313A001 has non numeric characters``.
    """

    def __init__(self, field_name: str, value: Any, msg: str):
        self.field_name = field_name
        self.value = "" if value is None else str(value)
        self.msg = msg
        super().__init__(
            f"{field_name} {self.value} {msg}",
            error_code="FIELD_ERROR",
            context={"field_name": field_name, "value": self.value},
        )

    def __str__(self) -> str:
        return f"{self.field_name} {self.value} {self.msg}"


class BundleError(ICLException):
    """A cross-record invariant inside one bundle failed."""

    def __init__(self, bundle_sequence_number: str, field_name: str, msg: str):
        self.bundle_sequence_number = bundle_sequence_number
        self.field_name = field_name
        self.msg = msg
        super().__init__(
            f"BundleNumber {bundle_sequence_number} {field_name} {msg}",
            error_code="BUNDLE_ERROR",
            context={
                "bundle_sequence_number": bundle_sequence_number,
                "field_name": field_name,
            },
        )

    def __str__(self) -> str:
        return f"BundleNumber {self.bundle_sequence_number} {self.field_name} {self.msg}"


class CashLetterError(ICLException):
    """A cross-record invariant inside one cash letter failed."""

    def __init__(self, cash_letter_id: str, field_name: str, msg: str):
        self.cash_letter_id = cash_letter_id
        self.field_name = field_name
        self.msg = msg
        super().__init__(
            f"CashLetterID {cash_letter_id} {field_name} {msg}",
            error_code="CASH_LETTER_ERROR",
            context={"cash_letter_id": cash_letter_id, "field_name": field_name},
        )

    def __str__(self) -> str:
        return f"CashLetterID {self.cash_letter_id} {self.field_name} {self.msg}"


class FileError(ICLException):
    """Structural error: unexpected record sequence, short record or file control mismatch."""

    def __init__(self, field_name: str, msg: str, value: Any = ""):
        self.field_name = field_name
        self.value = "" if value is None else str(value)
        self.msg = msg
        super().__init__(
            f"{field_name} {self.value} {msg}",
            error_code="FILE_ERROR",
            context={"field_name": field_name},
        )

    def __str__(self) -> str:
        if self.value:
            return f"{self.field_name} {self.value} {self.msg}"
        return f"{self.field_name} {self.msg}"


class ParseError(ICLException):
    """
    Raised by the reader when a record cannot be accepted.

    Wraps the underlying field, bundle, cash letter or file error together
    with the record position where reading stopped.
    """

    def __init__(
        self,
        err: ICLException,
        line_number: Optional[int] = None,
        record_name: Optional[str] = None,
    ):
        self.err = err
        self.line_number = line_number
        self.record_name = record_name
        super().__init__(
            str(err),
            error_code="PARSE_ERROR",
            context={"line_number": line_number, "record_name": record_name},
        )

    def __str__(self) -> str:
        if self.record_name:
            return f"line:{self.line_number} record:{self.record_name} {type(self.err).__name__} {self.err}"
        return f"line:{self.line_number} {type(self.err).__name__} {self.err}"
