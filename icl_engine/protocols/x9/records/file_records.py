"""
File Header (01) and File Control (99) Records
"""

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from icl_engine.protocols.x9.fields import FieldKind, FieldSpec
from icl_engine.protocols.x9.records.base import X9Record
from icl_engine.protocols.x9.validators import (
    MSG_COMPANION_DOCUMENT_INDICATOR,
    MSG_CREDIT_TOTAL_INDICATOR,
    MSG_RESEND_INDICATOR,
    MSG_STANDARD_LEVEL,
    MSG_TEST_INDICATOR,
    FieldValidator,
)
from icl_engine.protocols.x9.x9_codes import (
    COMPANION_DOCUMENT_CA,
    COMPANION_DOCUMENT_US,
    CreditTotalIndicator,
    ResendIndicator,
    StandardLevel,
    TestFileIndicator,
)

N, A, S, D, T = FieldKind.NUMERIC, FieldKind.ALPHA, FieldKind.STRING, FieldKind.DATE, FieldKind.TIME


@dataclass
class FileHeader(X9Record):
    """
    File Header Record (Type 01).

    Identifies the sender and receiver of the file and when it was created.
    """

    RECORD_TYPE = "01"
    LAYOUT = (
        FieldSpec("standard_level", 3, 4, A),
        FieldSpec("test_file_indicator", 5, 5, A),
        FieldSpec("immediate_destination", 6, 14, S),
        FieldSpec("immediate_origin", 15, 23, S),
        FieldSpec("file_creation_date", 24, 31, D),
        FieldSpec("file_creation_time", 32, 35, T),
        FieldSpec("resend_indicator", 36, 36, A),
        FieldSpec("immediate_destination_name", 37, 54, A),
        FieldSpec("immediate_origin_name", 55, 72, A),
        FieldSpec("file_id_modifier", 73, 73, A),
        FieldSpec("country_code", 74, 75, A),
        FieldSpec("user_field", 76, 79, A),
        FieldSpec("companion_document_indicator", 80, 80, A),
    )

    standard_level: str = StandardLevel.X9_100_187_2013.code
    test_file_indicator: str = ""  # T or P
    immediate_destination: str = ""  # 9-digit routing number
    immediate_origin: str = ""  # 9-digit routing number
    file_creation_date: Optional[date] = None
    file_creation_time: Optional[time] = None
    resend_indicator: str = ""  # Y or N
    immediate_destination_name: str = ""  # 18 chars
    immediate_origin_name: str = ""  # 18 chars
    file_id_modifier: str = ""
    country_code: str = ""
    user_field: str = ""
    companion_document_indicator: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("StandardLevel", self.standard_level)
        v.required("TestFileIndicator", self.test_file_indicator)
        v.required("ResendIndicator", self.resend_indicator)
        v.required_routing_number("ImmediateDestination", self.immediate_destination)
        v.required_routing_number("ImmediateOrigin", self.immediate_origin)
        v.required("FileCreationDate", self.file_creation_date)
        v.required("FileCreationTime", self.file_creation_time)

    def validate_fields(self, v: FieldValidator) -> None:
        v.one_of("StandardLevel", self.standard_level, StandardLevel.codes(), MSG_STANDARD_LEVEL)
        v.one_of("TestFileIndicator", self.test_file_indicator, TestFileIndicator.codes(), MSG_TEST_INDICATOR)
        v.numeric("ImmediateDestination", self.immediate_destination)
        v.numeric("ImmediateOrigin", self.immediate_origin)
        v.one_of("ResendIndicator", self.resend_indicator, ResendIndicator.codes(), MSG_RESEND_INDICATOR)
        v.alphanumeric_special("ImmediateDestinationName", self.immediate_destination_name)
        v.alphanumeric_special("ImmediateOriginName", self.immediate_origin_name)
        v.alphanumeric("FileIDModifier", self.file_id_modifier)
        v.alphanumeric("CountryCode", self.country_code)
        v.alphanumeric_special("UserField", self.user_field)
        if self.companion_document_indicator != "":
            allowed = COMPANION_DOCUMENT_CA if self.country_code == "CA" else COMPANION_DOCUMENT_US
            v.one_of(
                "CompanionDocumentIndicator",
                self.companion_document_indicator,
                allowed,
                MSG_COMPANION_DOCUMENT_INDICATOR,
            )


@dataclass
class FileControl(X9Record):
    """
    File Control Record (Type 99).

    Totals for the whole file; computed by ICLFile.build().
    """

    RECORD_TYPE = "99"
    LAYOUT = (
        FieldSpec("cash_letter_count", 3, 8, N),
        FieldSpec("total_record_count", 9, 16, N),
        FieldSpec("total_item_count", 17, 24, N),
        FieldSpec("file_total_amount", 25, 40, N),
        FieldSpec("immediate_origin_contact_name", 41, 54, A),
        FieldSpec("immediate_origin_contact_phone_number", 55, 64, A),
        FieldSpec("credit_total_indicator", 65, 65, N),
    )

    cash_letter_count: int = 0
    total_record_count: int = 0
    total_item_count: int = 0
    file_total_amount: int = 0  # minor units
    immediate_origin_contact_name: str = ""
    immediate_origin_contact_phone_number: str = ""
    credit_total_indicator: int = 0

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("CashLetterCount", self.cash_letter_count)
        v.required("TotalRecordCount", self.total_record_count)

    def validate_fields(self, v: FieldValidator) -> None:
        v.alphanumeric_special("ImmediateOriginContactName", self.immediate_origin_contact_name)
        v.numeric("ImmediateOriginContactPhoneNumber", self.immediate_origin_contact_phone_number)
        v.one_of(
            "CreditTotalIndicator",
            self.credit_total_indicator,
            CreditTotalIndicator.codes(),
            MSG_CREDIT_TOTAL_INDICATOR,
        )
