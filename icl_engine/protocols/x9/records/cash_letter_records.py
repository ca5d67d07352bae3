"""
Cash Letter Records

Cash Letter Header (10), Credit (61), Credit Item (62), Routing Number
Summary (85) and Cash Letter Control (90).
"""

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from icl_engine.core.exceptions import FieldError
from icl_engine.protocols.x9.fields import FieldKind, FieldSpec
from icl_engine.protocols.x9.records.base import X9Record
from icl_engine.protocols.x9.validators import (
    MSG_ACCOUNT_TYPE_CODE,
    MSG_COLLECTION_TYPE,
    MSG_CREDIT_TOTAL_INDICATOR,
    MSG_DOCUMENTATION_TYPE_INDICATOR,
    MSG_INVALID,
    MSG_RECORD_TYPE_INDICATOR,
    MSG_RETURNS_INDICATOR,
    MSG_SOURCE_WORK_CODE,
    FieldValidator,
    is_source_work_code,
)
from icl_engine.protocols.x9.x9_codes import (
    AccountTypeCode,
    CashLetterRecordTypeIndicator,
    CollectionTypeIndicator,
    CreditTotalIndicator,
    DocumentationTypeIndicator,
    ReturnsIndicator,
)

N, A, S, B, D, T = (
    FieldKind.NUMERIC,
    FieldKind.ALPHA,
    FieldKind.STRING,
    FieldKind.NBSM,
    FieldKind.DATE,
    FieldKind.TIME,
)


@dataclass
class CashLetterHeader(X9Record):
    """
    Cash Letter Header Record (Type 10).

    Opens a cash letter: one business day's exchange between an ECE
    institution and a destination.
    """

    RECORD_TYPE = "10"
    LAYOUT = (
        FieldSpec("collection_type_indicator", 3, 4, A),
        FieldSpec("destination_routing_number", 5, 13, S),
        FieldSpec("ece_institution_routing_number", 14, 22, S),
        FieldSpec("cash_letter_business_date", 23, 30, D),
        FieldSpec("cash_letter_creation_date", 31, 38, D),
        FieldSpec("cash_letter_creation_time", 39, 42, T),
        FieldSpec("record_type_indicator", 43, 43, A),
        FieldSpec("documentation_type_indicator", 44, 44, A),
        FieldSpec("cash_letter_id", 45, 52, A),
        FieldSpec("originator_contact_name", 53, 66, A),
        FieldSpec("originator_contact_phone_number", 67, 76, A),
        FieldSpec("fed_work_type", 77, 77, A),
        FieldSpec("returns_indicator", 78, 78, A),
        FieldSpec("user_field", 79, 79, A),
    )

    collection_type_indicator: str = ""
    destination_routing_number: str = ""
    ece_institution_routing_number: str = ""
    cash_letter_business_date: Optional[date] = None
    cash_letter_creation_date: Optional[date] = None
    cash_letter_creation_time: Optional[time] = None
    record_type_indicator: str = ""  # N, E, I or F
    documentation_type_indicator: str = ""
    cash_letter_id: str = ""  # unique within the file
    originator_contact_name: str = ""
    originator_contact_phone_number: str = ""
    fed_work_type: str = ""
    returns_indicator: str = ""
    user_field: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("CollectionTypeIndicator", self.collection_type_indicator)
        v.required_routing_number("DestinationRoutingNumber", self.destination_routing_number)
        v.required_routing_number("ECEInstitutionRoutingNumber", self.ece_institution_routing_number)
        v.required("CashLetterBusinessDate", self.cash_letter_business_date)
        v.required("CashLetterCreationDate", self.cash_letter_creation_date)
        v.required("CashLetterCreationTime", self.cash_letter_creation_time)
        v.required("RecordTypeIndicator", self.record_type_indicator)
        v.required("CashLetterID", self.cash_letter_id)

    def validate_fields(self, v: FieldValidator) -> None:
        v.one_of(
            "CollectionTypeIndicator",
            self.collection_type_indicator,
            CollectionTypeIndicator.codes(),
            MSG_COLLECTION_TYPE,
        )
        v.numeric("DestinationRoutingNumber", self.destination_routing_number)
        v.numeric("ECEInstitutionRoutingNumber", self.ece_institution_routing_number)
        v.one_of(
            "RecordTypeIndicator",
            self.record_type_indicator,
            CashLetterRecordTypeIndicator.codes(),
            MSG_RECORD_TYPE_INDICATOR,
        )
        v.optional_one_of(
            "DocumentationTypeIndicator",
            self.documentation_type_indicator,
            DocumentationTypeIndicator.codes(),
            MSG_DOCUMENTATION_TYPE_INDICATOR,
        )
        v.alphanumeric("CashLetterID", self.cash_letter_id)
        v.alphanumeric_special("OriginatorContactName", self.originator_contact_name)
        v.numeric("OriginatorContactPhoneNumber", self.originator_contact_phone_number)
        v.alphanumeric("FedWorkType", self.fed_work_type)
        v.one_of("ReturnsIndicator", self.returns_indicator, ReturnsIndicator.codes(), MSG_RETURNS_INDICATOR)
        v.alphanumeric_special("UserField", self.user_field)


@dataclass
class Credit(X9Record):
    """
    Credit Record (Type 61).

    A deposit credit used under Federal Reserve clearing arrangements.
    Records of 77 to 79 characters are accepted on read; the reserved
    columns 78-80 are always written, so output is 80 characters.
    """

    RECORD_TYPE = "61"
    MIN_LENGTH = 77
    LAYOUT = (
        FieldSpec("auxiliary_on_us", 3, 17, B),
        FieldSpec("external_processing_code", 18, 18, A),
        FieldSpec("payor_bank_routing_number", 19, 27, S),
        FieldSpec("credit_account_number_on_us", 28, 47, B),
        FieldSpec("item_amount", 48, 57, N),
        FieldSpec("ece_institution_item_sequence_number", 58, 72, A),
        FieldSpec("documentation_type_indicator", 73, 73, A),
        FieldSpec("account_type_code", 74, 74, A),
        FieldSpec("source_work_code", 75, 75, A),
        FieldSpec("work_type", 76, 76, A),
        FieldSpec("debit_credit_indicator", 77, 77, A),
    )

    auxiliary_on_us: str = ""
    external_processing_code: str = ""
    payor_bank_routing_number: str = ""
    credit_account_number_on_us: str = ""
    item_amount: int = 0
    ece_institution_item_sequence_number: str = ""
    documentation_type_indicator: str = ""
    account_type_code: str = ""
    source_work_code: str = ""
    work_type: str = ""
    debit_credit_indicator: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required_routing_number("PayorBankRoutingNumber", self.payor_bank_routing_number)
        v.required("CreditAccountNumberOnUs", self.credit_account_number_on_us)
        v.required("ItemAmount", self.item_amount)

    def validate_fields(self, v: FieldValidator) -> None:
        if "/" in self.auxiliary_on_us or "\\" in self.auxiliary_on_us:
            raise FieldError("AuxiliaryOnUs", self.auxiliary_on_us, MSG_INVALID)
        v.nbsm("AuxiliaryOnUs", self.auxiliary_on_us)
        v.alphanumeric_special("ExternalProcessingCode", self.external_processing_code)
        v.numeric("PayorBankRoutingNumber", self.payor_bank_routing_number)
        v.nbsm("CreditAccountNumberOnUs", self.credit_account_number_on_us)
        v.numeric("ECEInstitutionItemSequenceNumber", self.ece_institution_item_sequence_number)
        v.optional_one_of("DocumentationTypeIndicator", self.documentation_type_indicator, ("G",),
                          MSG_DOCUMENTATION_TYPE_INDICATOR)
        v.optional_one_of("AccountTypeCode", self.account_type_code, AccountTypeCode.codes(), MSG_ACCOUNT_TYPE_CODE)
        v.optional_one_of("SourceWorkCode", self.source_work_code, ("3",), MSG_SOURCE_WORK_CODE)
        v.alphanumeric("WorkType", self.work_type)
        v.alphanumeric("DebitCreditIndicator", self.debit_credit_indicator)


@dataclass
class CreditItem(X9Record):
    """
    Credit Item Record (Type 62).

    The only 100-byte record in the standard. Records of 96 to 99
    characters are accepted on read and written back as 100.
    """

    RECORD_TYPE = "62"
    RECORD_LENGTH = 100
    MIN_LENGTH = 96
    LAYOUT = (
        FieldSpec("auxiliary_on_us", 3, 17, B),
        FieldSpec("external_processing_code", 18, 18, A),
        FieldSpec("posting_bank_routing_number", 19, 27, S),
        FieldSpec("on_us", 28, 47, B),
        FieldSpec("item_amount", 48, 61, N),
        FieldSpec("credit_item_sequence_number", 62, 76, A),
        FieldSpec("documentation_type_indicator", 77, 77, A),
        FieldSpec("account_type_code", 78, 78, A),
        FieldSpec("source_work_code", 79, 80, A),
        FieldSpec("user_field", 81, 96, A),
    )

    auxiliary_on_us: str = ""
    external_processing_code: str = ""
    posting_bank_routing_number: str = ""
    on_us: str = ""
    item_amount: int = 0
    credit_item_sequence_number: str = ""
    documentation_type_indicator: str = ""
    account_type_code: str = ""
    source_work_code: str = ""
    user_field: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required_routing_number("PostingBankRoutingNumber", self.posting_bank_routing_number)
        v.required("CreditItemSequenceNumber", self.credit_item_sequence_number)

    def validate_fields(self, v: FieldValidator) -> None:
        v.nbsm("AuxiliaryOnUs", self.auxiliary_on_us)
        v.alphanumeric_special("ExternalProcessingCode", self.external_processing_code)
        v.numeric("PostingBankRoutingNumber", self.posting_bank_routing_number)
        v.nbsm("OnUs", self.on_us)
        v.alphanumeric_special("CreditItemSequenceNumber", self.credit_item_sequence_number)
        if self.documentation_type_indicator in ("Z", "M"):
            raise FieldError(
                "DocumentationTypeIndicator",
                self.documentation_type_indicator,
                MSG_DOCUMENTATION_TYPE_INDICATOR,
            )
        v.optional_one_of(
            "DocumentationTypeIndicator",
            self.documentation_type_indicator,
            DocumentationTypeIndicator.codes(),
            MSG_DOCUMENTATION_TYPE_INDICATOR,
        )
        v.optional_one_of("AccountTypeCode", self.account_type_code, AccountTypeCode.codes(), MSG_ACCOUNT_TYPE_CODE)
        if self.source_work_code != "" and not is_source_work_code(self.source_work_code):
            raise FieldError("SourceWorkCode", self.source_work_code, MSG_SOURCE_WORK_CODE)
        v.alphanumeric_special("UserField", self.user_field)


@dataclass
class RoutingNumberSummary(X9Record):
    """
    Routing Number Summary Record (Type 85).

    Per-routing-number totals at the end of a forward cash letter.
    """

    RECORD_TYPE = "85"
    LAYOUT = (
        FieldSpec("cash_letter_routing_number", 3, 11, S),
        FieldSpec("routing_number_total_amount", 12, 25, N),
        FieldSpec("routing_number_item_count", 26, 31, N),
        FieldSpec("user_field", 32, 55, A),
    )

    cash_letter_routing_number: str = ""
    routing_number_total_amount: int = 0
    routing_number_item_count: int = 0
    user_field: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required_routing_number("CashLetterRoutingNumber", self.cash_letter_routing_number)

    def validate_fields(self, v: FieldValidator) -> None:
        v.numeric("CashLetterRoutingNumber", self.cash_letter_routing_number)
        v.alphanumeric_special("UserField", self.user_field)


@dataclass
class CashLetterControl(X9Record):
    """
    Cash Letter Control Record (Type 90).

    Totals for one cash letter; computed by CashLetter.build().
    """

    RECORD_TYPE = "90"
    LAYOUT = (
        FieldSpec("cash_letter_bundle_count", 3, 8, N),
        FieldSpec("cash_letter_items_count", 9, 16, N),
        FieldSpec("cash_letter_total_amount", 17, 30, N),
        FieldSpec("cash_letter_images_count", 31, 39, N),
        FieldSpec("ece_institution_name", 40, 57, A),
        FieldSpec("settlement_date", 58, 65, D),
        FieldSpec("credit_total_indicator", 66, 66, N),
    )

    cash_letter_bundle_count: int = 0
    cash_letter_items_count: int = 0
    cash_letter_total_amount: int = 0
    cash_letter_images_count: int = 0
    ece_institution_name: str = ""
    settlement_date: Optional[date] = None
    credit_total_indicator: int = 0

    def validate_fields(self, v: FieldValidator) -> None:
        v.alphanumeric_special("ECEInstitutionName", self.ece_institution_name)
        v.one_of(
            "CreditTotalIndicator",
            self.credit_total_indicator,
            CreditTotalIndicator.codes(),
            MSG_CREDIT_TOTAL_INDICATOR,
        )
