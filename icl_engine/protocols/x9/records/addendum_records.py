"""
Check Detail and Return Detail Addendum Records

Three layouts are shared between the forward and return sides:

- BOFD endorsement: CheckDetailAddendumA (26), ReturnDetailAddendumA (32)
- Image reference:  CheckDetailAddendumB (27), ReturnDetailAddendumC (34)
- Endorsing bank:   CheckDetailAddendumC (28), ReturnDetailAddendumD (35)

ReturnDetailAddendumB (33) carries payor bank information and has its own
layout.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from icl_engine.core.exceptions import FieldError
from icl_engine.protocols.x9.fields import FieldKind, FieldSpec
from icl_engine.protocols.x9.records.base import X9Record
from icl_engine.protocols.x9.validators import (
    MSG_CONVERSION_INDICATOR,
    MSG_CORRECTION_INDICATOR,
    MSG_IMAGE_REFERENCE_KEY_INDICATOR,
    MSG_INVALID,
    MSG_LENGTH_MISMATCH,
    MSG_TRUNCATION_INDICATOR,
    FieldValidator,
)
from icl_engine.protocols.x9.x9_codes import (
    ConversionIndicator,
    CorrectionIndicator,
    EndorsingBankIdentifier,
    ImageReferenceKeyIndicator,
    TruncationIndicator,
)

N, A, S, B, D = FieldKind.NUMERIC, FieldKind.ALPHA, FieldKind.STRING, FieldKind.NBSM, FieldKind.DATE


@dataclass
class BOFDEndorsementAddendum(X9Record):
    """Bank of first deposit endorsement (record types 26 and 32)."""

    LAYOUT = (
        FieldSpec("record_number", 3, 3, N),
        FieldSpec("return_location_routing_number", 4, 12, S),
        FieldSpec("bofd_endorsement_date", 13, 20, D),
        FieldSpec("bofd_item_sequence_number", 21, 35, A),
        FieldSpec("bofd_account_number", 36, 53, A),
        FieldSpec("bofd_branch_code", 54, 58, A),
        FieldSpec("payee_name", 59, 73, A),
        FieldSpec("truncation_indicator", 74, 74, A),
        FieldSpec("bofd_conversion_indicator", 75, 75, A),
        FieldSpec("bofd_correction_indicator", 76, 76, N),
        FieldSpec("user_field", 77, 77, A),
    )

    record_number: int = 0  # 1-9, order of the addendum on its item
    return_location_routing_number: str = ""
    bofd_endorsement_date: Optional[date] = None
    bofd_item_sequence_number: str = ""
    bofd_account_number: str = ""
    bofd_branch_code: str = ""
    payee_name: str = ""
    truncation_indicator: str = ""
    bofd_conversion_indicator: str = ""
    bofd_correction_indicator: int = 0
    user_field: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("RecordNumber", self.record_number)
        v.required_routing_number(
            "ReturnLocationRoutingNumber",
            self.return_location_routing_number,
            zero_allowed=v.relaxed_routing_zero(),
        )
        v.required("BOFDEndorsementDate", self.bofd_endorsement_date)
        v.required("BOFDItemSequenceNumber", self.bofd_item_sequence_number)
        if not v.frb_compatibility_mode:
            v.required("TruncationIndicator", self.truncation_indicator)

    def validate_fields(self, v: FieldValidator) -> None:
        v.numeric("ReturnLocationRoutingNumber", self.return_location_routing_number)
        v.alphanumeric_special("BOFDItemSequenceNumber", self.bofd_item_sequence_number)
        v.alphanumeric_special("BOFDAccountNumber", self.bofd_account_number)
        v.alphanumeric_special("BOFDBranchCode", self.bofd_branch_code)
        v.alphanumeric_special("PayeeName", self.payee_name)
        v.truncation_indicator(
            "TruncationIndicator",
            self.truncation_indicator,
            TruncationIndicator.codes(),
            MSG_TRUNCATION_INDICATOR,
        )
        v.optional_one_of(
            "BOFDConversionIndicator",
            self.bofd_conversion_indicator,
            ConversionIndicator.codes(),
            MSG_CONVERSION_INDICATOR,
        )
        v.one_of(
            "BOFDCorrectionIndicator",
            self.bofd_correction_indicator,
            CorrectionIndicator.codes(),
            MSG_CORRECTION_INDICATOR,
        )
        v.alphanumeric_special("UserField", self.user_field)


@dataclass
class ImageReferenceAddendum(X9Record):
    """Image archive reference (record types 27 and 34)."""

    LAYOUT = (
        FieldSpec("image_reference_key_indicator", 3, 3, N),
        FieldSpec("microfilm_archive_sequence_number", 4, 18, A),
        FieldSpec("length_image_reference_key", 19, 22, N),
        FieldSpec("image_reference_key", 23, 56, A),
        FieldSpec("description", 57, 71, A),
        FieldSpec("user_field", 72, 75, A),
    )

    image_reference_key_indicator: int = 0
    microfilm_archive_sequence_number: str = ""
    length_image_reference_key: int = 0
    image_reference_key: str = ""  # up to 34 chars
    description: str = ""
    user_field: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("MicrofilmArchiveSequenceNumber", self.microfilm_archive_sequence_number)

    def validate_fields(self, v: FieldValidator) -> None:
        v.one_of(
            "ImageReferenceKeyIndicator",
            self.image_reference_key_indicator,
            ImageReferenceKeyIndicator.codes(),
            MSG_IMAGE_REFERENCE_KEY_INDICATOR,
        )
        v.alphanumeric_special("MicrofilmArchiveSequenceNumber", self.microfilm_archive_sequence_number)
        if self.length_image_reference_key < len(self.image_reference_key):
            raise FieldError(
                "LengthImageReferenceKey",
                self.length_image_reference_key,
                MSG_LENGTH_MISMATCH % "ImageReferenceKey",
            )
        v.alphanumeric_special("ImageReferenceKey", self.image_reference_key)
        v.alphanumeric_special("Description", self.description)
        v.alphanumeric_special("UserField", self.user_field)


@dataclass
class EndorsingBankAddendum(X9Record):
    """Subsequent endorsement by a collecting or returning bank (types 28 and 35)."""

    LAYOUT = (
        FieldSpec("record_number", 3, 4, N),
        FieldSpec("endorsing_bank_routing_number", 5, 13, S),
        FieldSpec("bofd_endorsement_business_date", 14, 21, D),
        FieldSpec("endorsing_bank_item_sequence_number", 22, 36, A),
        FieldSpec("truncation_indicator", 37, 37, A),
        FieldSpec("endorsing_bank_conversion_indicator", 38, 38, A),
        FieldSpec("endorsing_bank_correction_indicator", 39, 39, N),
        FieldSpec("return_reason", 40, 40, A),
        FieldSpec("user_field", 41, 55, A),
        FieldSpec("endorsing_bank_identifier", 56, 56, N),
    )

    record_number: int = 0  # 1-99
    endorsing_bank_routing_number: str = ""
    bofd_endorsement_business_date: Optional[date] = None
    endorsing_bank_item_sequence_number: str = ""
    truncation_indicator: str = ""
    endorsing_bank_conversion_indicator: str = ""
    endorsing_bank_correction_indicator: int = 0
    return_reason: str = ""
    user_field: str = ""
    endorsing_bank_identifier: int = 0

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("RecordNumber", self.record_number)
        v.required_routing_number(
            "EndorsingBankRoutingNumber",
            self.endorsing_bank_routing_number,
            zero_allowed=v.relaxed_routing_zero(),
        )
        v.required("BOFDEndorsementBusinessDate", self.bofd_endorsement_business_date)
        v.required("EndorsingBankItemSequenceNumber", self.endorsing_bank_item_sequence_number)
        if not v.frb_compatibility_mode:
            v.required("TruncationIndicator", self.truncation_indicator)

    def validate_fields(self, v: FieldValidator) -> None:
        v.numeric("EndorsingBankRoutingNumber", self.endorsing_bank_routing_number)
        v.alphanumeric_special("EndorsingBankItemSequenceNumber", self.endorsing_bank_item_sequence_number)
        v.truncation_indicator(
            "TruncationIndicator",
            self.truncation_indicator,
            TruncationIndicator.codes(),
            MSG_TRUNCATION_INDICATOR,
        )
        v.optional_one_of(
            "EndorsingBankConversionIndicator",
            self.endorsing_bank_conversion_indicator,
            ConversionIndicator.codes(),
            MSG_CONVERSION_INDICATOR,
        )
        v.one_of(
            "EndorsingBankCorrectionIndicator",
            self.endorsing_bank_correction_indicator,
            CorrectionIndicator.codes(),
            MSG_CORRECTION_INDICATOR,
        )
        v.alphanumeric("ReturnReason", self.return_reason)
        v.alphanumeric_special("UserField", self.user_field)
        v.one_of(
            "EndorsingBankIdentifier",
            self.endorsing_bank_identifier,
            EndorsingBankIdentifier.codes(),
            MSG_INVALID,
        )


@dataclass
class CheckDetailAddendumA(BOFDEndorsementAddendum):
    """Check Detail Addendum A Record (Type 26)."""

    RECORD_TYPE = "26"


@dataclass
class CheckDetailAddendumB(ImageReferenceAddendum):
    """Check Detail Addendum B Record (Type 27)."""

    RECORD_TYPE = "27"


@dataclass
class CheckDetailAddendumC(EndorsingBankAddendum):
    """Check Detail Addendum C Record (Type 28)."""

    RECORD_TYPE = "28"


@dataclass
class ReturnDetailAddendumA(BOFDEndorsementAddendum):
    """Return Detail Addendum A Record (Type 32)."""

    RECORD_TYPE = "32"


@dataclass
class ReturnDetailAddendumB(X9Record):
    """
    Return Detail Addendum B Record (Type 33).

    Payor bank information for a returned item.
    """

    RECORD_TYPE = "33"
    LAYOUT = (
        FieldSpec("payor_bank_name", 3, 20, A),
        FieldSpec("auxiliary_on_us", 21, 35, B),
        FieldSpec("payor_bank_sequence_number", 36, 50, A),
        FieldSpec("payor_bank_business_date", 51, 58, D),
        FieldSpec("payor_account_name", 59, 80, A),
    )

    payor_bank_name: str = ""
    auxiliary_on_us: str = ""
    payor_bank_sequence_number: str = ""
    payor_bank_business_date: Optional[date] = None
    payor_account_name: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("PayorBankBusinessDate", self.payor_bank_business_date)

    def validate_fields(self, v: FieldValidator) -> None:
        v.alphanumeric_special("PayorBankName", self.payor_bank_name)
        v.nbsm("AuxiliaryOnUs", self.auxiliary_on_us)
        v.alphanumeric_special("PayorBankSequenceNumber", self.payor_bank_sequence_number)
        v.alphanumeric_special("PayorAccountName", self.payor_account_name)


@dataclass
class ReturnDetailAddendumC(ImageReferenceAddendum):
    """Return Detail Addendum C Record (Type 34)."""

    RECORD_TYPE = "34"


@dataclass
class ReturnDetailAddendumD(EndorsingBankAddendum):
    """Return Detail Addendum D Record (Type 35)."""

    RECORD_TYPE = "35"
