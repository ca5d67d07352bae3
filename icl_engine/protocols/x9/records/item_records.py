"""
Item Records

Check Detail (25) and Return Detail (31). An item owns its addenda, its
image views and any user records that follow it in the file; the bundle
validates the addendum counts and caps declared here.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple, Type

from icl_engine.protocols.x9.fields import FieldKind, FieldSpec
from icl_engine.protocols.x9.options import ICLOptions
from icl_engine.protocols.x9.records.addendum_records import (
    CheckDetailAddendumA,
    CheckDetailAddendumB,
    CheckDetailAddendumC,
    ReturnDetailAddendumA,
    ReturnDetailAddendumB,
    ReturnDetailAddendumC,
    ReturnDetailAddendumD,
)
from icl_engine.protocols.x9.records.base import X9Record
from icl_engine.protocols.x9.records.image_view_records import (
    ImageViewAnalysis,
    ImageViewData,
    ImageViewDetail,
)
from icl_engine.protocols.x9.records.user_records import (
    UserGeneral,
    UserPayeeEndorsement,
    UserRecord,
)
from icl_engine.protocols.x9.validators import (
    MSG_ARCHIVE_TYPE_INDICATOR,
    MSG_BOFD_INDICATOR,
    MSG_CORRECTION_INDICATOR,
    MSG_DOCUMENTATION_TYPE_INDICATOR,
    MSG_INVALID,
    MSG_MICR_VALID_INDICATOR,
    MSG_RETURN_ACCEPTANCE_INDICATOR,
    FieldValidator,
)
from icl_engine.protocols.x9.x9_codes import (
    PAYEE_ENDORSEMENT_FORMAT_TYPE,
    ArchiveTypeIndicator,
    BOFDIndicator,
    CorrectionIndicator,
    DocumentationTypeIndicator,
    MICRValidIndicator,
    ReturnAcceptanceIndicator,
    ReturnNotificationIndicator,
    TimesReturned,
)

N, A, S, B, D = FieldKind.NUMERIC, FieldKind.ALPHA, FieldKind.STRING, FieldKind.NBSM, FieldKind.DATE

# Z (not same type) describes a cash letter, never an item
_ITEM_DOCUMENTATION_TYPES = DocumentationTypeIndicator.codes() - {"Z"}


@dataclass(frozen=True)
class AddendumSlot:
    """One addendum list on an item: attribute, record class and per-item cap."""

    attr: str
    record_class: Type[X9Record]
    limit: int

    @property
    def label(self) -> str:
        return self.record_class.record_name()

    @property
    def json_name(self) -> str:
        name = self.label
        return name[0].lower() + name[1:]


def user_record_from_dict(data: Dict[str, Any]) -> UserRecord:
    if data.get("userRecordFormatType") == PAYEE_ENDORSEMENT_FORMAT_TYPE and "payeeName" in data:
        return UserPayeeEndorsement.from_dict(data)
    return UserGeneral.from_dict(data)


@dataclass
class X9Item(X9Record):
    """
    Base for Check Detail and Return Detail.

    Subclasses list their addenda in ADDENDA, in emission order.
    """

    ADDENDA: ClassVar[Tuple[AddendumSlot, ...]] = ()

    image_view_detail: List[ImageViewDetail] = field(default_factory=list, repr=False)
    image_view_data: List[ImageViewData] = field(default_factory=list, repr=False)
    image_view_analysis: List[ImageViewAnalysis] = field(default_factory=list, repr=False)
    user_records: List[UserRecord] = field(default_factory=list, repr=False)

    def add_image_view_detail(self, record: ImageViewDetail) -> None:
        self.image_view_detail.append(record)

    def add_image_view_data(self, record: ImageViewData) -> None:
        self.image_view_data.append(record)

    def add_image_view_analysis(self, record: ImageViewAnalysis) -> None:
        self.image_view_analysis.append(record)

    def add_user_record(self, record: UserRecord) -> None:
        self.user_records.append(record)

    def add_addendum(self, record: X9Record) -> None:
        for slot in self.ADDENDA:
            if isinstance(record, slot.record_class):
                getattr(self, slot.attr).append(record)
                return
        raise TypeError(f"{record.record_name()} is not an addendum of {self.record_name()}")

    def addenda(self) -> Iterator[X9Record]:
        for slot in self.ADDENDA:
            yield from getattr(self, slot.attr)

    def addenda_total(self) -> int:
        return sum(len(getattr(self, slot.attr)) for slot in self.ADDENDA)

    def image_views(self) -> Iterator[X9Record]:
        """Image view records interleaved per view as 50, 52, 54."""
        views = max(len(self.image_view_detail), len(self.image_view_data), len(self.image_view_analysis))
        for index in range(views):
            for records in (self.image_view_detail, self.image_view_data, self.image_view_analysis):
                if index < len(records):
                    yield records[index]

    def records(self) -> Iterator[X9Record]:
        """The item followed by everything it owns, in file order."""
        yield self
        yield from self.addenda()
        yield from self.image_views()
        yield from self.user_records

    def record_count(self) -> int:
        return sum(1 for _ in self.records())

    def images_count(self) -> int:
        return len(self.image_view_detail)

    def validate_children(self, options: Optional[ICLOptions] = None) -> None:
        for record in self.records():
            if record is not self:
                record.validate(options)

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        for slot in self.ADDENDA:
            result[slot.json_name] = [record.to_dict() for record in getattr(self, slot.attr)]
        result["imageViewDetail"] = [record.to_dict() for record in self.image_view_detail]
        result["imageViewData"] = [record.to_dict() for record in self.image_view_data]
        result["imageViewAnalysis"] = [record.to_dict() for record in self.image_view_analysis]
        result["userRecords"] = [record.to_dict() for record in self.user_records]
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "X9Item":
        item = super().from_dict(data)
        for slot in cls.ADDENDA:
            setattr(item, slot.attr, [slot.record_class.from_dict(d) for d in data.get(slot.json_name) or []])
        item.image_view_detail = [ImageViewDetail.from_dict(d) for d in data.get("imageViewDetail") or []]
        item.image_view_data = [ImageViewData.from_dict(d) for d in data.get("imageViewData") or []]
        item.image_view_analysis = [ImageViewAnalysis.from_dict(d) for d in data.get("imageViewAnalysis") or []]
        item.user_records = [user_record_from_dict(d) for d in data.get("userRecords") or []]
        return item


@dataclass
class CheckDetail(X9Item):
    """
    Check Detail Record (Type 25).

    The MICR line of a forward presentment item. Payor bank routing is
    split into its 8-digit identifier and check digit.
    """

    RECORD_TYPE = "25"
    LAYOUT = (
        FieldSpec("auxiliary_on_us", 3, 17, B),
        FieldSpec("external_processing_code", 18, 18, A),
        FieldSpec("payor_bank_routing_number", 19, 26, S),
        FieldSpec("payor_bank_check_digit", 27, 27, A),
        FieldSpec("on_us", 28, 47, B),
        FieldSpec("item_amount", 48, 57, N),
        FieldSpec("ece_institution_item_sequence_number", 58, 72, A),
        FieldSpec("documentation_type_indicator", 73, 73, A),
        FieldSpec("return_acceptance_indicator", 74, 74, A),
        FieldSpec("micr_valid_indicator", 75, 75, N),
        FieldSpec("bofd_indicator", 76, 76, A),
        FieldSpec("addendum_count", 77, 78, N),
        FieldSpec("correction_indicator", 79, 79, N),
        FieldSpec("archive_type_indicator", 80, 80, A),
    )
    ADDENDA = (
        AddendumSlot("check_detail_addendum_a", CheckDetailAddendumA, 9),
        AddendumSlot("check_detail_addendum_b", CheckDetailAddendumB, 1),
        AddendumSlot("check_detail_addendum_c", CheckDetailAddendumC, 99),
    )

    auxiliary_on_us: str = ""
    external_processing_code: str = ""
    payor_bank_routing_number: str = ""  # 8 digits, check digit separate
    payor_bank_check_digit: str = ""
    on_us: str = ""
    item_amount: int = 0  # cents
    ece_institution_item_sequence_number: str = ""
    documentation_type_indicator: str = ""
    return_acceptance_indicator: str = ""
    micr_valid_indicator: int = 0
    bofd_indicator: str = ""
    addendum_count: int = 0
    correction_indicator: int = 0
    archive_type_indicator: str = ""
    check_detail_addendum_a: List[CheckDetailAddendumA] = field(default_factory=list, repr=False)
    check_detail_addendum_b: List[CheckDetailAddendumB] = field(default_factory=list, repr=False)
    check_detail_addendum_c: List[CheckDetailAddendumC] = field(default_factory=list, repr=False)

    def add_check_detail_addendum_a(self, record: CheckDetailAddendumA) -> None:
        self.check_detail_addendum_a.append(record)

    def add_check_detail_addendum_b(self, record: CheckDetailAddendumB) -> None:
        self.check_detail_addendum_b.append(record)

    def add_check_detail_addendum_c(self, record: CheckDetailAddendumC) -> None:
        self.check_detail_addendum_c.append(record)

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required_routing_number("PayorBankRoutingNumber", self.payor_bank_routing_number)
        v.required("PayorBankCheckDigit", self.payor_bank_check_digit)
        v.required("ECEInstitutionItemSequenceNumber", self.ece_institution_item_sequence_number)
        v.required("BOFDIndicator", self.bofd_indicator)

    def validate_fields(self, v: FieldValidator) -> None:
        v.nbsm("AuxiliaryOnUs", self.auxiliary_on_us)
        v.alphanumeric_special("ExternalProcessingCode", self.external_processing_code)
        v.numeric("PayorBankRoutingNumber", self.payor_bank_routing_number)
        v.numeric("PayorBankCheckDigit", self.payor_bank_check_digit)
        v.nbsm("OnUs", self.on_us)
        v.alphanumeric_special("ECEInstitutionItemSequenceNumber", self.ece_institution_item_sequence_number)
        v.optional_one_of(
            "DocumentationTypeIndicator",
            self.documentation_type_indicator,
            _ITEM_DOCUMENTATION_TYPES,
            MSG_DOCUMENTATION_TYPE_INDICATOR,
        )
        v.optional_one_of(
            "ReturnAcceptanceIndicator",
            self.return_acceptance_indicator,
            ReturnAcceptanceIndicator.codes(),
            MSG_RETURN_ACCEPTANCE_INDICATOR,
        )
        # 0 means the indicator is not used
        if self.micr_valid_indicator != 0:
            v.one_of(
                "MICRValidIndicator",
                self.micr_valid_indicator,
                MICRValidIndicator.codes(),
                MSG_MICR_VALID_INDICATOR,
            )
        v.one_of("BOFDIndicator", self.bofd_indicator, BOFDIndicator.codes(), MSG_BOFD_INDICATOR)
        v.one_of(
            "CorrectionIndicator",
            self.correction_indicator,
            CorrectionIndicator.codes(),
            MSG_CORRECTION_INDICATOR,
        )
        v.optional_one_of(
            "ArchiveTypeIndicator",
            self.archive_type_indicator,
            ArchiveTypeIndicator.codes(),
            MSG_ARCHIVE_TYPE_INDICATOR,
        )


@dataclass
class ReturnDetail(X9Item):
    """
    Return Detail Record (Type 31).

    An item returned unpaid, with the reason and the date of the forward
    bundle it was presented in.
    """

    RECORD_TYPE = "31"
    LAYOUT = (
        FieldSpec("payor_bank_routing_number", 3, 10, S),
        FieldSpec("payor_bank_check_digit", 11, 11, A),
        FieldSpec("on_us", 12, 31, B),
        FieldSpec("item_amount", 32, 41, N),
        FieldSpec("return_reason", 42, 42, A),
        FieldSpec("addendum_count", 43, 44, N),
        FieldSpec("documentation_type_indicator", 45, 45, A),
        FieldSpec("forward_bundle_date", 46, 53, D),
        FieldSpec("ece_institution_item_sequence_number", 54, 68, A),
        FieldSpec("external_processing_code", 69, 69, A),
        FieldSpec("return_notification_indicator", 70, 70, A),
        FieldSpec("archive_type_indicator", 71, 71, A),
        FieldSpec("times_returned", 72, 72, A),
    )
    ADDENDA = (
        AddendumSlot("return_detail_addendum_a", ReturnDetailAddendumA, 9),
        AddendumSlot("return_detail_addendum_b", ReturnDetailAddendumB, 1),
        AddendumSlot("return_detail_addendum_c", ReturnDetailAddendumC, 1),
        AddendumSlot("return_detail_addendum_d", ReturnDetailAddendumD, 99),
    )

    payor_bank_routing_number: str = ""
    payor_bank_check_digit: str = ""
    on_us: str = ""
    item_amount: int = 0
    return_reason: str = ""
    addendum_count: int = 0
    documentation_type_indicator: str = ""
    forward_bundle_date: Optional[date] = None
    ece_institution_item_sequence_number: str = ""
    external_processing_code: str = ""
    return_notification_indicator: str = ""
    archive_type_indicator: str = ""
    times_returned: str = ""
    return_detail_addendum_a: List[ReturnDetailAddendumA] = field(default_factory=list, repr=False)
    return_detail_addendum_b: List[ReturnDetailAddendumB] = field(default_factory=list, repr=False)
    return_detail_addendum_c: List[ReturnDetailAddendumC] = field(default_factory=list, repr=False)
    return_detail_addendum_d: List[ReturnDetailAddendumD] = field(default_factory=list, repr=False)

    def add_return_detail_addendum_a(self, record: ReturnDetailAddendumA) -> None:
        self.return_detail_addendum_a.append(record)

    def add_return_detail_addendum_b(self, record: ReturnDetailAddendumB) -> None:
        self.return_detail_addendum_b.append(record)

    def add_return_detail_addendum_c(self, record: ReturnDetailAddendumC) -> None:
        self.return_detail_addendum_c.append(record)

    def add_return_detail_addendum_d(self, record: ReturnDetailAddendumD) -> None:
        self.return_detail_addendum_d.append(record)

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required_routing_number("PayorBankRoutingNumber", self.payor_bank_routing_number)
        v.required("PayorBankCheckDigit", self.payor_bank_check_digit)
        v.required("ReturnReason", self.return_reason)

    def validate_fields(self, v: FieldValidator) -> None:
        v.numeric("PayorBankRoutingNumber", self.payor_bank_routing_number)
        v.numeric("PayorBankCheckDigit", self.payor_bank_check_digit)
        v.nbsm("OnUs", self.on_us)
        v.alphanumeric("ReturnReason", self.return_reason)
        v.optional_one_of(
            "DocumentationTypeIndicator",
            self.documentation_type_indicator,
            _ITEM_DOCUMENTATION_TYPES,
            MSG_DOCUMENTATION_TYPE_INDICATOR,
        )
        v.alphanumeric_special("ECEInstitutionItemSequenceNumber", self.ece_institution_item_sequence_number)
        v.alphanumeric_special("ExternalProcessingCode", self.external_processing_code)
        v.optional_one_of(
            "ReturnNotificationIndicator",
            self.return_notification_indicator,
            ReturnNotificationIndicator.codes(),
            MSG_INVALID,
        )
        v.optional_one_of(
            "ArchiveTypeIndicator",
            self.archive_type_indicator,
            ArchiveTypeIndicator.codes(),
            MSG_ARCHIVE_TYPE_INDICATOR,
        )
        v.optional_one_of("TimesReturned", self.times_returned, TimesReturned.codes(), MSG_INVALID)
