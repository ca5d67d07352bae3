"""
ICL Containers

The in-memory tree of an Image Cash Letter file:

    ICLFile -> CashLetter -> Bundle -> CheckDetail / ReturnDetail

Each container owns its header and control records. build() recomputes the
control records from the children, validate() checks every record and the
cross-record invariants, and validate_control() checks the control record
of one container against its children (the reader calls it when the
control record arrives).
"""

import json
import logging
from dataclasses import dataclass
from itertools import chain
from typing import Any, Dict, Iterator, List, Optional, Union

from icl_engine.core.exceptions import BundleError, CashLetterError, FileError
from icl_engine.protocols.x9.options import DEFAULT_OPTIONS, ICLOptions
from icl_engine.protocols.x9.records import (
    BundleControl,
    BundleHeader,
    CashLetterControl,
    CashLetterHeader,
    CheckDetail,
    Credit,
    CreditItem,
    FileControl,
    FileHeader,
    ReturnDetail,
    RoutingNumberSummary,
    UserRecord,
    X9Item,
    X9Record,
)
from icl_engine.protocols.x9.records.item_records import user_record_from_dict
from icl_engine.protocols.x9.x9_codes import CollectionTypeIndicator, CreditTotalIndicator

logger = logging.getLogger(__name__)

MSG_BUNDLE_ENTRIES = "Bundle contains both Check Detail and Return Detail records"
MSG_ADDENDUM_LIMIT = "has %d entries and the maximum allowed per item is %d"
MSG_ADDENDUM_COUNT = "%d does not match the %d addenda present"
MSG_OUT_OF_BALANCE = "calculated %d is out-of-balance with control %d"
MSG_CASH_LETTER_BUNDLE_ENTRIES = "A cash letter with RecordTypeIndicator N must not contain bundles"
MSG_CASH_LETTER_ROUTING_NUMBER = "Routing Number Summary records are not allowed with a return CollectionTypeIndicator"
MSG_FILE_CASH_LETTER_ID = "is not unique within the file"
MSG_FILE_CASH_LETTERS = "File must contain at least one cash letter"

RETURN_COLLECTION_TYPES = frozenset(
    indicator.code
    for indicator in (
        CollectionTypeIndicator.RETURN,
        CollectionTypeIndicator.RETURN_NOTIFICATION,
        CollectionTypeIndicator.PRELIMINARY_RETURN_NOTIFICATION,
        CollectionTypeIndicator.FINAL_RETURN_NOTIFICATION,
    )
)

Item = Union[CheckDetail, ReturnDetail]


@dataclass
class BundleTotals:
    items_count: int = 0
    total_amount: int = 0
    micr_valid_total_amount: int = 0
    images_count: int = 0


@dataclass
class CashLetterTotals:
    bundle_count: int = 0
    items_count: int = 0
    total_amount: int = 0
    images_count: int = 0


class Bundle:
    """
    A bundle of forward items (Check Detail) or returns (Return Detail).

    Never both: a mixed bundle fails build() and validate().
    """

    def __init__(self, header: Optional[BundleHeader] = None):
        self.header = header or BundleHeader()
        self.checks: List[CheckDetail] = []
        self.returns: List[ReturnDetail] = []
        self.control = BundleControl()

    def __repr__(self) -> str:
        return (
            f"Bundle(sequence={self.sequence_number!r}, checks={len(self.checks)}, "
            f"returns={len(self.returns)})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bundle):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def sequence_number(self) -> str:
        return self.header.bundle_sequence_number

    def set_header(self, header: BundleHeader) -> None:
        self.header = header

    def set_control(self, control: BundleControl) -> None:
        self.control = control

    def add_check_detail(self, check: CheckDetail) -> None:
        self.checks.append(check)

    def add_return_detail(self, return_detail: ReturnDetail) -> None:
        self.returns.append(return_detail)

    def items(self) -> Iterator[Item]:
        return chain(self.checks, self.returns)

    def records(self) -> Iterator[X9Record]:
        yield self.header
        for item in self.items():
            yield from item.records()
        yield self.control

    def record_count(self) -> int:
        return 2 + sum(item.record_count() for item in self.items())

    def totals(self) -> BundleTotals:
        totals = BundleTotals()
        for item in self.items():
            totals.items_count += 1
            totals.total_amount += item.item_amount
            totals.images_count += item.images_count()
        totals.micr_valid_total_amount = sum(
            check.item_amount for check in self.checks if check.micr_valid_indicator == 1
        )
        return totals

    # Validation

    def _error(self, field_name: str, msg: str) -> BundleError:
        return BundleError(self.sequence_number, field_name, msg)

    def _validate_entries(self) -> None:
        if self.checks and self.returns:
            raise self._error("BundleEntries", MSG_BUNDLE_ENTRIES)

    def _validate_addenda(self, item: X9Item) -> None:
        for slot in item.ADDENDA:
            entries = len(getattr(item, slot.attr))
            if entries > slot.limit:
                raise self._error(slot.label, MSG_ADDENDUM_LIMIT % (entries, slot.limit))
        present = item.addenda_total()
        if item.addendum_count != present:
            raise self._error("AddendumCount", MSG_ADDENDUM_COUNT % (item.addendum_count, present))

    def _validate_item(self, item: X9Item, options: ICLOptions) -> None:
        item.validate(options)
        self._validate_addenda(item)
        item.validate_children(options)

    def _validate_contents(self, options: ICLOptions) -> None:
        self.header.validate(options)
        self._validate_entries()
        for item in self.items():
            self._validate_item(item, options)

    def validate(self, options: Optional[ICLOptions] = None) -> None:
        """Validate the header, every item and its children, and the control totals."""
        options = options or DEFAULT_OPTIONS
        self._validate_contents(options)
        self.validate_control(options)

    def validate_control(self, options: Optional[ICLOptions] = None) -> None:
        """Check the addenda of every item and the Bundle Control record against the items."""
        self._validate_entries()
        for item in self.items():
            self._validate_addenda(item)
        self.control.validate(options)
        totals = self.totals()
        for label, calculated, declared in (
            ("BundleItemsCount", totals.items_count, self.control.bundle_items_count),
            ("BundleTotalAmount", totals.total_amount, self.control.bundle_total_amount),
            ("MICRValidTotalAmount", totals.micr_valid_total_amount, self.control.micr_valid_total_amount),
            ("BundleImagesCount", totals.images_count, self.control.bundle_images_count),
        ):
            if calculated != declared:
                raise self._error(label, MSG_OUT_OF_BALANCE % (calculated, declared))

    def build(self, options: Optional[ICLOptions] = None) -> None:
        """Validate the contents and install computed totals in the Bundle Control record."""
        options = options or DEFAULT_OPTIONS
        self._validate_contents(options)
        totals = self.totals()
        self.control.bundle_items_count = totals.items_count
        self.control.bundle_total_amount = totals.total_amount
        self.control.micr_valid_total_amount = totals.micr_valid_total_amount
        self.control.bundle_images_count = totals.images_count
        self.control.validate(options)

    # JSON boundary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bundleHeader": self.header.to_dict(),
            "checks": [check.to_dict() for check in self.checks],
            "returns": [return_detail.to_dict() for return_detail in self.returns],
            "bundleControl": self.control.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bundle":
        bundle = cls(BundleHeader.from_dict(data.get("bundleHeader") or {}))
        bundle.checks = [CheckDetail.from_dict(d) for d in data.get("checks") or []]
        bundle.returns = [ReturnDetail.from_dict(d) for d in data.get("returns") or []]
        bundle.control = BundleControl.from_dict(data.get("bundleControl") or {})
        return bundle


class CashLetter:
    """
    One cash letter: credits, credit items, bundles and routing number
    summaries between a Cash Letter Header and its Cash Letter Control.
    """

    def __init__(self, header: Optional[CashLetterHeader] = None):
        self.header = header or CashLetterHeader()
        self.credits: List[Credit] = []
        self.credit_items: List[CreditItem] = []
        self.user_records: List[UserRecord] = []
        self.bundles: List[Bundle] = []
        self.routing_number_summaries: List[RoutingNumberSummary] = []
        self.control = CashLetterControl()

    def __repr__(self) -> str:
        return f"CashLetter(id={self.id!r}, bundles={len(self.bundles)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CashLetter):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def id(self) -> str:
        return self.header.cash_letter_id

    def set_header(self, header: CashLetterHeader) -> None:
        self.header = header

    def set_control(self, control: CashLetterControl) -> None:
        self.control = control

    def add_bundle(self, bundle: Bundle) -> None:
        self.bundles.append(bundle)

    def add_credit(self, credit: Credit) -> None:
        self.credits.append(credit)

    def add_credit_item(self, credit_item: CreditItem) -> None:
        self.credit_items.append(credit_item)

    def add_user_record(self, record: UserRecord) -> None:
        self.user_records.append(record)

    def add_routing_number_summary(self, summary: RoutingNumberSummary) -> None:
        self.routing_number_summaries.append(summary)

    def records(self) -> Iterator[X9Record]:
        yield self.header
        yield from self.credits
        yield from self.credit_items
        yield from self.user_records
        for bundle in self.bundles:
            yield from bundle.records()
        yield from self.routing_number_summaries
        yield self.control

    def record_count(self) -> int:
        return (
            2
            + len(self.credits)
            + len(self.credit_items)
            + len(self.user_records)
            + sum(bundle.record_count() for bundle in self.bundles)
            + len(self.routing_number_summaries)
        )

    def totals(self) -> CashLetterTotals:
        totals = CashLetterTotals(bundle_count=len(self.bundles))
        for bundle in self.bundles:
            bundle_totals = bundle.totals()
            totals.items_count += bundle_totals.items_count
            totals.total_amount += bundle_totals.total_amount
            totals.images_count += bundle_totals.images_count
        if str(self.control.credit_total_indicator) == CreditTotalIndicator.INCLUDED.code:
            for credit in chain(self.credits, self.credit_items):
                totals.items_count += 1
                totals.total_amount += credit.item_amount
        return totals

    # Validation

    def _error(self, field_name: str, msg: str) -> CashLetterError:
        return CashLetterError(self.id, field_name, msg)

    def _validate_structure(self) -> None:
        if self.header.record_type_indicator == "N" and self.bundles:
            raise self._error("RecordTypeIndicator", MSG_CASH_LETTER_BUNDLE_ENTRIES)
        if self.routing_number_summaries and self.header.collection_type_indicator in RETURN_COLLECTION_TYPES:
            raise self._error("CollectionTypeIndicator", MSG_CASH_LETTER_ROUTING_NUMBER)

    def _validate_own_records(self, options: ICLOptions) -> None:
        self.header.validate(options)
        for record in chain(self.credits, self.credit_items, self.user_records):
            record.validate(options)

    def validate(self, options: Optional[ICLOptions] = None) -> None:
        options = options or DEFAULT_OPTIONS
        self._validate_own_records(options)
        for bundle in self.bundles:
            bundle.validate(options)
        for summary in self.routing_number_summaries:
            summary.validate(options)
        self.validate_control(options)

    def validate_control(self, options: Optional[ICLOptions] = None) -> None:
        """Cash letter rules and the Cash Letter Control totals."""
        self._validate_structure()
        self.control.validate(options)
        totals = self.totals()
        for label, calculated, declared in (
            ("CashLetterBundleCount", totals.bundle_count, self.control.cash_letter_bundle_count),
            ("CashLetterItemsCount", totals.items_count, self.control.cash_letter_items_count),
            ("CashLetterTotalAmount", totals.total_amount, self.control.cash_letter_total_amount),
            ("CashLetterImagesCount", totals.images_count, self.control.cash_letter_images_count),
        ):
            if calculated != declared:
                raise self._error(label, MSG_OUT_OF_BALANCE % (calculated, declared))

    def build(self, options: Optional[ICLOptions] = None) -> None:
        """Build every bundle and install computed totals in the Cash Letter Control record."""
        options = options or DEFAULT_OPTIONS
        self._validate_own_records(options)
        self._validate_structure()
        for bundle in self.bundles:
            bundle.build(options)
        for summary in self.routing_number_summaries:
            summary.validate(options)
        totals = self.totals()
        self.control.cash_letter_bundle_count = totals.bundle_count
        self.control.cash_letter_items_count = totals.items_count
        self.control.cash_letter_total_amount = totals.total_amount
        self.control.cash_letter_images_count = totals.images_count
        self.control.validate(options)

    # JSON boundary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cashLetterHeader": self.header.to_dict(),
            "credits": [credit.to_dict() for credit in self.credits],
            "creditItems": [credit_item.to_dict() for credit_item in self.credit_items],
            "userRecords": [record.to_dict() for record in self.user_records],
            "bundles": [bundle.to_dict() for bundle in self.bundles],
            "routingNumberSummary": [summary.to_dict() for summary in self.routing_number_summaries],
            "cashLetterControl": self.control.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CashLetter":
        cash_letter = cls(CashLetterHeader.from_dict(data.get("cashLetterHeader") or {}))
        cash_letter.credits = [Credit.from_dict(d) for d in data.get("credits") or []]
        cash_letter.credit_items = [CreditItem.from_dict(d) for d in data.get("creditItems") or []]
        cash_letter.user_records = [user_record_from_dict(d) for d in data.get("userRecords") or []]
        cash_letter.bundles = [Bundle.from_dict(d) for d in data.get("bundles") or []]
        cash_letter.routing_number_summaries = [
            RoutingNumberSummary.from_dict(d) for d in data.get("routingNumberSummary") or []
        ]
        cash_letter.control = CashLetterControl.from_dict(data.get("cashLetterControl") or {})
        return cash_letter


class ICLFile:
    """
    An Image Cash Letter file.

    Example:
        icl = ICLFile(header)
        icl.add_cash_letter(cash_letter)
        icl.create()        # compute every control record
        icl.validate()
    """

    def __init__(self, header: Optional[FileHeader] = None):
        self.header = header or FileHeader()
        self.cash_letters: List[CashLetter] = []
        self.control = FileControl()

    def __repr__(self) -> str:
        return f"ICLFile(cash_letters={len(self.cash_letters)})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ICLFile):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def set_header(self, header: FileHeader) -> None:
        self.header = header

    def set_control(self, control: FileControl) -> None:
        self.control = control

    def add_cash_letter(self, cash_letter: CashLetter) -> None:
        self.cash_letters.append(cash_letter)

    def records(self) -> Iterator[X9Record]:
        """Every record of the file in emission order."""
        yield self.header
        for cash_letter in self.cash_letters:
            yield from cash_letter.records()
        yield self.control

    def record_count(self) -> int:
        return 2 + sum(cash_letter.record_count() for cash_letter in self.cash_letters)

    # Validation

    def _validate_cash_letter_ids(self) -> None:
        seen = set()
        for cash_letter in self.cash_letters:
            if cash_letter.id in seen:
                raise FileError("CashLetterID", MSG_FILE_CASH_LETTER_ID, cash_letter.id)
            seen.add(cash_letter.id)

    def create(self, options: Optional[ICLOptions] = None) -> None:
        """
        Build every cash letter and bundle and compute the File Control record.

        Only computed control fields are changed; user-owned fields such as
        contact names and credit total indicators are kept.
        """
        options = options or DEFAULT_OPTIONS
        self.header.validate(options)
        if not self.cash_letters:
            raise FileError("CashLetters", MSG_FILE_CASH_LETTERS)
        self._validate_cash_letter_ids()
        for cash_letter in self.cash_letters:
            cash_letter.build(options)
        self.control.cash_letter_count = len(self.cash_letters)
        self.control.total_record_count = self.record_count()
        self.control.total_item_count = sum(cl.control.cash_letter_items_count for cl in self.cash_letters)
        self.control.file_total_amount = sum(cl.control.cash_letter_total_amount for cl in self.cash_letters)
        self.control.validate(options)
        logger.debug(
            f"Built file with {self.control.cash_letter_count} cash letters "
            f"and {self.control.total_record_count} records"
        )

    build = create

    def validate(self, options: Optional[ICLOptions] = None) -> None:
        """Validate every record and every control total; raises the first error."""
        options = options or DEFAULT_OPTIONS
        self.header.validate(options)
        self._validate_cash_letter_ids()
        for cash_letter in self.cash_letters:
            cash_letter.validate(options)
        self.validate_control(options)

    def validate_control(self, options: Optional[ICLOptions] = None) -> None:
        """Check the File Control record against the cash letters."""
        self.control.validate(options)
        for label, calculated, declared in (
            ("CashLetterCount", len(self.cash_letters), self.control.cash_letter_count),
            ("TotalRecordCount", self.record_count(), self.control.total_record_count),
            (
                "TotalItemCount",
                sum(cl.control.cash_letter_items_count for cl in self.cash_letters),
                self.control.total_item_count,
            ),
            (
                "FileTotalAmount",
                sum(cl.control.cash_letter_total_amount for cl in self.cash_letters),
                self.control.file_total_amount,
            ),
        ):
            if calculated != declared:
                raise FileError(label, MSG_OUT_OF_BALANCE % (calculated, declared))

    # JSON boundary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileHeader": self.header.to_dict(),
            "cashLetters": [cash_letter.to_dict() for cash_letter in self.cash_letters],
            "fileControl": self.control.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ICLFile":
        icl_file = cls(FileHeader.from_dict(data.get("fileHeader") or {}))
        icl_file.cash_letters = [CashLetter.from_dict(d) for d in data.get("cashLetters") or []]
        icl_file.control = FileControl.from_dict(data.get("fileControl") or {})
        return icl_file

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "ICLFile":
        return cls.from_dict(json.loads(text))
