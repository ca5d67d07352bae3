"""
ICL Reader

Assembles an ICLFile from a byte stream. Records are read one at a time,
parsed, validated and attached to the open container; a record that does
not fit the current position in the file is a structural FileError.

Every error is raised as a ParseError carrying the record number and name.
The partially assembled tree stays available on ICLReader.file.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Optional, Union

from icl_engine.core.exceptions import FileError, ICLException, ParseError
from icl_engine.protocols.x9.containers import Bundle, CashLetter, ICLFile
from icl_engine.protocols.x9.encoding import CharacterCodec
from icl_engine.protocols.x9.framing import MSG_UNKNOWN_RECORD_TYPE, RecordStream
from icl_engine.protocols.x9.options import DEFAULT_OPTIONS, ICLOptions
from icl_engine.protocols.x9.records import (
    CheckDetail,
    ReturnDetail,
    X9Item,
    X9Record,
    record_class_for,
)
from icl_engine.protocols.x9.records.user_records import USER_HEADER_LENGTH

logger = logging.getLogger(__name__)

MSG_RECORD_LENGTH = "Must be at least %d characters and found %d"
MSG_RECORD_TOO_LONG = "Must be at most %d characters and found %d"
MSG_FILE_HEADER = "File Header must be the first record of the file and appear once"
MSG_FILE_CONTROL = "File Control must be the last record of the file and appear once"
MSG_FILE_CASH_LETTER_INSIDE = "Inside of current cash letter"
MSG_FILE_CASH_LETTER_OUTSIDE = "Outside of current cash letter"
MSG_FILE_BUNDLE_INSIDE = "Inside of current bundle"
MSG_FILE_BUNDLE_OUTSIDE = "Outside of current bundle"
MSG_FILE_ITEM_OUTSIDE = "Outside of current check detail or return detail"
MSG_FILE_CASH_LETTER_ID = "is not unique within the file"


class ICLReader:
    """
    Reads one ICL file from a binary stream.

    Example:
        with open("sample.x9", "rb") as fp:
            icl = ICLReader(fp, options).read()
    """

    def __init__(self, stream: BinaryIO, options: Optional[ICLOptions] = None):
        self.options = options or DEFAULT_OPTIONS
        self.codec = CharacterCodec.for_options(self.options)
        self.records = RecordStream(stream, self.options, self.codec)
        self.file = ICLFile()
        self.record_name = ""

        self.current_cash_letter: Optional[CashLetter] = None
        self.current_bundle: Optional[Bundle] = None
        self.current_check_detail: Optional[CheckDetail] = None
        self.current_return_detail: Optional[ReturnDetail] = None

        self._header_read = False
        self._control_read = False
        self._handlers: Dict[str, Callable[[X9Record], None]] = {
            "01": self._file_header,
            "10": self._cash_letter_header,
            "20": self._bundle_header,
            "25": self._check_detail,
            "26": self._check_addendum,
            "27": self._check_addendum,
            "28": self._check_addendum,
            "31": self._return_detail,
            "32": self._return_addendum,
            "33": self._return_addendum,
            "34": self._return_addendum,
            "35": self._return_addendum,
            "50": self._image_view_detail,
            "52": self._image_view_data,
            "54": self._image_view_analysis,
            "61": self._credit,
            "62": self._credit_item,
            "68": self._user_record,
            "70": self._bundle_control,
            "85": self._routing_number_summary,
            "90": self._cash_letter_control,
            "99": self._file_control,
        }

    @property
    def line_number(self) -> int:
        return self.records.line_number

    def read(self) -> ICLFile:
        """Read the whole stream; raises ParseError on the first error."""
        while True:
            try:
                raw = self.records.next_record()
            except FileError as err:
                raise ParseError(err, self.line_number + 1) from err
            if raw is None:
                break
            self.parse_record(raw)

        if not self._header_read:
            raise ParseError(FileError("FileHeader", MSG_FILE_HEADER), self.line_number)
        if not self._control_read:
            raise ParseError(FileError("FileControl", MSG_FILE_CONTROL), self.line_number)
        logger.info(
            f"Read {self.line_number} records in {len(self.file.cash_letters)} cash letters "
            f"({self.options.framing.value} framing, {self.options.encoding.value})"
        )
        return self.file

    def parse_record(self, raw: bytes) -> None:
        """Parse, validate and attach one record."""
        self.record_name = ""
        try:
            record = self._decode(raw)
            self.record_name = record.record_name()
            logger.debug(f"Line {self.line_number}: {self.record_name}")
            record.validate(self.options)
            self._handlers[record.RECORD_TYPE](record)
        except ICLException as err:
            raise ParseError(err, self.line_number, self.record_name or None) from err

    def _decode(self, raw: bytes) -> X9Record:
        record_type = self.codec.decode(raw[:2])
        cls = record_class_for(record_type, self.codec.decode(raw[:USER_HEADER_LENGTH]), self.options)
        if cls is None:
            raise FileError("recordType", MSG_UNKNOWN_RECORD_TYPE, record_type)
        if len(raw) < cls.MIN_LENGTH:
            raise FileError("RecordLength", MSG_RECORD_LENGTH % (cls.MIN_LENGTH, len(raw)))
        if not cls.VARIABLE_LENGTH and len(raw) > cls.RECORD_LENGTH:
            raise FileError("RecordLength", MSG_RECORD_TOO_LONG % (cls.RECORD_LENGTH, len(raw)))
        record = cls()
        record.parse_raw(raw, self.codec)
        return record

    # Cursor checks

    def _require_file_open(self) -> None:
        if not self._header_read:
            raise FileError("FileHeader", MSG_FILE_HEADER)
        if self._control_read:
            raise FileError("FileControl", MSG_FILE_CONTROL)

    def _require_cash_letter(self, field_name: str) -> CashLetter:
        self._require_file_open()
        if self.current_cash_letter is None:
            raise FileError(field_name, MSG_FILE_CASH_LETTER_OUTSIDE)
        return self.current_cash_letter

    def _require_no_bundle(self, field_name: str) -> None:
        if self.current_bundle is not None:
            raise FileError(field_name, MSG_FILE_BUNDLE_INSIDE)

    def _require_bundle(self, field_name: str) -> Bundle:
        self._require_cash_letter(field_name)
        if self.current_bundle is None:
            raise FileError(field_name, MSG_FILE_BUNDLE_OUTSIDE)
        return self.current_bundle

    def _current_item(self) -> Optional[X9Item]:
        return self.current_check_detail or self.current_return_detail

    def _require_item(self, field_name: str) -> X9Item:
        self._require_bundle(field_name)
        item = self._current_item()
        if item is None:
            raise FileError(field_name, MSG_FILE_ITEM_OUTSIDE)
        return item

    # Transitions

    def _file_header(self, record: X9Record) -> None:
        if self._header_read:
            raise FileError("FileHeader", MSG_FILE_HEADER)
        self.file.set_header(record)
        self._header_read = True

    def _cash_letter_header(self, record: X9Record) -> None:
        self._require_file_open()
        if self.current_cash_letter is not None:
            raise FileError("CashLetterHeader", MSG_FILE_CASH_LETTER_INSIDE)
        for existing in self.file.cash_letters:
            if existing.id == record.cash_letter_id:
                raise FileError("CashLetterID", MSG_FILE_CASH_LETTER_ID, record.cash_letter_id)
        cash_letter = CashLetter(record)
        self.file.add_cash_letter(cash_letter)
        self.current_cash_letter = cash_letter

    def _bundle_header(self, record: X9Record) -> None:
        cash_letter = self._require_cash_letter("BundleHeader")
        self._require_no_bundle("BundleHeader")
        bundle = Bundle(record)
        cash_letter.add_bundle(bundle)
        self.current_bundle = bundle

    def _check_detail(self, record: X9Record) -> None:
        self._require_bundle("CheckDetail").add_check_detail(record)
        self.current_check_detail = record
        self.current_return_detail = None

    def _check_addendum(self, record: X9Record) -> None:
        self._require_bundle(record.record_name())
        if self.current_check_detail is None:
            raise FileError(record.record_name(), MSG_FILE_ITEM_OUTSIDE)
        self.current_check_detail.add_addendum(record)

    def _return_detail(self, record: X9Record) -> None:
        self._require_bundle("ReturnDetail").add_return_detail(record)
        self.current_return_detail = record
        self.current_check_detail = None

    def _return_addendum(self, record: X9Record) -> None:
        self._require_bundle(record.record_name())
        if self.current_return_detail is None:
            raise FileError(record.record_name(), MSG_FILE_ITEM_OUTSIDE)
        self.current_return_detail.add_addendum(record)

    def _image_view_detail(self, record: X9Record) -> None:
        self._require_item("ImageViewDetail").add_image_view_detail(record)

    def _image_view_data(self, record: X9Record) -> None:
        self._require_item("ImageViewData").add_image_view_data(record)

    def _image_view_analysis(self, record: X9Record) -> None:
        self._require_item("ImageViewAnalysis").add_image_view_analysis(record)

    def _credit(self, record: X9Record) -> None:
        self._require_cash_letter("Credit").add_credit(record)

    def _credit_item(self, record: X9Record) -> None:
        cash_letter = self._require_cash_letter("CreditItem")
        self._require_no_bundle("CreditItem")
        cash_letter.add_credit_item(record)

    def _user_record(self, record: X9Record) -> None:
        cash_letter = self._require_cash_letter(record.record_name())
        item = self._current_item()
        if item is not None:
            item.add_user_record(record)
        else:
            cash_letter.add_user_record(record)

    def _bundle_control(self, record: X9Record) -> None:
        bundle = self._require_bundle("BundleControl")
        bundle.set_control(record)
        bundle.validate_control(self.options)
        self.current_bundle = None
        self.current_check_detail = None
        self.current_return_detail = None

    def _routing_number_summary(self, record: X9Record) -> None:
        cash_letter = self._require_cash_letter("RoutingNumberSummary")
        self._require_no_bundle("RoutingNumberSummary")
        cash_letter.add_routing_number_summary(record)

    def _cash_letter_control(self, record: X9Record) -> None:
        cash_letter = self._require_cash_letter("CashLetterControl")
        self._require_no_bundle("CashLetterControl")
        cash_letter.set_control(record)
        cash_letter.validate_control(self.options)
        self.current_cash_letter = None

    def _file_control(self, record: X9Record) -> None:
        self._require_file_open()
        if self.current_cash_letter is not None:
            raise FileError("FileControl", MSG_FILE_CASH_LETTER_INSIDE)
        self.file.set_control(record)
        self.file.validate_control(self.options)
        self._control_read = True


def read_file(path: Union[str, Path], options: Optional[ICLOptions] = None) -> ICLFile:
    """Read and validate the ICL file at path."""
    with open(path, "rb") as fp:
        return ICLReader(fp, options).read()
