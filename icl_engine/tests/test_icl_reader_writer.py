"""
ICL Engine - Reader and Writer Tests

Round trips through every framing and encoding, large images, structural
errors and error reporting.
"""

import io
import random

import pytest

from icl_engine.core.exceptions import BundleError, FieldError, FileError, ParseError
from icl_engine.protocols.x9.framing import LENGTH_PREFIX, MSG_UNKNOWN_RECORD_TYPE
from icl_engine.protocols.x9.icl_reader import (
    MSG_FILE_BUNDLE_OUTSIDE,
    MSG_FILE_CASH_LETTER_OUTSIDE,
    MSG_FILE_HEADER,
    ICLReader,
    read_file,
)
from icl_engine.protocols.x9.icl_writer import ICLWriter, write_file
from icl_engine.protocols.x9.options import CharacterEncoding, Framing, ICLOptions
from icl_engine.protocols.x9.records import (
    CheckDetail,
    ImageViewData,
    UserGeneral,
    UserPayeeEndorsement,
)

VARIABLE = ICLOptions(framing=Framing.VARIABLE)
EBCDIC_VARIABLE = ICLOptions(framing=Framing.VARIABLE, encoding=CharacterEncoding.EBCDIC)
EBCDIC_FIXED = ICLOptions(encoding=CharacterEncoding.EBCDIC)


def write_bytes(icl, options=None) -> bytes:
    buffer = io.BytesIO()
    ICLWriter(buffer, options).write(icl)
    return buffer.getvalue()


def read_bytes(data: bytes, options=None):
    return ICLReader(io.BytesIO(data), options).read()


def fixed_lines(icl) -> list:
    """Built file as a list of ASCII lines, for tampering."""
    icl.create()
    return [record.format() for record in icl.records()]


def join_lines(lines) -> bytes:
    return ("\n".join(lines) + "\n").encode("latin-1")


class TestRoundTrip:
    """Writing and reading back yields the same tree."""

    @pytest.mark.parametrize(
        "options",
        [None, VARIABLE, EBCDIC_FIXED, EBCDIC_VARIABLE, ICLOptions(line_terminator=b"\r\n")],
        ids=["fixed-ascii", "variable-ascii", "fixed-ebcdic", "variable-ebcdic", "crlf"],
    )
    def test_minimal_forward_file(self, forward_file, options):
        data = write_bytes(forward_file, options)
        parsed = read_bytes(data, options)
        assert parsed.to_dict() == forward_file.to_dict()

    def test_fixed_ascii_layout(self, forward_file):
        data = write_bytes(forward_file)
        lines = data.split(b"\n")
        assert lines[0][:2] == b"01"
        assert len(lines[0]) == 80
        assert lines[-1] == b""
        assert lines[-2][:2] == b"99"

    def test_variable_framing_prefix(self, forward_file):
        data = write_bytes(forward_file, VARIABLE)
        (length,) = LENGTH_PREFIX.unpack(data[:4])
        assert length == 80
        assert data[4:6] == b"01"

    def test_ebcdic_json_matches_source(self, forward_file):
        data = write_bytes(forward_file, EBCDIC_VARIABLE)
        assert data[4:6] == b"\xf0\xf1"
        parsed = read_bytes(data, EBCDIC_VARIABLE)
        assert parsed.to_json() == forward_file.to_json()

    def test_write_returns_record_count(self, forward_file):
        buffer = io.BytesIO()
        assert ICLWriter(buffer).write(forward_file) == 13

    def test_file_helpers(self, forward_file, tmp_path):
        path = tmp_path / "forward.x9"
        assert write_file(forward_file, path, VARIABLE) == 13
        assert read_file(path, VARIABLE) == forward_file


class TestImagePayloads:
    """Opaque image bytes survive every framing and encoding."""

    def test_large_image_variable_framing(self, make_forward_file):
        image = random.Random(187).randbytes(128 * 1024)
        icl = make_forward_file(image_data=image)
        data = write_bytes(icl, VARIABLE)

        parsed = read_bytes(data, VARIABLE.with_changes(buffer_size=256 * 1024))
        image_view = parsed.cash_letters[0].bundles[0].checks[0].image_view_data[0]
        assert image_view.image_data == image
        assert image_view.length_image_data == len(image)

    def test_large_image_exceeds_default_buffer(self, make_forward_file):
        icl = make_forward_file(image_data=b"\x00" * (128 * 1024))
        data = write_bytes(icl, VARIABLE)
        with pytest.raises(ParseError) as exc_info:
            read_bytes(data, VARIABLE)
        assert isinstance(exc_info.value.err, FileError)
        assert "line too long" in exc_info.value.err.msg

    def test_large_image_fixed_framing(self, make_forward_file):
        image = random.Random(100).randbytes(128 * 1024)
        icl = make_forward_file(image_data=image)
        data = write_bytes(icl)
        options = ICLOptions(buffer_size=256 * 1024)
        parsed = read_bytes(data, options)
        assert parsed.cash_letters[0].bundles[0].checks[0].image_view_data[0].image_data == image
        with pytest.raises(ParseError) as exc_info:
            read_bytes(data)
        assert "line too long" in exc_info.value.err.msg

    def test_image_too_large_for_length_field(self, make_forward_file):
        icl = make_forward_file(image_data=bytes(10_000_000))
        options = VARIABLE.with_changes(max_payload_length=32 * 1024 * 1024)
        with pytest.raises(FieldError) as exc_info:
            write_bytes(icl, options)
        assert exc_info.value.field_name == "LengthImageData"

    def test_terminator_bytes_in_image(self, make_forward_file):
        image = b"\n\r\x15\x25" * 64
        icl = make_forward_file(image_data=image)
        for options in (None, EBCDIC_FIXED, EBCDIC_VARIABLE):
            parsed = read_bytes(write_bytes(icl, options), options)
            assert parsed.cash_letters[0].bundles[0].checks[0].image_view_data[0].image_data == image


class TestUserRecords:
    """Type 68 placement and dispatch."""

    def _user_general(self, data: bytes) -> UserGeneral:
        record = UserGeneral(user_record_format_type="002", format_type_version_level="1")
        record.set_user_data(data)
        return record

    def test_placement(self, forward_file):
        forward_file.cash_letters[0].add_user_record(self._user_general(b"cash letter \x00\xff"))
        check = forward_file.cash_letters[0].bundles[0].checks[0]
        check.add_user_record(
            UserPayeeEndorsement(format_type_version_level="1", payee_name="Payee Name", endorsement_indicator=1)
        )

        for options in (None, EBCDIC_VARIABLE):
            parsed = read_bytes(write_bytes(forward_file, options), options)
            cash_letter = parsed.cash_letters[0]
            assert len(cash_letter.user_records) == 1
            assert isinstance(cash_letter.user_records[0], UserGeneral)
            assert cash_letter.user_records[0].user_data == b"cash letter \x00\xff"
            item_records = cash_letter.bundles[0].checks[0].user_records
            assert len(item_records) == 1
            assert isinstance(item_records[0], UserPayeeEndorsement)
            assert item_records[0].payee_name == "Payee Name"


class TestStructuralErrors:
    """Records out of place are reported with their line number."""

    def test_missing_file_header(self, forward_file):
        lines = fixed_lines(forward_file)
        with pytest.raises(ParseError) as exc_info:
            read_bytes(join_lines(lines[1:]))
        assert isinstance(exc_info.value.err, FileError)
        assert exc_info.value.err.msg == MSG_FILE_HEADER
        assert exc_info.value.line_number == 1

    def test_missing_file_control(self, forward_file):
        lines = fixed_lines(forward_file)
        with pytest.raises(ParseError) as exc_info:
            read_bytes(join_lines(lines[:-1]))
        assert exc_info.value.err.field_name == "FileControl"

    def test_bundle_outside_cash_letter(self, forward_file):
        lines = fixed_lines(forward_file)
        # drop the cash letter header
        with pytest.raises(ParseError) as exc_info:
            read_bytes(join_lines(lines[:1] + lines[2:]))
        assert exc_info.value.err.msg == MSG_FILE_CASH_LETTER_OUTSIDE
        assert exc_info.value.line_number == 2
        assert exc_info.value.record_name == "BundleHeader"

    def test_check_outside_bundle(self, forward_file):
        lines = fixed_lines(forward_file)
        # drop the bundle header
        with pytest.raises(ParseError) as exc_info:
            read_bytes(join_lines(lines[:2] + lines[3:]))
        assert exc_info.value.err.msg == MSG_FILE_BUNDLE_OUTSIDE
        assert exc_info.value.record_name == "CheckDetail"

    def test_unknown_record_type(self, forward_file):
        lines = fixed_lines(forward_file)
        lines.insert(1, "42" + " " * 78)
        with pytest.raises(ParseError) as exc_info:
            read_bytes(join_lines(lines))
        assert exc_info.value.err.msg == MSG_UNKNOWN_RECORD_TYPE
        assert exc_info.value.line_number == 2

    def test_short_record(self, forward_file):
        forward_file.create()
        records = list(forward_file.records())
        buffer = io.BytesIO()
        for record in records:
            raw = record.to_raw()
            if isinstance(record, CheckDetail):
                raw = raw[:40]
            buffer.write(LENGTH_PREFIX.pack(len(raw)) + raw)
        with pytest.raises(ParseError) as exc_info:
            read_bytes(buffer.getvalue(), VARIABLE)
        assert exc_info.value.err.field_name == "RecordLength"
        assert exc_info.value.line_number == 4

    def test_bytes_after_image_payload(self, forward_file):
        forward_file.create()
        buffer = io.BytesIO()
        for record in forward_file.records():
            raw = record.to_raw()
            if isinstance(record, ImageViewData):
                raw += b"TRAILER"
            buffer.write(LENGTH_PREFIX.pack(len(raw)) + raw)
        with pytest.raises(ParseError) as exc_info:
            read_bytes(buffer.getvalue(), VARIABLE)
        assert exc_info.value.err.field_name == "RecordLength"
        assert exc_info.value.line_number == 9

    def test_fixed_width_record_too_long(self, forward_file):
        forward_file.create()
        buffer = io.BytesIO()
        for record in forward_file.records():
            raw = record.to_raw()
            if isinstance(record, CheckDetail):
                raw += b"   "
            buffer.write(LENGTH_PREFIX.pack(len(raw)) + raw)
        with pytest.raises(ParseError) as exc_info:
            read_bytes(buffer.getvalue(), VARIABLE)
        assert exc_info.value.err.field_name == "RecordLength"
        assert exc_info.value.line_number == 4

    def test_truncated_stream(self, forward_file):
        data = write_bytes(forward_file, VARIABLE)
        with pytest.raises(ParseError) as exc_info:
            read_bytes(data[:-10], VARIABLE)
        assert isinstance(exc_info.value.err, FileError)

    def test_invalid_field(self, forward_file):
        lines = fixed_lines(forward_file)
        check = CheckDetail.from_line(lines[3])
        check.bofd_indicator = "X"
        lines[3] = check.format()
        with pytest.raises(ParseError) as exc_info:
            read_bytes(join_lines(lines))
        assert isinstance(exc_info.value.err, FieldError)
        assert exc_info.value.err.field_name == "BOFDIndicator"
        assert str(exc_info.value).startswith("line:4 record:CheckDetail")

    def test_out_of_balance_bundle_control(self, forward_file):
        forward_file.create()
        forward_file.cash_letters[0].bundles[0].control.bundle_total_amount = 5
        lines = [record.format() for record in forward_file.records()]
        reader = ICLReader(io.BytesIO(join_lines(lines)))
        with pytest.raises(ParseError) as exc_info:
            reader.read()
        assert isinstance(exc_info.value.err, BundleError)
        assert exc_info.value.err.field_name == "BundleTotalAmount"
        assert exc_info.value.record_name == "BundleControl"
        # the partial tree stays available
        assert len(reader.file.cash_letters) == 1
        assert len(reader.file.cash_letters[0].bundles[0].checks) == 1

    def test_writer_validates_without_build(self, forward_file):
        forward_file.create()
        forward_file.control.total_record_count = 99
        with pytest.raises(FileError):
            ICLWriter(io.BytesIO()).write(forward_file, build=False)
