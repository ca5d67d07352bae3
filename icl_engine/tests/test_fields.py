"""
ICL Engine - Field Primitive Tests
"""

from datetime import date, time

import pytest

from icl_engine.protocols.x9.fields import (
    BLANK_DATE,
    FieldKind,
    FieldSpec,
    alpha_field,
    field_label,
    format_simple_time,
    format_yyyymmdd_date,
    json_name,
    nbsm_field,
    numeric_field,
    parse_nbsm_field,
    parse_num_field,
    parse_simple_time,
    parse_string_field,
    parse_yyyymmdd_date,
    string_field,
)


class TestFormatting:
    """Fixed-width formatting."""

    def test_numeric_zero_pads(self):
        """Numbers are right-aligned with leading zeros."""
        assert numeric_field(42, 6) == "000042"

    def test_numeric_keeps_rightmost_digits(self):
        """An overlong number keeps its low-order digits."""
        assert numeric_field(1234567, 4) == "4567"

    def test_numeric_rejects_negative(self):
        """Negative values cannot be formatted."""
        with pytest.raises(ValueError):
            numeric_field(-1, 4)

    def test_alpha_blank_pads_and_truncates(self):
        """Text is left-aligned and cut at the field width."""
        assert alpha_field("AB", 4) == "AB  "
        assert alpha_field("ABCDEF", 4) == "ABCD"

    def test_string_zero_pads_left(self):
        """Routing numbers are zero-filled on the left."""
        assert string_field("31300012", 9) == "031300012"

    def test_nbsm_right_aligns(self):
        """MICR fields are blank-filled on the left."""
        assert nbsm_field("5558881", 10) == "   5558881"
        assert nbsm_field("123456789012", 10) == "3456789012"


class TestParsing:
    """Fixed-width parsing."""

    def test_num_field_tolerates_blanks(self):
        """Blank or non-numeric input parses as zero."""
        assert parse_num_field("  ") == 0
        assert parse_num_field("12A") == 0
        assert parse_num_field("0042") == 42

    def test_string_and_nbsm_strip(self):
        """Alpha fields drop trailing blanks, NBSM fields drop leading blanks."""
        assert parse_string_field("AB  ") == "AB"
        assert parse_nbsm_field("   5558881") == "5558881"

    def test_dates(self):
        """YYYYMMDD dates are strict; blanks and zeros are unset."""
        assert parse_yyyymmdd_date("20181008") == date(2018, 10, 8)
        assert parse_yyyymmdd_date(BLANK_DATE) is None
        assert parse_yyyymmdd_date("00000000") is None
        assert parse_yyyymmdd_date("20181332") is None
        assert format_yyyymmdd_date(None) == BLANK_DATE
        assert format_yyyymmdd_date(date(2018, 10, 8)) == "20181008"

    def test_times(self):
        """HHMM times reject out-of-range values."""
        assert parse_simple_time("1430") == time(14, 30)
        assert parse_simple_time("2460") is None
        assert format_simple_time(time(9, 5)) == "0905"
        assert format_simple_time(None) == "0000"


class TestFieldSpec:
    """Layout descriptors."""

    def test_width_and_slice(self):
        """Columns are 1-based and inclusive."""
        spec = FieldSpec("payor_bank_routing_number", 19, 26, FieldKind.STRING)
        line = "25" + " " * 16 + "03130001" + "2"
        assert spec.width == 8
        assert spec.parse(line) == "03130001"

    def test_labels(self):
        """Attribute names map to standard field names and JSON keys."""
        assert field_label("bofd_indicator") == "BOFDIndicator"
        assert field_label("ece_institution_item_sequence_number") == "ECEInstitutionItemSequenceNumber"
        assert json_name("cash_letter_id") == "cashLetterID"
        assert json_name("micr_valid_indicator") == "micrValidIndicator"
