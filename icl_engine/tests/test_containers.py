"""
ICL Engine - Container Tests

Bundle, CashLetter and ICLFile: control totals, addendum caps and the
cross-record rules.
"""

import json

import pytest

from icl_engine.core.exceptions import BundleError, CashLetterError, FieldError, FileError
from icl_engine.protocols.x9.containers import (
    MSG_BUNDLE_ENTRIES,
    Bundle,
    CashLetter,
    ICLFile,
)
from icl_engine.protocols.x9.records import (
    Credit,
    ReturnDetailAddendumC,
    ReturnDetailAddendumD,
    RoutingNumberSummary,
    UserGeneral,
)


class TestMinimalForwardFile:
    """One cash letter, one bundle, one check with addenda and an image view."""

    def test_build_computes_controls(self, forward_file):
        forward_file.create()

        bundle = forward_file.cash_letters[0].bundles[0]
        assert bundle.control.bundle_items_count == 1
        assert bundle.control.bundle_total_amount == 100000
        assert bundle.control.micr_valid_total_amount == 100000
        assert bundle.control.bundle_images_count == 1

        cash_letter_control = forward_file.cash_letters[0].control
        assert cash_letter_control.cash_letter_bundle_count == 1
        assert cash_letter_control.cash_letter_items_count == 1
        assert cash_letter_control.cash_letter_total_amount == 100000
        assert cash_letter_control.cash_letter_images_count == 1

        assert forward_file.control.cash_letter_count == 1
        assert forward_file.control.total_item_count == 1
        assert forward_file.control.file_total_amount == 100000

    def test_record_count(self, forward_file):
        forward_file.create()
        # 01 10 20 25 26 27 28 50 52 54 70 90 99
        assert forward_file.record_count() == 13
        assert forward_file.control.total_record_count == 13
        assert len(list(forward_file.records())) == 13

    def test_emission_order(self, forward_file):
        forward_file.create()
        types = [record.record_type for record in forward_file.records()]
        assert types == ["01", "10", "20", "25", "26", "27", "28", "50", "52", "54", "70", "90", "99"]

    def test_validate_after_create(self, forward_file):
        forward_file.create()
        forward_file.validate()

    def test_build_keeps_user_owned_fields(self, forward_file):
        forward_file.create()
        assert forward_file.control.immediate_origin_contact_name == "Contact Name"
        assert forward_file.cash_letters[0].control.ece_institution_name == "Wells Fargo"

    def test_out_of_balance_file_control(self, forward_file):
        forward_file.create()
        forward_file.control.file_total_amount = 1
        with pytest.raises(FileError) as exc_info:
            forward_file.validate()
        assert exc_info.value.field_name == "FileTotalAmount"

    def test_empty_file(self, file_header):
        with pytest.raises(FileError):
            ICLFile(file_header).create()


class TestBundle:
    """Bundle cross-record rules."""

    def test_mixed_bundle_rejected(self, make_bundle_header, make_forward_check, return_detail):
        bundle = Bundle(make_bundle_header())
        bundle.add_check_detail(make_forward_check())
        bundle.add_return_detail(return_detail)
        with pytest.raises(BundleError) as exc_info:
            bundle.build()
        assert exc_info.value.field_name == "BundleEntries"
        assert exc_info.value.msg == MSG_BUNDLE_ENTRIES
        assert exc_info.value.bundle_sequence_number == "1"

    def test_addendum_over_cap(self, make_bundle_header, make_forward_check, make_addendum_a):
        check = make_forward_check()
        for number in range(2, 11):
            check.add_check_detail_addendum_a(make_addendum_a(number % 9 + 1))
        check.addendum_count = 12
        assert len(check.check_detail_addendum_a) == 10

        bundle = Bundle(make_bundle_header())
        bundle.add_check_detail(check)
        bundle.control.bundle_items_count = 1
        with pytest.raises(BundleError) as exc_info:
            bundle.validate()
        assert exc_info.value.field_name == "CheckDetailAddendumA"

    def test_second_addendum_b_rejected(self, make_bundle_header, make_forward_check, addendum_b):
        check = make_forward_check()
        check.add_check_detail_addendum_b(addendum_b)
        check.addendum_count = 4
        bundle = Bundle(make_bundle_header())
        bundle.add_check_detail(check)
        with pytest.raises(BundleError) as exc_info:
            bundle.build()
        assert exc_info.value.field_name == "CheckDetailAddendumB"

    def test_addendum_count_mismatch(self, make_bundle_header, make_forward_check):
        check = make_forward_check()
        check.addendum_count = 2
        bundle = Bundle(make_bundle_header())
        bundle.add_check_detail(check)
        with pytest.raises(BundleError) as exc_info:
            bundle.build()
        assert exc_info.value.field_name == "AddendumCount"

    def test_invalid_child_record(self, make_bundle_header, make_forward_check):
        check = make_forward_check()
        check.image_view_detail[0].view_descriptor = "99"
        bundle = Bundle(make_bundle_header())
        bundle.add_check_detail(check)
        with pytest.raises(FieldError) as exc_info:
            bundle.build()
        assert exc_info.value.field_name == "ViewDescriptor"

    def test_return_bundle_totals(self, make_bundle_header, return_detail):
        bundle = Bundle(make_bundle_header(collection_type="03"))
        bundle.add_return_detail(return_detail)
        bundle.build()
        assert bundle.control.bundle_items_count == 1
        assert bundle.control.bundle_total_amount == 100000
        assert bundle.control.micr_valid_total_amount == 0
        bundle.validate()

    def test_second_return_addendum_c_rejected(self, make_bundle_header, return_detail):
        for _ in range(2):
            return_detail.add_return_detail_addendum_c(
                ReturnDetailAddendumC(
                    image_reference_key_indicator=1,
                    microfilm_archive_sequence_number="1A",
                    description="RD Addendum C",
                )
            )
        return_detail.addendum_count = 2
        bundle = Bundle(make_bundle_header(collection_type="03"))
        bundle.add_return_detail(return_detail)
        with pytest.raises(BundleError) as exc_info:
            bundle.build()
        assert exc_info.value.field_name == "ReturnDetailAddendumC"

    def test_return_addendum_d_over_cap(self, make_bundle_header, return_detail):
        for _ in range(100):
            return_detail.add_return_detail_addendum_d(ReturnDetailAddendumD())
        return_detail.addendum_count = 99
        bundle = Bundle(make_bundle_header(collection_type="03"))
        bundle.add_return_detail(return_detail)
        with pytest.raises(BundleError) as exc_info:
            bundle.build()
        assert exc_info.value.field_name == "ReturnDetailAddendumD"

    def test_return_addendum_count_mismatch(self, make_bundle_header, return_detail):
        return_detail.add_return_detail_addendum_c(
            ReturnDetailAddendumC(image_reference_key_indicator=1, microfilm_archive_sequence_number="1A")
        )
        bundle = Bundle(make_bundle_header(collection_type="03"))
        bundle.add_return_detail(return_detail)
        with pytest.raises(BundleError) as exc_info:
            bundle.build()
        assert exc_info.value.field_name == "AddendumCount"
        assert exc_info.value.bundle_sequence_number == "1"

    def test_item_amount_wider_than_column(self, make_bundle_header, make_forward_check):
        bundle = Bundle(make_bundle_header())
        bundle.add_check_detail(make_forward_check(item_amount=12345678901))
        with pytest.raises(FieldError) as exc_info:
            bundle.build()
        assert exc_info.value.field_name == "ItemAmount"

    def test_control_mismatch(self, make_bundle_header, make_forward_check):
        bundle = Bundle(make_bundle_header())
        bundle.add_check_detail(make_forward_check())
        bundle.build()
        bundle.control.bundle_images_count = 2
        with pytest.raises(BundleError) as exc_info:
            bundle.validate()
        assert exc_info.value.field_name == "BundleImagesCount"
        assert "out-of-balance" in exc_info.value.msg


class TestCashLetter:
    """Cash letter rules and totals."""

    def _credit(self) -> Credit:
        return Credit(
            payor_bank_routing_number="031300012",
            credit_account_number_on_us="123456",
            item_amount=500,
            ece_institution_item_sequence_number="1",
        )

    def test_credits_excluded_by_default(self, forward_file):
        forward_file.cash_letters[0].add_credit(self._credit())
        forward_file.create()
        control = forward_file.cash_letters[0].control
        assert control.cash_letter_items_count == 1
        assert control.cash_letter_total_amount == 100000

    def test_credits_included_with_indicator(self, forward_file):
        cash_letter = forward_file.cash_letters[0]
        cash_letter.add_credit(self._credit())
        cash_letter.control.credit_total_indicator = 1
        forward_file.create()
        assert cash_letter.control.cash_letter_items_count == 2
        assert cash_letter.control.cash_letter_total_amount == 100500
        assert forward_file.control.total_item_count == 2
        assert forward_file.control.file_total_amount == 100500

    def test_no_items_cash_letter_with_bundles(self, forward_file):
        forward_file.cash_letters[0].header.record_type_indicator = "N"
        with pytest.raises(CashLetterError) as exc_info:
            forward_file.create()
        assert exc_info.value.field_name == "RecordTypeIndicator"
        assert exc_info.value.cash_letter_id == "A1"

    def test_routing_number_summary_on_return_cash_letter(self, make_cash_letter_header):
        cash_letter = CashLetter(make_cash_letter_header(collection_type="03"))
        cash_letter.add_routing_number_summary(
            RoutingNumberSummary(cash_letter_routing_number="031300012", routing_number_item_count=1)
        )
        with pytest.raises(CashLetterError) as exc_info:
            cash_letter.build()
        assert exc_info.value.field_name == "CollectionTypeIndicator"

    def test_routing_number_summary_on_forward_cash_letter(self, forward_file):
        forward_file.cash_letters[0].add_routing_number_summary(
            RoutingNumberSummary(
                cash_letter_routing_number="031300012",
                routing_number_total_amount=100000,
                routing_number_item_count=1,
            )
        )
        forward_file.create()
        types = [record.record_type for record in forward_file.records()]
        assert types[-3:] == ["85", "90", "99"]

    def test_duplicate_cash_letter_id(self, forward_file, make_cash_letter_header):
        forward_file.add_cash_letter(CashLetter(make_cash_letter_header(cash_letter_id="A1")))
        with pytest.raises(FileError) as exc_info:
            forward_file.create()
        assert exc_info.value.field_name == "CashLetterID"

    def test_cash_letter_user_records_precede_bundles(self, forward_file):
        record = UserGeneral(user_record_format_type="002", format_type_version_level="1")
        record.set_user_data(b"cash letter data")
        forward_file.cash_letters[0].add_user_record(record)
        forward_file.create()
        types = [r.record_type for r in forward_file.records()]
        assert types[:4] == ["01", "10", "68", "20"]


class TestJSON:
    """JSON boundary."""

    def test_round_trip(self, forward_file):
        forward_file.create()
        restored = ICLFile.from_json(forward_file.to_json())
        assert restored == forward_file
        restored.validate()

    def test_field_names_and_dates(self, forward_file):
        forward_file.create()
        data = json.loads(forward_file.to_json())
        header = data["fileHeader"]
        assert header["immediateDestination"] == "231380104"
        assert header["fileCreationDate"] == "2018-10-08T00:00:00Z"
        assert header["fileCreationTime"] == "14:30"
        check = data["cashLetters"][0]["bundles"][0]["checks"][0]
        assert check["itemAmount"] == 100000
        assert check["payorBankRoutingNumber"] == "03130001"
        assert len(check["checkDetailAddendumA"]) == 1
        assert check["imageViewData"][0]["imageData"] == ""
        assert data["cashLetters"][0]["cashLetterControl"]["settlementDate"] == "2018-10-08T00:00:00Z"

    def test_unset_dates_render_empty(self, forward_file):
        forward_file.cash_letters[0].control.settlement_date = None
        data = forward_file.to_dict()
        assert data["cashLetters"][0]["cashLetterControl"]["settlementDate"] == ""

    def test_yyyymmdd_dates_accepted(self, forward_file):
        data = forward_file.to_dict()
        data["fileHeader"]["fileCreationDate"] = "20181008"
        assert ICLFile.from_dict(data).header.file_creation_date == forward_file.header.file_creation_date
