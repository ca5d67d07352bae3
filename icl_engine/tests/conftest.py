"""
ICL Engine - Pytest Configuration and Fixtures

Builders for well-formed records and a minimal forward file (one cash
letter, one bundle, one check with addenda A/B/C and one image view).
"""

from datetime import date, time
from typing import Callable

import pytest

from icl_engine.protocols.x9.containers import Bundle, CashLetter, ICLFile
from icl_engine.protocols.x9.records import (
    BundleHeader,
    CashLetterHeader,
    CheckDetail,
    CheckDetailAddendumA,
    CheckDetailAddendumB,
    CheckDetailAddendumC,
    FileHeader,
    ImageViewAnalysis,
    ImageViewData,
    ImageViewDetail,
    ReturnDetail,
)

BUSINESS_DATE = date(2018, 10, 8)
CREATION_TIME = time(14, 30)


def _file_header() -> FileHeader:
    return FileHeader(
        standard_level="35",
        test_file_indicator="T",
        immediate_destination="231380104",
        immediate_origin="121042882",
        file_creation_date=BUSINESS_DATE,
        file_creation_time=CREATION_TIME,
        resend_indicator="N",
        immediate_destination_name="Citadel",
        immediate_origin_name="Wells Fargo",
        country_code="US",
    )


def _cash_letter_header(cash_letter_id: str = "A1", collection_type: str = "01") -> CashLetterHeader:
    return CashLetterHeader(
        collection_type_indicator=collection_type,
        destination_routing_number="231380104",
        ece_institution_routing_number="121042882",
        cash_letter_business_date=BUSINESS_DATE,
        cash_letter_creation_date=BUSINESS_DATE,
        cash_letter_creation_time=CREATION_TIME,
        record_type_indicator="I",
        documentation_type_indicator="G",
        cash_letter_id=cash_letter_id,
        originator_contact_name="Contact Name",
        originator_contact_phone_number="5558675552",
    )


def _bundle_header(sequence_number: str = "1", collection_type: str = "01") -> BundleHeader:
    return BundleHeader(
        collection_type_indicator=collection_type,
        destination_routing_number="231380104",
        ece_institution_routing_number="121042882",
        bundle_business_date=BUSINESS_DATE,
        bundle_creation_date=BUSINESS_DATE,
        bundle_id="9999",
        bundle_sequence_number=sequence_number,
        cycle_number="01",
    )


def _check_detail(item_amount: int = 100000) -> CheckDetail:
    return CheckDetail(
        auxiliary_on_us="123456789",
        payor_bank_routing_number="03130001",
        payor_bank_check_digit="2",
        on_us="5558881",
        item_amount=item_amount,
        ece_institution_item_sequence_number="1",
        documentation_type_indicator="G",
        return_acceptance_indicator="D",
        micr_valid_indicator=1,
        bofd_indicator="Y",
        addendum_count=0,
        correction_indicator=0,
        archive_type_indicator="B",
    )


def _addendum_a(record_number: int = 1) -> CheckDetailAddendumA:
    return CheckDetailAddendumA(
        record_number=record_number,
        return_location_routing_number="121042882",
        bofd_endorsement_date=BUSINESS_DATE,
        bofd_item_sequence_number="1",
        bofd_account_number="938383",
        bofd_branch_code="01",
        payee_name="Test Payee",
        truncation_indicator="Y",
        bofd_conversion_indicator="1",
        bofd_correction_indicator=0,
    )


def _addendum_b() -> CheckDetailAddendumB:
    return CheckDetailAddendumB(
        image_reference_key_indicator=1,
        microfilm_archive_sequence_number="1A",
        description="CD Addendum B",
    )


def _addendum_c(record_number: int = 1) -> CheckDetailAddendumC:
    return CheckDetailAddendumC(
        record_number=record_number,
        endorsing_bank_routing_number="121042882",
        bofd_endorsement_business_date=BUSINESS_DATE,
        endorsing_bank_item_sequence_number="1",
        truncation_indicator="Y",
        endorsing_bank_conversion_indicator="1",
        endorsing_bank_correction_indicator=0,
        return_reason="A",
        endorsing_bank_identifier=0,
    )


def _image_view_detail() -> ImageViewDetail:
    return ImageViewDetail(
        image_indicator=1,
        image_creator_routing_number="031300012",
        image_creator_date=BUSINESS_DATE,
        image_view_format_indicator="00",
        image_view_compression_algorithm="00",
        view_side_indicator=0,
        view_descriptor="00",
        digital_signature_indicator=0,
        digital_signature_method="00",
        image_recreate_indicator=0,
        override_indicator="0",
    )


def _image_view_data(image_data: bytes = b"") -> ImageViewData:
    record = ImageViewData(
        ece_institution_routing_number="121042882",
        bundle_business_date=BUSINESS_DATE,
        cycle_number="01",
        ece_institution_item_sequence_number="1",
        security_originator_name="Sec Orig Name",
        security_authenticator_name="Sec Auth Name",
        security_key_name="SECURE",
        clipping_origin=0,
    )
    record.set_image_data(image_data)
    return record


def _forward_check(item_amount: int = 100000, image_data: bytes = b"") -> CheckDetail:
    check = _check_detail(item_amount)
    check.add_check_detail_addendum_a(_addendum_a())
    check.add_check_detail_addendum_b(_addendum_b())
    check.add_check_detail_addendum_c(_addendum_c())
    check.addendum_count = 3
    check.add_image_view_detail(_image_view_detail())
    check.add_image_view_data(_image_view_data(image_data))
    check.add_image_view_analysis(ImageViewAnalysis())
    return check


def _return_detail() -> ReturnDetail:
    return ReturnDetail(
        payor_bank_routing_number="03130001",
        payor_bank_check_digit="2",
        on_us="5558881",
        item_amount=100000,
        return_reason="A",
        documentation_type_indicator="G",
        forward_bundle_date=BUSINESS_DATE,
        ece_institution_item_sequence_number="1",
        archive_type_indicator="B",
    )


def _forward_file(image_data: bytes = b"") -> ICLFile:
    bundle = Bundle(_bundle_header())
    bundle.add_check_detail(_forward_check(image_data=image_data))

    cash_letter = CashLetter(_cash_letter_header())
    cash_letter.add_bundle(bundle)
    cash_letter.control.ece_institution_name = "Wells Fargo"
    cash_letter.control.settlement_date = BUSINESS_DATE

    icl = ICLFile(_file_header())
    icl.add_cash_letter(cash_letter)
    icl.control.immediate_origin_contact_name = "Contact Name"
    icl.control.immediate_origin_contact_phone_number = "5558675552"
    return icl


@pytest.fixture
def file_header() -> FileHeader:
    return _file_header()


@pytest.fixture
def make_cash_letter_header() -> Callable[..., CashLetterHeader]:
    return _cash_letter_header


@pytest.fixture
def make_bundle_header() -> Callable[..., BundleHeader]:
    return _bundle_header


@pytest.fixture
def check_detail() -> CheckDetail:
    """Check Detail without children and with addendum_count 0."""
    return _check_detail()


@pytest.fixture
def make_forward_check() -> Callable[..., CheckDetail]:
    return _forward_check


@pytest.fixture
def return_detail() -> ReturnDetail:
    return _return_detail()


@pytest.fixture
def make_addendum_a() -> Callable[..., CheckDetailAddendumA]:
    return _addendum_a


@pytest.fixture
def addendum_b() -> CheckDetailAddendumB:
    return _addendum_b()


@pytest.fixture
def make_addendum_c() -> Callable[..., CheckDetailAddendumC]:
    return _addendum_c


@pytest.fixture
def image_view_detail() -> ImageViewDetail:
    return _image_view_detail()


@pytest.fixture
def make_image_view_data() -> Callable[..., ImageViewData]:
    return _image_view_data


@pytest.fixture
def make_forward_file() -> Callable[..., ICLFile]:
    """Factory for the minimal forward file; pass image_data to attach an image."""
    return _forward_file


@pytest.fixture
def forward_file() -> ICLFile:
    return _forward_file()
