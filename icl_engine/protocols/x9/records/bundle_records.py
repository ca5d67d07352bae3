"""
Bundle Header (20) and Bundle Control (70) Records
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from icl_engine.protocols.x9.fields import FieldKind, FieldSpec
from icl_engine.protocols.x9.records.base import X9Record
from icl_engine.protocols.x9.validators import (
    MSG_COLLECTION_TYPE,
    MSG_CREDIT_TOTAL_INDICATOR,
    FieldValidator,
)
from icl_engine.protocols.x9.x9_codes import BUNDLE_COLLECTION_TYPES, CreditTotalIndicator

N, A, S, D = FieldKind.NUMERIC, FieldKind.ALPHA, FieldKind.STRING, FieldKind.DATE


@dataclass
class BundleHeader(X9Record):
    """
    Bundle Header Record (Type 20).

    Groups items sharing a business date and destination.
    """

    RECORD_TYPE = "20"
    LAYOUT = (
        FieldSpec("collection_type_indicator", 3, 4, A),
        FieldSpec("destination_routing_number", 5, 13, S),
        FieldSpec("ece_institution_routing_number", 14, 22, S),
        FieldSpec("bundle_business_date", 23, 30, D),
        FieldSpec("bundle_creation_date", 31, 38, D),
        FieldSpec("bundle_id", 39, 48, A),
        FieldSpec("bundle_sequence_number", 49, 52, A),
        FieldSpec("cycle_number", 53, 54, A),
        FieldSpec("user_field", 64, 68, A),
    )

    collection_type_indicator: str = ""
    destination_routing_number: str = ""
    ece_institution_routing_number: str = ""
    bundle_business_date: Optional[date] = None
    bundle_creation_date: Optional[date] = None
    bundle_id: str = ""
    bundle_sequence_number: str = ""
    cycle_number: str = ""
    user_field: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("CollectionTypeIndicator", self.collection_type_indicator)
        v.required_routing_number("DestinationRoutingNumber", self.destination_routing_number)
        v.required_routing_number("ECEInstitutionRoutingNumber", self.ece_institution_routing_number)
        v.required("BundleBusinessDate", self.bundle_business_date)
        v.required("BundleCreationDate", self.bundle_creation_date)
        v.required("BundleSequenceNumber", self.bundle_sequence_number)

    def validate_fields(self, v: FieldValidator) -> None:
        v.one_of(
            "CollectionTypeIndicator",
            self.collection_type_indicator,
            BUNDLE_COLLECTION_TYPES,
            MSG_COLLECTION_TYPE,
        )
        v.numeric("DestinationRoutingNumber", self.destination_routing_number)
        v.numeric("ECEInstitutionRoutingNumber", self.ece_institution_routing_number)
        v.alphanumeric("BundleID", self.bundle_id)
        v.numeric("BundleSequenceNumber", self.bundle_sequence_number.strip())
        v.alphanumeric("CycleNumber", self.cycle_number)
        v.alphanumeric_special("UserField", self.user_field)


@dataclass
class BundleControl(X9Record):
    """
    Bundle Control Record (Type 70).

    Item count and totals for one bundle; computed by Bundle.build().
    """

    RECORD_TYPE = "70"
    LAYOUT = (
        FieldSpec("bundle_items_count", 3, 6, N),
        FieldSpec("bundle_total_amount", 7, 18, N),
        FieldSpec("micr_valid_total_amount", 19, 30, N),
        FieldSpec("bundle_images_count", 31, 35, N),
        FieldSpec("user_field", 36, 55, A),
        FieldSpec("credit_total_indicator", 56, 56, N),
    )

    bundle_items_count: int = 0
    bundle_total_amount: int = 0
    micr_valid_total_amount: int = 0
    bundle_images_count: int = 0
    user_field: str = ""
    credit_total_indicator: int = 0

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("BundleItemsCount", self.bundle_items_count)

    def validate_fields(self, v: FieldValidator) -> None:
        v.alphanumeric_special("UserField", self.user_field)
        v.one_of(
            "CreditTotalIndicator",
            self.credit_total_indicator,
            CreditTotalIndicator.codes(),
            MSG_CREDIT_TOTAL_INDICATOR,
        )
