"""
X9.100-187 record types.

RECORD_TYPES maps the two-character record type to its record class.
Type 68 is shared by User General and User Payee Endorsement; use
record_class_for() once the record text is known.
"""

from typing import Dict, Optional, Type

from icl_engine.protocols.x9.options import DEFAULT_OPTIONS, ICLOptions
from icl_engine.protocols.x9.records.addendum_records import (
    BOFDEndorsementAddendum,
    CheckDetailAddendumA,
    CheckDetailAddendumB,
    CheckDetailAddendumC,
    EndorsingBankAddendum,
    ImageReferenceAddendum,
    ReturnDetailAddendumA,
    ReturnDetailAddendumB,
    ReturnDetailAddendumC,
    ReturnDetailAddendumD,
)
from icl_engine.protocols.x9.records.base import X9Record
from icl_engine.protocols.x9.records.bundle_records import BundleControl, BundleHeader
from icl_engine.protocols.x9.records.cash_letter_records import (
    CashLetterControl,
    CashLetterHeader,
    Credit,
    CreditItem,
    RoutingNumberSummary,
)
from icl_engine.protocols.x9.records.file_records import FileControl, FileHeader
from icl_engine.protocols.x9.records.image_view_records import (
    ImageViewAnalysis,
    ImageViewData,
    ImageViewDetail,
)
from icl_engine.protocols.x9.records.item_records import AddendumSlot, CheckDetail, ReturnDetail, X9Item
from icl_engine.protocols.x9.records.user_records import (
    UserGeneral,
    UserPayeeEndorsement,
    UserRecord,
    user_record_format_type,
)
from icl_engine.protocols.x9.x9_codes import PAYEE_ENDORSEMENT_FORMAT_TYPE

RECORD_TYPES: Dict[str, Type[X9Record]] = {
    "01": FileHeader,
    "10": CashLetterHeader,
    "20": BundleHeader,
    "25": CheckDetail,
    "26": CheckDetailAddendumA,
    "27": CheckDetailAddendumB,
    "28": CheckDetailAddendumC,
    "31": ReturnDetail,
    "32": ReturnDetailAddendumA,
    "33": ReturnDetailAddendumB,
    "34": ReturnDetailAddendumC,
    "35": ReturnDetailAddendumD,
    "50": ImageViewDetail,
    "52": ImageViewData,
    "54": ImageViewAnalysis,
    "61": Credit,
    "62": CreditItem,
    "68": UserGeneral,
    "70": BundleControl,
    "85": RoutingNumberSummary,
    "90": CashLetterControl,
    "99": FileControl,
}


def record_class(record_type: str) -> Optional[Type[X9Record]]:
    """Record class registered for a record type, or None."""
    return RECORD_TYPES.get(record_type)


def record_class_for(
    record_type: str, text: str, options: Optional[ICLOptions] = None
) -> Optional[Type[X9Record]]:
    """
    Record class for a decoded record.

    Type 68 is resolved in a second step from its UserRecordFormatType;
    DSTU files only know the generic User General record.
    """
    options = options or DEFAULT_OPTIONS
    if record_type == UserRecord.RECORD_TYPE:
        if not options.is_dstu and user_record_format_type(text) == PAYEE_ENDORSEMENT_FORMAT_TYPE:
            return UserPayeeEndorsement
        return UserGeneral
    return record_class(record_type)


__all__ = [
    "RECORD_TYPES",
    "AddendumSlot",
    "BOFDEndorsementAddendum",
    "BundleControl",
    "BundleHeader",
    "CashLetterControl",
    "CashLetterHeader",
    "CheckDetail",
    "CheckDetailAddendumA",
    "CheckDetailAddendumB",
    "CheckDetailAddendumC",
    "Credit",
    "CreditItem",
    "EndorsingBankAddendum",
    "FileControl",
    "FileHeader",
    "ImageReferenceAddendum",
    "ImageViewAnalysis",
    "ImageViewData",
    "ImageViewDetail",
    "ReturnDetail",
    "ReturnDetailAddendumA",
    "ReturnDetailAddendumB",
    "ReturnDetailAddendumC",
    "ReturnDetailAddendumD",
    "RoutingNumberSummary",
    "UserGeneral",
    "UserPayeeEndorsement",
    "UserRecord",
    "X9Item",
    "X9Record",
    "record_class",
    "record_class_for",
]
