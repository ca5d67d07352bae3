"""
X9.100-187 Code Definitions

Defined values for the enumerated fields of the Image Cash Letter records.
Each member carries the on-wire code and a short description.
"""

from enum import Enum
from typing import FrozenSet, Optional


class X9Code(Enum):
    """Base for X9 code enumerations."""

    def __init__(self, code: str, description: str):
        self.code = code
        self.description = description

    @classmethod
    def from_code(cls, code: str) -> Optional["X9Code"]:
        for member in cls:
            if member.code == code:
                return member
        return None

    @classmethod
    def codes(cls) -> FrozenSet[str]:
        return frozenset(member.code for member in cls)


# File Header


class StandardLevel(X9Code):
    DSTU_X937_2003 = ("03", "DSTU X9.37-2003")
    X9_100_187_2008 = ("30", "X9.100-187-2008")
    X9_100_187_2013 = ("35", "X9.100-187-2013 and 2016")


class TestFileIndicator(X9Code):
    TEST = ("T", "Test File")
    PRODUCTION = ("P", "Production File")


class ResendIndicator(X9Code):
    RESEND = ("Y", "File has been previously transmitted")
    ORIGINAL = ("N", "File has not been previously transmitted")


# Cash Letter Header


class CollectionTypeIndicator(X9Code):
    """
    Collection type of a cash letter or bundle.

    Return types (03-06) may not carry Routing Number Summary records.
    """

    PRELIMINARY_FORWARD = ("00", "Preliminary Forward Information")
    FORWARD_PRESENTMENT = ("01", "Forward Presentment")
    FORWARD_SAME_DAY = ("02", "Forward Presentment - Same-Day Settlement")
    RETURN = ("03", "Return")
    RETURN_NOTIFICATION = ("04", "Return Notification")
    PRELIMINARY_RETURN_NOTIFICATION = ("05", "Preliminary Return Notification")
    FINAL_RETURN_NOTIFICATION = ("06", "Final Return Notification")
    NO_DETAIL = ("20", "No Detail")
    MIXED = ("99", "Bundles not the same collection type")

    @property
    def is_forward(self) -> bool:
        return self.code in ("00", "01", "02")


class CashLetterRecordTypeIndicator(X9Code):
    NO_ITEMS = ("N", "No electronic check records or image records")
    ELECTRONIC = ("E", "Electronic check records with no images")
    IMAGES = ("I", "Electronic check records and image records")
    IMAGES_FOR_PREVIOUS = ("F", "Image records corresponding to a previously sent cash letter")


class DocumentationTypeIndicator(X9Code):
    A = ("A", "No image provided, paper provided separately")
    B = ("B", "No image provided, paper provided separately, image upon request")
    C = ("C", "Image provided separately, no paper provided")
    D = ("D", "Image provided separately, no paper provided, image upon request")
    E = ("E", "Image and paper provided separately")
    F = ("F", "Image and paper provided separately, image upon request")
    G = ("G", "Image included, no paper provided")
    H = ("H", "Image included, no paper provided, image upon request")
    I = ("I", "Image included, paper provided separately")
    J = ("J", "Image included, paper provided separately, image upon request")
    K = ("K", "No image provided, no paper provided")
    L = ("L", "No image provided, no paper provided, image upon request")
    M = ("M", "No image provided, Electronic Check provided separately")
    Z = ("Z", "Not Same Type")


class ReturnsIndicator(X9Code):
    FORWARD = ("", "Forward Presentment")
    ADMINISTRATIVE = ("E", "Administrative")
    CUSTOMER = ("R", "Customer")
    REJECT = ("J", "Reject Return")
    NONE = ("N", "Not a return")


# Check Detail


class ReturnAcceptanceIndicator(X9Code):
    NONE = ("0", "Will not accept any electronic information")
    ALL_NOTIFICATIONS = ("1", "Preliminary return notifications, returns, and final return notifications")
    PRELIMINARY_AND_RETURNS = ("2", "Preliminary return notifications and returns")
    PRELIMINARY_AND_FINAL = ("3", "Preliminary return notifications and final return notifications")
    RETURNS_AND_FINAL = ("4", "Returns and final return notifications")
    PRELIMINARY_ONLY = ("5", "Preliminary return notifications only")
    RETURNS_ONLY = ("6", "Returns only")
    FINAL_ONLY = ("7", "Final return notifications only")
    ALL_WITH_IMAGES = ("8", "Preliminary, returns, final and image returns")
    PRELIMINARY_RETURNS_IMAGES = ("9", "Preliminary, returns and image returns")
    PRELIMINARY_FINAL_IMAGES = ("A", "Preliminary, final and image returns")
    RETURNS_FINAL_IMAGES = ("B", "Returns, final and image returns")
    PRELIMINARY_IMAGES = ("C", "Preliminary and image returns")
    RETURNS_IMAGES = ("D", "Returns and image returns")
    FINAL_IMAGES = ("E", "Final return notifications and image returns")
    IMAGES_ONLY = ("F", "Image returns only")


class MICRValidIndicator(X9Code):
    GOOD_READ = ("1", "Good read")
    MISSING_FIELD = ("2", "Good read, missing field")
    READ_ERROR = ("3", "Read error encountered")
    MISSING_AND_ERROR = ("4", "Missing field and read error encountered")


class BOFDIndicator(X9Code):
    YES = ("Y", "ECE institution is BOFD")
    NO = ("N", "ECE institution is not BOFD")
    UNKNOWN = ("U", "ECE institution relationship to BOFD is undetermined")


class CorrectionIndicator(X9Code):
    NO_REPAIR = ("0", "No Repair")
    REPAIRED = ("1", "Repaired (form of repair unknown)")
    REPAIRED_AUTOMATIC = ("2", "Repaired without Operator intervention")
    REPAIRED_OPERATOR = ("3", "Repaired with Operator intervention")
    UNDETERMINED = ("4", "Undetermined if repair has been done or not")


class ArchiveTypeIndicator(X9Code):
    MICROFILM = ("A", "Microfilm")
    IMAGE = ("B", "Image")
    PAPER = ("C", "Paper")
    MICROFILM_IMAGE = ("D", "Microfilm and image")
    MICROFILM_PAPER = ("E", "Microfilm and paper")
    IMAGE_PAPER = ("F", "Image and paper")
    ALL = ("G", "Microfilm, image and paper")
    ELECTRONIC = ("H", "Electronic Check Instrument")
    NONE = ("I", "None")


# Addenda


class TruncationIndicator(X9Code):
    TRUNCATED = ("Y", "Institution truncated the original check")
    NOT_TRUNCATED = ("N", "Institution did not truncate the original check")


class ConversionIndicator(X9Code):
    NOT_CONVERTED = ("0", "Did not convert physical document")
    PAPER_TO_IRD = ("1", "Original paper converted to IRD")
    PAPER_TO_IMAGE = ("2", "Original paper converted to image")
    IRD_TO_IRD = ("3", "IRD converted to another IRD")
    IRD_TO_IMAGE = ("4", "IRD converted to image of IRD")
    IMAGE_TO_IRD = ("5", "Image converted to an IRD")
    IMAGE_TO_IMAGE = ("6", "Image converted to another image")
    IMAGE_UNCHANGED = ("7", "Did not convert image")
    UNDETERMINED = ("8", "Undetermined")


class ImageReferenceKeyIndicator(X9Code):
    DEFINED = ("0", "Image Reference Key present with defined length")
    OTHER = ("1", "Image Reference Key has no special significance or is absent")


class EndorsingBankIdentifier(X9Code):
    DEPOSITARY = ("0", "Depositary Bank")
    COLLECTING = ("1", "Other Collecting Bank")
    RETURNING = ("2", "Other Returning Bank")
    PAYING = ("3", "Payor Bank")


# Return Detail


class ReturnNotificationIndicator(X9Code):
    PRELIMINARY = ("1", "Preliminary notification")
    FINAL = ("2", "Final notification")


class TimesReturned(X9Code):
    UNKNOWN = ("0", "Prior returns unknown")
    FIRST = ("1", "Returned once")
    SECOND = ("2", "Returned twice")
    THIRD = ("3", "Returned three times")


# Image View


class ImageIndicator(X9Code):
    NOT_PRESENT = ("0", "Image view not present")
    ACTUAL = ("1", "Image view present, actual check")
    NOT_ACTUAL = ("2", "Image view present, not actual check")
    UNDETERMINED = ("3", "Image view present, unable to determine")


class ImageViewFormatIndicator(X9Code):
    TIFF = ("00", "TIFF 6")
    IOCA = ("01", "IOCA FS 11")
    PNG = ("20", "PNG")
    JFIF = ("21", "JFIF")
    SPIFF = ("22", "SPIFF")
    JBIG = ("23", "JBIG data stream")
    JPEG_2000 = ("24", "JPEG 2000")


class ImageViewCompressionAlgorithm(X9Code):
    GROUP_4 = ("00", "Group 4 facsimile compression")
    JPEG_BASELINE = ("01", "JPEG Baseline")
    ABIC = ("02", "ABIC")
    PNG = ("21", "PNG")
    JBIG = ("22", "JBIG")
    JPEG_2000 = ("23", "JPEG 2000")


class ViewSideIndicator(X9Code):
    FRONT = ("0", "Front image view")
    REAR = ("1", "Rear image view")


class ViewDescriptor(X9Code):
    FULL = ("00", "Full view")
    PARTIAL = ("01", "Partial view, unspecified area")
    DATE = ("02", "Partial view, date")
    PAYEE = ("03", "Partial view, payee")
    CONVENIENCE_AMOUNT = ("04", "Partial view, convenience amount")
    AMOUNT_IN_WORDS = ("05", "Partial view, amount in words")
    SIGNATURE = ("06", "Partial view, signature")
    PAYOR_NAME_ADDRESS = ("07", "Partial view, payor name and address")
    MICR_LINE = ("08", "Partial view, MICR line")
    MEMO_LINE = ("09", "Partial view, memo line")
    PAYOR_BANK = ("10", "Partial view, payor bank name and address")
    PAYEE_ENDORSEMENT = ("11", "Partial view, payee endorsement")
    BOFD_ENDORSEMENT = ("12", "Partial view, BOFD endorsement")
    TRANSIT_ENDORSEMENT = ("13", "Partial view, transit endorsement")


class DigitalSignatureMethod(X9Code):
    DSA = ("00", "DSA with SHA1")
    RSA_MD5 = ("01", "RSA with MD5")
    RSA_MDC2 = ("02", "RSA with MDC2")
    RSA_SHA1 = ("03", "RSA with SHA1")
    ECDSA = ("04", "Elliptic Curve DSA with SHA1")


class OverrideIndicator(X9Code):
    NONE = ("0", "No override information")
    USABLE_NO_ALTERNATE = ("A", "IQA fail, image view reviewed and deemed usable, no alternate format")
    USABLE_ALTERNATE = ("B", "IQA fail, image view reviewed and deemed usable, alternate format")
    USABLE_NOT_REVIEWED = ("C", "IQA fail, image view not reviewed, deemed usable")
    UNUSABLE_NO_ALTERNATE = ("D", "IQA fail, image view reviewed and deemed unusable, no alternate format")
    UNUSABLE_ALTERNATE = ("E", "IQA fail, image view reviewed and deemed unusable, alternate format")


# Credits and user records


class CreditTotalIndicator(X9Code):
    EXCLUDED = ("0", "Credit items are not included in totals")
    INCLUDED = ("1", "Credit items are included in totals")


class AccountTypeCode(X9Code):
    UNKNOWN = ("0", "Unknown")
    DDA = ("1", "DDA account")
    GENERAL_LEDGER = ("2", "General Ledger account")
    SAVINGS = ("3", "Savings account")
    MONEY_MARKET = ("4", "Money Market account")
    OTHER = ("5", "Other Account")


class SourceWorkCode(X9Code):
    """Source work codes 00-11; 21-50 are reserved for clearing arrangements."""

    UNKNOWN = ("00", "Unknown")
    INTERNAL_ATM = ("01", "Internal - ATM")
    INTERNAL_BRANCH = ("02", "Internal - Branch")
    INTERNAL_OTHER = ("03", "Internal - Other")
    BANK_TO_BANK = ("04", "External - Bank to Bank (Correspondent)")
    BUSINESS_TO_BANK = ("05", "External - Business to Bank (Customer)")
    REMOTE_CAPTURE = ("06", "External - Business to Bank Remote Capture")
    PROCESSOR_TO_BANK = ("07", "External - Processor to Bank")
    BANK_TO_PROCESSOR = ("08", "External - Bank to Processor")
    LOCKBOX = ("09", "Lockbox")
    INTERNATIONAL_INTERNAL = ("10", "International - Internal")
    INTERNATIONAL_EXTERNAL = ("11", "International - External")


class OwnerIdentifierIndicator(X9Code):
    NOT_USED = ("0", "Not Used")
    ROUTING_NUMBER = ("1", "Routing Number")
    DUNS = ("2", "DUNS Number")
    TAX_ID = ("3", "Federal Tax Identification Number")
    X9_ASSIGNED = ("4", "X9 Assignment")
    OTHER = ("5", "Other")


class EndorsementIndicator(X9Code):
    NONE = ("0", "No endorsement")
    ENDORSED = ("1", "Endorsed")
    RESTRICTED = ("2", "Restricted endorsement")
    SPECIAL = ("3", "Special endorsement")
    QUALIFIED = ("4", "Qualified endorsement")
    MOBILE = ("5", "Mobile remote deposit endorsement")
    OTHER = ("9", "Other")


PAYEE_ENDORSEMENT_FORMAT_TYPE = "001"

COMPANION_DOCUMENT_US: FrozenSet[str] = frozenset("0123456789")
COMPANION_DOCUMENT_CA: FrozenSet[str] = frozenset("ABCDEFGHIJ")

BUNDLE_COLLECTION_TYPES: FrozenSet[str] = CollectionTypeIndicator.codes() - {"20"}
CLIPPING_ORIGINS: FrozenSet[str] = frozenset("01234")
IMAGE_ANALYSIS_VALUES: FrozenSet[str] = frozenset("0123")
