"""
Image View Records

Image View Detail (50), Image View Data (52) and Image View Analysis (54).
An item carries one 50/52/54 triple per image view (front, rear, partial
views).

Image View Data is the only record whose length is not fixed: after the
fixed 105-character prefix it carries three length-prefixed segments.

    LengthImageReferenceKey (4, in the prefix)  ImageReferenceKey (X, text)
    LengthDigitalSignature (5)                  DigitalSignature (Y, bytes)
    LengthImageData (7)                         ImageData (Z, bytes)

The signature and image bytes are opaque: they bypass the character
codec on both read and write.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Optional

from icl_engine.core.exceptions import FieldError, FileError
from icl_engine.protocols.x9.encoding import ASCII, SUBSTITUTE_ERRORS, CharacterCodec
from icl_engine.protocols.x9.fields import (
    FieldKind,
    FieldSpec,
    alpha_field,
    numeric_field,
    parse_num_field,
    parse_string_field,
)
from icl_engine.protocols.x9.records.base import X9Record, bytes_from_json, bytes_to_json
from icl_engine.protocols.x9.validators import (
    MSG_DECLARED_LENGTH,
    MSG_INVALID,
    MSG_LENGTH_EXCEEDED,
    MSG_LENGTH_MISMATCH,
    FieldValidator,
)
from icl_engine.protocols.x9.x9_codes import (
    CLIPPING_ORIGINS,
    IMAGE_ANALYSIS_VALUES,
    DigitalSignatureMethod,
    ImageIndicator,
    ImageViewCompressionAlgorithm,
    ImageViewFormatIndicator,
    OverrideIndicator,
    ViewDescriptor,
    ViewSideIndicator,
)

N, A, S, D = FieldKind.NUMERIC, FieldKind.ALPHA, FieldKind.STRING, FieldKind.DATE

# Width of the on-wire length fields that precede the payloads
SIGNATURE_LENGTH_WIDTH = 5
IMAGE_DATA_LENGTH_WIDTH = 7

_BINARY_FLAGS = frozenset("01")


@dataclass
class ImageViewDetail(X9Record):
    """
    Image View Detail Record (Type 50).

    Describes one image view: who created it, its format and compression,
    which side of the item it shows and whether it is digitally signed.
    """

    RECORD_TYPE = "50"
    LAYOUT = (
        FieldSpec("image_indicator", 3, 3, N),
        FieldSpec("image_creator_routing_number", 4, 12, S),
        FieldSpec("image_creator_date", 13, 20, D),
        FieldSpec("image_view_format_indicator", 21, 22, A),
        FieldSpec("image_view_compression_algorithm", 23, 24, A),
        FieldSpec("image_view_data_size", 25, 31, A),
        FieldSpec("view_side_indicator", 32, 32, N),
        FieldSpec("view_descriptor", 33, 34, A),
        FieldSpec("digital_signature_indicator", 35, 35, N),
        FieldSpec("digital_signature_method", 36, 37, A),
        FieldSpec("security_key_size", 38, 42, A),
        FieldSpec("protected_data_start", 43, 49, A),
        FieldSpec("protected_data_length", 50, 56, A),
        FieldSpec("image_recreate_indicator", 57, 57, N),
        FieldSpec("user_field", 58, 65, A),
        FieldSpec("override_indicator", 67, 67, A),
    )

    image_indicator: int = 0
    image_creator_routing_number: str = ""
    image_creator_date: Optional[date] = None
    image_view_format_indicator: str = ""
    image_view_compression_algorithm: str = ""
    image_view_data_size: str = ""
    view_side_indicator: int = 0
    view_descriptor: str = ""
    digital_signature_indicator: int = 0
    digital_signature_method: str = ""
    security_key_size: str = ""
    protected_data_start: str = ""
    protected_data_length: str = ""
    image_recreate_indicator: int = 0
    user_field: str = ""
    override_indicator: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        # Creator and view fields are only carried when an image is present
        if self.image_indicator == 0:
            return
        v.required_routing_number(
            "ImageCreatorRoutingNumber",
            self.image_creator_routing_number,
            zero_allowed=v.frb_compatibility_mode,
        )
        if not v.frb_compatibility_mode:
            v.required("ImageCreatorDate", self.image_creator_date)
        v.required("ViewDescriptor", self.view_descriptor)

    def validate_fields(self, v: FieldValidator) -> None:
        v.one_of("ImageIndicator", self.image_indicator, ImageIndicator.codes())
        v.numeric("ImageCreatorRoutingNumber", self.image_creator_routing_number)
        v.optional_one_of(
            "ImageViewFormatIndicator",
            self.image_view_format_indicator,
            ImageViewFormatIndicator.codes(),
        )
        v.optional_one_of(
            "ImageViewCompressionAlgorithm",
            self.image_view_compression_algorithm,
            ImageViewCompressionAlgorithm.codes(),
        )
        v.numeric("ImageViewDataSize", self.image_view_data_size.strip())
        v.one_of("ViewSideIndicator", self.view_side_indicator, ViewSideIndicator.codes())
        v.optional_one_of("ViewDescriptor", self.view_descriptor, ViewDescriptor.codes())
        v.one_of("DigitalSignatureIndicator", self.digital_signature_indicator, _BINARY_FLAGS)
        self._validate_digital_signature_method(v)
        v.numeric("SecurityKeySize", self.security_key_size.strip())
        v.numeric("ProtectedDataStart", self.protected_data_start.strip())
        v.numeric("ProtectedDataLength", self.protected_data_length.strip())
        v.one_of("ImageRecreateIndicator", self.image_recreate_indicator, _BINARY_FLAGS)
        v.alphanumeric_special("UserField", self.user_field)
        v.optional_one_of("OverrideIndicator", self.override_indicator, OverrideIndicator.codes())

    def _validate_digital_signature_method(self, v: FieldValidator) -> None:
        # Federal Reserve files write a single zero for "no method"
        if v.frb_compatibility_mode and self.digital_signature_method == "0":
            return
        v.optional_one_of(
            "DigitalSignatureMethod",
            self.digital_signature_method,
            DigitalSignatureMethod.codes(),
        )


@dataclass
class ImageViewData(X9Record):
    """
    Image View Data Record (Type 52).

    Carries the image bytes, with an optional image reference key and
    digital signature. Use set_image_data() / set_digital_signature() to
    keep the declared lengths in step with the payloads.
    """

    RECORD_TYPE = "52"
    # Fixed prefix only; the full record is 117 + X + Y + Z characters
    RECORD_LENGTH = 105
    MIN_LENGTH = 105 + SIGNATURE_LENGTH_WIDTH + IMAGE_DATA_LENGTH_WIDTH
    VARIABLE_LENGTH = True
    LAYOUT = (
        FieldSpec("ece_institution_routing_number", 3, 11, S),
        FieldSpec("bundle_business_date", 12, 19, D),
        FieldSpec("cycle_number", 20, 21, A),
        FieldSpec("ece_institution_item_sequence_number", 22, 36, A),
        FieldSpec("security_originator_name", 37, 52, A),
        FieldSpec("security_authenticator_name", 53, 68, A),
        FieldSpec("security_key_name", 69, 84, A),
        FieldSpec("clipping_origin", 85, 85, N),
        FieldSpec("clipping_coordinate_h1", 86, 89, A),
        FieldSpec("clipping_coordinate_h2", 90, 93, A),
        FieldSpec("clipping_coordinate_v1", 94, 97, A),
        FieldSpec("clipping_coordinate_v2", 98, 101, A),
        FieldSpec("length_image_reference_key", 102, 105, N),
    )

    ece_institution_routing_number: str = ""
    bundle_business_date: Optional[date] = None
    cycle_number: str = ""
    ece_institution_item_sequence_number: str = ""
    security_originator_name: str = ""
    security_authenticator_name: str = ""
    security_key_name: str = ""
    clipping_origin: int = 0
    clipping_coordinate_h1: str = ""
    clipping_coordinate_h2: str = ""
    clipping_coordinate_v1: str = ""
    clipping_coordinate_v2: str = ""
    length_image_reference_key: int = 0
    image_reference_key: str = ""
    length_digital_signature: int = 0
    digital_signature: bytes = field(default=b"", repr=False)
    length_image_data: int = 0
    image_data: bytes = field(default=b"", repr=False)

    def set_image_data(self, data: bytes) -> None:
        self.image_data = bytes(data)
        self.length_image_data = len(self.image_data)

    def set_digital_signature(self, signature: bytes) -> None:
        self.digital_signature = bytes(signature)
        self.length_digital_signature = len(self.digital_signature)

    def set_image_reference_key(self, key: str) -> None:
        self.image_reference_key = key
        self.length_image_reference_key = len(key)

    # Codec

    def parse(self, line: str) -> None:
        # Payload characters stand for single bytes, as produced by format()
        self.parse_raw(line.encode("latin-1", errors=SUBSTITUTE_ERRORS), ASCII)

    def parse_raw(self, raw: bytes, codec: CharacterCodec = ASCII) -> None:
        if len(raw) < self.MIN_LENGTH:
            return
        self.parse_fields(codec.decode(raw[: self.RECORD_LENGTH]))
        position = self.RECORD_LENGTH

        end = position + self.length_image_reference_key
        self.image_reference_key = parse_string_field(codec.decode(raw[position:end]))
        position = end

        end = position + SIGNATURE_LENGTH_WIDTH
        self.length_digital_signature = parse_num_field(codec.decode(raw[position:end]))
        position = end
        end = position + self.length_digital_signature
        self.digital_signature = raw[position:end]
        position = end

        end = position + IMAGE_DATA_LENGTH_WIDTH
        self.length_image_data = parse_num_field(codec.decode(raw[position:end]))
        position = end
        if position + self.length_image_data != len(raw):
            raise FileError(
                "RecordLength",
                MSG_DECLARED_LENGTH % (position + self.length_image_data, len(raw)),
            )
        self.image_data = raw[position:]

    def _reference_segment(self) -> str:
        return alpha_field(self.image_reference_key, self.length_image_reference_key)

    def format(self) -> str:
        return "".join(
            [
                super().format(),
                self._reference_segment(),
                numeric_field(self.length_digital_signature, SIGNATURE_LENGTH_WIDTH),
                self.digital_signature.decode("latin-1"),
                numeric_field(self.length_image_data, IMAGE_DATA_LENGTH_WIDTH),
                self.image_data.decode("latin-1"),
            ]
        )

    def to_raw(self, codec: CharacterCodec = ASCII) -> bytes:
        head = super().format() + self._reference_segment()
        return b"".join(
            [
                codec.encode(head + numeric_field(self.length_digital_signature, SIGNATURE_LENGTH_WIDTH)),
                self.digital_signature,
                codec.encode(numeric_field(self.length_image_data, IMAGE_DATA_LENGTH_WIDTH)),
                self.image_data,
            ]
        )

    @classmethod
    def read_wire(cls, head: bytes, read_exact: Callable[[int], bytes], codec: CharacterCodec = ASCII) -> bytes:
        raw = head + read_exact(cls.RECORD_LENGTH - len(head))
        key_length = parse_num_field(codec.decode(raw[101:105]))
        raw += read_exact(key_length + SIGNATURE_LENGTH_WIDTH)
        signature_length = parse_num_field(codec.decode(raw[-SIGNATURE_LENGTH_WIDTH:]))
        raw += read_exact(signature_length + IMAGE_DATA_LENGTH_WIDTH)
        image_length = parse_num_field(codec.decode(raw[-IMAGE_DATA_LENGTH_WIDTH:]))
        return raw + read_exact(image_length)

    # Validation

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required_routing_number("ECEInstitutionRoutingNumber", self.ece_institution_routing_number)
        v.required("BundleBusinessDate", self.bundle_business_date)

    def validate_fields(self, v: FieldValidator) -> None:
        v.numeric("ECEInstitutionRoutingNumber", self.ece_institution_routing_number)
        v.alphanumeric("CycleNumber", self.cycle_number)
        v.alphanumeric_special("ECEInstitutionItemSequenceNumber", self.ece_institution_item_sequence_number)
        v.alphanumeric_special("SecurityOriginatorName", self.security_originator_name)
        v.alphanumeric_special("SecurityAuthenticatorName", self.security_authenticator_name)
        v.alphanumeric_special("SecurityKeyName", self.security_key_name)
        v.one_of("ClippingOrigin", self.clipping_origin, CLIPPING_ORIGINS)
        v.numeric("ClippingCoordinateH1", self.clipping_coordinate_h1.strip())
        v.numeric("ClippingCoordinateH2", self.clipping_coordinate_h2.strip())
        v.numeric("ClippingCoordinateV1", self.clipping_coordinate_v1.strip())
        v.numeric("ClippingCoordinateV2", self.clipping_coordinate_v2.strip())
        # Trailing blanks of the key are dropped on parse
        if self.length_image_reference_key < len(self.image_reference_key):
            raise FieldError(
                "LengthImageReferenceKey",
                self.length_image_reference_key,
                MSG_LENGTH_MISMATCH % "ImageReferenceKey",
            )
        if self.length_image_reference_key > v.options.max_payload_length:
            raise FieldError(
                "LengthImageReferenceKey",
                self.length_image_reference_key,
                MSG_LENGTH_EXCEEDED % v.options.max_payload_length,
            )
        v.alphanumeric_special("ImageReferenceKey", self.image_reference_key)
        v.non_negative("LengthDigitalSignature", self.length_digital_signature)
        v.payload_length(
            "LengthDigitalSignature",
            self.length_digital_signature,
            len(self.digital_signature),
            "DigitalSignature",
            SIGNATURE_LENGTH_WIDTH,
        )
        v.non_negative("LengthImageData", self.length_image_data)
        v.payload_length(
            "LengthImageData",
            self.length_image_data,
            len(self.image_data),
            "ImageData",
            IMAGE_DATA_LENGTH_WIDTH,
        )

    # JSON boundary

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result.update(
            {
                "imageReferenceKey": self.image_reference_key,
                "lengthDigitalSignature": self.length_digital_signature,
                "digitalSignature": bytes_to_json(self.digital_signature),
                "lengthImageData": self.length_image_data,
                "imageData": bytes_to_json(self.image_data),
            }
        )
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImageViewData":
        record = super().from_dict(data)
        record.image_reference_key = data.get("imageReferenceKey") or ""
        record.length_digital_signature = int(data.get("lengthDigitalSignature") or 0)
        record.digital_signature = bytes_from_json(data.get("digitalSignature"))
        record.length_image_data = int(data.get("lengthImageData") or 0)
        record.image_data = bytes_from_json(data.get("imageData"))
        return record


@dataclass
class ImageViewAnalysis(X9Record):
    """
    Image View Analysis Record (Type 54).

    Image quality and usability results; every indicator is one of
    0 (not tested), 1 (condition present), 2 (not present) or 3 (unknown).
    """

    RECORD_TYPE = "54"
    LAYOUT = (
        FieldSpec("global_image_quality", 3, 3, N),
        FieldSpec("global_image_usability", 4, 4, N),
        FieldSpec("imaging_bank_specific_test", 5, 5, N),
        FieldSpec("partial_image", 6, 6, N),
        FieldSpec("excessive_image_skew", 7, 7, N),
        FieldSpec("piggyback_image", 8, 8, N),
        FieldSpec("too_light_or_too_dark", 9, 9, N),
        FieldSpec("streaks_and_or_bands", 10, 10, N),
        FieldSpec("below_minimum_image_size", 11, 11, N),
        FieldSpec("exceeds_maximum_image_size", 12, 12, N),
        FieldSpec("image_enabled_pod", 26, 26, N),
        FieldSpec("source_document_bad", 27, 27, N),
        FieldSpec("date_usability", 28, 28, N),
        FieldSpec("payee_usability", 29, 29, N),
        FieldSpec("convenience_amount_usability", 30, 30, N),
        FieldSpec("amount_in_words_usability", 31, 31, N),
        FieldSpec("signature_usability", 32, 32, N),
        FieldSpec("payor_name_address_usability", 33, 33, N),
        FieldSpec("micr_line_usability", 34, 34, N),
        FieldSpec("memo_line_usability", 35, 35, N),
        FieldSpec("payor_bank_name_address_usability", 36, 36, N),
        FieldSpec("payee_endorsement_usability", 37, 37, N),
        FieldSpec("bofd_endorsement_usability", 38, 38, N),
        FieldSpec("transit_endorsement_usability", 39, 39, N),
        FieldSpec("user_field", 46, 65, A),
    )

    global_image_quality: int = 0
    global_image_usability: int = 0
    imaging_bank_specific_test: int = 0
    partial_image: int = 0
    excessive_image_skew: int = 0
    piggyback_image: int = 0
    too_light_or_too_dark: int = 0
    streaks_and_or_bands: int = 0
    below_minimum_image_size: int = 0
    exceeds_maximum_image_size: int = 0
    image_enabled_pod: int = 0
    source_document_bad: int = 0
    date_usability: int = 0
    payee_usability: int = 0
    convenience_amount_usability: int = 0
    amount_in_words_usability: int = 0
    signature_usability: int = 0
    payor_name_address_usability: int = 0
    micr_line_usability: int = 0
    memo_line_usability: int = 0
    payor_bank_name_address_usability: int = 0
    payee_endorsement_usability: int = 0
    bofd_endorsement_usability: int = 0
    transit_endorsement_usability: int = 0
    user_field: str = ""

    def validate_fields(self, v: FieldValidator) -> None:
        for spec in self.LAYOUT:
            if spec.kind is FieldKind.NUMERIC:
                v.one_of(spec.label, getattr(self, spec.attr), IMAGE_ANALYSIS_VALUES, MSG_INVALID)
        v.alphanumeric_special("UserField", self.user_field)
