"""
User Records (Type 68)

Two layouts share record type 68 and are told apart by UserRecordFormatType
(columns 33-35): "001" is the User Payee Endorsement record defined by
X9.100-187; any other format type is a User General record whose data is
carried opaquely. Both follow a 45-character header whose LengthUserData
(columns 39-45) gives the length of the rest of the record.
"""

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Callable, Dict, Optional

from icl_engine.core.exceptions import FieldError, FileError
from icl_engine.protocols.x9.encoding import ASCII, SUBSTITUTE_ERRORS, CharacterCodec
from icl_engine.protocols.x9.fields import FieldKind, FieldSpec, parse_num_field
from icl_engine.protocols.x9.records.base import X9Record, bytes_from_json, bytes_to_json
from icl_engine.protocols.x9.validators import (
    MSG_DECLARED_LENGTH,
    MSG_ENDORSEMENT_INDICATOR,
    MSG_FIELD_INCLUSION,
    MSG_INVALID,
    MSG_OWNER_IDENTIFIER_INDICATOR,
    FieldValidator,
)
from icl_engine.protocols.x9.x9_codes import (
    PAYEE_ENDORSEMENT_FORMAT_TYPE,
    EndorsementIndicator,
    OwnerIdentifierIndicator,
)

N, A, S, D, T = (
    FieldKind.NUMERIC,
    FieldKind.ALPHA,
    FieldKind.STRING,
    FieldKind.DATE,
    FieldKind.TIME,
)

USER_HEADER_LENGTH = 45
PAYEE_ENDORSEMENT_DATA_LENGTH = 290
USER_DATA_LENGTH_WIDTH = 7

USER_HEADER_LAYOUT = (
    FieldSpec("owner_identifier_indicator", 3, 3, N),
    FieldSpec("owner_identifier", 4, 12, A),
    FieldSpec("owner_identifier_modifier", 13, 32, A),
    FieldSpec("user_record_format_type", 33, 35, A),
    FieldSpec("format_type_version_level", 36, 38, A),
    FieldSpec("length_user_data", 39, 45, N),
)


def user_record_format_type(text: str) -> str:
    """UserRecordFormatType of a decoded 68 record, blank when too short."""
    return text[32:35]


@dataclass
class UserRecord(X9Record):
    """Common header of the type 68 records."""

    RECORD_TYPE = "68"
    RECORD_LENGTH = USER_HEADER_LENGTH
    MIN_LENGTH = USER_HEADER_LENGTH
    LAYOUT = USER_HEADER_LAYOUT

    owner_identifier_indicator: int = 0
    owner_identifier: str = ""
    owner_identifier_modifier: str = ""
    user_record_format_type: str = ""
    format_type_version_level: str = ""
    length_user_data: int = 0

    @classmethod
    def read_wire(cls, head: bytes, read_exact: Callable[[int], bytes], codec: CharacterCodec = ASCII) -> bytes:
        raw = head + read_exact(USER_HEADER_LENGTH - len(head))
        data_length = parse_num_field(codec.decode(raw[38:USER_HEADER_LENGTH]))
        return raw + read_exact(data_length)

    def validate_owner(self, v: FieldValidator) -> None:
        v.one_of(
            "OwnerIdentifierIndicator",
            self.owner_identifier_indicator,
            OwnerIdentifierIndicator.codes(),
            MSG_OWNER_IDENTIFIER_INDICATOR,
        )
        # The indicator says what kind of identifier follows
        if self.owner_identifier_indicator == 0:
            if self.owner_identifier != "":
                raise FieldError("OwnerIdentifier", self.owner_identifier, MSG_INVALID)
        elif self.owner_identifier_indicator in (1, 2, 3):
            v.numeric("OwnerIdentifier", self.owner_identifier)
        elif self.owner_identifier_indicator == 4:
            v.alphanumeric_special("OwnerIdentifier", self.owner_identifier)
        v.alphanumeric_special("OwnerIdentifierModifier", self.owner_identifier_modifier)


@dataclass
class UserGeneral(UserRecord):
    """
    User General Record (Type 68).

    Format type and version are agreed between the exchange partners; the
    user data is kept as bytes and never translated.
    """

    VARIABLE_LENGTH = True

    user_data: bytes = field(default=b"", repr=False)

    def set_user_data(self, data: bytes) -> None:
        self.user_data = bytes(data)
        self.length_user_data = len(self.user_data)

    def parse(self, line: str) -> None:
        self.parse_raw(line.encode("latin-1", errors=SUBSTITUTE_ERRORS), ASCII)

    def parse_raw(self, raw: bytes, codec: CharacterCodec = ASCII) -> None:
        if len(raw) < self.MIN_LENGTH:
            return
        self.parse_fields(codec.decode(raw[:USER_HEADER_LENGTH]))
        declared = USER_HEADER_LENGTH + self.length_user_data
        if declared != len(raw):
            raise FileError("RecordLength", MSG_DECLARED_LENGTH % (declared, len(raw)))
        self.user_data = raw[USER_HEADER_LENGTH:]

    def format(self) -> str:
        return super().format() + self.user_data.decode("latin-1")

    def to_raw(self, codec: CharacterCodec = ASCII) -> bytes:
        return codec.encode(super().format()) + self.user_data

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("UserRecordFormatType", self.user_record_format_type)
        v.required("FormatTypeVersionLevel", self.format_type_version_level)
        v.required("LengthUserData", self.length_user_data)
        if not self.user_data:
            raise FieldError("UserData", "", MSG_FIELD_INCLUSION)

    def validate_fields(self, v: FieldValidator) -> None:
        self.validate_owner(v)
        v.alphanumeric_special("UserRecordFormatType", self.user_record_format_type)
        # "001" is reserved for User Payee Endorsement except under DSTU
        if self.user_record_format_type == PAYEE_ENDORSEMENT_FORMAT_TYPE and not v.dstu:
            raise FieldError("UserRecordFormatType", self.user_record_format_type, MSG_INVALID)
        v.numeric("FormatTypeVersionLevel", self.format_type_version_level)
        v.payload_length(
            "LengthUserData", self.length_user_data, len(self.user_data), "UserData", USER_DATA_LENGTH_WIDTH
        )

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["userData"] = bytes_to_json(self.user_data)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserGeneral":
        record = super().from_dict(data)
        record.user_data = bytes_from_json(data.get("userData"))
        return record


@dataclass
class UserPayeeEndorsement(UserRecord):
    """
    User Payee Endorsement Record (Type 68, format type 001).

    Identifies the payee, the depositing account and the capture point of
    a remotely deposited item.
    """

    RECORD_LENGTH = USER_HEADER_LENGTH + PAYEE_ENDORSEMENT_DATA_LENGTH
    MIN_LENGTH = USER_HEADER_LENGTH + PAYEE_ENDORSEMENT_DATA_LENGTH
    LAYOUT = USER_HEADER_LAYOUT + (
        FieldSpec("payee_name", 46, 95, A),
        FieldSpec("endorsement_date", 96, 103, D),
        FieldSpec("bank_routing_number", 104, 112, S),
        FieldSpec("bank_account_number", 113, 132, A),
        FieldSpec("customer_identifier", 133, 152, A),
        FieldSpec("customer_contact_information", 153, 202, A),
        FieldSpec("store_merchant_processing_site_number", 203, 210, A),
        FieldSpec("internal_control_sequence_number", 211, 235, A),
        FieldSpec("endorsement_time", 236, 239, T),
        FieldSpec("operator_name", 240, 269, A),
        FieldSpec("operator_number", 270, 274, A),
        FieldSpec("manager_name", 275, 304, A),
        FieldSpec("manager_number", 305, 309, A),
        FieldSpec("equipment_number", 310, 324, A),
        FieldSpec("endorsement_indicator", 325, 325, N),
        FieldSpec("user_field", 326, 335, A),
    )

    user_record_format_type: str = PAYEE_ENDORSEMENT_FORMAT_TYPE
    length_user_data: int = PAYEE_ENDORSEMENT_DATA_LENGTH
    payee_name: str = ""
    endorsement_date: Optional[date] = None
    bank_routing_number: str = ""
    bank_account_number: str = ""
    customer_identifier: str = ""
    customer_contact_information: str = ""
    store_merchant_processing_site_number: str = ""
    internal_control_sequence_number: str = ""
    endorsement_time: Optional[time] = None
    operator_name: str = ""
    operator_number: str = ""
    manager_name: str = ""
    manager_number: str = ""
    equipment_number: str = ""
    endorsement_indicator: int = 0
    user_field: str = ""

    def field_inclusion(self, v: FieldValidator) -> None:
        super().field_inclusion(v)
        v.required("UserRecordFormatType", self.user_record_format_type)
        v.required("FormatTypeVersionLevel", self.format_type_version_level)
        v.required("LengthUserData", self.length_user_data)

    def validate_fields(self, v: FieldValidator) -> None:
        self.validate_owner(v)
        if self.user_record_format_type != PAYEE_ENDORSEMENT_FORMAT_TYPE:
            raise FieldError("UserRecordFormatType", self.user_record_format_type, MSG_INVALID)
        v.numeric("FormatTypeVersionLevel", self.format_type_version_level)
        if self.length_user_data != PAYEE_ENDORSEMENT_DATA_LENGTH:
            raise FieldError("LengthUserData", self.length_user_data, MSG_INVALID)
        v.alphanumeric_special("PayeeName", self.payee_name)
        v.numeric("BankRoutingNumber", self.bank_routing_number)
        v.alphanumeric_special("BankAccountNumber", self.bank_account_number)
        v.alphanumeric_special("CustomerIdentifier", self.customer_identifier)
        v.alphanumeric_special("CustomerContactInformation", self.customer_contact_information)
        v.alphanumeric_special("StoreMerchantProcessingSiteNumber", self.store_merchant_processing_site_number)
        v.alphanumeric_special("InternalControlSequenceNumber", self.internal_control_sequence_number)
        v.alphanumeric_special("OperatorName", self.operator_name)
        v.alphanumeric_special("OperatorNumber", self.operator_number)
        v.alphanumeric_special("ManagerName", self.manager_name)
        v.alphanumeric_special("ManagerNumber", self.manager_number)
        v.alphanumeric_special("EquipmentNumber", self.equipment_number)
        v.one_of(
            "EndorsementIndicator",
            self.endorsement_indicator,
            EndorsementIndicator.codes(),
            MSG_ENDORSEMENT_INDICATOR,
        )
        v.alphanumeric_special("UserField", self.user_field)
