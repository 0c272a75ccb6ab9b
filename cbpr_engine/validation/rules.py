"""
Declarative Field Rules

Each entity kind declares its field-level checks as an ordered table of
FieldRule entries. A rule is evaluated as: presence, then maximum length,
then fixed length, then code-set membership, then the custom predicate.
Tables are evaluated top to bottom and stop at the first failure, so the
declared order is the order in which failures are reported.

Cross-field rules (mutual exclusion, paired presence, amount equality) are
not expressible per field and live in the entity validators.
"""

from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Optional, Sequence, Tuple

from cbpr_engine.messages.codes import (
    BIC_LENGTHS,
    CATEGORY_PURPOSE_ORDER,
    CATEGORY_PURPOSES,
    COUNTRY_CODE_LENGTH,
    CURRENCY_CODE_LENGTH,
    INSTRUCTION_PRIORITIES,
    INSTRUCTION_PRIORITY_ORDER,
    LEI_LENGTH,
    MAX_35_TEXT,
    MAX_140_TEXT,
    PACS008_INSTR_FOR_CDTR_AGT_MAX,
    PACS008_INSTR_FOR_NXT_AGT_MAX,
    PACS009_INSTR_FOR_CDTR_AGT_MAX,
    PACS009_INSTR_FOR_NXT_AGT_MAX,
    POSTAL_ADDRESS_LIMITS,
    PURPOSE_CODE_MAX_LENGTH,
    REMITTANCE_INFO_MAX,
    REQUIRED_NUMBER_OF_TRANSACTIONS,
    SETTLEMENT_METHOD_ORDER,
    SETTLEMENT_METHODS,
)
from cbpr_engine.validation.base_validator import (
    ValidationErrorKind,
    ValidationFailure,
    check_code,
    check_exact_length,
    check_max_length,
    check_uuid,
    fail,
    join_path,
    require,
)


@dataclass(frozen=True)
class FieldRule:
    """Checks applied to one field of an entity."""

    tag: str  # ISO 20022 element name, used in the field path
    attribute: str  # dataclass attribute holding the value
    required: bool = False
    max_length: Optional[int] = None
    lengths: Optional[Tuple[int, ...]] = None
    codes: Optional[FrozenSet[str]] = None
    code_order: Optional[Tuple[str, ...]] = None
    predicate: Optional[Callable[[Any], bool]] = None
    predicate_kind: ValidationErrorKind = ValidationErrorKind.FORMAT_VIOLATION
    message: Optional[str] = None  # used for fixed-length and predicate failures
    required_message: Optional[str] = None

    def evaluate(self, entity: Any, path: str) -> Optional[ValidationFailure]:
        value = getattr(entity, self.attribute)
        field_path = join_path(path, self.tag)

        if self.required:
            failure = require(value, field_path, self.required_message or f"{self.tag} is mandatory")
            if failure:
                return failure

        # Whitespace-only text is present for the length and format checks
        if value is None or value == "":
            return None

        if self.max_length is not None:
            failure = check_max_length(value, self.max_length, field_path, self.tag)
            if failure:
                return failure

        if self.lengths is not None:
            failure = check_exact_length(value, self.lengths, field_path, self.message)
            if failure:
                return failure

        if self.codes is not None:
            failure = check_code(value, self.codes, field_path, self.tag, self.code_order)
            if failure:
                return failure

        if self.predicate is not None and not self.predicate(value):
            return fail(self.predicate_kind, field_path, self.message, value=str(value))

        return None


def evaluate_rules(entity: Any, rules: Sequence[FieldRule], path: str) -> Optional[ValidationFailure]:
    """Evaluate a rule table in declared order, returning the first failure."""
    for rule in rules:
        failure = rule.evaluate(entity, path)
        if failure is not None:
            return failure
    return None


def _uuid_rule(tag: str, attribute: str, required: bool) -> FieldRule:
    return FieldRule(
        tag,
        attribute,
        required=required,
        predicate=lambda value: check_uuid(value, tag, "") is None,
        message=f"{tag} must be a valid UUID format",
    )


def _bic_rule(tag: str, attribute: str) -> FieldRule:
    return FieldRule(tag, attribute, lengths=BIC_LENGTHS, message="BIC must be 8 or 11 characters")


def _lei_rule() -> FieldRule:
    return FieldRule("LEI", "lei", lengths=(LEI_LENGTH,), message=f"LEI must be {LEI_LENGTH} characters")


# Leaf entities

AMOUNT_RULES = (
    FieldRule(
        "Ccy",
        "currency",
        required=True,
        lengths=(CURRENCY_CODE_LENGTH,),
        message="Currency must be a 3-letter ISO 4217 code",
        required_message="Currency is mandatory",
    ),
    FieldRule(
        "Value",
        "value",
        required=True,
        predicate=lambda value: value.is_finite() and value > 0,
        predicate_kind=ValidationErrorKind.RANGE_VIOLATION,
        message="Amount value must be a finite number greater than zero",
        required_message="Amount value is mandatory",
    ),
)

CLEARING_SYSTEM_MEMBER_ID_RULES = (
    FieldRule("ClrSysId.Cd", "code", required=True, required_message="ClrSysId Code is mandatory"),
    FieldRule("MmbId", "member_id", required=True, required_message="MmbId is mandatory"),
)

GENERIC_IDENTIFICATION_RULES = (
    FieldRule("Id", "identification", required=True, max_length=MAX_35_TEXT),
    FieldRule("Issr", "issuer", max_length=MAX_35_TEXT),
    FieldRule("SchmeNm", "scheme_name", max_length=MAX_35_TEXT),
)

_POSTAL_ADDRESS_ATTRIBUTES = {
    "Dept": "department",
    "SubDept": "sub_department",
    "StrtNm": "street_name",
    "BldgNb": "building_number",
    "BldgNm": "building_name",
    "Flr": "floor",
    "PstBx": "post_box",
    "Room": "room",
    "PstCd": "post_code",
    "TwnNm": "town_name",
    "TwnLctnNm": "town_location_name",
    "DstrctNm": "district_name",
    "CtrySubDvsn": "country_sub_division",
}

POSTAL_ADDRESS_RULES = tuple(
    FieldRule(tag, _POSTAL_ADDRESS_ATTRIBUTES[tag], max_length=limit)
    for tag, limit in POSTAL_ADDRESS_LIMITS.items()
) + (
    FieldRule(
        "Ctry",
        "country",
        lengths=(COUNTRY_CODE_LENGTH,),
        message="Ctry must be a 2-character ISO code",
    ),
)

FINANCIAL_INSTITUTION_ID_RULES = (
    _bic_rule("BICFI", "bic"),
    _lei_rule(),
    FieldRule("Nm", "name", max_length=MAX_140_TEXT),
)

PARTY_IDENTIFICATION_RULES = (
    _bic_rule("AnyBIC", "bic"),
    _lei_rule(),
)

# Composite entities: own mandatory fields, checked before any child

AGENT_RULES = (
    FieldRule(
        "FinInstnId",
        "financial_institution_id",
        required=True,
        required_message="FinInstnId is mandatory for Agent",
    ),
)

PARTY_RULES = (
    FieldRule("Nm", "name", required=True, max_length=MAX_140_TEXT, required_message="Party Name is mandatory"),
    FieldRule("PstlAdr", "postal_address", required=True, required_message="Party PostalAddress is mandatory"),
)

SETTLEMENT_INFORMATION_RULES = (
    FieldRule(
        "SttlmMtd",
        "settlement_method",
        required=True,
        codes=SETTLEMENT_METHODS,
        code_order=SETTLEMENT_METHOD_ORDER,
    ),
)

GROUP_HEADER_RULES = (
    FieldRule("MsgId", "message_id", required=True, max_length=MAX_35_TEXT),
    FieldRule("CreDtTm", "creation_datetime", required=True),
)

PACS_GROUP_HEADER_RULES = GROUP_HEADER_RULES + (
    FieldRule(
        "NbOfTxs",
        "number_of_transactions",
        required=True,
        predicate=lambda value: value == REQUIRED_NUMBER_OF_TRANSACTIONS,
        predicate_kind=ValidationErrorKind.BUSINESS_RULE_VIOLATION,
        message="NbOfTxs must be '1' for CBPR+ pacs messages",
    ),
    FieldRule("SttlmInf", "settlement_information", required=True),
)

PAYMENT_IDENTIFICATION_RULES = (
    FieldRule("InstrId", "instruction_id", required=True, max_length=MAX_35_TEXT),
    FieldRule("EndToEndId", "end_to_end_id", required=True, max_length=MAX_35_TEXT),
    _uuid_rule("UETR", "uetr", required=True),
)

PAYMENT_TYPE_INFORMATION_RULES = (
    FieldRule(
        "InstrPrty",
        "instruction_priority",
        required=True,
        codes=INSTRUCTION_PRIORITIES,
        code_order=INSTRUCTION_PRIORITY_ORDER,
    ),
    FieldRule("SvcLvl.Cd", "service_level", required=True),
    FieldRule(
        "CtgyPurp.Cd",
        "category_purpose",
        required=True,
        codes=CATEGORY_PURPOSES,
        code_order=CATEGORY_PURPOSE_ORDER,
    ),
)

# Message roots

_PURPOSE_RULE = FieldRule(
    "Purp.Cd",
    "purpose",
    predicate=lambda value: 1 <= len(value.strip()) <= PURPOSE_CODE_MAX_LENGTH,
    message=f"Purpose code must be 1 to {PURPOSE_CODE_MAX_LENGTH} characters",
)
_REMITTANCE_RULE = FieldRule("RmtInf.Ustrd", "remittance_information", max_length=REMITTANCE_INFO_MAX)

PACS008_MANDATORY_RULES = (
    FieldRule("GrpHdr", "group_header", required=True, required_message="GroupHeader is mandatory"),
    FieldRule("PmtId", "payment_id", required=True, required_message="PaymentId is mandatory"),
    FieldRule("PmtTpInf", "payment_type_info", required=True, required_message="PaymentTypeInfo is mandatory"),
    FieldRule("IntrBkSttlmAmt", "settlement_amount", required=True, required_message="SettlementAmount is mandatory"),
    FieldRule("IntrBkSttlmDt", "settlement_date", required=True, required_message="SettlementDate is mandatory"),
    FieldRule("InstdAmt", "instructed_amount", required=True, required_message="InstructedAmount is mandatory"),
    FieldRule("ChrgBr", "charge_bearer", required=True, required_message="ChargeBearer is mandatory"),
    FieldRule("InstgAgt", "instructing_agent", required=True, required_message="InstructingAgent is mandatory"),
    FieldRule("InstdAgt", "instructed_agent", required=True, required_message="InstructedAgent is mandatory"),
    FieldRule("Dbtr", "debtor", required=True, required_message="Debtor is mandatory"),
    FieldRule("DbtrAgt", "debtor_agent", required=True, required_message="DebtorAgent is mandatory"),
    FieldRule("Cdtr", "creditor", required=True, required_message="Creditor is mandatory"),
    FieldRule("CdtrAcct", "creditor_account", required=True, required_message="CreditorAccount is mandatory"),
)

PACS008_TEXT_RULES = (
    FieldRule("InstrForCdtrAgt", "instruction_for_creditor_agent", max_length=PACS008_INSTR_FOR_CDTR_AGT_MAX),
    FieldRule("InstrForNxtAgt", "instruction_for_next_agent", max_length=PACS008_INSTR_FOR_NXT_AGT_MAX),
    _PURPOSE_RULE,
    _REMITTANCE_RULE,
)

PACS009_MANDATORY_RULES = tuple(
    rule for rule in PACS008_MANDATORY_RULES
    if rule.tag not in ("PmtTpInf", "InstdAmt", "ChrgBr")
)

PACS009_TEXT_RULES = (
    FieldRule("InstrForCdtrAgt", "instruction_for_creditor_agent", max_length=PACS009_INSTR_FOR_CDTR_AGT_MAX),
    FieldRule("InstrForNxtAgt", "instruction_for_next_agent", max_length=PACS009_INSTR_FOR_NXT_AGT_MAX),
    _PURPOSE_RULE,
    _REMITTANCE_RULE,
)

CAMT057_RULES = (
    FieldRule("GrpHdr", "group_header", required=True, required_message="GroupHeader is mandatory"),
    FieldRule(
        "Ntfctn.Id",
        "notification_id",
        required=True,
        max_length=MAX_35_TEXT,
        required_message="NotificationId is mandatory",
    ),
    FieldRule("Ntfctn.Itm", "item", required=True, required_message="Item is mandatory"),
)

NOTIFICATION_ITEM_RULES = (
    FieldRule("Id", "id", required=True, max_length=MAX_35_TEXT, required_message="Item.Id is mandatory"),
    FieldRule("EndToEndId", "end_to_end_id", max_length=MAX_35_TEXT),
    _uuid_rule("UETR", "uetr", required=False),
    FieldRule("Amt", "amount", required=True, required_message="Item.Amount is mandatory"),
    FieldRule(
        "XpctdValDt",
        "expected_value_date",
        required=True,
        required_message="Item.ExpectedValueDate is mandatory",
    ),
    FieldRule("Dbtr", "debtor", required=True, required_message="Item.Debtor is mandatory"),
)
