"""
Tests for CBPR+ message validation (pacs.008, pacs.009, camt.057)
"""

from dataclasses import replace
from decimal import Decimal

import pytest

from cbpr_engine.messages import (
    Account,
    Agent,
    Amount,
    CbprMessageType,
    Debtor,
    PaymentIdentification,
    SettlementInformation,
)
from cbpr_engine.validation.base_validator import ValidationErrorKind

PACS008_MANDATORY = [
    ("group_header", "GrpHdr"),
    ("payment_id", "PmtId"),
    ("payment_type_info", "PmtTpInf"),
    ("settlement_amount", "IntrBkSttlmAmt"),
    ("settlement_date", "IntrBkSttlmDt"),
    ("instructed_amount", "InstdAmt"),
    ("charge_bearer", "ChrgBr"),
    ("instructing_agent", "InstgAgt"),
    ("instructed_agent", "InstdAgt"),
    ("debtor", "Dbtr"),
    ("debtor_agent", "DbtrAgt"),
    ("creditor", "Cdtr"),
    ("creditor_account", "CdtrAcct"),
]

PACS009_MANDATORY = [
    (attribute, tag)
    for attribute, tag in PACS008_MANDATORY
    if tag not in ("PmtTpInf", "InstdAmt", "ChrgBr")
]


class TestPacs008Validation:
    """Tests for pacs.008 customer credit transfers."""

    def test_valid_message(self, validator, pacs008):
        outcome = validator.validate(pacs008)

        assert outcome.is_valid
        assert outcome.failure is None

    def test_message_type(self, pacs008):
        assert pacs008.message_type is CbprMessageType.PACS_008
        assert pacs008.message_type.code == "pacs.008.001.08"

    @pytest.mark.parametrize("attribute,tag", PACS008_MANDATORY)
    def test_mandatory_fields(self, validator, pacs008, attribute, tag):
        """Test each mandatory field reports a missing-field failure at its tag."""
        outcome = validator.validate(replace(pacs008, **{attribute: None}))

        assert outcome.kind == ValidationErrorKind.MISSING_FIELD
        assert outcome.field_path == tag

    def test_blank_charge_bearer(self, validator, pacs008):
        outcome = validator.validate(replace(pacs008, charge_bearer=" "))

        assert outcome.field_path == "ChrgBr"

    def test_mandatory_fields_reported_in_order(self, validator, pacs008):
        """Test the first missing field in declared order wins."""
        outcome = validator.validate(replace(pacs008, debtor=None, payment_id=None, creditor=None))

        assert outcome.field_path == "PmtId"

    def test_amount_value_mismatch(self, validator, pacs008):
        """Test GBP 100.00 settled against GBP 100.01 instructed."""
        message = replace(pacs008, instructed_amount=Amount("GBP", Decimal("100.01")))
        outcome = validator.validate(message)

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION
        assert "same value" in outcome.message

    def test_amount_currency_mismatch(self, validator, pacs008):
        message = replace(pacs008, instructed_amount=Amount("EUR", Decimal("100.00")))
        outcome = validator.validate(message)

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION
        assert "same currency" in outcome.message

    def test_currency_mismatch_reported_before_value(self, validator, pacs008):
        message = replace(pacs008, instructed_amount=Amount("EUR", Decimal("5")))

        assert "same currency" in validator.validate(message).message

    def test_non_finite_amounts_reported_on_amount(self, validator, pacs008):
        """Test NaN amounts skip the value comparison and fail on the settlement amount."""
        message = replace(
            pacs008,
            settlement_amount=Amount("GBP", "NaN"),
            instructed_amount=Amount("GBP", "NaN"),
        )

        outcome = validator.validate(message)

        assert outcome.kind == ValidationErrorKind.RANGE_VIOLATION
        assert outcome.field_path == "IntrBkSttlmAmt.Value"

    def test_equal_amounts_with_different_scale(self, validator, pacs008):
        """Test 100.0 and 100.00 are the same value."""
        message = replace(pacs008, instructed_amount=Amount("GBP", Decimal("100.0")))

        assert validator.validate(message).is_valid

    def test_mismatch_checked_before_amount_children(self, validator, pacs008):
        """Test cross-field rules run before the amounts themselves are validated."""
        message = replace(
            pacs008,
            settlement_amount=Amount("GBP", Decimal("-1")),
            instructed_amount=Amount("GBP", Decimal("-2")),
        )
        outcome = validator.validate(message)

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION

    def test_intermediary_agent_without_account(self, validator, pacs008):
        message = replace(pacs008, intermediary_agent1=Agent.from_bic("CITIUS33"))
        outcome = validator.validate(message)

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION
        assert outcome.field_path == "IntrmyAgt1Acct"

    def test_intermediary_account_without_agent(self, validator, pacs008):
        message = replace(pacs008, intermediary_agent1_account=Account.from_other("NOSTRO-1"))
        outcome = validator.validate(message)

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION
        assert outcome.field_path == "IntrmyAgt1"

    def test_intermediary_agent_with_account(self, validator, pacs008):
        message = replace(
            pacs008,
            intermediary_agent1=Agent.from_bic("CITIUS33"),
            intermediary_agent1_account=Account.from_other("NOSTRO-1"),
        )

        assert validator.validate(message).is_valid

    def test_creditor_agent_without_account(self, validator, pacs008):
        outcome = validator.validate(replace(pacs008, creditor_agent_account=None))

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION
        assert outcome.field_path == "CdtrAgtAcct"

    def test_creditor_account_without_agent(self, validator, pacs008):
        outcome = validator.validate(replace(pacs008, creditor_agent=None))

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION
        assert outcome.field_path == "CdtrAgt"

    def test_creditor_agent_pair_optional(self, validator, pacs008):
        message = replace(pacs008, creditor_agent=None, creditor_agent_account=None)

        assert validator.validate(message).is_valid

    def test_instruction_limits_differ(self, validator, pacs008):
        """Test creditor agent instructions allow 140 but next agent only 35."""
        assert validator.validate(replace(pacs008, instruction_for_creditor_agent="c" * 140)).is_valid
        assert validator.validate(replace(pacs008, instruction_for_next_agent="n" * 35)).is_valid

        creditor = validator.validate(replace(pacs008, instruction_for_creditor_agent="c" * 141))
        next_agent = validator.validate(replace(pacs008, instruction_for_next_agent="n" * 36))

        assert creditor.kind == ValidationErrorKind.LENGTH_VIOLATION
        assert creditor.field_path == "InstrForCdtrAgt"
        assert next_agent.kind == ValidationErrorKind.LENGTH_VIOLATION
        assert next_agent.field_path == "InstrForNxtAgt"

    def test_whitespace_only_instruction_is_length_checked(self, validator, pacs008):
        outcome = validator.validate(replace(pacs008, instruction_for_next_agent=" " * 36))

        assert outcome.kind == ValidationErrorKind.LENGTH_VIOLATION
        assert outcome.field_path == "InstrForNxtAgt"

    def test_whitespace_only_purpose_code(self, validator, pacs008):
        outcome = validator.validate(replace(pacs008, purpose="    "))

        assert outcome.kind == ValidationErrorKind.FORMAT_VIOLATION
        assert outcome.field_path == "Purp.Cd"

    def test_purpose_code_too_long(self, validator, pacs008):
        outcome = validator.validate(replace(pacs008, purpose="GOODS"))

        assert outcome.kind == ValidationErrorKind.FORMAT_VIOLATION
        assert outcome.field_path == "Purp.Cd"

    def test_remittance_information_too_long(self, validator, pacs008):
        outcome = validator.validate(replace(pacs008, remittance_information="r" * 141))

        assert outcome.kind == ValidationErrorKind.LENGTH_VIOLATION
        assert outcome.field_path == "RmtInf.Ustrd"

    @pytest.mark.parametrize(
        "changes,path",
        [
            ({"payment_id": PaymentIdentification("I-1", "E-1", "bad")}, "PmtId.UETR"),
            ({"instructing_agent": Agent.from_bic("BARC")}, "InstgAgt.FinInstnId.BICFI"),
            ({"debtor_account": Account.from_iban("GB00WEST12345698765432")}, "DbtrAcct.Id.IBAN"),
            ({"creditor_account": Account()}, "CdtrAcct"),
        ],
    )
    def test_child_failure_paths(self, validator, pacs008, changes, path):
        """Test child failures carry the full path from the message root."""
        outcome = validator.validate(replace(pacs008, **changes))

        assert outcome.field_path == path

    def test_group_header_failure_path(self, validator, pacs008, pacs_group_header):
        header = replace(pacs_group_header, settlement_information=SettlementInformation("XXXX"))
        outcome = validator.validate(replace(pacs008, group_header=header))

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION
        assert outcome.field_path == "GrpHdr.SttlmInf.SttlmMtd"

    def test_children_in_document_order(self, validator, pacs008):
        """Test with two invalid children, the earlier one in document order is reported."""
        message = replace(
            pacs008,
            creditor_account=Account(),
            instructed_agent=Agent.from_bic("BAD"),
        )

        assert validator.validate(message).field_path == "InstdAgt.FinInstnId.BICFI"

    def test_own_rules_before_children(self, validator, pacs008):
        """Test a cross-field rule wins over an invalid child."""
        message = replace(
            pacs008,
            payment_id=PaymentIdentification("I-1", "E-1", "bad"),
            instruction_for_next_agent="n" * 36,
        )

        assert validator.validate(message).field_path == "InstrForNxtAgt"


class TestPacs009Validation:
    """Tests for pacs.009 financial institution credit transfers."""

    def test_valid_message(self, validator, pacs009):
        assert validator.validate(pacs009).is_valid

    @pytest.mark.parametrize("attribute,tag", PACS009_MANDATORY)
    def test_mandatory_fields(self, validator, pacs009, attribute, tag):
        outcome = validator.validate(replace(pacs009, **{attribute: None}))

        assert outcome.kind == ValidationErrorKind.MISSING_FIELD
        assert outcome.field_path == tag

    def test_next_agent_instruction_allows_140(self, validator, pacs009):
        """Test pacs.009 uses 140 for both instruction fields."""
        assert validator.validate(replace(pacs009, instruction_for_next_agent="n" * 140)).is_valid

        outcome = validator.validate(replace(pacs009, instruction_for_next_agent="n" * 141))
        assert outcome.kind == ValidationErrorKind.LENGTH_VIOLATION

    def test_intermediary_pair(self, validator, pacs009):
        outcome = validator.validate(replace(pacs009, intermediary_agent1=Agent.from_bic("CITIUS33")))

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION
        assert outcome.field_path == "IntrmyAgt1Acct"

    def test_creditor_agent_pair(self, validator, pacs009):
        outcome = validator.validate(replace(pacs009, creditor_agent_account=None))

        assert outcome.field_path == "CdtrAgtAcct"

    def test_debtor_is_agent(self, validator, pacs009, named_agent):
        """Test debtor may also be identified by name and address."""
        assert validator.validate(replace(pacs009, debtor=named_agent)).is_valid

    def test_debtor_agent_failure(self, validator, pacs009):
        outcome = validator.validate(replace(pacs009, debtor=Agent()))

        assert outcome.kind == ValidationErrorKind.MISSING_FIELD
        assert outcome.field_path == "Dbtr.FinInstnId"


class TestCamt057Validation:
    """Tests for camt.057 notifications to receive."""

    def test_valid_message(self, validator, camt057):
        assert validator.validate(camt057).is_valid

    def test_minimal_message(self, validator, camt057):
        """Test account, owner and servicer are optional."""
        message = replace(camt057, account=None, account_owner=None, account_servicer=None)

        assert validator.validate(message).is_valid

    @pytest.mark.parametrize(
        "attribute,path",
        [("group_header", "GrpHdr"), ("notification_id", "Ntfctn.Id"), ("item", "Ntfctn.Itm")],
    )
    def test_mandatory_fields(self, validator, camt057, attribute, path):
        outcome = validator.validate(replace(camt057, **{attribute: None}))

        assert outcome.kind == ValidationErrorKind.MISSING_FIELD
        assert outcome.field_path == path

    def test_notification_id_too_long(self, validator, camt057):
        outcome = validator.validate(replace(camt057, notification_id="N" * 36))

        assert outcome.kind == ValidationErrorKind.LENGTH_VIOLATION

    def test_optional_children_validated_when_present(self, validator, camt057):
        outcome = validator.validate(replace(camt057, account_servicer=Agent()))

        assert outcome.field_path == "Ntfctn.AcctSvcr.FinInstnId"

    def test_item_failure_path(self, validator, camt057, notification_item):
        message = replace(camt057, item=replace(notification_item, debtor=Debtor()))
        outcome = validator.validate(message)

        assert outcome.kind == ValidationErrorKind.BUSINESS_RULE_VIOLATION
        assert outcome.field_path == "Ntfctn.Itm.Dbtr"


class TestNotificationItemValidation:
    """Tests for camt.057 notification items."""

    def test_valid_item(self, validator, notification_item):
        assert validator.validate(notification_item).is_valid

    def test_agent_debtor(self, validator, notification_item):
        item = replace(notification_item, debtor=Debtor.of(Agent.from_bic("DEUTDEFF")))

        assert validator.validate(item).is_valid

    @pytest.mark.parametrize(
        "changes,kind,path",
        [
            ({"id": None}, ValidationErrorKind.MISSING_FIELD, "Itm.Id"),
            ({"id": "I" * 36}, ValidationErrorKind.LENGTH_VIOLATION, "Itm.Id"),
            ({"end_to_end_id": "E" * 36}, ValidationErrorKind.LENGTH_VIOLATION, "Itm.EndToEndId"),
            ({"uetr": "12345"}, ValidationErrorKind.FORMAT_VIOLATION, "Itm.UETR"),
            ({"uetr": "   "}, ValidationErrorKind.FORMAT_VIOLATION, "Itm.UETR"),
            ({"amount": None}, ValidationErrorKind.MISSING_FIELD, "Itm.Amt"),
            ({"expected_value_date": None}, ValidationErrorKind.MISSING_FIELD, "Itm.XpctdValDt"),
            ({"debtor": None}, ValidationErrorKind.MISSING_FIELD, "Itm.Dbtr"),
        ],
    )
    def test_field_failures(self, validator, notification_item, changes, kind, path):
        outcome = validator.validate(replace(notification_item, **changes))

        assert outcome.kind == kind
        assert outcome.field_path == path

    def test_optional_references(self, validator, notification_item):
        """Test end-to-end id and UETR may be omitted."""
        item = replace(notification_item, end_to_end_id=None, uetr=None)

        assert validator.validate(item).is_valid

    def test_children_order(self, validator, notification_item):
        """Test amount is validated before debtor."""
        item = replace(
            notification_item,
            amount=Amount("GBP", Decimal("0")),
            debtor=Debtor(),
        )

        assert validator.validate(item).field_path == "Itm.Amt.Value"

    def test_intermediary_agent(self, validator, notification_item):
        item = replace(notification_item, intermediary_agent=Agent.from_bic("CITIUS3"))

        assert validator.validate(item).field_path == "Itm.IntrmyAgt.FinInstnId.BICFI"
