"""
CBPR+ Message Validators

Root validators for the supported CBPR+ messages:
- pacs.008 (FI to FI Customer Credit Transfer)
- pacs.009 (Financial Institution Credit Transfer)
- camt.057 (Notification to Receive)

Each message is checked in a fixed order: mandatory fields, then cross-field
business rules, then children in document order. Message roots contribute no
prefix to field paths.
"""

from decimal import Decimal
from typing import Optional

from cbpr_engine.formatting.formatter import ValueFormatter
from cbpr_engine.messages.base import Amount
from cbpr_engine.messages.camt057 import Camt057Message, NotificationItem
from cbpr_engine.messages.pacs008 import Pacs008Message
from cbpr_engine.messages.pacs009 import Pacs009Message
from cbpr_engine.validation.base_validator import (
    ValidationErrorKind,
    ValidationFailure,
    check_implies,
    fail,
    first_failure,
    join_path,
)
from cbpr_engine.validation.entity_validators import EntityValidator
from cbpr_engine.validation.rules import (
    CAMT057_RULES,
    NOTIFICATION_ITEM_RULES,
    PACS008_MANDATORY_RULES,
    PACS008_TEXT_RULES,
    PACS009_MANDATORY_RULES,
    PACS009_TEXT_RULES,
    evaluate_rules,
)

PACS008_CHILDREN = (
    ("GrpHdr", "group_header", "validate_pacs_group_header"),
    ("PmtId", "payment_id", "validate_payment_identification"),
    ("PmtTpInf", "payment_type_info", "validate_payment_type_information"),
    ("IntrBkSttlmAmt", "settlement_amount", "validate_amount"),
    ("InstdAmt", "instructed_amount", "validate_amount"),
    ("InstgAgt", "instructing_agent", "validate_agent"),
    ("InstdAgt", "instructed_agent", "validate_agent"),
    ("IntrmyAgt1", "intermediary_agent1", "validate_agent"),
    ("IntrmyAgt1Acct", "intermediary_agent1_account", "validate_account"),
    ("Dbtr", "debtor", "validate_party"),
    ("DbtrAcct", "debtor_account", "validate_account"),
    ("DbtrAgt", "debtor_agent", "validate_agent"),
    ("CdtrAgt", "creditor_agent", "validate_agent"),
    ("CdtrAgtAcct", "creditor_agent_account", "validate_account"),
    ("Cdtr", "creditor", "validate_party"),
    ("CdtrAcct", "creditor_account", "validate_account"),
)

PACS009_CHILDREN = (
    ("GrpHdr", "group_header", "validate_pacs_group_header"),
    ("PmtId", "payment_id", "validate_payment_identification"),
    ("IntrBkSttlmAmt", "settlement_amount", "validate_amount"),
    ("InstgAgt", "instructing_agent", "validate_agent"),
    ("InstdAgt", "instructed_agent", "validate_agent"),
    ("IntrmyAgt1", "intermediary_agent1", "validate_agent"),
    ("IntrmyAgt1Acct", "intermediary_agent1_account", "validate_account"),
    ("Dbtr", "debtor", "validate_agent"),
    ("DbtrAgt", "debtor_agent", "validate_agent"),
    ("CdtrAgt", "creditor_agent", "validate_agent"),
    ("CdtrAgtAcct", "creditor_agent_account", "validate_account"),
    ("Cdtr", "creditor", "validate_agent"),
    ("CdtrAcct", "creditor_account", "validate_account"),
)

CAMT057_CHILDREN = (
    ("GrpHdr", "group_header", "validate_group_header"),
    ("Ntfctn.Acct", "account", "validate_account"),
    ("Ntfctn.AcctOwnr", "account_owner", "validate_agent"),
    ("Ntfctn.AcctSvcr", "account_servicer", "validate_agent"),
    ("Ntfctn.Itm", "item", "validate_notification_item"),
)

NOTIFICATION_ITEM_CHILDREN = (
    ("Amt", "amount", "validate_amount"),
    ("Dbtr", "debtor", "validate_debtor"),
    ("DbtrAgt", "debtor_agent", "validate_agent"),
    ("IntrmyAgt", "intermediary_agent", "validate_agent"),
)


def check_agent_account_pair(
    message, agent_tag: str, agent_attribute: str, account_attribute: str, path: str
) -> Optional[ValidationFailure]:
    """An agent and its account must be provided together."""
    agent_present = getattr(message, agent_attribute) is not None
    account_present = getattr(message, account_attribute) is not None
    account_tag = f"{agent_tag}Acct"

    return check_implies(
        agent_present,
        account_present,
        join_path(path, account_tag),
        f"{account_tag} is mandatory when {agent_tag} is present",
    ) or check_implies(
        account_present,
        agent_present,
        join_path(path, agent_tag),
        f"{agent_tag} must be present if {account_tag} is provided",
    )


def check_amounts_match(
    settlement: Amount, instructed: Amount, path: str
) -> Optional[ValidationFailure]:
    """Settlement and instructed amounts must agree in currency and value."""
    instructed_path = join_path(path, "InstdAmt")
    if settlement.currency != instructed.currency:
        return fail(
            ValidationErrorKind.BUSINESS_RULE_VIOLATION,
            instructed_path,
            "IntrBkSttlmAmt and InstdAmt must have the same currency",
            settlement_currency=settlement.currency,
            instructed_currency=instructed.currency,
        )
    # Non-finite or absent values are left to the amount validators
    comparable = all(
        isinstance(amount.value, Decimal) and amount.value.is_finite()
        for amount in (settlement, instructed)
    )
    if comparable and settlement.value != instructed.value:
        return fail(
            ValidationErrorKind.BUSINESS_RULE_VIOLATION,
            instructed_path,
            "IntrBkSttlmAmt and InstdAmt must have the same value",
            settlement_value=str(settlement.value),
            instructed_value=str(instructed.value),
        )
    return None


class MessageValidator(EntityValidator):
    """
    Validator for CBPR+ message roots.

    Extends EntityValidator, so any entity of a supported message can be
    validated on its own as well as through its root.
    """

    def __init__(self, formatter: Optional[ValueFormatter] = None):
        super().__init__(formatter)
        self._validators.update({
            Pacs008Message: self.validate_pacs008,
            Pacs009Message: self.validate_pacs009,
            Camt057Message: self.validate_camt057,
            NotificationItem: self.validate_notification_item,
        })

    @property
    def name(self) -> str:
        return "MessageValidator"

    def validate_pacs008(self, message: Pacs008Message, path: str = "") -> Optional[ValidationFailure]:
        """
        Validate a pacs.008 customer credit transfer.

        Instruction for next agent is limited to 35 characters here, unlike
        pacs.009 where it is 140.
        """
        return first_failure([
            lambda: evaluate_rules(message, PACS008_MANDATORY_RULES, path),
            lambda: check_amounts_match(message.settlement_amount, message.instructed_amount, path),
            lambda: check_agent_account_pair(
                message, "IntrmyAgt1", "intermediary_agent1", "intermediary_agent1_account", path
            ),
            lambda: check_agent_account_pair(
                message, "CdtrAgt", "creditor_agent", "creditor_agent_account", path
            ),
            lambda: evaluate_rules(message, PACS008_TEXT_RULES, path),
            lambda: self._validate_children(message, PACS008_CHILDREN, path),
        ])

    def validate_pacs009(self, message: Pacs009Message, path: str = "") -> Optional[ValidationFailure]:
        """Validate a pacs.009 financial institution credit transfer."""
        return first_failure([
            lambda: evaluate_rules(message, PACS009_MANDATORY_RULES, path),
            lambda: check_agent_account_pair(
                message, "IntrmyAgt1", "intermediary_agent1", "intermediary_agent1_account", path
            ),
            lambda: check_agent_account_pair(
                message, "CdtrAgt", "creditor_agent", "creditor_agent_account", path
            ),
            lambda: evaluate_rules(message, PACS009_TEXT_RULES, path),
            lambda: self._validate_children(message, PACS009_CHILDREN, path),
        ])

    def validate_camt057(self, message: Camt057Message, path: str = "") -> Optional[ValidationFailure]:
        """Validate a camt.057 notification to receive."""
        failure = evaluate_rules(message, CAMT057_RULES, path)
        if failure:
            return failure
        return self._validate_children(message, CAMT057_CHILDREN, path)

    def validate_notification_item(
        self, item: NotificationItem, path: str = "Itm"
    ) -> Optional[ValidationFailure]:
        failure = evaluate_rules(item, NOTIFICATION_ITEM_RULES, path)
        if failure:
            return failure
        return self._validate_children(item, NOTIFICATION_ITEM_CHILDREN, path)
