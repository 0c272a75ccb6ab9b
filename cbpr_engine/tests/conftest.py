"""
CBPR+ Engine - Test Configuration

Fixtures building fully valid entity trees. Tests derive invalid variants
with dataclasses.replace so each case changes exactly one thing.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import List

import pytest

from cbpr_engine.core.config import EngineConfig, Environment, MetricsConfig
from cbpr_engine.core.exceptions import IbanFormatException
from cbpr_engine.messages import (
    Account,
    Agent,
    Amount,
    Camt057Message,
    Debtor,
    FinancialInstitutionId,
    GroupHeader,
    NotificationItem,
    PacsGroupHeader,
    Pacs008Message,
    Pacs009Message,
    Party,
    PaymentIdentification,
    PaymentTypeInformation,
    PostalAddress,
    SettlementInformation,
)
from cbpr_engine.monitoring.metrics import ValidationMetrics
from cbpr_engine.validation.message_validators import MessageValidator

VALID_UETR = "eb6305c9-1f7f-49de-aed0-16487c27b42d"
VALID_GB_IBAN = "GB82WEST12345698765432"
VALID_DE_IBAN = "DE89370400440532013000"
VALID_LEI = "5493001KJTIIGC8Y1R12"
CREATED_AT = datetime(2025, 10, 8, 14, 30, tzinfo=timezone.utc)


class StubFormatter:
    """Formatter double: rejects IBANs starting with XX and records calls."""

    def __init__(self):
        self.iban_calls: List[str] = []

    def format_amount(self, value, currency):
        return str(value)

    def format_date(self, value):
        return value.isoformat()

    def format_datetime_utc(self, value):
        return value.isoformat()

    def format_iban(self, iban):
        self.iban_calls.append(iban)
        if iban.startswith("XX"):
            raise IbanFormatException("stub rejection", iban)
        return iban


@pytest.fixture
def stub_formatter():
    return StubFormatter()


@pytest.fixture
def validator():
    """Message validator with the default formatter."""
    return MessageValidator()


@pytest.fixture
def engine_config():
    """Configuration used by facade tests."""
    return EngineConfig(
        environment=Environment.TESTING,
        metrics=MetricsConfig(enabled=True, namespace="cbpr_test"),
    )


@pytest.fixture
def metrics(engine_config):
    return ValidationMetrics(engine_config.metrics)


@pytest.fixture
def gbp_amount():
    return Amount("GBP", Decimal("100.00"))


@pytest.fixture
def london_address():
    return PostalAddress(
        street_name="1 Churchill Place",
        post_code="E14 5HP",
        town_name="London",
        country="GB",
    )


@pytest.fixture
def bic_agent():
    return Agent.from_bic("BARCGB22XXX")


@pytest.fixture
def named_agent(london_address):
    """Agent identified by name and address instead of BIC."""
    return Agent(FinancialInstitutionId.from_name_and_address("Barclays Bank PLC", london_address))


@pytest.fixture
def debtor_party(london_address):
    return Party(name="Acme Trading Ltd", postal_address=london_address)


@pytest.fixture
def creditor_party():
    return Party(
        name="Muller Maschinenbau GmbH",
        postal_address=PostalAddress(street_name="Hauptstrasse", town_name="Berlin", country="DE"),
    )


@pytest.fixture
def pacs_group_header():
    return PacsGroupHeader(
        message_id="MSG-20251008-0001",
        creation_datetime=CREATED_AT,
        number_of_transactions="1",
        settlement_information=SettlementInformation(settlement_method="INDA"),
    )


@pytest.fixture
def payment_id():
    return PaymentIdentification(
        instruction_id="INSTR-0001",
        end_to_end_id="E2E-0001",
        uetr=VALID_UETR,
    )


@pytest.fixture
def payment_type_info():
    return PaymentTypeInformation(
        instruction_priority="NORM",
        service_level="G001",
        category_purpose="CASH",
    )


@pytest.fixture
def pacs008(pacs_group_header, payment_id, payment_type_info, gbp_amount, debtor_party, creditor_party):
    """A fully valid pacs.008 message."""
    return Pacs008Message(
        group_header=pacs_group_header,
        payment_id=payment_id,
        payment_type_info=payment_type_info,
        settlement_amount=gbp_amount,
        settlement_date=date(2025, 10, 9),
        instructed_amount=Amount("GBP", Decimal("100.00")),
        charge_bearer="DEBT",
        instructing_agent=Agent.from_bic("BARCGB22"),
        instructed_agent=Agent.from_bic("DEUTDEFF"),
        debtor=debtor_party,
        debtor_account=Account.from_iban(VALID_GB_IBAN),
        debtor_agent=Agent.from_bic("BARCGB22XXX"),
        creditor_agent=Agent.from_bic("DEUTDEFFXXX"),
        creditor_agent_account=Account.from_other("NOSTRO-GBP-001"),
        creditor=creditor_party,
        creditor_account=Account.from_iban(VALID_DE_IBAN),
        instruction_for_creditor_agent="Credit beneficiary on receipt",
        instruction_for_next_agent="/PHOB/",
        purpose="GDDS",
        remittance_information="Invoice 2025-118",
    )


@pytest.fixture
def pacs009(pacs_group_header, payment_id, gbp_amount):
    """A fully valid pacs.009 message."""
    return Pacs009Message(
        group_header=pacs_group_header,
        payment_id=payment_id,
        settlement_amount=gbp_amount,
        settlement_date=date(2025, 10, 9),
        instructing_agent=Agent.from_bic("BARCGB22"),
        instructed_agent=Agent.from_bic("DEUTDEFF"),
        debtor=Agent.from_bic("BARCGB22"),
        debtor_agent=Agent.from_bic("BARCGB22XXX"),
        creditor_agent=Agent.from_bic("DEUTDEFFXXX"),
        creditor_agent_account=Account.from_other("NOSTRO-GBP-001"),
        creditor=Agent.from_bic("DEUTDEFF"),
        creditor_account=Account.from_iban(VALID_DE_IBAN),
    )


@pytest.fixture
def notification_item(gbp_amount, debtor_party):
    return NotificationItem(
        id="ITEM-0001",
        end_to_end_id="E2E-0001",
        uetr=VALID_UETR,
        amount=gbp_amount,
        expected_value_date=date(2025, 10, 10),
        debtor=Debtor.of(debtor_party),
        debtor_agent=Agent.from_bic("BARCGB22"),
    )


@pytest.fixture
def camt057(notification_item):
    """A fully valid camt.057 message."""
    return Camt057Message(
        group_header=GroupHeader(message_id="NTF-20251008-0001", creation_datetime=CREATED_AT),
        notification_id="NTFCTN-0001",
        account=Account.from_iban(VALID_GB_IBAN),
        account_owner=Agent.from_bic("BARCGB22"),
        item=notification_item,
    )
