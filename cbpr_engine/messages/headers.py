"""
CBPR+ Header and Payment Information Entities

Group headers (camt and pacs variants), settlement information, payment
identification and payment type information.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional

from cbpr_engine.messages.base import Account
from cbpr_engine.messages.codes import (
    DEFAULT_INSTRUCTION_PRIORITY,
    DEFAULT_SERVICE_LEVEL,
    REQUIRED_NUMBER_OF_TRANSACTIONS,
)


@dataclass(frozen=True)
class SettlementInformation:
    """Settlement information (SttlmInf)."""

    element_name: ClassVar[str] = "SttlmInf"

    settlement_method: Optional[str] = None
    settlement_account: Optional[Account] = None


@dataclass(frozen=True)
class GroupHeader:
    """Group header used by camt messages: MsgId and CreDtTm only."""

    element_name: ClassVar[str] = "GrpHdr"

    message_id: Optional[str] = None
    creation_datetime: Optional[datetime] = None


@dataclass(frozen=True)
class PacsGroupHeader:
    """Group header used by pacs.008 and pacs.009."""

    element_name: ClassVar[str] = "GrpHdr"

    message_id: Optional[str] = None
    creation_datetime: Optional[datetime] = None
    number_of_transactions: Optional[str] = REQUIRED_NUMBER_OF_TRANSACTIONS
    settlement_information: Optional[SettlementInformation] = None


@dataclass(frozen=True)
class PaymentIdentification:
    """Payment identification: InstrId, EndToEndId and UETR."""

    element_name: ClassVar[str] = "PmtId"

    instruction_id: Optional[str] = None
    end_to_end_id: Optional[str] = None
    uetr: Optional[str] = None


@dataclass(frozen=True)
class PaymentTypeInformation:
    """Payment type information (PmtTpInf)."""

    element_name: ClassVar[str] = "PmtTpInf"

    instruction_priority: Optional[str] = DEFAULT_INSTRUCTION_PRIORITY
    service_level: Optional[str] = DEFAULT_SERVICE_LEVEL
    category_purpose: Optional[str] = None
