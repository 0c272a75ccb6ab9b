"""
CBPR+ pacs.009.001.08 - Financial Institution Credit Transfer

Bank-to-bank transfer where debtor, debtor agent and creditor are all
financial institutions (agents), normally identified by BIC only.
"""

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from cbpr_engine.messages.base import Account, Agent, Amount
from cbpr_engine.messages.codes import CbprMessageType
from cbpr_engine.messages.headers import PacsGroupHeader, PaymentIdentification


@dataclass(frozen=True)
class Pacs009Message:
    """pacs.009 financial institution credit transfer."""

    element_name: ClassVar[str] = ""
    message_type: ClassVar[CbprMessageType] = CbprMessageType.PACS_009

    group_header: Optional[PacsGroupHeader] = None
    payment_id: Optional[PaymentIdentification] = None

    settlement_amount: Optional[Amount] = None
    settlement_date: Optional[date] = None

    instructing_agent: Optional[Agent] = None
    instructed_agent: Optional[Agent] = None
    intermediary_agent1: Optional[Agent] = None
    intermediary_agent1_account: Optional[Account] = None

    debtor: Optional[Agent] = None
    debtor_agent: Optional[Agent] = None

    creditor_agent: Optional[Agent] = None
    creditor_agent_account: Optional[Account] = None
    creditor: Optional[Agent] = None
    creditor_account: Optional[Account] = None

    instruction_for_creditor_agent: Optional[str] = None
    instruction_for_next_agent: Optional[str] = None
    purpose: Optional[str] = None
    remittance_information: Optional[str] = None
