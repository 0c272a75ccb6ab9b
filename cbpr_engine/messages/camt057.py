"""
CBPR+ camt.057.001.06 - Notification to Receive

Advises the account servicer that funds are expected on an account.
"""

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from cbpr_engine.messages.base import Account, Agent, Amount, Debtor
from cbpr_engine.messages.codes import CbprMessageType
from cbpr_engine.messages.headers import GroupHeader


@dataclass(frozen=True)
class NotificationItem:
    """Expected payment within a notification (Ntfctn/Itm)."""

    element_name: ClassVar[str] = "Itm"

    id: Optional[str] = None
    end_to_end_id: Optional[str] = None
    uetr: Optional[str] = None
    amount: Optional[Amount] = None
    expected_value_date: Optional[date] = None
    debtor: Optional[Debtor] = None
    debtor_agent: Optional[Agent] = None
    intermediary_agent: Optional[Agent] = None


@dataclass(frozen=True)
class Camt057Message:
    """camt.057 notification to receive."""

    element_name: ClassVar[str] = ""
    message_type: ClassVar[CbprMessageType] = CbprMessageType.CAMT_057

    group_header: Optional[GroupHeader] = None
    notification_id: Optional[str] = None
    account: Optional[Account] = None
    account_owner: Optional[Agent] = None
    account_servicer: Optional[Agent] = None
    item: Optional[NotificationItem] = None
