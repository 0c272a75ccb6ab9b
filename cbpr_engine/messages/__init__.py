"""
CBPR+ Message Entities

Entity trees for the ISO 20022 CBPR+ messages validated by the engine:
- pacs.008 (FI to FI Customer Credit Transfer)
- pacs.009 (Financial Institution Credit Transfer)
- camt.057 (Notification to Receive)
"""

from cbpr_engine.messages.base import (
    Account,
    AddressType,
    Agent,
    Amount,
    ClearingSystemMemberId,
    Debtor,
    FinancialInstitutionId,
    GenericIdentification,
    Party,
    PartyIdentification,
    PostalAddress,
)
from cbpr_engine.messages.headers import (
    GroupHeader,
    PacsGroupHeader,
    PaymentIdentification,
    PaymentTypeInformation,
    SettlementInformation,
)
from cbpr_engine.messages.pacs008 import Pacs008Message
from cbpr_engine.messages.pacs009 import Pacs009Message
from cbpr_engine.messages.camt057 import Camt057Message, NotificationItem
from cbpr_engine.messages.codes import CbprMessageType

__all__ = [
    # Shared entities
    "Account",
    "AddressType",
    "Agent",
    "Amount",
    "ClearingSystemMemberId",
    "Debtor",
    "FinancialInstitutionId",
    "GenericIdentification",
    "Party",
    "PartyIdentification",
    "PostalAddress",
    # Headers
    "GroupHeader",
    "PacsGroupHeader",
    "PaymentIdentification",
    "PaymentTypeInformation",
    "SettlementInformation",
    # Messages
    "CbprMessageType",
    "Pacs008Message",
    "Pacs009Message",
    "Camt057Message",
    "NotificationItem",
]
