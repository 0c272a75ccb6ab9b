"""
CBPR+ pacs.008.001.08 - FI to FI Customer Credit Transfer

This message is sent by the debtor agent to the creditor agent, directly or
through other agents, to move funds from a debtor account to a creditor.

Structure (single transaction, NbOfTxs = 1):
- GrpHdr (PacsGroupHeader)
- CdtTrfTxInf
  - PmtId, PmtTpInf, IntrBkSttlmAmt, IntrBkSttlmDt, InstdAmt, ChrgBr
  - InstgAgt, InstdAgt, IntrmyAgt1, IntrmyAgt1Acct
  - Dbtr (Party), DbtrAcct, DbtrAgt
  - CdtrAgt, CdtrAgtAcct, Cdtr (Party), CdtrAcct
  - InstrForCdtrAgt, InstrForNxtAgt, Purp, RmtInf
"""

from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Optional

from cbpr_engine.messages.base import Account, Agent, Amount, Party
from cbpr_engine.messages.codes import DEFAULT_CHARGE_BEARER, CbprMessageType
from cbpr_engine.messages.headers import (
    PacsGroupHeader,
    PaymentIdentification,
    PaymentTypeInformation,
)


@dataclass(frozen=True)
class Pacs008Message:
    """pacs.008 customer credit transfer."""

    element_name: ClassVar[str] = ""
    message_type: ClassVar[CbprMessageType] = CbprMessageType.PACS_008

    group_header: Optional[PacsGroupHeader] = None
    payment_id: Optional[PaymentIdentification] = None
    payment_type_info: Optional[PaymentTypeInformation] = None

    settlement_amount: Optional[Amount] = None
    settlement_date: Optional[date] = None
    instructed_amount: Optional[Amount] = None
    charge_bearer: Optional[str] = DEFAULT_CHARGE_BEARER

    instructing_agent: Optional[Agent] = None
    instructed_agent: Optional[Agent] = None
    intermediary_agent1: Optional[Agent] = None
    intermediary_agent1_account: Optional[Account] = None

    debtor: Optional[Party] = None
    debtor_account: Optional[Account] = None
    debtor_agent: Optional[Agent] = None

    creditor_agent: Optional[Agent] = None
    creditor_agent_account: Optional[Account] = None
    creditor: Optional[Party] = None
    creditor_account: Optional[Account] = None

    instruction_for_creditor_agent: Optional[str] = None
    instruction_for_next_agent: Optional[str] = None
    purpose: Optional[str] = None
    remittance_information: Optional[str] = None
