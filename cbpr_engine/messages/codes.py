"""
CBPR+ Codes and Constants

Defines:
- Settlement method, instruction priority and category purpose code sets
- Address type codes
- Clearing system codes with dedicated member-id rules
- Currency decimal-place tables used by the value formatter
- Maximum field lengths of the ISO 20022 text types used by CBPR+
"""

from enum import Enum
from typing import Dict, FrozenSet


class CbprMessageType(Enum):
    """CBPR+ message types handled by the engine."""

    PACS_008 = ("pacs.008.001.08", "FIToFICstmrCdtTrf", "FI to FI Customer Credit Transfer")
    PACS_009 = ("pacs.009.001.08", "FICdtTrf", "Financial Institution Credit Transfer")
    CAMT_057 = ("camt.057.001.06", "NtfctnToRcv", "Notification to Receive")

    def __init__(self, code: str, root_element: str, description: str):
        self.code = code
        self.root_element = root_element
        self.description = description


class SettlementMethod(str, Enum):
    """Settlement method codes."""

    INDA = "INDA"  # Instructed Agent
    INGA = "INGA"  # Instructing Agent
    COVE = "COVE"  # Cover Payment
    CLRG = "CLRG"  # Clearing System


class InstructionPriority(str, Enum):
    """Instruction priority codes."""

    HIGH = "HIGH"
    NORM = "NORM"


class CategoryPurpose(str, Enum):
    """Category purpose codes accepted on CBPR+ payments."""

    LOAN = "LOAN"  # Loan payment
    CASH = "CASH"  # Cash management transfer


class AddressTypeCode(str, Enum):
    """Postal address type codes."""

    ADDR = "ADDR"  # Postal
    PBOX = "PBOX"  # PO Box
    HOME = "HOME"  # Residential
    BIZZ = "BIZZ"  # Business
    MLTO = "MLTO"  # Mail To
    DLVY = "DLVY"  # Delivery To


SETTLEMENT_METHODS: FrozenSet[str] = frozenset(m.value for m in SettlementMethod)
INSTRUCTION_PRIORITIES: FrozenSet[str] = frozenset(p.value for p in InstructionPriority)
CATEGORY_PURPOSES: FrozenSet[str] = frozenset(c.value for c in CategoryPurpose)
ADDRESS_TYPE_CODES: FrozenSet[str] = frozenset(a.value for a in AddressTypeCode)

# Display order for error messages, matching the order codes are documented in
SETTLEMENT_METHOD_ORDER = ("INDA", "INGA", "COVE", "CLRG")
INSTRUCTION_PRIORITY_ORDER = ("HIGH", "NORM")
CATEGORY_PURPOSE_ORDER = ("LOAN", "CASH")

DEFAULT_INSTRUCTION_PRIORITY = InstructionPriority.NORM.value
DEFAULT_SERVICE_LEVEL = "G001"  # SWIFT gpi
DEFAULT_CHARGE_BEARER = "DEBT"
REQUIRED_NUMBER_OF_TRANSACTIONS = "1"

# Clearing system codes
UK_DOMESTIC_SORT_CODE = "GBDSC"
UK_SORT_CODE_LENGTH = 6

# Identifier lengths
BIC_LENGTHS = (8, 11)
LEI_LENGTH = 20
COUNTRY_CODE_LENGTH = 2
CURRENCY_CODE_LENGTH = 3
PURPOSE_CODE_MAX_LENGTH = 4

# ISO 20022 text type limits
MAX_35_TEXT = 35
MAX_70_TEXT = 70
MAX_140_TEXT = 140
MAX_16_TEXT = 16

# Instruction fields: next-agent instructions are shorter on pacs.008 than on pacs.009
PACS008_INSTR_FOR_CDTR_AGT_MAX = MAX_140_TEXT
PACS008_INSTR_FOR_NXT_AGT_MAX = MAX_35_TEXT
PACS009_INSTR_FOR_CDTR_AGT_MAX = MAX_140_TEXT
PACS009_INSTR_FOR_NXT_AGT_MAX = MAX_140_TEXT
REMITTANCE_INFO_MAX = MAX_140_TEXT

# Currency decimal places (ISO 4217 minor units); anything not listed uses 2
ZERO_DECIMAL_CURRENCIES: FrozenSet[str] = frozenset({"JPY", "KRW", "VND"})
THREE_DECIMAL_CURRENCIES: FrozenSet[str] = frozenset({"KWD", "BHD", "OMR"})
DEFAULT_CURRENCY_DECIMALS = 2


def currency_decimals(currency: str) -> int:
    """Return the number of decimal places used on the wire for a currency."""
    code = (currency or "").upper()
    if code in ZERO_DECIMAL_CURRENCIES:
        return 0
    if code in THREE_DECIMAL_CURRENCIES:
        return 3
    return DEFAULT_CURRENCY_DECIMALS


# Postal address field limits, in the order the fields appear in PstlAdr
POSTAL_ADDRESS_LIMITS: Dict[str, int] = {
    "Dept": MAX_70_TEXT,
    "SubDept": MAX_70_TEXT,
    "StrtNm": MAX_70_TEXT,
    "BldgNb": MAX_16_TEXT,
    "BldgNm": MAX_35_TEXT,
    "Flr": MAX_70_TEXT,
    "PstBx": MAX_16_TEXT,
    "Room": MAX_70_TEXT,
    "PstCd": MAX_16_TEXT,
    "TwnNm": MAX_35_TEXT,
    "TwnLctnNm": MAX_35_TEXT,
    "DstrctNm": MAX_35_TEXT,
    "CtrySubDvsn": MAX_35_TEXT,
}
