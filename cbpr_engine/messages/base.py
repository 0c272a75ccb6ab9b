"""
CBPR+ Entity Base Classes

Shared value types used across the CBPR+ messages: amounts, accounts,
postal addresses, financial institution identification, agents and parties.

All entities are frozen dataclasses. They are built fully populated by the
caller and never mutated; validation is a read-only traversal performed by
cbpr_engine.validation.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import ClassVar, Optional, Union


@dataclass(frozen=True)
class Amount:
    """Monetary amount with currency."""

    element_name: ClassVar[str] = "Amt"

    currency: str  # ISO 4217 currency code
    value: Decimal = Decimal("0")

    def __post_init__(self):
        if isinstance(self.value, (int, float, str)):
            object.__setattr__(self, "value", Decimal(str(self.value)))


@dataclass(frozen=True)
class ClearingSystemMemberId:
    """Clearing system member identification (e.g. GBDSC sort code)."""

    element_name: ClassVar[str] = "ClrSysMmbId"

    code: Optional[str] = None  # ClrSysId/Cd
    member_id: Optional[str] = None  # MmbId


@dataclass(frozen=True)
class GenericIdentification:
    """Proprietary identification used by address types."""

    element_name: ClassVar[str] = "Prtry"

    identification: Optional[str] = None
    issuer: Optional[str] = None
    scheme_name: Optional[str] = None


@dataclass(frozen=True)
class AddressType:
    """Address type: either a code or a proprietary identification."""

    element_name: ClassVar[str] = "AdrTp"

    code: Optional[str] = None
    proprietary: Optional[GenericIdentification] = None


@dataclass(frozen=True)
class PostalAddress:
    """Structured postal address (no AdrLine)."""

    element_name: ClassVar[str] = "PstlAdr"

    address_type: Optional[AddressType] = None
    department: Optional[str] = None
    sub_department: Optional[str] = None
    street_name: Optional[str] = None
    building_number: Optional[str] = None
    building_name: Optional[str] = None
    floor: Optional[str] = None
    post_box: Optional[str] = None
    room: Optional[str] = None
    post_code: Optional[str] = None
    town_name: Optional[str] = None
    town_location_name: Optional[str] = None
    district_name: Optional[str] = None
    country_sub_division: Optional[str] = None
    country: Optional[str] = None  # ISO 3166-1 alpha-2


@dataclass(frozen=True)
class FinancialInstitutionId:
    """
    Financial institution identification (FinInstnId).

    Two exclusive shapes:
    - BIC, optionally complemented by LEI and/or clearing system member id
    - name plus postal address, without BIC
    """

    element_name: ClassVar[str] = "FinInstnId"

    bic: Optional[str] = None
    lei: Optional[str] = None
    clearing_system_member_id: Optional[ClearingSystemMemberId] = None
    name: Optional[str] = None
    postal_address: Optional[PostalAddress] = None

    @classmethod
    def from_bic(
        cls,
        bic: str,
        lei: Optional[str] = None,
        clearing_system_member_id: Optional[ClearingSystemMemberId] = None,
    ) -> "FinancialInstitutionId":
        return cls(bic=bic, lei=lei, clearing_system_member_id=clearing_system_member_id)

    @classmethod
    def from_name_and_address(
        cls,
        name: str,
        postal_address: PostalAddress,
        lei: Optional[str] = None,
        clearing_system_member_id: Optional[ClearingSystemMemberId] = None,
    ) -> "FinancialInstitutionId":
        return cls(
            name=name,
            postal_address=postal_address,
            lei=lei,
            clearing_system_member_id=clearing_system_member_id,
        )


@dataclass(frozen=True)
class Agent:
    """Financial institution agent (InstgAgt, DbtrAgt, CdtrAgt, ...)."""

    element_name: ClassVar[str] = "Agt"

    financial_institution_id: Optional[FinancialInstitutionId] = None

    @classmethod
    def from_bic(cls, bic: str) -> "Agent":
        return cls(financial_institution_id=FinancialInstitutionId.from_bic(bic))


@dataclass(frozen=True)
class PartyIdentification:
    """Organisation identification of a party: AnyBIC and/or LEI."""

    element_name: ClassVar[str] = "Id"

    bic: Optional[str] = None
    lei: Optional[str] = None


@dataclass(frozen=True)
class Party:
    """Party (debtor, creditor) with name and structured address."""

    element_name: ClassVar[str] = "Pty"

    name: Optional[str] = None
    postal_address: Optional[PostalAddress] = None
    identification: Optional[PartyIdentification] = None


@dataclass(frozen=True)
class Account:
    """Account identification: IBAN or other identification, never both."""

    element_name: ClassVar[str] = "Acct"

    iban: Optional[str] = None
    other_id: Optional[str] = None

    @classmethod
    def from_iban(cls, iban: str) -> "Account":
        return cls(iban=iban)

    @classmethod
    def from_other(cls, other_id: str) -> "Account":
        return cls(other_id=other_id)


@dataclass(frozen=True)
class Debtor:
    """Debtor choice: a Party or an Agent, never both."""

    element_name: ClassVar[str] = "Dbtr"

    party: Optional[Party] = None
    agent: Optional[Agent] = None

    @classmethod
    def of(cls, debtor: Union[Party, Agent]) -> "Debtor":
        """Build the choice from whichever variant is supplied."""
        if isinstance(debtor, Party):
            return cls(party=debtor)
        if isinstance(debtor, Agent):
            return cls(agent=debtor)
        raise TypeError(f"Debtor must be a Party or an Agent, got {type(debtor).__name__}")

    @property
    def selected(self) -> Optional[Union[Party, Agent]]:
        return self.party if self.party is not None else self.agent
