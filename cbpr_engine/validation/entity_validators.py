"""
CBPR+ Entity Validators

Validation of the shared entities used across CBPR+ messages:
- Amounts, accounts, postal addresses
- Financial institution identification (Rule 1A) and agents
- Parties, party identification and the debtor choice
- Group headers, settlement, payment identification and type information

Every validate_* method takes the entity and the field path of its element
and returns None on success or the first ValidationFailure.
"""

from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from cbpr_engine.core.exceptions import IbanFormatException, UnsupportedEntityException
from cbpr_engine.formatting.formatter import CbprFormatter, ValueFormatter
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
from cbpr_engine.messages.codes import ADDRESS_TYPE_CODES, UK_DOMESTIC_SORT_CODE, UK_SORT_CODE_LENGTH
from cbpr_engine.messages.headers import (
    GroupHeader,
    PacsGroupHeader,
    PaymentIdentification,
    PaymentTypeInformation,
    SettlementInformation,
)
from cbpr_engine.validation.base_validator import (
    BaseValidator,
    ValidationErrorKind,
    ValidationFailure,
    ValidationOutcome,
    check_code,
    check_exclusive,
    fail,
    first_failure,
    is_blank,
    join_path,
)
from cbpr_engine.validation.rules import (
    AGENT_RULES,
    AMOUNT_RULES,
    CLEARING_SYSTEM_MEMBER_ID_RULES,
    FINANCIAL_INSTITUTION_ID_RULES,
    GENERIC_IDENTIFICATION_RULES,
    GROUP_HEADER_RULES,
    PACS_GROUP_HEADER_RULES,
    PARTY_IDENTIFICATION_RULES,
    PARTY_RULES,
    PAYMENT_IDENTIFICATION_RULES,
    PAYMENT_TYPE_INFORMATION_RULES,
    POSTAL_ADDRESS_RULES,
    SETTLEMENT_INFORMATION_RULES,
    evaluate_rules,
)

EntityCheck = Callable[[Any, str], Optional[ValidationFailure]]

# (element tag, attribute, validator method name)
ChildSpec = Tuple[str, str, str]


class EntityValidator(BaseValidator):
    """
    Validator for the shared CBPR+ entities.

    The formatter is used only to check IBANs; any ValueFormatter
    implementation can be injected.
    """

    def __init__(self, formatter: Optional[ValueFormatter] = None):
        self.formatter = formatter or CbprFormatter()
        self._validators: Dict[type, EntityCheck] = {
            Amount: self.validate_amount,
            ClearingSystemMemberId: self.validate_clearing_system_member_id,
            GenericIdentification: self.validate_generic_identification,
            AddressType: self.validate_address_type,
            PostalAddress: self.validate_postal_address,
            FinancialInstitutionId: self.validate_financial_institution_id,
            Agent: self.validate_agent,
            PartyIdentification: self.validate_party_identification,
            Party: self.validate_party,
            Account: self.validate_account,
            Debtor: self.validate_debtor,
            SettlementInformation: self.validate_settlement_information,
            GroupHeader: self.validate_group_header,
            PacsGroupHeader: self.validate_pacs_group_header,
            PaymentIdentification: self.validate_payment_identification,
            PaymentTypeInformation: self.validate_payment_type_information,
        }

    @property
    def name(self) -> str:
        return "EntityValidator"

    @property
    def version(self) -> str:
        return "1.0"

    @property
    def supported_types(self) -> Tuple[type, ...]:
        return tuple(self._validators)

    def validate(self, data: Any, path: Optional[str] = None) -> ValidationOutcome:
        """
        Validate any supported entity.

        Args:
            data: Entity instance
            path: Field path of the entity; defaults to its element tag

        Raises:
            UnsupportedEntityException: if no validator handles the entity type
        """
        check = self._resolve(data)
        if path is None:
            path = data.element_name
        return ValidationOutcome.from_failure(check(data, path))

    def _resolve(self, data: Any) -> EntityCheck:
        for entity_type in type(data).__mro__:
            check = self._validators.get(entity_type)
            if check is not None:
                return check
        raise UnsupportedEntityException(data)

    def _validate_children(
        self, entity: Any, children: Sequence[ChildSpec], path: str
    ) -> Optional[ValidationFailure]:
        """Validate present children in the given order."""
        for tag, attribute, method in children:
            child = getattr(entity, attribute)
            if child is None:
                continue
            failure = getattr(self, method)(child, join_path(path, tag))
            if failure is not None:
                return failure
        return None

    # Leaf entities

    def validate_amount(self, amount: Amount, path: str = "Amt") -> Optional[ValidationFailure]:
        return evaluate_rules(amount, AMOUNT_RULES, path)

    def validate_clearing_system_member_id(
        self, member: ClearingSystemMemberId, path: str = "ClrSysMmbId"
    ) -> Optional[ValidationFailure]:
        """Validate clearing system member id, including UK sort codes."""
        failure = evaluate_rules(member, CLEARING_SYSTEM_MEMBER_ID_RULES, path)
        if failure:
            return failure

        if member.code == UK_DOMESTIC_SORT_CODE:
            member_path = join_path(path, "MmbId")
            if len(member.member_id) != UK_SORT_CODE_LENGTH:
                return fail(
                    ValidationErrorKind.FORMAT_VIOLATION,
                    member_path,
                    f"UK sort code (GBDSC) must be {UK_SORT_CODE_LENGTH} digits",
                    value=member.member_id,
                )
            if not (member.member_id.isascii() and member.member_id.isdigit()):
                return fail(
                    ValidationErrorKind.FORMAT_VIOLATION,
                    member_path,
                    "UK sort code (GBDSC) must contain only digits (no hyphens)",
                    value=member.member_id,
                )

        return None

    def validate_generic_identification(
        self, identification: GenericIdentification, path: str = "Prtry"
    ) -> Optional[ValidationFailure]:
        return evaluate_rules(identification, GENERIC_IDENTIFICATION_RULES, path)

    def validate_address_type(
        self, address_type: AddressType, path: str = "AdrTp"
    ) -> Optional[ValidationFailure]:
        has_code = not is_blank(address_type.code)
        has_proprietary = address_type.proprietary is not None

        failure = check_exclusive(
            has_code,
            has_proprietary,
            path,
            "AdrTp must have either Cd or Prtry",
            "AdrTp cannot have both Cd and Prtry",
        )
        if failure:
            return failure

        if has_code:
            return check_code(address_type.code, ADDRESS_TYPE_CODES, join_path(path, "Cd"), "AdrTp Cd")
        return self.validate_generic_identification(address_type.proprietary, join_path(path, "Prtry"))

    def validate_postal_address(
        self, address: PostalAddress, path: str = "PstlAdr"
    ) -> Optional[ValidationFailure]:
        """Validate structured address: address type, field lengths, country."""
        if address.address_type is not None:
            failure = self.validate_address_type(address.address_type, join_path(path, "AdrTp"))
            if failure:
                return failure
        return evaluate_rules(address, POSTAL_ADDRESS_RULES, path)

    def validate_financial_institution_id(
        self, institution: FinancialInstitutionId, path: str = "FinInstnId"
    ) -> Optional[ValidationFailure]:
        """
        Validate financial institution identification.

        Rule 1A: when a BIC is present, name and postal address are not
        allowed; without a BIC, both name and postal address are required.
        Identifier lengths are checked next, then the clearing system member
        id and the postal address.
        """
        has_bic = not is_blank(institution.bic)
        has_name = not is_blank(institution.name)
        has_address = institution.postal_address is not None

        if has_bic and (has_name or has_address):
            return fail(
                ValidationErrorKind.BUSINESS_RULE_VIOLATION,
                path,
                "Rule 1A: When BIC is present, Name and PostalAddress are not allowed",
            )
        if not has_bic and not (has_name and has_address):
            return fail(
                ValidationErrorKind.BUSINESS_RULE_VIOLATION,
                path,
                "Rule 1A: Either BIC or (Name + PostalAddress) is required",
            )

        return first_failure([
            lambda: evaluate_rules(institution, FINANCIAL_INSTITUTION_ID_RULES, path),
            lambda: self._validate_children(
                institution,
                [
                    ("ClrSysMmbId", "clearing_system_member_id", "validate_clearing_system_member_id"),
                    ("PstlAdr", "postal_address", "validate_postal_address"),
                ],
                path,
            ),
        ])

    def validate_party_identification(
        self, identification: PartyIdentification, path: str = "Id"
    ) -> Optional[ValidationFailure]:
        if is_blank(identification.bic) and is_blank(identification.lei):
            return fail(
                ValidationErrorKind.MISSING_FIELD,
                path,
                "Party identification requires AnyBIC or LEI",
            )
        return evaluate_rules(identification, PARTY_IDENTIFICATION_RULES, path)

    def validate_account(self, account: Account, path: str = "Acct") -> Optional[ValidationFailure]:
        """Validate account: exactly one of IBAN or other id; IBAN checksum."""
        has_iban = not is_blank(account.iban)
        has_other = not is_blank(account.other_id)

        failure = check_exclusive(
            has_iban,
            has_other,
            path,
            "Account must have either IBAN or OtherAccountId",
            "Account cannot have both IBAN and OtherAccountId - they are mutually exclusive",
        )
        if failure:
            return failure

        if has_iban:
            try:
                self.formatter.format_iban(account.iban)
            except IbanFormatException as e:
                return fail(
                    ValidationErrorKind.FORMAT_VIOLATION,
                    join_path(path, "Id.IBAN"),
                    f"Invalid IBAN: {e.reason}",
                    value=account.iban,
                )

        return None

    # Composite entities

    def validate_agent(self, agent: Agent, path: str = "Agt") -> Optional[ValidationFailure]:
        return evaluate_rules(agent, AGENT_RULES, path) or self.validate_financial_institution_id(
            agent.financial_institution_id, join_path(path, "FinInstnId")
        )

    def validate_party(self, party: Party, path: str = "Pty") -> Optional[ValidationFailure]:
        failure = evaluate_rules(party, PARTY_RULES, path)
        if failure:
            return failure
        return self._validate_children(
            party,
            [
                ("PstlAdr", "postal_address", "validate_postal_address"),
                ("Id.OrgId", "identification", "validate_party_identification"),
            ],
            path,
        )

    def validate_debtor(self, debtor: Debtor, path: str = "Dbtr") -> Optional[ValidationFailure]:
        """Validate the debtor choice and whichever variant is set."""
        failure = check_exclusive(
            debtor.party is not None,
            debtor.agent is not None,
            path,
            "Debtor must be either a Party or an Agent",
            "Debtor cannot be both a Party and an Agent",
        )
        if failure:
            return failure

        if debtor.party is not None:
            return self.validate_party(debtor.party, join_path(path, "Pty"))
        return self.validate_agent(debtor.agent, join_path(path, "Agt"))

    def validate_settlement_information(
        self, settlement: SettlementInformation, path: str = "SttlmInf"
    ) -> Optional[ValidationFailure]:
        failure = evaluate_rules(settlement, SETTLEMENT_INFORMATION_RULES, path)
        if failure:
            return failure
        return self._validate_children(
            settlement, [("SttlmAcct", "settlement_account", "validate_account")], path
        )

    def validate_group_header(
        self, header: GroupHeader, path: str = "GrpHdr"
    ) -> Optional[ValidationFailure]:
        return evaluate_rules(header, GROUP_HEADER_RULES, path)

    def validate_pacs_group_header(
        self, header: PacsGroupHeader, path: str = "GrpHdr"
    ) -> Optional[ValidationFailure]:
        failure = evaluate_rules(header, PACS_GROUP_HEADER_RULES, path)
        if failure:
            return failure
        return self.validate_settlement_information(
            header.settlement_information, join_path(path, "SttlmInf")
        )

    def validate_payment_identification(
        self, payment_id: PaymentIdentification, path: str = "PmtId"
    ) -> Optional[ValidationFailure]:
        return evaluate_rules(payment_id, PAYMENT_IDENTIFICATION_RULES, path)

    def validate_payment_type_information(
        self, payment_type: PaymentTypeInformation, path: str = "PmtTpInf"
    ) -> Optional[ValidationFailure]:
        return evaluate_rules(payment_type, PAYMENT_TYPE_INFORMATION_RULES, path)
