"""
CBPR+ Value Formatter

Formats values for the wire (amounts, dates, timestamps) and canonicalises
IBANs. The validation engine depends only on the ValueFormatter protocol; the
CbprFormatter below is the default implementation.
"""

import uuid
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from cbpr_engine.core.exceptions import IbanFormatException
from cbpr_engine.messages.codes import currency_decimals

IBAN_MIN_LENGTH = 15
IBAN_MAX_LENGTH = 34


class ValueFormatter(Protocol):
    """Formatting capability consumed by the validation engine."""

    def format_amount(self, value: Decimal, currency: str) -> str:
        ...

    def format_date(self, value: date) -> str:
        ...

    def format_datetime_utc(self, value: datetime) -> str:
        ...

    def format_iban(self, iban: str) -> str:
        """Return the canonical IBAN or raise IbanFormatException."""
        ...


class CbprFormatter:
    """Default CBPR+ value formatter."""

    def format_amount(self, value: Decimal, currency: str) -> str:
        """
        Format an amount using the currency's decimal places.

        JPY, KRW and VND use 0 decimals; KWD, BHD and OMR use 3; all other
        currencies use 2. No thousands separator, '.' as decimal point.
        """
        decimals = currency_decimals(currency)
        quantum = Decimal(1).scaleb(-decimals)
        return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"

    def format_date(self, value: date) -> str:
        """Format as ISO date (YYYY-MM-DD)."""
        if isinstance(value, datetime):
            value = value.date()
        return value.strftime("%Y-%m-%d")

    def format_datetime_utc(self, value: datetime) -> str:
        """Format as ISO 8601 UTC timestamp, e.g. 2025-10-08T14:30:00Z.

        Naive datetimes are taken to already be in UTC.
        """
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")

    def format_iban(self, iban: str) -> str:
        """
        Validate and canonicalise an IBAN (ISO 13616).

        Returns the IBAN without spaces, upper-cased.

        Raises:
            IbanFormatException: if the IBAN is malformed or fails the mod-97 check
        """
        if not iban or not iban.strip():
            raise IbanFormatException("IBAN is required", iban)

        canonical = iban.replace(" ", "").upper()

        if len(canonical) < IBAN_MIN_LENGTH or len(canonical) > IBAN_MAX_LENGTH:
            raise IbanFormatException(
                f"IBAN length must be between {IBAN_MIN_LENGTH} and {IBAN_MAX_LENGTH} characters",
                iban,
            )

        if not canonical.isalnum() or not canonical.isascii():
            raise IbanFormatException("IBAN must contain only letters and digits", iban)

        if not canonical[:2].isalpha():
            raise IbanFormatException("IBAN must start with 2-letter country code", iban)

        if not canonical[2:4].isdigit():
            raise IbanFormatException("IBAN check digits must be numeric", iban)

        # Move first 4 chars to end, letters become numbers (A=10, B=11, ...)
        rearranged = canonical[4:] + canonical[:4]
        numeric = "".join(
            char if char.isdigit() else str(ord(char) - ord("A") + 10) for char in rearranged
        )

        if int(numeric) % 97 != 1:
            raise IbanFormatException("Invalid IBAN checksum", iban)

        return canonical


def generate_uetr() -> str:
    """Generate a Unique End-to-end Transaction Reference (UUID v4)."""
    return str(uuid.uuid4())
