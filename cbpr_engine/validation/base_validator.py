"""
Base Validator Framework

Provides the validation outcome types and the common check helpers shared by
all CBPR+ entity validators.

Validation is fail-fast: every check returns either None (passed) or one
ValidationFailure, and composite validators stop at the first failure.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Collection, Dict, Iterable, Optional, Sequence
import uuid


class ValidationErrorKind(Enum):
    """Failure kinds reported by the validators."""

    MISSING_FIELD = "MissingField"  # Mandatory field or sub-entity absent
    LENGTH_VIOLATION = "LengthViolation"  # Present field exceeds its max length
    FORMAT_VIOLATION = "FormatViolation"  # Wrong shape (fixed length, digits, UUID, IBAN)
    RANGE_VIOLATION = "RangeViolation"  # Numeric value outside its allowed range
    BUSINESS_RULE_VIOLATION = "BusinessRuleViolation"  # Cross-field rule or code set


@dataclass(frozen=True)
class ValidationFailure:
    """The single failure reported for an invalid entity tree."""

    kind: ValidationErrorKind
    field_path: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    @property
    def code(self) -> str:
        return f"CBPR_{self.kind.name}"

    def to_dict(self) -> Dict:
        return {
            "code": self.code,
            "kind": self.kind.value,
            "field": self.field_path,
            "message": self.message,
            "details": self.details,
        }


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of one validation call: success, or exactly one failure."""

    failure: Optional[ValidationFailure] = None

    @property
    def is_valid(self) -> bool:
        return self.failure is None

    @property
    def kind(self) -> Optional[ValidationErrorKind]:
        return self.failure.kind if self.failure else None

    @property
    def field_path(self) -> Optional[str]:
        return self.failure.field_path if self.failure else None

    @property
    def message(self) -> Optional[str]:
        return self.failure.message if self.failure else None

    @classmethod
    def success(cls) -> "ValidationOutcome":
        return _SUCCESS

    @classmethod
    def fail(
        cls,
        kind: ValidationErrorKind,
        field_path: str,
        message: str,
        **details,
    ) -> "ValidationOutcome":
        return cls(failure=ValidationFailure(kind, field_path, message, details))

    @classmethod
    def from_failure(cls, failure: Optional[ValidationFailure]) -> "ValidationOutcome":
        return cls(failure=failure) if failure is not None else _SUCCESS

    def to_dict(self) -> Dict:
        return {
            "is_valid": self.is_valid,
            "failure": self.failure.to_dict() if self.failure else None,
        }


_SUCCESS = ValidationOutcome()

# A check is a zero-argument callable evaluated lazily, in order
Check = Callable[[], Optional[ValidationFailure]]


class BaseValidator(ABC):
    """
    Abstract base class for CBPR+ validators.

    All entity and message validators inherit from this class.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return validator name."""
        pass

    @property
    @abstractmethod
    def version(self) -> str:
        """Return validator version."""
        pass

    @abstractmethod
    def validate(self, data: Any) -> ValidationOutcome:
        """
        Validate the provided entity.

        Args:
            data: Entity to validate (type depends on validator)

        Returns:
            ValidationOutcome carrying success or the first failure
        """
        pass


# Common validation utilities
def join_path(parent: str, child: str) -> str:
    """Join two field path segments with a dot, skipping an empty parent."""
    if not parent:
        return child
    return f"{parent}.{child}"


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not str(value).strip()


def first_failure(checks: Iterable[Check]) -> Optional[ValidationFailure]:
    """Evaluate checks in order and return the first failure, if any."""
    for check in checks:
        failure = check()
        if failure is not None:
            return failure
    return None


def fail(kind: ValidationErrorKind, path: str, message: str, **details) -> ValidationFailure:
    return ValidationFailure(kind, path, message, details)


def require(value: Any, path: str, message: Optional[str] = None) -> Optional[ValidationFailure]:
    """
    Check a mandatory field or sub-entity is present.

    Strings must be non-blank; any other value must not be None.
    """
    missing = is_blank(value) if isinstance(value, str) else value is None
    if missing:
        return fail(ValidationErrorKind.MISSING_FIELD, path, message or f"{path} is mandatory")
    return None


def check_max_length(
    value: Optional[str],
    max_length: int,
    path: str,
    label: Optional[str] = None,
) -> Optional[ValidationFailure]:
    """Check an optional text field does not exceed max_length characters."""
    if value and len(value) > max_length:
        return fail(
            ValidationErrorKind.LENGTH_VIOLATION,
            path,
            f"{label or path} exceeds {max_length} character limit",
            max_length=max_length,
            actual_length=len(value),
        )
    return None


def check_exact_length(
    value: Optional[str],
    lengths: Sequence[int],
    path: str,
    message: str,
) -> Optional[ValidationFailure]:
    """Check an optional identifier has one of the allowed fixed lengths."""
    if value and len(value) not in lengths:
        return fail(
            ValidationErrorKind.FORMAT_VIOLATION,
            path,
            message,
            allowed_lengths=list(lengths),
            actual_length=len(value),
        )
    return None


def check_code(
    value: Optional[str],
    allowed: Collection[str],
    path: str,
    label: str,
    display_order: Optional[Sequence[str]] = None,
) -> Optional[ValidationFailure]:
    """Check a present code belongs to its code set."""
    if value is not None and value not in allowed:
        codes = list(display_order or sorted(allowed))
        return fail(
            ValidationErrorKind.BUSINESS_RULE_VIOLATION,
            path,
            f"{label} must be one of: {', '.join(codes)}",
            value=value,
        )
    return None


def check_exclusive(
    first_present: bool,
    second_present: bool,
    path: str,
    neither_message: str,
    both_message: str,
) -> Optional[ValidationFailure]:
    """Check exactly one of two alternatives is present (XOR)."""
    if not first_present and not second_present:
        return fail(ValidationErrorKind.BUSINESS_RULE_VIOLATION, path, neither_message)
    if first_present and second_present:
        return fail(ValidationErrorKind.BUSINESS_RULE_VIOLATION, path, both_message)
    return None


def check_implies(
    antecedent_present: bool,
    consequent_present: bool,
    path: str,
    message: str,
) -> Optional[ValidationFailure]:
    """Check that when the antecedent is present so is the consequent."""
    if antecedent_present and not consequent_present:
        return fail(ValidationErrorKind.BUSINESS_RULE_VIOLATION, path, message)
    return None


def check_uuid(value: Any, path: str, message: str) -> Optional[ValidationFailure]:
    """Check a present value parses as a UUID; uuid.UUID instances are accepted."""
    if value is None or value == "":
        return None
    try:
        uuid.UUID(str(value).strip())
    except ValueError:
        return fail(ValidationErrorKind.FORMAT_VIOLATION, path, message, value=value)
    return None
