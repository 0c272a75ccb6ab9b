"""
CBPR+ Validation

Fail-fast validation of CBPR+ message trees. Every call returns one
ValidationOutcome: success, or the first failure in check order.
"""

from cbpr_engine.validation.base_validator import (
    BaseValidator,
    ValidationErrorKind,
    ValidationFailure,
    ValidationOutcome,
)
from cbpr_engine.validation.cbpr_validator import CbprValidator, validate
from cbpr_engine.validation.entity_validators import EntityValidator
from cbpr_engine.validation.message_validators import MessageValidator
from cbpr_engine.validation.rules import FieldRule, evaluate_rules

__all__ = [
    "BaseValidator",
    "ValidationErrorKind",
    "ValidationFailure",
    "ValidationOutcome",
    "CbprValidator",
    "EntityValidator",
    "MessageValidator",
    "FieldRule",
    "evaluate_rules",
    "validate",
]
