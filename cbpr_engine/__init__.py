"""
CBPR+ Validation Engine

Validates ISO 20022 CBPR+ payment and notification messages (pacs.008,
pacs.009, camt.057) against conditional, cross-field and cross-entity
business rules before they are rendered to the wire.
"""

from cbpr_engine.core.exceptions import (
    CbprEngineException,
    IbanFormatException,
    UnsupportedEntityException,
)
from cbpr_engine.formatting import CbprFormatter, ValueFormatter, generate_uetr
from cbpr_engine.validation import (
    CbprValidator,
    ValidationErrorKind,
    ValidationFailure,
    ValidationOutcome,
    validate,
)

__version__ = "1.0.0"

__all__ = [
    "CbprEngineException",
    "IbanFormatException",
    "UnsupportedEntityException",
    "CbprFormatter",
    "ValueFormatter",
    "generate_uetr",
    "CbprValidator",
    "ValidationErrorKind",
    "ValidationFailure",
    "ValidationOutcome",
    "validate",
    "__version__",
]
