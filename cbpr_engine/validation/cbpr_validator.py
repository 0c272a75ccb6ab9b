"""
CBPR+ Validator

Entry point of the validation engine. Dispatches any supported entity to its
validator, logs the outcome and records Prometheus metrics.

Validation itself is pure; this facade is the only place where logging and
metrics are attached.
"""

import logging
from typing import Any, Optional

from cbpr_engine.core.config import EngineConfig, get_config
from cbpr_engine.core.exceptions import UnsupportedEntityException
from cbpr_engine.formatting.formatter import ValueFormatter
from cbpr_engine.monitoring.metrics import ValidationMetrics
from cbpr_engine.validation.base_validator import BaseValidator, ValidationOutcome
from cbpr_engine.validation.message_validators import MessageValidator

logger = logging.getLogger(__name__)


class CbprValidator(BaseValidator):
    """
    Validator for CBPR+ messages and their entities.

    A single instance holds no mutable validation state and may be shared
    across threads.

    Example:
        validator = CbprValidator()
        outcome = validator.validate(pacs008_message)
        if not outcome.is_valid:
            print(outcome.field_path, outcome.message)
    """

    def __init__(
        self,
        formatter: Optional[ValueFormatter] = None,
        config: Optional[EngineConfig] = None,
        metrics: Optional[ValidationMetrics] = None,
    ):
        """
        Initialize the CBPR+ validator.

        Args:
            formatter: Value formatter used for IBAN checks (default CbprFormatter)
            config: Engine configuration (default: global configuration)
            metrics: Metrics collector; created from config when metrics are enabled
        """
        self.config = config or get_config()
        self._validator = MessageValidator(formatter)
        if metrics is None and self.config.metrics.enabled:
            metrics = ValidationMetrics(self.config.metrics)
        self.metrics = metrics

    @property
    def name(self) -> str:
        return "CbprValidator"

    @property
    def version(self) -> str:
        return "1.0"

    @property
    def formatter(self) -> ValueFormatter:
        return self._validator.formatter

    def supports(self, data: Any) -> bool:
        return isinstance(data, self._validator.supported_types)

    def validate(self, data: Any, path: Optional[str] = None) -> ValidationOutcome:
        """
        Validate a CBPR+ message or any of its entities.

        Args:
            data: Message root or entity instance
            path: Field path of the entity; defaults to its element tag
                  (empty for message roots)

        Returns:
            ValidationOutcome with success or the first failure

        Raises:
            UnsupportedEntityException: if the entity type is not supported
        """
        if not self.supports(data):
            raise UnsupportedEntityException(data)

        entity = type(data).__name__
        if self.metrics is not None:
            with self.metrics.time_validation(entity):
                outcome = self._validator.validate(data, path)
        else:
            outcome = self._validator.validate(data, path)

        self._log_outcome(entity, outcome)
        if self.metrics is not None:
            self.metrics.record_outcome(
                entity, outcome.is_valid, outcome.kind.value if outcome.kind else None
            )

        return outcome

    def _log_outcome(self, entity: str, outcome: ValidationOutcome) -> None:
        if outcome.is_valid:
            logger.debug(f"{entity} passed CBPR+ validation")
            return

        logger.info(
            f"{entity} rejected: {outcome.field_path}: {outcome.message}",
            extra={
                "component": "validation",
                "metadata": {"entity": entity, **outcome.failure.to_dict()},
            },
        )


_default_validator: Optional[CbprValidator] = None


def validate(data: Any) -> ValidationOutcome:
    """Validate an entity with a shared default CbprValidator."""
    global _default_validator
    if _default_validator is None:
        _default_validator = CbprValidator()
    return _default_validator.validate(data)
