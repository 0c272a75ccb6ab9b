"""
CBPR+ Engine - Custom Exceptions

This module defines custom exception classes for the CBPR+ engine.

Validation failures are not exceptions: they are returned as
ValidationOutcome values. The classes here cover configuration problems,
formatter rejections and programming errors at the engine boundary.
"""

from typing import Any, Dict, Optional


class CbprEngineException(Exception):
    """Base exception for all CBPR+ engine errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "CBPR_ENGINE_ERROR"
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} (Code: {self.error_code}, Context: {self.context})"
        return f"{self.message} (Code: {self.error_code})"


class ConfigurationException(CbprEngineException):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            error_code="CONFIG_ERROR",
            context={"config_key": config_key} if config_key else {},
        )


class FormatterException(CbprEngineException):
    """Exception raised when the value formatter rejects a value."""

    def __init__(
        self,
        message: str,
        value: Optional[str] = None,
        error_code: str = "FORMATTER_ERROR",
    ):
        context = {"value": value} if value is not None else {}
        super().__init__(message, error_code=error_code, context=context)


class IbanFormatException(FormatterException):
    """Exception raised when an IBAN cannot be canonicalised."""

    def __init__(self, message: str, iban: Optional[str] = None):
        super().__init__(message, value=iban, error_code="IBAN_FORMAT_ERROR")
        self.reason = message


class UnsupportedEntityException(CbprEngineException):
    """Exception raised when no validator is registered for an entity type."""

    def __init__(self, entity: Any):
        entity_type = type(entity).__name__
        super().__init__(
            f"No validator registered for entity type {entity_type}",
            error_code="UNSUPPORTED_ENTITY",
            context={"entity_type": entity_type},
        )
        self.entity_type = entity_type
