"""
CBPR+ Engine - Core Module

This module provides the core infrastructure for the validation engine:
configuration management, exception handling and structured logging.
"""

from .config import EngineConfig, Environment, LogFormat, LogLevel, MetricsConfig
from .structured_logging import StructuredFormatter, configure_logging
from .exceptions import (
    CbprEngineException,
    ConfigurationException,
    FormatterException,
    IbanFormatException,
    UnsupportedEntityException,
)

__all__ = [
    "EngineConfig",
    "Environment",
    "LogFormat",
    "LogLevel",
    "MetricsConfig",
    "StructuredFormatter",
    "configure_logging",
    "CbprEngineException",
    "ConfigurationException",
    "FormatterException",
    "IbanFormatException",
    "UnsupportedEntityException",
]
