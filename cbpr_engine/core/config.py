"""
CBPR+ Engine - Configuration Management

This module provides configuration management for the validation engine,
supporting multiple environments and configuration sources (YAML file and
environment variables).

Configuration controls the ambient behaviour of the engine (logging and
metrics). It never changes which business rules are applied.
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from pathlib import Path
from enum import Enum
import logging

from .exceptions import ConfigurationException

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Environment types for configuration."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    STRUCTURED = "structured"
    SIMPLE = "simple"


@dataclass
class MetricsConfig:
    """Prometheus metrics configuration."""

    enabled: bool = True
    namespace: str = "cbpr"


@dataclass
class EngineConfig:
    """Main configuration class."""

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: LogLevel = LogLevel.INFO
    log_format: LogFormat = LogFormat.STRUCTURED
    service_name: str = "cbpr-validation-engine"
    version: str = "1.0.0"

    metrics: MetricsConfig = field(default_factory=MetricsConfig)

    @classmethod
    def load_from_file(cls, config_path: Union[str, Path]) -> "EngineConfig":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationException(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationException(
                f"Configuration file must contain a mapping, got {type(config_data).__name__}"
            )

        return cls._from_dict(config_data)

    @classmethod
    def load_from_env(cls, prefix: str = "CBPR_ENGINE_") -> "EngineConfig":
        """Load configuration from environment variables."""
        config = cls()

        try:
            config.environment = Environment(
                os.getenv(f"{prefix}ENVIRONMENT", config.environment.value).lower()
            )
            config.log_level = LogLevel(
                os.getenv(f"{prefix}LOG_LEVEL", config.log_level.value).upper()
            )
            config.log_format = LogFormat(
                os.getenv(f"{prefix}LOG_FORMAT", config.log_format.value).lower()
            )
        except ValueError as e:
            raise ConfigurationException(f"Invalid environment configuration: {e}")

        config.debug = os.getenv(f"{prefix}DEBUG", str(config.debug)).lower() == "true"
        config.service_name = os.getenv(f"{prefix}SERVICE_NAME", config.service_name)

        if os.getenv(f"{prefix}METRICS_ENABLED") is not None:
            config.metrics.enabled = os.getenv(f"{prefix}METRICS_ENABLED", "true").lower() == "true"
        config.metrics.namespace = os.getenv(f"{prefix}METRICS_NAMESPACE", config.metrics.namespace)

        return config

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Create configuration from dictionary."""
        config = cls()

        try:
            if "environment" in data:
                config.environment = Environment(data["environment"])
            if "log_level" in data:
                config.log_level = LogLevel(str(data["log_level"]).upper())
            if "log_format" in data:
                config.log_format = LogFormat(data["log_format"])
            if "metrics" in data:
                config.metrics = MetricsConfig(**data["metrics"])
        except (ValueError, TypeError) as e:
            raise ConfigurationException(f"Invalid configuration value: {e}")

        for key in ["debug", "service_name", "version"]:
            if key in data:
                setattr(config, key, data[key])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment.value,
            "debug": self.debug,
            "log_level": self.log_level.value,
            "log_format": self.log_format.value,
            "service_name": self.service_name,
            "version": self.version,
            "metrics": {
                "enabled": self.metrics.enabled,
                "namespace": self.metrics.namespace,
            },
        }

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = []

        if not self.service_name:
            errors.append("Service name must not be empty")
        if not self.metrics.namespace:
            errors.append("Metrics namespace must not be empty")
        elif not self.metrics.namespace.replace("_", "").isalnum():
            errors.append("Metrics namespace may only contain letters, digits and underscores")

        if errors:
            raise ConfigurationException(
                f"Configuration validation failed: {'; '.join(errors)}"
            )


# Global configuration instance
_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = EngineConfig.load_from_env()
    return _config


def set_config(config: EngineConfig) -> None:
    """Set the global configuration instance."""
    global _config
    config.validate()
    _config = config
    logger.debug(f"Configuration set for environment {config.environment.value}")


def load_config(config_path: Union[str, Path]) -> EngineConfig:
    """Load and set configuration from file."""
    config = EngineConfig.load_from_file(config_path)
    set_config(config)
    return config
