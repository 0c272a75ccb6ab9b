"""
CBPR+ Engine - Structured Logging

JSON log formatting and logging configuration for the validation engine.
Modules log through the standard ``logging.getLogger(__name__)`` loggers;
this module only decides how records are rendered.
"""

import json
import logging
import logging.config
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import EngineConfig, LogFormat, get_config


@dataclass
class LogEvent:
    """Structured log event."""

    timestamp: float
    level: str
    logger_name: str
    message: str
    component: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "timestamp": self.timestamp,
            "iso_timestamp": datetime.fromtimestamp(self.timestamp, timezone.utc).isoformat(),
            "level": self.level,
            "logger": self.logger_name,
            "message": self.message,
            "component": self.component,
            "metadata": self.metadata,
        }
        if self.exception:
            result["exception"] = self.exception
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured logging."""

    def __init__(self, service_name: Optional[str] = None):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        metadata = dict(getattr(record, "metadata", None) or {})
        if self.service_name:
            metadata.setdefault("service", self.service_name)

        log_event = LogEvent(
            timestamp=record.created,
            level=record.levelname,
            logger_name=record.name,
            message=record.getMessage(),
            component=getattr(record, "component", record.module),
            metadata=metadata,
            exception=self.formatException(record.exc_info) if record.exc_info else None,
        )

        return log_event.to_json()


def build_logging_config(config: EngineConfig) -> Dict[str, Any]:
    """Build a ``logging.config.dictConfig`` mapping from engine configuration."""
    formatter = "structured" if config.log_format == LogFormat.STRUCTURED else "simple"
    level = "DEBUG" if config.debug else config.log_level.value

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structured": {
                "()": StructuredFormatter,
                "service_name": config.service_name,
            },
            "simple": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": formatter,
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "cbpr_engine": {
                "level": level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def configure_logging(config: Optional[EngineConfig] = None) -> None:
    """Configure the logging system."""
    config = config or get_config()
    logging.config.dictConfig(build_logging_config(config))
    logging.getLogger(__name__).debug(
        f"Logging configured ({config.log_format.value}, level {config.log_level.value})"
    )
