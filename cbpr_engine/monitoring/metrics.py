"""
CBPR+ Engine - Validation Metrics

Prometheus metrics for validation outcomes. Each ValidationMetrics instance
owns its own CollectorRegistry so that several engines (and test runs) can
coexist in one process without duplicate-registration errors.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from ..core.config import MetricsConfig

logger = logging.getLogger(__name__)

# Validation of a whole message is sub-millisecond; buckets are skewed low.
DURATION_BUCKETS = (0.00005, 0.0001, 0.00025, 0.0005, 0.001, 0.0025, 0.005, 0.01, 0.05)


@dataclass
class MetricDefinition:
    """Definition of a registered metric."""

    name: str
    help: str
    labels: List[str] = field(default_factory=list)


VALIDATIONS_TOTAL = MetricDefinition(
    name="validations_total",
    help="Number of validation calls by entity kind and outcome",
    labels=["entity", "outcome"],
)
VALIDATION_FAILURES_TOTAL = MetricDefinition(
    name="validation_failures_total",
    help="Number of failed validations by entity kind and failure kind",
    labels=["entity", "kind"],
)
VALIDATION_DURATION = MetricDefinition(
    name="validation_duration_seconds",
    help="Time spent validating one entity tree",
    labels=["entity"],
)


class ValidationMetrics:
    """Collects Prometheus metrics for validation calls."""

    def __init__(
        self,
        config: Optional[MetricsConfig] = None,
        registry: Optional[CollectorRegistry] = None,
    ):
        self.config = config or MetricsConfig()
        self.registry = registry or CollectorRegistry()
        namespace = self.config.namespace

        self.validations = Counter(
            VALIDATIONS_TOTAL.name,
            VALIDATIONS_TOTAL.help,
            labelnames=VALIDATIONS_TOTAL.labels,
            namespace=namespace,
            registry=self.registry,
        )
        self.failures = Counter(
            VALIDATION_FAILURES_TOTAL.name,
            VALIDATION_FAILURES_TOTAL.help,
            labelnames=VALIDATION_FAILURES_TOTAL.labels,
            namespace=namespace,
            registry=self.registry,
        )
        self.duration = Histogram(
            VALIDATION_DURATION.name,
            VALIDATION_DURATION.help,
            labelnames=VALIDATION_DURATION.labels,
            namespace=namespace,
            buckets=DURATION_BUCKETS,
            registry=self.registry,
        )

        logger.debug(f"ValidationMetrics initialized with namespace {namespace}")

    def record_outcome(self, entity: str, is_valid: bool, kind: Optional[str] = None) -> None:
        """Record one validation outcome."""
        self.validations.labels(entity=entity, outcome="valid" if is_valid else "invalid").inc()
        if not is_valid and kind:
            self.failures.labels(entity=entity, kind=kind).inc()

    @contextmanager
    def time_validation(self, entity: str) -> Iterator[None]:
        """Context manager timing one validation call."""
        start_time = time.perf_counter()
        try:
            yield
        finally:
            self.duration.labels(entity=entity).observe(time.perf_counter() - start_time)

    def sample(self, name: str, labels: Dict[str, str]) -> float:
        """Return the current value of a sample, 0.0 when it was never recorded."""
        full_name = f"{self.config.namespace}_{name}"
        value = self.registry.get_sample_value(full_name, labels)
        return value if value is not None else 0.0

    def export(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)
