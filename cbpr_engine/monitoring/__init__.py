"""
CBPR+ Engine - Monitoring Module

Prometheus metrics for the validation engine.
"""

from .metrics import ValidationMetrics

__all__ = ["ValidationMetrics"]
