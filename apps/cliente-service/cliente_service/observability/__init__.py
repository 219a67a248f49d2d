"""Observability module for Cliente Service."""

from .tracing import init_tracing, get_tracer
from .metrics import init_metrics, get_metrics, MetricsServer
from .logging import configure_logging

__all__ = [
    "init_tracing",
    "get_tracer",
    "init_metrics",
    "get_metrics",
    "MetricsServer",
    "configure_logging",
]
