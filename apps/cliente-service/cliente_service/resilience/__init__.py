"""Resilience module for Cliente Service."""

from .retry import with_retry, RetryConfig
from .fetch import ResilientFetcher, FetchResponse, TRANSIENT_ERRORS

__all__ = [
    "with_retry",
    "RetryConfig",
    "ResilientFetcher",
    "FetchResponse",
    "TRANSIENT_ERRORS",
]
