r"""Backoff strategies for retry delays.

This package provides the exponential backoff used by default and a
linear backoff with jitter that spreads retries of concurrent clients.
"""

from __future__ import annotations

__all__ = [
    "Backoff",
    "BaseBackoffStrategy",
    "ExponentialBackoff",
    "LinearJitterBackoff",
    "default_backoff",
    "linear_jitter_backoff",
]

from aretryhttp.backoff.base import Backoff, BaseBackoffStrategy
from aretryhttp.backoff.exponential import ExponentialBackoff, default_backoff
from aretryhttp.backoff.linear import LinearJitterBackoff, linear_jitter_backoff
