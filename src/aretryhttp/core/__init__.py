r"""Core configuration and validation for the retry client."""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "DEFAULT_RETRY_MAX",
    "DEFAULT_RETRY_WAIT_MAX",
    "DEFAULT_RETRY_WAIT_MIN",
    "RESPONSE_READ_LIMIT",
    "validate_method",
    "validate_retry_params",
]

from aretryhttp.core.config import (
    DEFAULT_RETRY_MAX,
    DEFAULT_RETRY_WAIT_MAX,
    DEFAULT_RETRY_WAIT_MIN,
    RESPONSE_READ_LIMIT,
    ClientConfig,
)
from aretryhttp.core.validation import validate_method, validate_retry_params
