r"""Parameter validation utilities for the retry client configuration.

This module provides validation functions for retry parameters to ensure
they meet the required constraints before a client starts sending
requests.
"""

from __future__ import annotations

__all__ = ["validate_callable", "validate_method", "validate_retry_params"]

import re
from typing import Any

# RFC 9110 token characters
_METHOD_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def validate_retry_params(
    retry_max: int,
    retry_wait_min: float,
    retry_wait_max: float,
) -> None:
    """Validate retry parameters.

    Args:
        retry_max: Maximum number of retries after the initial attempt.
            Must be >= 0. A value of 0 means only the initial attempt.
        retry_wait_min: Minimum wait between attempts in seconds.
            Must be >= 0.
        retry_wait_max: Maximum wait between attempts in seconds.
            Must be >= 0. It may be lower than ``retry_wait_min``; the
            backoff strategies define what happens in that case.

    Raises:
        ValueError: If any parameter is negative.

    Example:
        ```pycon
        >>> from aretryhttp.core.validation import validate_retry_params
        >>> validate_retry_params(retry_max=4, retry_wait_min=1.0, retry_wait_max=30.0)
        >>> validate_retry_params(retry_max=-1, retry_wait_min=1.0, retry_wait_max=30.0)  # doctest: +SKIP

        ```
    """
    if retry_max < 0:
        msg = f"retry_max must be >= 0, got {retry_max}"
        raise ValueError(msg)
    if retry_wait_min < 0:
        msg = f"retry_wait_min must be >= 0, got {retry_wait_min}"
        raise ValueError(msg)
    if retry_wait_max < 0:
        msg = f"retry_wait_max must be >= 0, got {retry_wait_max}"
        raise ValueError(msg)


def validate_callable(name: str, value: Any, *, optional: bool = False) -> None:
    """Validate that a configuration value is callable.

    Args:
        name: The parameter name, used in the error message.
        value: The value to check.
        optional: If ``True``, ``None`` is accepted.

    Raises:
        TypeError: If the value is not callable.
    """
    if optional and value is None:
        return
    if not callable(value):
        msg = f"{name} must be callable, got {type(value).__name__}"
        raise TypeError(msg)


def validate_method(method: str) -> None:
    """Validate an HTTP method token.

    Args:
        method: The HTTP method, e.g. ``"GET"``.

    Raises:
        ValueError: If the method is empty or contains characters that
            are not allowed in an HTTP token.

    Example:
        ```pycon
        >>> from aretryhttp.core.validation import validate_method
        >>> validate_method("GET")
        >>> validate_method("BAD METHOD")  # doctest: +SKIP

        ```
    """
    if not isinstance(method, str) or not _METHOD_RE.fullmatch(method):
        msg = f"invalid method {method!r}"
        raise ValueError(msg)
