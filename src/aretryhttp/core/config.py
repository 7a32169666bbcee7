r"""Configuration dataclass and defaults for RetryClient.

This module provides the default retry constants and a dataclass-based
configuration object shared by every request a ``RetryClient`` executes.
"""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "DEFAULT_RETRY_MAX",
    "DEFAULT_RETRY_WAIT_MAX",
    "DEFAULT_RETRY_WAIT_MIN",
    "RESPONSE_READ_LIMIT",
]

import logging
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from aretryhttp.backoff import default_backoff
from aretryhttp.core.validation import validate_callable, validate_retry_params
from aretryhttp.retry.policy import default_retry_policy
from aretryhttp.utils.logger import resolve_logger

if TYPE_CHECKING:
    from aretryhttp.backoff.base import Backoff
    from aretryhttp.hooks import RequestLogHook, ResponseLogHook
    from aretryhttp.retry.handlers import ErrorHandler
    from aretryhttp.retry.policy import CheckRetry


# Minimum wait in seconds between two attempts
DEFAULT_RETRY_WAIT_MIN = 1.0

# Maximum wait in seconds between two attempts
DEFAULT_RETRY_WAIT_MAX = 30.0

# Maximum number of retries
# Total attempts = retry_max + 1 (initial attempt)
DEFAULT_RETRY_MAX = 4

# Number of bytes read from a discarded response body so that its
# connection can go back to the pool
RESPONSE_READ_LIMIT = 4096


def _default_logger() -> logging.Logger:
    return logging.getLogger("aretryhttp")


@dataclass
class ClientConfig:
    """Configuration for RetryClient retry behavior.

    Args:
        retry_wait_min: Minimum wait in seconds between attempts. Must be >= 0.
        retry_wait_max: Maximum wait in seconds between attempts. Must be >= 0.
        retry_max: Maximum number of retries after the initial attempt.
            Must be >= 0.
        check_retry: Retry policy called after each attempt with
            ``(context, response, error)``.
        backoff: Backoff policy called with
            ``(retry_wait_min, retry_wait_max, attempt, response)``.
        error_handler: Optional handler called with
            ``(response, error, attempts)`` once retries are exhausted.
        logger: ``None``, a ``logging.Logger``, a ``logging.LoggerAdapter``
            or a printf-style callable. Callables are wrapped in a logger
            that forwards each formatted message to them.
        request_log_hook: Optional hook called before every attempt with
            ``(logger, request, attempt)``.
        response_log_hook: Optional hook called with ``(logger, response)``
            after every attempt that produced a response.
        stream: If ``False`` (default), responses handed back to the
            caller are fully read. If ``True``, they are returned unread
            and the caller must read or close them.

    Example:
        ```pycon
        >>> from aretryhttp.core.config import ClientConfig
        >>> config = ClientConfig()
        >>> config.retry_max
        4
        >>> merged = config.merge(retry_max=2)
        >>> merged.retry_max
        2
        >>> config.retry_max
        4

        ```
    """

    retry_wait_min: float = DEFAULT_RETRY_WAIT_MIN
    retry_wait_max: float = DEFAULT_RETRY_WAIT_MAX
    retry_max: int = DEFAULT_RETRY_MAX
    check_retry: CheckRetry = default_retry_policy
    backoff: Backoff = default_backoff
    error_handler: ErrorHandler | None = None
    logger: Any = field(default_factory=_default_logger)
    request_log_hook: RequestLogHook | None = None
    response_log_hook: ResponseLogHook | None = None
    stream: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If a numeric parameter fails validation.
            TypeError: If a policy, hook or logger has the wrong type.
        """
        validate_retry_params(
            retry_max=self.retry_max,
            retry_wait_min=self.retry_wait_min,
            retry_wait_max=self.retry_wait_max,
        )
        validate_callable("check_retry", self.check_retry)
        validate_callable("backoff", self.backoff)
        validate_callable("error_handler", self.error_handler, optional=True)
        validate_callable("request_log_hook", self.request_log_hook, optional=True)
        validate_callable("response_log_hook", self.response_log_hook, optional=True)
        self.logger = resolve_logger(self.logger)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary format.

        Returns:
            Dictionary with the configuration parameters.
        """
        return {
            "retry_wait_min": self.retry_wait_min,
            "retry_wait_max": self.retry_wait_max,
            "retry_max": self.retry_max,
            "check_retry": self.check_retry,
            "backoff": self.backoff,
            "error_handler": self.error_handler,
            "logger": self.logger,
            "request_log_hook": self.request_log_hook,
            "response_log_hook": self.response_log_hook,
            "stream": self.stream,
        }
