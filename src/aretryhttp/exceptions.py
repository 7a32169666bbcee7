r"""Exceptions raised by aretryhttp.

Errors produced by the retry machinery derive from ``HttpRequestError``.
Transport errors raised by httpx (``httpx.RequestError`` and its
subclasses) are never wrapped: they reach the caller unchanged when the
retry policy declares them terminal.
"""

from __future__ import annotations

__all__ = [
    "ContextCanceledError",
    "ContextError",
    "DeadlineExceededError",
    "HttpRequestError",
    "RetryExhaustedError",
    "UnsupportedBodyTypeError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class HttpRequestError(Exception):
    """Base exception for failed HTTP requests.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: A descriptive error message.
        status_code: The status code of the last response, if any.
        response: The last response, if it is still meaningful to the caller.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from aretryhttp.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET", url="https://api.example.com", message="boom", status_code=502
        ... )
        >>> error.status_code
        502

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: httpx.Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.response = response
        if cause is not None:
            self.__cause__ = cause


class RetryExhaustedError(HttpRequestError):
    """Raised when every attempt was consumed without a terminal
    decision.

    The last response is closed before this error is raised and is not
    attached to it; only its status code is kept.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        attempts: The number of attempts that were made.
        status_code: The status code of the last response, if any.
        cause: The last transport error, if any.
    """

    def __init__(
        self,
        method: str,
        url: str,
        attempts: int,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(
            method=method,
            url=url,
            message=f"{method} {url} giving up after {attempts} attempts",
            status_code=status_code,
            cause=cause,
        )
        self.attempts = attempts


class UnsupportedBodyTypeError(TypeError):
    """Raised when a request body cannot be turned into a replayable
    factory."""


class ContextError(Exception):
    """Base exception reported by a finished ``Context``."""


class ContextCanceledError(ContextError):
    """Raised when the request context was canceled."""


class DeadlineExceededError(ContextError, TimeoutError):
    """Raised when the request context deadline passed."""
