r"""Observation hooks for the retry loop.

Two hooks can be configured on a client:

- a request log hook, called before every attempt with the client logger,
  the ``httpx.Request`` about to be sent and the attempt index (0 for
  the initial request);
- a response log hook, called with the client logger and the
  ``httpx.Response`` of every attempt that produced one, whether or not
  a retry follows. Reading or closing the response there affects the
  response returned by ``RetryClient.execute``.

The logger passed to hooks is ``None`` when the client logs nothing.

Example:
    ```pycon
    >>> from aretryhttp import RetryClient
    >>> from aretryhttp.core import ClientConfig
    >>> from aretryhttp.hooks import log_request_attempt, log_response_status
    >>> client = RetryClient(
    ...     config=ClientConfig(
    ...         request_log_hook=log_request_attempt,
    ...         response_log_hook=log_response_status,
    ...     )
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = ["RequestLogHook", "ResponseLogHook", "log_request_attempt", "log_response_status"]

import logging
from collections.abc import Callable
from typing import Any, Optional

import httpx

RequestLogHook = Callable[[Optional[Any], httpx.Request, int], None]
ResponseLogHook = Callable[[Optional[Any], httpx.Response], None]


def log_request_attempt(logger: Any, request: httpx.Request, attempt: int) -> None:
    """Log the request about to be sent at INFO level.

    Args:
        logger: The client logger, or ``None``.
        request: The request about to be sent.
        attempt: The attempt index (0 for the initial request).
    """
    if logger is None:
        return
    if attempt == 0:
        logger.info(f"{request.method} {request.url}")
    else:
        logger.info(f"{request.method} {request.url} (retry #{attempt})")


def log_response_status(logger: Any, response: httpx.Response) -> None:
    """Log the status line of a response at INFO level, or WARNING level
    for server errors.

    The body is not read.

    Args:
        logger: The client logger, or ``None``.
        response: The response of the attempt.
    """
    if logger is None:
        return
    level = logging.WARNING if response.status_code >= 500 else logging.INFO
    request = response.request
    logger.log(
        level,
        f"{request.method} {request.url} -> {response.status_code} {response.reason_phrase}",
    )
