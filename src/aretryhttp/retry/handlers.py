r"""Error handlers invoked once retries are exhausted.

An error handler receives the last response (possibly ``None``), the last
error (possibly ``None``) and the number of attempts made. What it returns
is returned by ``RetryClient.execute``; what it raises propagates. A
handler that does not return the response is responsible for closing it.
"""

from __future__ import annotations

__all__ = ["ErrorHandler", "passthrough_error_handler"]

from collections.abc import Callable
from typing import Optional

import httpx

ErrorHandler = Callable[[Optional[httpx.Response], Optional[BaseException], int], httpx.Response]


def passthrough_error_handler(
    response: httpx.Response | None, error: BaseException | None, attempts: int  # noqa: ARG001
) -> httpx.Response:
    """Hand back the last response, or raise the last error, unchanged.

    The response body is not closed.

    Args:
        response: The last response, if any.
        error: The last transport error, if any.
        attempts: The number of attempts made.

    Returns:
        The last response.

    Raises:
        BaseException: The last error, when there is no response.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretryhttp.retry.handlers import passthrough_error_handler
        >>> passthrough_error_handler(httpx.Response(503), None, 5).status_code
        503

        ```
    """
    if response is None:
        if error is None:
            msg = "no response and no error to pass through"
            raise RuntimeError(msg)
        raise error
    return response
