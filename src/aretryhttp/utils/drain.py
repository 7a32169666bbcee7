r"""Bounded draining of discarded response bodies."""

from __future__ import annotations

__all__ = ["drain_body"]

import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from aretryhttp.utils.logger import LoggerLike

logger: logging.Logger = logging.getLogger(__name__)


def drain_body(
    response: httpx.Response, limit: int, log: LoggerLike | None = logger
) -> int:
    """Read and discard at most ``limit`` bytes of a response body, then
    close the response.

    Reading what is left of a small body lets the connection go back to
    the pool. Larger bodies are cut short and their connection is
    dropped when the response is closed.

    Args:
        response: The response to drain. It may already be closed, in
            which case nothing is read.
        limit: Maximum number of bytes to read.
        log: Logger used to report read errors. Read errors are not
            raised.

    Returns:
        The number of bytes read.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretryhttp.utils.drain import drain_body
        >>> response = httpx.Response(503, content=b"unavailable")
        >>> drain_body(response, limit=4096)
        0
        >>> response.is_closed
        True

        ```
    """
    read = 0
    try:
        if response.is_closed or response.is_stream_consumed:
            return read
        for chunk in response.iter_raw():
            read += len(chunk)
            if read >= limit:
                break
    except (httpx.HTTPError, httpx.StreamError) as exc:
        if log is not None:
            log.error(f"error reading response body: {exc}")
    finally:
        response.close()
    return read
