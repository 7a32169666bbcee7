r"""Contains the GET shortcut bound to the default client."""

from __future__ import annotations

__all__ = ["get"]

from typing import TYPE_CHECKING, Any

from aretryhttp.default import get_default_client

if TYPE_CHECKING:
    import httpx

    from aretryhttp.context import Context


def get(
    url: httpx.URL | str, *, headers: Any = None, context: Context | None = None
) -> httpx.Response:
    r"""Send a GET request with automatic retries using the default
    client.

    Args:
        url: The request URL.
        headers: Optional request headers.
        context: Optional request context.

    Returns:
        The response.

    Raises:
        httpx.RequestError: If a transport error is not retryable.
        ContextError: If the request context finished.
        RetryExhaustedError: If all attempts failed.

    Example:
        ```pycon
        >>> from aretryhttp import get
        >>> response = get("https://api.example.com/data")  # doctest: +SKIP

        ```
    """
    return get_default_client().get(url, headers=headers, context=context)
