r"""Contains the POST shortcut bound to the default client."""

from __future__ import annotations

__all__ = ["post"]

from typing import TYPE_CHECKING, Any

from aretryhttp.default import get_default_client

if TYPE_CHECKING:
    import httpx

    from aretryhttp.context import Context


def post(
    url: httpx.URL | str,
    body_type: str,
    body: Any,
    *,
    headers: Any = None,
    context: Context | None = None,
) -> httpx.Response:
    r"""Send a POST request with automatic retries using the default
    client.

    Args:
        url: The request URL.
        body_type: The value of the ``Content-Type`` header.
        body: The body source (see ``aretryhttp.new_request``).
        headers: Optional request headers.
        context: Optional request context.

    Returns:
        The response.

    Example:
        ```pycon
        >>> from aretryhttp import post
        >>> response = post(
        ...     "https://api.example.com/data", "application/json", b'{"key": "value"}'
        ... )  # doctest: +SKIP

        ```
    """
    return get_default_client().post(url, body_type, body, headers=headers, context=context)
