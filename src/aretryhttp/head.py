r"""Contains the HEAD shortcut bound to the default client."""

from __future__ import annotations

__all__ = ["head"]

from typing import TYPE_CHECKING, Any

from aretryhttp.default import get_default_client

if TYPE_CHECKING:
    import httpx

    from aretryhttp.context import Context


def head(
    url: httpx.URL | str, *, headers: Any = None, context: Context | None = None
) -> httpx.Response:
    r"""Send a HEAD request with automatic retries using the default
    client.

    Args:
        url: The request URL.
        headers: Optional request headers.
        context: Optional request context.

    Returns:
        The response.
    """
    return get_default_client().head(url, headers=headers, context=context)
