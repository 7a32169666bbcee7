r"""Contains the form POST shortcut bound to the default client."""

from __future__ import annotations

__all__ = ["post_form"]

from typing import TYPE_CHECKING, Any

from aretryhttp.default import get_default_client

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from aretryhttp.context import Context


def post_form(
    url: httpx.URL | str,
    data: Mapping[str, Any],
    *,
    headers: Any = None,
    context: Context | None = None,
) -> httpx.Response:
    r"""Send a URL-encoded form with automatic retries using the default
    client.

    Args:
        url: The request URL.
        data: The form fields.
        headers: Optional request headers.
        context: Optional request context.

    Returns:
        The response.
    """
    return get_default_client().post_form(url, data, headers=headers, context=context)
