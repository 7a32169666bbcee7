r"""Process-wide default client.

The default client backs the ``get``, ``head``, ``post`` and
``post_form`` functions. It is created on first use, exactly once, and
never reconfigured afterwards; build a ``RetryClient`` to customize the
retry behavior.
"""

from __future__ import annotations

__all__ = ["get_default_client"]

import threading

from aretryhttp.client import RetryClient

_default_client: RetryClient | None = None
_default_client_lock = threading.Lock()


def get_default_client() -> RetryClient:
    r"""Return the shared default client, creating it on first call.

    Returns:
        The default ``RetryClient``, configured with ``ClientConfig()``
        defaults and a pooled httpx client.

    Example:
        ```pycon
        >>> from aretryhttp.default import get_default_client
        >>> get_default_client() is get_default_client()
        True

        ```
    """
    global _default_client  # noqa: PLW0603
    if _default_client is None:
        with _default_client_lock:
            if _default_client is None:
                _default_client = RetryClient()
    return _default_client
