r"""Factories for the underlying httpx clients and idle-connection
release.

``default_pooled_client`` is meant for a long-lived client reused for
the same hosts. ``default_client`` disables keep-alive, so every request
opens a fresh connection and nothing stays open between calls; use it
for transient clients.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_KEEPALIVE_EXPIRY",
    "DEFAULT_MAX_KEEPALIVE_CONNECTIONS",
    "DEFAULT_MAX_REDIRECTS",
    "close_idle_connections",
    "default_client",
    "default_pooled_client",
]

import contextlib
import logging
from typing import Any

import httpx

logger: logging.Logger = logging.getLogger(__name__)

# Seconds allowed to establish a connection, TLS handshake included
DEFAULT_CONNECT_TIMEOUT = 30.0

# Seconds an idle keep-alive connection stays in the pool
DEFAULT_KEEPALIVE_EXPIRY = 90.0

# Maximum number of idle keep-alive connections kept in the pool
DEFAULT_MAX_KEEPALIVE_CONNECTIONS = 100

# Maximum number of redirects followed before httpx.TooManyRedirects
DEFAULT_MAX_REDIRECTS = 10


def default_pooled_client(**kwargs: Any) -> httpx.Client:
    r"""Create an ``httpx.Client`` with a keep-alive connection pool.

    The client follows redirects (up to 10), reads proxies from the
    environment, limits connection establishment to 30 seconds and keeps
    idle connections for 90 seconds. Reads and writes have no timeout of
    their own; bound them with a context deadline.

    Do not use it for transient clients: pooled connections are only
    released when idle or when the client is closed.

    Args:
        **kwargs: Keyword arguments overriding the defaults passed to
            ``httpx.Client``.

    Returns:
        A new ``httpx.Client``.
    """
    options: dict[str, Any] = {
        "timeout": httpx.Timeout(None, connect=DEFAULT_CONNECT_TIMEOUT),
        "limits": httpx.Limits(
            max_connections=None,
            max_keepalive_connections=DEFAULT_MAX_KEEPALIVE_CONNECTIONS,
            keepalive_expiry=DEFAULT_KEEPALIVE_EXPIRY,
        ),
        "follow_redirects": True,
        "max_redirects": DEFAULT_MAX_REDIRECTS,
        "trust_env": True,
    }
    options.update(kwargs)
    return httpx.Client(**options)


def default_client(**kwargs: Any) -> httpx.Client:
    r"""Create an ``httpx.Client`` with keep-alive disabled.

    Same defaults as ``default_pooled_client`` except that no idle
    connection is ever kept.

    Args:
        **kwargs: Keyword arguments overriding the defaults passed to
            ``httpx.Client``.

    Returns:
        A new ``httpx.Client``.
    """
    options: dict[str, Any] = {
        "limits": httpx.Limits(max_connections=None, max_keepalive_connections=0),
    }
    options.update(kwargs)
    return default_pooled_client(**options)


def close_idle_connections(client: httpx.Client) -> int:
    r"""Close the idle connections of every transport of a client.

    Connections currently serving a request are left alone. Transports
    that expose a ``close_idle_connections()`` method are asked to do it
    themselves; httpx transports backed by an httpcore connection pool
    have their idle pool connections closed; other transports (for
    instance ``httpx.MockTransport``) are skipped.

    Pool connections are inspected and closed while holding the pool's
    own lock, the one httpcore takes to hand a connection to a request.
    A connection seen idle here therefore cannot be picked up by a
    concurrent ``execute`` on the same client before it is closed.

    Args:
        client: The client whose connections are released.

    Returns:
        The number of connections closed by this function (transports
        with their own ``close_idle_connections()`` are not counted).
    """
    transports = [getattr(client, "_transport", None)]
    transports.extend(getattr(client, "_mounts", {}).values())
    closed = 0
    for transport in transports:
        if transport is None:
            continue
        closer = getattr(transport, "close_idle_connections", None)
        if callable(closer):
            closer()
            continue
        pool = getattr(transport, "_pool", None)
        if pool is not None:
            closed += _close_idle_pool_connections(pool)
    if closed:
        logger.debug(f"Closed {closed} idle connection(s)")
    return closed


def _close_idle_pool_connections(pool: Any) -> int:
    # httpcore>=1.0 names it _optional_thread_lock, older releases _pool_lock
    lock = getattr(pool, "_optional_thread_lock", None) or getattr(pool, "_pool_lock", None)
    closed = 0
    with lock if lock is not None else contextlib.nullcontext():
        for connection in list(getattr(pool, "connections", ())):
            if connection.is_idle():
                connection.close()
                closed += 1
    return closed
