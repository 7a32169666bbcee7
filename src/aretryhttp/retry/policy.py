r"""Retry policies deciding whether an attempt should be retried.

A retry policy is called after every attempt with the request context,
the response (if any) and the transport error (if any). It returns a
tuple ``(should_retry, error)``; a non-None error replaces the transport
error reported to the caller when the loop stops.

Policies must not read or close the response body: the retry loop owns
the response and drains or returns it after the decision.
"""

from __future__ import annotations

__all__ = ["CheckRetry", "default_retry_policy", "is_tls_trust_error"]

import re
import ssl
from collections.abc import Callable
from typing import Optional

import httpx

from aretryhttp.context import Context

CheckRetry = Callable[
    [Context, Optional[httpx.Response], Optional[BaseException]],
    tuple[bool, Optional[BaseException]],
]

# Certificate failures surface as ConnectError; the ssl error is usually
# chained but the message is the only signal once it went through a proxy
_TLS_TRUST_RE = re.compile(r"certificate verify failed|CERTIFICATE_VERIFY_FAILED")


def default_retry_policy(
    context: Context,
    response: httpx.Response | None,
    error: BaseException | None,
) -> tuple[bool, BaseException | None]:
    """Retry on transient transport errors and server errors.

    The decision is made in this order:

    1. A finished context is never retried; its error is returned.
    2. Transport errors are retried, except too many redirects, an
       unsupported URL scheme and a TLS certificate trust failure, which
       are permanent misconfigurations.
    3. Responses are retried when the status code is 0 or between 500
       and 599, except 501 (Not Implemented).

    Args:
        context: The request context.
        response: The response of the attempt, if any.
        error: The transport error of the attempt, if any.

    Returns:
        A tuple ``(should_retry, error)``.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretryhttp.context import Context
        >>> from aretryhttp.retry.policy import default_retry_policy
        >>> ctx = Context.background()
        >>> default_retry_policy(ctx, httpx.Response(503), None)
        (True, None)
        >>> default_retry_policy(ctx, httpx.Response(501), None)
        (False, None)
        >>> default_retry_policy(ctx, httpx.Response(404), None)
        (False, None)
        >>> default_retry_policy(ctx, None, httpx.ConnectError("refused"))
        (True, None)

        ```
    """
    context_error = context.err()
    if context_error is not None:
        return False, context_error

    if error is not None:
        if isinstance(error, (httpx.TooManyRedirects, httpx.UnsupportedProtocol)):
            return False, None
        if is_tls_trust_error(error):
            return False, None
        return True, None

    if response is None:
        return False, None

    status_code = response.status_code
    if status_code == 0 or (500 <= status_code <= 599 and status_code != 501):
        return True, None
    return False, None


def is_tls_trust_error(error: BaseException) -> bool:
    """Return ``True`` if the error was caused by a failed TLS
    certificate verification.

    Args:
        error: The transport error to inspect.

    Returns:
        ``True`` if an ``ssl.SSLCertVerificationError`` is in the cause
        chain or the message reports a verification failure.
    """
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLCertVerificationError):
            return True
        if _TLS_TRUST_RE.search(str(current)):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False
