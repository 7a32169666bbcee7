r"""aretryhttp - HTTP client with automatic retries.

This package wraps a single logical HTTP call with automatic retries,
exponential or jittered backoff, request-body replay and pluggable
failure classification, on top of the httpx library. Idle connections
are released after every call so that retries never leak pooled
connections.

Key Features:
    - Retry on transport errors and 5xx responses (except 501) by default
    - Pluggable retry policy, backoff and exhausted-retries error handler
    - Request bodies replayed unchanged on every attempt
    - Cancellation and deadlines through ``Context``
    - Request and response log hooks, structured logging support

Example:
    ```pycon
    >>> from aretryhttp import RetryClient, get, new_request
    >>> from aretryhttp.core import ClientConfig
    >>> response = get("https://api.example.com/data")  # doctest: +SKIP
    >>> with RetryClient(config=ClientConfig(retry_max=2)) as client:  # doctest: +SKIP
    ...     request = new_request("PUT", "https://api.example.com/items/1", b"payload")
    ...     response = client.execute(request)
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "Context",
    "ContextCanceledError",
    "ContextError",
    "DeadlineExceededError",
    "HttpRequestError",
    "Request",
    "RetryClient",
    "RetryExhaustedError",
    "UnsupportedBodyTypeError",
    "__version__",
    "from_request",
    "get",
    "get_default_client",
    "head",
    "new_request",
    "post",
    "post_form",
]

from importlib.metadata import PackageNotFoundError, version

from aretryhttp.client import RetryClient
from aretryhttp.context import Context
from aretryhttp.core.config import ClientConfig
from aretryhttp.default import get_default_client
from aretryhttp.exceptions import (
    ContextCanceledError,
    ContextError,
    DeadlineExceededError,
    HttpRequestError,
    RetryExhaustedError,
    UnsupportedBodyTypeError,
)
from aretryhttp.get import get
from aretryhttp.head import head
from aretryhttp.post import post
from aretryhttp.post_form import post_form
from aretryhttp.request import Request, from_request, new_request

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
