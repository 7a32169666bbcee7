r"""Retrying HTTP client.

This module provides ``RetryClient``, which binds an ``httpx.Client`` to
a retry configuration and executes replayable requests with automatic
retries, backoff and body replay.
"""

from __future__ import annotations

__all__ = ["RetryClient"]

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from aretryhttp.core.config import ClientConfig
from aretryhttp.request import new_request
from aretryhttp.retry.executor import RetryExecutor
from aretryhttp.transport import default_pooled_client

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType
    from typing import Self

    import httpx

    from aretryhttp.context import Context
    from aretryhttp.request import Request


class RetryClient:
    r"""HTTP client with automatic retries.

    A client is meant to be created once and reused: it holds no
    per-request state and can execute requests from several threads at
    the same time.

    Two usage patterns are supported:

    **Caller-managed httpx client**: the ``httpx.Client`` is created and
    closed by the caller, e.g. to configure headers, auth or proxies.
    ``RetryClient`` never closes it.

    .. code-block:: python

        import httpx
        from aretryhttp import RetryClient
        from aretryhttp.core import ClientConfig

        with httpx.Client(headers={"Authorization": "Bearer token"}) as http_client:
            client = RetryClient(client=http_client, config=ClientConfig(retry_max=2))
            response = client.get("https://api.example.com/data")

    **Client-managed httpx client**: no ``httpx.Client`` is passed, so
    ``RetryClient`` creates one with ``default_pooled_client()`` and closes
    it in ``close()`` or when its ``with`` block exits.

    .. code-block:: python

        from aretryhttp import RetryClient

        with RetryClient() as client:
            response = client.get("https://api.example.com/data")

    Args:
        client: Optional ``httpx.Client`` used to send requests.
        config: Optional retry configuration. Defaults to
            ``ClientConfig()``: 4 retries, exponential backoff between 1s
            and 30s, retry on transport errors and 5xx responses.

    Example:
        ```pycon
        >>> from aretryhttp import RetryClient
        >>> from aretryhttp.core import ClientConfig
        >>> with RetryClient(config=ClientConfig(retry_max=2)) as client:  # doctest: +SKIP
        ...     response = client.get("https://api.example.com/data")
        ...

        ```
    """

    def __init__(
        self,
        *,
        client: httpx.Client | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        self._config: ClientConfig = config or ClientConfig()
        self._owns_client = client is None
        self._client: httpx.Client = client or default_pooled_client()
        self._executor = RetryExecutor(client=self._client, config=self._config)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(config={self._config})"

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def config(self) -> ClientConfig:
        """The retry configuration."""
        return self._config

    @property
    def http_client(self) -> httpx.Client:
        """The underlying ``httpx.Client``."""
        return self._client

    def close(self) -> None:
        """Close the underlying ``httpx.Client`` if this client created
        it."""
        if self._owns_client:
            self._client.close()

    def execute(self, request: Request) -> httpx.Response:
        r"""Send a replayable request with automatic retries.

        Args:
            request: The request, built with ``new_request`` or
                ``from_request``.

        Returns:
            The response. Unless ``config.stream`` is set, its body has
            been read.

        Raises:
            httpx.RequestError: If a transport error is not retryable.
            ContextError: If the request context was canceled or its
                deadline passed.
            RetryExhaustedError: If all attempts failed and no error
                handler is configured.

        Example:
            ```pycon
            >>> from aretryhttp import RetryClient, new_request
            >>> request = new_request("PUT", "https://api.example.com/items/1", b"payload")
            >>> response = RetryClient().execute(request)  # doctest: +SKIP

            ```
        """
        return self._executor.execute(request)

    def request(
        self,
        method: str,
        url: httpx.URL | str,
        body: Any = None,
        *,
        headers: Any = None,
        context: Context | None = None,
    ) -> httpx.Response:
        r"""Build a replayable request and execute it.

        Args:
            method: The HTTP method.
            url: The request URL.
            body: Optional body source (see ``new_request``).
            headers: Optional request headers.
            context: Optional request context.

        Returns:
            The response.
        """
        return self.execute(new_request(method, url, body, headers=headers, context=context))

    def get(
        self, url: httpx.URL | str, *, headers: Any = None, context: Context | None = None
    ) -> httpx.Response:
        r"""Send a GET request with automatic retries.

        Args:
            url: The request URL.
            headers: Optional request headers.
            context: Optional request context.

        Returns:
            The response.
        """
        return self.request("GET", url, headers=headers, context=context)

    def head(
        self, url: httpx.URL | str, *, headers: Any = None, context: Context | None = None
    ) -> httpx.Response:
        r"""Send a HEAD request with automatic retries.

        Args:
            url: The request URL.
            headers: Optional request headers.
            context: Optional request context.

        Returns:
            The response.
        """
        return self.request("HEAD", url, headers=headers, context=context)

    def post(
        self,
        url: httpx.URL | str,
        body_type: str,
        body: Any,
        *,
        headers: Any = None,
        context: Context | None = None,
    ) -> httpx.Response:
        r"""Send a POST request with automatic retries.

        Args:
            url: The request URL.
            body_type: The value of the ``Content-Type`` header.
            body: The body source (see ``new_request``).
            headers: Optional request headers.
            context: Optional request context.

        Returns:
            The response.
        """
        request = new_request("POST", url, body, headers=headers, context=context)
        request.headers["Content-Type"] = body_type
        return self.execute(request)

    def post_form(
        self,
        url: httpx.URL | str,
        data: Mapping[str, Any],
        *,
        headers: Any = None,
        context: Context | None = None,
    ) -> httpx.Response:
        r"""Send a URL-encoded form with a POST request and automatic
        retries.

        Keys are sorted; sequence values produce one field per item.

        Args:
            url: The request URL.
            data: The form fields.
            headers: Optional request headers.
            context: Optional request context.

        Returns:
            The response.

        Example:
            ```pycon
            >>> from aretryhttp import RetryClient
            >>> response = RetryClient().post_form(
            ...     "https://api.example.com/login", {"user": "alice", "scope": ["a", "b"]}
            ... )  # doctest: +SKIP

            ```
        """
        body = urlencode(sorted(data.items()), doseq=True)
        return self.post(
            url,
            "application/x-www-form-urlencoded",
            body,
            headers=headers,
            context=context,
        )
