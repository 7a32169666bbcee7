r"""Replayable requests.

A ``Request`` holds everything needed to send the same HTTP request
several times: method, URL, headers, extensions, the request context and
a body factory that produces a fresh body stream for every attempt.
"""

from __future__ import annotations

__all__ = ["Request", "from_request", "new_request"]

import copy
from typing import IO, TYPE_CHECKING, Any

import httpx

from aretryhttp.context import Context
from aretryhttp.core.validation import validate_method
from aretryhttp.utils.body import close_body, normalize_body

if TYPE_CHECKING:
    from aretryhttp.utils.body import BodyFactory


class Request:
    r"""An HTTP request that can be replayed on every retry.

    Requests are usually built with ``new_request`` or ``from_request``
    rather than instantiated directly.

    Args:
        method: The HTTP method.
        url: The request URL.
        headers: The request headers.
        body: The body factory, or ``None`` for a request without body.
        content_length: The body length in bytes, if known.
        extensions: httpx request extensions (e.g. ``timeout``).
        context: The request context. Defaults to
            ``Context.background()``.

    Example:
        ```pycon
        >>> from aretryhttp.request import new_request
        >>> request = new_request("POST", "https://api.example.com/items", b'{"id": 1}')
        >>> request.method
        'POST'
        >>> request.headers["Content-Length"]
        '9'
        >>> request.body_bytes()
        b'{"id": 1}'

        ```
    """

    def __init__(
        self,
        method: str,
        url: httpx.URL | str,
        *,
        headers: httpx.Headers | None = None,
        body: BodyFactory | None = None,
        content_length: int | None = None,
        extensions: dict[str, Any] | None = None,
        context: Context | None = None,
    ) -> None:
        self.method = method.upper()
        self.url = httpx.URL(url)
        self.headers = headers if headers is not None else httpx.Headers()
        self.content_length = content_length
        self.extensions = extensions if extensions is not None else {}
        self._body = body
        self._context = context if context is not None else Context.background()

    def __repr__(self) -> str:
        return f"<{self.__class__.__qualname__}({self.method!r}, {str(self.url)!r})>"

    @property
    def context(self) -> Context:
        """The context bound to this request."""
        return self._context

    @property
    def has_body(self) -> bool:
        """``True`` if the request carries a body factory."""
        return self._body is not None

    def with_context(self, context: Context) -> Request:
        """Return a shallow copy of the request bound to ``context``.

        The original request is left unchanged, so the same logical
        request can be reused elsewhere with its own context.

        Args:
            context: The new context.

        Returns:
            The copy.
        """
        clone = copy.copy(self)
        clone._context = context
        return clone

    def open_body(self) -> IO[bytes] | None:
        """Return a fresh body stream positioned at the start of the
        payload, or ``None`` without body.

        Raises:
            Exception: Whatever the body factory raises.
        """
        if self._body is None:
            return None
        return self._body()

    def close_body(self, stream: IO[bytes] | None) -> None:
        """Close a stream returned by ``open_body``.

        A seekable stream supplied as the body is shared by every attempt
        and stays open; it belongs to the caller.
        """
        close_body(self._body, stream)

    def body_bytes(self) -> bytes | None:
        """Return a copy of the request body, or ``None`` without body.

        The body is read through the body factory, so it is not consumed.
        Do not call it concurrently with another call, or while the
        request is being executed.

        Returns:
            The body bytes.
        """
        stream = self.open_body()
        if stream is None:
            return None
        try:
            return stream.read()
        finally:
            self.close_body(stream)


def new_request(
    method: str,
    url: httpx.URL | str,
    body: Any = None,
    *,
    headers: Any = None,
    context: Context | None = None,
) -> Request:
    r"""Create a replayable request.

    Args:
        method: The HTTP method, e.g. ``"GET"``.
        url: The absolute URL, or a URL relative to the base URL of the
            client that executes the request.
        body: The body source: ``None``, ``bytes``, ``str``, an
            ``io.BytesIO``, a binary file object or stream, an iterator of
            byte chunks, or a zero-argument callable returning a binary
            stream. See ``aretryhttp.utils.body.normalize_body``.
        headers: Optional request headers (anything ``httpx.Headers``
            accepts).
        context: Optional request context.

    Returns:
        The request. When the body length can be derived, the
        ``Content-Length`` header is set.

    Raises:
        ValueError: If the method is not a valid HTTP token.
        httpx.InvalidURL: If the URL cannot be parsed.
        UnsupportedBodyTypeError: If the body source is not supported.

    Example:
        ```pycon
        >>> from aretryhttp.request import new_request
        >>> request = new_request("GET", "https://api.example.com/data")
        >>> request.body_bytes() is None
        True

        ```
    """
    validate_method(method)
    url = httpx.URL(url)
    body_factory, content_length = normalize_body(body)
    request_headers = httpx.Headers(headers)
    if body_factory is not None and content_length is not None:
        request_headers["Content-Length"] = str(content_length)
    return Request(
        method,
        url,
        headers=request_headers,
        body=body_factory,
        content_length=content_length,
        context=context,
    )


def from_request(request: httpx.Request, *, context: Context | None = None) -> Request:
    r"""Wrap an existing ``httpx.Request`` in a replayable request.

    The body of the request is read once into memory. Headers and
    extensions are kept.

    Args:
        request: The request to wrap. Its body must be readable
            synchronously.
        context: Optional request context.

    Returns:
        The replayable request.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretryhttp.request import from_request
        >>> request = from_request(httpx.Request("PUT", "https://api.example.com/1", content=b"x"))
        >>> request.body_bytes()
        b'x'

        ```
    """
    content = request.read()
    body = content if content else None
    headers = request.headers.copy()
    if "Transfer-Encoding" in headers:
        del headers["Transfer-Encoding"]
    body_factory, content_length = normalize_body(body)
    if content_length is not None:
        headers["Content-Length"] = str(content_length)
    return Request(
        request.method,
        request.url,
        headers=headers,
        body=body_factory,
        content_length=content_length,
        extensions=dict(request.extensions),
        context=context,
    )
