r"""Request body normalization.

A request can be sent several times, so its body must be readable again
for every attempt. This module turns the supported body sources into a
body factory: a zero-argument callable that returns a fresh binary stream
positioned at the start of the payload.
"""

from __future__ import annotations

__all__ = ["BodyFactory", "close_body", "normalize_body", "stream_length"]

import io
from collections.abc import Callable, Iterator
from typing import IO, Any

from aretryhttp.exceptions import UnsupportedBodyTypeError

BodyFactory = Callable[[], IO[bytes]]


def normalize_body(body: Any) -> tuple[BodyFactory | None, int | None]:
    """Turn a body source into a body factory and a content length.

    Supported sources:

    - ``None``: no body.
    - ``bytes``, ``bytearray``, ``memoryview`` and ``str`` (UTF-8).
    - ``io.BytesIO``: the buffer content is read again on every call.
    - seekable binary streams: rewound to offset 0 on every call.
    - other readable binary streams and byte iterators: read once, then
      replayed from memory.
    - zero-argument callables returning a readable binary stream: called
      once here to learn the length; that first stream is closed.

    Args:
        body: The body source.

    Returns:
        A tuple ``(factory, content_length)``. ``factory`` is ``None`` when
        there is no body. ``content_length`` is ``None`` when it cannot be
        derived from the source.

    Raises:
        UnsupportedBodyTypeError: If the source is not supported.

    Example:
        ```pycon
        >>> from aretryhttp.utils.body import normalize_body
        >>> factory, length = normalize_body(b"hello")
        >>> length
        5
        >>> factory().read()
        b'hello'
        >>> factory().read()
        b'hello'

        ```
    """
    if body is None:
        return None, None
    if isinstance(body, str):
        body = body.encode("utf-8")
    if isinstance(body, (bytes, bytearray, memoryview)):
        return _from_bytes(bytes(body))
    if isinstance(body, io.TextIOBase):
        msg = f"cannot handle text stream of type {type(body).__name__}, open it in binary mode"
        raise UnsupportedBodyTypeError(msg)
    if isinstance(body, io.BytesIO):
        return _from_buffer(body)
    # Stream classes are factories too, checked before their `read` attribute
    if isinstance(body, type) or (callable(body) and not hasattr(body, "read")):
        return _from_factory(body)
    if hasattr(body, "read"):
        if _is_seekable(body):
            return _from_seekable(body)
        return _from_bytes(_read_all(body))
    if isinstance(body, Iterator):
        return _from_bytes(_join_chunks(body))
    msg = f"cannot handle body of type {type(body).__name__}"
    raise UnsupportedBodyTypeError(msg)


def close_body(factory: BodyFactory | None, stream: Any) -> None:
    """Close a stream returned by a body factory.

    Streams built by the factory of a seekable body are the caller's own
    stream, shared by every call, and are left open.

    Args:
        factory: The body factory that returned ``stream``.
        stream: The stream to close. ``None`` is ignored.

    Example:
        ```pycon
        >>> import io
        >>> from aretryhttp.utils.body import close_body, normalize_body
        >>> factory, _ = normalize_body(b"hello")
        >>> stream = factory()
        >>> close_body(factory, stream)
        >>> stream.closed
        True

        ```
    """
    if stream is None or getattr(factory, "shares_stream", False):
        return
    close = getattr(stream, "close", None)
    if callable(close):
        close()


def stream_length(stream: Any) -> int | None:
    """Return the number of bytes left in an in-memory stream, if it can
    be known without reading it.

    Args:
        stream: The stream to inspect.

    Returns:
        The length, or ``None`` if the stream does not expose one.
    """
    if isinstance(stream, io.BytesIO):
        return len(stream.getvalue()) - stream.tell()
    if isinstance(stream, (bytes, bytearray, memoryview)):
        return len(stream)
    if hasattr(stream, "__len__"):
        return len(stream)
    return None


def _from_bytes(data: bytes) -> tuple[BodyFactory, int]:
    return (lambda: io.BytesIO(data)), len(data)


def _from_buffer(buffer: io.BytesIO) -> tuple[BodyFactory, int]:
    return (lambda: io.BytesIO(buffer.getvalue())), len(buffer.getvalue())


def _from_seekable(stream: IO[bytes]) -> tuple[BodyFactory, int | None]:
    def factory() -> IO[bytes]:
        stream.seek(0)
        return stream

    factory.shares_stream = True  # type: ignore[attr-defined]
    position = stream.tell()
    length = stream.seek(0, io.SEEK_END)
    stream.seek(position)
    return factory, length


def _from_factory(func: Callable[[], Any]) -> tuple[BodyFactory, int | None]:
    first = func()
    length = stream_length(first)
    close = getattr(first, "close", None)
    if callable(close):
        close()
    return func, length


def _is_seekable(stream: Any) -> bool:
    seekable = getattr(stream, "seekable", None)
    if callable(seekable):
        return bool(seekable())
    return hasattr(stream, "seek") and hasattr(stream, "tell")


def _read_all(stream: Any) -> bytes:
    data = stream.read()
    if isinstance(data, str):
        msg = f"cannot handle text stream of type {type(stream).__name__}"
        raise UnsupportedBodyTypeError(msg)
    return bytes(data)


def _join_chunks(chunks: Iterator[Any]) -> bytes:
    buffer = bytearray()
    for chunk in chunks:
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        if not isinstance(chunk, (bytes, bytearray, memoryview)):
            msg = f"cannot handle body chunk of type {type(chunk).__name__}"
            raise UnsupportedBodyTypeError(msg)
        buffer.extend(chunk)
    return bytes(buffer)
