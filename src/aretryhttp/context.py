r"""Cancellation and deadline context for requests.

A ``Context`` travels with a request and tells the retry loop when to
stop: either because someone called ``cancel()`` or because its deadline
passed. Contexts form a tree; finishing a parent finishes its children,
and a child's deadline never extends past its parent's.

Example:
    ```pycon
    >>> from aretryhttp.context import Context
    >>> ctx = Context.background().with_timeout(30.0)
    >>> ctx.done()
    False
    >>> ctx.cancel()
    >>> ctx.err()
    ContextCanceledError('context canceled')

    ```
"""

from __future__ import annotations

__all__ = ["Context"]

import threading
import time

from aretryhttp.exceptions import ContextCanceledError, ContextError, DeadlineExceededError


class Context:
    r"""Cancellation signal and optional deadline shared by a request.

    Use ``Context.background()`` for a context that never finishes, and
    derive cancelable or time-limited contexts from it.

    Args:
        timeout: Optional number of seconds after which the context
            reports ``DeadlineExceededError``.
        parent: Optional parent context. The new context finishes when
            the parent does.
    """

    def __init__(self, timeout: float | None = None, *, parent: Context | None = None) -> None:
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._error: ContextError | None = None
        self._children: list[Context] = []
        self._parent = parent

        deadline = None if timeout is None else time.monotonic() + timeout
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self._deadline = deadline

        if parent is not None:
            parent._add_child(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(deadline={self._deadline}, error={self._error!r})"

    @classmethod
    def background(cls) -> Context:
        """Return the shared context that is never canceled and has no
        deadline."""
        return _BACKGROUND

    @property
    def deadline(self) -> float | None:
        """The deadline as a ``time.monotonic()`` value, or ``None``."""
        return self._deadline

    def with_cancel(self) -> Context:
        """Return a child context that can be canceled on its own."""
        return Context(parent=self._as_parent())

    def with_timeout(self, timeout: float) -> Context:
        """Return a child context whose deadline is ``timeout`` seconds
        from now (or the parent deadline, if sooner)."""
        return Context(timeout=timeout, parent=self._as_parent())

    def cancel(self) -> None:
        """Cancel the context and all its children.

        Canceling an already finished context does nothing.
        """
        self._finish(ContextCanceledError("context canceled"))

    def err(self) -> ContextError | None:
        """Return the reason the context finished, or ``None`` if it is
        still active."""
        if (
            self._error is None
            and self._deadline is not None
            and time.monotonic() >= self._deadline
        ):
            self._finish(DeadlineExceededError("context deadline exceeded"))
        return self._error

    def done(self) -> bool:
        """Return ``True`` if the context was canceled or its deadline
        passed."""
        return self.err() is not None

    def remaining(self) -> float | None:
        """Return the number of seconds left before the deadline, or
        ``None`` without a deadline. Never negative."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def wait(self, seconds: float) -> bool:
        """Block for up to ``seconds`` or until the context finishes.

        Args:
            seconds: Maximum number of seconds to block.

        Returns:
            ``True`` if the context finished, ``False`` if the full delay
            elapsed first.
        """
        end = time.monotonic() + max(seconds, 0.0)
        while True:
            if self.done():
                return True
            now = time.monotonic()
            if now >= end:
                return False
            timeout = end - now
            remaining = self.remaining()
            if remaining is not None:
                timeout = min(timeout, remaining)
            self._event.wait(timeout)

    def _as_parent(self) -> Context | None:
        # The background context never finishes, so children need no link to it
        return None if self is _BACKGROUND else self

    def _add_child(self, child: Context) -> None:
        now = time.monotonic()
        with self._lock:
            error = self._error
            if error is None:
                expired = [
                    other
                    for other in self._children
                    if other._deadline is not None and other._deadline <= now
                ]
                self._children.append(child)
        if error is not None:
            child._finish(error)
            return
        # Children past their deadline are finished here, which unlinks them
        for other in expired:
            other.err()

    def _remove_child(self, child: Context) -> None:
        with self._lock:
            if child in self._children:
                self._children.remove(child)

    def _finish(self, error: ContextError) -> None:
        with self._lock:
            if self._error is not None:
                return
            self._error = error
            children, self._children = self._children, []
        self._event.set()
        for child in children:
            child._finish(error)
        if self._parent is not None:
            self._parent._remove_child(self)


_BACKGROUND = Context()
