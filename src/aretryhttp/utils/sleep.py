r"""Backoff wait raced against a request context."""

from __future__ import annotations

__all__ = ["sleep_until_done"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretryhttp.context import Context

logger: logging.Logger = logging.getLogger(__name__)


def sleep_until_done(context: Context, seconds: float) -> bool:
    """Wait for ``seconds`` or until the context is done, whichever
    comes first.

    Args:
        context: The request context.
        seconds: The backoff delay in seconds.

    Returns:
        ``True`` if the context finished before the delay elapsed,
        ``False`` if the full delay elapsed.

    Example:
        ```pycon
        >>> from aretryhttp.context import Context
        >>> from aretryhttp.utils.sleep import sleep_until_done
        >>> sleep_until_done(Context.background(), 0.01)
        False
        >>> ctx = Context.background().with_cancel()
        >>> ctx.cancel()
        >>> sleep_until_done(ctx, 10.0)
        True

        ```
    """
    done = context.wait(seconds)
    if done:
        logger.debug(f"Backoff wait of {seconds:.3f}s interrupted: {context.err()}")
    return done
