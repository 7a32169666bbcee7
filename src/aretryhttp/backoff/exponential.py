r"""Exponential backoff strategy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff", "default_backoff"]

import math
from typing import TYPE_CHECKING

from aretryhttp.backoff.base import BaseBackoffStrategy

if TYPE_CHECKING:
    import httpx


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: min_wait * (2 ** attempt), capped at max_wait.
    If the multiplication overflows, the delay is max_wait.

    This is the default backoff strategy.

    Example:
        ```pycon
        >>> from aretryhttp.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff()
        >>> backoff(1.0, 30.0, 0)
        1.0
        >>> backoff(1.0, 30.0, 3)
        8.0
        >>> backoff(1.0, 30.0, 10)  # Would be 1024.0, but capped
        30.0

        ```
    """

    def __call__(
        self,
        min_wait: float,
        max_wait: float,
        attempt: int,
        response: httpx.Response | None = None,
    ) -> float:
        try:
            wait = min_wait * (2**attempt)
        except OverflowError:
            return max_wait
        if math.isnan(wait) or wait > max_wait:
            return max_wait
        return wait


default_backoff = ExponentialBackoff()
