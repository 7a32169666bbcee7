r"""Linear backoff strategy with jitter."""

from __future__ import annotations

__all__ = ["LinearJitterBackoff", "linear_jitter_backoff"]

import random
from typing import TYPE_CHECKING

from aretryhttp.backoff.base import BaseBackoffStrategy

if TYPE_CHECKING:
    import httpx


class LinearJitterBackoff(BaseBackoffStrategy):
    """Linear backoff strategy with jitter.

    min_wait and max_wait are not absolute bounds here: a factor is drawn
    uniformly from ``[min_wait, max_wait)`` and multiplied by
    ``attempt + 1``. They bound the jitter, so for instance:

    - min_wait=max_wait=1.0 gives a strictly linear 1s, 2s, 3s, ...
    - min_wait=0.8, max_wait=1.2 gives a little jitter around 1s, 2s, 3s, ...
    - min_wait=0.1, max_wait=20.0 gives extreme jitter.

    If max_wait <= min_wait, the delay is min_wait * (attempt + 1).

    A new random generator, seeded from the operating system, is created
    on every call, so concurrent requests share no random state.

    Example:
        ```pycon
        >>> from aretryhttp.backoff import LinearJitterBackoff
        >>> backoff = LinearJitterBackoff()
        >>> backoff(1.0, 1.0, 0)
        1.0
        >>> backoff(1.0, 1.0, 2)
        3.0
        >>> 2.0 <= backoff(1.0, 2.0, 1) < 4.0
        True

        ```
    """

    def __call__(
        self,
        min_wait: float,
        max_wait: float,
        attempt: int,
        response: httpx.Response | None = None,
    ) -> float:
        multiplier = attempt + 1
        if max_wait <= min_wait:
            return min_wait * multiplier
        rng = random.Random()  # noqa: S311
        jitter = rng.random() * (max_wait - min_wait)
        return (min_wait + jitter) * multiplier


linear_jitter_backoff = LinearJitterBackoff()
