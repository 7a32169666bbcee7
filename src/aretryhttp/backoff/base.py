r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["Backoff", "BaseBackoffStrategy"]

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Optional

import httpx

Backoff = Callable[[float, float, int, Optional[httpx.Response]], float]


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before retrying a
    failed request. Strategies are called like functions, so any callable
    with the same signature can be used in their place.
    """

    @abstractmethod
    def __call__(
        self,
        min_wait: float,
        max_wait: float,
        attempt: int,
        response: httpx.Response | None = None,
    ) -> float:
        """Calculate the backoff delay for a given retry attempt.

        Args:
            min_wait: The configured minimum wait in seconds.
            max_wait: The configured maximum wait in seconds.
            attempt: The number of retries performed so far (0-indexed).
                For example, attempt=0 is the wait before the first retry.
            response: The response of the failed attempt, if any.

        Returns:
            The delay in seconds before the next attempt.
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"
