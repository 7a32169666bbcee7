r"""Loop-control state of the retry orchestrator."""

from __future__ import annotations

__all__ = ["AttemptOutcome", "RetryDecision"]

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class RetryDecision(Enum):
    """What the retry loop does after an attempt.

    Attributes:
        RETURN: Stop now and hand the outcome to the caller.
        CONTINUE: Wait for the backoff delay, then try again.
        STOP: Stop because no retry is left; the outcome goes to the
            error handler.
    """

    RETURN = "return"
    CONTINUE = "continue"
    STOP = "stop"


@dataclass(frozen=True)
class AttemptOutcome:
    """Result of a single attempt.

    Attributes:
        response: The response, if the transport produced one.
        error: The error to report: a transport error, an error returned
            by the retry policy, or a context error.
    """

    response: httpx.Response | None = None
    error: BaseException | None = None

    @property
    def status_code(self) -> int:
        """The response status code, or 0 without a response."""
        return 0 if self.response is None else self.response.status_code
