r"""Shared test helpers for the retry client tests.

This module contains common test infrastructure used across multiple
test files to reduce duplication and improve maintainability.
"""

from __future__ import annotations

__all__ = [
    "TEST_URL",
    "RecordedRequest",
    "ResponseSequence",
    "make_client",
]

from dataclasses import dataclass
from typing import Any

import httpx

TEST_URL = "https://api.example.com/data"


@dataclass
class RecordedRequest:
    """Request seen by a ``ResponseSequence``.

    Attributes:
        method: The HTTP method.
        url: The request URL.
        headers: The request headers.
        body: The request body.
    """

    method: str
    url: str
    headers: httpx.Headers
    body: bytes


class ResponseSequence:
    """Transport handler answering with a fixed sequence of outcomes.

    Each item is a status code, an ``httpx.Response`` or an exception to
    raise. Every request is recorded, body included.

    Args:
        outcomes: The outcomes, in order.
        repeat_last: If ``True``, the last outcome is reused once the
            sequence is exhausted. Otherwise extra requests fail the test.
    """

    def __init__(self, outcomes: list[Any], repeat_last: bool = False) -> None:
        self.outcomes = list(outcomes)
        self.repeat_last = repeat_last
        self.requests: list[RecordedRequest] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        index = len(self.requests)
        self.requests.append(
            RecordedRequest(
                method=request.method,
                url=str(request.url),
                headers=request.headers,
                body=request.content,
            )
        )
        if index >= len(self.outcomes):
            if not self.repeat_last:
                msg = f"unexpected request #{index}"
                raise AssertionError(msg)
            index = len(self.outcomes) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return outcome
        return httpx.Response(outcome, content=f"status {outcome}".encode())

    @property
    def calls(self) -> int:
        """The number of requests received."""
        return len(self.requests)

    @property
    def bodies(self) -> list[bytes]:
        """The bodies of the requests received."""
        return [request.body for request in self.requests]


def make_client(handler: Any, **kwargs: Any) -> httpx.Client:
    """Create an ``httpx.Client`` answering through ``handler``."""
    return httpx.Client(transport=httpx.MockTransport(handler), **kwargs)
