r"""Unit tests for error handlers."""

from __future__ import annotations

import httpx
import pytest

from aretryhttp.retry.handlers import passthrough_error_handler


def test_passthrough_error_handler_returns_response() -> None:
    response = httpx.Response(503)
    assert passthrough_error_handler(response, None, 5) is response


def test_passthrough_error_handler_keeps_response_open() -> None:
    response = httpx.Response(503, stream=httpx.ByteStream(b"unavailable"))
    passthrough_error_handler(response, None, 5)
    assert not response.is_closed


def test_passthrough_error_handler_raises_error() -> None:
    error = httpx.ConnectError("connection refused")
    with pytest.raises(httpx.ConnectError, match=r"connection refused"):
        passthrough_error_handler(None, error, 3)


def test_passthrough_error_handler_nothing_to_pass() -> None:
    with pytest.raises(RuntimeError, match=r"no response and no error"):
        passthrough_error_handler(None, None, 1)
