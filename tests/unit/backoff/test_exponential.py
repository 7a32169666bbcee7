r"""Unit tests for ExponentialBackoff strategy."""

from __future__ import annotations

import httpx
import pytest

from aretryhttp.backoff import BaseBackoffStrategy, ExponentialBackoff, default_backoff


def test_exponential_backoff_is_strategy() -> None:
    """Test that ExponentialBackoff implements the strategy interface."""
    assert isinstance(ExponentialBackoff(), BaseBackoffStrategy)
    assert isinstance(default_backoff, ExponentialBackoff)


def test_exponential_backoff_basic() -> None:
    """Test basic exponential backoff calculation."""
    backoff = ExponentialBackoff()
    assert backoff(1.0, 30.0, 0) == 1.0  # 1.0 * 2^0
    assert backoff(1.0, 30.0, 1) == 2.0  # 1.0 * 2^1
    assert backoff(1.0, 30.0, 2) == 4.0  # 1.0 * 2^2
    assert backoff(1.0, 30.0, 3) == 8.0  # 1.0 * 2^3


def test_exponential_backoff_with_max_wait() -> None:
    """Test exponential backoff with max_wait cap."""
    backoff = ExponentialBackoff()
    assert backoff(1.0, 5.0, 2) == 4.0
    assert backoff(1.0, 5.0, 3) == 5.0  # Would be 8.0, but capped
    assert backoff(1.0, 5.0, 10) == 5.0  # Would be 1024.0, but capped


@pytest.mark.parametrize("attempt", [0, 1, 5, 20])
def test_exponential_backoff_never_exceeds_max_wait(attempt: int) -> None:
    """Test that the delay is always within [0, max_wait]."""
    wait = ExponentialBackoff()(0.3, 2.0, attempt)
    assert 0.0 <= wait <= 2.0


def test_exponential_backoff_overflow() -> None:
    """Test that an overflowing multiplication returns max_wait."""
    assert ExponentialBackoff()(1.0, 30.0, 100000) == 30.0


def test_exponential_backoff_zero_min_wait() -> None:
    """Test exponential backoff with zero min_wait."""
    backoff = ExponentialBackoff()
    assert backoff(0.0, 30.0, 0) == 0.0
    assert backoff(0.0, 30.0, 5) == 0.0


def test_exponential_backoff_ignores_response() -> None:
    """Test that the response does not change the delay."""
    assert ExponentialBackoff()(1.0, 30.0, 2, httpx.Response(503)) == 4.0


def test_exponential_backoff_repr() -> None:
    assert repr(ExponentialBackoff()) == "ExponentialBackoff()"
