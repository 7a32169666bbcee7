r"""Unit tests for parameter validation."""

from __future__ import annotations

import pytest

from aretryhttp.core.validation import validate_callable, validate_method, validate_retry_params

###########################################
#     Tests for validate_retry_params     #
###########################################


def test_validate_retry_params_valid() -> None:
    validate_retry_params(retry_max=4, retry_wait_min=1.0, retry_wait_max=30.0)


def test_validate_retry_params_zero() -> None:
    validate_retry_params(retry_max=0, retry_wait_min=0.0, retry_wait_max=0.0)


def test_validate_retry_params_negative_retry_max() -> None:
    with pytest.raises(ValueError, match=r"retry_max must be >= 0, got -1"):
        validate_retry_params(retry_max=-1, retry_wait_min=1.0, retry_wait_max=30.0)


def test_validate_retry_params_negative_wait_min() -> None:
    with pytest.raises(ValueError, match=r"retry_wait_min must be >= 0"):
        validate_retry_params(retry_max=1, retry_wait_min=-1.0, retry_wait_max=30.0)


def test_validate_retry_params_negative_wait_max() -> None:
    with pytest.raises(ValueError, match=r"retry_wait_max must be >= 0"):
        validate_retry_params(retry_max=1, retry_wait_min=1.0, retry_wait_max=-30.0)


#######################################
#     Tests for validate_callable     #
#######################################


def test_validate_callable_valid() -> None:
    validate_callable("hook", print)


def test_validate_callable_none_optional() -> None:
    validate_callable("hook", None, optional=True)


def test_validate_callable_none_required() -> None:
    with pytest.raises(TypeError, match=r"hook must be callable, got NoneType"):
        validate_callable("hook", None)


def test_validate_callable_invalid() -> None:
    with pytest.raises(TypeError, match=r"backoff must be callable, got str"):
        validate_callable("backoff", "exponential")


#####################################
#     Tests for validate_method     #
#####################################


@pytest.mark.parametrize("method", ["GET", "post", "PROPFIND", "M-SEARCH"])
def test_validate_method_valid(method: str) -> None:
    validate_method(method)


@pytest.mark.parametrize("method", ["", "BAD METHOD", "GET\n", "GÉT"])
def test_validate_method_invalid(method: str) -> None:
    with pytest.raises(ValueError, match=r"invalid method"):
        validate_method(method)
