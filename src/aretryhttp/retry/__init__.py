r"""Retry policies, loop-control state and error handlers.

Public API:
    - CheckRetry / default_retry_policy: decide whether to retry an attempt
    - RetryDecision / AttemptOutcome: state of the retry loop
    - ErrorHandler / passthrough_error_handler: handle exhausted retries

The orchestrator itself lives in ``aretryhttp.retry.executor``.
"""

from __future__ import annotations

__all__ = [
    "AttemptOutcome",
    "CheckRetry",
    "ErrorHandler",
    "RetryDecision",
    "default_retry_policy",
    "is_tls_trust_error",
    "passthrough_error_handler",
]

from aretryhttp.retry.decision import AttemptOutcome, RetryDecision
from aretryhttp.retry.handlers import ErrorHandler, passthrough_error_handler
from aretryhttp.retry.policy import CheckRetry, default_retry_policy, is_tls_trust_error
