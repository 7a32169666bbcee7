r"""Retry orchestrator driving the attempt loop of a request.

The executor sends a replayable request through an ``httpx.Client``,
classifies every attempt with the configured retry policy, waits between
attempts using the configured backoff, and decides what reaches the
caller once the loop stops. It is the only place that invokes hooks,
logs, and closes response bodies.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
from typing import IO, TYPE_CHECKING, Any

import httpx

from aretryhttp.core.config import RESPONSE_READ_LIMIT
from aretryhttp.exceptions import RetryExhaustedError
from aretryhttp.retry.decision import AttemptOutcome, RetryDecision
from aretryhttp.transport import close_idle_connections
from aretryhttp.utils.drain import drain_body
from aretryhttp.utils.sleep import sleep_until_done
from aretryhttp.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretryhttp.context import Context
    from aretryhttp.core.config import ClientConfig
    from aretryhttp.request import Request


class RetryExecutor:
    """Executes requests with automatic retries.

    The executor holds no per-request state: one instance can execute
    many requests concurrently, provided the bound ``httpx.Client`` is
    itself safe for concurrent use.

    Args:
        client: The httpx client used to send every attempt.
        config: The retry configuration.
    """

    def __init__(self, client: httpx.Client, config: ClientConfig) -> None:
        self.client = client
        self.config = config

    def execute(self, request: Request) -> httpx.Response:
        """Send a request, retrying it according to the configuration.

        Attempt 0 is the initial request; at most ``retry_max`` retries
        follow. Idle connections of the client are closed before
        returning.

        Args:
            request: The request to send.

        Returns:
            The response of the last attempt, unless retries were
            exhausted and no error handler is configured.

        Raises:
            httpx.RequestError: If a transport error is not retryable.
            ContextError: If the request context finished.
            RetryExhaustedError: If all attempts failed and no error
                handler is configured.
            Exception: Whatever the body factory, the retry policy, a
                hook or the error handler raises.
        """
        self._log(logging.DEBUG, f"{request.method} {request.url}", request)
        try:
            outcome = AttemptOutcome()
            attempt = 0
            while True:
                decision, outcome = self._attempt(request, attempt)
                if decision is RetryDecision.RETURN:
                    return self._finish(outcome)
                if decision is RetryDecision.STOP:
                    break
                attempt += 1
            return self._give_up(request, outcome)
        finally:
            close_idle_connections(self.client)

    def _attempt(self, request: Request, attempt: int) -> tuple[RetryDecision, AttemptOutcome]:
        config = self.config
        http_request, body = self._rewind(request)

        if config.request_log_hook is not None:
            config.request_log_hook(config.logger, http_request, attempt)

        response: httpx.Response | None = None
        error: BaseException | None = None
        context_error = request.context.err()
        if context_error is not None:
            # A finished context never reaches the network
            request.close_body(body)
            error = context_error
        else:
            try:
                response = self.client.send(http_request, stream=True)
            except httpx.RequestError as exc:
                error = exc
            finally:
                request.close_body(body)

        try:
            should_retry, check_error = config.check_retry(request.context, response, error)

            if error is not None:
                if context_error is None:
                    self._log(
                        logging.ERROR,
                        f"{request.method} {request.url} request failed: {error}",
                        request,
                        attempt=attempt,
                    )
            elif (
                response is not None
                and check_error is None
                and config.response_log_hook is not None
            ):
                config.response_log_hook(config.logger, response)
        except BaseException:
            if response is not None:
                response.close()
            raise

        if not should_retry:
            return RetryDecision.RETURN, AttemptOutcome(
                response=response, error=check_error if check_error is not None else error
            )

        outcome = AttemptOutcome(response=response, error=error)
        remaining = config.retry_max - attempt
        if remaining <= 0:
            return RetryDecision.STOP, outcome

        if response is not None:
            drain_body(response, limit=RESPONSE_READ_LIMIT, log=config.logger)

        wait = config.backoff(config.retry_wait_min, config.retry_wait_max, attempt, response)
        self._log(
            logging.DEBUG,
            f"{request.method} {request.url} (status: {outcome.status_code}): "
            f"retrying in {wait:.3f}s ({remaining} left)",
            request,
            attempt=attempt,
            status_code=outcome.status_code,
            wait=wait,
        )

        if sleep_until_done(request.context, wait):
            close_idle_connections(self.client)
            return RetryDecision.RETURN, AttemptOutcome(error=request.context.err())
        return RetryDecision.CONTINUE, outcome

    def _rewind(self, request: Request) -> tuple[httpx.Request, IO[bytes] | None]:
        try:
            stream = request.open_body()
        except Exception:
            close_idle_connections(self.client)
            raise
        extensions = dict(request.extensions)
        deadline_timeout = self._deadline_timeout(request.context, extensions.get("timeout"))
        if deadline_timeout is not None:
            extensions["timeout"] = deadline_timeout.as_dict()
        http_request = self.client.build_request(
            request.method,
            request.url,
            content=stream,
            headers=request.headers,
            extensions=extensions,
        )
        return http_request, stream

    def _deadline_timeout(
        self, context: Context, request_timeout: dict[str, Any] | None
    ) -> httpx.Timeout | None:
        remaining = context.remaining()
        if remaining is None:
            return None
        timeout = self.client.timeout if request_timeout is None else httpx.Timeout(**request_timeout)

        def clamp(value: float | None) -> float:
            return remaining if value is None else min(value, remaining)

        return httpx.Timeout(
            connect=clamp(timeout.connect),
            read=clamp(timeout.read),
            write=clamp(timeout.write),
            pool=clamp(timeout.pool),
        )

    def _finish(self, outcome: AttemptOutcome) -> httpx.Response:
        if outcome.error is not None:
            if outcome.response is not None:
                outcome.response.close()
            raise outcome.error
        return self._read(outcome.response)

    def _give_up(self, request: Request, outcome: AttemptOutcome) -> httpx.Response:
        attempts = self.config.retry_max + 1
        if self.config.error_handler is not None:
            return self._read(self.config.error_handler(outcome.response, outcome.error, attempts))

        if outcome.response is not None:
            outcome.response.close()
        self._log(
            logging.DEBUG,
            f"{request.method} {request.url} giving up after {attempts} attempts",
            request,
            attempt=attempts - 1,
            status_code=outcome.status_code,
        )
        raise RetryExhaustedError(
            method=request.method,
            url=str(request.url),
            attempts=attempts,
            status_code=outcome.response.status_code if outcome.response is not None else None,
            cause=outcome.error,
        )

    def _read(self, response: Any) -> Any:
        if (
            not self.config.stream
            and isinstance(response, httpx.Response)
            and not response.is_closed
        ):
            response.read()
        return response

    def _log(self, level: int, message: str, request: Request, **extra: Any) -> None:
        if self.config.logger is None:
            return
        log_structured(
            self.config.logger,
            level,
            message,
            method=request.method,
            url=str(request.url),
            **extra,
        )
