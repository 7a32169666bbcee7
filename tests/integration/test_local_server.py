r"""Integration tests against a local HTTP server."""

from __future__ import annotations

import socket
import threading
import time
from typing import TYPE_CHECKING

import httpx
import pytest

from aretryhttp import (
    Context,
    ContextCanceledError,
    RetryClient,
    RetryExhaustedError,
    from_request,
    new_request,
)
from aretryhttp.core.config import ClientConfig
from aretryhttp.hooks import log_request_attempt, log_response_status
from aretryhttp.retry.handlers import passthrough_error_handler

if TYPE_CHECKING:
    from tests.integration.conftest import ScriptedServer

pytestmark = pytest.mark.integration

FAST = {"retry_wait_min": 0.01, "retry_wait_max": 0.05}


def unused_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_get_success(server: ScriptedServer) -> None:
    url = server.script("/ok", 200)
    with RetryClient(config=ClientConfig(**FAST)) as client:
        response = client.get(url)

    assert response.status_code == 200
    assert response.text == "status 200"
    assert len(server.calls("/ok")) == 1


def test_get_retries_server_errors(server: ScriptedServer) -> None:
    url = server.script("/flaky", 500, 502, 200)
    with RetryClient(config=ClientConfig(**FAST)) as client:
        response = client.get(url)

    assert response.status_code == 200
    assert len(server.calls("/flaky")) == 3


def test_get_exhausted(server: ScriptedServer) -> None:
    url = server.script("/down", 503)
    with RetryClient(config=ClientConfig(retry_max=2, **FAST)) as client:
        with pytest.raises(RetryExhaustedError, match=rf"GET {url} giving up after 3 attempts"):
            client.get(url)

    assert len(server.calls("/down")) == 3


def test_not_found_not_retried(server: ScriptedServer) -> None:
    url = server.script("/missing", 404)
    with RetryClient(config=ClientConfig(**FAST)) as client:
        assert client.get(url).status_code == 404

    assert len(server.calls("/missing")) == 1


def test_post_body_replayed(server: ScriptedServer) -> None:
    url = server.script("/items", 500, 500, 201)
    with RetryClient(config=ClientConfig(**FAST)) as client:
        response = client.post(url, "application/json", b'{"id": 1}')

    assert response.status_code == 201
    calls = server.calls("/items")
    assert [call["body"] for call in calls] == [b'{"id": 1}'] * 3
    assert all(call["headers"]["Content-Type"] == "application/json" for call in calls)


def test_post_form(server: ScriptedServer) -> None:
    url = server.script("/login", 200)
    with RetryClient(config=ClientConfig(**FAST)) as client:
        client.post_form(url, {"user": "alice", "pass": "secret"})

    call = server.calls("/login")[0]
    assert call["body"] == b"pass=secret&user=alice"
    assert call["headers"]["Content-Type"] == "application/x-www-form-urlencoded"


def test_head(server: ScriptedServer) -> None:
    url = server.script("/head", 503, 200)
    with RetryClient(config=ClientConfig(**FAST)) as client:
        response = client.head(url)

    assert response.status_code == 200
    assert [call["method"] for call in server.calls("/head")] == ["HEAD", "HEAD"]


def test_from_request(server: ScriptedServer) -> None:
    url = server.script("/wrapped", 502, 200)
    original = httpx.Request("PUT", url, content=b"wrapped body")
    with RetryClient(config=ClientConfig(**FAST)) as client:
        client.execute(from_request(original))

    assert [call["body"] for call in server.calls("/wrapped")] == [b"wrapped body"] * 2


def test_large_body_drained(server: ScriptedServer) -> None:
    url = server.script("/large", 500, 200)
    with RetryClient(config=ClientConfig(**FAST)) as client:
        response = client.get(url)

    assert response.status_code == 200
    assert len(response.content) == 8192


def test_passthrough_error_handler(server: ScriptedServer) -> None:
    url = server.script("/gone", 500)
    config = ClientConfig(retry_max=1, error_handler=passthrough_error_handler, **FAST)
    with RetryClient(config=config) as client:
        response = client.get(url)

    assert response.status_code == 500
    assert response.text == "status 500"


def test_connection_refused_exhausted() -> None:
    url = f"http://127.0.0.1:{unused_port()}/"
    with RetryClient(config=ClientConfig(retry_max=1, **FAST)) as client:
        with pytest.raises(RetryExhaustedError, match=r"giving up after 2 attempts") as exc_info:
            client.get(url)

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_unsupported_scheme_not_retried() -> None:
    with RetryClient(config=ClientConfig(**FAST)) as client:
        with pytest.raises(httpx.UnsupportedProtocol):
            client.get("ftp://127.0.0.1/file")


def test_cancel_during_backoff(server: ScriptedServer) -> None:
    url = server.script("/slow-retry", 503)
    ctx = Context.background().with_cancel()
    timer = threading.Timer(0.1, ctx.cancel)
    config = ClientConfig(retry_wait_min=10.0, retry_wait_max=30.0)

    start = time.monotonic()
    timer.start()
    try:
        with RetryClient(config=config) as client, pytest.raises(ContextCanceledError):
            client.execute(new_request("GET", url, context=ctx))
    finally:
        timer.cancel()

    assert time.monotonic() - start < 5.0
    assert len(server.calls("/slow-retry")) == 1


def test_log_hooks(server: ScriptedServer) -> None:
    url = server.script("/logged", 503, 200)
    messages: list[str] = []
    config = ClientConfig(
        logger=messages.append,
        request_log_hook=log_request_attempt,
        response_log_hook=log_response_status,
        **FAST,
    )
    with RetryClient(config=config) as client:
        client.get(url)

    assert f"GET {url}" in messages
    assert f"GET {url} (retry #1)" in messages
    assert f"GET {url} -> 503 Service Unavailable" in messages
    assert f"GET {url} -> 200 OK" in messages


def test_concurrent_execute_shared_client(server: ScriptedServer) -> None:
    urls = [server.script(f"/shared/{index}", 503, 200) for index in range(8)]
    results: dict[str, int] = {}
    errors: list[BaseException] = []
    barrier = threading.Barrier(len(urls))

    with RetryClient(config=ClientConfig(**FAST)) as client:

        def worker(url: str) -> None:
            barrier.wait()
            try:
                for _ in range(5):
                    results[url] = client.get(url).status_code
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=worker, args=(url,)) for url in urls]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=10.0)

    assert errors == []
    assert results == dict.fromkeys(urls, 200)
    for index in range(8):
        assert len(server.calls(f"/shared/{index}")) == 6
