from __future__ import annotations

import logging
import sys

import aretryhttp
from aretryhttp.core import ClientConfig

logger: logging.Logger = logging.getLogger(__name__)

# Use httpbin.org for real HTTP testing
HTTPBIN_URL = "https://httpbin.org"


def check_get() -> None:
    logger.info("Checking get...")
    response = aretryhttp.get(f"{HTTPBIN_URL}/get")
    assert response.status_code == 200


def check_post() -> None:
    logger.info("Checking post...")
    response = aretryhttp.post(f"{HTTPBIN_URL}/post", "application/json", b'{"key": "value"}')
    assert response.status_code == 200
    assert response.json()["json"] == {"key": "value"}


def check_client() -> None:
    logger.info("Checking RetryClient...")
    with aretryhttp.RetryClient(config=ClientConfig(retry_max=1)) as client:
        response = client.post_form(f"{HTTPBIN_URL}/post", {"key": "value"})
    assert response.status_code == 200
    assert response.json()["form"] == {"key": "value"}


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_get()
        check_post()
        check_client()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
