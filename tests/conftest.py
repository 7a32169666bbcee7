from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from tests.helpers import ResponseSequence

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_wait() -> Generator[Mock, None, None]:
    """Patch the backoff wait of the retry loop to make tests run
    faster.

    The patched wait returns immediately and reports that the request
    context is still active.
    """
    with patch("aretryhttp.retry.executor.sleep_until_done", return_value=False) as mock:
        yield mock


@pytest.fixture
def ok_sequence() -> ResponseSequence:
    """Create a transport handler that always answers 200."""
    return ResponseSequence([200], repeat_last=True)
