r"""Utility functions for request bodies, draining, waiting and
logging."""

from __future__ import annotations

__all__ = [
    "BodyFactory",
    "StructuredFormatter",
    "drain_body",
    "log_structured",
    "normalize_body",
    "resolve_logger",
    "sleep_until_done",
]

from aretryhttp.utils.body import BodyFactory, normalize_body
from aretryhttp.utils.drain import drain_body
from aretryhttp.utils.logger import resolve_logger
from aretryhttp.utils.sleep import sleep_until_done
from aretryhttp.utils.structured_logging import StructuredFormatter, log_structured
