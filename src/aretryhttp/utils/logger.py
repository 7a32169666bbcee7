r"""Logger resolution for the retry client.

A client accepts either a leveled logger (``logging.Logger`` or
``logging.LoggerAdapter``) or a printf-style callable such as ``print``.
Printf-style callables are wrapped in a private ``logging.Logger`` so that
the rest of the package only ever talks to the ``logging`` API.
"""

from __future__ import annotations

__all__ = ["CallableHandler", "resolve_logger"]

import itertools
import logging
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from collections.abc import Callable

LoggerLike = Union[logging.Logger, logging.LoggerAdapter]

_printf_logger_ids = itertools.count()


class CallableHandler(logging.Handler):
    """Logging handler that forwards each formatted record to a
    callable.

    Args:
        func: The callable receiving one formatted message per record.

    Example:
        ```pycon
        >>> import logging
        >>> from aretryhttp.utils.logger import CallableHandler
        >>> messages = []
        >>> logger = logging.Logger("example")
        >>> logger.addHandler(CallableHandler(messages.append))
        >>> logger.warning("retrying in %ss", 2)
        >>> messages
        ['retrying in 2s']

        ```
    """

    def __init__(self, func: Callable[[str], Any]) -> None:
        super().__init__(level=logging.DEBUG)
        self.func = func
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.func(self.format(record))
        except Exception:  # noqa: BLE001
            self.handleError(record)


def resolve_logger(logger: Any) -> LoggerLike | None:
    """Turn a user-supplied logger into something the ``logging`` API
    accepts.

    Args:
        logger: ``None``, a ``logging.Logger``, a ``logging.LoggerAdapter``
            or a printf-style callable.

    Returns:
        ``None`` if no logging is wanted, otherwise a logger.

    Raises:
        TypeError: If the value is none of the supported types.

    Example:
        ```pycon
        >>> import logging
        >>> from aretryhttp.utils.logger import resolve_logger
        >>> resolve_logger(None) is None
        True
        >>> logger = logging.getLogger("aretryhttp")
        >>> resolve_logger(logger) is logger
        True

        ```
    """
    if logger is None or isinstance(logger, (logging.Logger, logging.LoggerAdapter)):
        return logger
    if callable(logger):
        # Not registered with the logging manager so it is collected with its client
        printf_logger = logging.Logger(f"aretryhttp.printf.{next(_printf_logger_ids)}")
        printf_logger.setLevel(logging.DEBUG)
        printf_logger.propagate = False
        printf_logger.addHandler(CallableHandler(logger))
        return printf_logger
    msg = (
        "invalid logger type passed, must be logging.Logger, logging.LoggerAdapter "
        f"or a callable, was {type(logger).__name__}"
    )
    raise TypeError(msg)
