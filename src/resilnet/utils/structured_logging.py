r"""Structured logging utilities for request traffic.

The LoggingInterceptor writes its records through ``log_structured`` so
that the method, URL, status code and error kind of each attempt travel
as separate fields. Install ``StructuredFormatter`` on a handler to get
them as one JSON object per line:

```python
import logging

from resilnet.utils.structured_logging import StructuredFormatter

handler = logging.StreamHandler()
handler.setFormatter(StructuredFormatter())
logger = logging.getLogger("resilnet")
logger.addHandler(handler)
logger.setLevel(logging.DEBUG)
```

A correlation id set with ``set_correlation_id`` is attached to every
record formatted in the same context (thread or asyncio task).
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "resilnet_correlation_id", default=None
)

# Attributes every LogRecord has; anything else came from ``extra``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> str | None:
    """Return the correlation id of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation id of the current context.

    Example:
        ```pycon
        >>> from resilnet.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("checkout-42")
        >>> get_correlation_id()
        'checkout-42'
        >>> clear_correlation_id()
        >>> get_correlation_id() is None
        True

        ```
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging.

    Each record becomes a JSON object with the fields ``timestamp``
    (ISO 8601, UTC), ``level``, ``logger``, ``message``, ``module``,
    ``function`` and ``line``, plus ``correlation_id`` when one is set,
    ``exception`` when the record carries exception info, and any field
    passed through ``extra``. Values that are not JSON serializable are
    written with ``str``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = get_correlation_id()
        if correlation_id is not None:
            log_data["correlation_id"] = correlation_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(
    logger: logging.Logger,
    level: int,
    message: str,
    **extra: Any,
) -> None:
    """Log a message with structured fields.

    Args:
        logger: Logger to use.
        level: Log level (e.g., logging.INFO).
        message: Log message.
        **extra: Fields attached to the record.

    Example:
        ```pycon
        >>> import logging
        >>> from io import StringIO
        >>> from resilnet.utils.structured_logging import StructuredFormatter, log_structured
        >>> stream = StringIO()
        >>> handler = logging.StreamHandler(stream)
        >>> handler.setFormatter(StructuredFormatter())
        >>> logger = logging.getLogger("doctest_structured")
        >>> logger.addHandler(handler)
        >>> logger.setLevel(logging.DEBUG)
        >>> log_structured(logger, logging.INFO, "GET /users", status_code=200)
        >>> '"status_code": 200' in stream.getvalue()
        True

        ```
    """
    logger.log(level, message, extra=extra)
