r"""Structured logging utilities for machine-readable log output.

The proxy logs through the standard ``logging`` module. Records about
individual attempts carry extra fields (``method``, ``url``,
``status_code``, ``attempt``, ...). ``StructuredFormatter`` renders those
records as one JSON object per line, which is convenient for log
aggregation. It is opt-in:

```python
import logging
from aresproxy.utils.structured_logging import StructuredFormatter, set_correlation_id

handler = logging.StreamHandler()
handler.setFormatter(StructuredFormatter())
logger = logging.getLogger("aresproxy")
logger.addHandler(handler)
logger.setLevel(logging.DEBUG)

set_correlation_id("batch-42")
```
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
    "aresproxy_correlation_id", default=None
)

# Attributes every LogRecord has; anything else was passed through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


def get_correlation_id() -> str | None:
    """Return the correlation ID of the current context, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Attach a correlation ID to every structured record of this context.

    Args:
        correlation_id: The ID to attach (request ID, trace ID, batch ID...).

    Example:
        ```pycon
        >>> from aresproxy.utils.structured_logging import (
        ...     clear_correlation_id,
        ...     get_correlation_id,
        ...     set_correlation_id,
        ... )
        >>> set_correlation_id("req-1")
        >>> get_correlation_id()
        'req-1'
        >>> clear_correlation_id()

        ```
    """
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    """Remove the correlation ID of the current context."""
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """Format log records as single-line JSON objects.

    Every object has ``timestamp``, ``level``, ``logger``, ``message`` and
    ``thread``. The correlation ID, exception text and any field passed
    through ``extra`` are added when present.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from aresproxy.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord("aresproxy", logging.INFO, __file__, 1, "done", None, None)
        >>> record.status_code = 200
        >>> payload = json.loads(StructuredFormatter().format(record))
        >>> payload["message"], payload["status_code"]
        ('done', 200)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "thread": record.threadName,
        }
        correlation_id = get_correlation_id()
        if correlation_id is not None:
            payload["correlation_id"] = correlation_id
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                payload[key] = value
        return json.dumps(payload, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: ARG002
        """Format the record time as ISO 8601 UTC with milliseconds."""
        return (
            time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
            + f".{int(record.msecs):03d}Z"
        )


def log_structured(logger: logging.Logger, level: int, message: str, **extra: Any) -> None:
    """Log ``message`` with ``extra`` as structured fields.

    Args:
        logger: Logger to use.
        level: Log level (e.g., ``logging.WARNING``).
        message: Log message.
        **extra: Structured fields. Names must not clash with
            ``logging.LogRecord`` attributes.
    """
    logger.log(level, message, extra=extra)
