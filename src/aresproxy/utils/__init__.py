r"""Utility helpers shared across the proxy."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "error_kind",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

from aresproxy.utils.errors import error_kind
from aresproxy.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
