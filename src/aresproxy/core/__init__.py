r"""Configuration defaults and validation for the REST proxy."""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_UNIT",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT_MS",
    "JSON_CONTENT_TYPE",
    "ProxyConfig",
    "validate_retry_params",
    "validate_service_uri",
    "validate_timeout_ms",
]

from aresproxy.core.config import (
    DEFAULT_BACKOFF_UNIT,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_MS,
    JSON_CONTENT_TYPE,
    ProxyConfig,
)
from aresproxy.core.validation import (
    validate_retry_params,
    validate_service_uri,
    validate_timeout_ms,
)
