r"""Parameter validation utilities for the REST proxy.

This module provides validation functions for configuration values so
that mistakes are reported when a proxy is built rather than on the
first request.
"""

from __future__ import annotations

__all__ = ["validate_retry_params", "validate_service_uri", "validate_timeout_ms"]


def validate_timeout_ms(timeout_ms: float | None) -> None:
    """Validate a request timeout expressed in milliseconds.

    Args:
        timeout_ms: The timeout in milliseconds, or ``None`` for no timeout.

    Raises:
        ValueError: If timeout_ms is a numeric value <= 0.

    Example:
        ```pycon
        >>> from aresproxy.core.validation import validate_timeout_ms
        >>> validate_timeout_ms(1500)
        >>> validate_timeout_ms(None)
        >>> validate_timeout_ms(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout_ms must be > 0 or None, got 0

        ```
    """
    if timeout_ms is not None and timeout_ms <= 0:
        msg = f"timeout_ms must be > 0 or None, got {timeout_ms}"
        raise ValueError(msg)


def validate_retry_params(max_retries: int, backoff_unit: float = 0.2) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Total number of attempts for a retried call. Must be >= 1.
        backoff_unit: Base unit in seconds of the backoff window. Must be >= 0.

    Raises:
        ValueError: If max_retries < 1 or backoff_unit is negative.

    Example:
        ```pycon
        >>> from aresproxy.core.validation import validate_retry_params
        >>> validate_retry_params(max_retries=10)
        >>> validate_retry_params(max_retries=3, backoff_unit=0.0)
        >>> validate_retry_params(max_retries=0)  # doctest: +SKIP

        ```
    """
    if max_retries < 1:
        msg = f"max_retries must be >= 1, got {max_retries}"
        raise ValueError(msg)
    if backoff_unit < 0:
        msg = f"backoff_unit must be >= 0, got {backoff_unit}"
        raise ValueError(msg)


def validate_service_uri(service_uri: str) -> None:
    """Validate the base URI every resource path is appended to.

    Args:
        service_uri: Scheme and host, for example ``"https://api.example.com"``.

    Raises:
        ValueError: If the URI does not start with ``http://`` or ``https://``.
    """
    if not service_uri.startswith(("http://", "https://")):
        msg = f"service_uri must start with http:// or https://, got {service_uri!r}"
        raise ValueError(msg)
