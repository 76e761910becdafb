r"""Configuration dataclass and defaults for JsonRestProxy.

This module provides configuration constants and a dataclass-based
configuration object controlling how ``JsonRestProxy`` retries writes
and which lifecycle callbacks it invokes.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF_UNIT",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT_MS",
    "JSON_CONTENT_TYPE",
    "ProxyConfig",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aresproxy.backoff.exponential import ExponentialBackoff
from aresproxy.core.validation import validate_retry_params, validate_timeout_ms
from aresproxy.retry.config import CallbackConfig, RetryConfig

if TYPE_CHECKING:
    from collections.abc import Callable

    from aresproxy.backoff.base import BaseBackoffStrategy
    from aresproxy.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo


# Total number of attempts for a retried PUT/POST (initial attempt included)
DEFAULT_MAX_RETRIES = 10

# Base unit of the backoff window in seconds
# Attempt a sleeps uniform(0, 1) * (2 ** a - 1) * unit
DEFAULT_BACKOFF_UNIT = 0.2

# None disables the per-request timeout
DEFAULT_TIMEOUT_MS: float | None = None

JSON_CONTENT_TYPE = "application/json"


@dataclass
class ProxyConfig:
    """Configuration for JsonRestProxy retry behavior.

    Args:
        max_retries: Total number of attempts for a PUT/POST. Must be >= 1.
        backoff_unit: Base unit in seconds of the jittered exponential
            backoff. Must be >= 0. Ignored if backoff_strategy is provided.
        backoff_strategy: Optional custom backoff strategy instance.
        timeout_ms: Per-request timeout in milliseconds, ``None`` for no
            timeout. Must be > 0 if provided.
        on_request: Optional callback called before each attempt.
        on_retry: Optional callback called before each backoff sleep.
        on_success: Optional callback called when an attempt succeeds.
        on_failure: Optional callback called when the call gives up.

    Example:
        ```pycon
        >>> from aresproxy.core.config import ProxyConfig
        >>> config = ProxyConfig()
        >>> config.max_retries
        10
        >>> config.merge(max_retries=3).max_retries
        3
        >>> config.max_retries  # Original unchanged
        10

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    backoff_unit: float = DEFAULT_BACKOFF_UNIT
    backoff_strategy: BaseBackoffStrategy | None = None
    timeout_ms: float | None = DEFAULT_TIMEOUT_MS
    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_retry_params(max_retries=self.max_retries, backoff_unit=self.backoff_unit)
        validate_timeout_ms(self.timeout_ms)

    def merge(self, **overrides: Any) -> ProxyConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ProxyConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_retry_config(self) -> RetryConfig:
        """Build the configuration consumed by ``RetryExecutor``."""
        return RetryConfig(
            max_retries=self.max_retries,
            backoff_strategy=self.backoff_strategy
            or ExponentialBackoff(base_delay=self.backoff_unit),
        )

    def to_callback_config(self) -> CallbackConfig:
        """Build the callback configuration consumed by ``RetryExecutor``."""
        return CallbackConfig(
            on_request=self.on_request,
            on_retry=self.on_retry,
            on_success=self.on_success,
            on_failure=self.on_failure,
        )
