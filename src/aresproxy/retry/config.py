r"""Configuration dataclasses for retry behavior.

This module provides configuration objects for retry logic and
callbacks.
"""

from __future__ import annotations

__all__ = ["CallbackConfig", "RetryConfig"]

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from aresproxy.backoff.exponential import ExponentialBackoff

if TYPE_CHECKING:
    from collections.abc import Callable

    from aresproxy.backoff.base import BaseBackoffStrategy


@dataclass
class RetryConfig:
    """Configuration for retry behavior.

    Attributes:
        max_retries: Total number of attempts, initial attempt included.
        backoff_strategy: Strategy computing the sleep after a failed attempt.
    """

    max_retries: int = 10
    backoff_strategy: BaseBackoffStrategy = field(default_factory=ExponentialBackoff)


@dataclass
class CallbackConfig:
    """Configuration for callbacks.

    Attributes:
        on_request: Optional callback invoked before each request attempt.
        on_retry: Optional callback invoked before each backoff sleep.
        on_success: Optional callback invoked when an attempt succeeds.
        on_failure: Optional callback invoked when the call gives up.
    """

    on_request: Callable | None = None
    on_retry: Callable | None = None
    on_success: Callable | None = None
    on_failure: Callable | None = None
