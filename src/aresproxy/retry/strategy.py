r"""Retry strategy for calculating backoff delays."""

from __future__ import annotations

__all__ = ["RetryStrategy"]

import logging
from typing import TYPE_CHECKING

from aresproxy.backoff.exponential import ExponentialBackoff

if TYPE_CHECKING:
    from aresproxy.backoff.base import BaseBackoffStrategy

logger: logging.Logger = logging.getLogger(__name__)


class RetryStrategy:
    """Strategy for calculating retry delays.

    Args:
        backoff_strategy: Backoff strategy instance. Defaults to
            ExponentialBackoff().

    Attributes:
        backoff_strategy: Backoff strategy instance.
    """

    def __init__(self, backoff_strategy: BaseBackoffStrategy | None = None) -> None:
        self.backoff_strategy: BaseBackoffStrategy = (
            backoff_strategy if backoff_strategy is not None else ExponentialBackoff()
        )

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay before the attempt following ``attempt``.

        Args:
            attempt: The attempt that just failed (0-indexed).

        Returns:
            Sleep time in seconds.
        """
        sleep_time = self.backoff_strategy.calculate(attempt)
        logger.debug(f"Waiting {sleep_time:.2f}s before retry")
        return sleep_time
