r"""Binary exponential backoff with full jitter."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

import random

from aresproxy.backoff.base import BaseBackoffStrategy


class ExponentialBackoff(BaseBackoffStrategy):
    """Binary exponential backoff with full jitter.

    After the failed attempt ``a`` the delay is drawn uniformly from the
    window ``[0, (2 ** a - 1) * base_delay]``, i.e.
    ``uniform(0, 1) * (2 ** a - 1) * base_delay``. The first failure
    therefore retries immediately and the window doubles (roughly) with
    every further failure.

    Args:
        base_delay: The slot length in seconds (default: 0.2).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from aresproxy.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(base_delay=0.2)
        >>> backoff.calculate(0)
        0.0
        >>> 0.0 <= backoff.calculate(3) <= 1.4
        True
        >>> round(backoff.window(3), 6)
        1.4

        ```
    """

    def __init__(self, base_delay: float = 0.2, max_delay: float | None = None) -> None:
        if base_delay < 0:
            msg = f"base_delay must be non-negative, got {base_delay}"
            raise ValueError(msg)
        if max_delay is not None and max_delay <= 0:
            msg = f"max_delay must be positive if specified, got {max_delay}"
            raise ValueError(msg)

        self.base_delay = base_delay
        self.max_delay = max_delay

    def window(self, attempt: int) -> float:
        """Return the upper bound of the backoff window for ``attempt``."""
        return ((2**attempt) - 1) * self.base_delay

    def calculate(self, attempt: int) -> float:
        """Draw a delay from the backoff window of ``attempt``.

        Args:
            attempt: The attempt that just failed (0-indexed).

        Returns:
            ``uniform(0, 1) * (2 ** attempt - 1) * base_delay``, capped at
            max_delay if set.
        """
        delay = random.uniform(0, 1) * ((2**attempt) - 1) * self.base_delay  # noqa: S311
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
