r"""Retry decision logic for classifying attempt outcomes.

This module provides the RetryDecider class that maps a ``Response`` to
one of three outcomes following the status-code contract: below 400 is
success, 4xx is unrecoverable, and 5xx or a captured transport failure
is recoverable.
"""

from __future__ import annotations

__all__ = ["RetryDecider", "RetryOutcome"]

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aresproxy.response import Response


class RetryOutcome(Enum):
    """Classification of one attempt.

    Attributes:
        SUCCESS: The response is returned to the caller.
        UNRECOVERABLE: The call fails immediately without further attempts.
        RECOVERABLE: The call is retried while attempts remain.
    """

    SUCCESS = "success"
    UNRECOVERABLE = "unrecoverable"
    RECOVERABLE = "recoverable"


class RetryDecider:
    """Decides whether an attempt succeeded, may be retried, or must fail.

    Example:
        ```pycon
        >>> from aresproxy.response import Response
        >>> from aresproxy.retry.decider import RetryDecider
        >>> decider = RetryDecider()
        >>> decider.classify(Response(code=201))
        (<RetryOutcome.SUCCESS: 'success'>, 'status 201')
        >>> decider.classify(Response(code=404))[0]
        <RetryOutcome.UNRECOVERABLE: 'unrecoverable'>
        >>> decider.classify(Response.failure("connect_error", "refused"))[0]
        <RetryOutcome.RECOVERABLE: 'recoverable'>

        ```
    """

    def classify(self, response: Response) -> tuple[RetryOutcome, str]:
        """Classify the response of one attempt.

        Args:
            response: The response returned by the executor in capture mode.

        Returns:
            Tuple of (outcome, reason).
        """
        if response.is_error:
            return (RetryOutcome.RECOVERABLE, f"transport error {response.error_kind}")
        if response.code < 400:
            return (RetryOutcome.SUCCESS, f"status {response.code}")
        if response.code < 500:
            return (RetryOutcome.UNRECOVERABLE, f"status {response.code}")
        return (RetryOutcome.RECOVERABLE, f"status {response.code}")
