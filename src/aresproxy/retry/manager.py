r"""Callback manager for orchestrating retry lifecycle events.

This module provides the CallbackManager class that handles invocation
of user-defined callbacks at various points in the retry lifecycle.
"""

from __future__ import annotations

__all__ = ["CallbackManager"]

import time
from typing import TYPE_CHECKING

from aresproxy.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo

if TYPE_CHECKING:
    from aresproxy.response import Response
    from aresproxy.retry.config import CallbackConfig


class CallbackManager:
    """Manages callback invocations during the retry lifecycle.

    Attempt numbers are received 0-indexed and handed to the callbacks
    1-indexed.

    Attributes:
        callbacks: Configuration containing callback functions for lifecycle events.
    """

    def __init__(self, callbacks: CallbackConfig) -> None:
        self.callbacks = callbacks

    def on_request(self, url: str, method: str, attempt: int, max_retries: int) -> None:
        """Invoke on_request callback before an attempt."""
        if self.callbacks.on_request is not None:
            self.callbacks.on_request(
                RequestInfo(url=url, method=method, attempt=attempt + 1, max_retries=max_retries)
            )

    def on_retry(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retries: int,
        sleep_time: float,
        error_kind: str | None,
        status_code: int | None,
    ) -> None:
        """Invoke on_retry callback before sleeping.

        Args:
            url: The URL being requested.
            method: The HTTP method.
            attempt: The attempt that just failed (0-indexed). The callback
                receives the number of the next attempt.
            max_retries: Maximum number of attempts.
            sleep_time: Sleep time before retry.
            error_kind: Captured transport error kind (if any).
            status_code: Status code that triggered retry (if any).
        """
        if self.callbacks.on_retry is not None:
            self.callbacks.on_retry(
                RetryInfo(
                    url=url,
                    method=method,
                    attempt=attempt + 2,
                    max_retries=max_retries,
                    wait_time=sleep_time,
                    error_kind=error_kind,
                    status_code=status_code,
                )
            )

    def on_success(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retries: int,
        response: Response,
        start_time: float,
    ) -> None:
        """Invoke on_success callback."""
        if self.callbacks.on_success is not None:
            self.callbacks.on_success(
                ResponseInfo(
                    url=url,
                    method=method,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    response=response,
                    total_time=time.time() - start_time,
                )
            )

    def on_failure(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retries: int,
        error: Exception,
        status_code: int | None,
        start_time: float,
    ) -> None:
        """Invoke on_failure callback."""
        if self.callbacks.on_failure is not None:
            self.callbacks.on_failure(
                FailureInfo(
                    url=url,
                    method=method,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    error=error,
                    status_code=status_code,
                    total_time=time.time() - start_time,
                )
            )
