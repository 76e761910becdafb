r"""Synchronous retry executor.

The executor repeats an attempt function until the response is a
success, a client error, or the attempt budget is spent. Attempts are
strictly sequential and the backoff sleep blocks the calling thread.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
import threading
import time
from typing import TYPE_CHECKING

from aresproxy.exceptions import RetriesExhaustedError, UnrecoverableHttpError
from aresproxy.retry.config import CallbackConfig
from aresproxy.retry.decider import RetryDecider, RetryOutcome
from aresproxy.retry.manager import CallbackManager
from aresproxy.retry.strategy import RetryStrategy
from aresproxy.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable

    from aresproxy.response import Response
    from aresproxy.retry.config import RetryConfig

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Run an attempt function with retry, backoff and callbacks.

    Args:
        config: Retry configuration.
        callbacks: Callback configuration. Defaults to no callbacks.
        decider: Outcome classifier. Defaults to ``RetryDecider()``.

    Attributes:
        config: Retry configuration.
        strategy: Strategy computing the backoff sleeps.
        decider: Outcome classifier.
        callbacks: Callback manager.

    Example:
        ```pycon
        >>> from aresproxy.response import Response
        >>> from aresproxy.retry import RetryConfig, RetryExecutor
        >>> executor = RetryExecutor(RetryConfig(max_retries=3))
        >>> executor.execute(
        ...     lambda: Response(code=200), url="https://api.example.com/items", method="POST"
        ... ).code
        200

        ```
    """

    def __init__(
        self,
        config: RetryConfig,
        callbacks: CallbackConfig | None = None,
        decider: RetryDecider | None = None,
    ) -> None:
        self.config = config
        self.strategy = RetryStrategy(config.backoff_strategy)
        self.decider = decider or RetryDecider()
        self.callbacks = CallbackManager(callbacks or CallbackConfig())

    def execute(
        self,
        request_func: Callable[[], Response],
        *,
        url: str,
        method: str,
        request_body: bytes = b"",
    ) -> Response:
        """Perform attempts until success, a client error, or exhaustion.

        Args:
            request_func: Performs one attempt in capture mode and returns its
                ``Response``. A ``RequestTimeoutError`` it raises propagates
                unchanged.
            url: The URL being requested, for logs, callbacks and errors.
            method: The HTTP method, for logs, callbacks and errors.
            request_body: The request body, logged on the first failure.

        Returns:
            The first response with a status code below 400.

        Raises:
            UnrecoverableHttpError: If an attempt returns a 4xx status.
            RetriesExhaustedError: If every attempt failed recoverably.
        """
        max_retries = self.config.max_retries
        start_time = time.time()
        response: Response | None = None

        for attempt in range(max_retries):
            self.callbacks.on_request(url, method, attempt, max_retries)
            response = request_func()
            outcome, reason = self.decider.classify(response)

            if outcome is RetryOutcome.SUCCESS:
                if attempt > 0:
                    logger.debug(f"{method} request to {url} succeeded on attempt {attempt + 1}")
                self.callbacks.on_success(url, method, attempt, max_retries, response, start_time)
                return response

            if attempt == 0:
                self._log_first_failure(url, method, request_body, response)

            if outcome is RetryOutcome.UNRECOVERABLE:
                error = UnrecoverableHttpError(
                    method=method,
                    url=url,
                    message=f"{method} request to {url} failed with unrecoverable {reason}",
                    status_code=response.code,
                    response=response,
                )
                self.callbacks.on_failure(
                    url, method, attempt, max_retries, error, response.code, start_time
                )
                raise error

            if attempt + 1 < max_retries:
                sleep_time = self.strategy.calculate_delay(attempt)
                self.callbacks.on_retry(
                    url,
                    method,
                    attempt,
                    max_retries,
                    sleep_time,
                    response.error_kind,
                    None if response.is_error else response.code,
                )
                time.sleep(sleep_time)
                logger.debug(
                    f"[{threading.get_ident()}] retrying {method} {url} after {reason} "
                    f"({attempt + 1}/{max_retries})"
                )

        status_code = None if response is None or response.is_error else response.code
        error = RetriesExhaustedError(
            method=method,
            url=url,
            message=f"{method} request to {url} failed after {max_retries} attempts",
            attempts=max_retries,
            status_code=status_code,
            response=response,
        )
        self.callbacks.on_failure(
            url, method, max_retries - 1, max_retries, error, status_code, start_time
        )
        raise error

    def _log_first_failure(
        self, url: str, method: str, request_body: bytes, response: Response
    ) -> None:
        if response.is_error:
            summary = f"{response.error_kind}: {response.error_message}"
        else:
            summary = f"response code {response.code}"
        log_structured(
            logger,
            logging.WARNING,
            f"{method} {url} returned {summary} (attempt 0): "
            f"request body ({len(request_body)}) = {request_body!r}, "
            f"response body ({len(response.body)}) = {response.body!r}",
            method=method,
            url=url,
            status_code=response.code,
            error_kind=response.error_kind,
            request_bytes=len(request_body),
            response_bytes=len(response.body),
        )
