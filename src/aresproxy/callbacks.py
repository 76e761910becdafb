r"""Callback types and data structures for observability.

Two families of hooks are available:

- Streaming hooks passed to ``RequestExecutor.perform``: a body sink
  that sees every received chunk and may abort the transfer, and a
  progress hook that only observes.
- Lifecycle hooks configured on ``ProxyConfig`` for retried writes:
  ``on_request`` before each attempt, ``on_retry`` before each backoff
  sleep, ``on_success`` when an attempt succeeds and ``on_failure`` when
  the call gives up.

Example:
    ```pycon
    >>> from aresproxy import JsonRestProxy
    >>> from aresproxy.callbacks import RetryInfo
    >>> from aresproxy.core import ProxyConfig
    >>> def log_retry(retry_info: RetryInfo):
    ...     print(f"Retry {retry_info.attempt}/{retry_info.max_retries}")
    ...
    >>> proxy = JsonRestProxy(
    ...     "https://api.example.com", config=ProxyConfig(on_retry=log_retry)
    ... )  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "BodySink",
    "FailureInfo",
    "ProgressCallback",
    "ProgressInfo",
    "RequestInfo",
    "ResponseInfo",
    "RetryInfo",
]

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aresproxy.response import Response


@dataclass
class ProgressInfo:
    """Information passed to the progress hook after each body chunk.

    Attributes:
        url: The URL being downloaded.
        downloaded: Number of body bytes received so far.
        total: The announced body size, or ``None`` when unknown.
    """

    url: str
    downloaded: int
    total: int | None


@dataclass
class RequestInfo:
    """Information passed to on_request callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "PUT", "POST").
        attempt: The current attempt number (1-indexed). First attempt is 1.
        max_retries: Maximum number of attempts configured.
    """

    url: str
    method: str
    attempt: int
    max_retries: int


@dataclass
class RetryInfo:
    """Information passed to on_retry callback.

    Attributes:
        url: The URL being requested.
        method: The HTTP method (e.g., "PUT", "POST").
        attempt: The attempt about to be made (1-indexed). First retry is attempt 2.
        max_retries: Maximum number of attempts configured.
        wait_time: The sleep time in seconds before this retry.
        error_kind: The captured transport error kind (if any).
        status_code: The HTTP status code that triggered the retry (if any).
    """

    url: str
    method: str
    attempt: int
    max_retries: int
    wait_time: float
    error_kind: str | None
    status_code: int | None


@dataclass
class ResponseInfo:
    """Information passed to on_success callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "PUT", "POST").
        attempt: The attempt number that succeeded (1-indexed).
        max_retries: Maximum number of attempts configured.
        response: The successful response.
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    url: str
    method: str
    attempt: int
    max_retries: int
    response: Response
    total_time: float


@dataclass
class FailureInfo:
    """Information passed to on_failure callback.

    Attributes:
        url: The URL that was requested.
        method: The HTTP method (e.g., "PUT", "POST").
        attempt: The final attempt number (1-indexed).
        max_retries: Maximum number of attempts configured.
        error: The exception about to be raised.
        status_code: The final HTTP status code (if any).
        total_time: Total time spent on all attempts including backoff (seconds).
    """

    url: str
    method: str
    attempt: int
    max_retries: int
    error: Exception
    status_code: int | None
    total_time: float


# Returns False to abort the transfer.
BodySink = Callable[[bytes], bool]
ProgressCallback = Callable[[ProgressInfo], None]
