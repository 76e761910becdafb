r"""Shared test helpers faking a service with ``httpx.MockTransport``.

The helpers build pools, executors and proxies whose ``httpx.Client``
handles are backed by a handler function instead of the network, and
record every request the fake service receives.
"""

from __future__ import annotations

__all__ = [
    "SERVICE_URI",
    "RecordingHandler",
    "create_executor",
    "create_pool",
    "create_proxy",
    "json_response",
]

import json
from typing import TYPE_CHECKING, Any

import httpx

from aresproxy.client import JsonRestProxy
from aresproxy.core.config import ProxyConfig
from aresproxy.executor import RequestExecutor
from aresproxy.pool import TransportHandlePool

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

SERVICE_URI = "https://api.example.com"


class RecordingHandler:
    """MockTransport handler replaying a sequence of outcomes.

    Each outcome is an ``httpx.Response`` to return or an exception to
    raise. The last outcome is repeated once the sequence is exhausted.

    Args:
        outcomes: The outcomes, in order.

    Attributes:
        requests: The requests received so far.
    """

    def __init__(self, outcomes: Iterable[httpx.Response | Exception]) -> None:
        self._outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        index = min(len(self.requests), len(self._outcomes)) - 1
        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        # a fresh response per exchange, since the client binds and closes it
        return httpx.Response(
            outcome.status_code, headers=outcome.headers, content=outcome.content
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)


def json_response(status_code: int, payload: Any = None, **kwargs: Any) -> httpx.Response:
    """Create a response carrying a JSON body."""
    content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    return httpx.Response(
        status_code,
        content=content,
        headers={"Content-Type": "application/json"},
        **kwargs,
    )


def create_pool(handler: Callable[[httpx.Request], httpx.Response]) -> TransportHandlePool:
    """Create a pool of clients routed to ``handler``."""
    return TransportHandlePool(
        factory=lambda: httpx.Client(transport=httpx.MockTransport(handler))
    )


def create_executor(
    handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any
) -> RequestExecutor:
    """Create an executor for ``SERVICE_URI`` routed to ``handler``."""
    return RequestExecutor(SERVICE_URI, pool=create_pool(handler), **kwargs)


def create_proxy(
    handler: Callable[[httpx.Request], httpx.Response],
    config: ProxyConfig | None = None,
    **kwargs: Any,
) -> JsonRestProxy:
    """Create a proxy for ``SERVICE_URI`` routed to ``handler``."""
    return JsonRestProxy(SERVICE_URI, config=config, executor=create_executor(handler), **kwargs)
