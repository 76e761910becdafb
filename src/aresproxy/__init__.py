r"""aresproxy - Resilient JSON REST client built on httpx.

This package provides a client for JSON REST services that retries
transient server failures with jittered exponential backoff, keeps a
session token across calls, and maps request and response bodies to
typed records.

Key Features:
    - Thread-safe LIFO pool of reusable ``httpx.Client`` handles
    - Request executor with header, body and progress channels
    - Capture or exception mode for transport failures (timeouts always raise)
    - Retried PUT/POST: 4xx fails fast, 5xx and transport errors are retried
    - Cookie-based session token obtained from ``/authenticate``
    - Typed JSON records based on pydantic
    - Lifecycle callbacks and structured logging for observability

Example:
    ```pycon
    >>> from aresproxy import JsonAuthenticationRequest, JsonRestProxy, ProxyConfig
    >>> with JsonRestProxy(
    ...     "https://api.example.com", config=ProxyConfig(max_retries=5)
    ... ) as proxy:  # doctest: +SKIP
    ...     proxy.authenticate(JsonAuthenticationRequest(email="a@b.c", password="pw"))
    ...     response = proxy.put("/items/1", '{"name": "item"}')
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "AuthenticationSession",
    "Content",
    "HttpRequestError",
    "JsonAuthenticationRequest",
    "JsonAuthenticationResponse",
    "JsonRecord",
    "JsonRestProxy",
    "ProxyConfig",
    "RequestExecutor",
    "RequestTimeoutError",
    "Response",
    "RestParams",
    "RetriesExhaustedError",
    "SerializationError",
    "TransportError",
    "TransportHandlePool",
    "UnexpectedStatusError",
    "UnrecoverableHttpError",
    "__version__",
    "decode_record",
    "encode_record",
]

from importlib.metadata import PackageNotFoundError, version

from aresproxy.client import JsonRestProxy
from aresproxy.core.config import ProxyConfig
from aresproxy.exceptions import (
    HttpRequestError,
    RequestTimeoutError,
    RetriesExhaustedError,
    SerializationError,
    TransportError,
    UnexpectedStatusError,
    UnrecoverableHttpError,
)
from aresproxy.executor import RequestExecutor
from aresproxy.pool import TransportHandlePool
from aresproxy.records import (
    JsonAuthenticationRequest,
    JsonAuthenticationResponse,
    JsonRecord,
    decode_record,
    encode_record,
)
from aresproxy.request import Content, RestParams
from aresproxy.response import Response
from aresproxy.session import AuthenticationSession

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
