r"""Retrying JSON client for one REST service.

This module provides ``JsonRestProxy``, which sends JSON writes with
retry and jittered exponential backoff, sends reads once, and carries
the session token obtained from ``/authenticate`` across calls.
"""

from __future__ import annotations

__all__ = ["JsonRestProxy"]

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from aresproxy.core.config import JSON_CONTENT_TYPE, ProxyConfig
from aresproxy.exceptions import HttpRequestError, SerializationError, UnexpectedStatusError
from aresproxy.executor import RequestExecutor
from aresproxy.records import JsonAuthenticationResponse, decode_record, encode_record
from aresproxy.request import Content
from aresproxy.retry import RetryExecutor
from aresproxy.session import AuthenticationSession

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType
    from typing import Self

    from aresproxy.records import JsonAuthenticationRequest
    from aresproxy.response import Response

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class JsonRestProxy:
    r"""Client for a JSON REST service with retried writes.

    PUT and POST requests are attempted up to ``config.max_retries`` times.
    A status code below 400 is a success, a 4xx status fails immediately,
    and a 5xx status or a transport failure is retried after a jittered
    exponential backoff. Timeouts are never retried. GET requests are sent
    once.

    Once ``authenticate`` succeeds, every request carries the session
    token in a ``Cookie`` header.

    Args:
        service_uri: Scheme and host of the service, for example
            ``"https://api.example.com"``.
        config: Optional retry configuration. If ``None``, a default
            ``ProxyConfig`` is used.
        executor: Optional request executor. If ``None``, one is created
            for ``service_uri`` and closed with the proxy.
        session: Optional session holding the token. If ``None``, an
            unauthenticated session is created.
        verify: Whether the default executor verifies TLS certificates.
        debug: Whether the default executor logs transfer details.
        cookies: Ordered ``name=value`` cookies the default executor sends
            with every request, after the session cookie.

    Example:
        ```pycon
        >>> from aresproxy import JsonAuthenticationRequest, JsonRestProxy
        >>> with JsonRestProxy("https://api.example.com") as proxy:  # doctest: +SKIP
        ...     if proxy.authenticate(JsonAuthenticationRequest(email="a@b.c", password="pw")):
        ...         response = proxy.post("/items", '{"name": "item"}')
        ...

        ```
    """

    def __init__(
        self,
        service_uri: str,
        *,
        config: ProxyConfig | None = None,
        executor: RequestExecutor | None = None,
        session: AuthenticationSession | None = None,
        verify: bool = True,
        debug: bool = False,
        cookies: Iterable[str] = (),
    ) -> None:
        self._config: ProxyConfig = config or ProxyConfig()
        self._owns_executor = executor is None
        self._executor: RequestExecutor = executor or RequestExecutor(
            service_uri, verify=verify, debug=debug, cookies=cookies
        )
        self._session: AuthenticationSession = session or AuthenticationSession()
        self._retry_executor = RetryExecutor(
            self._config.to_retry_config(), self._config.to_callback_config()
        )

    @property
    def config(self) -> ProxyConfig:
        """The retry configuration."""
        return self._config

    @property
    def executor(self) -> RequestExecutor:
        """The request executor."""
        return self._executor

    @property
    def session(self) -> AuthenticationSession:
        """The session holding the authentication token."""
        return self._session

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the request executor if it was created by this proxy."""
        if self._owns_executor:
            self._executor.close()

    def put_or_post(self, resource: str, body: bytes | str, *, is_post: bool) -> Response:
        r"""Send a JSON body with retry.

        Args:
            resource: The resource path, for example ``"/items"``.
            body: The JSON body.
            is_post: Send a POST if ``True``, otherwise a PUT.

        Returns:
            The first response with a status code below 400.

        Raises:
            UnrecoverableHttpError: If the service answers with a 4xx status.
            RetriesExhaustedError: If every attempt failed with a 5xx status
                or a transport error.
            RequestTimeoutError: If an attempt times out.
        """
        verb = "POST" if is_post else "PUT"
        content = Content(body, content_type=JSON_CONTENT_TYPE)
        headers = self._session.cookie_headers()
        url = self._executor.service_uri + resource

        def attempt() -> Response:
            return self._executor.perform(
                verb,
                resource,
                content=content,
                headers=headers,
                timeout_ms=self._config.timeout_ms,
                exceptions=False,
            )

        return self._retry_executor.execute(
            attempt, url=url, method=verb, request_body=content.data
        )

    def post(self, resource: str, body: bytes | str) -> Response:
        """Send a JSON body with POST and retry (see ``put_or_post``)."""
        return self.put_or_post(resource, body, is_post=True)

    def put(self, resource: str, body: bytes | str) -> Response:
        """Send a JSON body with PUT and retry (see ``put_or_post``)."""
        return self.put_or_post(resource, body, is_post=False)

    def get(self, resource: str, query_params: Iterable[tuple[str, str]] = ()) -> Response:
        r"""Send one GET request without retry.

        Args:
            resource: The resource path.
            query_params: Ordered query parameters.

        Returns:
            The response, whatever its status code.

        Raises:
            TransportError: On a transport failure.
            RequestTimeoutError: If the request times out.
        """
        return self._executor.perform(
            "GET",
            resource,
            query_params=query_params,
            headers=self._session.cookie_headers(),
            timeout_ms=self._config.timeout_ms,
        )

    def authenticate(self, credentials: JsonAuthenticationRequest) -> bool:
        r"""Obtain a session token from ``/authenticate``.

        Args:
            credentials: The email and password to post.

        Returns:
            ``True`` if a token was obtained and stored in the session,
            ``False`` otherwise. The session is left unchanged on failure.
        """
        try:
            answer = self.post_typed("/authenticate", credentials, JsonAuthenticationResponse, 200)
        except (HttpRequestError, SerializationError) as exc:
            logger.debug(f"authentication failed: {exc}")
            return False
        self._session.update(answer.token)
        return True

    def post_typed(
        self, resource: str, record: Any, response_type: type[T], expected_code: int = 200
    ) -> T:
        r"""POST a record with retry and decode the answer.

        Args:
            resource: The resource path.
            record: The record to encode as the request body.
            response_type: The type to decode the response body into.
            expected_code: The status code the answer must carry.

        Returns:
            The decoded answer.

        Raises:
            SerializationError: If the record cannot be encoded or the
                answer does not match ``response_type``.
            UnexpectedStatusError: If the answer carries another status code.
            HttpRequestError: If the request itself fails.

        Example:
            ```pycon
            >>> from aresproxy import JsonRestProxy
            >>> from aresproxy.records import JsonAuthenticationRequest, JsonAuthenticationResponse
            >>> with JsonRestProxy("https://api.example.com") as proxy:  # doctest: +SKIP
            ...     answer = proxy.post_typed(
            ...         "/authenticate",
            ...         JsonAuthenticationRequest(email="a@b.c", password="pw"),
            ...         JsonAuthenticationResponse,
            ...     )
            ...

            ```
        """
        return self._send_typed(resource, record, response_type, expected_code, is_post=True)

    def put_typed(
        self, resource: str, record: Any, response_type: type[T], expected_code: int = 200
    ) -> T:
        """PUT a record with retry and decode the answer (see ``post_typed``)."""
        return self._send_typed(resource, record, response_type, expected_code, is_post=False)

    def get_typed(
        self,
        resource: str,
        response_type: type[T],
        expected_code: int = 200,
        query_params: Iterable[tuple[str, str]] = (),
    ) -> T:
        r"""Send one GET request and decode the answer.

        Args:
            resource: The resource path.
            response_type: The type to decode the response body into.
            expected_code: The status code the answer must carry.
            query_params: Ordered query parameters.

        Returns:
            The decoded answer.

        Raises:
            SerializationError: If the answer does not match ``response_type``.
            UnexpectedStatusError: If the answer carries another status code.
            TransportError: On a transport failure.
        """
        response = self.get(resource, query_params=query_params)
        return self._decode(response, "GET", resource, response_type, expected_code)

    def _send_typed(
        self,
        resource: str,
        record: Any,
        response_type: type[T],
        expected_code: int,
        *,
        is_post: bool,
    ) -> T:
        body = encode_record(record)
        response = self.put_or_post(resource, body, is_post=is_post)
        return self._decode(
            response, "POST" if is_post else "PUT", resource, response_type, expected_code
        )

    def _decode(
        self,
        response: Response,
        method: str,
        resource: str,
        response_type: type[T],
        expected_code: int,
    ) -> T:
        if response.code != expected_code:
            url = self._executor.service_uri + resource
            raise UnexpectedStatusError(
                method=method,
                url=url,
                message=f"{method} request to {url} returned status {response.code}, "
                f"expected {expected_code}",
                expected_code=expected_code,
                status_code=response.code,
                response=response,
            )
        return decode_record(response.body, response_type)
