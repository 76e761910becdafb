r"""HTTP request executor over pooled ``httpx`` clients.

``RequestExecutor`` performs one HTTP exchange at a time per calling
thread. Each exchange leases a client from a ``TransportHandlePool``,
streams the response through a header channel, a body channel and a
progress channel, and returns a ``Response`` value.

Transport failures are either raised (exception mode) or captured in
the returned ``Response`` (capture mode). Timeouts are always raised.
"""

from __future__ import annotations

__all__ = ["RequestExecutor"]

import logging
from typing import TYPE_CHECKING

import httpx

from aresproxy.callbacks import ProgressInfo
from aresproxy.core.validation import validate_service_uri, validate_timeout_ms
from aresproxy.exceptions import RequestTimeoutError, TransportError
from aresproxy.headers import HeaderAccumulator
from aresproxy.pool import TransportHandlePool
from aresproxy.request import Content, RestParams
from aresproxy.response import Response
from aresproxy.utils.errors import error_kind

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType
    from typing import Self

    from aresproxy.callbacks import BodySink, ProgressCallback

logger: logging.Logger = logging.getLogger(__name__)


class RequestExecutor:
    r"""Drive HTTP exchanges against one base endpoint.

    Args:
        service_uri: Scheme and host every resource path is appended to,
            for example ``"https://api.example.com"``.
        pool: Optional pool of transport handles. If ``None``, a pool of
            ``httpx.Client`` instances is created and owned by the executor.
        verify: Whether the default clients verify TLS certificates.
        debug: Log received headers, body chunks and progress at DEBUG.
        cookies: Ordered ``name=value`` cookies sent with every exchange,
            after any cookie supplied in the request headers.

    Example:
        ```pycon
        >>> from aresproxy.executor import RequestExecutor
        >>> with RequestExecutor("https://api.example.com") as executor:  # doctest: +SKIP
        ...     response = executor.get("/items", query_params=[("page", "2")])
        ...

        ```
    """

    def __init__(
        self,
        service_uri: str,
        *,
        pool: TransportHandlePool | None = None,
        verify: bool = True,
        debug: bool = False,
        cookies: Iterable[str] = (),
    ) -> None:
        validate_service_uri(service_uri)
        if not verify:
            logger.warning(f"TLS certificates will not be validated for {service_uri}")
        self.service_uri = service_uri
        self.debug = debug
        self.cookies: list[str] = list(cookies)
        self._pool = pool or TransportHandlePool(factory=lambda: httpx.Client(verify=verify))

    @property
    def pool(self) -> TransportHandlePool:
        """The pool of transport handles used by this executor."""
        return self._pool

    def close(self) -> None:
        """Close the idle transport handles."""
        self._pool.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def perform(
        self,
        verb: str,
        resource: str,
        content: Content | None = None,
        query_params: Iterable[tuple[str, str]] = (),
        headers: Iterable[tuple[str, str]] = (),
        timeout_ms: float | None = None,
        exceptions: bool = True,
        on_body_chunk: BodySink | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> Response:
        r"""Perform one HTTP exchange.

        Args:
            verb: The HTTP method.
            resource: The resource path appended to ``service_uri``.
            content: Optional request body and media type. Without it an
                explicit empty body is sent.
            query_params: Ordered query parameters.
            headers: Ordered request headers.
            timeout_ms: Timeout in milliseconds, ``None`` for no timeout.
            exceptions: Raise transport failures when ``True``; capture them
                in the returned ``Response`` when ``False``.
            on_body_chunk: Optional sink offered every body chunk before it
                is buffered. Returning ``False`` aborts the transfer.
            on_progress: Optional observer called after every body chunk.

        Returns:
            The response, or in capture mode a ``Response`` describing the
            transport failure.

        Raises:
            RequestTimeoutError: If the exchange times out, in both modes.
            TransportError: On any other transport failure, in exception mode.
            ValueError: If timeout_ms is not positive.
        """
        validate_timeout_ms(timeout_ms)
        url = self.service_uri + resource + RestParams(query_params).uri_escaped()
        header_list = self._merge_cookies(headers)
        if content is not None:
            header_list.append(("Content-Length", str(len(content))))
            header_list.append(("Content-Type", content.content_type))
            body = content.data
        else:
            body = b""
        timeout = None if timeout_ms is None else timeout_ms / 1000

        header_channel = HeaderAccumulator()
        received = bytearray()
        try:
            with self._pool.lease() as client:
                request = client.build_request(
                    verb, url, headers=header_list, content=body, timeout=timeout
                )
                status_code = self._exchange(
                    client, request, header_channel, received, on_body_chunk, on_progress
                )
        except httpx.TimeoutException as exc:
            self._log_failure(verb, url, header_channel, received, exc)
            raise RequestTimeoutError(
                method=verb,
                url=url,
                message=f"{verb} request to {url} timed out: {exc}",
                cause=exc,
            ) from exc
        except httpx.RequestError as exc:
            self._log_failure(verb, url, header_channel, received, exc)
            error = TransportError(
                method=verb,
                url=url,
                kind=error_kind(exc),
                message=f"{verb} request to {url} failed: {exc}",
                cause=exc,
            )
            if exceptions:
                raise error from exc
            return Response.failure(error.kind, error.message)
        except TransportError as exc:
            self._log_failure(verb, url, header_channel, received, exc)
            if exceptions:
                raise
            return Response.failure(exc.kind, exc.message)

        return Response(code=status_code, body=bytes(received), headers=header_channel.headers())

    def _merge_cookies(self, headers: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
        r"""Fold the ``Cookie`` headers and the executor cookies into one
        ``Cookie`` header placed after the other headers."""
        header_list = []
        cookies = []
        for name, value in headers:
            if name.lower() == "cookie":
                cookies.append(value)
            else:
                header_list.append((name, value))
        cookies.extend(self.cookies)
        if cookies:
            header_list.append(("Cookie", "; ".join(cookies)))
        return header_list

    def _exchange(
        self,
        client: httpx.Client,
        request: httpx.Request,
        header_channel: HeaderAccumulator,
        received: bytearray,
        on_body_chunk: BodySink | None,
        on_progress: ProgressCallback | None,
    ) -> int:
        url = str(request.url)
        response = client.send(request, stream=True)
        try:
            header_channel.on_header(
                f"{response.http_version} {response.status_code} {response.reason_phrase}\r\n"
            )
            for name, value in response.headers.raw:
                line = f"{name.decode('latin-1')}: {value.decode('latin-1')}\r\n"
                if self.debug:
                    logger.debug(f"got header {line.rstrip()}")
                header_channel.on_header(line)
            header_channel.on_header("\r\n")

            length = response.headers.get("content-length")
            total = int(length) if length is not None and length.isdigit() else None
            for chunk in response.iter_bytes():
                if self.debug:
                    logger.debug(f"got data {chunk!r}")
                if on_body_chunk is not None and not on_body_chunk(chunk):
                    raise TransportError(
                        method=request.method,
                        url=url,
                        kind="write_error",
                        message=f"{request.method} request to {url} aborted: "
                        "body chunk rejected by the caller",
                    )
                received.extend(chunk)
                progress = ProgressInfo(url=url, downloaded=len(received), total=total)
                if on_progress is not None:
                    on_progress(progress)
                if self.debug:
                    logger.debug(f"progress {progress.downloaded}/{progress.total}")
            return response.status_code
        finally:
            response.close()

    def _log_failure(
        self,
        verb: str,
        url: str,
        header_channel: HeaderAccumulator,
        received: bytearray,
        exc: Exception,
    ) -> None:
        logger.debug(
            f"{verb} request to {url} failed with {type(exc).__name__}: {exc}; "
            f"headers are {header_channel.block!r}; body contains {len(received)} bytes"
        )

    def get(
        self,
        resource: str,
        query_params: Iterable[tuple[str, str]] = (),
        headers: Iterable[tuple[str, str]] = (),
        timeout_ms: float | None = None,
        exceptions: bool = True,
    ) -> Response:
        """Perform a GET request (see ``perform``)."""
        return self.perform(
            "GET",
            resource,
            query_params=query_params,
            headers=headers,
            timeout_ms=timeout_ms,
            exceptions=exceptions,
        )

    def post(
        self,
        resource: str,
        content: Content | None = None,
        query_params: Iterable[tuple[str, str]] = (),
        headers: Iterable[tuple[str, str]] = (),
        timeout_ms: float | None = None,
        exceptions: bool = True,
    ) -> Response:
        """Perform a POST request (see ``perform``)."""
        return self.perform(
            "POST",
            resource,
            content=content,
            query_params=query_params,
            headers=headers,
            timeout_ms=timeout_ms,
            exceptions=exceptions,
        )

    def put(
        self,
        resource: str,
        content: Content | None = None,
        query_params: Iterable[tuple[str, str]] = (),
        headers: Iterable[tuple[str, str]] = (),
        timeout_ms: float | None = None,
        exceptions: bool = True,
    ) -> Response:
        """Perform a PUT request (see ``perform``)."""
        return self.perform(
            "PUT",
            resource,
            content=content,
            query_params=query_params,
            headers=headers,
            timeout_ms=timeout_ms,
            exceptions=exceptions,
        )

    def delete(
        self,
        resource: str,
        query_params: Iterable[tuple[str, str]] = (),
        headers: Iterable[tuple[str, str]] = (),
        timeout_ms: float | None = None,
        exceptions: bool = True,
    ) -> Response:
        """Perform a DELETE request (see ``perform``)."""
        return self.perform(
            "DELETE",
            resource,
            query_params=query_params,
            headers=headers,
            timeout_ms=timeout_ms,
            exceptions=exceptions,
        )
