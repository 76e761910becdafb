r"""Exception types raised by the REST proxy.

All HTTP failures derive from ``HttpRequestError`` so that callers can
catch a single type, while the subclasses let the retry logic and the
callers tell transport failures, client errors, exhausted retries and
contract violations apart.
"""

from __future__ import annotations

__all__ = [
    "HttpRequestError",
    "RequestTimeoutError",
    "RetriesExhaustedError",
    "SerializationError",
    "TransportError",
    "UnexpectedStatusError",
    "UnrecoverableHttpError",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aresproxy.response import Response


class HttpRequestError(RuntimeError):
    r"""Base exception for failed HTTP requests.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: A descriptive error message.
        status_code: The HTTP status code, if a response was received.
        response: The ``Response`` that caused the failure, if any.
        cause: The underlying exception, if any.

    Example:
        ```pycon
        >>> from aresproxy.exceptions import HttpRequestError
        >>> error = HttpRequestError(
        ...     method="GET", url="https://api.example.com", message="boom", status_code=500
        ... )
        >>> error.status_code
        500

        ```
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        status_code: int | None = None,
        response: Response | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.response = response
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(method={self.method!r}, url={self.url!r}, "
            f"message={self.message!r}, status_code={self.status_code!r})"
        )


class TransportError(HttpRequestError):
    r"""Network or connection level failure reported by the transport.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        kind: A short machine-readable error kind, for example
            ``"connect_error"`` or ``"write_error"``.
        message: A descriptive error message.
        cause: The underlying transport exception, if any.
    """

    def __init__(
        self,
        method: str,
        url: str,
        kind: str,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(method=method, url=url, message=message, cause=cause)
        self.kind = kind


class RequestTimeoutError(TransportError):
    r"""The request did not complete before its deadline.

    A timeout is always raised, even when the caller asked for transport
    failures to be captured in the returned ``Response``.
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(method=method, url=url, kind="timeout", message=message, cause=cause)


class UnrecoverableHttpError(HttpRequestError):
    r"""The server answered with a client error status (4xx).

    No retry is attempted for these responses.
    """


class RetriesExhaustedError(HttpRequestError):
    r"""A recoverable failure persisted through every allowed attempt.

    Args:
        method: The HTTP method of the failed request.
        url: The URL of the failed request.
        message: A descriptive error message.
        attempts: The number of attempts that were made.
        status_code: The status code of the last attempt, if any.
        response: The ``Response`` of the last attempt.
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        attempts: int,
        status_code: int | None = None,
        response: Response | None = None,
    ) -> None:
        super().__init__(
            method=method, url=url, message=message, status_code=status_code, response=response
        )
        self.attempts = attempts


class UnexpectedStatusError(HttpRequestError):
    r"""A typed call received a status code other than the expected one.

    Args:
        method: The HTTP method of the request.
        url: The URL of the request.
        message: A descriptive error message.
        expected_code: The status code the call declared as expected.
        status_code: The status code that was actually received.
        response: The received ``Response``.
    """

    def __init__(
        self,
        method: str,
        url: str,
        message: str,
        expected_code: int,
        status_code: int | None = None,
        response: Response | None = None,
    ) -> None:
        super().__init__(
            method=method, url=url, message=message, status_code=status_code, response=response
        )
        self.expected_code = expected_code


class SerializationError(ValueError):
    r"""A record could not be encoded, or a body did not match its type.

    Args:
        message: A descriptive error message.
        type_name: The name of the record type involved.
        cause: The underlying validation or serialization exception.

    Example:
        ```pycon
        >>> from aresproxy.exceptions import SerializationError
        >>> SerializationError("bad payload", type_name="Token").type_name
        'Token'

        ```
    """

    def __init__(
        self,
        message: str,
        type_name: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.type_name = type_name
        self.cause = cause
