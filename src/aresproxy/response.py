r"""Read-only HTTP response value returned by the request executor."""

from __future__ import annotations

__all__ = ["Response"]

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Response:
    r"""Outcome of one HTTP exchange.

    A response holds either the status code, body and headers of a
    completed exchange, or the kind and message of a transport failure
    that was captured instead of raised. The two groups of fields are
    mutually exclusive.

    Attributes:
        code: The numeric HTTP status code (0 for a transport failure).
        body: The raw response body.
        headers: The response headers, keyed by lower-cased name.
        error_kind: The transport error kind, when the exchange failed.
        error_message: The transport error message, when the exchange failed.

    Raises:
        ValueError: If both success and error fields are populated.

    Example:
        ```pycon
        >>> from aresproxy.response import Response
        >>> response = Response(code=200, body=b"{}", headers={"content-type": "application/json"})
        >>> response.header("Content-Type")
        'application/json'
        >>> Response.failure("connect_error", "connection refused").is_error
        True

        ```
    """

    code: int = 0
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)
    error_kind: str | None = None
    error_message: str | None = None

    def __post_init__(self) -> None:
        has_error = self.error_kind is not None or self.error_message is not None
        if has_error and (self.code or self.body or self.headers):
            msg = "a Response cannot carry both a transport error and response data"
            raise ValueError(msg)

    @classmethod
    def failure(cls, kind: str, message: str) -> Response:
        """Create a response describing a captured transport failure."""
        return cls(error_kind=kind, error_message=message)

    @property
    def is_error(self) -> bool:
        """``True`` when the exchange failed at the transport level."""
        return self.error_kind is not None

    @property
    def text(self) -> str:
        """The body decoded as UTF-8."""
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the value of a response header, ignoring case."""
        return self.headers.get(name.lower(), default)
