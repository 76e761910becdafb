r"""Unit tests for the exception hierarchy."""

from __future__ import annotations

import httpx
import pytest

from aresproxy.exceptions import (
    HttpRequestError,
    RequestTimeoutError,
    RetriesExhaustedError,
    SerializationError,
    TransportError,
    UnexpectedStatusError,
    UnrecoverableHttpError,
)
from aresproxy.response import Response

URL = "https://api.example.com/items"


def test_http_request_error_fields() -> None:
    """Test the fields of the base error."""
    response = Response(code=500)
    cause = ValueError("inner")
    error = HttpRequestError(
        method="POST", url=URL, message="boom", status_code=500, response=response, cause=cause
    )
    assert isinstance(error, RuntimeError)
    assert str(error) == "boom"
    assert error.method == "POST"
    assert error.url == URL
    assert error.status_code == 500
    assert error.response is response
    assert error.cause is cause


def test_http_request_error_defaults() -> None:
    """Test the optional fields of the base error."""
    error = HttpRequestError(method="GET", url=URL, message="boom")
    assert error.status_code is None
    assert error.response is None
    assert error.cause is None


def test_http_request_error_repr() -> None:
    """Test the representation of an error."""
    error = UnrecoverableHttpError(method="PUT", url=URL, message="nope", status_code=404)
    assert repr(error) == (
        "UnrecoverableHttpError(method='PUT', url='https://api.example.com/items', "
        "message='nope', status_code=404)"
    )


def test_transport_error() -> None:
    """Test that a transport error carries its kind."""
    cause = httpx.ConnectError("refused")
    error = TransportError(method="GET", url=URL, kind="connect_error", message="x", cause=cause)
    assert isinstance(error, HttpRequestError)
    assert error.kind == "connect_error"
    assert error.status_code is None
    assert error.cause is cause


def test_request_timeout_error() -> None:
    """Test that a timeout is a transport error of kind timeout."""
    error = RequestTimeoutError(method="GET", url=URL, message="timed out")
    assert isinstance(error, TransportError)
    assert error.kind == "timeout"


def test_retries_exhausted_error() -> None:
    """Test the attempt count of an exhausted call."""
    error = RetriesExhaustedError(
        method="POST", url=URL, message="gave up", attempts=10, status_code=503
    )
    assert isinstance(error, HttpRequestError)
    assert error.attempts == 10
    assert error.status_code == 503


def test_unexpected_status_error() -> None:
    """Test the expected code of a contract violation."""
    error = UnexpectedStatusError(
        method="POST", url=URL, message="bad", expected_code=200, status_code=201
    )
    assert isinstance(error, HttpRequestError)
    assert error.expected_code == 200
    assert error.status_code == 201


@pytest.mark.parametrize(
    "error",
    [
        TransportError(method="GET", url=URL, kind="read_error", message="x"),
        UnrecoverableHttpError(method="GET", url=URL, message="x"),
        RetriesExhaustedError(method="GET", url=URL, message="x", attempts=1),
    ],
)
def test_errors_caught_as_base(error: HttpRequestError) -> None:
    """Test that every HTTP failure is caught as HttpRequestError."""
    with pytest.raises(HttpRequestError):
        raise error


def test_serialization_error() -> None:
    """Test the fields of a serialization error."""
    cause = TypeError("bad")
    error = SerializationError("cannot decode", type_name="Item", cause=cause)
    assert isinstance(error, ValueError)
    assert not isinstance(error, HttpRequestError)
    assert str(error) == "cannot decode"
    assert error.type_name == "Item"
    assert error.cause is cause
