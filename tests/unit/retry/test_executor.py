r"""Unit tests for synchronous retry executor."""

from __future__ import annotations

import logging
from unittest.mock import Mock

import pytest

from aresproxy.backoff.base import BaseBackoffStrategy
from aresproxy.exceptions import (
    RequestTimeoutError,
    RetriesExhaustedError,
    UnrecoverableHttpError,
)
from aresproxy.response import Response
from aresproxy.retry import CallbackConfig, RetryConfig, RetryDecider, RetryExecutor

URL = "https://api.example.com/items"


def constant_backoff(delay: float) -> BaseBackoffStrategy:
    backoff = Mock(spec=BaseBackoffStrategy)
    backoff.calculate.return_value = delay
    return backoff


def test_retry_executor_creation() -> None:
    """Test RetryExecutor initialization."""
    retry_config = RetryConfig(max_retries=3)
    executor = RetryExecutor(retry_config, CallbackConfig())

    assert executor.config is retry_config
    assert executor.strategy.backoff_strategy is retry_config.backoff_strategy
    assert isinstance(executor.decider, RetryDecider)
    assert executor.callbacks is not None


def test_retry_executor_custom_decider() -> None:
    """Test RetryExecutor with a custom decider."""
    decider = RetryDecider()
    assert RetryExecutor(RetryConfig(), decider=decider).decider is decider


def test_retry_executor_successful_request(mock_sleep: Mock) -> None:
    """Test successful request without retries."""
    response = Response(code=200)
    request_func = Mock(return_value=response)

    result = RetryExecutor(RetryConfig(max_retries=3)).execute(
        request_func, url=URL, method="POST"
    )

    assert result is response
    request_func.assert_called_once_with()
    mock_sleep.assert_not_called()


def test_retry_executor_retry_on_server_error(mock_sleep: Mock) -> None:
    """Test retry on a 5xx status."""
    success = Response(code=200)
    request_func = Mock(side_effect=[Response(code=500), success])
    executor = RetryExecutor(RetryConfig(max_retries=3, backoff_strategy=constant_backoff(0.5)))

    assert executor.execute(request_func, url=URL, method="POST") is success
    assert request_func.call_count == 2
    mock_sleep.assert_called_once_with(0.5)


def test_retry_executor_retry_on_transport_error(mock_sleep: Mock) -> None:
    """Test retry on a captured transport failure."""
    request_func = Mock(
        side_effect=[Response.failure("connect_error", "refused"), Response(code=204)]
    )
    result = RetryExecutor(RetryConfig(max_retries=2)).execute(request_func, url=URL, method="PUT")
    assert result.code == 204
    assert mock_sleep.call_count == 1


def test_retry_executor_unrecoverable(mock_sleep: Mock) -> None:
    """Test that a 4xx status raises immediately."""
    response = Response(code=409, body=b"conflict")
    request_func = Mock(return_value=response)

    with pytest.raises(UnrecoverableHttpError, match=r"unrecoverable status 409") as exc_info:
        RetryExecutor(RetryConfig()).execute(request_func, url=URL, method="POST")

    assert exc_info.value.status_code == 409
    assert exc_info.value.response is response
    assert exc_info.value.method == "POST"
    assert exc_info.value.url == URL
    request_func.assert_called_once()
    mock_sleep.assert_not_called()


@pytest.mark.parametrize("max_retries", [1, 2, 5])
def test_retry_executor_exhausted(max_retries: int, mock_sleep: Mock) -> None:
    """Test that exactly max_retries attempts are made."""
    last = Response(code=502)
    request_func = Mock(return_value=last)

    with pytest.raises(RetriesExhaustedError) as exc_info:
        RetryExecutor(RetryConfig(max_retries=max_retries)).execute(
            request_func, url=URL, method="POST"
        )

    assert exc_info.value.attempts == max_retries
    assert exc_info.value.status_code == 502
    assert exc_info.value.response is last
    assert request_func.call_count == max_retries
    assert mock_sleep.call_count == max_retries - 1


def test_retry_executor_sleeps_use_attempt_index(mock_sleep: Mock) -> None:
    """Test that the backoff is computed from the failed attempt index."""
    backoff = constant_backoff(0.0)
    request_func = Mock(return_value=Response(code=500))
    with pytest.raises(RetriesExhaustedError):
        RetryExecutor(RetryConfig(max_retries=4, backoff_strategy=backoff)).execute(
            request_func, url=URL, method="POST"
        )
    assert [call.args[0] for call in backoff.calculate.call_args_list] == [0, 1, 2]
    assert mock_sleep.call_count == 3


def test_retry_executor_timeout_propagates(mock_sleep: Mock) -> None:
    """Test that an exception raised by the attempt is not retried."""
    error = RequestTimeoutError(method="POST", url=URL, message="timed out")
    request_func = Mock(side_effect=error)
    with pytest.raises(RequestTimeoutError):
        RetryExecutor(RetryConfig()).execute(request_func, url=URL, method="POST")
    request_func.assert_called_once()
    mock_sleep.assert_not_called()


def test_retry_executor_first_failure_warning(
    mock_sleep: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    """Test the structured warning logged for the first failure."""
    request_func = Mock(side_effect=[Response(code=503, body=b"busy"), Response(code=200)])
    with caplog.at_level(logging.WARNING, logger="aresproxy.retry.executor"):
        RetryExecutor(RetryConfig()).execute(
            request_func, url=URL, method="POST", request_body=b'{"a": 1}'
        )
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.WARNING
    assert record.method == "POST"
    assert record.url == URL
    assert record.status_code == 503
    assert record.request_bytes == 8
    assert record.response_bytes == 4
    assert "b'busy'" in record.getMessage()
    assert mock_sleep.call_count == 1


def test_retry_executor_first_failure_warning_transport(
    mock_sleep: Mock, caplog: pytest.LogCaptureFixture
) -> None:
    """Test the warning of a first failure at the transport level."""
    request_func = Mock(
        side_effect=[Response.failure("connect_error", "refused"), Response(code=200)]
    )
    with caplog.at_level(logging.WARNING, logger="aresproxy.retry.executor"):
        RetryExecutor(RetryConfig()).execute(request_func, url=URL, method="PUT")
    assert "connect_error: refused" in caplog.text
    assert caplog.records[0].error_kind == "connect_error"
    assert mock_sleep.call_count == 1


def test_retry_executor_callbacks(mock_sleep: Mock) -> None:
    """Test the lifecycle callbacks of a recovered call."""
    on_request, on_retry, on_success, on_failure = Mock(), Mock(), Mock(), Mock()
    callbacks = CallbackConfig(
        on_request=on_request, on_retry=on_retry, on_success=on_success, on_failure=on_failure
    )
    request_func = Mock(side_effect=[Response.failure("read_error", "reset"), Response(code=200)])
    RetryExecutor(
        RetryConfig(max_retries=3, backoff_strategy=constant_backoff(0.0)), callbacks
    ).execute(request_func, url=URL, method="POST")

    assert on_request.call_count == 2
    retry_info = on_retry.call_args.args[0]
    assert retry_info.attempt == 2
    assert retry_info.error_kind == "read_error"
    assert retry_info.status_code is None
    assert on_success.call_args.args[0].attempt == 2
    on_failure.assert_not_called()
    mock_sleep.assert_called_once_with(0.0)
