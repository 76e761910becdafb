r"""Retry package implementing class-based composition pattern.

Public API:
    - RetryConfig: Configuration for retry behavior
    - CallbackConfig: Configuration for callbacks
    - RetryStrategy: Strategy for calculating retry delays
    - RetryDecider: Classification of attempt outcomes
    - CallbackManager: Manager for callback invocations
    - RetryExecutor: Synchronous retry executor
"""

from __future__ import annotations

__all__ = [
    "CallbackConfig",
    "CallbackManager",
    "RetryConfig",
    "RetryDecider",
    "RetryExecutor",
    "RetryOutcome",
    "RetryStrategy",
]

from aresproxy.retry.config import CallbackConfig, RetryConfig
from aresproxy.retry.decider import RetryDecider, RetryOutcome
from aresproxy.retry.executor import RetryExecutor
from aresproxy.retry.manager import CallbackManager
from aresproxy.retry.strategy import RetryStrategy
