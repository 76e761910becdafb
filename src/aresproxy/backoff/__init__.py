r"""Backoff strategies for retry delays."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ExponentialBackoff"]

from aresproxy.backoff.base import BaseBackoffStrategy
from aresproxy.backoff.exponential import ExponentialBackoff
