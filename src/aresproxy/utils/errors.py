r"""Helpers for describing transport exceptions."""

from __future__ import annotations

__all__ = ["error_kind"]

import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def error_kind(exc: BaseException) -> str:
    """Return a short snake-case kind for a transport exception.

    Args:
        exc: The exception raised by the transport.

    Returns:
        The exception class name in snake case.

    Example:
        ```pycon
        >>> import httpx
        >>> from aresproxy.utils.errors import error_kind
        >>> error_kind(httpx.ConnectError("refused"))
        'connect_error'
        >>> error_kind(httpx.RemoteProtocolError("bad"))
        'remote_protocol_error'

        ```
    """
    return _CAMEL_BOUNDARY.sub("_", type(exc).__name__).lower()
