r"""Header channel for streamed responses.

The transport delivers the response head one line at a time. Lines of
an interim ``100 Continue`` response are dropped so that only the
headers of the final response are kept.
"""

from __future__ import annotations

__all__ = ["HeaderAccumulator", "parse_header_block"]

import re

_INTERIM_CONTINUE = re.compile(r"^HTTP/\d(?:\.\d)?\s+100\b")
_BLANK_LINES = frozenset({"", "\n", "\r\n"})


class HeaderAccumulator:
    r"""Accumulate response header lines into a single block.

    Example:
        ```pycon
        >>> from aresproxy.headers import HeaderAccumulator
        >>> channel = HeaderAccumulator()
        >>> for line in [
        ...     "HTTP/1.1 100 Continue\r\n",
        ...     "\r\n",
        ...     "HTTP/1.1 200 OK\r\n",
        ...     "Content-Type: text/plain\r\n",
        ...     "\r\n",
        ... ]:
        ...     _ = channel.on_header(line)
        ...
        >>> channel.headers()
        {'content-type': 'text/plain'}

        ```
    """

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._after_continue = False

    def on_header(self, line: str) -> int:
        """Consume one header line.

        Args:
            line: The raw header line, including its line terminator.

        Returns:
            The number of characters consumed, always the full line.
        """
        if _INTERIM_CONTINUE.match(line):
            self._after_continue = True
        elif self._after_continue:
            if line in _BLANK_LINES:
                self._after_continue = False
        else:
            self._lines.append(line)
        return len(line)

    @property
    def block(self) -> str:
        """The header block of the final response."""
        return "".join(self._lines)

    def headers(self) -> dict[str, str]:
        """Parse the accumulated block into a header map."""
        return parse_header_block(self.block)


def parse_header_block(block: str) -> dict[str, str]:
    r"""Parse a raw header block into a header map.

    Status lines and blank lines are skipped. Names are lower-cased and a
    later header overwrites an earlier one with the same name.

    Args:
        block: The raw header block.

    Returns:
        The header map.

    Example:
        ```pycon
        >>> from aresproxy.headers import parse_header_block
        >>> parse_header_block("HTTP/1.1 200 OK\r\nX-A: 1\r\nx-a: 2\r\n\r\n")
        {'x-a': '2'}

        ```
    """
    headers: dict[str, str] = {}
    for line in block.splitlines():
        if not line.strip() or line.startswith("HTTP/"):
            continue
        name, sep, value = line.partition(":")
        if not sep:
            continue
        headers[name.strip().lower()] = value.strip()
    return headers
