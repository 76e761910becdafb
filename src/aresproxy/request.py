r"""Value types describing an outgoing request."""

from __future__ import annotations

__all__ = ["Content", "RestParams"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class Content:
    r"""Request body together with its declared media type.

    Args:
        data: The body bytes. ``str`` values are encoded as UTF-8.
        content_type: The media type sent in the ``Content-Type`` header.

    Example:
        ```pycon
        >>> from aresproxy.request import Content
        >>> content = Content('{"a": 1}', "application/json")
        >>> content.data
        b'{"a": 1}'
        >>> len(content)
        8

        ```
    """

    data: bytes | str
    content_type: str = "application/octet-stream"

    def __post_init__(self) -> None:
        if isinstance(self.data, str):
            object.__setattr__(self, "data", self.data.encode("utf-8"))

    def __len__(self) -> int:
        return len(self.data)


class RestParams(list):
    r"""Ordered list of ``(name, value)`` pairs.

    Used for both query parameters and request headers, where order and
    repeated names matter.

    Example:
        ```pycon
        >>> from aresproxy.request import RestParams
        >>> params = RestParams([("q", "a&b"), ("page", "2")])
        >>> params.uri_escaped()
        '?q=a%26b&page=2'
        >>> RestParams().uri_escaped()
        ''

        ```
    """

    def __init__(self, pairs: Iterable[tuple[str, str]] = ()) -> None:
        super().__init__((str(name), str(value)) for name, value in pairs)

    def uri_escaped(self) -> str:
        """Return the url-escaped query string, prefixed with ``?``.

        Returns:
            ``"?k=v&k2=v2"``, or an empty string when there are no pairs.
        """
        if not self:
            return ""
        # one pair at a time so repeated names keep their position
        return "?" + "&".join(str(httpx.QueryParams([pair])) for pair in self)
