r"""Session token carried across calls of one proxy instance."""

from __future__ import annotations

__all__ = ["AuthenticationSession"]


class AuthenticationSession:
    r"""Hold the session token of an authenticated client.

    An empty token means the client is not authenticated and no cookie
    is sent.

    Args:
        token: The initial token.

    Example:
        ```pycon
        >>> from aresproxy.session import AuthenticationSession
        >>> session = AuthenticationSession()
        >>> session.cookie_headers()
        []
        >>> session.update("abc123")
        >>> session.cookie_headers()
        [('Cookie', 'token="abc123"')]

        ```
    """

    def __init__(self, token: str = "") -> None:
        self.token = token

    def __repr__(self) -> str:
        return f"{type(self).__name__}(is_authenticated={self.is_authenticated})"

    @property
    def is_authenticated(self) -> bool:
        """Whether a non-empty token is held."""
        return bool(self.token)

    def cookie_headers(self) -> list[tuple[str, str]]:
        """Return the cookie header to attach to a request.

        Returns:
            ``[("Cookie", 'token="<token>"')]`` when authenticated, otherwise
            an empty list.
        """
        if not self.token:
            return []
        return [("Cookie", f'token="{self.token}"')]

    def update(self, token: str) -> None:
        """Replace the stored token."""
        self.token = token

    def clear(self) -> None:
        """Forget the stored token."""
        self.token = ""
