"""
digest_webdav exception hierarchy.

All exceptions inherit from WebDavClientError for easy catching.
"""

from typing import Any


class WebDavClientError(Exception):
    """Base exception for all digest_webdav errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class ConfigurationError(WebDavClientError):
    """Settings cannot be turned into a usable client configuration."""


class AuthenticationError(WebDavClientError):
    """Digest authentication failed."""


class AuthChallengeError(AuthenticationError):
    """Server answered 401 without a usable Digest challenge."""

    def __init__(self, message: str, *, header: str | None = None) -> None:
        super().__init__(message, header=header)
        self.header = header


class AuthenticationFailedError(AuthenticationError):
    """Credentials were rejected after the authenticated retry."""

    def __init__(self, message: str, *, method: str, path: str) -> None:
        super().__init__(message, method=method, path=path)
        self.status_code = 401
        self.method = method
        self.path = path


class WebDavError(WebDavClientError):
    """A WebDAV operation received a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        status_text: str = "",
        method: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(
            message, status_code=status_code, status_text=status_text, method=method, path=path
        )
        self.status_code = status_code
        self.status_text = status_text
        self.method = method
        self.path = path


class TransportError(WebDavClientError):
    """Network-level error (connection refused, DNS, TLS, timeout)."""

    def __init__(self, message: str, *, method: str, path: str) -> None:
        super().__init__(message, method=method, path=path)
        self.method = method
        self.path = path


class ParseError(WebDavClientError):
    """Response body could not be interpreted."""
