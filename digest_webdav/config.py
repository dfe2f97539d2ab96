"""
WebDAV client configuration.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Self
from urllib.parse import urlsplit

from digest_webdav.exceptions import ConfigurationError

_SUPPORTED_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True, kw_only=True)
class WebDavConfig:
    """
    Attributes:
        base_url: Server URL. Only scheme, host and port are used; request
            paths are always absolute on the server.
        username: Digest username.
        password: Digest password.
        verbose: Emit protocol traces (challenges, hashes, request options,
            response headers, truncated bodies) to the log.
        timeout: Per-request timeout in seconds, or None for no timeout.
        user_agent: User-Agent header value.
        root_path: Directory listed when no path is given.
        log_body_limit: Number of body characters kept in verbose traces.
    """

    base_url: str
    username: str
    password: str = field(repr=False)
    verbose: bool = False
    timeout: float | None = None
    user_agent: str = "DigestAuthClient/1.0"
    root_path: str = "/"
    log_body_limit: int = 500

    def __post_init__(self) -> None:
        parts = urlsplit(self.base_url)
        if parts.scheme not in _SUPPORTED_SCHEMES:
            msg = "base_url must use http or https"
            raise ValueError(msg)
        if not parts.hostname:
            msg = "base_url must include a host"
            raise ValueError(msg)
        if self.timeout is not None and self.timeout <= 0:
            msg = "timeout must be positive"
            raise ValueError(msg)
        if not self.root_path.startswith("/"):
            msg = "root_path must be absolute"
            raise ValueError(msg)
        if self.log_body_limit < 0:
            msg = "log_body_limit must be non-negative"
            raise ValueError(msg)

    @property
    def origin(self) -> str:
        """Scheme, host and port of the server, without a path."""
        parts = urlsplit(self.base_url)
        return f"{parts.scheme}://{parts.netloc}"

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], *, verbose: bool = False) -> Self:
        """
        Build a configuration from the application's settings mapping.

        The mapping holds a ``webdav`` section with ``enabled``, ``url``,
        ``username``, ``password`` and optionally ``port`` and ``path``.

        Args:
            settings: Parsed settings document.
            verbose: Enable protocol traces.

        Returns:
            The configuration.

        Raises:
            ConfigurationError: If WebDAV is disabled or a required key is missing.
        """
        section = settings.get("webdav")
        if not isinstance(section, Mapping) or not section.get("enabled"):
            msg = "WebDAV is not enabled in settings."
            raise ConfigurationError(msg)

        missing = [key for key in ("url", "username", "password") if not section.get(key)]
        if missing:
            msg = "WebDAV settings are incomplete"
            raise ConfigurationError(msg, missing=missing)

        root_path = str(section.get("path") or "/")
        if not root_path.startswith("/"):
            root_path = "/" + root_path

        try:
            base_url = str(section["url"])
            port = section.get("port")
            parts = urlsplit(base_url)
            if port and parts.port is None:
                base_url = f"{parts.scheme}://{parts.hostname}:{int(port)}"
            return cls(
                base_url=base_url,
                username=str(section["username"]),
                password=str(section["password"]),
                verbose=verbose,
                root_path=root_path,
            )
        except ValueError as e:
            raise ConfigurationError(str(e), url=section["url"]) from e

    @classmethod
    def from_settings_file(cls, path: Path | str, *, verbose: bool = False) -> Self:
        """
        Read a JSON settings document and build a configuration from it.

        Raises:
            ConfigurationError: If the file is missing, is not JSON, or is
                not a usable WebDAV configuration.
        """
        try:
            settings = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            msg = "Cannot read settings file"
            raise ConfigurationError(msg, path=str(path)) from e
        if not isinstance(settings, Mapping):
            msg = "Settings file must contain a JSON object"
            raise ConfigurationError(msg, path=str(path))
        return cls.from_settings(settings, verbose=verbose)
