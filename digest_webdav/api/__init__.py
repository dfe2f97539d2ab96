"""
WebDAV transport layer.

Provides Digest-authenticated async HTTP communication with the server.
"""

from digest_webdav.api.http_client import DigestHttpClient, sanitize_for_log
from digest_webdav.api.multistatus import PROPFIND_BODY, parse_multistatus

__all__ = ["DigestHttpClient", "PROPFIND_BODY", "parse_multistatus", "sanitize_for_log"]
