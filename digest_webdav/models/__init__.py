"""
Domain models for the WebDAV client.

These are immutable (frozen) dataclasses.
"""

from digest_webdav.models.auth import AuthSession, DigestChallenge
from digest_webdav.models.dav import (
    BulkDeleteResult,
    ConnectionCheck,
    DirectoryEntry,
    DirectoryListing,
    EntryError,
    EntryKind,
    FileEntry,
    FileInfo,
    FileInfoBatch,
    FolderEntry,
    UploadResult,
    format_size,
)
from digest_webdav.models.http import (
    BinaryBody,
    DavResponse,
    ResponseBody,
    TextBody,
    is_binary_content_type,
)

__all__ = [
    # Auth
    "AuthSession",
    "DigestChallenge",
    # DAV
    "EntryKind",
    "DirectoryEntry",
    "FileEntry",
    "FolderEntry",
    "DirectoryListing",
    "UploadResult",
    "FileInfo",
    "FileInfoBatch",
    "EntryError",
    "BulkDeleteResult",
    "ConnectionCheck",
    "format_size",
    # HTTP
    "DavResponse",
    "ResponseBody",
    "TextBody",
    "BinaryBody",
    "is_binary_content_type",
]
