"""
Digest-authenticated WebDAV client.

A small async WebDAV client implementing RFC 2617 Digest authentication.

Example:
    ```python
    from digest_webdav import WebDavClient, WebDavConfig

    config = WebDavConfig(base_url="https://dav.example.com", username="u", password="p")
    async with WebDavClient(config) as client:
        listing = await client.list_directory("/dav")
        print(len(listing.files), len(listing.folders))

        image = await client.get_file("/dav/product_images/bike.jpg")
        await client.upload_file("/dav/product_images/new/bike.jpg", image)
    ```
"""

from digest_webdav.client import WebDavClient
from digest_webdav.config import WebDavConfig
from digest_webdav.exceptions import (
    AuthChallengeError,
    AuthenticationError,
    AuthenticationFailedError,
    ConfigurationError,
    ParseError,
    TransportError,
    WebDavClientError,
    WebDavError,
)
from digest_webdav.models.dav import (
    BulkDeleteResult,
    ConnectionCheck,
    DirectoryListing,
    FileEntry,
    FileInfo,
    FileInfoBatch,
    FolderEntry,
    UploadResult,
    format_size,
)

__version__ = "0.1.0"

__all__ = [
    # Main client
    "WebDavClient",
    "WebDavConfig",
    # Models
    "DirectoryListing",
    "FileEntry",
    "FolderEntry",
    "UploadResult",
    "FileInfo",
    "FileInfoBatch",
    "BulkDeleteResult",
    "ConnectionCheck",
    "format_size",
    # Exceptions
    "WebDavClientError",
    "ConfigurationError",
    "AuthenticationError",
    "AuthChallengeError",
    "AuthenticationFailedError",
    "WebDavError",
    "TransportError",
    "ParseError",
]
