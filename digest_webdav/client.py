"""
WebDAV client facade.

This is the main entry point for users of the library. It provides a clean,
high-level API over the Digest-authenticated transport and the services.
"""

from collections.abc import Mapping
from typing import Any, Self

import httpx
import structlog

from digest_webdav.api.http_client import DigestHttpClient
from digest_webdav.config import WebDavConfig
from digest_webdav.models.auth import AuthSession
from digest_webdav.models.dav import (
    BulkDeleteResult,
    ConnectionCheck,
    DirectoryListing,
    FileInfo,
    FileInfoBatch,
    UploadResult,
)
from digest_webdav.services.directory_service import DirectoryService
from digest_webdav.services.file_service import FileService

logger = structlog.get_logger(__name__)


class WebDavClient:
    """
    Async WebDAV client using HTTP Digest authentication.

    One client owns one authentication session. Operations on a client are
    serialized at the request level, so starting several operations
    concurrently is safe but does not make them run in parallel; use one
    client per concurrent worker instead.

    Example:
        ```python
        config = WebDavConfig(
            base_url="https://dav.example.com",
            username="user",
            password="secret",
        )
        async with WebDavClient(config) as client:
            listing = await client.list_directory("/dav/product_images")
            for entry in listing.files:
                print(entry.path, entry.size_formatted)

            await client.upload_file("/dav/product_images/a/b.jpg", data)
        ```

    Args:
        config: Server URL, credentials and logging options.
        transport: Optional httpx transport for testing (mock transport).
    """

    def __init__(
        self,
        config: WebDavConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client. No network activity happens here.

        Args:
            config: Client configuration.
            transport: Optional httpx transport for testing.
        """
        self._config = config
        self._http = DigestHttpClient(config, transport=transport)
        self._directory_service = DirectoryService(self._http)
        self._file_service = FileService(self._http, self._directory_service)

    @classmethod
    def from_settings(
        cls,
        settings: Mapping[str, Any],
        *,
        verbose: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Self:
        """
        Build a client from the application's settings mapping.

        Raises:
            ConfigurationError: If WebDAV is disabled or misconfigured.
        """
        return cls(WebDavConfig.from_settings(settings, verbose=verbose), transport=transport)

    async def __aenter__(self) -> Self:
        """Enter async context."""
        return self

    async def __aexit__(
        self, exc_type: type | None, exc_val: BaseException | None, exc_tb: object
    ) -> None:
        """Exit async context."""
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()
        logger.debug("Client closed")

    @property
    def config(self) -> WebDavConfig:
        return self._config

    @property
    def session(self) -> AuthSession:
        """Current Digest authentication session."""
        return self._http.session

    @property
    def nonce_count(self) -> int:
        """Number of authenticated requests made by this client."""
        return self._http.nonce_count

    async def list_directory(self, path: str | None = None) -> DirectoryListing:
        """
        List the files and folders of a collection.

        Args:
            path: Collection path. Defaults to the configured root path.

        Returns:
            DirectoryListing without the collection itself.

        Raises:
            WebDavError: If the server does not answer 207.
            AuthenticationError: If authentication fails.
            ParseError: If the response cannot be parsed.
        """
        return await self._directory_service.list_directory(path or self._config.root_path)

    async def get_file(self, path: str) -> bytes | str:
        """
        Download a file.

        Returns:
            bytes for binary content (images, ``application/*``, audio,
            video), str otherwise.

        Raises:
            WebDavError: If the server does not answer 200.
        """
        return await self._file_service.get_file(path)

    async def upload_file(
        self, path: str, data: bytes, *, make_parents: bool = False
    ) -> UploadResult:
        """
        Upload a file, creating its parent collection first if needed.

        Args:
            path: Destination path, already URL-encoded.
            data: File content.
            make_parents: Create every missing ancestor collection, not just
                the direct parent.

        Raises:
            WebDavError: If the PUT is not answered with 200, 201 or 204.
        """
        return await self._file_service.upload_file(path, data, make_parents=make_parents)

    async def delete_entry(self, path: str) -> bool:
        """
        Delete a file or folder.

        Raises:
            WebDavError: If the server does not answer 200 or 204.
        """
        return await self._directory_service.delete_entry(path)

    async def create_directory(self, path: str) -> bool:
        """
        Create a folder. An existing folder counts as success.

        Raises:
            WebDavError: If the folder could not be created.
        """
        return await self._directory_service.create_directory(path)

    async def move_entry(
        self, source_path: str, destination_path: str, *, overwrite: bool = True
    ) -> bool:
        """
        Move or rename a file or folder.

        Args:
            source_path: Entry to move.
            destination_path: New path of the entry.
            overwrite: Replace an existing destination.

        Raises:
            WebDavError: If the server does not answer 200 or 201.
        """
        return await self._directory_service.move_entry(
            source_path, destination_path, overwrite=overwrite
        )

    async def make_directories(self, path: str) -> tuple[str, ...]:
        """Create every folder leading to ``path``; returns those that exist afterwards."""
        return await self._directory_service.make_directories(path)

    async def delete_entries(self, paths: list[str]) -> BulkDeleteResult:
        """Delete several entries, reporting failures per path."""
        return await self._directory_service.delete_entries(paths)

    async def get_file_info(self, path: str) -> FileInfo:
        """Download a file and report its size."""
        return await self._file_service.get_file_info(path)

    async def get_file_infos(self, paths: list[str]) -> FileInfoBatch:
        """Report sizes of several files, reporting failures per path."""
        return await self._file_service.get_file_infos(paths)

    async def check_connection(self, path: str | None = None) -> ConnectionCheck:
        """List a folder to check that the server and credentials work."""
        return await self._directory_service.check_connection(path or self._config.root_path)
