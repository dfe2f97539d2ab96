"""
File transfer service for a WebDAV server.

Handles downloads, uploads with parent-directory preparation, and file
size reports.
"""

import structlog

from digest_webdav.api.endpoints.dav import get, put
from digest_webdav.api.http_client import DigestHttpClient
from digest_webdav.exceptions import WebDavClientError
from digest_webdav.models.dav import (
    EntryError,
    FileInfo,
    FileInfoBatch,
    UploadResult,
    format_size,
)
from digest_webdav.services.directory_service import DirectoryService

logger = structlog.get_logger(__name__)


def parent_directory(path: str) -> str | None:
    """
    Collection an upload to ``path`` needs, or None if there is nothing to create.

    A path ending in "/" is its own parent; otherwise the parent is
    everything up to and including the last "/". The server root and the
    path itself are never created.
    """
    if path.endswith("/"):
        parent = path
    else:
        last_slash = path.rfind("/")
        parent = path[: last_slash + 1] if last_slash > 0 else "/"
    if parent in ("/", path):
        return None
    return parent


class FileService:
    """Service for downloading and uploading files."""

    def __init__(self, http: DigestHttpClient, directory_service: DirectoryService) -> None:
        """
        Args:
            http: Digest-authenticated HTTP client.
            directory_service: Used to prepare parent collections before uploads.
        """
        self._http = http
        self._directories = directory_service

    async def get_file(self, path: str) -> bytes | str:
        """
        Download a file.

        Returns:
            Raw bytes for binary content types (images, ``application/*``,
            audio, video), decoded text otherwise.

        Raises:
            WebDavError: If the server does not answer 200.
        """
        logger.debug("Getting file", path=path)
        response = await get(self._http, path)
        logger.debug(
            "Retrieved file", path=path, size=len(response.body), binary=response.is_binary
        )
        return response.payload

    async def upload_file(
        self, path: str, data: bytes, *, make_parents: bool = False
    ) -> UploadResult:
        """
        Upload a file, preparing its parent collection first.

        Preparing the parent is best effort: the collection usually exists
        already, so a failure is logged and the PUT is still attempted.

        Args:
            path: Destination path, already URL-encoded.
            data: File content.
            make_parents: Create every missing ancestor instead of only the
                direct parent.

        Returns:
            Status and headers of the PUT response.

        Raises:
            WebDavError: If the server does not answer 200, 201 or 204.
        """
        logger.debug("Preparing to upload file", path=path, size=len(data))
        await self._prepare_parent(path, make_parents=make_parents)

        response = await put(self._http, path, data)
        logger.debug("File uploaded", path=path, size=len(data), status_code=response.status_code)
        return UploadResult(
            status_code=response.status_code,
            status_message=response.reason_phrase,
            headers=dict(response.headers),
        )

    async def _prepare_parent(self, path: str, *, make_parents: bool) -> None:
        parent = parent_directory(path)
        if parent is None:
            logger.debug("No parent directory to create", path=path)
            return

        if make_parents:
            await self._directories.make_directories(parent)
            return

        try:
            await self._directories.create_directory(parent)
        except WebDavClientError as e:
            logger.warning(
                "Failed to create parent directory, continuing with upload",
                parent=parent,
                path=path,
                error=str(e),
                status_code=getattr(e, "status_code", None),
            )

    async def get_file_info(self, path: str) -> FileInfo:
        """Download a file and report its size."""
        payload = await self.get_file(path)
        size = len(payload) if isinstance(payload, bytes) else len(payload.encode("utf-8"))
        return FileInfo(path=path, size=size, size_formatted=format_size(size))

    async def get_file_infos(self, paths: list[str]) -> FileInfoBatch:
        """
        Report sizes for several files.

        A failing path does not stop the others; it is reported in the result.
        """
        results = []
        errors = []
        for path in paths:
            try:
                results.append(await self.get_file_info(path))
            except WebDavClientError as e:
                logger.warning("Failed to get file info", path=path, error=str(e))
                errors.append(EntryError(path=path, error=str(e)))
        return FileInfoBatch(results=tuple(results), errors=tuple(errors))
