"""
Directory operations on a WebDAV server.

Handles listings, collection creation (including the already-exists
cases), moves and deletions.
"""

import httpx
import structlog

from digest_webdav.api.endpoints.dav import delete, mkcol, move, propfind
from digest_webdav.api.http_client import DigestHttpClient
from digest_webdav.exceptions import WebDavClientError, WebDavError
from digest_webdav.models.dav import (
    BulkDeleteResult,
    ConnectionCheck,
    DirectoryListing,
    EntryError,
)

logger = structlog.get_logger(__name__)


def ancestor_directories(path: str) -> list[str]:
    """
    List the collections leading to a resource, outermost first.

    ``/dav/a/b/c.jpg`` gives ``["/dav", "/dav/a", "/dav/a/b"]``; a path
    ending in "/" is itself a collection and is included.
    """
    parts = [part for part in path.split("/") if part]
    if not path.endswith("/"):
        parts = parts[:-1]
    return ["/" + "/".join(parts[: i + 1]) for i in range(len(parts))]


class DirectoryService:
    """Service for listing and organizing collections."""

    def __init__(self, http: DigestHttpClient) -> None:
        """
        Args:
            http: Digest-authenticated HTTP client.
        """
        self._http = http

    async def list_directory(self, path: str) -> DirectoryListing:
        """
        List a collection one level deep.

        Raises:
            WebDavError: If the server does not answer 207.
            ParseError: If the multi-status body cannot be parsed.
        """
        logger.debug("Getting directory contents", path=path)
        listing = await propfind(self._http, path)
        logger.debug(
            "Retrieved directory contents",
            path=path,
            files=len(listing.files),
            folders=len(listing.folders),
        )
        return listing

    async def create_directory(self, path: str) -> bool:
        """
        Create a collection, tolerating one that already exists.

        201 means created and 405 means already there. On 409 the collection
        is listed: if that works it exists, otherwise the MKCOL failure is
        raised.

        Returns:
            True.

        Raises:
            WebDavError: If the collection could not be created.
        """
        logger.debug("Creating directory", path=path)
        response = await mkcol(self._http, path)

        if response.status_code == httpx.codes.CREATED:
            logger.debug("Directory created", path=path)
            return True
        if response.status_code == httpx.codes.METHOD_NOT_ALLOWED:
            logger.debug("Directory already exists", path=path)
            return True

        error = WebDavError(
            f"Failed to create directory: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
            status_text=response.reason_phrase,
            method="MKCOL",
            path=path,
        )
        if response.status_code != httpx.codes.CONFLICT:
            raise error

        logger.debug("MKCOL conflict, verifying by listing", path=path)
        try:
            await self.list_directory(path)
        except WebDavClientError as e:
            logger.debug("Directory does not exist", path=path, error=str(e))
            raise error from e
        logger.debug("Directory exists (verified by listing)", path=path)
        return True

    async def make_directories(self, path: str) -> tuple[str, ...]:
        """
        Create every collection leading to ``path``, outermost first.

        Each level is attempted even if a previous one failed; failures are
        logged since an outer collection may exist but refuse MKCOL.

        Returns:
            The collections confirmed to exist.
        """
        confirmed = []
        for directory in ancestor_directories(path):
            try:
                await self.create_directory(directory)
            except WebDavClientError as e:
                logger.warning("Directory creation failed", path=directory, error=str(e))
                continue
            confirmed.append(directory)
        return tuple(confirmed)

    async def delete_entry(self, path: str) -> bool:
        """
        Delete a file or collection.

        Raises:
            WebDavError: If the server does not answer 200 or 204.
        """
        logger.debug("Deleting item", path=path)
        await delete(self._http, path)
        logger.debug("Deleted item", path=path)
        return True

    async def delete_entries(self, paths: list[str]) -> BulkDeleteResult:
        """
        Delete several entries, one after the other.

        A failing path does not stop the others; it is reported in the result.
        """
        deleted = 0
        errors = []
        for path in paths:
            try:
                await self.delete_entry(path)
            except WebDavClientError as e:
                logger.warning("Failed to delete item", path=path, error=str(e))
                errors.append(EntryError(path=path, error=str(e)))
                continue
            deleted += 1
        return BulkDeleteResult(deleted_count=deleted, errors=tuple(errors))

    async def move_entry(
        self, source_path: str, destination_path: str, *, overwrite: bool = True
    ) -> bool:
        """
        Move or rename an entry.

        With ``overwrite`` False an existing destination makes the server
        refuse the move (412) instead of replacing it.

        Raises:
            WebDavError: If the server does not answer 200 or 201.
        """
        logger.debug("Moving item", source=source_path, destination=destination_path)
        await move(self._http, source_path, destination_path, overwrite=overwrite)
        logger.debug("Moved item", source=source_path, destination=destination_path)
        return True

    async def check_connection(self, path: str) -> ConnectionCheck:
        """Try listing ``path`` and report the outcome instead of raising."""
        try:
            listing = await self.list_directory(path)
        except WebDavClientError as e:
            logger.warning("WebDAV connection failed", path=path, error=str(e))
            return ConnectionCheck(success=False, error=str(e))
        return ConnectionCheck(
            success=True, files=len(listing.files), folders=len(listing.folders)
        )
