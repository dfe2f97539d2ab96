"""WebDAV verbs (PROPFIND, MKCOL, MOVE, DELETE, GET, PUT)."""

from typing import NoReturn

import httpx

from digest_webdav.api.http_client import DigestHttpClient
from digest_webdav.api.multistatus import PROPFIND_BODY, parse_multistatus
from digest_webdav.exceptions import WebDavError
from digest_webdav.models.dav import DirectoryListing
from digest_webdav.models.http import DavResponse

_DELETE_OK = frozenset({httpx.codes.OK, httpx.codes.NO_CONTENT})
_MOVE_OK = frozenset({httpx.codes.OK, httpx.codes.CREATED})
_PUT_OK = frozenset({httpx.codes.OK, httpx.codes.CREATED, httpx.codes.NO_CONTENT})


def _raise_for_status(
    response: DavResponse, action: str, *, method: str, path: str
) -> NoReturn:
    msg = f"Failed to {action}: {response.status_code} {response.reason_phrase}"
    raise WebDavError(
        msg,
        status_code=response.status_code,
        status_text=response.reason_phrase,
        method=method,
        path=path,
    )


async def propfind(http: DigestHttpClient, path: str) -> DirectoryListing:
    """List a collection one level deep."""
    response = await http.request(
        "PROPFIND",
        path,
        headers={"Depth": "1", "Content-Type": "text/xml; charset=utf-8"},
        content=PROPFIND_BODY,
    )
    if response.status_code != httpx.codes.MULTI_STATUS:
        _raise_for_status(response, "get directory contents", method="PROPFIND", path=path)
    return parse_multistatus(response.payload, query_path=path)


async def mkcol(http: DigestHttpClient, path: str) -> DavResponse:
    """
    Create a collection.

    The response is returned whatever its status: 405 and 409 mean
    different things depending on the caller.
    """
    return await http.request("MKCOL", path)


async def delete(http: DigestHttpClient, path: str) -> None:
    """Delete a file or collection."""
    response = await http.request("DELETE", path)
    if response.status_code not in _DELETE_OK:
        _raise_for_status(response, "delete item", method="DELETE", path=path)


async def move(
    http: DigestHttpClient, source_path: str, destination_path: str, *, overwrite: bool = True
) -> None:
    """Move or rename a resource."""
    response = await http.request(
        "MOVE",
        source_path,
        headers={"Destination": destination_path, "Overwrite": "T" if overwrite else "F"},
    )
    if response.status_code not in _MOVE_OK:
        _raise_for_status(response, "move item", method="MOVE", path=source_path)


async def get(http: DigestHttpClient, path: str) -> DavResponse:
    """Download a resource."""
    response = await http.request("GET", path)
    if response.status_code != httpx.codes.OK:
        _raise_for_status(response, "get file", method="GET", path=path)
    return response


async def put(
    http: DigestHttpClient,
    path: str,
    data: bytes,
    *,
    content_type: str = "application/octet-stream",
) -> DavResponse:
    """Upload a resource."""
    response = await http.request("PUT", path, headers={"Content-Type": content_type}, content=data)
    if response.status_code not in _PUT_OK:
        _raise_for_status(response, "upload file", method="PUT", path=path)
    return response
