"""
PROPFIND request body and multi-status response parsing.
"""

import re
import xml.etree.ElementTree as eTree
from urllib.parse import unquote, urlsplit

import structlog

from digest_webdav.exceptions import ParseError
from digest_webdav.models.dav import DirectoryListing, FileEntry, FolderEntry, format_size

logger = structlog.get_logger(__name__)

PROPFIND_BODY = """<?xml version="1.0" encoding="utf-8"?>
<propfind xmlns="DAV:">
    <prop>
        <resourcetype/>
        <getcontentlength/>
        <getlastmodified/>
        <getcontenttype/>
    </prop>
</propfind>"""

_DAV = "{DAV:}"

# Compared against the 'status' element of a 'propstat' element.
_STATUS_OK_RE = re.compile(r"^\s*HTTP/\S+\s+2\d\d\b", re.IGNORECASE)


def _resource_path(href: str) -> str:
    return unquote(urlsplit(href).path).rstrip("/")


def is_same_resource(href: str, path: str) -> bool:
    """
    Check whether an href names the given server path.

    Both sides are compared on their decoded URL path, so absolute hrefs,
    percent-encoding differences and trailing slashes do not matter.
    """
    return _resource_path(href) == _resource_path(path)


def _to_bytes(body: bytes | str) -> bytes:
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    msg = "Failed to parse directory response: data is not a string or bytes"
    raise ParseError(msg, type=type(body).__name__)


def _text(element: eTree.Element | None) -> str | None:
    if element is None or element.text is None:
        return None
    return element.text.strip()


def _ok_props(response: eTree.Element) -> list[eTree.Element]:
    props = []
    for propstat in response.findall(f"./{_DAV}propstat"):
        status = _text(propstat.find(f"./{_DAV}status"))
        if status is not None and not _STATUS_OK_RE.match(status):
            continue
        props.extend(propstat.findall(f"./{_DAV}prop"))
    return props


def _find_prop(props: list[eTree.Element], name: str) -> str | None:
    for prop in props:
        if (value := _text(prop.find(f"./{_DAV}{name}"))) is not None:
            return value
    return None


def _parse_size(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def _parse_file(href: str, props: list[eTree.Element]) -> FileEntry:
    size_bytes = None
    size_formatted = None
    if (content_length := _find_prop(props, "getcontentlength")) is not None:
        size_bytes = _parse_size(content_length)
        size_formatted = format_size(size_bytes)

    return FileEntry(
        path=href,
        size_bytes=size_bytes,
        size_formatted=size_formatted,
        last_modified=_find_prop(props, "getlastmodified"),
        content_type=_find_prop(props, "getcontenttype"),
    )


def parse_multistatus(body: bytes | str, *, query_path: str) -> DirectoryListing:
    """
    Parse the body of a ``Depth: 1`` PROPFIND response.

    A multi-status body looks like (indented for readability):

        <d:multistatus xmlns:d="DAV:">
            <d:response>
                <d:href>/dav/images/</d:href>
                <d:propstat>
                    <d:prop>
                        <d:resourcetype><d:collection/></d:resourcetype>
                    </d:prop>
                    <d:status>HTTP/1.1 200 OK</d:status>
                </d:propstat>
            </d:response>
            ...
        </d:multistatus>

    Elements are matched by namespace, so any prefix bound to ``DAV:`` works.

    Args:
        body: Response body, as bytes or text.
        query_path: Path that was listed. Its own entry is left out.

    Returns:
        Files and folders of the collection.

    Raises:
        ParseError: If the body is not bytes/str or not well-formed XML.
    """
    data = _to_bytes(body)
    try:
        multistatus = eTree.fromstring(data)
    except eTree.ParseError as e:
        msg = f"Failed to parse directory response: {e}"
        raise ParseError(msg, query_path=query_path) from e

    files: list[FileEntry] = []
    folders: list[FolderEntry] = []
    for response in multistatus.iter(f"{_DAV}response"):
        href = _text(response.find(f"./{_DAV}href"))
        if not href:
            continue
        if is_same_resource(href, query_path):
            logger.debug("Skipping queried collection", href=href)
            continue

        props = _ok_props(response)
        is_collection = any(
            prop.find(f"./{_DAV}resourcetype/{_DAV}collection") is not None for prop in props
        )
        if is_collection:
            folders.append(FolderEntry(path=href))
        else:
            files.append(_parse_file(href, props))

    logger.debug("Parsed directory contents", files=len(files), folders=len(folders))
    return DirectoryListing(files=tuple(files), folders=tuple(folders))
