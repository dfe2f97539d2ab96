from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from digest_webdav.api.http_client import DigestHttpClient
from digest_webdav.exceptions import WebDavError
from digest_webdav.models.dav import FileInfo
from digest_webdav.services.directory_service import DirectoryService
from digest_webdav.services.file_service import FileService, parent_directory
from digest_webdav.tests.utils.mock_transport import MockTransport


@pytest.fixture
def service(http: DigestHttpClient) -> FileService:
    return FileService(http, DirectoryService(http))


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/dav/a/b.jpg", "/dav/a/"),
        ("/dav/a/", None),
        ("/dav/b.jpg", "/dav/"),
        ("/b.jpg", None),
        ("b.jpg", None),
        ("/", None),
    ],
)
def test_parent_directory(path: str, expected: str | None) -> None:
    assert parent_directory(path) == expected


# get_file


@pytest.mark.asyncio
async def test_get_file_returns_bytes_for_images(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_challenge()
    mock_transport.add_response(headers={"Content-Type": "image/jpeg"}, content=b"\xff\xd8\xff")

    assert await service.get_file("/dav/a.jpg") == b"\xff\xd8\xff"


@pytest.mark.asyncio
async def test_get_file_returns_text_for_text_types(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(headers={"Content-Type": "text/plain"}, content=b"notes")

    assert await service.get_file("/dav/notes.txt") == "notes"


@pytest.mark.asyncio
async def test_get_file_raises_on_missing_file(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(httpx.codes.NOT_FOUND)

    with pytest.raises(WebDavError) as exc_info:
        await service.get_file("/dav/missing.jpg")

    assert exc_info.value.status_code == 404


# upload_file


@pytest.mark.asyncio
async def test_upload_file_creates_parent_then_puts(
    service: FileService, http: DigestHttpClient, mock_transport: MockTransport
) -> None:
    mock_transport.add_challenge()
    mock_transport.add_response(httpx.codes.CREATED)
    mock_transport.add_challenge()
    mock_transport.add_response(httpx.codes.CREATED, headers={"ETag": '"1"'})

    result = await service.upload_file("/dav/a/b.jpg", b"\x00" * 10)

    methods = [(request.method, request.url.path) for request in mock_transport.requests]
    assert methods == [
        ("MKCOL", "/dav/a/"),
        ("MKCOL", "/dav/a/"),
        ("PUT", "/dav/a/b.jpg"),
        ("PUT", "/dav/a/b.jpg"),
    ]
    put_request = mock_transport.requests[-1]
    assert put_request.headers["content-type"] == "application/octet-stream"
    assert put_request.content == b"\x00" * 10
    assert result.success is True
    assert result.status_code == 201
    assert result.headers["etag"] == '"1"'
    assert http.nonce_count == 2


@pytest.mark.asyncio
async def test_upload_file_continues_when_parent_cannot_be_created(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(httpx.codes.FORBIDDEN)
    mock_transport.add_response(httpx.codes.NO_CONTENT)

    result = await service.upload_file("/dav/a/b.jpg", b"data")

    assert result.status_code == 204
    assert [request.method for request in mock_transport.requests] == ["MKCOL", "PUT"]


@pytest.mark.asyncio
async def test_upload_file_at_server_root_skips_mkcol(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(httpx.codes.CREATED)

    await service.upload_file("/b.jpg", b"data")

    assert [request.method for request in mock_transport.requests] == ["PUT"]


@pytest.mark.asyncio
async def test_upload_file_to_collection_path_skips_mkcol(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(httpx.codes.CREATED)

    result = await service.upload_file("/dav/a/", b"data")

    assert result.status_code == 201
    requests = [(request.method, request.url.path) for request in mock_transport.requests]
    assert requests == [("PUT", "/dav/a/")]


@pytest.mark.asyncio
async def test_upload_file_raises_when_put_fails(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(httpx.codes.METHOD_NOT_ALLOWED)
    mock_transport.add_response(httpx.codes.INSUFFICIENT_STORAGE)

    with pytest.raises(WebDavError, match="Failed to upload file: 507"):
        await service.upload_file("/dav/a/b.jpg", b"data")


@pytest.mark.asyncio
async def test_upload_file_with_make_parents_creates_every_level(mock_http: Mock) -> None:
    directories = Mock(spec=DirectoryService)
    directories.make_directories = AsyncMock(return_value=("/dav", "/dav/a", "/dav/a/b"))
    service = FileService(mock_http, directories)
    mock_http.request = AsyncMock(
        return_value=Mock(status_code=201, reason_phrase="Created", headers={})
    )

    result = await service.upload_file("/dav/a/b/c.jpg", b"data", make_parents=True)

    directories.make_directories.assert_awaited_once_with("/dav/a/b/")
    directories.create_directory.assert_not_called()
    assert result.status_code == 201


# get_file_info(s)


@pytest.mark.asyncio
async def test_get_file_info_reports_size(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(headers={"Content-Type": "image/png"}, content=b"x" * 1536)

    info = await service.get_file_info("/dav/a.png")

    assert info == FileInfo(path="/dav/a.png", size=1536, size_formatted="1.5 KB")


@pytest.mark.asyncio
async def test_get_file_info_counts_text_as_utf8(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(
        headers={"Content-Type": "text/plain; charset=utf-8"}, content="héllo".encode()
    )

    info = await service.get_file_info("/dav/a.txt")

    assert info.size == 6


@pytest.mark.asyncio
async def test_get_file_infos_collects_errors(
    service: FileService, mock_transport: MockTransport
) -> None:
    mock_transport.add_response(headers={"Content-Type": "image/png"}, content=b"abc")
    mock_transport.add_response(httpx.codes.NOT_FOUND)

    batch = await service.get_file_infos(["/dav/a.png", "/dav/b.png"])

    assert [info.path for info in batch.results] == ["/dav/a.png"]
    assert [error.path for error in batch.errors] == ["/dav/b.png"]
    assert batch.total_count == 2
