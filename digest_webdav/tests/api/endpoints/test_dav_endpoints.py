from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from digest_webdav.api.endpoints.dav import delete, get, mkcol, move, propfind, put
from digest_webdav.api.multistatus import PROPFIND_BODY
from digest_webdav.exceptions import ParseError, WebDavError
from digest_webdav.models.http import BinaryBody, DavResponse, TextBody
from digest_webdav.tests.utils.mock_transport import file_response, folder_response, multistatus


def make_response(
    status_code: int, body: BinaryBody | TextBody | None = None, reason: str = ""
) -> DavResponse:
    return DavResponse(
        status_code=status_code,
        reason_phrase=reason or httpx.codes.get_reason_phrase(status_code),
        headers=httpx.Headers(),
        body=body if body is not None else TextBody(""),
    )


def respond_with(mock_http: Mock, response: DavResponse) -> AsyncMock:
    mock_http.request = AsyncMock(return_value=response)
    return mock_http.request


# PROPFIND


@pytest.mark.asyncio
async def test_propfind_sends_depth_one_and_parses(mock_http: Mock) -> None:
    body = multistatus(folder_response("/dav/"), file_response("/dav/a.jpg"))
    request = respond_with(mock_http, make_response(207, BinaryBody(body.encode())))

    listing = await propfind(mock_http, "/dav")

    assert len(listing.files) == 1
    request.assert_awaited_once_with(
        "PROPFIND",
        "/dav",
        headers={"Depth": "1", "Content-Type": "text/xml; charset=utf-8"},
        content=PROPFIND_BODY,
    )


@pytest.mark.asyncio
async def test_propfind_accepts_text_body(mock_http: Mock) -> None:
    respond_with(mock_http, make_response(207, TextBody(multistatus(file_response("/dav/a")))))

    listing = await propfind(mock_http, "/dav")

    assert len(listing) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [200, 403, 404, 500])
async def test_propfind_requires_multi_status(mock_http: Mock, status_code: int) -> None:
    respond_with(mock_http, make_response(status_code))

    with pytest.raises(WebDavError, match="Failed to get directory contents") as exc_info:
        await propfind(mock_http, "/dav")

    assert exc_info.value.status_code == status_code
    assert exc_info.value.method == "PROPFIND"


@pytest.mark.asyncio
async def test_propfind_reports_unparsable_body(mock_http: Mock) -> None:
    respond_with(mock_http, make_response(207, TextBody("<html>")))

    with pytest.raises(ParseError):
        await propfind(mock_http, "/dav")


# MKCOL


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [201, 405, 409, 500])
async def test_mkcol_returns_response_whatever_the_status(
    mock_http: Mock, status_code: int
) -> None:
    request = respond_with(mock_http, make_response(status_code))

    response = await mkcol(mock_http, "/dav/new/")

    assert response.status_code == status_code
    request.assert_awaited_once_with("MKCOL", "/dav/new/")


# DELETE


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [200, 204])
async def test_delete_accepts_success(mock_http: Mock, status_code: int) -> None:
    request = respond_with(mock_http, make_response(status_code))

    await delete(mock_http, "/dav/a.jpg")

    request.assert_awaited_once_with("DELETE", "/dav/a.jpg")


@pytest.mark.asyncio
async def test_delete_raises_on_not_found(mock_http: Mock) -> None:
    respond_with(mock_http, make_response(404))

    with pytest.raises(WebDavError, match="Failed to delete item: 404 Not Found"):
        await delete(mock_http, "/dav/a.jpg")


# MOVE


@pytest.mark.asyncio
async def test_move_sends_destination_and_overwrite(mock_http: Mock) -> None:
    request = respond_with(mock_http, make_response(201))

    await move(mock_http, "/dav/a.jpg", "/dav/b.jpg")

    request.assert_awaited_once_with(
        "MOVE", "/dav/a.jpg", headers={"Destination": "/dav/b.jpg", "Overwrite": "T"}
    )


@pytest.mark.asyncio
async def test_move_without_overwrite(mock_http: Mock) -> None:
    request = respond_with(mock_http, make_response(200))

    await move(mock_http, "/dav/a.jpg", "/dav/b.jpg", overwrite=False)

    assert request.await_args.kwargs["headers"]["Overwrite"] == "F"


@pytest.mark.asyncio
async def test_move_raises_on_precondition_failed(mock_http: Mock) -> None:
    respond_with(mock_http, make_response(412))

    with pytest.raises(WebDavError, match="Failed to move item") as exc_info:
        await move(mock_http, "/dav/a.jpg", "/dav/b.jpg")

    assert exc_info.value.path == "/dav/a.jpg"


# GET


@pytest.mark.asyncio
async def test_get_returns_response(mock_http: Mock) -> None:
    respond_with(mock_http, make_response(200, BinaryBody(b"\x89PNG")))

    response = await get(mock_http, "/dav/a.png")

    assert response.payload == b"\x89PNG"


@pytest.mark.asyncio
async def test_get_raises_on_not_found(mock_http: Mock) -> None:
    respond_with(mock_http, make_response(404))

    with pytest.raises(WebDavError, match="Failed to get file: 404 Not Found"):
        await get(mock_http, "/dav/missing.jpg")


# PUT


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [200, 201, 204])
async def test_put_accepts_success(mock_http: Mock, status_code: int) -> None:
    request = respond_with(mock_http, make_response(status_code))

    response = await put(mock_http, "/dav/a.jpg", b"data")

    assert response.status_code == status_code
    request.assert_awaited_once_with(
        "PUT",
        "/dav/a.jpg",
        headers={"Content-Type": "application/octet-stream"},
        content=b"data",
    )


@pytest.mark.asyncio
async def test_put_raises_on_insufficient_storage(mock_http: Mock) -> None:
    respond_with(mock_http, make_response(507))

    with pytest.raises(WebDavError, match="Failed to upload file") as exc_info:
        await put(mock_http, "/dav/a.jpg", b"data")

    assert exc_info.value.status_code == 507
