import httpx
import pytest

from digest_webdav.models.http import BinaryBody, DavResponse, TextBody, is_binary_content_type


@pytest.mark.parametrize(
    "content_type",
    [
        "image/jpeg",
        "image/png",
        "application/octet-stream",
        "application/xml; charset=utf-8",
        "video/mp4",
        "audio/mpeg",
    ],
)
def test_is_binary_content_type_for_binary_types(content_type: str) -> None:
    assert is_binary_content_type(content_type) is True


@pytest.mark.parametrize("content_type", ["", "text/xml", "text/html; charset=utf-8", "text/plain"])
def test_is_binary_content_type_for_text_types(content_type: str) -> None:
    assert is_binary_content_type(content_type) is False


def test_dav_response_payload_follows_body_kind() -> None:
    binary = DavResponse(
        status_code=200, reason_phrase="OK", headers=httpx.Headers(), body=BinaryBody(b"\xff")
    )
    text = DavResponse(
        status_code=200, reason_phrase="OK", headers=httpx.Headers(), body=TextBody("hello")
    )

    assert binary.is_binary is True
    assert binary.payload == b"\xff"
    assert text.is_binary is False
    assert text.payload == "hello"
    assert len(text.body) == 5
