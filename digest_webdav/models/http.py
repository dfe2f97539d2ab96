"""
HTTP response envelope returned by the digest transport.
"""

from dataclasses import dataclass

import httpx

_BINARY_MARKERS = ("application/", "video/", "audio/")


@dataclass(frozen=True, slots=True)
class TextBody:
    """Body decoded as text."""

    text: str

    def __len__(self) -> int:
        return len(self.text)


@dataclass(frozen=True, slots=True)
class BinaryBody:
    """Body kept as raw bytes."""

    data: bytes

    def __len__(self) -> int:
        return len(self.data)


ResponseBody = TextBody | BinaryBody


def is_binary_content_type(content_type: str) -> bool:
    """
    Decide whether a response body should be kept as bytes.

    Images, ``application/*``, video and audio are binary; everything else
    (XML served as ``text/xml``, HTML, plain text, missing header) is text.
    """
    if content_type.startswith("image/"):
        return True
    return any(marker in content_type for marker in _BINARY_MARKERS)


@dataclass(frozen=True, kw_only=True)
class DavResponse:
    """
    A fully buffered HTTP response.

    Attributes:
        status_code: HTTP status code.
        reason_phrase: HTTP status text.
        headers: Response headers (case-insensitive).
        body: Text or binary payload, chosen from the Content-Type.
    """

    status_code: int
    reason_phrase: str
    headers: httpx.Headers
    body: ResponseBody

    @property
    def is_binary(self) -> bool:
        return isinstance(self.body, BinaryBody)

    @property
    def payload(self) -> bytes | str:
        """The body as bytes or str, depending on its kind."""
        if isinstance(self.body, BinaryBody):
            return self.body.data
        return self.body.text
