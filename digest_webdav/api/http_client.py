"""
Async HTTP client with Digest authentication.

Every request runs the challenge/response cycle: an unauthenticated probe,
and on 401 a single retry carrying a freshly computed Authorization header.
"""

import asyncio
from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from digest_webdav.auth.digest import (
    build_authorization_header,
    compute_ha1,
    compute_ha2,
    compute_response,
    find_digest_challenge,
    generate_client_nonce,
    parse_challenge,
)
from digest_webdav.config import WebDavConfig
from digest_webdav.exceptions import (
    AuthenticationFailedError,
    ParseError,
    TransportError,
    WebDavClientError,
)
from digest_webdav.models.auth import AuthSession
from digest_webdav.models.http import BinaryBody, DavResponse, TextBody, is_binary_content_type

logger = structlog.get_logger(__name__)

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "cookie",
        "set-cookie",
        "proxy-authorization",
    }
)


def sanitize_for_log(data: Mapping[str, Any]) -> dict[str, Any]:
    """
    Remove sensitive fields from a mapping before logging.

    Keys are matched case-insensitively so header maps can be passed as is.
    Nested mappings are sanitized recursively.

    Args:
        data: Mapping that may contain sensitive values.

    Returns:
        Copy with sensitive values replaced by "***".
    """
    result = {}
    for key, value in data.items():
        if key.lower() in SENSITIVE_KEYS:
            result[key] = "***"
        elif isinstance(value, Mapping):
            result[key] = sanitize_for_log(value)
        else:
            result[key] = value
    return result


class DigestHttpClient:
    """
    Async HTTP client owning one Digest authentication session.

    Requests are serialized: the nonce count must reach the server in order,
    so a second request waits until the first one has completed both of its
    round trips.
    """

    def __init__(
        self,
        config: WebDavConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            config: Client configuration.
            transport: Optional transport for testing (mock transport).
        """
        self._config = config
        self._transport = transport
        self._log = logger.bind(server=config.origin)

        self._session = AuthSession()
        self._client: httpx.AsyncClient | None = None

        self._client_lock = asyncio.Lock()
        self._request_lock = asyncio.Lock()

    async def __aenter__(self) -> "DigestHttpClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self._config.origin,
                    timeout=self._config.timeout,
                    transport=self._transport,
                    headers={"User-Agent": self._config.user_agent},
                )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client. Safe to call more than once."""
        async with self._client_lock:
            if self._client is None:
                return
            await self._client.aclose()
            self._client = None

    @property
    def session(self) -> AuthSession:
        """Current authentication session snapshot."""
        return self._session

    @property
    def nonce_count(self) -> int:
        """Number of authenticated requests issued by this client."""
        return self._session.nonce_count

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        content: bytes | str | None = None,
    ) -> DavResponse:
        """
        Make a Digest-authenticated request.

        Args:
            method: HTTP or WebDAV method (GET, PROPFIND, MKCOL, ...).
            path: Absolute server path, already URL-encoded, may carry a query.
            headers: Extra request headers.
            content: Request body.

        Returns:
            The response of the probe if it was not a 401, otherwise the
            response of the authenticated retry.

        Raises:
            AuthChallengeError: If a 401 carries no Digest challenge.
            AuthenticationFailedError: If the authenticated retry is rejected.
            TransportError: If the server cannot be reached.
            ParseError: If the response body cannot be decoded.
        """
        async with self._request_lock:
            try:
                return await self._authenticated_request(method, path, headers, content)
            except WebDavClientError as e:
                self._trace("Request failed", method=method, path=path, error=str(e))
                raise

    async def _authenticated_request(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str] | None,
        content: bytes | str | None,
    ) -> DavResponse:
        self._trace("Making initial request (expecting 401)", method=method, path=path)
        response = await self._send(method, path, headers, content)
        if response.status_code != httpx.codes.UNAUTHORIZED:
            return response

        self._trace("Received 401, processing digest challenge", method=method, path=path)
        header = find_digest_challenge(response.headers.get_list("www-authenticate"))
        self._trace("Parsing WWW-Authenticate header", header=header)
        challenge = parse_challenge(header)
        self._session = self._session.with_challenge(challenge)
        self._trace(
            "Parsed authentication parameters",
            realm=challenge.realm,
            nonce=challenge.nonce,
            qop=challenge.qop,
            opaque=challenge.opaque,
        )

        self._trace("Making authenticated request", method=method, path=path)
        response = await self._send(method, path, headers, content, authorize=True)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            msg = "Authentication failed - invalid credentials or server configuration"
            raise AuthenticationFailedError(msg, method=method, path=path)
        return response

    def _authorization_header(self, method: str, uri: str) -> str:
        session = self._session.next_request(generate_client_nonce())
        self._session = session

        ha1 = compute_ha1(self._config.username, session.realm, self._config.password)
        ha2 = compute_ha2(method, uri)
        self._trace(
            "Generated HA1 and HA2", ha1=ha1, ha2=ha2, nc=session.nc, cnonce=session.client_nonce
        )
        response = compute_response(ha1, ha2, session)
        header = build_authorization_header(
            session, username=self._config.username, uri=uri, response=response
        )
        self._trace("Built authorization header", response=response, header=header)
        return header

    async def _send(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str] | None,
        content: bytes | str | None,
        *,
        authorize: bool = False,
    ) -> DavResponse:
        client = await self._ensure_client()

        request_headers = httpx.Headers(headers or {})
        if "authorization" in request_headers:
            del request_headers["authorization"]
        request = client.build_request(method, path, headers=request_headers, content=content)
        if authorize:
            uri = request.url.raw_path.decode("ascii")
            request.headers["Authorization"] = self._authorization_header(method, uri)

        self._trace(
            "Request options",
            method=method,
            url=str(request.url),
            headers=sanitize_for_log(dict(request.headers)),
        )
        try:
            response = await client.send(request)
        except httpx.TransportError as e:
            msg = f"{method} request failed: {e}"
            raise TransportError(msg, method=method, path=path) from e
        except httpx.DecodingError as e:
            msg = f"Failed to decode {method} response body: {e}"
            raise ParseError(msg, method=method, path=path) from e

        self._trace(
            "Received response",
            status_code=response.status_code,
            status_message=response.reason_phrase,
            headers=sanitize_for_log(dict(response.headers)),
        )
        return self._envelope(response)

    def _envelope(self, response: httpx.Response) -> DavResponse:
        content_type = response.headers.get("content-type", "")
        if is_binary_content_type(content_type):
            body = BinaryBody(response.content)
            self._trace(
                "Binary response complete", data_length=len(body), content_type=content_type
            )
        else:
            body = TextBody(response.text)
            self._trace(
                "Text response complete", data_length=len(body), data=self._truncate(body.text)
            )
        return DavResponse(
            status_code=response.status_code,
            reason_phrase=response.reason_phrase,
            headers=response.headers,
            body=body,
        )

    def _truncate(self, text: str) -> str:
        limit = self._config.log_body_limit
        return text if len(text) <= limit else text[:limit] + "..."

    def _trace(self, event: str, **kw: Any) -> None:
        if self._config.verbose:
            self._log.debug(event, **kw)
