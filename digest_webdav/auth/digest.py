"""
HTTP Digest Authentication (RFC 2617) primitives.

Everything here is a pure function of its inputs except
``generate_client_nonce``. The stateful part (which session is current)
lives in DigestHttpClient.
"""

import hashlib
import re
import secrets

from digest_webdav.exceptions import AuthChallengeError
from digest_webdav.models.auth import AuthSession, DigestChallenge

DIGEST_SCHEME = "Digest"
CLIENT_NONCE_BYTES = 16

# key=value or key="quoted, value"
_DIRECTIVE_RE = re.compile(r'([\w-]+)\s*=\s*(?:"((?:[^"\\]|\\.)*)"|([^\s,]*))')


def md5_hex(data: str) -> str:
    """Lowercase hex MD5 of a UTF-8 string."""
    return hashlib.md5(data.encode("utf-8")).hexdigest()


def compute_ha1(username: str, realm: str, password: str) -> str:
    """HA1 = MD5(username:realm:password)."""
    return md5_hex(f"{username}:{realm}:{password}")


def compute_ha2(method: str, uri: str) -> str:
    """HA2 = MD5(method:uri)."""
    return md5_hex(f"{method}:{uri}")


def compute_response(ha1: str, ha2: str, session: AuthSession) -> str:
    """
    Compute the ``response`` directive for a session snapshot.

    With a qop the nonce count, client nonce and qop are part of the hash;
    without one the legacy RFC 2069 formula is used.
    """
    if session.qop:
        return md5_hex(
            f"{ha1}:{session.nonce}:{session.nc}:{session.client_nonce}:{session.qop}:{ha2}"
        )
    return md5_hex(f"{ha1}:{session.nonce}:{ha2}")


def generate_client_nonce() -> str:
    """Fresh client nonce: 16 random bytes, hex-encoded."""
    return secrets.token_hex(CLIENT_NONCE_BYTES)


def find_digest_challenge(values: list[str]) -> str | None:
    """Pick the Digest challenge out of the server's WWW-Authenticate values."""
    for value in values:
        if value.startswith(DIGEST_SCHEME):
            return value
    return None


def parse_directives(header: str) -> dict[str, str]:
    """
    Parse the directive list of a Digest challenge.

    Keys are lowercased; quoted values are unquoted and may contain commas.
    """
    params = header[len(DIGEST_SCHEME) :] if header.startswith(DIGEST_SCHEME) else header
    directives = {}
    for match in _DIRECTIVE_RE.finditer(params):
        key, quoted, token = match.groups()
        value = quoted if quoted is not None else token
        directives[key.lower()] = value.replace('\\"', '"')
    return directives


def _select_qop(offered: str) -> str:
    options = [option.strip() for option in offered.split(",") if option.strip()]
    if "auth" in options:
        return "auth"
    return options[0] if options else ""


def parse_challenge(header: str | None) -> DigestChallenge:
    """
    Parse a ``WWW-Authenticate`` header value into a DigestChallenge.

    Args:
        header: Header value, or None if the server sent none.

    Returns:
        The parsed challenge.

    Raises:
        AuthChallengeError: If the header is missing or not a Digest challenge.
    """
    if not header or not header.startswith(DIGEST_SCHEME):
        msg = "Server did not return Digest authentication challenge"
        raise AuthChallengeError(msg, header=header)

    directives = parse_directives(header)
    return DigestChallenge(
        realm=directives.get("realm", ""),
        nonce=directives.get("nonce", ""),
        qop=_select_qop(directives.get("qop", "")),
        opaque=directives.get("opaque", ""),
    )


def build_authorization_header(
    session: AuthSession, *, username: str, uri: str, response: str
) -> str:
    """Build the ``Authorization`` header value for a computed response."""
    header = (
        f'{DIGEST_SCHEME} username="{username}", realm="{session.realm}", '
        f'nonce="{session.nonce}", uri="{uri}", response="{response}"'
    )
    if session.qop:
        header += f', qop={session.qop}, nc={session.nc}, cnonce="{session.client_nonce}"'
    if session.opaque:
        header += f', opaque="{session.opaque}"'
    return header
