"""
Digest authentication domain models.
"""

from dataclasses import dataclass, replace
from typing import Self


@dataclass(frozen=True, kw_only=True)
class DigestChallenge:
    """
    Directives parsed from a ``WWW-Authenticate: Digest ...`` header.

    Attributes:
        realm: Protection space announced by the server.
        nonce: Server nonce for this challenge.
        qop: Selected quality of protection, empty for legacy digest.
        opaque: Token to echo back verbatim, empty if not sent.
    """

    realm: str = ""
    nonce: str = ""
    qop: str = ""
    opaque: str = ""


@dataclass(frozen=True, kw_only=True)
class AuthSession:
    """
    Digest state of one client.

    A session is never mutated: a challenge or an authenticated request
    produces a new session which replaces the previous one. The nonce count
    survives challenges and only starts over with a new client.
    """

    realm: str = ""
    nonce: str = ""
    opaque: str = ""
    qop: str = ""
    nonce_count: int = 0
    client_nonce: str = ""

    @property
    def is_challenged(self) -> bool:
        """Check if a challenge has been received."""
        return bool(self.nonce)

    @property
    def nc(self) -> str:
        """Nonce count as sent on the wire (8 zero-padded digits)."""
        return f"{self.nonce_count:08d}"

    def with_challenge(self, challenge: DigestChallenge) -> Self:
        """Return a session holding the directives of a new challenge."""
        return replace(
            self,
            realm=challenge.realm,
            nonce=challenge.nonce,
            qop=challenge.qop,
            opaque=challenge.opaque,
        )

    def next_request(self, client_nonce: str) -> Self:
        """Return the session for the next authenticated request."""
        return replace(self, nonce_count=self.nonce_count + 1, client_nonce=client_nonce)
