"""
Digest authentication primitives.
"""

from digest_webdav.auth.digest import (
    build_authorization_header,
    compute_ha1,
    compute_ha2,
    compute_response,
    find_digest_challenge,
    generate_client_nonce,
    md5_hex,
    parse_challenge,
    parse_directives,
)

__all__ = [
    "build_authorization_header",
    "compute_ha1",
    "compute_ha2",
    "compute_response",
    "find_digest_challenge",
    "generate_client_nonce",
    "md5_hex",
    "parse_challenge",
    "parse_directives",
]
