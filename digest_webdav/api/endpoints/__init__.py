"""
WebDAV endpoint functions, one per verb.
"""

from digest_webdav.api.endpoints.dav import delete, get, mkcol, move, propfind, put

__all__ = ["delete", "get", "mkcol", "move", "propfind", "put"]
