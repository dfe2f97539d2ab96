"""
Business logic services for the WebDAV client.
"""

from digest_webdav.services.directory_service import DirectoryService
from digest_webdav.services.file_service import FileService

__all__ = [
    "DirectoryService",
    "FileService",
]
