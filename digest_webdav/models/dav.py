"""
WebDAV domain models.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")
_TWO_PLACES = Decimal("0.01")


class EntryKind(StrEnum):
    """Kind of directory entry."""

    FILE = "file"
    FOLDER = "folder"


@dataclass(frozen=True, kw_only=True)
class FolderEntry:
    """A collection found in a directory listing."""

    path: str  # URL-escaped, as received

    @property
    def kind(self) -> EntryKind:
        return EntryKind.FOLDER

    def to_dict(self) -> dict[str, object]:
        return {"path": self.path, "type": str(self.kind)}


@dataclass(frozen=True, kw_only=True)
class FileEntry:
    """
    A non-collection resource found in a directory listing.

    Optional attributes are None when the server did not report them.
    ``last_modified`` is the server's date text, not parsed.
    """

    path: str
    size_bytes: int | None = None
    size_formatted: str | None = None
    last_modified: str | None = None
    content_type: str | None = None

    @property
    def kind(self) -> EntryKind:
        return EntryKind.FILE

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"path": self.path, "type": str(self.kind)}
        if self.size_bytes is not None:
            result["size"] = self.size_bytes
            result["size_formatted"] = self.size_formatted
        if self.last_modified is not None:
            result["last_modified"] = self.last_modified
        if self.content_type is not None:
            result["content_type"] = self.content_type
        return result


DirectoryEntry = FileEntry | FolderEntry


@dataclass(frozen=True, kw_only=True)
class DirectoryListing:
    """Entries of one PROPFIND ``Depth: 1`` listing, without the queried collection."""

    files: tuple[FileEntry, ...] = ()
    folders: tuple[FolderEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.files) + len(self.folders)

    def to_dict(self) -> dict[str, object]:
        return {
            "files": [entry.to_dict() for entry in self.files],
            "folders": [entry.to_dict() for entry in self.folders],
        }


@dataclass(frozen=True, kw_only=True)
class UploadResult:
    """Outcome of a successful PUT."""

    status_code: int
    status_message: str
    headers: dict[str, str] = field(default_factory=dict)
    success: bool = True

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "status_code": self.status_code,
            "status_message": self.status_message,
            "headers": dict(self.headers),
        }


@dataclass(frozen=True, kw_only=True)
class FileInfo:
    """Size of a downloaded file."""

    path: str
    size: int
    size_formatted: str

    def to_dict(self) -> dict[str, object]:
        return {"path": self.path, "size": self.size, "size_formatted": self.size_formatted}


@dataclass(frozen=True, kw_only=True)
class EntryError:
    """A per-path failure inside a batch operation."""

    path: str
    error: str

    def to_dict(self) -> dict[str, object]:
        return {"path": self.path, "error": self.error}


@dataclass(frozen=True, kw_only=True)
class BulkDeleteResult:
    deleted_count: int
    errors: tuple[EntryError, ...] = ()

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def to_dict(self) -> dict[str, object]:
        return {
            "deleted_count": self.deleted_count,
            "error_count": self.error_count,
            "errors": [error.to_dict() for error in self.errors],
        }


@dataclass(frozen=True, kw_only=True)
class FileInfoBatch:
    results: tuple[FileInfo, ...] = ()
    errors: tuple[EntryError, ...] = ()

    @property
    def total_count(self) -> int:
        return len(self.results) + len(self.errors)

    def to_dict(self) -> dict[str, object]:
        return {
            "results": [info.to_dict() for info in self.results],
            "errors": [error.to_dict() for error in self.errors],
            "success_count": len(self.results),
            "error_count": len(self.errors),
            "total_count": self.total_count,
        }


@dataclass(frozen=True, kw_only=True)
class ConnectionCheck:
    """Result of probing a server with a directory listing."""

    success: bool
    files: int = 0
    folders: int = 0
    error: str | None = None

    @property
    def items(self) -> int:
        return self.files + self.folders

    def to_dict(self) -> dict[str, object]:
        if not self.success:
            return {"success": False, "error": self.error}
        return {"success": True, "items": self.items, "files": self.files, "folders": self.folders}


def format_size(size_bytes: int) -> str:
    """
    Format a byte count the way directory listings display it.

    Uses 1024-based units up to TB, two decimals at most (halves round up)
    and no trailing zeros: ``0 Bytes``, ``512 Bytes``, ``1 KB``, ``1.5 KB``, ``2 MB``.

    Raises:
        ValueError: If size_bytes is negative.
    """
    if size_bytes < 0:
        msg = "size_bytes must be non-negative"
        raise ValueError(msg)
    if size_bytes == 0:
        return "0 Bytes"

    index = 0
    while index < len(_SIZE_UNITS) - 1 and size_bytes >= 1024 ** (index + 1):
        index += 1

    scaled = Decimal(size_bytes) / Decimal(1024**index)
    value = str(scaled.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)).rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[index]}"
