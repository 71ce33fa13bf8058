"""Read-only access to mod archives.

Sideloader packages (``.zipmod``) are plain ZIP containers under a different
extension, so a single random-access ZIP handler covers every supported format.
"""

from __future__ import annotations

import zipfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

SUPPORTED_EXTENSIONS = {".zipmod", ".zip"}


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    filename: str
    is_dir: bool
    size: int = 0

    @property
    def basename(self) -> str:
        return self.filename.rstrip("/").rsplit("/", 1)[-1]


class ArchiveHandler(ABC):
    """Base class for archive format handlers."""

    @abstractmethod
    def list_entries(self) -> list[ArchiveEntry]:
        """Return all entries in the archive."""

    @abstractmethod
    def read_file(self, entry: ArchiveEntry) -> bytes:
        """Read the contents of a single file entry."""

    def find_entry(self, name: str) -> ArchiveEntry | None:
        """Locate a file entry by name, case-insensitively.

        An entry at the archive root wins over one nested in a folder; among
        nested entries the shallowest one is returned.
        """
        wanted = name.lower()
        matches = [
            e for e in self.list_entries() if not e.is_dir and e.basename.lower() == wanted
        ]
        if not matches:
            return None
        return min(matches, key=lambda e: e.filename.count("/"))

    @abstractmethod
    def close(self) -> None:
        """Release resources."""

    def __enter__(self) -> ArchiveHandler:
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()


class ZipHandler(ArchiveHandler):
    """Handler for .zip/.zipmod archives using stdlib zipfile."""

    def __init__(self, path: str | Path) -> None:
        self._zf = zipfile.ZipFile(path, "r")
        self._entries: list[ArchiveEntry] | None = None

    def list_entries(self) -> list[ArchiveEntry]:
        if self._entries is None:
            self._entries = [
                ArchiveEntry(
                    filename=info.filename,
                    is_dir=info.is_dir(),
                    size=info.file_size,
                )
                for info in self._zf.infolist()
            ]
        return self._entries

    def read_file(self, entry: ArchiveEntry) -> bytes:
        return self._zf.read(entry.filename)

    def close(self) -> None:
        self._zf.close()


def open_archive(path: str | Path) -> ArchiveHandler:
    """Open an archive file and return the appropriate handler.

    Raises:
        ValueError: If the file extension is not supported.
        FileNotFoundError: If the file does not exist.
        zipfile.BadZipFile: If the archive is corrupt.
    """
    path = Path(path)
    ext = path.suffix.lower()

    if ext in SUPPORTED_EXTENSIONS:
        return ZipHandler(path)

    raise ValueError(f"Unsupported archive format: {ext}")
