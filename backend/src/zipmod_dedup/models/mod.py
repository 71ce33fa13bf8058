"""Mod files resolved on disk and the metadata embedded in them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ManifestData:
    """Identity metadata from a package's ``manifest.xml``."""

    guid: str
    name: str | None = None
    version: str | None = None
    author: str | None = None
    description: str | None = None


@dataclass(eq=False, slots=True)
class ModEntry:
    """A mod archive found on disk.

    Entries are identified by ``path``: two entries with the same path are the
    same mod. ``manifest`` stays ``None`` until it is loaded on demand.
    """

    name: str
    path: str
    size: int
    created: datetime | None = None
    manifest: ManifestData | None = field(default=None, compare=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModEntry):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)
