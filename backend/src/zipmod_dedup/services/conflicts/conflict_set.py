"""Thread-safe owner of one scan's conflict list.

The API keeps a single ``ConflictSet`` per scan. Removals and manifest
enrichment run from worker threads, so every mutation goes through one lock.
Manifest archives are read outside the lock and applied afterwards, unless the
entry has left the set (or the set was superseded) in the meantime.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from zipmod_dedup.models.conflict import Conflict, ScanDiagnostics
from zipmod_dedup.models.mod import ManifestData, ModEntry
from zipmod_dedup.services.conflicts.aggregator import (
    remove_all_skipped,
    remove_loaded,
    remove_skipped,
)
from zipmod_dedup.services.manifest_reader import read_manifest

logger = logging.getLogger(__name__)

ManifestReader = Callable[[str], ManifestData]


def _copy(conflict: Conflict) -> Conflict:
    return Conflict(loaded=conflict.loaded, skipped=list(conflict.skipped))


class ConflictSet:
    def __init__(
        self,
        conflicts: list[Conflict],
        diagnostics: ScanDiagnostics | None = None,
    ) -> None:
        self._conflicts = conflicts
        self.diagnostics = diagnostics if diagnostics is not None else ScanDiagnostics()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def conflicts(self) -> list[Conflict]:
        """Snapshot of the current conflicts, in result order.

        Each conflict is copied, so later removals never show through. The
        entries themselves are shared.
        """
        with self._lock:
            return [_copy(c) for c in self._conflicts]

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        with self._lock:
            return len(self._conflicts)

    def close(self) -> None:
        """Mark the set as superseded by a newer scan."""
        with self._lock:
            self._closed = True

    def _find(self, loaded_path: str) -> Conflict | None:
        for conflict in self._conflicts:
            if conflict.loaded.path == loaded_path:
                return conflict
        return None

    def _entry(self, path: str) -> ModEntry | None:
        for conflict in self._conflicts:
            for entry in conflict.entries:
                if entry.path == path:
                    return entry
        return None

    def find(self, loaded_path: str) -> Conflict | None:
        with self._lock:
            conflict = self._find(loaded_path)
            return _copy(conflict) if conflict is not None else None

    def entry(self, path: str) -> ModEntry | None:
        with self._lock:
            return self._entry(path)

    def remove_skipped(self, loaded_path: str, path: str) -> bool:
        with self._lock:
            conflict = self._find(loaded_path)
            if conflict is None:
                return False
            return remove_skipped(self._conflicts, conflict, path)

    def remove_loaded(self, loaded_path: str) -> bool:
        with self._lock:
            conflict = self._find(loaded_path)
            if conflict is None:
                return False
            return remove_loaded(self._conflicts, conflict)

    def remove_all_skipped(self, loaded_path: str) -> bool:
        with self._lock:
            conflict = self._find(loaded_path)
            if conflict is None:
                return False
            return remove_all_skipped(self._conflicts, conflict)

    def load_manifest(
        self,
        path: str,
        reader: ManifestReader = read_manifest,
    ) -> ManifestData | None:
        """Load the manifest of the entry at ``path`` once.

        Returns the stored manifest, or ``None`` when the entry is not (or no
        longer) part of this set.

        Raises:
            ManifestError: If the archive's manifest cannot be read.
        """
        with self._lock:
            entry = self._entry(path)
            if entry is None or self._closed:
                return None
            if entry.manifest is not None:
                return entry.manifest

        manifest = reader(entry.path)

        with self._lock:
            if self._closed or self._entry(path) is not entry:
                logger.debug("Discarding manifest for %s, entry no longer listed", path)
                return None
            if entry.manifest is None:
                entry.manifest = manifest
            return entry.manifest
