"""Conflicts built from Sideloader "multiple versions detected" warnings."""

from __future__ import annotations

from dataclasses import dataclass, field

from zipmod_dedup.models.mod import ModEntry


@dataclass(eq=False, slots=True)
class Conflict:
    """One logical mod: the file the game loaded and the files it skipped.

    ``skipped`` is never empty and never contains ``loaded`` while the
    conflict is part of a result list.
    """

    loaded: ModEntry
    skipped: list[ModEntry] = field(default_factory=list)

    @property
    def entries(self) -> list[ModEntry]:
        return [self.loaded, *self.skipped]

    def skipped_paths(self) -> list[str]:
        return [m.path for m in self.skipped]


@dataclass(slots=True)
class ScanDiagnostics:
    """Counters describing what a scan dropped along the way."""

    lines_matched: int = 0
    warnings_dropped: int = 0
    unresolved_names: int = 0
    unresolved: set[str] = field(default_factory=set)
    io_errors: int = 0
