"""Fold log warnings and located files into ordered, deduplicated conflicts."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping

from zipmod_dedup.models.conflict import Conflict, ScanDiagnostics
from zipmod_dedup.models.mod import ModEntry
from zipmod_dedup.services.log_scanner import LogWarning

logger = logging.getLogger(__name__)

Resolver = Callable[[str], ModEntry | None]


def resolver_from(entries: Mapping[str, ModEntry]) -> Resolver:
    """Build a resolver backed by a name -> entry mapping."""
    return entries.get


def aggregate(
    warnings: Iterable[LogWarning],
    resolve: Resolver,
    diagnostics: ScanDiagnostics | None = None,
) -> list[Conflict]:
    """Merge warnings into one ``Conflict`` per loaded file.

    Warnings whose loaded file cannot be resolved are dropped, as are skipped
    names that cannot be resolved. Conflicts keep the order in which their
    loaded path first appears; skipped entries keep first-seen order and are
    unique by path.
    """
    diag = diagnostics if diagnostics is not None else ScanDiagnostics()
    by_loaded: dict[str, Conflict] = {}
    seen_skipped: dict[str, set[str]] = {}

    for warning in warnings:
        diag.lines_matched += 1

        loaded = resolve(warning.loaded_name)
        if loaded is None:
            logger.debug(
                "Line %d: loaded file %r not found, dropping warning",
                warning.line_number,
                warning.loaded_name,
            )
            diag.unresolved_names += 1
            diag.unresolved.add(warning.loaded_name)
            diag.warnings_dropped += 1
            continue

        skipped: list[ModEntry] = []
        for name in warning.skipped_names:
            entry = resolve(name)
            if entry is None:
                logger.debug("Line %d: skipped file %r not found", warning.line_number, name)
                diag.unresolved_names += 1
                diag.unresolved.add(name)
                continue
            if entry.path != loaded.path:
                skipped.append(entry)

        if not skipped:
            diag.warnings_dropped += 1
            continue

        conflict = by_loaded.get(loaded.path)
        if conflict is None:
            conflict = by_loaded[loaded.path] = Conflict(loaded=loaded)
            seen_skipped[loaded.path] = set()
        seen = seen_skipped[loaded.path]
        for entry in skipped:
            if entry.path not in seen:
                seen.add(entry.path)
                conflict.skipped.append(entry)

    return list(by_loaded.values())


def remove_skipped(conflicts: list[Conflict], conflict: Conflict, path: str) -> bool:
    """Drop the skipped entry at ``path`` from ``conflict``.

    The conflict itself leaves ``conflicts`` once it has nothing left to skip.
    Returns whether anything changed; calling it again is a no-op.
    """
    before = len(conflict.skipped)
    conflict.skipped[:] = [m for m in conflict.skipped if m.path != path]
    changed = len(conflict.skipped) != before
    if not conflict.skipped and conflict in conflicts:
        conflicts.remove(conflict)
        changed = True
    return changed


def remove_loaded(conflicts: list[Conflict], conflict: Conflict) -> bool:
    """Drop ``conflict`` entirely, whatever it still skips."""
    if conflict in conflicts:
        conflicts.remove(conflict)
        return True
    return False


def remove_all_skipped(conflicts: list[Conflict], conflict: Conflict) -> bool:
    """Drop every skipped entry of ``conflict``, keeping only its loaded file.

    With nothing left to skip the conflict leaves ``conflicts`` as well.
    """
    if conflict not in conflicts:
        return False
    conflict.skipped.clear()
    conflicts.remove(conflict)
    return True


def is_size_duplicate(conflict: Conflict, entry: ModEntry, *, include_zero: bool = True) -> bool:
    """Hint that ``entry`` may be byte-identical to another file of the conflict."""
    if entry.size == 0 and not include_zero:
        return False
    return sum(1 for m in conflict.entries if m.size == entry.size) > 1


def is_sideloader_pack(entry: ModEntry) -> bool:
    """Whether ``entry`` sits in one of the official "Sideloader Modpack" folders."""
    folders = re.split(r"[/\\]", entry.path)[:-1]
    return any(part.startswith("Sideloader") for part in folders)
