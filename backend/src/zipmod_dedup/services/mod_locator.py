"""Resolve mod file names from the log to files on disk.

Sideloader logs names relative to the mods folder. Those are tried as relative
paths first; anything left is found by walking each search root once and
comparing basenames case-insensitively, since the logs come from a Windows
game.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from zipmod_dedup.errors import LocatorError
from zipmod_dedup.models.mod import ModEntry
from zipmod_dedup.utils.paths import file_basename, relative_parts

logger = logging.getLogger(__name__)


@dataclass
class LocateResult:
    entries: dict[str, ModEntry] = field(default_factory=dict)
    unresolved: set[str] = field(default_factory=set)
    io_errors: int = 0


def _created_at(st: os.stat_result) -> datetime | None:
    ts = getattr(st, "st_birthtime", None)
    if ts is None and sys.platform == "win32":
        ts = st.st_ctime
    if ts is None:
        return None
    return datetime.fromtimestamp(ts, tz=UTC)


def build_mod_entry(path: str) -> ModEntry:
    """Stat ``path`` and return a ``ModEntry`` for it.

    Raises:
        OSError: If the file metadata cannot be read.
    """
    st = os.stat(path)
    return ModEntry(
        name=os.path.basename(path),
        path=os.path.abspath(path),
        size=st.st_size,
        created=_created_at(st),
    )


def _walk_root(root: str, on_error: Callable[[OSError], None]) -> Iterable[tuple[str, str]]:
    """Yield ``(dirpath, filename)`` pairs under ``root`` in sorted order."""
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            yield dirpath, filename


def _readable_roots(roots: Sequence[str], result: LocateResult) -> list[str]:
    """Existing, readable roots in priority order, each resolved directory once."""
    readable: list[str] = []
    seen: set[str] = set()
    for root in roots:
        real = os.path.realpath(root)
        if real in seen:
            continue
        seen.add(real)
        if not os.path.isdir(root):
            logger.info("Mod root %s does not exist, skipping", root)
            continue
        try:
            os.scandir(root).close()
        except OSError as exc:
            logger.warning("Cannot read mod root %s: %s", root, exc)
            result.io_errors += 1
            continue
        readable.append(root)
    return readable


def _add_entry(result: LocateResult, names: Iterable[str], full_path: str) -> None:
    try:
        entry = build_mod_entry(full_path)
    except OSError as exc:
        logger.warning("Cannot stat %s: %s", full_path, exc)
        result.io_errors += 1
        return
    for name in names:
        result.entries[name] = entry


def locate_mods(names: Iterable[str], roots: Sequence[str]) -> LocateResult:
    """Find each of ``names`` under ``roots``.

    A name logged with a folder (``Sideloader Modpack\\x.zipmod``) is first
    looked up at that relative path under each root. Names still missing are
    then matched on their basename during a recursive walk. Roots are searched
    in order and the first match wins. Files whose metadata cannot be read are
    skipped and counted in ``io_errors``.

    Raises:
        LocatorError: If names were requested but none of the roots is readable.
    """
    start = time.perf_counter()
    result = LocateResult()

    requested = list(dict.fromkeys(names))
    if not requested:
        return result

    readable = _readable_roots(roots, result)
    if not readable:
        raise LocatorError(f"None of the mod roots could be read: {', '.join(roots)}")

    for root in readable:
        for name in requested:
            parts = relative_parts(name)
            if name in result.entries or len(parts) < 2:
                continue
            full_path = os.path.join(root, *parts)
            if os.path.isfile(full_path):
                _add_entry(result, [name], full_path)

    wanted: dict[str, list[str]] = {}
    for name in requested:
        if name not in result.entries:
            wanted.setdefault(file_basename(name).casefold(), []).append(name)

    for root in readable:
        if len(result.entries) == len(requested):
            break

        def _on_walk_error(exc: OSError) -> None:
            logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc)
            result.io_errors += 1

        for dirpath, filename in _walk_root(root, _on_walk_error):
            pending = [n for n in wanted.get(filename.casefold(), ()) if n not in result.entries]
            if pending:
                _add_entry(result, pending, os.path.join(dirpath, filename))

    result.unresolved = set(requested) - set(result.entries)
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        "Located %d/%d mod files (%d unresolved, %d I/O errors) in %dms",
        len(result.entries),
        len(requested),
        len(result.unresolved),
        result.io_errors,
        elapsed_ms,
    )
    return result
