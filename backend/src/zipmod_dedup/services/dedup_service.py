"""Run one complete scan: log text -> warnings -> files on disk -> conflicts."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Sequence

from zipmod_dedup.models.conflict import ScanDiagnostics
from zipmod_dedup.services.conflicts.aggregator import aggregate, resolver_from
from zipmod_dedup.services.conflicts.conflict_set import ConflictSet
from zipmod_dedup.services.log_scanner import LogWarning, scan_log
from zipmod_dedup.services.mod_locator import locate_mods

logger = logging.getLogger(__name__)


def referenced_names(warnings: Iterable[LogWarning]) -> set[str]:
    """Every file name (loaded or skipped) mentioned by a warning."""
    names: set[str] = set()
    for warning in warnings:
        names.add(warning.loaded_name)
        names.update(warning.skipped_names)
    return names


def find_conflicts(log_text: str, roots: Sequence[str]) -> ConflictSet:
    """Build the conflict set for ``log_text`` against files under ``roots``.

    Raises:
        LocatorError: If warnings were found but no root could be read.
    """
    start = time.perf_counter()
    warnings = scan_log(log_text)
    names = referenced_names(warnings)

    located = locate_mods(names, roots)
    diagnostics = ScanDiagnostics(io_errors=located.io_errors)
    conflicts = aggregate(warnings, resolver_from(located.entries), diagnostics)

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    logger.info(
        "Scan found %d conflicts from %d warnings (%d dropped, %d unresolved names) in %dms",
        len(conflicts),
        diagnostics.lines_matched,
        diagnostics.warnings_dropped,
        len(diagnostics.unresolved),
        elapsed_ms,
    )
    return ConflictSet(conflicts, diagnostics)
