"""Endpoints for scanning a game log and pruning the resulting conflicts."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from zipmod_dedup.config import settings
from zipmod_dedup.errors import LocatorError, LogNotFoundError, LogReadError
from zipmod_dedup.models.conflict import Conflict, ScanDiagnostics
from zipmod_dedup.models.mod import ManifestData, ModEntry
from zipmod_dedup.routers.deps import ScanState, get_conflict_set_or_404, get_scan_state
from zipmod_dedup.schemas.conflicts import (
    ConflictOut,
    ManifestOut,
    ModEntryOut,
    RemovalResult,
    RemoveAllSkippedRequest,
    RemoveLoadedRequest,
    RemoveSkippedRequest,
    ScanDiagnosticsOut,
    ScanRequest,
    ScanResult,
)
from zipmod_dedup.services.conflicts.aggregator import is_sideloader_pack, is_size_duplicate
from zipmod_dedup.services.conflicts.conflict_set import ConflictSet
from zipmod_dedup.services.dedup_service import find_conflicts
from zipmod_dedup.services.log_source import read_game_log
from zipmod_dedup.utils.paths import mod_roots

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/conflicts", tags=["conflicts"])


def manifest_out(manifest: ManifestData) -> ManifestOut:
    return ManifestOut.model_validate(manifest, from_attributes=True)


def mod_entry_out(entry: ModEntry, conflict: Conflict) -> ModEntryOut:
    manifest = entry.manifest
    return ModEntryOut(
        name=entry.name,
        path=entry.path,
        size=entry.size,
        created=entry.created,
        manifest=manifest_out(manifest) if manifest is not None else None,
        size_duplicate=is_size_duplicate(
            conflict, entry, include_zero=settings.size_duplicate_include_zero
        ),
        sideloader_pack=is_sideloader_pack(entry),
    )


def conflicts_out(conflict_set: ConflictSet) -> list[ConflictOut]:
    return [
        ConflictOut(
            loaded=mod_entry_out(c.loaded, c),
            skipped=[mod_entry_out(m, c) for m in c.skipped],
        )
        for c in conflict_set.conflicts
    ]


def diagnostics_out(diag: ScanDiagnostics) -> ScanDiagnosticsOut:
    return ScanDiagnosticsOut(
        lines_matched=diag.lines_matched,
        warnings_dropped=diag.warnings_dropped,
        unresolved_names=diag.unresolved_names,
        unresolved=sorted(diag.unresolved),
        io_errors=diag.io_errors,
    )


def _run_scan(body: ScanRequest) -> ConflictSet:
    log_text = body.log
    if log_text is None:
        log_text = read_game_log(body.game_path, settings.log_candidates)
    roots = mod_roots(body.game_path, settings.mod_subdirs)
    return find_conflicts(log_text, roots)


@router.post("/scan", response_model=ScanResult)
async def scan_conflicts(
    body: ScanRequest,
    state: ScanState = Depends(get_scan_state),
) -> ScanResult:
    """Scan the game log and replace the current conflict list."""
    try:
        conflict_set = await asyncio.to_thread(_run_scan, body)
    except LogNotFoundError as exc:
        raise HTTPException(404, str(exc)) from exc
    except LogReadError as exc:
        raise HTTPException(500, str(exc)) from exc
    except LocatorError as exc:
        raise HTTPException(422, str(exc)) from exc

    state.replace(body.game_path, conflict_set)
    return ScanResult(
        game_path=body.game_path,
        conflicts=conflicts_out(conflict_set),
        diagnostics=diagnostics_out(conflict_set.diagnostics),
    )


@router.get("/", response_model=ScanResult)
def list_conflicts(state: ScanState = Depends(get_scan_state)) -> ScanResult:
    """Return the conflicts of the last scan (empty if none was run)."""
    if state.conflict_set is None:
        return ScanResult(conflicts=[], diagnostics=ScanDiagnosticsOut())
    return ScanResult(
        game_path=state.game_path,
        conflicts=conflicts_out(state.conflict_set),
        diagnostics=diagnostics_out(state.conflict_set.diagnostics),
    )


@router.post("/remove-skipped", response_model=RemovalResult)
def remove_skipped(
    body: RemoveSkippedRequest,
    state: ScanState = Depends(get_scan_state),
) -> RemovalResult:
    """Forget a skipped file after the caller deleted it."""
    conflict_set = get_conflict_set_or_404(state)
    removed = conflict_set.remove_skipped(body.loaded_path, body.path)
    return RemovalResult(removed=removed, conflicts=conflicts_out(conflict_set))


@router.post("/remove-loaded", response_model=RemovalResult)
def remove_loaded(
    body: RemoveLoadedRequest,
    state: ScanState = Depends(get_scan_state),
) -> RemovalResult:
    """Forget a whole conflict after the caller deleted its loaded file."""
    conflict_set = get_conflict_set_or_404(state)
    removed = conflict_set.remove_loaded(body.loaded_path)
    return RemovalResult(removed=removed, conflicts=conflicts_out(conflict_set))


@router.post("/remove-skipped-all", response_model=RemovalResult)
def remove_all_skipped(
    body: RemoveAllSkippedRequest,
    state: ScanState = Depends(get_scan_state),
) -> RemovalResult:
    """Forget every skipped file of a conflict after the caller deleted them.

    The loaded file stays on disk; the conflict is resolved and leaves the list.
    """
    conflict_set = get_conflict_set_or_404(state)
    removed = conflict_set.remove_all_skipped(body.loaded_path)
    return RemovalResult(removed=removed, conflicts=conflicts_out(conflict_set))
