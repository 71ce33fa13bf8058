"""Endpoints for reading the manifests of mod archives."""

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException

from zipmod_dedup.config import settings
from zipmod_dedup.errors import ManifestError
from zipmod_dedup.models.mod import ManifestData
from zipmod_dedup.routers.conflicts import manifest_out
from zipmod_dedup.routers.deps import ScanState, get_conflict_set_or_404, get_scan_state
from zipmod_dedup.schemas.conflicts import ManifestOut, ManifestRequest
from zipmod_dedup.services.manifest_reader import read_manifest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mods", tags=["mods"])


def _read(path: str) -> ManifestData:
    return read_manifest(path, settings.manifest_entry)


@router.post("/manifest", response_model=ManifestOut)
async def load_entry_manifest(
    body: ManifestRequest,
    state: ScanState = Depends(get_scan_state),
) -> ManifestOut:
    """Load the manifest of a listed mod, caching it on the entry."""
    conflict_set = get_conflict_set_or_404(state)
    if conflict_set.entry(body.path) is None:
        raise HTTPException(404, f"Mod '{body.path}' is not part of the current scan")
    try:
        manifest = await asyncio.to_thread(conflict_set.load_manifest, body.path, _read)
    except ManifestError as exc:
        logger.warning("Failed to load manifest for %s: %s", body.path, exc.reason)
        raise HTTPException(422, str(exc)) from exc
    if manifest is None:
        raise HTTPException(409, f"Mod '{body.path}' was removed while its manifest loaded")
    return manifest_out(manifest)


@router.get("/manifest", response_model=ManifestOut)
async def read_archive_manifest(path: str) -> ManifestOut:
    """Read a manifest from any archive without touching the current scan."""
    try:
        manifest = await asyncio.to_thread(_read, path)
    except ManifestError as exc:
        raise HTTPException(422, str(exc)) from exc
    return manifest_out(manifest)
