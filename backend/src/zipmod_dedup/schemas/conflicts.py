"""Request and response models for the conflict scan API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ManifestOut(BaseModel):
    guid: str
    name: str | None = None
    version: str | None = None
    author: str | None = None
    description: str | None = None


class ModEntryOut(BaseModel):
    name: str
    path: str
    size: int
    created: datetime | None = None
    manifest: ManifestOut | None = None
    size_duplicate: bool = False
    sideloader_pack: bool = False


class ConflictOut(BaseModel):
    loaded: ModEntryOut
    skipped: list[ModEntryOut]


class ScanDiagnosticsOut(BaseModel):
    lines_matched: int = 0
    warnings_dropped: int = 0
    unresolved_names: int = 0
    unresolved: list[str] = []
    io_errors: int = 0


class ScanRequest(BaseModel):
    game_path: str
    log: str | None = None


class ScanResult(BaseModel):
    game_path: str | None = None
    conflicts: list[ConflictOut]
    diagnostics: ScanDiagnosticsOut


class RemoveSkippedRequest(BaseModel):
    loaded_path: str
    path: str


class RemoveLoadedRequest(BaseModel):
    loaded_path: str


class RemoveAllSkippedRequest(BaseModel):
    loaded_path: str


class RemovalResult(BaseModel):
    removed: bool
    conflicts: list[ConflictOut]


class ManifestRequest(BaseModel):
    path: str
