"""Shared FastAPI dependencies used across routers."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, Request

from zipmod_dedup.services.conflicts.conflict_set import ConflictSet


@dataclass
class ScanState:
    """The conflict set of the most recent scan, owned by the application."""

    game_path: str | None = None
    conflict_set: ConflictSet | None = None

    def replace(self, game_path: str, conflict_set: ConflictSet) -> None:
        previous = self.conflict_set
        self.game_path = game_path
        self.conflict_set = conflict_set
        if previous is not None:
            previous.close()


def get_scan_state(request: Request) -> ScanState:
    return request.app.state.scan_state


def get_conflict_set_or_404(state: ScanState) -> ConflictSet:
    """Return the current conflict set, raising 404 if nothing was scanned."""
    if state.conflict_set is None:
        raise HTTPException(404, "No scan has been run yet")
    return state.conflict_set
