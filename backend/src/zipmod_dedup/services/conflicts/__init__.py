"""Conflicts core: aggregation of log warnings and the owned result set."""

from zipmod_dedup.services.conflicts.aggregator import (
    aggregate,
    is_sideloader_pack,
    is_size_duplicate,
    remove_all_skipped,
    remove_loaded,
    remove_skipped,
    resolver_from,
)
from zipmod_dedup.services.conflicts.conflict_set import ConflictSet

__all__ = [
    "ConflictSet",
    "aggregate",
    "is_sideloader_pack",
    "is_size_duplicate",
    "remove_all_skipped",
    "remove_loaded",
    "remove_skipped",
    "resolver_from",
]
