"""Tests for folding warnings into conflicts."""

import pytest

from zipmod_dedup.models.conflict import Conflict, ScanDiagnostics
from zipmod_dedup.models.mod import ModEntry
from zipmod_dedup.services.conflicts.aggregator import (
    aggregate,
    is_sideloader_pack,
    is_size_duplicate,
    remove_all_skipped,
    remove_loaded,
    remove_skipped,
    resolver_from,
)
from zipmod_dedup.services.log_scanner import LogWarning, scan_log


def _entry(name: str, size: int = 1) -> ModEntry:
    return ModEntry(name=name, path=f"/mods/{name}", size=size)


@pytest.fixture
def disk() -> dict[str, ModEntry]:
    return {n: _entry(n, size=i + 1) for i, n in enumerate(["a.zipmod", "b.zipmod", "c.zipmod", "d.zipmod"])}


def _shape(conflicts: list[Conflict]) -> list[tuple[str, list[str]]]:
    return [(c.loaded.path, c.skipped_paths()) for c in conflicts]


class TestAggregate:
    def test_single_warning(self, disk):
        conflicts = aggregate([LogWarning("a.zipmod", ("b.zipmod",))], resolver_from(disk))
        assert len(conflicts) == 1
        assert conflicts[0].loaded.name == "a.zipmod"
        assert [m.name for m in conflicts[0].skipped] == ["b.zipmod"]

    def test_unresolved_skipped_drops_warning_when_none_left(self, disk):
        del disk["b.zipmod"]
        diag = ScanDiagnostics()
        conflicts = aggregate([LogWarning("a.zipmod", ("b.zipmod",))], resolver_from(disk), diag)
        assert conflicts == []
        assert diag.unresolved_names == 1
        assert diag.unresolved == {"b.zipmod"}
        assert diag.warnings_dropped == 1

    def test_unresolved_skipped_dropped_individually(self, disk):
        del disk["b.zipmod"]
        diag = ScanDiagnostics()
        conflicts = aggregate(
            [LogWarning("a.zipmod", ("b.zipmod", "c.zipmod"))], resolver_from(disk), diag
        )
        assert _shape(conflicts) == [("/mods/a.zipmod", ["/mods/c.zipmod"])]
        assert diag.unresolved_names == 1
        assert diag.warnings_dropped == 0

    def test_unresolved_loaded_drops_warning(self, disk):
        del disk["a.zipmod"]
        diag = ScanDiagnostics()
        conflicts = aggregate([LogWarning("a.zipmod", ("b.zipmod",))], resolver_from(disk), diag)
        assert conflicts == []
        assert diag.unresolved == {"a.zipmod"}
        assert diag.warnings_dropped == 1

    def test_merges_warnings_with_same_loaded_path(self, disk):
        warnings = [
            LogWarning("a.zipmod", ("b.zipmod",)),
            LogWarning("a.zipmod", ("c.zipmod",)),
        ]
        conflicts = aggregate(warnings, resolver_from(disk))
        assert _shape(conflicts) == [("/mods/a.zipmod", ["/mods/b.zipmod", "/mods/c.zipmod"])]

    def test_merge_uses_resolved_path_not_name(self, disk):
        disk["A.ZIPMOD"] = disk["a.zipmod"]
        warnings = [
            LogWarning("a.zipmod", ("b.zipmod",)),
            LogWarning("A.ZIPMOD", ("c.zipmod",)),
        ]
        conflicts = aggregate(warnings, resolver_from(disk))
        assert len(conflicts) == 1
        assert conflicts[0].skipped_paths() == ["/mods/b.zipmod", "/mods/c.zipmod"]

    def test_union_of_skipped_deduplicates_by_path(self, disk):
        warnings = [
            LogWarning("a.zipmod", ("b.zipmod", "c.zipmod")),
            LogWarning("a.zipmod", ("c.zipmod", "b.zipmod", "d.zipmod")),
            LogWarning("a.zipmod", ("b.zipmod", "b.zipmod")),
        ]
        conflicts = aggregate(warnings, resolver_from(disk))
        assert conflicts[0].skipped_paths() == [
            "/mods/b.zipmod",
            "/mods/c.zipmod",
            "/mods/d.zipmod",
        ]

    def test_first_seen_order_of_loaded(self, disk):
        warnings = [
            LogWarning("c.zipmod", ("d.zipmod",)),
            LogWarning("a.zipmod", ("b.zipmod",)),
            LogWarning("c.zipmod", ("b.zipmod",)),
        ]
        conflicts = aggregate(warnings, resolver_from(disk))
        assert [c.loaded.name for c in conflicts] == ["c.zipmod", "a.zipmod"]

    def test_skipped_resolving_to_loaded_path_is_dropped(self, disk):
        disk["copy.zipmod"] = disk["a.zipmod"]
        conflicts = aggregate(
            [LogWarning("a.zipmod", ("copy.zipmod", "b.zipmod"))], resolver_from(disk)
        )
        assert conflicts[0].skipped_paths() == ["/mods/b.zipmod"]

    def test_only_self_skipped_drops_warning(self, disk):
        disk["copy.zipmod"] = disk["a.zipmod"]
        conflicts = aggregate([LogWarning("a.zipmod", ("copy.zipmod",))], resolver_from(disk))
        assert conflicts == []

    def test_invariant_holds(self, disk):
        warnings = [
            LogWarning("a.zipmod", ("a.zipmod", "b.zipmod")),
            LogWarning("b.zipmod", ("c.zipmod", "missing.zipmod")),
            LogWarning("missing.zipmod", ("d.zipmod",)),
            LogWarning("d.zipmod", ("missing.zipmod",)),
        ]
        for conflict in aggregate(warnings, resolver_from(disk)):
            assert conflict.skipped
            assert conflict.loaded.path not in conflict.skipped_paths()

    def test_idempotent(self, disk):
        log = "\n".join(
            [
                '[Warning:Sideloader] Multiple versions detected, only "a.zipmod" will be '
                'loaded. Skipped versions: "b.zipmod", "c.zipmod"',
                '[Warning:Sideloader] Multiple versions detected, only "d.zipmod" will be '
                'loaded. Skipped versions: "b.zipmod"',
            ]
        )
        warnings = scan_log(log)
        first = aggregate(warnings, resolver_from(disk))
        second = aggregate(warnings, resolver_from(disk))
        assert _shape(first) == _shape(second)
        assert len(first) == 2

    def test_counts_matched_lines(self, disk):
        diag = ScanDiagnostics()
        aggregate(
            [LogWarning("a.zipmod", ("b.zipmod",)), LogWarning("a.zipmod", ("c.zipmod",))],
            resolver_from(disk),
            diag,
        )
        assert diag.lines_matched == 2


class TestRemoval:
    @pytest.fixture
    def conflicts(self, disk):
        return aggregate(
            [
                LogWarning("a.zipmod", ("b.zipmod", "c.zipmod")),
                LogWarning("d.zipmod", ("b.zipmod",)),
            ],
            resolver_from(disk),
        )

    def test_remove_skipped(self, conflicts):
        target = conflicts[0]
        assert remove_skipped(conflicts, target, "/mods/b.zipmod") is True
        assert target.skipped_paths() == ["/mods/c.zipmod"]
        assert target in conflicts

    def test_remove_skipped_is_idempotent(self, conflicts):
        target = conflicts[0]
        remove_skipped(conflicts, target, "/mods/b.zipmod")
        assert remove_skipped(conflicts, target, "/mods/b.zipmod") is False
        assert target.skipped_paths() == ["/mods/c.zipmod"]

    def test_removing_last_skipped_removes_conflict(self, conflicts):
        target = conflicts[1]
        assert remove_skipped(conflicts, target, "/mods/b.zipmod") is True
        assert target not in conflicts
        assert [c.loaded.name for c in conflicts] == ["a.zipmod"]

    def test_remove_skipped_only_touches_given_conflict(self, conflicts):
        remove_skipped(conflicts, conflicts[0], "/mods/b.zipmod")
        assert conflicts[1].skipped_paths() == ["/mods/b.zipmod"]

    def test_remove_loaded(self, conflicts):
        target = conflicts[0]
        assert remove_loaded(conflicts, target) is True
        assert target not in conflicts
        assert remove_loaded(conflicts, target) is False
        assert len(conflicts) == 1

    def test_remove_all_skipped(self, conflicts):
        target = conflicts[0]
        assert remove_all_skipped(conflicts, target) is True
        assert target not in conflicts
        assert target.skipped == []
        assert [c.loaded.name for c in conflicts] == ["d.zipmod"]

    def test_remove_all_skipped_is_idempotent(self, conflicts):
        target = conflicts[0]
        remove_all_skipped(conflicts, target)
        assert remove_all_skipped(conflicts, target) is False
        assert len(conflicts) == 1


class TestSizeDuplicate:
    def _conflict(self, *sizes: int) -> Conflict:
        loaded = ModEntry(name="l", path="/l", size=sizes[0])
        skipped = [ModEntry(name=f"s{i}", path=f"/s{i}", size=s) for i, s in enumerate(sizes[1:])]
        return Conflict(loaded=loaded, skipped=skipped)

    def test_equal_sizes_flagged(self):
        c = self._conflict(100, 100, 50)
        assert is_size_duplicate(c, c.loaded)
        assert is_size_duplicate(c, c.skipped[0])
        assert not is_size_duplicate(c, c.skipped[1])

    def test_distinct_sizes_not_flagged(self):
        c = self._conflict(1, 2, 3)
        assert not any(is_size_duplicate(c, m) for m in c.entries)

    def test_zero_sizes_flagged_by_default(self):
        c = self._conflict(0, 0)
        assert is_size_duplicate(c, c.loaded)

    def test_zero_sizes_can_be_excluded(self):
        c = self._conflict(0, 0)
        assert not is_size_duplicate(c, c.loaded, include_zero=False)


class TestSideloaderPack:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/game/mods/Sideloader Modpack/a.zipmod", True),
            ("/game/mods/Sideloader Modpack - Exclusive KK/maps/a.zipmod", True),
            ("D:\\Koikatsu\\mods\\Sideloader Modpack\\a.zipmod", True),
            ("/game/mods/MyMods/a.zipmod", False),
            ("/game/mods/MyMods/Sideloader fix.zipmod", False),
        ],
    )
    def test_folder_decides(self, path, expected):
        assert is_sideloader_pack(ModEntry(name="a.zipmod", path=path, size=1)) is expected
