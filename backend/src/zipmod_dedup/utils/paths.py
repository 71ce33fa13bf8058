"""Path conversion utilities for Windows/WSL compatibility.

Game install paths are usually entered in Windows format (e.g. ``D:\\Games\\Koikatsu``).
When the backend runs on WSL, these must be converted to ``/mnt/d/Games/Koikatsu``.
"""

import os
import re
import sys
from collections.abc import Iterable

_DRIVE_RE = re.compile(r"^([A-Za-z]):[/\\]")


def to_native_path(windows_path: str) -> str:
    """Convert a Windows path to a native OS path.

    On Linux (WSL): ``D:\\Foo\\Bar`` → ``/mnt/d/Foo/Bar``
    On Windows: returns the path unchanged (with normalized separators).
    """
    if not windows_path:
        return windows_path

    if sys.platform == "linux":
        m = _DRIVE_RE.match(windows_path)
        if m:
            drive = m.group(1).lower()
            rest = windows_path[3:].replace("\\", "/")
            return f"/mnt/{drive}/{rest}"
        # Already a Unix path
        if windows_path.startswith("/"):
            return os.path.normpath(windows_path)

    return os.path.normpath(windows_path)


def mod_roots(game_path: str, subdirs: Iterable[str]) -> list[str]:
    """Return the ordered mod search roots for a game install.

    ``subdirs`` are relative to the game folder and keep their order, which is
    the priority order used by the locator.
    """
    base = to_native_path(game_path)
    roots: list[str] = []
    for rel in subdirs:
        native_rel = rel.replace("\\", "/") if sys.platform == "linux" else rel
        root = os.path.normpath(os.path.join(base, native_rel))
        if root not in roots:
            roots.append(root)
    return roots


def file_basename(name: str) -> str:
    """File name part of ``name``, accepting both separator styles."""
    return re.split(r"[/\\]", name)[-1]


def relative_parts(name: str) -> list[str]:
    """Split a logged relative name into path components.

    Empty, ``.`` and ``..`` components are dropped so the result never leaves
    the directory it is joined onto.
    """
    return [p for p in re.split(r"[/\\]", name) if p and p not in (".", "..")]
