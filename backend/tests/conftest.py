import zipfile
from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from zipmod_dedup.main import app


@pytest.fixture
def make_zipmod() -> Callable[..., Path]:
    """Create a zipmod at ``path``, optionally holding a manifest and padding bytes."""

    def _make(
        path: Path,
        manifest: bytes | None = None,
        padding: int = 0,
        entry_name: str = "manifest.xml",
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_STORED) as zf:
            if manifest is not None:
                zf.writestr(entry_name, manifest)
            if padding:
                zf.writestr("abdata/list.csv", b"x" * padding)
        return path

    return _make


@pytest.fixture
def game_dir(tmp_path) -> Path:
    game = tmp_path / "Koikatsu"
    (game / "mods").mkdir(parents=True)
    return game


@pytest.fixture
def client():
    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc
