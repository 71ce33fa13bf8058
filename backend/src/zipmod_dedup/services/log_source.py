"""Locate and read the game log that Sideloader writes its warnings to."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence

from zipmod_dedup.constants import DEFAULT_LOG_CANDIDATES
from zipmod_dedup.errors import LogNotFoundError, LogReadError
from zipmod_dedup.utils.paths import to_native_path

logger = logging.getLogger(__name__)


def find_game_log(game_path: str, candidates: Sequence[str] = DEFAULT_LOG_CANDIDATES) -> str:
    """Return the first existing log file under ``game_path``.

    Raises:
        LogNotFoundError: If none of the candidates exists.
    """
    base = to_native_path(game_path)
    for rel in candidates:
        candidate = os.path.join(base, *rel.replace("\\", "/").split("/"))
        if os.path.isfile(candidate):
            return candidate
    raise LogNotFoundError(f"No known log file found in {game_path}")


def read_game_log(game_path: str, candidates: Sequence[str] = DEFAULT_LOG_CANDIDATES) -> str:
    """Read the game log as text; undecodable bytes are replaced.

    Raises:
        LogNotFoundError: If no log file exists.
        LogReadError: If the log file cannot be read.
    """
    log_path = find_game_log(game_path, candidates)
    try:
        with open(log_path, encoding="utf-8-sig", errors="replace") as f:
            text = f.read()
    except OSError as exc:
        raise LogReadError(f"Failed to read log file {log_path}: {exc}") from exc
    logger.info("Read %d characters from %s", len(text), log_path)
    return text
