"""Scanner for Sideloader duplicate-mod warnings in BepInEx/Unity logs.

Extracts ``LogWarning`` tuples from raw log text without touching the
filesystem. A warning looks like::

    [Warning:Sideloader] Multiple versions detected, only "a.zipmod" will be loaded. Skipped versions: "b.zipmod", "c.zipmod"

Lines that do not match, or whose quoting is broken, are skipped silently.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_WARNING_RE = re.compile(
    r"\[\s*Warning\s*:\s*Sideloader\s*\]"
    r".*?\bonly\s+\"(?P<loaded>[^\"]+)\"\s+will\s+be\s+loaded\."
    r"\s*Skipped\s+versions:(?P<skipped>.*)$"
)

# Comma separated list of non-empty quoted names, nothing else.
_SKIPPED_LIST_RE = re.compile(r"\s*\"[^\"]+\"(?:\s*,\s*\"[^\"]+\")*\s*,?\s*")
_QUOTED_RE = re.compile(r"\"([^\"]+)\"")


@dataclass(frozen=True, slots=True)
class LogWarning:
    loaded_name: str
    skipped_names: tuple[str, ...]
    line_number: int = 0


def parse_warning_line(line: str, line_number: int = 0) -> LogWarning | None:
    """Parse a single log line, returning ``None`` if it is not a usable warning."""
    m = _WARNING_RE.search(line)
    if m is None:
        return None

    loaded = m.group("loaded").strip()
    skipped_raw = m.group("skipped").rstrip()
    if not loaded or not skipped_raw.strip():
        logger.debug("Line %d: warning without skipped versions", line_number)
        return None
    if not _SKIPPED_LIST_RE.fullmatch(skipped_raw):
        logger.debug("Line %d: malformed skipped list %r", line_number, skipped_raw)
        return None

    skipped = tuple(s.strip() for s in _QUOTED_RE.findall(skipped_raw) if s.strip())
    if not skipped:
        return None
    return LogWarning(loaded_name=loaded, skipped_names=skipped, line_number=line_number)


class LogScan:
    """Lazy, restartable sequence of warnings found in ``text``.

    Every iteration rescans the text from the start, in file order.
    Repeated warnings are yielded as many times as they appear.
    """

    __slots__ = ("_text",)

    def __init__(self, text: str) -> None:
        self._text = text

    def __iter__(self) -> Iterator[LogWarning]:
        for number, line in enumerate(self._text.splitlines(), start=1):
            if "Sideloader" not in line:
                continue
            warning = parse_warning_line(line, number)
            if warning is not None:
                yield warning


def scan_log(text: str) -> LogScan:
    """Return the warnings contained in a log's text."""
    return LogScan(text)
