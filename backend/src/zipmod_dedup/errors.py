"""Exceptions raised by the conflict extraction core."""

from __future__ import annotations


class DedupError(Exception):
    """Base class for all zipmod-dedup errors."""


class LocatorError(DedupError):
    """None of the search roots could be read."""


class ManifestError(DedupError):
    """The manifest of a mod archive could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class LogNotFoundError(DedupError):
    """No known log file exists under the game path."""


class LogReadError(DedupError):
    """A log file was found but could not be read."""
