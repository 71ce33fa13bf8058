from zipmod_dedup.archive.handler import (
    SUPPORTED_EXTENSIONS,
    ArchiveEntry,
    ArchiveHandler,
    ZipHandler,
    open_archive,
)

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "ArchiveEntry",
    "ArchiveHandler",
    "ZipHandler",
    "open_archive",
]
