"""Sideloader manifest.xml reader.

Every zipmod carries a ``manifest.xml`` describing the package::

    <manifest schema-ver="1">
      <guid>com.author.package</guid>
      <name>Package</name>
      <version>1.0</version>
      <author>author</author>
      <description>...</description>
    </manifest>

Only ``guid`` is mandatory.
"""

from __future__ import annotations

import logging
import zipfile
import zlib
from pathlib import Path

import defusedxml.ElementTree as DefusedET

from zipmod_dedup.archive.handler import open_archive
from zipmod_dedup.constants import MANIFEST_ENTRY
from zipmod_dedup.errors import ManifestError
from zipmod_dedup.models.mod import ManifestData

logger = logging.getLogger(__name__)

_OPTIONAL_FIELDS = ("name", "version", "author", "description")


def _child_text(root, tag: str) -> str | None:
    el = root.find(tag)
    if el is None or el.text is None:
        return None
    text = el.text.strip()
    return text or None


def parse_manifest(xml_bytes: bytes) -> ManifestData:
    """Decode manifest.xml bytes into ``ManifestData``.

    Handles UTF-16 LE/BE BOM and UTF-8 BOM encoded files.

    Raises:
        ValueError: If the XML cannot be parsed or has no guid.
    """
    try:
        text: bytes | str = xml_bytes
        if xml_bytes.startswith((b"\xff\xfe", b"\xfe\xff")):
            text = xml_bytes.decode("utf-16")
        elif xml_bytes.startswith(b"\xef\xbb\xbf"):
            text = xml_bytes[3:]

        root = DefusedET.fromstring(text)
    except Exception as exc:
        raise ValueError(f"Failed to parse manifest XML: {exc}") from exc

    if root.tag != "manifest":
        raise ValueError(f"Unexpected root element <{root.tag}>")

    guid = _child_text(root, "guid")
    if guid is None:
        raise ValueError("Manifest has no guid")

    return ManifestData(guid=guid, **{f: _child_text(root, f) for f in _OPTIONAL_FIELDS})


def read_manifest(path: str | Path, entry_name: str = MANIFEST_ENTRY) -> ManifestData:
    """Read the manifest embedded in the mod archive at ``path``.

    Raises:
        ManifestError: If the archive cannot be opened, has no manifest entry,
            or the manifest cannot be decoded.
    """
    path_str = str(path)
    try:
        handler = open_archive(path)
    except (OSError, ValueError, zipfile.BadZipFile) as exc:
        raise ManifestError(path_str, f"cannot open archive: {exc}") from exc

    with handler:
        entry = handler.find_entry(entry_name)
        if entry is None:
            raise ManifestError(path_str, f"no {entry_name} in archive")
        try:
            data = handler.read_file(entry)
        except (OSError, EOFError, RuntimeError, zipfile.BadZipFile, zlib.error) as exc:
            raise ManifestError(path_str, f"cannot read {entry.filename}: {exc}") from exc

    try:
        manifest = parse_manifest(data)
    except ValueError as exc:
        raise ManifestError(path_str, str(exc)) from exc

    logger.debug("Read manifest %s from %s", manifest.guid, path_str)
    return manifest
