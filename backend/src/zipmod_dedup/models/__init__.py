from zipmod_dedup.models.conflict import Conflict, ScanDiagnostics
from zipmod_dedup.models.mod import ManifestData, ModEntry

__all__ = [
    "Conflict",
    "ManifestData",
    "ModEntry",
    "ScanDiagnostics",
]
