# Relative to the game install folder, checked in order.
DEFAULT_LOG_CANDIDATES = (
    "output_log.txt",
    "Koikatsu_Data/output_log.txt",
    "BepInEx/LogOutput.log",
)

DEFAULT_MOD_SUBDIRS = ("mods",)

MANIFEST_ENTRY = "manifest.xml"
