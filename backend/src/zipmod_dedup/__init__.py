"""Find duplicate Sideloader mods from the game log."""

__version__ = "0.1.0"
