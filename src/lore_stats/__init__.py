"""PVP combat stats stored in item lore."""

__version__ = "0.1.0"
