from __future__ import annotations

from lore_stats.lore.colors import strip_color, translate_color_codes
from lore_stats.lore.editor import LoreEditor
from lore_stats.lore.template import LoreTemplate

__all__ = [
    "LoreEditor",
    "LoreTemplate",
    "strip_color",
    "translate_color_codes",
]
