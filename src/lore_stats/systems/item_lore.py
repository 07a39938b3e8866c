"""Read and edit the stats written on an item."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from lore_stats.config.settings import Settings
from lore_stats.engine.metrics import PluginMetrics
from lore_stats.lore.editor import LoreEditor
from lore_stats.models.item import Item
from lore_stats.models.item_stats import ItemStats
from lore_stats.models.stat import StatKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatApplyResult:
    success: bool
    applied_value: float = 0.0


class ItemLoreService:
    """Operations the command and GUI layers call on a held item.

    Mutations replace ``item.lore`` in one assignment; a failed call leaves
    the item untouched.
    """

    def __init__(self, editor: LoreEditor, settings: Settings, metrics: PluginMetrics | None = None):
        self.editor = editor
        self.settings = settings
        self.metrics = metrics or PluginMetrics()

    def parse_stats(self, item: Item | None) -> ItemStats:
        if item is None or item.is_empty or not item.has_lore:
            return ItemStats.empty()
        with self.metrics.timed("lore_parse"):
            return self.editor.parse(item.lore)

    def has_stats(self, item: Item | None) -> bool:
        return not self.parse_stats(item).is_empty()

    def clamp_stat(self, kind: StatKind, value: float) -> float:
        return self.settings.clamp_stat(kind, value)

    def clamp_stats(self, stats: ItemStats) -> ItemStats:
        if stats.is_empty():
            return stats
        return stats.map_values(self.settings.clamp_stat)

    def set_stat(self, item: Item | None, kind: StatKind, value: float) -> StatApplyResult:
        """Set one stat (clamped to its configured range), keeping the others."""
        if item is None or item.is_empty:
            return StatApplyResult(False, 0.0)
        applied = self.clamp_stat(kind, value)
        new_stats = self.parse_stats(item).with_stat(kind, applied)
        ok = self._write_stats(item, new_stats)
        if not ok:
            logger.warning("Could not update item lore: stat=%s value=%s", kind.config_key, applied)
        return StatApplyResult(ok, applied)

    def set_stats(self, item: Item | None, stats: ItemStats | None) -> bool:
        if item is None or item.is_empty or stats is None:
            return False
        return self._write_stats(item, self.clamp_stats(stats))

    def remove_stat(self, item: Item | None, kind: StatKind) -> bool:
        if item is None or item.is_empty or item.lore is None:
            return False
        item.lore = self.editor.remove_one(item.lore, kind)
        return True

    def clear_stats(self, item: Item | None) -> bool:
        if item is None or item.is_empty or item.lore is None:
            return False
        item.lore = self.editor.remove_all(item.lore)
        return True

    def _write_stats(self, item: Item, stats: ItemStats) -> bool:
        if item.lore is None:
            return False
        if stats.is_empty():
            item.lore = self.editor.remove_all(item.lore)
        else:
            item.lore = self.editor.add_or_update(item.lore, stats, 0)
        return True
