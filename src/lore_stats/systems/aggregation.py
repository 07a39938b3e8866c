"""Equipped items -> cached player stats -> max health."""
from __future__ import annotations

import logging
import math
from typing import Callable, Protocol

from lore_stats.config.settings import Settings
from lore_stats.engine.metrics import PluginMetrics
from lore_stats.models.item import EquipmentSnapshot, Item
from lore_stats.models.item_stats import ItemStats
from lore_stats.models.player_stats import EquipmentSlot, PlayerStats
from lore_stats.storage.stat_cache import StatCache
from lore_stats.systems.item_lore import ItemLoreService

logger = logging.getLogger(__name__)

HEALTH_EPSILON = 1e-9
MIN_MAX_HEALTH = 1.0


class HealthHolder(Protocol):
    max_health: float
    health: float


class AggregationService:
    def __init__(
        self,
        item_lore: ItemLoreService,
        cache: StatCache,
        settings: Settings,
        is_weapon: Callable[[str], bool],
        metrics: PluginMetrics | None = None,
    ):
        self.item_lore = item_lore
        self.cache = cache
        self.settings = settings
        self.is_weapon = is_weapon
        self.metrics = metrics or item_lore.metrics

    # -- Computation --

    def slot_stats(self, slot: EquipmentSlot, item: Item | None) -> ItemStats:
        """Clamped stats one item contributes in ``slot``; hand slots need a weapon."""
        if item is None or item.is_empty:
            return ItemStats.empty()
        if slot.is_weapon and not self.is_weapon(item.item_type):
            logger.debug("Ignoring non-weapon %s in %s", item.item_type, slot.value)
            return ItemStats.empty()
        return self.item_lore.clamp_stats(self.item_lore.parse_stats(item))

    def recompute(self, snapshot: EquipmentSnapshot) -> PlayerStats:
        """Build a fresh PlayerStats from every equipped slot (no caching)."""
        slots = {slot: self.slot_stats(slot, snapshot.item(slot)) for slot in EquipmentSlot}
        return PlayerStats(snapshot.player_id, slots)

    # -- Publishing --

    def publish(self, stats: PlayerStats, health: HealthHolder | None = None) -> None:
        self.cache.put(stats)
        if health is not None:
            self.update_max_health(health, stats)

    def recompute_and_publish(self, snapshot: EquipmentSnapshot, health: HealthHolder | None = None) -> PlayerStats:
        with self.metrics.timed("player_stat_calc"):
            stats = self.recompute(snapshot)
            self.publish(stats, health)
        return stats

    def update_slot(
        self,
        player_id: str,
        slot: EquipmentSlot,
        item: Item | None,
        health: HealthHolder | None = None,
    ) -> PlayerStats:
        """Re-read one slot against the cached bundle and publish the result."""
        slot_stats = self.slot_stats(slot, item)
        stats = self.cache.update(player_id, lambda current: current.with_slot(slot, slot_stats))
        if health is not None:
            self.update_max_health(health, stats)
        return stats

    def update_max_health(self, health: HealthHolder, stats: PlayerStats) -> bool:
        """Apply ``base + health stat`` as max health. Returns True if it changed."""
        new_max = stats.max_health(self.settings.base_health)
        if not math.isfinite(new_max):
            logger.warning(
                "Rejected max health for %s: base=%s health_stat=%s",
                stats.player_id, self.settings.base_health, stats.total.health,
            )
            return False
        new_max = max(MIN_MAX_HEALTH, new_max)

        if abs(health.max_health - new_max) <= HEALTH_EPSILON:
            return False
        health.max_health = new_max
        if health.health > new_max:
            health.health = new_max
        return True

    def reset_max_health(self, health: HealthHolder) -> None:
        health.max_health = self.settings.base_health
        if health.health > health.max_health:
            health.health = health.max_health

    # -- Cache access --

    def get(self, player_id: str) -> PlayerStats:
        return self.cache.get_or_empty(player_id)

    def remove(self, player_id: str) -> PlayerStats | None:
        return self.cache.remove(player_id)

    def clear(self) -> None:
        self.cache.clear()
