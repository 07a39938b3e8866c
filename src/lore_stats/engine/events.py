"""The narrow surface the host game calls into."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from lore_stats.models.combat import CombatResult
from lore_stats.models.item import EquipmentSnapshot, Item
from lore_stats.models.player_stats import EquipmentSlot, PlayerStats
from lore_stats.systems.aggregation import HealthHolder
from lore_stats.systems.combat import Notify

if TYPE_CHECKING:
    from lore_stats.app import LoreStatsApp

logger = logging.getLogger(__name__)


class EventAdapter:
    """Translate host events into service calls.

    Every handler reads ``app.runtime`` once and works on that snapshot, so a
    reload in the middle of a handler does not mix two configurations. No
    exception escapes into the host loop.
    """

    def __init__(self, app: LoreStatsApp, notify: Notify | None = None):
        self.app = app
        self.notify = notify

    def on_join(self, snapshot: EquipmentSnapshot, health: HealthHolder | None = None) -> PlayerStats | None:
        runtime = self.app.runtime
        try:
            return runtime.aggregation.recompute_and_publish(snapshot, health)
        except Exception:
            logger.exception("Failed to compute stats for %s on join", snapshot.player_id)
            return None

    def on_quit(self, player_id: str, health: HealthHolder | None = None) -> None:
        runtime = self.app.runtime
        try:
            runtime.aggregation.remove(player_id)
            if health is not None:
                runtime.aggregation.reset_max_health(health)
        except Exception:
            logger.exception("Failed to clean up stats for %s on quit", player_id)

    def on_hand_change(
        self,
        player_id: str,
        main_hand: Item | None,
        off_hand: Item | None = None,
        health: HealthHolder | None = None,
    ) -> PlayerStats | None:
        runtime = self.app.runtime
        try:
            runtime.aggregation.update_slot(player_id, EquipmentSlot.MAIN_HAND, main_hand)
            return runtime.aggregation.update_slot(player_id, EquipmentSlot.OFF_HAND, off_hand, health)
        except Exception:
            logger.exception("Failed to update hand stats for %s", player_id)
            return None

    def on_armor_change(self, snapshot: EquipmentSnapshot, health: HealthHolder | None = None) -> PlayerStats | None:
        runtime = self.app.runtime
        try:
            return runtime.aggregation.recompute_and_publish(snapshot, health)
        except Exception:
            logger.exception("Failed to update armor stats for %s", snapshot.player_id)
            return None

    def on_damage(
        self,
        attacker_id: str,
        victim_id: str,
        base_damage: float,
        victim_is_player: bool = True,
        attacker_health: HealthHolder | None = None,
    ) -> CombatResult | None:
        """Resolve one hit. None means the host should keep its own damage."""
        runtime = self.app.runtime
        if runtime.settings.pvp_only and not victim_is_player:
            return None
        try:
            result = runtime.combat.calculate(attacker_id, victim_id, base_damage)
            runtime.combat.apply_result(result, attacker_health, self.notify)
            return result
        except Exception:
            logger.exception("Failed to resolve damage %s -> %s", attacker_id, victim_id)
            return None
