"""Combat service — resolve PVP hits against cached stats and apply the results."""
from __future__ import annotations

import logging
import random
import time
from typing import Callable

from lore_stats.config.messages import Messages
from lore_stats.config.settings import Settings
from lore_stats.engine.metrics import PluginMetrics
from lore_stats.mechanics.combat_math import RandomSource, resolve
from lore_stats.models.combat import CombatResult
from lore_stats.storage.stat_cache import StatCache
from lore_stats.systems.aggregation import HealthHolder

logger = logging.getLogger(__name__)

SLOW_COMBAT_NANOS = 2_000_000

Notify = Callable[[str, str], None]


class CombatService:
    def __init__(
        self,
        cache: StatCache,
        settings: Settings,
        messages: Messages | None = None,
        rng: RandomSource | None = None,
        metrics: PluginMetrics | None = None,
    ):
        self.cache = cache
        self.settings = settings
        self.messages = messages or Messages()
        self.rng = rng or random.Random()
        self.metrics = metrics or PluginMetrics()
        self.damage_config = settings.damage_config

    def calculate(self, attacker_id: str, victim_id: str, base_damage: float) -> CombatResult:
        start = time.perf_counter_ns()
        attacker = self.cache.get_or_empty(attacker_id)
        victim = self.cache.get_or_empty(victim_id)
        outcome = resolve(base_damage, attacker.total, victim.total, self.rng, self.damage_config)

        nanos = time.perf_counter_ns() - start
        self.metrics.record("combat_calc", nanos)
        if self.settings.debug and nanos > SLOW_COMBAT_NANOS:
            logger.info("[Debug] combat.calculate took %.3fms", nanos / 1_000_000.0)
        return CombatResult(outcome=outcome, attacker=attacker, victim=victim)

    def apply_result(
        self,
        result: CombatResult,
        attacker_health: HealthHolder | None = None,
        notify: Notify | None = None,
    ) -> float:
        """Heal the attacker by the lifesteal amount and send combat messages.

        ``notify(player_id, text)`` delivers a message. Returns the health
        actually restored.
        """
        attacker_id = result.attacker.player_id
        victim_id = result.victim.player_id
        send = notify or (lambda _pid, _text: None)

        if result.dodged:
            send(victim_id, self.messages.get("combat.dodge.victim"))
            send(attacker_id, self.messages.get("combat.dodge.attacker"))
            return 0.0

        if result.critical:
            send(attacker_id, self.messages.get("combat.critical.attacker",
                                                damage=result.outcome.critical_bonus))

        healed = 0.0
        if result.lifesteal > 0 and attacker_health is not None:
            before = attacker_health.health
            attacker_health.health = min(before + result.lifesteal, attacker_health.max_health)
            healed = max(0.0, attacker_health.health - before)
            if healed > 0:
                send(attacker_id, self.messages.get("combat.lifesteal.attacker", amount=healed))
        return healed
