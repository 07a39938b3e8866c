"""Combat math — pure functions, no I/O."""
from __future__ import annotations

import math
from typing import Protocol

from lore_stats.models.combat import DamageConfig, DamageOutcome
from lore_stats.models.item_stats import ItemStats


class RandomSource(Protocol):
    def random(self) -> float: ...


def sanitize_damage(value: float) -> float:
    """NaN, infinite and negative damage all count as 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def roll_chance(chance: float, rng: RandomSource) -> bool:
    """Percent roll: >= 100 always succeeds, <= 0 never does, otherwise draw from [0, 100)."""
    if chance <= 0:
        return False
    if chance >= 100:
        return True
    return rng.random() * 100 < chance


def resolve(
    base_damage: float,
    attacker: ItemStats,
    victim: ItemStats,
    rng: RandomSource,
    config: DamageConfig | None = None,
) -> DamageOutcome:
    """Resolve one PVP hit from the two players' total stats.

    Order matters: dodge is rolled first and short-circuits everything,
    then attack, critical, defense, the zero floor and finally lifesteal.
    """
    config = config or DamageConfig()
    base = sanitize_damage(base_damage)

    if roll_chance(victim.dodge, rng):
        return DamageOutcome.dodge()

    damage = base + attacker.attack / config.damage_divisor

    critical = roll_chance(attacker.crit_chance, rng)
    critical_bonus = 0.0
    if critical:
        critical_bonus = attacker.crit_damage / config.crit_damage_divisor
        damage += critical_bonus

    damage -= victim.defense / config.defense_divisor
    damage = max(0.0, damage)

    return DamageOutcome(
        final_damage=damage,
        critical=critical,
        critical_bonus=critical_bonus,
        lifesteal=lifesteal_amount(damage, attacker.lifesteal),
    )


def lifesteal_amount(damage: float, lifesteal_percent: float) -> float:
    if lifesteal_percent <= 0 or damage <= 0:
        return 0.0
    return damage * (lifesteal_percent / 100.0)
