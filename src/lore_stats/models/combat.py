from __future__ import annotations

import math
from dataclasses import dataclass

from lore_stats.models.player_stats import PlayerStats


def _divisor(value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 1.0
    if not math.isfinite(value) or value <= 0:
        return 1.0
    return value


@dataclass(frozen=True)
class DamageConfig:
    """Scaling constants for the damage formula. Non-positive divisors become 1."""

    damage_divisor: float = 2.0
    defense_divisor: float = 2.0
    crit_damage_divisor: float = 2.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "damage_divisor", _divisor(self.damage_divisor))
        object.__setattr__(self, "defense_divisor", _divisor(self.defense_divisor))
        object.__setattr__(self, "crit_damage_divisor", _divisor(self.crit_damage_divisor))


@dataclass(frozen=True)
class DamageOutcome:
    final_damage: float = 0.0
    dodged: bool = False
    critical: bool = False
    critical_bonus: float = 0.0
    lifesteal: float = 0.0

    @classmethod
    def dodge(cls) -> DamageOutcome:
        return cls(dodged=True)

    def __str__(self) -> str:
        if self.dodged:
            return "DamageOutcome(DODGED)"
        return (
            f"DamageOutcome(final_damage={self.final_damage:g}, critical={self.critical}, "
            f"critical_bonus={self.critical_bonus:g}, lifesteal={self.lifesteal:g})"
        )


@dataclass(frozen=True)
class CombatResult:
    """Outcome plus the cached stats both sides were resolved against."""

    outcome: DamageOutcome
    attacker: PlayerStats
    victim: PlayerStats

    @property
    def final_damage(self) -> float:
        return self.outcome.final_damage

    @property
    def dodged(self) -> bool:
        return self.outcome.dodged

    @property
    def critical(self) -> bool:
        return self.outcome.critical

    @property
    def lifesteal(self) -> float:
        return self.outcome.lifesteal
