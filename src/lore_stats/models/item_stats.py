"""Immutable stat bundle for a single item."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Mapping

from lore_stats.models.stat import StatKind

_KINDS: tuple[StatKind, ...] = tuple(StatKind)
_INDEX: dict[StatKind, int] = {kind: i for i, kind in enumerate(_KINDS)}


def _clamp(value: float) -> float:
    """Negative, NaN and infinite values become 0."""
    value = float(value)
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


@dataclass(frozen=True)
class ItemStats:
    """Stat values of one item, one slot per StatKind in catalog order.

    Never mutated: every modifier returns a new instance. Absent and zero
    are the same thing.
    """

    values: tuple[float, ...] = (0.0,) * len(_KINDS)

    def __post_init__(self) -> None:
        if len(self.values) != len(_KINDS):
            raise ValueError(f"ItemStats needs {len(_KINDS)} values, got {len(self.values)}")
        object.__setattr__(self, "values", tuple(_clamp(v) for v in self.values))

    # -- Construction --

    @classmethod
    def empty(cls) -> ItemStats:
        return _EMPTY

    @classmethod
    def of(cls, kind: StatKind, value: float) -> ItemStats:
        return cls.from_mapping({kind: value})

    @classmethod
    def from_mapping(cls, stats: Mapping[StatKind, float]) -> ItemStats:
        values = [0.0] * len(_KINDS)
        for kind, value in stats.items():
            values[_INDEX[kind]] = value
        return cls(tuple(values))

    # -- Queries --

    def get(self, kind: StatKind) -> float:
        return self.values[_INDEX[kind]]

    def has(self, kind: StatKind) -> bool:
        return self.get(kind) > 0

    def is_empty(self) -> bool:
        return not any(self.values)

    def non_zero(self) -> dict[StatKind, float]:
        return {kind: v for kind, v in zip(_KINDS, self.values) if v > 0}

    def as_dict(self) -> dict[StatKind, float]:
        return dict(zip(_KINDS, self.values))

    def items(self) -> Iterable[tuple[StatKind, float]]:
        return zip(_KINDS, self.values)

    # -- Modifiers --

    def with_stat(self, kind: StatKind, value: float) -> ItemStats:
        values = list(self.values)
        values[_INDEX[kind]] = value
        return ItemStats(tuple(values))

    def remove(self, kind: StatKind) -> ItemStats:
        return self.with_stat(kind, 0.0)

    def merge(self, other: ItemStats | None) -> ItemStats:
        """Pairwise sum of two bundles."""
        if other is None or other.is_empty():
            return self
        if self.is_empty():
            return other
        return ItemStats(tuple(a + b for a, b in zip(self.values, other.values)))

    def map_values(self, fn) -> ItemStats:
        """Apply ``fn(kind, value)`` to every stat."""
        return ItemStats(tuple(fn(kind, v) for kind, v in zip(_KINDS, self.values)))

    # -- Named accessors --

    @property
    def attack(self) -> float:
        return self.get(StatKind.ATTACK)

    @property
    def defense(self) -> float:
        return self.get(StatKind.DEFENSE)

    @property
    def health(self) -> float:
        return self.get(StatKind.HEALTH)

    @property
    def lifesteal(self) -> float:
        return self.get(StatKind.LIFESTEAL)

    @property
    def crit_chance(self) -> float:
        return self.get(StatKind.CRIT_CHANCE)

    @property
    def crit_damage(self) -> float:
        return self.get(StatKind.CRIT_DAMAGE)

    @property
    def dodge(self) -> float:
        return self.get(StatKind.DODGE)

    def __repr__(self) -> str:
        inner = ", ".join(f"{kind.config_key}={v:g}" for kind, v in self.non_zero().items())
        return f"ItemStats({inner})"


_EMPTY = ItemStats()


def merge_all(bundles: Iterable[ItemStats]) -> ItemStats:
    result = ItemStats.empty()
    for stats in bundles:
        result = result.merge(stats)
    return result
