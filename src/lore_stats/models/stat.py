"""Stat catalog: the seven combat stats an item lore can carry."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class StatKind(str, Enum):
    ATTACK = "damage"
    DEFENSE = "defense"
    HEALTH = "health"
    LIFESTEAL = "lifesteal"
    CRIT_CHANCE = "critchance"
    CRIT_DAMAGE = "critdamage"
    DODGE = "dodge"

    @property
    def config_key(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self][0]

    @property
    def display_name_en(self) -> str:
        return _DISPLAY_NAMES[self][1]

    @property
    def percentage(self) -> bool:
        return self in _PERCENTAGE_KINDS

    @property
    def keywords(self) -> tuple[str, ...]:
        return _KEYWORDS[self]


_DISPLAY_NAMES: dict[StatKind, tuple[str, str]] = {
    StatKind.ATTACK: ("공격력", "Damage"),
    StatKind.DEFENSE: ("방어력", "Defense"),
    StatKind.HEALTH: ("체력", "Health"),
    StatKind.LIFESTEAL: ("피흡수", "Lifesteal"),
    StatKind.CRIT_CHANCE: ("치명타 확률", "Crit Chance"),
    StatKind.CRIT_DAMAGE: ("치명타 데미지", "Crit Damage"),
    StatKind.DODGE: ("회피율", "Dodge"),
}

_PERCENTAGE_KINDS = frozenset({StatKind.LIFESTEAL, StatKind.CRIT_CHANCE, StatKind.DODGE})

_KEYWORDS: dict[StatKind, tuple[str, ...]] = {
    StatKind.ATTACK: ("공격력", "atk", "attack", "damage"),
    StatKind.DEFENSE: ("방어력", "def", "defense"),
    StatKind.HEALTH: ("체력", "hp", "health", "추가체력"),
    StatKind.LIFESTEAL: ("피흡수", "흡혈", "lifesteal"),
    StatKind.CRIT_CHANCE: ("치명타 확률", "치명타확률", "치확", "crit", "critchance", "crit_chance"),
    StatKind.CRIT_DAMAGE: ("치명타 데미지", "치명타데미지", "치뎀", "critdamage", "crit_damage"),
    StatKind.DODGE: ("회피율", "회피", "dodge"),
}


def _build_keyword_table() -> Mapping[str, StatKind]:
    table: dict[str, StatKind] = {}
    for kind in StatKind:
        for alias in (kind.config_key, *kind.keywords):
            key = alias.lower()
            owner = table.get(key)
            if owner is not None and owner is not kind:
                raise ValueError(f"Stat alias '{alias}' used by both {owner.name} and {kind.name}")
            table[key] = kind
    return MappingProxyType(table)


KEYWORD_TABLE: Mapping[str, StatKind] = _build_keyword_table()


def find_by_keyword(text: Optional[str]) -> StatKind | None:
    """Look up a stat by any of its aliases (case-insensitive).

    Korean and English names, abbreviations and config keys all resolve.
    Returns None for empty or unknown input.
    """
    if not text:
        return None
    return KEYWORD_TABLE.get(text.strip().lower())


def is_percentage(kind: StatKind) -> bool:
    return kind.percentage
