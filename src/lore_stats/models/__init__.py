from __future__ import annotations

from lore_stats.models.combat import CombatResult, DamageConfig, DamageOutcome
from lore_stats.models.item import EquipmentSnapshot, Item, PlayerHealth
from lore_stats.models.item_stats import ItemStats
from lore_stats.models.player_stats import EquipmentSlot, PlayerStats
from lore_stats.models.stat import StatKind, find_by_keyword, is_percentage

__all__ = [
    "CombatResult",
    "DamageConfig",
    "DamageOutcome",
    "EquipmentSlot",
    "EquipmentSnapshot",
    "Item",
    "ItemStats",
    "PlayerHealth",
    "PlayerStats",
    "StatKind",
    "find_by_keyword",
    "is_percentage",
]
