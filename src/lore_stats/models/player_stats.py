"""Per-player aggregate of equipment stats."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping

from lore_stats.models.item_stats import ItemStats, merge_all


class EquipmentSlot(str, Enum):
    HELMET = "helmet"
    CHESTPLATE = "chestplate"
    LEGGINGS = "leggings"
    BOOTS = "boots"
    MAIN_HAND = "main_hand"
    OFF_HAND = "off_hand"

    @property
    def config_key(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return _SLOT_NAMES[self]

    @property
    def is_armor(self) -> bool:
        return not self.is_weapon

    @property
    def is_weapon(self) -> bool:
        return self in (EquipmentSlot.MAIN_HAND, EquipmentSlot.OFF_HAND)


_SLOT_NAMES = {
    EquipmentSlot.HELMET: "투구",
    EquipmentSlot.CHESTPLATE: "갑옷",
    EquipmentSlot.LEGGINGS: "레깅스",
    EquipmentSlot.BOOTS: "부츠",
    EquipmentSlot.MAIN_HAND: "주무기",
    EquipmentSlot.OFF_HAND: "보조무기",
}


class PlayerStats:
    """Immutable slot -> ItemStats map plus the merged total.

    The total is derived once at construction, so it always equals the merge
    of the slots it was built from.
    """

    __slots__ = ("_player_id", "_slots", "_total")

    def __init__(self, player_id: str, slots: Mapping[EquipmentSlot, ItemStats] | None = None):
        if not player_id:
            raise ValueError("player_id is required")
        slots = slots or {}
        ordered = {
            slot: slots[slot]
            for slot in EquipmentSlot
            if slot in slots and not slots[slot].is_empty()
        }
        self._player_id = player_id
        self._slots: Mapping[EquipmentSlot, ItemStats] = MappingProxyType(ordered)
        self._total = merge_all(ordered.values())

    @classmethod
    def empty(cls, player_id: str) -> PlayerStats:
        return cls(player_id)

    @classmethod
    def of(cls, player_id: str, stats_list: Iterable[ItemStats]) -> PlayerStats:
        """Assign bundles to slots in slot order (extra bundles are dropped)."""
        return cls(player_id, dict(zip(EquipmentSlot, stats_list)))

    @property
    def player_id(self) -> str:
        return self._player_id

    @property
    def total(self) -> ItemStats:
        return self._total

    @property
    def slots(self) -> Mapping[EquipmentSlot, ItemStats]:
        return self._slots

    def slot(self, slot: EquipmentSlot) -> ItemStats:
        return self._slots.get(slot, ItemStats.empty())

    def with_slot(self, slot: EquipmentSlot, stats: ItemStats | None) -> PlayerStats:
        """Replace one slot; empty or None stats clear it."""
        slots = dict(self._slots)
        if stats is None or stats.is_empty():
            slots.pop(slot, None)
        else:
            slots[slot] = stats
        return PlayerStats(self._player_id, slots)

    def without_slot(self, slot: EquipmentSlot) -> PlayerStats:
        return self.with_slot(slot, None)

    def cleared(self) -> PlayerStats:
        return PlayerStats.empty(self._player_id)

    def max_health(self, base_health: float) -> float:
        """Health stat adds straight onto the base max health."""
        return base_health + self._total.health

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlayerStats):
            return NotImplemented
        return self._player_id == other._player_id and dict(self._slots) == dict(other._slots)

    def __hash__(self) -> int:
        return hash((self._player_id, tuple(self._slots.items())))

    def __repr__(self) -> str:
        slots = ", ".join(s.value for s in self._slots)
        return f"PlayerStats(player_id={self._player_id!r}, total={self._total!r}, slots=[{slots}])"
