from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from lore_stats.models.player_stats import EquipmentSlot

EMPTY_ITEM_TYPES = frozenset({"AIR", "CAVE_AIR", "VOID_AIR"})


class Item(BaseModel):
    """Host-side item as seen by the core: a type name plus its lore lines.

    ``lore`` is None when the item has no writable text block at all.
    """

    model_config = ConfigDict(from_attributes=True)

    item_type: str = "AIR"
    amount: int = 1
    display_name: Optional[str] = None
    lore: Optional[list[str]] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.item_type.upper() in EMPTY_ITEM_TYPES or self.amount <= 0

    @property
    def has_lore(self) -> bool:
        return bool(self.lore)


class EquipmentSnapshot(BaseModel):
    """Up to six equipped items of one player, read by the host at a point in time."""

    player_id: str
    items: dict[EquipmentSlot, Optional[Item]] = Field(default_factory=dict)

    def item(self, slot: EquipmentSlot) -> Item | None:
        return self.items.get(slot)


class PlayerHealth(BaseModel):
    """Mutable health attribute of a player (max health is the base attribute value)."""

    max_health: float = 20.0
    health: float = 20.0
