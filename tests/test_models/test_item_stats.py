"""Tests for src/lore_stats/models/item_stats.py."""
from __future__ import annotations

import dataclasses

import pytest

from lore_stats.models.item_stats import ItemStats, merge_all
from lore_stats.models.stat import StatKind


class TestConstruction:
    def test_empty(self):
        stats = ItemStats.empty()
        assert stats.is_empty()
        assert all(v == 0 for _, v in stats.items())

    def test_of(self):
        stats = ItemStats.of(StatKind.ATTACK, 50)
        assert stats.attack == 50
        assert stats.defense == 0
        assert not stats.is_empty()

    @pytest.mark.parametrize("value", [-1, -0.5, float("nan"), float("inf"), float("-inf")])
    def test_invalid_values_clamp_to_zero(self, value):
        stats = ItemStats.of(StatKind.DEFENSE, value)
        assert stats.defense == 0
        assert stats.is_empty()

    def test_from_mapping(self):
        stats = ItemStats.from_mapping({StatKind.HEALTH: 10, StatKind.DODGE: 5})
        assert stats.non_zero() == {StatKind.HEALTH: 10.0, StatKind.DODGE: 5.0}

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError):
            ItemStats((1.0, 2.0))

    def test_immutable(self):
        stats = ItemStats.of(StatKind.ATTACK, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            stats.values = ()  # type: ignore[misc]


class TestQueries:
    def test_get_and_has(self):
        stats = ItemStats.of(StatKind.LIFESTEAL, 12)
        assert stats.get(StatKind.LIFESTEAL) == 12
        assert stats.has(StatKind.LIFESTEAL)
        assert not stats.has(StatKind.ATTACK)

    def test_as_dict_has_every_kind(self):
        assert set(ItemStats.empty().as_dict()) == set(StatKind)

    def test_named_accessors(self):
        stats = ItemStats.from_mapping({k: i + 1 for i, k in enumerate(StatKind)})
        assert (stats.attack, stats.defense, stats.health, stats.lifesteal,
                stats.crit_chance, stats.crit_damage, stats.dodge) == (1, 2, 3, 4, 5, 6, 7)


class TestModifiers:
    def test_with_stat_returns_new(self):
        base = ItemStats.of(StatKind.ATTACK, 10)
        updated = base.with_stat(StatKind.DEFENSE, 5)
        assert base.defense == 0
        assert updated.attack == 10
        assert updated.defense == 5

    def test_with_stat_negative_clamped(self):
        assert ItemStats.of(StatKind.ATTACK, 10).with_stat(StatKind.ATTACK, -3).attack == 0

    def test_remove(self):
        stats = ItemStats.from_mapping({StatKind.ATTACK: 10, StatKind.DODGE: 3})
        assert stats.remove(StatKind.ATTACK).non_zero() == {StatKind.DODGE: 3.0}

    def test_merge_sums(self):
        a = ItemStats.from_mapping({StatKind.ATTACK: 10, StatKind.DEFENSE: 2})
        b = ItemStats.from_mapping({StatKind.ATTACK: 5, StatKind.HEALTH: 4})
        merged = a.merge(b)
        assert merged.non_zero() == {StatKind.ATTACK: 15.0, StatKind.DEFENSE: 2.0, StatKind.HEALTH: 4.0}

    def test_merge_with_empty_or_none(self):
        a = ItemStats.of(StatKind.ATTACK, 10)
        assert a.merge(ItemStats.empty()) == a
        assert a.merge(None) == a
        assert ItemStats.empty().merge(a) == a

    def test_merge_commutative(self):
        a = ItemStats.from_mapping({StatKind.ATTACK: 7, StatKind.DODGE: 3})
        b = ItemStats.from_mapping({StatKind.ATTACK: 1, StatKind.LIFESTEAL: 9})
        assert a.merge(b) == b.merge(a)

    def test_merge_associative(self):
        a = ItemStats.of(StatKind.ATTACK, 1)
        b = ItemStats.from_mapping({StatKind.ATTACK: 2, StatKind.DEFENSE: 4})
        c = ItemStats.from_mapping({StatKind.DEFENSE: 8, StatKind.HEALTH: 16})
        assert a.merge(b).merge(c) == a.merge(b.merge(c))

    def test_merge_all(self):
        bundles = [ItemStats.of(StatKind.HEALTH, 5) for _ in range(4)]
        assert merge_all(bundles).health == 20
        assert merge_all([]).is_empty()

    def test_map_values(self):
        stats = ItemStats.from_mapping({StatKind.ATTACK: 10, StatKind.DODGE: 90})
        capped = stats.map_values(lambda kind, v: min(v, 50))
        assert capped.attack == 10
        assert capped.dodge == 50

    def test_repr_lists_non_zero(self):
        assert repr(ItemStats.of(StatKind.ATTACK, 5)) == "ItemStats(damage=5)"
