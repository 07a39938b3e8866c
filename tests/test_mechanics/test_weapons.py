"""Tests for src/lore_stats/mechanics/weapons.py."""
from __future__ import annotations

import pytest

from lore_stats.mechanics.weapons import WeaponMatcher, compile_glob

DEFAULT_WEAPONS = ["*_SWORD", "*_AXE", "BOW", "CROSSBOW", "TRIDENT", "MACE"]


class TestCompileGlob:
    @pytest.mark.parametrize("glob,name,expected", [
        ("*_SWORD", "DIAMOND_SWORD", True),
        ("*_SWORD", "diamond_sword", True),
        ("*_SWORD", "DIAMOND_SWORDFISH", False),
        ("BOW", "CROSSBOW", False),
        ("BOW?", "BOWS", True),
        ("BOW?", "BOW", False),
        ("A.B", "AXB", False),
        ("A.B", "A.B", True),
        ("(X)+", "(X)+", True),
    ])
    def test_match(self, glob, name, expected):
        assert bool(compile_glob(glob).match(name)) is expected


class TestWeaponMatcher:
    @pytest.mark.parametrize("item_type,expected", [
        ("NETHERITE_SWORD", True),
        ("IRON_AXE", True),
        ("BOW", True),
        ("crossbow", True),
        ("TRIDENT", True),
        ("MACE", True),
        ("DIAMOND_PICKAXE", False),
        ("DIAMOND_CHESTPLATE", False),
        ("", False),
        (None, False),
    ])
    def test_default_patterns(self, item_type, expected):
        assert WeaponMatcher(DEFAULT_WEAPONS).is_weapon(item_type) is expected

    def test_blank_patterns_skipped(self):
        matcher = WeaponMatcher(["", "   ", "BOW"])
        assert len(matcher.patterns) == 1

    def test_callable(self):
        matcher = WeaponMatcher(["BOW"])
        assert matcher("BOW")
        assert not matcher("STICK")

    def test_no_patterns(self):
        assert not WeaponMatcher().is_weapon("DIAMOND_SWORD")
