"""Shared fixtures for the lore-stats test suite."""
from __future__ import annotations

import random

import pytest

from lore_stats.config.settings import Settings, build_settings
from lore_stats.content.loader import load_default_config
from lore_stats.engine.metrics import PluginMetrics
from lore_stats.lore.editor import LoreEditor
from lore_stats.lore.template import LoreTemplate
from lore_stats.mechanics.weapons import WeaponMatcher
from lore_stats.models.item import Item
from lore_stats.models.item_stats import ItemStats
from lore_stats.models.stat import StatKind
from lore_stats.storage.stat_cache import StatCache
from lore_stats.systems.aggregation import AggregationService
from lore_stats.systems.item_lore import ItemLoreService


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def template() -> LoreTemplate:
    return LoreTemplate.default()


@pytest.fixture
def editor(template) -> LoreEditor:
    return LoreEditor(template)


@pytest.fixture
def settings() -> Settings:
    return build_settings(load_default_config())


@pytest.fixture
def metrics() -> PluginMetrics:
    return PluginMetrics()


@pytest.fixture
def item_lore(editor, settings, metrics) -> ItemLoreService:
    return ItemLoreService(editor, settings, metrics)


@pytest.fixture
def cache() -> StatCache:
    return StatCache()


@pytest.fixture
def aggregation(item_lore, cache, settings, metrics) -> AggregationService:
    return AggregationService(item_lore, cache, settings, WeaponMatcher(settings.weapons), metrics)


@pytest.fixture
def sword_stats() -> ItemStats:
    return ItemStats.from_mapping({
        StatKind.ATTACK: 100,
        StatKind.CRIT_CHANCE: 25,
        StatKind.LIFESTEAL: 10,
    })


@pytest.fixture
def sword(editor, sword_stats) -> Item:
    return Item(
        item_type="DIAMOND_SWORD",
        display_name="Blade",
        lore=["§7A sharp blade", *editor.generate(sword_stats), "§8Soulbound"],
    )


@pytest.fixture
def chestplate(editor) -> Item:
    stats = ItemStats.from_mapping({StatKind.DEFENSE: 40, StatKind.HEALTH: 10})
    return Item(item_type="DIAMOND_CHESTPLATE", lore=editor.generate(stats))
