"""Application bootstrap — wires config, template and services into a Runtime."""
from __future__ import annotations

import logging
import random
import tomllib
from dataclasses import dataclass
from pathlib import Path

from lore_stats.config.messages import Messages
from lore_stats.config.settings import ConfigError, Settings, load_settings
from lore_stats.engine.metrics import PluginMetrics
from lore_stats.engine.update_task import PlayersProvider
from lore_stats.lore.editor import LoreEditor
from lore_stats.lore.template import LoreTemplate
from lore_stats.mechanics.combat_math import RandomSource
from lore_stats.mechanics.weapons import WeaponMatcher
from lore_stats.storage.stat_cache import StatCache
from lore_stats.systems.aggregation import AggregationService
from lore_stats.systems.combat import CombatService
from lore_stats.systems.item_lore import ItemLoreService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Runtime:
    """Everything derived from one config load. Replaced whole on reload."""

    settings: Settings
    messages: Messages
    template: LoreTemplate
    editor: LoreEditor
    weapons: WeaponMatcher
    item_lore: ItemLoreService
    aggregation: AggregationService
    combat: CombatService


def build_runtime(
    settings: Settings,
    messages: Messages,
    cache: StatCache,
    metrics: PluginMetrics,
    rng: RandomSource | None = None,
) -> Runtime:
    template = LoreTemplate.from_config(settings.lore)
    editor = LoreEditor(template)
    weapons = WeaponMatcher(settings.weapons)
    item_lore = ItemLoreService(editor, settings, metrics)
    aggregation = AggregationService(item_lore, cache, settings, weapons, metrics)
    combat = CombatService(cache, settings, messages, rng, metrics)
    return Runtime(
        settings=settings,
        messages=messages,
        template=template,
        editor=editor,
        weapons=weapons,
        item_lore=item_lore,
        aggregation=aggregation,
        combat=combat,
    )


def _load_messages(path: Path | str | None) -> Messages:
    try:
        return Messages.load(path)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Cannot parse messages file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read messages file {path}: {exc}") from exc


class LoreStatsApp:
    """Owns the stat cache and metrics; serves the current Runtime."""

    def __init__(
        self,
        config_path: Path | str | None = None,
        messages_path: Path | str | None = None,
        rng: RandomSource | None = None,
    ):
        self.config_path = config_path
        self.messages_path = messages_path
        self.rng = rng
        self.cache = StatCache()
        self.metrics = PluginMetrics()
        self._runtime = self._build()
        logger.info("Loaded %d weapon patterns", len(self._runtime.weapons.patterns))

    def _build(self) -> Runtime:
        settings = load_settings(self.config_path)
        messages = _load_messages(self.messages_path)
        return build_runtime(settings, messages, self.cache, self.metrics, self.rng)

    @property
    def runtime(self) -> Runtime:
        return self._runtime

    def reload(self, players: PlayersProvider | None = None) -> bool:
        """Rebuild the runtime from disk. On a bad file the old one stays active.

        Cached player stats are dropped and, when ``players`` is given, every
        online player is recomputed under the new settings before returning.
        """
        try:
            runtime = self._build()
        except ConfigError as exc:
            logger.error("Reload failed, keeping previous config: %s", exc)
            return False
        self._runtime = runtime
        self.cache.clear()
        if players is not None:
            for snapshot, health in players():
                try:
                    runtime.aggregation.recompute_and_publish(snapshot, health)
                except Exception:
                    logger.exception("Failed to recompute stats for %s after reload", snapshot.player_id)
        logger.info("Configuration reloaded")
        return True

    def shutdown(self) -> None:
        self.cache.clear()
        if self._runtime.settings.debug:
            logger.info("[Metrics] %s", self.metrics.snapshot())
