"""Normalized, immutable view of config.toml."""
from __future__ import annotations

import logging
import math
import tomllib
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from lore_stats.content.loader import load_config
from lore_stats.models.combat import DamageConfig
from lore_stats.models.stat import StatKind

logger = logging.getLogger(__name__)

DEFAULT_BASE_HEALTH = 20.0
DEFAULT_MAX_STATS: Mapping[StatKind, float] = MappingProxyType({
    StatKind.ATTACK: 0.0,
    StatKind.DEFENSE: 0.0,
    StatKind.HEALTH: 0.0,
    StatKind.LIFESTEAL: 100.0,
    StatKind.CRIT_CHANCE: 100.0,
    StatKind.CRIT_DAMAGE: 0.0,
    StatKind.DODGE: 80.0,
})


class ConfigError(ValueError):
    """Config file exists but cannot be read as TOML."""


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    update_interval: int = 10
    pvp_only: bool = True
    debug: bool = False
    metrics_log_interval: int = 1200
    damage_divisor: float = 2.0
    defense_divisor: float = 2.0
    crit_damage_divisor: float = 2.0
    base_health: float = DEFAULT_BASE_HEALTH
    max_stats: dict[StatKind, float] = Field(default_factory=lambda: dict(DEFAULT_MAX_STATS))
    weapons: tuple[str, ...] = ()
    lore: dict[str, Any] = Field(default_factory=dict)

    @property
    def damage_config(self) -> DamageConfig:
        return DamageConfig(self.damage_divisor, self.defense_divisor, self.crit_damage_divisor)

    def max_stat(self, kind: StatKind) -> float:
        """Configured cap for ``kind``; 0 means unlimited."""
        return self.max_stats.get(kind, 0.0)

    def clamp_stat(self, kind: StatKind, value: float) -> float:
        value = max(0.0, value)
        cap = self.max_stat(kind)
        if cap > 0 and value > cap:
            return cap
        return value


def _number(table: dict[str, Any], key: str, default: float, where: str) -> float:
    value = table.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        logger.warning("Invalid number for %s.%s: %r, using %s", where, key, value, default)
        return default
    return float(value)


def _table(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key, {})
    return value if isinstance(value, dict) else {}


def build_settings(raw: dict[str, Any]) -> Settings:
    """Normalize a raw config dict. Bad values are logged and replaced by defaults."""
    general = _table(raw, "settings")
    stats = _table(raw, "stats")

    update_interval = max(1, int(_number(general, "update_interval", 10, "settings")))
    metrics_interval = max(20, int(_number(general, "metrics_log_interval", 1200, "settings")))

    def stat_table(kind: StatKind) -> dict[str, Any]:
        return _table(stats, kind.config_key)

    base_health = _number(stat_table(StatKind.HEALTH), "base", DEFAULT_BASE_HEALTH, "stats.health")
    if base_health < 1.0:
        logger.warning("stats.health.base must be >= 1, using %s", DEFAULT_BASE_HEALTH)
        base_health = DEFAULT_BASE_HEALTH

    max_stats = {}
    for kind in StatKind:
        cap = _number(stat_table(kind), "max", DEFAULT_MAX_STATS[kind], f"stats.{kind.config_key}")
        max_stats[kind] = max(0.0, cap)

    weapons = raw.get("weapons", [])
    if not isinstance(weapons, list):
        logger.warning("weapons must be a list of patterns, got %r", weapons)
        weapons = []

    return Settings(
        update_interval=update_interval,
        pvp_only=bool(general.get("pvp_only", True)),
        debug=bool(general.get("debug", False)),
        metrics_log_interval=metrics_interval,
        damage_divisor=_number(stat_table(StatKind.ATTACK), "divisor", 2.0, "stats.damage"),
        defense_divisor=_number(stat_table(StatKind.DEFENSE), "divisor", 2.0, "stats.defense"),
        crit_damage_divisor=_number(stat_table(StatKind.CRIT_DAMAGE), "divisor", 2.0, "stats.critdamage"),
        base_health=base_health,
        max_stats=max_stats,
        weapons=tuple(str(w) for w in weapons if isinstance(w, str)),
        lore=_table(raw, "lore"),
    )


def load_settings(path: Path | str | None = None) -> Settings:
    """Read config (defaults overlaid with ``path``) into Settings."""
    try:
        raw = load_config(path)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Cannot parse config file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    return build_settings(raw)
