"""Lore template — per-stat line formats, display order and separators.

A template is built once from the ``[lore]`` config section and never
changes afterwards; reloading config builds a new one.

Example format: ``"&c⚔ 공격력 &f+{value}"`` renders ``§c⚔ 공격력 §f+50`` and
parses back with the pattern ``⚔ 공격력 \\+([0-9.]+)``.
"""
from __future__ import annotations

import logging
import math
import re
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from lore_stats.lore.colors import strip_color, translate_color_codes
from lore_stats.models.item_stats import ItemStats
from lore_stats.models.stat import StatKind, find_by_keyword

logger = logging.getLogger(__name__)

VALUE_PLACEHOLDER = "{value}"
_NUMBER_GROUP = r"([0-9.]+)"
_PERCENT_NUMBER_GROUP = r"([0-9.]+)%?"

DEFAULT_FORMATS: Mapping[StatKind, str] = MappingProxyType({
    StatKind.ATTACK: "&c⚔ 공격력 &f+{value}",
    StatKind.DEFENSE: "&9🛡 방어력 &f+{value}",
    StatKind.HEALTH: "&6❤ 체력 &f+{value}",
    StatKind.LIFESTEAL: "&4🩸 피흡수 &f{value}%",
    StatKind.CRIT_CHANCE: "&e⚡ 치명타 확률 &f{value}%",
    StatKind.CRIT_DAMAGE: "&5💥 치명타 데미지 &f+{value}",
    StatKind.DODGE: "&b💨 회피율 &f{value}%",
})
DEFAULT_SEPARATOR_TOP = "&8&m─────&r &6✦ 스탯 &8&m─────"
DEFAULT_SEPARATOR_BOTTOM = "&8&m──────────────────"


def format_value(value: float) -> str:
    """Positional notation: integral values drop the decimal point (``50``),
    others keep full precision (``10.5``, ``0.00001``). Non-finite values render as ``0``.
    """
    value = float(value)
    if not math.isfinite(value):
        return "0"
    if value == int(value):
        return str(int(value))
    text = format(Decimal(repr(value)), "f")
    return text.rstrip("0").rstrip(".") if "." in text else text


def build_parse_pattern(kind: StatKind, fmt: str) -> re.Pattern[str] | None:
    """Derive the regex that recognises lines rendered from ``fmt``.

    Color codes are stripped, everything except the placeholder is matched
    literally, and the placeholder captures the number (with an optional
    trailing ``%`` for percentage stats).
    """
    stripped = strip_color(fmt) or ""
    if VALUE_PLACEHOLDER not in stripped:
        return None
    number = _PERCENT_NUMBER_GROUP if kind.percentage else _NUMBER_GROUP
    regex = number.join(re.escape(part) for part in stripped.split(VALUE_PLACEHOLDER))
    try:
        return re.compile(regex)
    except re.error as exc:
        logger.warning("Lore format for %s does not compile (%s): %r", kind.config_key, exc, fmt)
        return None


class LoreTemplate:
    def __init__(
        self,
        formats: Mapping[StatKind, str] | None = None,
        order: Iterable[StatKind] | None = None,
        separator_top: str = DEFAULT_SEPARATOR_TOP,
        separator_bottom: str = DEFAULT_SEPARATOR_BOTTOM,
        separator_enabled: bool = True,
    ):
        accepted: dict[StatKind, str] = {}
        for kind, fmt in (formats if formats is not None else DEFAULT_FORMATS).items():
            if not fmt or VALUE_PLACEHOLDER not in fmt:
                logger.warning("Lore format for %s has no %s placeholder, ignoring: %r",
                               kind.config_key, VALUE_PLACEHOLDER, fmt)
                continue
            accepted[kind] = fmt

        patterns: dict[StatKind, re.Pattern[str]] = {}
        for kind in StatKind:
            if kind not in accepted:
                continue
            pattern = build_parse_pattern(kind, accepted[kind])
            if pattern is None:
                logger.warning("Lore format for %s is not parseable once colors are stripped: %r",
                               kind.config_key, accepted[kind])
                continue
            patterns[kind] = pattern

        order = tuple(dict.fromkeys(order or ()))
        self._formats: Mapping[StatKind, str] = MappingProxyType(accepted)
        self._patterns: Mapping[StatKind, re.Pattern[str]] = MappingProxyType(patterns)
        self._order: tuple[StatKind, ...] = order or tuple(StatKind)
        self._separator_top = separator_top
        self._separator_bottom = separator_bottom
        self._separator_enabled = separator_enabled

    @classmethod
    def default(cls) -> LoreTemplate:
        return cls()

    @classmethod
    def from_config(cls, lore_cfg: dict[str, Any] | None) -> LoreTemplate:
        """Build from the ``[lore]`` config table; missing keys fall back to defaults."""
        lore_cfg = lore_cfg or {}
        sep_cfg = lore_cfg.get("separator", {}) or {}
        fmt_cfg = lore_cfg.get("format", {}) or {}

        formats: dict[StatKind, str] = dict(DEFAULT_FORMATS)
        for kind in StatKind:
            fmt = fmt_cfg.get(kind.config_key)
            if isinstance(fmt, str):
                formats[kind] = fmt
            elif fmt is not None:
                logger.warning("Lore format for %s must be a string, got %r", kind.config_key, fmt)

        order: list[StatKind] = []
        for key in lore_cfg.get("order", []) or []:
            kind = find_by_keyword(str(key))
            if kind is None:
                logger.warning("Unknown stat '%s' in lore.order, skipping", key)
                continue
            order.append(kind)

        top = sep_cfg.get("top", DEFAULT_SEPARATOR_TOP)
        bottom = sep_cfg.get("bottom", DEFAULT_SEPARATOR_BOTTOM)
        return cls(
            formats=formats,
            order=order,
            separator_top=top if isinstance(top, str) else DEFAULT_SEPARATOR_TOP,
            separator_bottom=bottom if isinstance(bottom, str) else DEFAULT_SEPARATOR_BOTTOM,
            separator_enabled=bool(sep_cfg.get("enabled", True)),
        )

    # -- Accessors --

    @property
    def order(self) -> tuple[StatKind, ...]:
        return self._order

    @property
    def patterns(self) -> Mapping[StatKind, re.Pattern[str]]:
        """Parse patterns in catalog declaration order."""
        return self._patterns

    def parse_patterns(self) -> dict[StatKind, re.Pattern[str]]:
        return dict(self._patterns)

    @property
    def separator_enabled(self) -> bool:
        return self._separator_enabled

    @property
    def separator_top(self) -> str:
        return translate_color_codes(self._separator_top) or ""

    @property
    def separator_bottom(self) -> str:
        return translate_color_codes(self._separator_bottom) or ""

    def get_format(self, kind: StatKind) -> str | None:
        return self._formats.get(kind)

    # -- Rendering --

    def format_line(self, kind: StatKind, value: float) -> str | None:
        fmt = self._formats.get(kind)
        if fmt is None:
            return None
        return translate_color_codes(fmt.replace(VALUE_PLACEHOLDER, format_value(value)))

    def generate(self, stats: ItemStats | None) -> list[str]:
        """Render the stat block for ``stats``: separators around one line per non-zero stat."""
        if stats is None or stats.is_empty():
            return []

        lines: list[str] = []
        for kind in self._order:
            value = stats.get(kind)
            if value <= 0:
                continue
            line = self.format_line(kind, value)
            if line is not None:
                lines.append(line)

        if not lines:
            return []
        if self._separator_enabled:
            return [self.separator_top, *lines, self.separator_bottom]
        return lines
