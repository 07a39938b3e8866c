"""Parse, rewrite and strip the stat block inside an item's lore lines."""
from __future__ import annotations

import logging
import math
import re
from typing import Sequence

from lore_stats.lore.colors import strip_color
from lore_stats.lore.template import LoreTemplate
from lore_stats.models.item_stats import ItemStats
from lore_stats.models.stat import StatKind

logger = logging.getLogger(__name__)

_SEPARATOR_LINE_RE = re.compile(r"^[─\-━═]+$")


class LoreEditor:
    """All lore operations for one template.

    Only lines matching a configured format count as stat lines; anything
    else in the lore is left where it was.
    """

    def __init__(self, template: LoreTemplate):
        self.template = template
        self._patterns = template.parse_patterns()
        self._separator_top = strip_color(template.separator_top)
        self._separator_bottom = strip_color(template.separator_bottom)

    def parse(self, lore: Sequence[str] | None) -> ItemStats:
        """Read stats from lore. The first matching stat wins per line, the last line wins per stat."""
        if not lore:
            return ItemStats.empty()

        found: dict[StatKind, float] = {}
        for line in lore:
            if not line:
                continue
            kind, value = self._match_line(strip_color(line))
            if kind is not None and value is not None:
                found[kind] = value
        return ItemStats.from_mapping(found)

    def _match_line(self, stripped: str) -> tuple[StatKind | None, float | None]:
        for kind, pattern in self._patterns.items():
            m = pattern.search(stripped)
            if not m:
                continue
            try:
                value = float(m.group(1))
            except ValueError:
                logger.debug("Unparseable %s value in lore line: %r", kind.config_key, stripped)
                return kind, None
            if value < 0 or not math.isfinite(value):
                logger.debug("Out of range %s value in lore line: %r", kind.config_key, stripped)
                return kind, None
            return kind, value
        return None, None

    def generate(self, stats: ItemStats | None) -> list[str]:
        return self.template.generate(stats)

    def is_stat_line(self, line: str | None) -> bool:
        if not line:
            return False
        stripped = strip_color(line)
        return any(p.search(stripped) for p in self._patterns.values())

    def is_separator_line(self, line: str | None) -> bool:
        if not line:
            return False
        stripped = strip_color(line)
        if stripped in (self._separator_top, self._separator_bottom):
            return True
        return bool(_SEPARATOR_LINE_RE.match(stripped)) or "────" in stripped or "----" in stripped

    def _is_block_line(self, line: str | None) -> bool:
        return self.is_stat_line(line) or self.is_separator_line(line)

    def add_or_update(self, lore: Sequence[str] | None, stats: ItemStats | None, insert_index: int = 0) -> list[str]:
        """Replace the stat block with one rendered from ``stats``.

        The old block (every stat and separator line, even non-contiguous
        ones) is removed and the new block goes where the first of them was.
        Without an old block, the new one is inserted at ``insert_index``.
        """
        lore = list(lore or [])
        if stats is None or stats.is_empty():
            return lore

        before: list[str] = []
        after: list[str] = []
        anchor = -1
        for i, line in enumerate(lore):
            if self._is_block_line(line):
                if anchor == -1:
                    anchor = i
            elif anchor == -1:
                before.append(line)
            else:
                after.append(line)

        block = self.generate(stats)
        if anchor == -1:
            index = min(max(insert_index, 0), len(before))
            return before[:index] + block + before[index:]
        return before + block + after

    def remove_one(self, lore: Sequence[str] | None, kind: StatKind) -> list[str]:
        if not lore:
            return []
        remaining = self.parse(lore).remove(kind)
        if remaining.is_empty():
            return self.remove_all(lore)
        return self.add_or_update(lore, remaining, 0)

    def remove_all(self, lore: Sequence[str] | None) -> list[str]:
        if not lore:
            return []
        return [line for line in lore if not self._is_block_line(line)]
