"""User-facing message catalogue rendered with Jinja2."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from lore_stats.content.loader import load_messages
from lore_stats.lore.colors import translate_color_codes

logger = logging.getLogger(__name__)


def format_amount(value: Any) -> str:
    """Numbers render with one decimal place unless integral (``12`` / ``12.5``)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


class Messages:
    def __init__(self, data: dict[str, Any] | None = None):
        self._data = data if data is not None else load_messages()
        self._env = Environment(autoescape=False, undefined=StrictUndefined)
        self._env.filters["amount"] = format_amount
        self.prefix = translate_color_codes(str(self._data.get("prefix", "&6[PLS] &f")))

    @classmethod
    def load(cls, path: Path | str | None = None) -> Messages:
        return cls(load_messages(path))

    def _lookup(self, key: str) -> str | None:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def get(self, key: str, **placeholders: Any) -> str:
        """Render message ``key`` (dotted path) without the prefix."""
        raw = self._lookup(key)
        if raw is None:
            logger.warning("Message key not found: %s", key)
            return f"§c[missing message: {key}]"
        values = {k: format_amount(v) for k, v in placeholders.items()}
        try:
            text = self._env.from_string(raw).render(**values)
        except TemplateError as exc:
            logger.warning("Message %s failed to render: %s", key, exc)
            text = raw
        return translate_color_codes(text) or ""

    def with_prefix(self, key: str, **placeholders: Any) -> str:
        return self.prefix + self.get(key, **placeholders)
