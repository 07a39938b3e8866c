from __future__ import annotations

from lore_stats.storage.stat_cache import StatCache

__all__ = ["StatCache"]
