from __future__ import annotations

from lore_stats.config.messages import Messages
from lore_stats.config.settings import ConfigError, Settings, build_settings, load_settings

__all__ = [
    "ConfigError",
    "Messages",
    "Settings",
    "build_settings",
    "load_settings",
]
