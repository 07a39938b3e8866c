from __future__ import annotations
import tomllib
from pathlib import Path
from typing import Any

CONTENT_DIR = Path(__file__).parent
DEFAULT_CONFIG_FILE = CONTENT_DIR / "config.toml"
DEFAULT_MESSAGES_FILE = CONTENT_DIR / "messages.toml"

def load_toml(filepath: Path) -> dict[str, Any]:
    with open(filepath, "rb") as f:
        return tomllib.load(f)

def load_default_config() -> dict[str, Any]:
    return load_toml(DEFAULT_CONFIG_FILE)

def load_default_messages() -> dict[str, Any]:
    return load_toml(DEFAULT_MESSAGES_FILE)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``; nested tables merge key by key."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path | str | None = None) -> dict[str, Any]:
    """Load the shipped defaults, overlaid with the file at ``path`` if it exists."""
    data = load_default_config()
    if path is None:
        return data
    path = Path(path)
    if not path.exists():
        return data
    return deep_merge(data, load_toml(path))


def load_messages(path: Path | str | None = None) -> dict[str, Any]:
    data = load_default_messages()
    if path is None:
        return data
    path = Path(path)
    if not path.exists():
        return data
    return deep_merge(data, load_toml(path))
