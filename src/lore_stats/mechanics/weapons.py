"""Weapon classification from glob patterns like ``*_SWORD`` or ``BOW``."""
from __future__ import annotations

import logging
import re
from typing import Iterable

logger = logging.getLogger(__name__)

_LITERAL_SPECIALS = set("\\.[]{}()+-^$|")


def compile_glob(glob: str) -> re.Pattern[str]:
    """``*`` matches any run, ``?`` one character, everything else literally; anchored, case-insensitive."""
    parts = ["^"]
    for c in glob.upper():
        if c == "*":
            parts.append(".*")
        elif c == "?":
            parts.append(".")
        elif c in _LITERAL_SPECIALS:
            parts.append("\\" + c)
        else:
            parts.append(c)
    parts.append("$")
    return re.compile("".join(parts), re.IGNORECASE)


class WeaponMatcher:
    def __init__(self, globs: Iterable[str] | None = None):
        patterns: list[re.Pattern[str]] = []
        for glob in globs or []:
            if not isinstance(glob, str) or not glob.strip():
                continue
            try:
                patterns.append(compile_glob(glob.strip()))
            except re.error as exc:
                logger.warning("Invalid weapon pattern %r skipped: %s", glob, exc)
        self._patterns = tuple(patterns)

    @property
    def patterns(self) -> tuple[re.Pattern[str], ...]:
        return self._patterns

    def is_weapon(self, item_type: str | None) -> bool:
        if not item_type:
            return False
        name = item_type.upper()
        return any(p.match(name) for p in self._patterns)

    __call__ = is_weapon
