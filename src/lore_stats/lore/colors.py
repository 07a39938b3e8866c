"""Minecraft-style color markup: ``&c`` / ``§c`` codes and ``§x§r§r§g§g§b§b`` hex colors."""
from __future__ import annotations

import re

SECTION = "§"
COLOR_CODE_CHARS = "0123456789AaBbCcDdEeFfKkLlMmNnOoRrXx"

_HEX_COLOR_RE = re.compile(r"§x(?:§[0-9a-fA-F]){6}")
_SECTION_CODE_RE = re.compile(r"§[0-9a-fA-Fk-oK-OrRxX]")
_AMPERSAND_CODE_RE = re.compile(r"&[0-9a-fA-Fk-oK-OrRxX]")


def strip_color(text: str | None) -> str | None:
    """Remove color and format codes, leaving every other character alone."""
    if text is None:
        return None
    if SECTION not in text and "&" not in text:
        return text

    result = text
    if "§x" in result:
        result = _HEX_COLOR_RE.sub("", result)
    if SECTION in result:
        result = _SECTION_CODE_RE.sub("", result)
    if "&" in result:
        result = _AMPERSAND_CODE_RE.sub("", result)
    return result


def translate_color_codes(text: str | None) -> str | None:
    """Turn ``&c`` style codes into ``§c`` (lowercased)."""
    if text is None:
        return None
    chars = list(text)
    for i in range(len(chars) - 1):
        if chars[i] == "&" and chars[i + 1] in COLOR_CODE_CHARS:
            chars[i] = SECTION
            chars[i + 1] = chars[i + 1].lower()
    return "".join(chars)
