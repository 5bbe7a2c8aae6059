"""Plain-text sanitization for free-text submissions.

Strips tag-like fragments and NUL bytes and bounds length. This is simple
non-nested tag stripping, not an HTML parser: its output is stored as text
and must still be escaped wherever it is rendered into HTML.
"""

import re
from typing import Any

TAG_PATTERN = re.compile(r"<[^>]*>")
NUL = "\x00"


def truncate_utf16(value: str, max_units: int) -> str:
    """Truncate value to at most max_units UTF-16 code units.

    Characters outside the BMP count as two units; one that would straddle
    the limit is dropped whole rather than split into a lone surrogate.
    """
    if max_units <= 0:
        return ""
    if len(value) <= max_units // 2:
        return value
    units = 0
    for index, char in enumerate(value):
        units += 2 if ord(char) > 0xFFFF else 1
        if units > max_units:
            return value[:index]
    return value


def utf16_length(value: str) -> int:
    """Length in UTF-16 code units (how browsers count string length)."""
    return len(value) + sum(1 for char in value if ord(char) > 0xFFFF)


def utf16_code_units(value: str) -> str:
    """Return value with characters outside the BMP split into surrogate pairs.

    Pattern matching over the result sees the same units as a browser does,
    so an emoji is two "characters" rather than one.
    """
    if all(ord(char) <= 0xFFFF for char in value):
        return value
    units = []
    for char in value:
        code = ord(char)
        if code > 0xFFFF:
            code -= 0x10000
            units.append(chr(0xD800 + (code >> 10)))
            units.append(chr(0xDC00 + (code & 0x3FF)))
        else:
            units.append(char)
    return "".join(units)


def sanitize_text(value: Any, max_length: int = 1000) -> str:
    """Return cleaned text: tags and NUL bytes removed, trimmed, length-bounded.

    Args:
        value: Raw input; anything that is not a non-empty string yields "".
        max_length: Maximum length in UTF-16 code units, applied after trimming.

    Returns:
        Sanitized string no longer than max_length.
    """
    if not value or not isinstance(value, str):
        return ""
    cleaned = TAG_PATTERN.sub("", value)
    cleaned = cleaned.replace(NUL, "")
    return truncate_utf16(cleaned.strip(), max_length)
