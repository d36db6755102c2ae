"""Parser for the inline map text printed by ``c2rust-config --list``.

A structured query such as ``--list clean`` prints a record like::

    {dir = "src", cmd = "make clean CFLAGS=-O2"}

Values keep any ``=`` they contain and lose exactly one pair of surrounding
quotes. Escaped quotes inside a value are left as-is.
"""

from typing import Dict, List

_QUOTES = ("'", '"')
_OPENERS = {"{": "}", "[": "]", "(": ")"}


def strip_matching(text: str, opening: str, closing: str) -> str:
    """Remove one pair of enclosing delimiters if both ends match."""
    if len(text) >= 2 and text[0] == opening and text[-1] == closing:
        return text[1:-1]
    return text


def strip_quotes(value: str) -> str:
    """Remove one pair of matching single or double quotes."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split text on separator, ignoring separators inside quotes or brackets."""
    segments = []
    current = []
    quote = None
    closers = []
    escaped = False

    for char in text:
        if escaped:
            escaped = False
        elif char == "\\" and quote:
            escaped = True
        elif quote:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif char in _OPENERS:
            closers.append(_OPENERS[char])
        elif closers and char == closers[-1]:
            closers.pop()
        elif char == separator and not closers:
            segments.append("".join(current))
            current = []
            continue
        current.append(char)

    segments.append("".join(current))
    return segments


def parse_inline_map(text: str) -> Dict[str, str]:
    """Parse ``{key = value, ...}`` text into a dict of strings.

    Args:
        text: Raw tool output

    Returns:
        Mapping of trimmed keys to unquoted values

    Raises:
        ValueError: If a non-empty segment has no '='
    """
    body = strip_matching(text.strip(), "{", "}").strip()
    result = {}

    for segment in split_top_level(body):
        if not segment.strip():
            continue
        if "=" not in segment:
            raise ValueError(f"Malformed config entry (missing '='): {segment.strip()!r}")
        key, value = segment.split("=", 1)
        result[key.strip()] = strip_quotes(value.strip())

    return result
