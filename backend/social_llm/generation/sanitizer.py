"""Cleanup of generated text before it is shown to the user."""

from __future__ import annotations

import re

# Angle brackets the backend tends to emit as escapes instead of literally
_ANGLE_BRACKET_ESCAPES = re.compile(
    r"\\u003c|\\u003e|&#0*60;|&#0*62;|&#x0*3c;|&#x0*3e;",
    re.IGNORECASE,
)
_COLOR_MARKUP = re.compile(r"<color=#\w+>|</color>", re.IGNORECASE)

# Broader form used on host-rendered text: any <color ...> or </color>
_ANY_COLOR_TAG = re.compile(r"</?color[^>]*>", re.IGNORECASE)


def _unescape_angle_bracket(match: re.Match) -> str:
    token = match.group(0).lower().rstrip(";")
    return "<" if token.endswith(("3c", "60")) else ">"


def sanitize(text: str | None) -> str:
    """Decode escaped angle brackets and drop <color=#..> markup.

    Repeats until nothing changes, so sanitize(sanitize(x)) == sanitize(x)
    even when removing one tag exposes another.
    """
    if not text:
        return ""
    if not isinstance(text, str):
        text = str(text)

    # Every pass that changes the text also shortens it, so this terminates
    while True:
        cleaned = _ANGLE_BRACKET_ESCAPES.sub(_unescape_angle_bracket, text)
        cleaned = _COLOR_MARKUP.sub("", cleaned)
        if cleaned == text:
            return text
        text = cleaned


def strip_color_tags(text: str | None) -> str:
    if not text:
        return ""
    previous = None
    while previous != text:
        previous = text
        text = _ANY_COLOR_TAG.sub("", text)
    return text
