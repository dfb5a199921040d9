"""Tests for generated-text cleanup and host color tag stripping."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from social_llm.generation.sanitizer import sanitize, strip_color_tags


# ── sanitize ────────────────────────────────────────────────────


def test_removes_color_markup():
    assert sanitize("<color=#FF0000>hi</color>") == "hi"
    assert sanitize("Bob <color=#00ff00>grins</color> at Alice.") == "Bob grins at Alice."


def test_decodes_escaped_angle_brackets_before_stripping():
    text = "\\u003ccolor=#FF0000\\u003eWell met\\u003c/color\\u003e"
    assert sanitize(text) == "Well met"
    assert sanitize("I \\u003C3 you") == "I <3 you"
    assert sanitize("&#60;3 and &#x3e;_&#x3c;") == "<3 and >_<"


def test_leaves_other_markup_alone():
    assert sanitize("a < b and c > d") == "a < b and c > d"
    assert sanitize("<b>bold</b>") == "<b>bold</b>"


def test_is_idempotent():
    samples = [
        "<color=#FF0000>hi</color>",
        "<co<color=#FF0000>lor=#FF0000>x</color>",
        "\\u003ccolor=#ABCDEF\\u003enested <color=#123456>tags</color>\\u003c/color\\u003e",
        "plain text",
        "",
        "<co" * 40 + "<color=#F>" + "lor=#F>" * 40,
        "\\u003c" * 50 + "color=#F" + "\\u003e" * 50,
    ]
    for sample in samples:
        once = sanitize(sample)
        assert sanitize(once) == once, sample
    assert sanitize("<co<color=#FF0000>lor=#FF0000>x</color>") == "x"
    assert sanitize("<co" * 40 + "<color=#F>" + "lor=#F>" * 40) == ""


def test_never_raises_on_odd_input():
    assert sanitize(None) == ""
    assert sanitize("") == ""
    assert sanitize("<color=#>unterminated") == "<color=#>unterminated"
    assert sanitize("\\u003") == "\\u003"
    print("  PASS: sanitize is total")


# ── strip_color_tags ────────────────────────────────────────────


def test_strip_color_tags_handles_any_color_attribute():
    text = '<color=#FFF>Alice</color> chatted with <color="red">Bob</color> about the weather.'
    assert strip_color_tags(text) == "Alice chatted with Bob about the weather."
    assert strip_color_tags(None) == ""
