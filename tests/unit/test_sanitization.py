"""Tests for sanitize_text and UTF-16 length helpers."""

import pytest

from askfreely.shared.utils.sanitization import (
    sanitize_text,
    truncate_utf16,
    utf16_code_units,
    utf16_length,
)


@pytest.mark.parametrize("value", [None, "", 0, 42, ["a"], {"a": 1}])
def test_sanitize_non_string_or_empty_returns_empty(value) -> None:
    assert sanitize_text(value) == ""


def test_sanitize_strips_tags_nul_and_whitespace() -> None:
    raw = "  <script>alert(1)</script>Hello\x00 <b>world</b>  "
    assert sanitize_text(raw) == "alert(1)Hello world"


def test_sanitize_is_not_an_html_parser() -> None:
    """Unclosed '<' is kept; only complete <...> fragments are removed."""
    assert sanitize_text("a < b and c > d") == "a  d"
    assert sanitize_text("1 < 2") == "1 < 2"


def test_sanitize_truncates_after_trim() -> None:
    assert sanitize_text("   abcdef   ", max_length=3) == "abc"


def test_truncate_drops_surrogate_pair_straddling_limit() -> None:
    value = "a" * 999 + "\U0001F600"
    assert utf16_length(value) == 1001
    assert truncate_utf16(value, 1000) == "a" * 999
    assert truncate_utf16(value, 1001) == value


def test_utf16_length_counts_astral_as_two() -> None:
    assert utf16_length("abc") == 3
    assert utf16_length("\U0001F600\U0001F600") == 4


def test_utf16_code_units_splits_astral_characters() -> None:
    assert utf16_code_units("abc") == "abc"
    assert utf16_code_units("a\U0001F600") == "a\ud83d\ude00"
    assert len(utf16_code_units("\U0001F600" * 3)) == utf16_length("\U0001F600" * 3)
