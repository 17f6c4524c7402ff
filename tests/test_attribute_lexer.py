"""Tests for the attribute bracket lexer."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from llaves.attributes import AttributeSite, scan_attributes


class TestShortcuts:
    """#id and .class shortcuts."""

    def test_id(self) -> None:
        scan = scan_attributes("{#intro}")
        assert scan is not None
        assert scan.attributes == {"id": "intro"}
        assert scan.entries == (("id", "intro"),)

    def test_classes_accumulate(self) -> None:
        scan = scan_attributes("{.a .b}")
        assert scan is not None
        assert scan.attributes == {"class": "a b"}

    def test_chained_shortcuts_without_spaces(self) -> None:
        scan = scan_attributes("{#x.a.b}")
        assert scan is not None
        assert scan.entries == (("id", "x"), ("class", "a"), ("class", "b"))

    def test_empty_shortcut_fails(self) -> None:
        assert scan_attributes("{#}") is None
        assert scan_attributes("{. a}") is None

    def test_shortcut_cannot_start_with_brace(self) -> None:
        assert scan_attributes("{.{a}") is None

    def test_character_reference_decoded(self) -> None:
        scan = scan_attributes("{#a&amp;b}")
        assert scan is not None
        assert scan.attributes == {"id": "a&b"}


class TestNamesAndValues:
    """key, key=value and quoted values."""

    def test_bare_name(self) -> None:
        scan = scan_attributes("{hidden}")
        assert scan is not None
        assert scan.attributes == {"hidden": ""}

    def test_unquoted_value(self) -> None:
        scan = scan_attributes("{data-x=1}")
        assert scan is not None
        assert scan.attributes == {"data-x": "1"}

    def test_double_quoted_value_with_spaces(self) -> None:
        scan = scan_attributes('{title="A &amp; B"}')
        assert scan is not None
        assert scan.attributes == {"title": "A & B"}

    def test_single_quoted_value(self) -> None:
        scan = scan_attributes("{title='x y'}")
        assert scan is not None
        assert scan.attributes == {"title": "x y"}

    def test_spaces_around_equals(self) -> None:
        scan = scan_attributes("{lang = en}")
        assert scan is not None
        assert scan.attributes == {"lang": "en"}

    def test_name_punctuation(self) -> None:
        scan = scan_attributes("{xml:lang=en _x=1 a.b=2}")
        assert scan is not None
        assert scan.attributes == {"xml:lang": "en", "_x": "1", "a.b": "2"}

    def test_mixed(self) -> None:
        scan = scan_attributes('{#a .b c="d" e}')
        assert scan is not None
        assert scan.attributes == {"id": "a", "class": "b", "c": "d", "e": ""}

    def test_empty_bracket(self) -> None:
        scan = scan_attributes("{}")
        assert scan is not None
        assert scan.attributes == {}


class TestFailures:
    """Malformed brackets fail as a whole."""

    @pytest.mark.parametrize(
        "text",
        [
            "{.class",
            "{=value}",
            "{a=}",
            '{a="x}',
            "{a='x\ny'}",
            "{a=b<c}",
            "{a=`x`}",
            "{!x}",
            '{a="x"b}',
            "not a bracket",
            "",
        ],
    )
    def test_rejected(self, text: str) -> None:
        assert scan_attributes(text) is None

    def test_position_must_point_at_brace(self) -> None:
        assert scan_attributes("a{.b}", 0) is None
        assert scan_attributes("a{.b}", 1) is not None

    def test_offsets(self) -> None:
        scan = scan_attributes("xx{.b} tail", 2)
        assert scan is not None
        assert scan.start == 2
        assert scan.end == 6


class TestBlockSite:
    """BLOCK brackets must fill the rest of their line."""

    def test_trailing_blanks_consumed(self) -> None:
        scan = scan_attributes("{.a}  \t\nnext", 0, AttributeSite.BLOCK)
        assert scan is not None
        assert scan.end == 7

    def test_trailing_text_rejected(self) -> None:
        assert scan_attributes("{.a} text", 0, AttributeSite.BLOCK) is None

    def test_same_text_accepted_inline(self) -> None:
        assert scan_attributes("{.a} text", 0, AttributeSite.INLINE) is not None

    def test_bracket_never_spans_lines(self) -> None:
        assert scan_attributes("{#a\n.b}", 0, AttributeSite.INLINE) is None
        assert scan_attributes("{a=1\n}", 0, AttributeSite.INLINE) is None


class TestInvariants:
    """Property-based checks on the scanner."""

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_never_raises(self, text: str) -> None:
        """Arbitrary input scans to a result or None, never an exception."""
        scan_attributes("{" + text)

    @given(st.text(alphabet="{}#.=\"' \tabc-_\n", max_size=60))
    @settings(max_examples=200)
    def test_end_within_text(self, text: str) -> None:
        source = "{" + text
        scan = scan_attributes(source)
        if scan is not None:
            assert 0 < scan.end <= len(source)
            assert source[scan.end - 1] == "}"
