"""Tests for layout token substitution."""

import pytest

from listview.common import DEFAULT_LAYOUT
from listview.layout import SectionKind, find_tokens, render_layout


def fixed_sections(token):
    return {"{summary}": "S", "{items}": "I", "{pager}": "P"}.get(token)


class TestRenderLayout:
    """Tests for render_layout."""

    def test_default_layout(self):
        """Default layout stitches summary, items and pager with newlines."""
        assert render_layout(DEFAULT_LAYOUT, fixed_sections) == "S\nI\nP"

    def test_none_selects_default_layout(self):
        """None template falls back to the default layout."""
        assert render_layout(None, fixed_sections) == "S\nI\nP"

    def test_unknown_token_preserved(self):
        """Tokens the renderer does not know stay verbatim."""
        output = render_layout("{summary} {foo} {items}", fixed_sections)
        assert output == "S {foo} I"

    def test_literal_text_kept(self):
        """Text between tokens is copied as-is."""
        output = render_layout("<p>{items}</p>\n--", fixed_sections)
        assert output == "<p>I</p>\n--"

    def test_non_word_braces_not_tokens(self):
        """Only {word} substrings are handed to the renderer."""
        seen = []

        def render(token):
            seen.append(token)
            return "X"

        output = render_layout("{a-b} { items } {ok_1}", render)
        assert output == "{a-b} { items } X"
        assert seen == ["{ok_1}"]

    def test_calls_in_template_order(self):
        """Sections render in the order tokens appear."""
        seen = []

        def render(token):
            seen.append(token)
            return ""

        render_layout("{pager}{summary}{foo}{items}", render)
        assert seen == ["{pager}", "{summary}", "{foo}", "{items}"]

    def test_repeated_tokens_rendered_each_time(self):
        """A repeated token is rendered once per occurrence."""
        counter = {"n": 0}

        def render(token):
            counter["n"] += 1
            return str(counter["n"])

        assert render_layout("{items}-{items}-{items}", render) == "1-2-3"

    def test_empty_content_replaces_token(self):
        """An empty string is content, not "unsupported"."""
        assert render_layout("[{pager}]", lambda token: "") == "[]"


class TestSectionKind:
    """Tests for SectionKind lookup."""

    @pytest.mark.parametrize(
        "token,kind",
        [
            ("{summary}", SectionKind.SUMMARY),
            ("{items}", SectionKind.ITEMS),
            ("{sorter}", SectionKind.SORTER),
            ("{pager}", SectionKind.PAGER),
        ],
    )
    def test_known_tokens(self, token, kind):
        assert SectionKind.from_token(token) is kind
        assert kind.token == token

    @pytest.mark.parametrize("token", ["{foo}", "items", "{Items}", "{}"])
    def test_unknown_tokens(self, token):
        assert SectionKind.from_token(token) is None


class TestFindTokens:
    def test_finds_all_in_order(self):
        assert find_tokens("a{x}b{y_1}{x}") == ["{x}", "{y_1}", "{x}"]

    def test_no_tokens(self):
        assert find_tokens("plain text") == []
