#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_inline_grammar.py
"""Unit tests for the inline grammar.

Tests cover:
- Escapes, strong, emphasis and code spans
- Links and images
- Line breaks and the paragraph separator
- Ordered-choice limitations of flat spans

"""

import pytest

from down2html.ast import Attribute, Content, Node
from down2html.exceptions import ParseFailure
from down2html.parsers.inline import FORMATTED_TEXT, build_inline_grammar, parse_inline


@pytest.mark.unit
class TestSpans:
    """Tests for formatted spans."""

    @pytest.mark.parametrize("source", ["**bold**", "__bold__"])
    def test_strong(self, source: str) -> None:
        assert parse_inline(source) == [Node("strong", [Content("bold")])]

    @pytest.mark.parametrize("source", ["*it*", "_it_"])
    def test_emphasis(self, source: str) -> None:
        assert parse_inline(source) == [Node("em", [Content("it")])]

    def test_code_span(self) -> None:
        assert parse_inline("`x = 1`") == [Node("code", [Content("x = 1")])]

    def test_mixed_with_text(self) -> None:
        assert parse_inline("a **b** c *d*") == [
            Content("a "),
            Node("strong", [Content("b")]),
            Content(" c "),
            Node("em", [Content("d")]),
        ]

    def test_closing_delimiter_must_match(self) -> None:
        """``**b__`` is neither strong nor emphasis."""
        with pytest.raises(ParseFailure):
            parse_inline("**b__")

    def test_spans_do_not_nest(self) -> None:
        """Span content is plain text, so markup inside a span fails."""
        with pytest.raises(ParseFailure):
            parse_inline("**a *b* c**")

    def test_unclosed_emphasis_reports_furthest_failure(self) -> None:
        """The error points at the missing closer, not at the opener."""
        with pytest.raises(ParseFailure) as exc_info:
            parse_inline("a *b")
        assert exc_info.value.position == 4
        assert exc_info.value.expected == frozenset({"'*'"})


@pytest.mark.unit
class TestEscapes:
    """Tests for backslash escapes."""

    @pytest.mark.parametrize("char", ["*", "_", "[", "`", "\\"])
    def test_escape_yields_literal(self, char: str) -> None:
        assert parse_inline("\\" + char) == [Content(char)]

    def test_escape_merges_with_text(self) -> None:
        assert parse_inline("2 \\* 3") == [Content("2 * 3")]

    def test_unknown_escape_fails(self) -> None:
        """A backslash before an ordinary character is not an escape."""
        with pytest.raises(ParseFailure):
            parse_inline("\\n")


@pytest.mark.unit
class TestLinksAndImages:
    """Tests for links and images."""

    def test_link_without_title(self) -> None:
        assert parse_inline("[home](http://example.com)") == [
            Node("a", [Content("home")], [Attribute("href", "http://example.com"), Attribute("title", None)])
        ]

    def test_link_with_title(self) -> None:
        (link,) = parse_inline('[home](/index.html  "Home page")')
        assert link.attributes == [Attribute("href", "/index.html"), Attribute("title", "Home page")]

    def test_link_text_is_literal(self) -> None:
        (link,) = parse_inline("[a *b*](u)")
        assert link.children == [Content("a *b*")]

    def test_destination_stops_at_whitespace(self) -> None:
        with pytest.raises(ParseFailure):
            parse_inline("[a](b c)")

    def test_image(self) -> None:
        assert parse_inline("![logo](logo.png)") == [
            Node("img", None, [Attribute("alt", "logo"), Attribute("src", "logo.png")])
        ]

    def test_image_is_self_closing(self) -> None:
        (image,) = parse_inline("![](a.png)")
        assert image.is_self_closing
        assert image.get_attribute("alt") == ""

    def test_bang_after_text_belongs_to_text(self) -> None:
        """A ``!`` ending a plain run is text, so the brackets read as a link."""
        assert parse_inline("see ![x](y)") == [
            Content("see !"),
            Node("a", [Content("x")], [Attribute("href", "y"), Attribute("title", None)]),
        ]


@pytest.mark.unit
class TestLineBreaks:
    """Tests for CRLF handling inside a paragraph."""

    def test_single_crlf_is_line_break(self) -> None:
        assert parse_inline("a\r\nb") == [Content("a"), Node("br"), Content("b")]

    def test_double_crlf_is_not_consumed(self) -> None:
        result = FORMATTED_TEXT("a\r\n\r\nb", 0)
        assert result.ok
        assert result.value == [Content("a")]
        assert result.position == 1

    def test_bare_lf_is_text(self) -> None:
        assert parse_inline("a\nb") == [Content("a\nb")]

    def test_lone_cr_fails(self) -> None:
        with pytest.raises(ParseFailure):
            parse_inline("a\rb")

    def test_empty_input(self) -> None:
        assert parse_inline("") == []


@pytest.mark.unit
class TestCustomForbiddenSet:
    """Tests for grammars built with a different forbidden set."""

    def test_without_underscore(self) -> None:
        grammar = build_inline_grammar(frozenset("\r*[`\\"))
        result = grammar("snake_case *x*", 0)
        assert result.value == [Content("snake_case "), Node("em", [Content("x")])]
