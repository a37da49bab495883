#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/parsers/html.py
"""Passthrough grammar for literal HTML in markdown source.

A term written as HTML is kept as HTML. The sub-grammar recognizes a single
element, either self-closing (``<br/>``) or paired (``<div> ... </div>``)
where the body is a sequence of nested elements and text runs. Tag names are
identifiers: a letter followed by letters, digits, ``-`` or ``_``.

Whitespace may appear before a tag's ``>`` and is skipped after it inside an
element body, so whitespace-only runs between tags are dropped. Attributes
are not recognized.

A paired element whose closing tag names a different element is a committed
failure: the whole parse stops rather than reinterpreting the term as a
paragraph.

An element nested deeper than ``max_depth`` is an ordinary failure that
expects ``HTML_NESTING_LIMIT``, so other alternatives (a paragraph) still get
their turn. Only when nothing else matches does the caller turn it into a
``NestingDepthError``, see ``HtmlPassthroughGrammar.check_nesting``.

"""

from __future__ import annotations

import logging

from down2html.ast.nodes import Content, Item, Node
from down2html.constants import DEFAULT_MAX_NESTING_DEPTH
from down2html.exceptions import NestingDepthError, ParseFailure
from down2html.parsers.combinators import (
    Failure,
    Parser,
    Result,
    end,
    seq,
    string,
    take_while,
)

logger = logging.getLogger(__name__)

HTML_NESTING_LIMIT = "html nesting limit"


def _identifier() -> Parser[str]:
    expected = frozenset({"tag name"})

    def run(text: str, position: int) -> Result[str]:
        if position >= len(text) or not text[position].isalpha():
            return Result.fail(Failure(position, expected))
        end_pos = position + 1
        while end_pos < len(text) and (text[end_pos].isalnum() or text[end_pos] in "-_"):
            end_pos += 1
        return Result.success(text[position:end_pos], end_pos)

    return Parser(run, "tag name")


_WHITESPACE = take_while(str.isspace, name="whitespace")
_CLOSE_ANGLE = _WHITESPACE.then(string(">"))


class HtmlPassthroughGrammar:
    """Parser for one literal HTML element and its nested content.

    Parameters
    ----------
    max_depth : int, default = DEFAULT_MAX_NESTING_DEPTH
        Maximum element nesting; ``element`` fails on deeper input

    Examples
    --------
        >>> HtmlPassthroughGrammar().parse("<div><span/></div>")
        Node(name='div', children=[Node(name='span', children=None, attributes=[])], attributes=[])

    """

    def __init__(self, max_depth: int = DEFAULT_MAX_NESTING_DEPTH):
        self.max_depth = max_depth
        self.identifier = _identifier()
        self.text = take_while(lambda c: c != "<", min_count=1, name="text").map(Content)
        self.short_element = (
            string("<").then(self.identifier).skip(string("/")).skip(_CLOSE_ANGLE).map(lambda name: Node(name))
        ).named("self-closing tag")
        self.opening_tag = string("<").then(self.identifier).skip(_CLOSE_ANGLE).named("opening tag")
        self._tag_start = string("<").then(self.identifier).named("html element")
        self._too_deep = frozenset({HTML_NESTING_LIMIT})
        self._elements: dict[int, Parser[Item]] = {}
        self.element = self._element_at(1)
        self._whole_input = self.element.skip(end())

    def parse(self, text: str) -> Item:
        """Parse ``text`` as exactly one element.

        Raises
        ------
        NestingDepthError
            If the element nests deeper than ``max_depth``
        ParseFailure
            If ``text`` is not a single well-formed element

        """
        result = self._whole_input(text, 0)
        if not result.ok:
            assert result.failure is not None
            self.check_nesting(text, result.failure)
            raise ParseFailure(text, result.failure.position, result.failure.expected)
        return result.value  # type: ignore[return-value]

    def check_nesting(self, text: str, failure: Failure) -> None:
        """Raise ``NestingDepthError`` if ``failure`` stopped at the nesting bound."""
        if HTML_NESTING_LIMIT in failure.expected:
            logger.debug("Element nesting over %d levels at offset %d", self.max_depth, failure.position)
            raise NestingDepthError(text, failure.position, "html", self.max_depth)

    def _element_at(self, depth: int) -> Parser[Item]:
        # Built on first use; each level refers to the next one down.
        if depth in self._elements:
            return self._elements[depth]
        built: list[Parser[Item]] = []

        def run(text: str, position: int) -> Result[Item]:
            if depth > self.max_depth:
                tag_start = self._tag_start(text, position)
                if tag_start.ok:
                    return Result.fail(Failure(position, self._too_deep))
                return tag_start  # type: ignore[return-value]
            if not built:
                built.append(self.short_element | self._paired_element(depth))
            return built[0](text, position)

        parser: Parser[Item] = Parser(run, "html element")
        self._elements[depth] = parser
        return parser

    def _paired_element(self, depth: int) -> Parser[Item]:
        child = _WHITESPACE.then(self._element_at(depth + 1) | self.text)
        return self.opening_tag.bind(
            lambda name: seq(child.many(), _WHITESPACE.then(self.closing_tag(name))).map(
                lambda parts: Node(name, parts[0])
            )
        )

    def closing_tag(self, name: str) -> Parser[str]:
        """Match ``</name>``; a well-formed closing tag for another name is a committed failure."""
        expected = frozenset({f"closing tag for {name}"})
        prefix = seq(string("<"), string("/"))

        def run(text: str, position: int) -> Result[str]:
            opened = prefix(text, position)
            if not opened.ok:
                return Result.fail(Failure(position, expected))
            found = self.identifier(text, opened.position)
            if not found.ok:
                return Result.fail(Failure(opened.position, expected))
            if found.value != name:
                logger.debug("Closing tag </%s> does not match <%s> at offset %d", found.value, name, position)
                return Result.fail(Failure(opened.position, expected, committed=True))
            closed = _CLOSE_ANGLE(text, found.position)
            if not closed.ok:
                return Result.fail(Failure(closed.position, frozenset({"'>'"})))
            return Result.success(name, closed.position)

        return Parser(run, f"closing tag for {name}")
