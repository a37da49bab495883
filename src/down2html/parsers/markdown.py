#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/parsers/markdown.py
"""Markdown to item tree parser.

This module holds the block grammar. A document is a sequence of *terms*
separated by a blank line (two consecutive CRLFs); leading and trailing
whitespace around the whole document is ignored. Each term is parsed as
exactly one of the following, tried in this order:

1. header      ATX (``# Title``), then setext ``=`` (h1), then setext ``-`` (h2)
2. list        numbered (``1. item``) else bulleted (``* + -``)
3. blockquote  every line starts with ``>``; the stripped lines are parsed
               again as a whole document
4. code block  ```` ``` ```` fence, CRLF, raw text, ```` ``` ```` fence
5. html        one passthrough HTML element
6. paragraph   inline text (see :mod:`down2html.parsers.inline`)

An alternative only succeeds if it consumes the whole term, otherwise the
next one is tried. Paragraph is last; if it cannot consume the term either
the parse fails.

Lines end with CRLF only. A bare LF is ordinary text.

"""

from __future__ import annotations

import logging
from typing import Optional

from down2html.ast import Content, Item, Node
from down2html.constants import (
    BULLET_CHARS,
    CODE_FENCE,
    CRLF,
    MAX_HEADER_LEVEL,
    QUOTE_MARKER,
    TERM_SEPARATOR,
    ListKind,
)
from down2html.exceptions import NestingDepthError, ParseFailure, ValidationError
from down2html.options.markdown import MarkdownParserOptions
from down2html.parsers.base import BaseParser
from down2html.parsers.combinators import (
    Failure,
    Parser,
    Result,
    char_in,
    choice,
    seq,
    string,
    strings,
    take_until,
    take_while,
)
from down2html.parsers.html import HtmlPassthroughGrammar
from down2html.parsers.inline import FORMATTED_TEXT

logger = logging.getLogger(__name__)


def _term_end() -> Parser[None]:
    expected = frozenset({"end of term"})

    def run(text: str, position: int) -> Result[None]:
        if position == len(text) or text.startswith(TERM_SEPARATOR, position):
            return Result.success(None, position)
        return Result.fail(Failure(position, expected))

    return Parser(run, "end of term")


TERM_END = _term_end()
_REST_OF_LINE = take_while(lambda c: c != "\r", min_count=1, name="line text")
_SPACES = take_while(lambda c: c == " ", name="indentation")


def _strip_fence_newline(text: str) -> str:
    # The CRLF right before the closing fence terminates the fence line.
    return text[: -len(CRLF)] if text.endswith(CRLF) else text


class BlockGrammar:
    """The block-level grammar for one quoting depth.

    Blockquote content is parsed by a nested ``BlockGrammar`` one level
    deeper, created on first use, so quoting depth is limited only by
    ``options.max_nesting_depth``.

    Parameters
    ----------
    options : MarkdownParserOptions
        Parsing options
    depth : int, default = 0
        Number of enclosing blockquotes
    html : HtmlPassthroughGrammar, optional
        Shared passthrough grammar; built from ``options`` when omitted

    """

    def __init__(
        self,
        options: MarkdownParserOptions,
        depth: int = 0,
        html: Optional[HtmlPassthroughGrammar] = None,
    ):
        self.options = options
        self.depth = depth
        self.html = html or HtmlPassthroughGrammar(options.max_nesting_depth)
        self._nested: Optional[BlockGrammar] = None

        self.header = (
            self._term("header", self._atx_header())
            | self._term("header", self._setext_header("=", "h1"))
            | self._term("header", self._setext_header("-", "h2"))
        ).named("header")
        number = take_while(str.isdigit, min_count=1, name="number").skip(string("."))
        self.list_block = (self._list(number, "ol") | self._list(char_in(BULLET_CHARS, "bullet"), "ul")).named("list")
        self.blockquote = self._blockquote().named("blockquote")
        self.code_block = self._term("code block", self._code_block()).named("code block")
        self.html_block = self._term("html", self.html.element)
        self.paragraph = self._term("paragraph", FORMATTED_TEXT.map(lambda items: Node("p", items)))

        self.term = choice(
            self.header, self.list_block, self.blockquote, self.code_block, self.html_block, self.paragraph, name="term"
        )

    @property
    def nested(self) -> BlockGrammar:
        """Grammar for content one blockquote level deeper."""
        if self._nested is None:
            self._nested = BlockGrammar(self.options, self.depth + 1, self.html)
        return self._nested

    def parse_terms(self, text: str) -> list[Item]:
        """Parse a whole document into its term nodes.

        Leading and trailing whitespace is ignored. Terms are matched in a loop
        rather than through combinators, so each blockquote level adds only a
        few stack frames.

        Raises
        ------
        NestingDepthError
            If a term cannot be parsed and its HTML nests too deeply
        ParseFailure
            If the document cannot be parsed completely

        """
        text = text.rstrip()
        position = len(text) - len(text.lstrip())
        terms: list[Item] = []
        while True:
            result = self.term(text, position)
            if not result.ok:
                assert result.failure is not None
                self._check_html_nesting(text, position)
                raise ParseFailure(text, result.failure.position, result.failure.expected)
            terms.append(result.value)  # type: ignore[arg-type]
            # Every term ends at a separator or at the end of the text.
            if result.position == len(text):
                return terms
            position = result.position + len(TERM_SEPARATOR)

    def _check_html_nesting(self, text: str, position: int) -> None:
        # Only consulted once every alternative has failed.
        html = self.html_block(text, position)
        if not html.ok:
            assert html.failure is not None
            self.html.check_nesting(text, html.failure)

    @staticmethod
    def _term(kind: str, parser: Parser[Item]) -> Parser[Item]:
        def log(node: Item) -> Item:
            logger.debug("Matched %s term", kind)
            return node

        return parser.followed_by(TERM_END).map(log)

    def _atx_header(self) -> Parser[Item]:
        marks = strings(*("#" * level for level in range(MAX_HEADER_LEVEL, 0, -1)))

        def build(parts: tuple[str, str]) -> Item:
            hashes, text = parts
            if self.options.strip_header_space:
                text = text.lstrip(" ")
            return Node(f"h{len(hashes)}", [Content(text)])

        return seq(marks, _REST_OF_LINE).map(build)

    @staticmethod
    def _setext_header(underline: str, tag: str) -> Parser[Item]:
        rule = string(underline * 2).then(take_while(lambda c: c == underline))
        return _REST_OF_LINE.skip(string(CRLF)).skip(rule).map(lambda text: Node(tag, [Content(text)]))

    def _list(self, bullet: Parser[str], kind: ListKind) -> Parser[Item]:
        item = seq(_SPACES, bullet, string(" "), _REST_OF_LINE)
        items = item.delimited_by(string(CRLF)).followed_by(TERM_END)
        max_depth = self.options.max_nesting_depth

        def run(text: str, position: int) -> Result[Item]:
            # Depth is checked once the whole term is known to be a list.
            result = items(text, position)
            if not result.ok:
                return result  # type: ignore[return-value]
            nodes: list[Item] = []
            for indent, _, _, body in result.value:  # type: ignore[union-attr]
                if len(indent) > max_depth:
                    raise NestingDepthError(text, position, "list", max_depth)
                node: Item = Node("li", [Content(body)])
                # One wrapper per leading space; items at equal depth are not merged.
                for _ in range(len(indent)):
                    node = Node(kind, [node])
                nodes.append(node)
            logger.debug("Matched list term")
            return Result.success(Node(kind, nodes), result.position, result.failure)

        return Parser(run, "list")

    def _blockquote(self) -> Parser[Item]:
        line = string(QUOTE_MARKER).then(string(" ").optional()).then(take_while(lambda c: c != "\r"))
        lines = line.delimited_by(string(CRLF)).followed_by(TERM_END)
        max_depth = self.options.max_nesting_depth

        def run(text: str, position: int) -> Result[Item]:
            result = lines(text, position)
            if not result.ok:
                return result  # type: ignore[return-value]
            if self.depth + 1 > max_depth:
                raise NestingDepthError(text, position, "blockquote", max_depth)
            logger.debug("Matched blockquote term at depth %d", self.depth + 1)
            inner = CRLF.join(result.value)  # type: ignore[arg-type]
            try:
                children = self.nested.parse_terms(inner)
            except NestingDepthError:
                raise
            except ParseFailure as exc:
                raise ParseFailure(
                    text,
                    position,
                    exc.expected,
                    message=f"{exc.message} (inside blockquote at offset {position})",
                ) from exc
            return Result.success(Node("blockquote", children), result.position, result.failure)

        return Parser(run, "blockquote")

    @staticmethod
    def _code_block() -> Parser[Item]:
        return seq(string(CODE_FENCE), string(CRLF), take_until(CODE_FENCE), string(CODE_FENCE)).map(
            lambda parts: Node("code", [Content(_strip_fence_newline(parts[2]))])
        )


class MarkdownParser(BaseParser):
    r"""Parse markdown text into an HTML item tree.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Document and body entry points:

        >>> parser = MarkdownParser()
        >>> parser.parse_body("# Hello").children
        [Node(name='h1', children=[Content(text='Hello')], attributes=[])]
        >>> [child.name for child in parser.parse("*hi*").children]
        ['head', 'body']

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options
        self._grammar = BlockGrammar(options)

    def parse(self, text: str) -> Node:
        """Parse ``text`` through the document entry point.

        Returns
        -------
        Node
            ``<html>`` holding an empty ``<head/>`` and the ``<body>``

        Raises
        ------
        ParseFailure
            If the input cannot be parsed

        """
        return Node("html", [Node("head"), self.parse_body(text)])

    def parse_body(self, text: str) -> Node:
        """Parse ``text`` through the body entry point.

        Returns
        -------
        Node
            ``<body>`` holding one node per term

        Raises
        ------
        ParseFailure
            If the input cannot be parsed

        """
        return Node("body", self.parse_terms(text))

    def parse_terms(self, text: str) -> list[Item]:
        """Parse ``text`` into one node per term, without any wrapper."""
        if not isinstance(text, str):
            raise ValidationError(
                f"Markdown input must be str, got {type(text).__name__}",
                parameter_name="text",
                parameter_value=type(text),
            )
        try:
            terms = self._grammar.parse_terms(text)
        except RecursionError as e:
            # Combined quote, list and HTML nesting can outgrow the interpreter stack.
            raise NestingDepthError(text, 0, "document", self.options.max_nesting_depth) from e
        logger.debug("Parsed %d terms from %d characters", len(terms), len(text))
        return terms


def parse_document(text: str, options: MarkdownParserOptions | None = None) -> Node:
    """Parse markdown into ``<html><head/><body>...</body></html>``."""
    return MarkdownParser(options).parse(text)


def parse_body(text: str, options: MarkdownParserOptions | None = None) -> Node:
    """Parse markdown into a ``<body>`` node."""
    return MarkdownParser(options).parse_body(text)
