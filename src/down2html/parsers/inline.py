#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/parsers/inline.py
"""Inline grammar for paragraph text.

Turns a run of paragraph text into a flat sequence of items. At each
position the alternatives below are tried in order and the first match
wins (ordered choice, not longest match):

1. escape       ``\\*``                      -> Content("*")
2. strong       ``**text**`` / ``__text__``  -> <strong>
3. emphasis     ``*text*`` / ``_text_``      -> <em>
4. code span    ```text```                   -> <code>
5. link         ``[text](dest "title")``     -> <a href title>
6. image        ``![alt](src)``              -> <img alt src/>
7. plain text   longest run without a forbidden character
8. line break   a single CRLF                -> <br/>

Formatted spans hold plain text only, so they cannot nest or contain other
inline markup. A doubled CRLF is never consumed here; it separates terms
at the block level.

"""

from __future__ import annotations

from typing import AbstractSet

from down2html.ast.nodes import Attribute, Content, Item, Node
from down2html.constants import (
    CODE_SPAN_DELIMITER,
    CRLF,
    EMPHASIS_DELIMITERS,
    INLINE_FORBIDDEN_CHARS,
    STRONG_DELIMITERS,
    TERM_SEPARATOR,
)
from down2html.parsers.combinators import (
    Parser,
    char_in,
    end,
    parse_all,
    seq,
    string,
    strings,
    take_while,
)


def plain_text(forbidden: AbstractSet[str], name: str = "plain text") -> Parser[str]:
    """Match a non-empty run of characters outside ``forbidden``."""
    return take_while(lambda c: c not in forbidden, min_count=1, name=name)


def _delimited_span(delimiters: tuple[str, ...], tag: str, forbidden: AbstractSet[str]) -> Parser[Item]:
    # The closing delimiter must repeat the opening one exactly.
    body = plain_text(forbidden)
    return strings(*delimiters).bind(
        lambda opener: body.skip(string(opener)).map(lambda text: Node(tag, [Content(text)]))
    )


def _destination() -> Parser[str]:
    return take_while(lambda c: c not in ')\r"' and not c.isspace(), min_count=1, name="destination")


def _bracketed_label() -> Parser[str]:
    return string("[").then(take_while(lambda c: c not in "]\r", name="label")).skip(string("]"))


def _link() -> Parser[Item]:
    title = (
        take_while(lambda c: c == " ")
        .then(string('"'))
        .then(take_while(lambda c: c != '"', name="title"))
        .skip(string('"'))
    )
    return seq(_bracketed_label(), string("(").then(_destination()), title.optional().skip(string(")"))).map(
        lambda parts: Node("a", [Content(parts[0])], [Attribute("href", parts[1]), Attribute("title", parts[2])])
    )


def _image() -> Parser[Item]:
    return seq(string("!").then(_bracketed_label()), string("(").then(_destination()).skip(string(")"))).map(
        lambda parts: Node("img", None, [Attribute("alt", parts[0]), Attribute("src", parts[1])])
    )


def build_inline_grammar(forbidden: AbstractSet[str] = INLINE_FORBIDDEN_CHARS) -> Parser[list[Item]]:
    """Build the inline grammar.

    Parameters
    ----------
    forbidden : set of str, default = INLINE_FORBIDDEN_CHARS
        Characters that end a plain text run. Only the symbolic ones (not CR)
        can be escaped with a backslash.

    Returns
    -------
    Parser[list[Item]]
        Parser matching zero or more inline items. It never fails; it stops
        at the first position where no alternative matches.

    """
    escapable = {c for c in forbidden if c != "\r"}
    escape = string("\\").then(char_in(escapable, "escapable character")).map(Content).named("escape")
    strong = _delimited_span(STRONG_DELIMITERS, "strong", forbidden).named("strong")
    emphasis = _delimited_span(EMPHASIS_DELIMITERS, "em", forbidden).named("emphasis")
    code = _delimited_span((CODE_SPAN_DELIMITER,), "code", forbidden).named("code span")
    link = _link().named("link")
    image = _image().named("image")
    text = plain_text(forbidden).map(Content)
    line_break = string(CRLF).except_(string(TERM_SEPARATOR)).map(lambda _: Node("br")).named("line break")

    formatted = escape | strong | emphasis | code | link | image | text
    return (line_break | formatted).many()


FORMATTED_TEXT = build_inline_grammar()


def parse_inline(text: str) -> list[Item]:
    """Parse ``text`` entirely as inline items.

    Raises
    ------
    ParseFailure
        If some part of ``text`` matches no inline alternative, such as an
        unclosed emphasis delimiter or a lone ``[``

    """
    return parse_all(FORMATTED_TEXT.skip(end()), text)
