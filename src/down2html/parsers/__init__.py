#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Markdown grammar and parser entry points.

The block grammar in :mod:`down2html.parsers.markdown` dispatches each term to
the inline grammar (:mod:`down2html.parsers.inline`), the HTML passthrough
grammar (:mod:`down2html.parsers.html`) or, for blockquotes, back to itself.
All of them are built from the combinators in
:mod:`down2html.parsers.combinators`.

"""

from down2html.parsers.base import BaseParser
from down2html.parsers.html import HtmlPassthroughGrammar
from down2html.parsers.inline import FORMATTED_TEXT, build_inline_grammar, parse_inline
from down2html.parsers.markdown import BlockGrammar, MarkdownParser, parse_body, parse_document

__all__ = [
    "FORMATTED_TEXT",
    "BaseParser",
    "BlockGrammar",
    "HtmlPassthroughGrammar",
    "MarkdownParser",
    "build_inline_grammar",
    "parse_body",
    "parse_document",
    "parse_inline",
]
