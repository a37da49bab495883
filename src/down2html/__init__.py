#  Copyright (c) 2025 Tom Villani, Ph.D.
"""down2html - convert a constrained markdown dialect to indented HTML.

The parser is an ordered-choice backtracking grammar: each blank-line
separated term of the document becomes a header, list, blockquote, fenced
code block, literal HTML element or paragraph, in that order of preference.
The result is a tree of ``Node`` and ``Content`` items which ``HtmlRenderer``
serializes with one tab of indentation per level and CRLF line endings.

Examples
--------
    >>> from down2html import parse_body
    >>> parse_body("# Title").children
    [Node(name='h1', children=[Content(text='Title')], attributes=[])]

"""

from down2html.api import convert_file, markdown_to_html, read_markdown, write_html
from down2html.ast import Attribute, Content, Item, ItemVisitor, Node
from down2html.exceptions import (
    ConfigError,
    Down2HtmlError,
    NestingDepthError,
    ParseFailure,
    ParsingError,
    RenderingError,
    ValidationError,
)
from down2html.options import HtmlRendererOptions, MarkdownParserOptions
from down2html.parsers import MarkdownParser, parse_body, parse_document
from down2html.renderers import HtmlRenderer

__version__ = "0.1.0"

__all__ = [
    "Attribute",
    "ConfigError",
    "Content",
    "Down2HtmlError",
    "HtmlRenderer",
    "HtmlRendererOptions",
    "Item",
    "ItemVisitor",
    "MarkdownParser",
    "MarkdownParserOptions",
    "NestingDepthError",
    "Node",
    "ParseFailure",
    "ParsingError",
    "RenderingError",
    "ValidationError",
    "__version__",
    "convert_file",
    "markdown_to_html",
    "parse_body",
    "parse_document",
    "read_markdown",
    "write_html",
]
