#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for down2html parsing and rendering.

Examples
--------
    >>> from down2html.options import HtmlRendererOptions, MarkdownParserOptions
    >>> parser_options = MarkdownParserOptions(max_nesting_depth=8)
    >>> renderer_options = HtmlRendererOptions().create_updated(indent="  ")

"""

from down2html.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from down2html.options.html import HtmlRendererOptions
from down2html.options.markdown import MarkdownParserOptions

__all__ = [
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "HtmlRendererOptions",
    "MarkdownParserOptions",
]
