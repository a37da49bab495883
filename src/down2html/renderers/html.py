#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/renderers/html.py
"""HTML rendering from the item tree.

This module provides the HtmlRenderer class which serializes ``Node`` and
``Content`` items to indented HTML text. The rules are:

- ``Content`` renders as its text, verbatim. ``<``, ``>`` and ``&`` are not
  escaped.
- A ``Node`` without a child list renders as ``<name attrs/>``.
- A ``Node`` with a child list renders as ``<name attrs>``, then for every
  child a newline followed by the child's own rendering with the indent
  prefixed to each of its lines, then a newline and ``</name>``. An empty
  child list gives ``<name>`` and ``</name>`` on consecutive lines.
- Attributes render as `` name="value"`` in order; an attribute with an empty
  name or value renders as nothing.

With the default options the newline is CRLF and the indent is one tab.

"""

from __future__ import annotations

import logging

from down2html.ast import Attribute, Content, Item, ItemVisitor, Node
from down2html.exceptions import RenderingError
from down2html.options.html import HtmlRendererOptions
from down2html.renderers.base import BaseRenderer

logger = logging.getLogger(__name__)


def render_attributes(attributes: list[Attribute]) -> str:
    """Render attributes as `` name="value"`` pairs, skipping empty ones."""
    return "".join(f' {attr.name}="{attr.value}"' for attr in attributes if not attr.is_empty)


class HtmlRenderer(ItemVisitor, BaseRenderer):
    """Render an item tree to HTML text.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
    Basic usage:

        >>> from down2html.ast import Content, Node
        >>> renderer = HtmlRenderer()
        >>> renderer.render_to_string(Node("p", [Content("hi"), Node("br")]))
        '<p>\\r\\n\\thi\\r\\n\\t<br/>\\r\\n</p>'

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options

    def render_to_string(self, item: Item) -> str:
        """Render an item tree to an HTML string.

        Parameters
        ----------
        item : Item
            Root node or content run

        Returns
        -------
        str
            HTML text, without a trailing newline

        Raises
        ------
        RenderingError
            If the tree contains something other than ``Node`` and ``Content``

        """
        if not isinstance(item, (Node, Content)):
            raise RenderingError(f"Cannot render object of type {type(item).__name__}", rendering_stage="serialize")
        html = item.accept(self)
        logger.debug("Rendered %s to %d characters", type(item).__name__, len(html))
        return html

    def visit_content(self, content: Content) -> str:
        """Render a text run verbatim."""
        return content.text

    def visit_node(self, node: Node) -> str:
        """Render a tag with its attributes and indented children."""
        attrs = render_attributes(node.attributes)
        if node.children is None:
            return f"<{node.name}{attrs}/>"

        newline = self.options.newline
        continuation = "\n" + self.options.indent
        parts = [f"<{node.name}{attrs}>"]
        for child in node.children:
            if not isinstance(child, (Node, Content)):
                raise RenderingError(
                    f"Cannot render child of type {type(child).__name__} inside <{node.name}>",
                    rendering_stage="serialize",
                )
            parts.append(newline + self.options.indent + child.accept(self).replace("\n", continuation))
        parts.append(f"{newline}</{node.name}>")
        return "".join(parts)


def render_html(item: Item, options: HtmlRendererOptions | None = None) -> str:
    """Render ``item`` with a fresh ``HtmlRenderer``."""
    return HtmlRenderer(options).render_to_string(item)
