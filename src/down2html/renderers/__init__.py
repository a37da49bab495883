#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Renderers turning an item tree into text."""

from down2html.renderers.base import BaseRenderer
from down2html.renderers.html import HtmlRenderer, render_attributes, render_html

__all__ = ["BaseRenderer", "HtmlRenderer", "render_attributes", "render_html"]
