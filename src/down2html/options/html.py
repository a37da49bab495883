#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/options/html.py
"""Configuration options for HTML rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from down2html.constants import DEFAULT_HTML_STANDALONE, DEFAULT_INDENT, DEFAULT_NEWLINE
from down2html.options.base import BaseRendererOptions


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering an item tree to HTML.

    Parameters
    ----------
    indent : str, default "\\t"
        Prefix added to every line of a child's rendering, once per level.
    newline : str, default "\\r\\n"
        Line terminator between a tag and each child, and before a closing tag.
    standalone : bool, default True
        Convert documents through the document entry point
        (``<html><head/><body>...``). If False, only the ``<body>`` node
        is produced.

    Notes
    -----
    Text and attribute values are emitted verbatim; ``<``, ``>`` and ``&``
    are never escaped.

    Examples
    --------
    Fragment output with two-space indentation:
        >>> options = HtmlRendererOptions(indent="  ", standalone=False)

    """

    indent: str = field(
        default=DEFAULT_INDENT,
        metadata={"help": "Indentation prefix for each nesting level", "importance": "core"},
    )
    newline: str = field(
        default=DEFAULT_NEWLINE,
        metadata={"help": "Line terminator used between tags", "importance": "advanced"},
    )
    standalone: bool = field(
        default=DEFAULT_HTML_STANDALONE,
        metadata={
            "help": "Generate complete HTML document (vs body only)",
            "cli_name": "body-only",
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Validate layout strings.

        Raises
        ------
        ValueError
            If ``newline`` is empty or does not end with a line feed.

        """
        if not self.newline.endswith("\n"):
            raise ValueError(f"newline must end with a line feed, got {self.newline!r}")
