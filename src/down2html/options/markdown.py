#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/options/markdown.py
"""Configuration options for markdown parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from down2html.constants import DEFAULT_MAX_NESTING_DEPTH, DEFAULT_STRIP_HEADER_SPACE
from down2html.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for markdown parsing.

    Parameters
    ----------
    max_nesting_depth : int, default 32
        Deepest allowed blockquote re-entry, list wrapper chain (leading
        spaces before a bullet) and passthrough HTML element nesting.
        Deeper input raises ``NestingDepthError`` instead of exhausting the
        call stack.
    strip_header_space : bool, default True
        Drop the spaces between the ``#`` marks of an ATX header and its text.

    """

    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={
            "help": "Maximum nesting depth for blockquotes, lists and passthrough HTML",
            "type": int,
            "importance": "security",
        },
    )
    strip_header_space: bool = field(
        default=DEFAULT_STRIP_HEADER_SPACE,
        metadata={"help": "Strip spaces between '#' marks and header text", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If ``max_nesting_depth`` is not positive.

        """
        if self.max_nesting_depth <= 0:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
