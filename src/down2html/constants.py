#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the down2html library.

Constants are organized by category:
1. Line Structure - line terminators and term separators
2. Grammar Symbols - delimiter and bullet characters
3. Limits and Defaults - nesting bounds and output layout
4. Configuration Discovery - configuration file names
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Line Structure
# =============================================================================

CRLF = "\r\n"

# Two consecutive line terminators separate block-level terms
TERM_SEPARATOR = CRLF + CRLF

# =============================================================================
# Grammar Symbols
# =============================================================================

# Characters a plain text run cannot contain; each may be escaped with a backslash
INLINE_FORBIDDEN_CHARS = frozenset("\r_*[`\\")

STRONG_DELIMITERS = ("**", "__")
EMPHASIS_DELIMITERS = ("*", "_")
CODE_SPAN_DELIMITER = "`"

BULLET_CHARS = "*+-"
CODE_FENCE = "```"
QUOTE_MARKER = ">"

MAX_HEADER_LEVEL = 6

ListKind = Literal["ul", "ol"]

# =============================================================================
# Limits and Defaults
# =============================================================================

DEFAULT_MAX_NESTING_DEPTH = 32
DEFAULT_INDENT = "\t"
DEFAULT_NEWLINE = CRLF

# =============================================================================
# Configuration Discovery
# =============================================================================

CONFIG_FILENAMES = [".down2html.toml", ".down2html.yaml", ".down2html.yml", ".down2html.json"]
PYPROJECT_SECTION = "down2html"

# =============================================================================
# Option Defaults
# =============================================================================

DEFAULT_STRIP_HEADER_SPACE = True
DEFAULT_HTML_STANDALONE = True
