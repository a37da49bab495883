#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for down2html.

Usage::

    down2html README.md -o README.html
    down2html - --body-only < notes.md

Options are resolved from, in increasing priority: built-in defaults, a
configuration file (``--config``, ``$DOWN2HTML_CONFIG`` or discovery, see
:mod:`down2html.config`) and command-line flags.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from down2html import __version__
from down2html.api import markdown_to_html, normalize_newlines, read_markdown, write_html
from down2html.config import discover_config_file, load_config_file, options_from_config
from down2html.exceptions import (
    ConfigError,
    Down2HtmlError,
    FileError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from down2html.logging_utils import configure_logging
from down2html.options import HtmlRendererOptions, MarkdownParserOptions

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

CONFIG_ENV_VAR = "DOWN2HTML_CONFIG"


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to a CLI exit code."""
    if isinstance(exception, (ValidationError, ConfigError)):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR
    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR
    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="down2html",
        description="Convert CRLF-delimited markdown to indented HTML.",
    )
    parser.add_argument("input", help="Markdown file to convert, or '-' to read standard input")
    parser.add_argument("-o", "--output", help="Write HTML to this file instead of standard output")
    parser.add_argument(
        "--body-only",
        action="store_true",
        default=None,
        help="Emit only the <body> element instead of a complete <html> document",
    )
    parser.add_argument("--indent", help="Indentation prefix per nesting level (default: a tab)")
    parser.add_argument("--max-nesting-depth", type=int, help="Maximum nesting of quotes, lists and HTML")
    parser.add_argument(
        "--normalize-newlines",
        action="store_true",
        help="Convert LF and CR line endings in the input to CRLF before parsing",
    )

    config_group = parser.add_mutually_exclusive_group()
    config_group.add_argument("--config", help=f"Configuration file (default: ${CONFIG_ENV_VAR} or discovered)")
    config_group.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Timestamped output including every grammar match (DEBUG)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _resolve_config_path(parsed_args: argparse.Namespace) -> Optional[Path]:
    if parsed_args.no_config:
        return None
    if parsed_args.config:
        return Path(parsed_args.config)
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return Path(env_config)
    return discover_config_file()


def build_options(parsed_args: argparse.Namespace) -> tuple[MarkdownParserOptions, HtmlRendererOptions]:
    """Combine configuration file values with command-line overrides.

    Raises
    ------
    ConfigError
        If the configuration file is invalid
    ValidationError
        If a command-line value is out of range

    """
    config_path = _resolve_config_path(parsed_args)
    config = load_config_file(config_path) if config_path else {}
    parser_options, renderer_options = options_from_config(config)

    try:
        if parsed_args.max_nesting_depth is not None:
            parser_options = parser_options.create_updated(max_nesting_depth=parsed_args.max_nesting_depth)
        if parsed_args.indent is not None:
            renderer_options = renderer_options.create_updated(indent=parsed_args.indent)
    except ValueError as e:
        raise ValidationError(str(e), original_error=e) from e
    if parsed_args.body_only:
        renderer_options = renderer_options.create_updated(standalone=False)
    return parser_options, renderer_options


def _read_input(parsed_args: argparse.Namespace) -> str:
    if parsed_args.input != "-":
        return read_markdown(parsed_args.input, parsed_args.normalize_newlines)
    # Read bytes so CRLF line endings reach the parser untranslated.
    text = sys.stdin.buffer.read().decode("utf-8")
    return normalize_newlines(text) if parsed_args.normalize_newlines else text


def _write_output(html: str, parsed_args: argparse.Namespace) -> None:
    if parsed_args.output:
        write_html(html, parsed_args.output)
        return
    sys.stdout.flush()
    write_html(html, getattr(sys.stdout, "buffer", sys.stdout))
    sys.stdout.flush()


def main(args: list[str] | None = None) -> int:
    """Run the down2html command line.

    Parameters
    ----------
    args : list of str, optional
        Arguments to parse instead of ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(
        parsed_args.log_level,
        log_file=parsed_args.log_file,
        trace_mode=parsed_args.trace,
    )

    try:
        parser_options, renderer_options = build_options(parsed_args)
        markdown = _read_input(parsed_args)
        html = markdown_to_html(markdown, parser_options, renderer_options)
        _write_output(html, parsed_args)
    except Down2HtmlError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except UnicodeDecodeError as e:
        print(f"Error: standard input is not valid UTF-8: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    return EXIT_SUCCESS
