#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/api.py
r"""High-level conversion functions.

These wrap the parser and renderer with the file handling needed by the
command line and by callers that just want HTML text.

Examples
--------
    >>> from down2html.api import markdown_to_html
    >>> from down2html.options import HtmlRendererOptions
    >>> markdown_to_html("*hi*", renderer_options=HtmlRendererOptions(standalone=False))
    '<body>\r\n\t<p>\r\n\t\t<em>\r\n\t\t\thi\r\n\t\t</em>\r\n\t</p>\r\n</body>'

"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO, Optional, Union

from down2html.ast import Node
from down2html.constants import CRLF
from down2html.exceptions import FileError, FileNotFoundError
from down2html.options import HtmlRendererOptions, MarkdownParserOptions
from down2html.parsers.markdown import MarkdownParser
from down2html.renderers.html import HtmlRenderer

logger = logging.getLogger(__name__)

_ANY_NEWLINE = re.compile(r"\r\n|\r|\n")


def normalize_newlines(text: str) -> str:
    """Convert LF and lone CR line endings to CRLF."""
    return _ANY_NEWLINE.sub(CRLF, text)


def read_markdown(path: Union[str, Path], normalize: bool = False) -> str:
    """Read a markdown file as UTF-8 without newline translation.

    Parameters
    ----------
    path : str or Path
        File to read
    normalize : bool, default False
        Convert LF and CR line endings to CRLF after reading

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist
    FileError
        If the file cannot be read or decoded

    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(str(path))
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Could not read {path}: {e}", file_path=str(path), original_error=e) from e
    logger.info("Read %d characters from %s", len(text), path)
    return normalize_newlines(text) if normalize else text


def write_html(html: str, output: Union[str, Path, IO[str], IO[bytes]]) -> None:
    """Write rendered HTML to a path or stream without newline translation.

    Raises
    ------
    OutputWriteError
        If the output cannot be written

    """
    HtmlRenderer.write_text_output(html, output)
    if isinstance(output, (str, Path)):
        logger.info("Wrote %d characters to %s", len(html), output)


def markdown_to_tree(text: str, parser_options: Optional[MarkdownParserOptions] = None, standalone: bool = True) -> Node:
    """Parse markdown through the document or body entry point."""
    parser = MarkdownParser(parser_options)
    return parser.parse(text) if standalone else parser.parse_body(text)


def markdown_to_html(
    text: str,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
) -> str:
    """Convert markdown text to HTML text.

    Parameters
    ----------
    text : str
        Markdown source, with CRLF line endings
    parser_options : MarkdownParserOptions, optional
        Parser configuration
    renderer_options : HtmlRendererOptions, optional
        Renderer configuration; ``standalone`` selects the document or the
        body entry point

    Returns
    -------
    str
        Rendered HTML

    Raises
    ------
    ParseFailure
        If the markdown cannot be parsed
    RenderingError
        If the tree cannot be rendered

    """
    renderer = HtmlRenderer(renderer_options)
    tree = markdown_to_tree(text, parser_options, standalone=renderer.options.standalone)
    return renderer.render_to_string(tree)


def convert_file(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path, IO[str], IO[bytes]]] = None,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    normalize: bool = False,
) -> str:
    """Convert a markdown file to HTML.

    Parameters
    ----------
    input_path : str or Path
        Markdown file to read
    output_path : str, Path or stream, optional
        Where to write the HTML. Nothing is written when omitted.
    parser_options, renderer_options : optional
        Passed to ``markdown_to_html``
    normalize : bool, default False
        Convert LF and CR line endings in the input to CRLF

    Returns
    -------
    str
        The rendered HTML

    """
    html = markdown_to_html(read_markdown(input_path, normalize), parser_options, renderer_options)
    if output_path is not None:
        write_html(html, output_path)
    return html
