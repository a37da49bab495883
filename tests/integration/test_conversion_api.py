#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_conversion_api.py
"""Integration tests for the high-level conversion functions."""

from io import BytesIO, StringIO
from pathlib import Path

import pytest

from down2html import (
    HtmlRendererOptions,
    MarkdownParserOptions,
    NestingDepthError,
    ParseFailure,
    convert_file,
    markdown_to_html,
    read_markdown,
    write_html,
)
from down2html.api import markdown_to_tree, normalize_newlines
from down2html.exceptions import FileError, FileNotFoundError, OutputWriteError

BODY_ONLY = HtmlRendererOptions(standalone=False)


@pytest.mark.integration
class TestMarkdownToHtml:
    """Tests for markdown_to_html."""

    def test_document_output(self) -> None:
        assert markdown_to_html("# T") == (
            "<html>\r\n\t<head/>\r\n\t<body>\r\n\t\t<h1>\r\n\t\t\tT\r\n\t\t</h1>\r\n\t</body>\r\n</html>"
        )

    def test_body_only_output(self) -> None:
        assert markdown_to_html("*hi*", renderer_options=BODY_ONLY) == (
            "<body>\r\n\t<p>\r\n\t\t<em>\r\n\t\t\thi\r\n\t\t</em>\r\n\t</p>\r\n</body>"
        )

    def test_code_block_is_not_escaped(self) -> None:
        html = markdown_to_html("```\r\ncode <here>\r\n```", renderer_options=BODY_ONLY)
        assert html == "<body>\r\n\t<code>\r\n\t\tcode <here>\r\n\t</code>\r\n</body>"

    def test_list_and_quote(self) -> None:
        html = markdown_to_html("- a\r\n  - b\r\n\r\n> q", renderer_options=BODY_ONLY)
        assert html == (
            "<body>\r\n"
            "\t<ul>\r\n"
            "\t\t<li>\r\n\t\t\ta\r\n\t\t</li>\r\n"
            "\t\t<ul>\r\n\t\t\t<ul>\r\n\t\t\t\t<li>\r\n\t\t\t\t\tb\r\n\t\t\t\t</li>\r\n\t\t\t</ul>\r\n\t\t</ul>\r\n"
            "\t</ul>\r\n"
            "\t<blockquote>\r\n\t\t<p>\r\n\t\t\tq\r\n\t\t</p>\r\n\t</blockquote>\r\n"
            "</body>"
        )

    def test_link_and_image(self) -> None:
        html = markdown_to_html('![i](s.png) [a](u "t")', renderer_options=BODY_ONLY)
        assert '<a href="u" title="t">' in html
        assert '<img alt="i" src="s.png"/>' in html

    def test_parser_options_are_used(self) -> None:
        with pytest.raises(NestingDepthError):
            markdown_to_html("> > x", parser_options=MarkdownParserOptions(max_nesting_depth=1))

    def test_parse_failure_propagates(self) -> None:
        with pytest.raises(ParseFailure):
            markdown_to_html("<div></span>")

    def test_markdown_to_tree(self) -> None:
        assert markdown_to_tree("x").name == "html"
        assert markdown_to_tree("x", standalone=False).name == "body"


@pytest.mark.integration
class TestFileGlue:
    """Tests for reading and writing files."""

    def test_read_keeps_crlf(self, tmp_path: Path) -> None:
        source = tmp_path / "in.md"
        source.write_bytes(b"# T\r\n\r\ntext")
        assert read_markdown(source) == "# T\r\n\r\ntext"

    def test_read_without_normalizing_keeps_lf(self, tmp_path: Path) -> None:
        source = tmp_path / "in.md"
        source.write_bytes(b"a\nb")
        assert read_markdown(source) == "a\nb"
        assert read_markdown(source, normalize=True) == "a\r\nb"

    def test_normalize_newlines(self) -> None:
        assert normalize_newlines("a\nb\rc\r\nd") == "a\r\nb\r\nc\r\nd"

    def test_read_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read_markdown(tmp_path / "missing.md")

    def test_read_invalid_utf8(self, tmp_path: Path) -> None:
        source = tmp_path / "bad.md"
        source.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(FileError, match="Could not read"):
            read_markdown(source)

    def test_write_html_to_streams(self) -> None:
        text_stream = StringIO()
        write_html("<p/>\r\n", text_stream)
        assert text_stream.getvalue() == "<p/>\r\n"

        binary_stream = BytesIO()
        write_html("<p/>\r\n", binary_stream)
        assert binary_stream.getvalue() == b"<p/>\r\n"

    def test_write_html_failure(self, tmp_path: Path) -> None:
        with pytest.raises(OutputWriteError):
            write_html("<p/>", tmp_path / "no" / "such" / "dir.html")

    def test_convert_file(self, tmp_path: Path, sample_markdown: str) -> None:
        source = tmp_path / "in.md"
        source.write_bytes(sample_markdown.encode("utf-8"))
        target = tmp_path / "out.html"

        html = convert_file(source, target, renderer_options=BODY_ONLY)

        assert target.read_bytes() == html.encode("utf-8")
        assert html.startswith("<body>\r\n\t<h1>\r\n\t\tSample Document\r\n\t</h1>")
        assert "\t<div>\r\n\t\t<span/>\r\n\t</div>" in html

    def test_convert_file_without_output(self, tmp_path: Path) -> None:
        source = tmp_path / "in.md"
        source.write_bytes(b"x")
        assert convert_file(source).startswith("<html>")

    def test_convert_file_normalizes_on_request(self, tmp_path: Path) -> None:
        source = tmp_path / "in.md"
        source.write_bytes(b"# T\n\nbody")
        html = convert_file(source, renderer_options=BODY_ONLY, normalize=True)
        assert html == "<body>\r\n\t<h1>\r\n\t\tT\r\n\t</h1>\r\n\t<p>\r\n\t\tbody\r\n\t</p>\r\n</body>"
