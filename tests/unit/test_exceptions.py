#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_exceptions.py
"""Unit tests for the exception hierarchy and option validation."""

import pytest

from down2html.exceptions import (
    ConfigError,
    Down2HtmlError,
    FileError,
    FileNotFoundError,
    InvalidOptionsError,
    NestingDepthError,
    OutputWriteError,
    ParseFailure,
    ParsingError,
    RenderingError,
    ValidationError,
)
from down2html.options import HtmlRendererOptions, MarkdownParserOptions


@pytest.mark.unit
class TestHierarchy:
    """All library errors share one root."""

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("bad"),
            InvalidOptionsError("markdown", MarkdownParserOptions, HtmlRendererOptions),
            ParseFailure("abc", 1, ["x"]),
            NestingDepthError("abc", 0, "list", 4),
            RenderingError("bad"),
            FileNotFoundError("a.md"),
            OutputWriteError("a.html"),
            ConfigError("bad"),
        ],
    )
    def test_root(self, error: Down2HtmlError) -> None:
        assert isinstance(error, Down2HtmlError)
        assert str(error) == error.message

    def test_parse_failure_is_parsing_error(self) -> None:
        assert issubclass(ParseFailure, ParsingError)
        assert issubclass(NestingDepthError, ParseFailure)

    def test_file_errors(self) -> None:
        assert issubclass(FileNotFoundError, FileError)
        assert issubclass(OutputWriteError, FileError)
        assert FileNotFoundError("a.md").message == "File not found: a.md"
        assert OutputWriteError("a.html").file_path == "a.html"

    def test_original_error_is_kept(self) -> None:
        cause = OSError("disk full")
        error = OutputWriteError("a.html", original_error=cause)
        assert error.original_error is cause


@pytest.mark.unit
class TestParseFailure:
    """Tests for ParseFailure location reporting."""

    def test_message_names_location_and_expectations(self) -> None:
        error = ParseFailure("ab\r\ncd", 5, ["'x'", "'a'"])
        assert error.line == 2
        assert error.column == 2
        assert error.message == "Parse failure at line 2, column 2: expected 'a', 'x' near 'd'"

    def test_message_at_end_of_input(self) -> None:
        error = ParseFailure("ab", 2)
        assert error.message == "Parse failure at line 1, column 3"
        assert error.excerpt == ""

    def test_custom_message(self) -> None:
        assert ParseFailure("ab", 0, message="nope").message == "nope"

    def test_nesting_depth_error(self) -> None:
        error = NestingDepthError("> > x", 2, "blockquote", 1)
        assert error.message == "blockquote nesting exceeds maximum depth of 1"
        assert error.parsing_stage == "nesting"
        assert error.expected == frozenset()

    def test_invalid_options_message(self) -> None:
        error = InvalidOptionsError("html", HtmlRendererOptions, MarkdownParserOptions)
        assert "html expected options of type 'HtmlRendererOptions'" in error.message
        assert error.parameter_name == "options"


@pytest.mark.unit
class TestOptions:
    """Tests for options validation and cloning."""

    def test_parser_defaults(self) -> None:
        options = MarkdownParserOptions()
        assert options.max_nesting_depth == 32
        assert options.strip_header_space is True

    def test_nesting_depth_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            MarkdownParserOptions(max_nesting_depth=0)

    def test_options_are_frozen(self) -> None:
        options = MarkdownParserOptions()
        with pytest.raises(AttributeError):
            options.max_nesting_depth = 3  # type: ignore[misc]

    def test_create_updated_validates(self) -> None:
        with pytest.raises(ValueError):
            MarkdownParserOptions().create_updated(max_nesting_depth=-1)

    def test_field_names(self) -> None:
        assert HtmlRendererOptions.field_names() == frozenset({"indent", "newline", "standalone"})
