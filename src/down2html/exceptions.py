#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the down2html library.

This module defines specialized exception classes for the error conditions
that can occur while parsing markdown, rendering HTML, loading configuration
and reading or writing files.

Exception Hierarchy
-------------------
- Down2HtmlError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - ParsingError (markdown parsing failures)
    - ParseFailure (grammar could not match the input)
      - NestingDepthError (nesting exceeded the configured limit)

  - RenderingError (output generation failures)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - OutputWriteError (file write failures)

  - ConfigError (configuration file loading failures)

"""

from __future__ import annotations

from typing import Any, Iterable

from down2html.constants import CRLF


class Down2HtmlError(Exception):
    """Base exception class for all down2html-specific errors.

    Catching this will catch all library-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Down2HtmlError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when an incorrect options class is provided.

    Parameters
    ----------
    component_name : str
        Name of the parser or renderer that received invalid options
    expected_type : type
        The expected options class type
    received_type : type
        The actual options class type that was received
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ParsingError(Down2HtmlError):
    """Exception raised when markdown parsing fails.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class ParseFailure(ParsingError):
    """Exception raised when the grammar cannot match the input.

    A failing parse produces no document. The error reports where the
    furthest failing alternative stopped and which rules could have
    matched there.

    Parameters
    ----------
    source : str
        The text that was being parsed
    position : int
        Zero-based offset into ``source`` where parsing failed
    expected : iterable of str
        Names of the grammar rules that could have matched at ``position``
    message : str, optional
        Custom error message. If not provided, one is built from the
        position and expectations

    Attributes
    ----------
    position : int
        Zero-based offset of the failure
    line : int
        One-based line number of the failure (lines end with CRLF)
    column : int
        One-based column of the failure within its line
    expected : frozenset of str
        Grammar rules that could have matched

    """

    def __init__(
        self,
        source: str,
        position: int,
        expected: Iterable[str] = (),
        message: str | None = None,
        parsing_stage: str | None = "grammar",
    ):
        """Initialize the parse failure with its location."""
        self.source = source
        self.position = position
        self.expected = frozenset(expected)
        self.line, self.column = _line_and_column(source, position)
        if message is None:
            message = f"Parse failure at line {self.line}, column {self.column}"
            if self.expected:
                message += f": expected {', '.join(sorted(self.expected))}"
            excerpt = self.excerpt
            if excerpt:
                message += f" near {excerpt!r}"
        super().__init__(message, parsing_stage=parsing_stage)

    @property
    def excerpt(self) -> str:
        """Up to 20 characters of the source starting at the failure position."""
        return self.source[self.position : self.position + 20]


class NestingDepthError(ParseFailure):
    """Exception raised when input nesting exceeds the configured maximum.

    Blockquote re-entry, list wrapper chains and passthrough HTML elements
    all recurse proportionally to their nesting depth.

    Parameters
    ----------
    source : str
        The text that was being parsed
    position : int
        Offset where the limit was hit
    construct : str
        The nesting construct ("blockquote", "list", "html")
    max_depth : int
        The configured limit

    """

    def __init__(self, source: str, position: int, construct: str, max_depth: int):
        """Initialize the nesting error."""
        self.construct = construct
        self.max_depth = max_depth
        super().__init__(
            source,
            position,
            message=f"{construct} nesting exceeds maximum depth of {max_depth}",
            parsing_stage="nesting",
        )


class RenderingError(Down2HtmlError):
    """Exception raised when output rendering fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class FileError(Down2HtmlError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class OutputWriteError(FileError):
    """Exception raised when rendered output cannot be written."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class ConfigError(Down2HtmlError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    config_path : str, optional
        Path to the configuration file

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


def _line_and_column(source: str, position: int) -> tuple[int, int]:
    line = source.count(CRLF, 0, position) + 1
    line_start = source.rfind(CRLF, 0, position)
    line_start = 0 if line_start == -1 else line_start + len(CRLF)
    return line, position - line_start + 1
