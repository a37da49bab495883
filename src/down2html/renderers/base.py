#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/renderers/base.py
"""Base classes for item tree renderers.

This module defines the abstract base class that all renderers inherit from.
A renderer turns a tree of ``Node`` and ``Content`` items into text and can
write that text to a path or an open stream.

"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from down2html.ast import Item
from down2html.exceptions import InvalidOptionsError, OutputWriteError
from down2html.options.base import BaseRendererOptions

OutputTarget = Union[str, Path, IO[bytes], IO[str]]


class BaseRenderer(ABC):
    """Abstract base class for all item tree renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> from down2html.renderers.base import BaseRenderer
        >>>
        >>> class TagNameRenderer(BaseRenderer):
        ...     def render_to_string(self, item):
        ...         return item.name

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, item: Item) -> str:
        """Render an item tree to a string.

        Parameters
        ----------
        item : Item
            Root of the tree to render

        Returns
        -------
        str
            Rendered text

        Raises
        ------
        RenderingError
            If rendering fails

        """
        pass

    def render(self, item: Item, output: OutputTarget) -> None:
        """Render an item tree and write the result to ``output``.

        Parameters
        ----------
        item : Item
            Root of the tree to render
        output : str, Path, IO[bytes], or IO[str]
            File path or open stream

        Raises
        ------
        RenderingError
            If rendering fails
        OutputWriteError
            If the output cannot be written

        """
        self.write_text_output(self.render_to_string(item), output)

    @staticmethod
    def write_text_output(text: str, output: OutputTarget) -> None:
        """Write rendered text to a path or stream without newline translation.

        Paths and binary streams receive UTF-8 bytes; text streams receive
        the string unchanged.

        Raises
        ------
        OutputWriteError
            If the destination cannot be written
        TypeError
            If ``output`` is neither a path nor a writable stream

        Examples
        --------
            >>> from io import BytesIO
            >>> buffer = BytesIO()
            >>> BaseRenderer.write_text_output("<p/>\\r\\n", buffer)
            >>> buffer.getvalue()
            b'<p/>\\r\\n'

        """
        if isinstance(output, (str, Path)):
            try:
                with open(output, "w", encoding="utf-8", newline="") as handle:
                    handle.write(text)
            except OSError as e:
                raise OutputWriteError(str(output), original_error=e) from e
            return

        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")

        if isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        name = str(getattr(output, "name", "<stream>"))
        try:
            if is_binary_mode:
                output.write(text.encode("utf-8"))  # type: ignore[arg-type]
            else:
                output.write(text)  # type: ignore[arg-type]
        except OSError as e:
            raise OutputWriteError(name, original_error=e) from e

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
