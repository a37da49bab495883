#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/parsers/base.py
"""Base class for document parsers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from down2html.ast import Node
from down2html.exceptions import InvalidOptionsError
from down2html.options.base import BaseParserOptions


class BaseParser(ABC):
    """Abstract base class for parsers producing an item tree.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    """

    def __init__(self, options: BaseParserOptions | None = None):
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                component_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, text: str) -> Node:
        """Parse ``text`` into a complete document tree.

        Parameters
        ----------
        text : str
            Source text

        Returns
        -------
        Node
            Root node of the document

        Raises
        ------
        ParseFailure
            If the input cannot be parsed

        """
        pass
