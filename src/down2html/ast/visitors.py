#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/ast/visitors.py
"""Visitor pattern implementation for item tree traversal.

The item tree has exactly two variants, so a visitor implements exactly two
methods. Every consumer of the tree (the HTML renderer, the structural
validator, the traversal helpers) dispatches through ``Item.accept`` rather
than ad-hoc type checks.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator

from down2html.ast.nodes import Content, Item, Node


class ItemVisitor(ABC):
    """Abstract base class for item tree visitors.

    Examples
    --------
    Visitor that collects tag names:

        >>> class TagCollector(ItemVisitor):
        ...     def __init__(self):
        ...         self.tags = []
        ...
        ...     def visit_node(self, node):
        ...         self.tags.append(node.name)
        ...         for child in node.children or []:
        ...             child.accept(self)
        ...
        ...     def visit_content(self, content):
        ...         pass

    """

    @abstractmethod
    def visit_node(self, node: Node) -> Any:
        """Visit a Node.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_content(self, content: Content) -> Any:
        """Visit a Content run.

        Parameters
        ----------
        content : Content
            The content to visit

        Returns
        -------
        Any
            Result of processing this content

        """
        pass


class ValidationVisitor(ItemVisitor):
    """Visitor that checks the structural invariants of an item tree.

    Checks that no node holds two consecutive ``Content`` children and that
    every node has a non-empty name.

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise ``ValueError`` on the first violation instead of
        collecting violations in ``errors``

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        if self.strict:
            raise ValueError(message)
        self.errors.append(message)

    def visit_node(self, node: Node) -> None:
        """Validate a node and its children."""
        if not node.name:
            self._add_error("Node has an empty name")
        if node.children is None:
            return
        previous: Item | None = None
        for child in node.children:
            if isinstance(child, Content) and isinstance(previous, Content):
                self._add_error(f"<{node.name}> has adjacent Content children")
            child.accept(self)
            previous = child

    def visit_content(self, content: Content) -> None:
        """Content runs are always valid."""


def iter_items(item: Item) -> Iterator[Item]:
    """Yield ``item`` and all of its descendants in document order."""
    stack: list[Item] = [item]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Node) and current.children:
            stack.extend(reversed(current.children))


def tree_depth(item: Item) -> int:
    """Return the number of nested levels in the tree rooted at ``item``.

    A ``Content`` or a childless node has depth 1.

    """
    deepest = 0
    stack: list[tuple[Item, int]] = [(item, 1)]
    while stack:
        current, depth = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(current, Node) and current.children:
            stack.extend((child, depth + 1) for child in current.children)
    return deepest


def extract_text(item: Item) -> str:
    """Concatenate the text of every ``Content`` under ``item``."""
    return "".join(child.text for child in iter_items(item) if isinstance(child, Content))
