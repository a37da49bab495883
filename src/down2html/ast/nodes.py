#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/ast/nodes.py
"""Item classes for the HTML document tree.

This module defines the tree produced by the markdown parser and consumed by
the HTML renderer. The tree is a closed sum type: every entry is an ``Item``,
and an ``Item`` is either a ``Node`` (a tag with attributes and children) or
a ``Content`` (a run of raw text). No other variants exist.

Item Model
----------
Content
    A contiguous run of text. Adjacent runs inside a node are always merged
    into one when the node is constructed.
Node
    A tag name, an ordered list of attributes and an optional list of
    children. ``children=None`` marks a self-closing tag (``<br/>``), which
    is distinct from an explicit empty child list (``<p></p>``).
Attribute
    An ordered name/value pair. An attribute whose name or value is empty
    renders as nothing.

The tree is built bottom-up during parsing and never mutated afterwards.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union, final

_ITEM_VARIANTS = frozenset({"Node", "Content"})


class Item(ABC):
    """Base class for the two tree variants, ``Node`` and ``Content``.

    The hierarchy is sealed: subclassing ``Item`` outside this module
    raises ``TypeError``.

    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__ or cls.__name__ not in _ITEM_VARIANTS:
            raise TypeError(f"Item is sealed; cannot subclass it as {cls.__qualname__}")

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this item.

        Parameters
        ----------
        visitor : ItemVisitor
            A visitor object with ``visit_node`` and ``visit_content`` methods

        Returns
        -------
        Any
            Result from the visitor's processing

        """
        pass


@final
@dataclass(frozen=True)
class Content(Item):
    """A run of text.

    Parameters
    ----------
    text : str
        The literal text, never escaped or normalized

    """

    text: str

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this content."""
        return visitor.visit_content(self)


@dataclass(frozen=True)
class Attribute:
    """A single tag attribute.

    Parameters
    ----------
    name : str
        Attribute name
    value : str or None, default = None
        Attribute value; ``None`` means the attribute is absent

    """

    name: str
    value: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        """Whether the attribute renders as nothing."""
        return not self.name or not self.value


AttributeLike = Union[Attribute, tuple[str, Optional[str]]]


@final
@dataclass
class Node(Item):
    """A tag with ordered attributes and optional children.

    Adjacent ``Content`` children are merged on construction, so no two
    consecutive children are both ``Content``.

    Parameters
    ----------
    name : str
        Tag name, must be non-empty
    children : iterable of Item or None, default = None
        Child items; ``None`` marks a self-closing tag
    attributes : iterable of Attribute or (name, value) tuples, default = empty
        Attributes in emission order

    Examples
    --------
        >>> Node("p", [Content("a"), Content("b")])
        Node(name='p', children=[Content(text='ab')], attributes=[])
        >>> Node("img", attributes=[("alt", "logo"), ("src", "logo.png")]).children is None
        True

    """

    name: str
    children: Optional[list[Item]] = None
    attributes: list[Attribute] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the tag name and normalize children and attributes."""
        if not self.name:
            raise ValueError("Node name must be a non-empty string")
        if self.children is not None:
            self.children = merge_content(self.children)
        self.attributes = [_coerce_attribute(attr) for attr in self.attributes]

    @property
    def is_self_closing(self) -> bool:
        """Whether the node has no child list at all."""
        return self.children is None

    def get_attribute(self, name: str) -> Optional[str]:
        """Return the value of the first attribute called ``name``, if any."""
        for attr in self.attributes:
            if attr.name == name:
                return attr.value
        return None

    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node."""
        return visitor.visit_node(self)


def merge_content(items: Iterable[Item]) -> list[Item]:
    """Merge adjacent ``Content`` runs into single runs.

    Sibling nodes are left untouched; their children were already merged
    when they were built.

    Parameters
    ----------
    items : iterable of Item
        Items in document order

    Returns
    -------
    list of Item
        Items with no two consecutive ``Content`` entries

    """
    merged: list[Item] = []
    for item in items:
        if not isinstance(item, (Node, Content)):
            raise TypeError(f"Expected Node or Content, got {type(item).__name__}")
        previous = merged[-1] if merged else None
        if isinstance(item, Content) and isinstance(previous, Content):
            merged[-1] = Content(previous.text + item.text)
        else:
            merged.append(item)
    return merged


def _coerce_attribute(attr: AttributeLike) -> Attribute:
    if isinstance(attr, Attribute):
        return attr
    name, value = attr
    return Attribute(name, value)
