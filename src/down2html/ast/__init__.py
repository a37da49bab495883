#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/down2html/ast/__init__.py
"""Item tree for parsed markdown documents.

The parser builds a tree of ``Node`` and ``Content`` items which the HTML
renderer serializes. See :mod:`down2html.ast.nodes` for the model and
:mod:`down2html.ast.visitors` for traversal.

"""

from down2html.ast.nodes import Attribute, Content, Item, Node, merge_content
from down2html.ast.visitors import ItemVisitor, ValidationVisitor, extract_text, iter_items, tree_depth

__all__ = [
    "Attribute",
    "Content",
    "Item",
    "ItemVisitor",
    "Node",
    "ValidationVisitor",
    "extract_text",
    "iter_items",
    "merge_content",
    "tree_depth",
]
