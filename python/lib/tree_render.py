#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
tree_render.py
--------------

Text rendering of tree traversals, kept apart from the traversal code itself.

>>> from red_black_tree import RedBlackTree
>>> rbt = RedBlackTree(items=[2, 1, 3])
>>> render(rbt)
'[ 1 2 3 ]'
>>> render(rbt, "preorder")
'[ 2 1 3 ]'
>>> render(RedBlackTree())
'(Nil)'
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, TextIO

from binary_search_tree import BinarySearchTree
from container_errors import InvalidArgumentError

EMPTY_MARKER = "(Nil)"

ORDERS = ("inorder", "preorder", "postorder", "level")


def render(
    tree: BinarySearchTree[Any],
    order: str = "inorder",
    formatter: Callable[[Any], str] = str,
) -> str:
    """Return the elements of *tree* in *order* as ``"[ a b c ]"``."""
    if order not in ORDERS:
        raise InvalidArgumentError(
            f"unknown traversal order {order!r}", context={"orders": ORDERS}
        )
    if tree.is_empty():
        return EMPTY_MARKER

    parts: List[str] = ["["]
    getattr(tree, f"traverse_{order}")(lambda item: parts.append(formatter(item)))
    parts.append("]")
    return " ".join(parts)


def print_tree(
    tree: BinarySearchTree[Any],
    order: str = "inorder",
    formatter: Callable[[Any], str] = str,
    file: Optional[TextIO] = None,
) -> None:
    """Print ``render(tree, order, formatter)``."""
    print(render(tree, order, formatter), file=file)
