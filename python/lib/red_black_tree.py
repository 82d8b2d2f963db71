#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
red_black_tree.py
-----------------

A self‑balancing ordered multiset based on the **Red‑Black** algorithm.

``RedBlackTree`` keeps the whole query / traversal API of
``BinarySearchTree`` and adds the recolouring and rotation fix‑ups that keep
the tree height below ``2 * log2(n + 1)``.  Insert, delete, lookup, minimum,
maximum, predecessor, successor and lowest‑common‑ancestor queries therefore
run in O(log n) worst case.

Invariants maintained by every public operation:

* the sentinel and the root are BLACK
* a RED node never has a RED child
* every path from a node down to the sentinel crosses the same number of
  BLACK nodes
* search order, parent links and size accounting (inherited)

The implementation uses a **single shared sentinel node** (``self._nil``) to
represent all leafs, and the sentinel doubles as the parent of the root.

Typical usage
~~~~~~~~~~~~~
>>> from red_black_tree import RedBlackTree
>>> rbt = RedBlackTree()
>>> for k in (5, 3, 8, 1, 4, 7, 9):
...     rbt.insert(k)
>>> rbt.root(), rbt.minimum(), rbt.maximum()
(5, 1, 9)
>>> rbt.predecessor(5), rbt.successor(5)
(4, 7)
>>> rbt.lowest_common_ancestor(1, 4)
3
>>> rbt.delete(5)
>>> 5 in rbt
False
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

from binary_search_tree import BinarySearchTree, _Node

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ----------------------------------------------------------------------
#  Node colour constants – using simple booleans is fastest
# ----------------------------------------------------------------------
RED = True
BLACK = False


class _RBNode(_Node[T]):
    """Tree node carrying a colour bit."""

    __slots__ = ("color",)

    def __init__(
        self,
        item: Optional[T] = None,
        left: Optional["_RBNode[T]"] = None,
        right: Optional["_RBNode[T]"] = None,
        parent: Optional["_RBNode[T]"] = None,
        color: bool = BLACK,
    ) -> None:
        super().__init__(item, left, right, parent)
        self.color = color

    def __repr__(self) -> str:
        col = "R" if self.color == RED else "B"
        return f"<{col} {self.item!r} x{self.count}>"


class RedBlackTree(BinarySearchTree[T]):
    """
    Ordered multiset implemented with a red‑black binary search tree.

    Takes the same ``compare`` / ``destroy`` / ``items`` arguments as
    ``BinarySearchTree``.
    """

    __slots__ = ()

    def _make_sentinel(self) -> _RBNode[T]:
        nil: _RBNode[T] = _RBNode(color=BLACK)
        nil.left = nil.right = nil.parent = nil
        return nil

    def _new_node(self, item: T, parent: _Node[T]) -> _RBNode[T]:
        return _RBNode(item, self._nil, self._nil, parent, RED)

    # ------------------------------------------------------------------
    #   Insert fix‑up (preserves red‑black properties)
    # ------------------------------------------------------------------
    def _insert_fixup(self, node: Any) -> None:
        """Restore red‑black properties after linking the RED `node`."""
        while node.parent.color == RED:
            parent = node.parent
            grandparent = parent.parent
            parent_is_left = parent is grandparent.left
            uncle = grandparent.right if parent_is_left else grandparent.left

            if uncle.color == RED:
                # Case A – recolour, then continue from the grandparent
                parent.color = BLACK
                uncle.color = BLACK
                grandparent.color = RED
                node = grandparent
                continue

            if parent_is_left:
                if node is parent.right:
                    # Case B – inner child, rotate it to the outside
                    node = parent
                    self._rotate_left(node)
                # Case C – outer child, rotate the grandparent away
                node.parent.color = BLACK
                grandparent.color = RED
                self._rotate_right(grandparent)
            else:  # mirror image
                if node is parent.left:
                    node = parent
                    self._rotate_right(node)
                node.parent.color = BLACK
                grandparent.color = RED
                self._rotate_left(grandparent)
        self._root.color = BLACK

    # ------------------------------------------------------------------
    #   Left / right rotations – helper primitives
    # ------------------------------------------------------------------
    def _rotate_left(self, node: Any) -> None:
        """Left‑rotate: node's right child takes node's place."""
        pivot = node.right
        if pivot is self._nil:
            raise RuntimeError("rotate_left called on a node with nil right child")
        node.right = pivot.left
        if pivot.left is not self._nil:
            pivot.left.parent = node
        self._transplant(node, pivot)
        pivot.left = node
        node.parent = pivot

    def _rotate_right(self, node: Any) -> None:
        """Right‑rotate: node's left child takes node's place."""
        pivot = node.left
        if pivot is self._nil:
            raise RuntimeError("rotate_right called on a node with nil left child")
        node.left = pivot.right
        if pivot.right is not self._nil:
            pivot.right.parent = node
        self._transplant(node, pivot)
        pivot.right = node
        node.parent = pivot

    # ------------------------------------------------------------------
    #   Deletion
    # ------------------------------------------------------------------
    def _remove_node(self, doomed: Any) -> None:
        """Unlink `doomed` and fix up any colour violations."""
        removed_color = doomed.color
        if doomed.left is self._nil:
            child = doomed.right
            self._transplant(doomed, child)
        elif doomed.right is self._nil:
            child = doomed.left
            self._transplant(doomed, child)
        else:
            # Two children: the in‑order successor is relinked into place
            # and inherits doomed's colour.
            heir = self._minimum_node(doomed.right)
            removed_color = heir.color
            child = heir.right
            if heir.parent is doomed:
                # child may be the sentinel; its parent is fix-up scratch
                child.parent = heir
            else:
                self._transplant(heir, heir.right)
                heir.right = doomed.right
                heir.right.parent = heir
            self._transplant(doomed, heir)
            heir.left = doomed.left
            heir.left.parent = heir
            heir.color = doomed.color

        if removed_color == BLACK:
            self._fix_delete(child)

    def _fix_delete(self, node: Any) -> None:
        """
        Restore red‑black properties after removing a black node.
        `node` carries the missing black and may be the sentinel.
        """
        while node is not self._root and node.color == BLACK:
            parent = node.parent
            if node is parent.left:
                sibling = parent.right
                if sibling.color == RED:
                    sibling.color = BLACK
                    parent.color = RED
                    self._rotate_left(parent)
                    sibling = parent.right
                if sibling.left.color == BLACK and sibling.right.color == BLACK:
                    # push the missing black up
                    sibling.color = RED
                    node = parent
                    continue
                if sibling.right.color == BLACK:
                    # near nephew red, far nephew black
                    sibling.left.color = BLACK
                    sibling.color = RED
                    self._rotate_right(sibling)
                    sibling = parent.right
                # far nephew red – terminal case
                sibling.color = parent.color
                parent.color = BLACK
                sibling.right.color = BLACK
                self._rotate_left(parent)
            else:
                sibling = parent.left
                if sibling.color == RED:
                    sibling.color = BLACK
                    parent.color = RED
                    self._rotate_right(parent)
                    sibling = parent.left
                if sibling.right.color == BLACK and sibling.left.color == BLACK:
                    sibling.color = RED
                    node = parent
                    continue
                if sibling.left.color == BLACK:
                    sibling.right.color = BLACK
                    sibling.color = RED
                    self._rotate_left(sibling)
                    sibling = parent.left
                sibling.color = parent.color
                parent.color = BLACK
                sibling.left.color = BLACK
                self._rotate_right(parent)
            node = self._root
        node.color = BLACK

    # ------------------------------------------------------------------
    #   Validation
    # ------------------------------------------------------------------
    def black_height(self) -> int:
        """Number of BLACK nodes on any path from the root down to the sentinel."""
        self._require_handle()
        height = 0
        node = self._root
        while node is not self._nil:
            if node.color == BLACK:
                height += 1
            node = node.left
        return height

    def validate(self) -> None:
        """
        Verify that the tree satisfies all red‑black invariants.
        Raises ``AssertionError`` with a descriptive message if something is broken.
        """
        super().validate()

        assert self._nil.color == BLACK, "Sentinel is not black"
        assert self._root.color == BLACK, "Root is not black"

        # Post-order pass computing the black height of every subtree.
        heights = {id(self._nil): 0}
        for node in self._postorder_nodes():
            if node.color == RED:
                assert node.left.color == BLACK, "Red node has red left child"
                assert node.right.color == BLACK, "Red node has red right child"
            left_black = heights[id(node.left)]
            right_black = heights[id(node.right)]
            assert left_black == right_black, "Black-height mismatch"
            heights[id(node)] = left_black + (1 if node.color == BLACK else 0)

        logger.debug("validated %d keys, black height %d", self._size, heights[id(self._root)])
