#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
binary_search_tree.py
---------------------

An (unbalanced) ordered multiset built on a binary search tree.

Elements are ordered by a user supplied comparator.  Inserting an element
that compares equal to a stored one does not create a new node; it bumps the
stored node's multiplicity counter instead, so ``len(tree)`` is the number of
*distinct* keys.

Features
~~~~~~~~
* ``tree.insert(item)`` / ``tree.delete(key)``
* ``tree.find(key)`` (returns the *stored* element), ``key in tree``,
  ``tree.count(key)``
* ``tree.root()``, ``tree.minimum()``, ``tree.maximum()`` (optionally from a
  sub-root), ``tree.predecessor(key)``, ``tree.successor(key)``,
  ``tree.lowest_common_ancestor(a, b)``
* ``tree.level(key)``, ``tree.height()``
* ``traverse_inorder`` / ``traverse_preorder`` / ``traverse_postorder`` /
  ``traverse_level`` taking a visitor callback
* ``tree.free()`` – tear down, calling the destructor on every element
* ``tree.validate()`` – sanity-check the ordering and linkage invariants

Like the red-black tree in ``red_black_tree.py`` (which extends this class)
all empty child slots point at a single per-tree sentinel node, so the
structural code never tests for ``None``.

Typical usage
~~~~~~~~~~~~~
>>> from binary_search_tree import BinarySearchTree
>>> bst = BinarySearchTree()
>>> for k in (5, 3, 8):
...     bst.insert(k)
>>> bst.minimum(), bst.maximum()
(3, 8)
>>> bst.successor(5)
8
"""

from __future__ import annotations

import logging
import sys
from collections import deque
from typing import (
    Any,
    Callable,
    Deque,
    Generator,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from container_errors import (
    AllocFailedError,
    EmptyStructureError,
    ErrorKind,
    InvalidInputError,
    NotFoundError,
    NullActionError,
    NullInputError,
    PopFromEmptyError,
)
from func_types import (
    Comparator,
    Destructor,
    Visitor,
    destroy_all,
    natural_compare,
    require_callable,
    sign,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Marker for "start from the tree root" in minimum()/maximum().
_ROOT: Any = object()


class _Node(Generic[T]):
    """Internal node object – not meant to be used directly by callers."""

    __slots__ = ("item", "left", "right", "parent", "count")

    def __init__(
        self,
        item: Optional[T] = None,
        left: Optional["_Node[T]"] = None,
        right: Optional["_Node[T]"] = None,
        parent: Optional["_Node[T]"] = None,
    ) -> None:
        self.item = item
        self.left = left
        self.right = right
        self.parent = parent
        self.count = 1

    def __repr__(self) -> str:
        return f"<{self.item!r} x{self.count}>"


class BinarySearchTree(Generic[T]):
    """
    Ordered multiset on top of a plain binary search tree.

    Parameters
    ----------
    compare : callable(a, b) -> int, optional
        Returns a negative, zero or positive number.  Only the sign is used.
        Defaults to the elements' natural ordering.
    destroy : callable(item), optional
        Called exactly once on each element that leaves the tree, either by
        ``delete`` or by ``free``.
    items : iterable, optional
        Elements inserted one by one after construction.
    """

    __slots__ = ("_root", "_nil", "_compare", "_destroy", "_size", "_released")

    def __init__(
        self,
        compare: Optional[Comparator] = None,
        destroy: Optional[Destructor] = None,
        items: Optional[Iterable[T]] = None,
    ) -> None:
        require_callable(compare, "compare")
        require_callable(destroy, "destroy")

        self._compare: Comparator = natural_compare if compare is None else compare
        self._destroy: Optional[Destructor] = destroy

        # The sentinel leaf node – shared by every empty child slot.
        self._nil: _Node[T] = self._make_sentinel()
        self._root: _Node[T] = self._nil
        self._size: int = 0
        self._released: bool = False

        if items is not None:
            for item in items:
                self.insert(item)

    # ------------------------------------------------------------------
    #   Node factories (overridden by the red-black tree)
    # ------------------------------------------------------------------
    def _make_sentinel(self) -> _Node[T]:
        nil: _Node[T] = _Node()
        nil.left = nil.right = nil.parent = nil
        return nil

    def _new_node(self, item: T, parent: _Node[T]) -> _Node[T]:
        return _Node(item, self._nil, self._nil, parent)

    # ------------------------------------------------------------------
    #   Internal helpers
    # ------------------------------------------------------------------
    def _cmp(self, a: Any, b: Any) -> int:
        return sign(self._compare(a, b))

    def _require_handle(self) -> None:
        if self._released:
            raise NullInputError(f"{type(self).__name__} has already been freed")

    def _search_node(self, key: Any) -> _Node[T]:
        """Return the node that holds *key* or the sentinel if not found."""
        cur = self._root
        while cur is not self._nil:
            order = self._cmp(key, cur.item)
            if order == 0:
                return cur
            cur = cur.left if order < 0 else cur.right
        return self._nil

    def _require_node(self, key: Any) -> _Node[T]:
        """Like ``_search_node`` but a missing key is an error."""
        if self._root is self._nil:
            raise EmptyStructureError(
                f"{type(self).__name__} is empty", context={"key": key}
            )
        node = self._search_node(key)
        if node is self._nil:
            raise InvalidInputError(f"key {key!r} is not in the tree", context={"key": key})
        return node

    def _minimum_node(self, node: _Node[T]) -> _Node[T]:
        while node.left is not self._nil:
            node = node.left
        return node

    def _maximum_node(self, node: _Node[T]) -> _Node[T]:
        while node.right is not self._nil:
            node = node.right
        return node

    def _subroot_node(self, subroot: Any) -> _Node[T]:
        self._require_handle()
        if subroot is _ROOT:
            if self._root is self._nil:
                raise EmptyStructureError(f"{type(self).__name__} is empty")
            return self._root
        return self._require_node(subroot)

    # ------------------------------------------------------------------
    #   Size / emptiness
    # ------------------------------------------------------------------
    def is_empty(self) -> bool:
        """True for an empty tree and for a tree that has been freed."""
        return self._released or self._root is self._nil

    def size(self) -> int:
        """Number of distinct keys; ``sys.maxsize`` once the tree is freed."""
        if self._released:
            return sys.maxsize
        return self._size

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.is_empty()

    # ------------------------------------------------------------------
    #   Lookup
    # ------------------------------------------------------------------
    def __contains__(self, key: object) -> bool:
        self._require_handle()
        return self._search_node(key) is not self._nil

    def find(self, key: Any) -> T:
        """
        Return the stored element comparing equal to *key*.

        The stored element may differ from *key* in fields the comparator
        ignores.  Raises ``NotFoundError`` when no such element exists.
        """
        self._require_handle()
        node = self._search_node(key)
        if node is self._nil:
            raise NotFoundError(f"key {key!r} not found", context={"key": key})
        return node.item  # type: ignore[return-value]

    def count(self, key: Any) -> int:
        """How many times *key* has been inserted (0 when absent)."""
        self._require_handle()
        node = self._search_node(key)
        return 0 if node is self._nil else node.count

    def root(self) -> T:
        """Return the element stored at the root."""
        self._require_handle()
        if self._root is self._nil:
            raise EmptyStructureError(f"{type(self).__name__} is empty")
        return self._root.item  # type: ignore[return-value]

    # ------------------------------------------------------------------
    #   Minimum / maximum
    # ------------------------------------------------------------------
    def minimum(self, subroot: Any = _ROOT) -> T:
        """Smallest element of the subtree rooted at *subroot* (default: whole tree)."""
        return self._minimum_node(self._subroot_node(subroot)).item  # type: ignore[return-value]

    def maximum(self, subroot: Any = _ROOT) -> T:
        """Largest element of the subtree rooted at *subroot* (default: whole tree)."""
        return self._maximum_node(self._subroot_node(subroot)).item  # type: ignore[return-value]

    # ------------------------------------------------------------------
    #   Predecessor / successor / lowest common ancestor
    # ------------------------------------------------------------------
    def predecessor(self, key: Any) -> T:
        """Return the greatest element smaller than *key*."""
        self._require_handle()
        node = self._require_node(key)

        if node.left is not self._nil:
            return self._maximum_node(node.left).item  # type: ignore[return-value]

        # Walk up until we leave a right subtree.
        parent = node.parent
        while parent is not self._nil and node is parent.left:
            node = parent
            parent = parent.parent
        if parent is self._nil:
            raise NotFoundError(f"no predecessor for {key!r}", context={"key": key})
        return parent.item  # type: ignore[return-value]

    def successor(self, key: Any) -> T:
        """Return the smallest element greater than *key*."""
        self._require_handle()
        node = self._require_node(key)

        if node.right is not self._nil:
            return self._minimum_node(node.right).item  # type: ignore[return-value]

        parent = node.parent
        while parent is not self._nil and node is parent.right:
            node = parent
            parent = parent.parent
        if parent is self._nil:
            raise NotFoundError(f"no successor for {key!r}", context={"key": key})
        return parent.item  # type: ignore[return-value]

    def lowest_common_ancestor(self, left_key: Any, right_key: Any) -> T:
        """
        Return the element of the deepest node whose subtree holds both keys.

        Both keys must be stored in the tree.  The ancestor of a key with
        itself is the key.
        """
        self._require_handle()
        self._require_node(left_key)
        self._require_node(right_key)

        node = self._root
        while True:
            lo = self._cmp(left_key, node.item)
            hi = self._cmp(right_key, node.item)
            if lo < 0 and hi < 0:
                node = node.left
            elif lo > 0 and hi > 0:
                node = node.right
            else:
                return node.item  # type: ignore[return-value]

    # ------------------------------------------------------------------
    #   Shape queries
    # ------------------------------------------------------------------
    def level(self, key: Any) -> int:
        """Depth of the node holding *key*; the root is on level 0."""
        self._require_handle()
        node = self._require_node(key)
        depth = 0
        while node.parent is not self._nil:
            node = node.parent
            depth += 1
        return depth

    def height(self) -> int:
        """Number of nodes on the longest root-to-leaf path (0 when empty)."""
        self._require_handle()
        best = 0
        stack: List[Tuple[_Node[T], int]] = []
        if self._root is not self._nil:
            stack.append((self._root, 1))
        while stack:
            node, depth = stack.pop()
            best = max(best, depth)
            for child in (node.left, node.right):
                if child is not self._nil:
                    stack.append((child, depth + 1))
        return best

    # ------------------------------------------------------------------
    #   Insertion
    # ------------------------------------------------------------------
    def insert(self, item: T) -> None:
        """
        Insert *item*.

        An element comparing equal to a stored one only increments that
        node's multiplicity; the tree shape does not change.
        """
        self._require_handle()
        parent = self._nil
        cur = self._root
        order = 0

        while cur is not self._nil:
            order = self._cmp(item, cur.item)
            if order == 0:
                cur.count += 1
                logger.debug("merged duplicate %r (multiplicity %d)", item, cur.count)
                return
            parent = cur
            cur = cur.left if order < 0 else cur.right

        try:
            node = self._new_node(item, parent)
        except MemoryError as exc:
            raise AllocFailedError(
                "out of memory while creating a tree node", context={"item": item}
            ) from exc

        if parent is self._nil:
            self._root = node
        elif order < 0:
            parent.left = node
        else:
            parent.right = node

        self._size += 1
        self._insert_fixup(node)

    def _insert_fixup(self, node: _Node[T]) -> None:
        """Unbalanced tree: nothing to restore."""

    # ------------------------------------------------------------------
    #   Deletion
    # ------------------------------------------------------------------
    def delete(self, key: Any) -> None:
        """
        Remove *key* from the tree and call the destructor on its element.

        The key is removed entirely, whatever its multiplicity.
        """
        self._require_handle()
        if self._root is self._nil:
            raise PopFromEmptyError(
                f"delete from an empty {type(self).__name__}", context={"key": key}
            )
        node = self._require_node(key)

        self._remove_node(node)
        # The sentinel's parent is scratch space while unlinking.
        self._nil.parent = self._nil
        self._size -= 1

        item = node.item
        node.left = node.right = node.parent = None
        logger.debug("deleted %r (%d keys left)", item, self._size)
        if self._destroy is not None:
            self._destroy(item)

    def _transplant(self, u: _Node[T], v: _Node[T]) -> None:
        """Replace subtree rooted at `u` with the subtree rooted at `v`."""
        if u.parent is self._nil:
            self._root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        v.parent = u.parent

    def _remove_node(self, z: _Node[T]) -> None:
        """Unlink `z`; a node with two children is replaced by its successor."""
        if z.left is self._nil:
            self._transplant(z, z.right)
        elif z.right is self._nil:
            self._transplant(z, z.left)
        else:
            y = self._minimum_node(z.right)
            if y.parent is not z:
                self._transplant(y, y.right)
                y.right = z.right
                y.right.parent = y
            self._transplant(z, y)
            y.left = z.left
            y.left.parent = y

    # ------------------------------------------------------------------
    #   Traversals
    # ------------------------------------------------------------------
    def _inorder_nodes(self) -> Generator[_Node[T], None, None]:
        stack: List[_Node[T]] = []
        cur = self._root
        while stack or cur is not self._nil:
            while cur is not self._nil:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            yield cur
            cur = cur.right

    def _preorder_nodes(self) -> Generator[_Node[T], None, None]:
        stack: List[_Node[T]] = []
        if self._root is not self._nil:
            stack.append(self._root)
        while stack:
            node = stack.pop()
            yield node
            if node.right is not self._nil:
                stack.append(node.right)
            if node.left is not self._nil:
                stack.append(node.left)

    def _postorder_nodes(self) -> Generator[_Node[T], None, None]:
        # Root-right-left preorder, reversed.
        stack: List[_Node[T]] = []
        reverse: List[_Node[T]] = []
        if self._root is not self._nil:
            stack.append(self._root)
        while stack:
            node = stack.pop()
            reverse.append(node)
            if node.left is not self._nil:
                stack.append(node.left)
            if node.right is not self._nil:
                stack.append(node.right)
        while reverse:
            yield reverse.pop()

    def _level_nodes(self) -> Generator[_Node[T], None, None]:
        queue: Deque[_Node[T]] = deque()
        if self._root is not self._nil:
            queue.append(self._root)
        while queue:
            node = queue.popleft()
            yield node
            if node.left is not self._nil:
                queue.append(node.left)
            if node.right is not self._nil:
                queue.append(node.right)

    def _visit_all(
        self, walk: Callable[[], Iterable[_Node[T]]], visit: Visitor
    ) -> None:
        self._require_handle()
        if not callable(visit):
            raise NullActionError("traversal needs a visitor function")
        for node in walk():
            visit(node.item)  # type: ignore[arg-type]

    def traverse_inorder(self, visit: Visitor) -> None:
        """Call *visit* on every distinct element in ascending order."""
        self._visit_all(self._inorder_nodes, visit)

    def traverse_preorder(self, visit: Visitor) -> None:
        """Call *visit* on every distinct element, node before its subtrees."""
        self._visit_all(self._preorder_nodes, visit)

    def traverse_postorder(self, visit: Visitor) -> None:
        """Call *visit* on every distinct element, subtrees before the node."""
        self._visit_all(self._postorder_nodes, visit)

    def traverse_level(self, visit: Visitor) -> None:
        """Call *visit* on every distinct element, breadth first."""
        self._visit_all(self._level_nodes, visit)

    def elements(self) -> List[T]:
        """Return the distinct elements in ascending order."""
        out: List[T] = []
        self.traverse_inorder(out.append)
        return out

    # ------------------------------------------------------------------
    #   Teardown
    # ------------------------------------------------------------------
    def free(self) -> None:
        """
        Release every node (post-order), calling the destructor on each
        element.  The tree cannot be used afterwards; freeing it again only
        logs a warning.
        """
        if self._released:
            logger.warning(
                "%s: %s was already freed", ErrorKind.FREE_NULL.value, type(self).__name__
            )
            return

        nodes = list(self._postorder_nodes())
        self._root = self._nil
        self._size = 0
        self._released = True

        for node in nodes:
            node.left = node.right = node.parent = None
        logger.debug("freed %s with %d keys", type(self).__name__, len(nodes))

        if self._destroy is not None:
            destroy_all(self._destroy, [node.item for node in nodes])

    # ------------------------------------------------------------------
    #   Validation/checking utilities – useful for debugging
    # ------------------------------------------------------------------
    def validate(self) -> None:
        """
        Verify the search-order, parent-linkage and size invariants.
        Raises ``AssertionError`` with a descriptive message if something is broken.
        """
        self._require_handle()
        nil = self._nil
        assert nil.left is nil and nil.right is nil, "Sentinel children were modified"
        assert self._root.parent is nil, "Root has a parent"

        seen = 0
        prev: Optional[_Node[T]] = None
        for node in self._inorder_nodes():
            seen += 1
            if prev is not None:
                assert (
                    self._cmp(prev.item, node.item) < 0
                ), "BST property violated (in-order sequence not increasing)"
            if node.left is not nil:
                assert node.left.parent is node, "Left child has a wrong parent"
            if node.right is not nil:
                assert node.right.parent is node, "Right child has a wrong parent"
            assert node.count >= 1, "Multiplicity below one"
            prev = node

        assert seen == self._size, "Size does not match the number of nodes"

    # ------------------------------------------------------------------
    #   Convenience string representation (for debugging)
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        if self._released:
            return f"{type(self).__name__}(<freed>)"
        return f"{type(self).__name__}({self.elements()!r})"
