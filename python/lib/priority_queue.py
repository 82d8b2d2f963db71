#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
priority_queue.py
-----------------

An array‑backed binary heap priority queue whose priorities are ordered by a
comparator, plus an in‑place ``heap_sort``.

Features
~~~~~~~~
* O(log n) push, pop, update, and arbitrary removal.
* Priorities compared with any comparator (natural order by default).
* Optional max‑heap mode (just set max_heap=True).
* Stable tie‑breaking (insertion order) – items with the same priority are
  returned in the order they were inserted.
* Custom key function (like `sorted(..., key=…)`) so you can push items
  without explicitly giving a priority.
* Positional access: ``change_priority(index, …)``, ``find_index``,
  ``find_priority_index``.
* Bottom‑up heap construction via ``PriorityQueue.from_pairs``.

Typical usage
~~~~~~~~~~~~~
>>> from priority_queue import PriorityQueue
>>> pq = PriorityQueue()
>>> pq.push('task1', 5)
>>> pq.push('task2', 2)
>>> pq.push('task3', 7)
>>> pq.pop()
'task2'
>>> pq.update('task1', 1)   # reprioritise an existing entry
>>> pq.peek()
'task1'
>>> pq.remove('task3')
>>> 'task3' in pq
False
"""

from __future__ import annotations

import itertools
import logging
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from container_errors import (
    DuplicateItemError,
    EmptyStructureError,
    IndexOutOfRangeError,
    NotFoundError,
    NullActionError,
    PopFromEmptyError,
)
from func_types import (
    Comparator,
    Destructor,
    destroy_all,
    natural_compare,
    require_callable,
    sign,
)

logger = logging.getLogger(__name__)

# ----------------------------------------------------------------------
#  Generic type variables
# ----------------------------------------------------------------------
T = TypeVar('T')                     # type of the stored item
P = TypeVar('P')                     # type of the priority


# ----------------------------------------------------------------------
#  Core class
# ----------------------------------------------------------------------
class PriorityQueue(Generic[T, P]):
    """
    A min‑priority queue (or max‑priority if requested) with full
    support for ``push``, ``pop``, ``peek``, ``update`` and ``remove``.
    The class maintains a dict ``_position`` mapping each *item* to the
    index inside the underlying heap list, so items must be hashable and
    unique.

    Parameters
    ----------
    compare : Callable[[P, P], int], optional
        Comparator for priorities.  Defaults to natural ordering.

    key : Callable[[T], P], optional
        If supplied, ``push(item)`` will call ``key(item)`` to obtain the
        priority automatically. When ``key`` is ``None`` the item itself is
        its priority.

    max_heap : bool, default ``False``
        If true, the queue behaves as a *max*‑heap (largest priority first).

    destroy : Callable[[T], None], optional
        Called on items that leave the queue without being handed back to
        the caller (``remove`` and ``free``).
    """

    __slots__ = ("_heap", "_position", "_counter", "_key", "_compare", "_sign", "_destroy")

    def __init__(
        self,
        *,
        compare: Optional[Comparator] = None,
        key: Optional[Callable[[T], P]] = None,
        max_heap: bool = False,
        destroy: Optional[Destructor] = None,
    ) -> None:
        require_callable(compare, "compare")
        require_callable(key, "key")
        require_callable(destroy, "destroy")

        # The underlying list of (priority, insertion_counter, item) entries.
        self._heap: List[Tuple[P, int, T]] = []

        # Mapping item -> current index in `_heap`. Allows O(1) locate.
        self._position: Dict[T, int] = {}

        # A monotonically increasing counter to guarantee stable ordering.
        self._counter = itertools.count()

        self._key: Callable[[T], P] = (lambda x: x) if key is None else key  # type: ignore[assignment,return-value]
        self._compare: Comparator = natural_compare if compare is None else compare

        # Used to flip comparator results for max‑heap semantics.
        self._sign: int = -1 if max_heap else 1
        self._destroy = destroy

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[T, P]], **kwargs: Any) -> "PriorityQueue[T, P]":
        """
        Build a queue from ``(item, priority)`` pairs in O(n) by
        heapifying bottom‑up instead of pushing one by one.
        """
        pq: PriorityQueue[T, P] = cls(**kwargs)
        for item, priority in pairs:
            if item in pq._position:
                raise DuplicateItemError(
                    f"Item {item!r} already present in queue", context={"item": item}
                )
            pq._position[item] = len(pq._heap)
            pq._heap.append(pq._entry(item, priority))
        for idx in reversed(range(len(pq._heap) // 2)):
            pq._sift_down(idx)
        return pq

    # ------------------------------------------------------------------
    #   Helper: wrap a (priority, item) pair as a heap entry.
    # ------------------------------------------------------------------
    def _entry(self, item: T, priority: P) -> Tuple[P, int, T]:
        return (priority, next(self._counter), item)

    def _before(self, a: Tuple[P, int, T], b: Tuple[P, int, T]) -> bool:
        """True when entry *a* must be served before entry *b*."""
        order = self._sign * sign(self._compare(a[0], b[0]))
        if order:
            return order < 0
        return a[1] < b[1]

    # ------------------------------------------------------------------
    #   Core public API
    # ------------------------------------------------------------------
    def push(self, item: T, priority: Optional[P] = None) -> None:
        """
        Insert *item* with the given *priority*.
        If ``priority`` is omitted, ``self._key(item)`` is called.
        """
        if item in self._position:
            raise DuplicateItemError(
                f"Item {item!r} already present in queue", context={"item": item}
            )

        if priority is None:
            priority = self._key(item)
        self._heap.append(self._entry(item, priority))
        idx = len(self._heap) - 1
        self._position[item] = idx
        self._sift_up(idx)

    def pop(self) -> T:
        """
        Remove and return the element with the smallest (or largest for
        a max‑heap) priority.  The item is handed back, not destroyed.
        """
        if not self._heap:
            raise PopFromEmptyError("pop from an empty priority queue")
        # Swap the root with the last element, pop it, then restore heap.
        self._swap(0, len(self._heap) - 1)
        _, _, item = self._heap.pop()
        del self._position[item]

        if self._heap:
            self._sift_down(0)
        return item

    def peek(self) -> T:
        """Return the top element **without** removing it."""
        if not self._heap:
            raise EmptyStructureError("peek from an empty priority queue")
        return self._heap[0][2]

    def peek_priority(self) -> P:
        """Return the priority of the top element."""
        if not self._heap:
            raise EmptyStructureError("peek from an empty priority queue")
        return self._heap[0][0]

    def update(self, item: T, new_priority: P) -> None:
        """Change the priority of *item* to ``new_priority``."""
        if item not in self._position:
            raise NotFoundError(f"Item {item!r} not found in queue", context={"item": item})
        self._reprioritise(self._position[item], new_priority)

    def change_priority(self, index: int, new_priority: P) -> None:
        """Change the priority of the entry stored at heap position *index*."""
        if not 0 <= index < len(self._heap):
            raise IndexOutOfRangeError(
                f"index {index} outside a queue of {len(self._heap)} entries",
                context={"index": index, "size": len(self._heap)},
            )
        self._reprioritise(index, new_priority)

    def _reprioritise(self, idx: int, new_priority: P) -> None:
        old_priority, old_counter, item = self._heap[idx]
        self._heap[idx] = (new_priority, old_counter, item)

        # The new priority may be larger or smaller → we need to go both ways.
        if self._sign * sign(self._compare(new_priority, old_priority)) < 0:
            self._sift_up(idx)
        else:
            self._sift_down(idx)

    def remove(self, item: T) -> None:
        """Delete *item* from the queue, regardless of its priority."""
        if item not in self._position:
            raise NotFoundError(f"Item {item!r} not found in queue", context={"item": item})
        idx = self._position[item]
        last = len(self._heap) - 1

        # Swap with the last item (a no-op when it is the last), then pop.
        self._swap(idx, last)
        self._heap.pop()
        del self._position[item]

        # After the swap the element now at `idx` may need to move up or down.
        if idx < len(self._heap) and self._sift_up(idx) == idx:
            self._sift_down(idx)

        if self._destroy is not None:
            self._destroy(item)

    def find_index(self, item: T) -> int:
        """Heap position of *item*, or -1."""
        return self._position.get(item, -1)

    def find_priority_index(self, priority: P) -> int:
        """Heap position of the first entry whose priority compares equal, or -1."""
        for idx, entry in enumerate(self._heap):
            if sign(self._compare(entry[0], priority)) == 0:
                return idx
        return -1

    def traverse(self, visit: Callable[[Tuple[T, P]], Any]) -> None:
        """Call *visit* with ``(item, priority)`` for every entry, in heap order."""
        if not callable(visit):
            raise NullActionError("traversal needs a visitor function")
        for priority, _, item in self._heap:
            visit((item, priority))

    def items(self) -> List[T]:
        """Return the stored items **in heap order** (i.e. not sorted)."""
        return [entry[2] for entry in self._heap]

    def free(self) -> None:
        """Empty the queue, calling the destructor on every stored item."""
        entries, self._heap = self._heap, []
        self._position.clear()
        logger.debug("freed priority queue with %d entries", len(entries))
        if self._destroy is not None:
            destroy_all(self._destroy, [item for _, _, item in entries])

    # ------------------------------------------------------------------
    #   Python protocol support
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        """Return the number of items currently stored."""
        return len(self._heap)

    def __contains__(self, item: Any) -> bool:
        """Fast O(1) membership test."""
        return item in self._position

    def __bool__(self) -> bool:
        """Truthiness – empty queue is False, non‑empty is True."""
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"PriorityQueue({[(item, pri) for pri, _, item in self._heap]!r})"

    # ------------------------------------------------------------------
    #   Internal heap‑maintenance helpers
    # ------------------------------------------------------------------
    def _parent(self, idx: int) -> int:
        return (idx - 1) // 2

    def _left(self, idx: int) -> int:
        return 2 * idx + 1

    def _right(self, idx: int) -> int:
        return 2 * idx + 2

    def _swap(self, i: int, j: int) -> None:
        """Swap entries at positions i and j and keep `_position` in sync."""
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]
        self._position[self._heap[i][2]] = i
        self._position[self._heap[j][2]] = j

    def _sift_up(self, idx: int) -> int:
        """Move the entry at *idx* up; return its final position."""
        while idx > 0:
            parent = self._parent(idx)
            if self._before(self._heap[idx], self._heap[parent]):
                self._swap(idx, parent)
                idx = parent
            else:
                break
        return idx

    def _sift_down(self, idx: int) -> None:
        """Move the entry at *idx* down the heap until the heap property holds."""
        n = len(self._heap)
        while (left := self._left(idx)) < n:
            first = left
            right = self._right(idx)
            if right < n and self._before(self._heap[right], self._heap[left]):
                first = right
            if self._before(self._heap[first], self._heap[idx]):
                self._swap(idx, first)
                idx = first
            else:
                break

    # ------------------------------------------------------------------
    #   Convenience: bulk insertion
    # ------------------------------------------------------------------
    def extend(self, items: Iterable[Tuple[T, P]]) -> None:
        """
        Insert a bunch of (item, priority) pairs at once.
        The overall complexity is O(k log (k+n)), where ``k`` is the number
        of new items and ``n`` is the current size.
        """
        for item, priority in items:
            self.push(item, priority)

    # ------------------------------------------------------------------
    #   Debug/validation helpers
    # ------------------------------------------------------------------
    def _is_valid(self) -> bool:
        """Internal sanity check – useful while debugging."""
        if len(self._position) != len(self._heap):
            return False
        for i, entry in enumerate(self._heap):
            # Check that the mapping points back to the proper index.
            if self._position.get(entry[2]) != i:
                return False
            # Verify heap ordering.
            for child in (self._left(i), self._right(i)):
                if child < len(self._heap) and self._before(self._heap[child], entry):
                    return False
        return True


def heap_sort(values: List[Any], compare: Optional[Comparator] = None) -> None:
    """
    Sort *values* in place, ascending under *compare* (natural order by
    default).  Not stable.
    """
    require_callable(compare, "compare")
    cmp = natural_compare if compare is None else compare

    def sift_down(root: int, end: int) -> None:
        while (child := 2 * root + 1) < end:
            if child + 1 < end and sign(cmp(values[child], values[child + 1])) < 0:
                child += 1
            if sign(cmp(values[root], values[child])) >= 0:
                return
            values[root], values[child] = values[child], values[root]
            root = child

    n = len(values)
    for start in reversed(range(n // 2)):
        sift_down(start, n)
    for end in range(n - 1, 0, -1):
        values[0], values[end] = values[end], values[0]
        sift_down(0, end)
