#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_priority_queue.py
----------------------
A fairly exhaustive unit‑test suite for the `PriorityQueue` implementation
provided in `priority_queue.py`.

The tests cover:

* basic push / pop / peek semantics
* duplicate insertion, empty‑queue errors
* update (increase / decrease), positional priority changes and removal
* membership, length, bool conversion
* max‑heap mode and custom priority comparators
* custom key function support
* stable tie‑breaking (insertion order for equal priorities)
* bulk insertion via `extend` and `from_pairs`
* traversal, lookup helpers and the destructor contract
* internal heap‑invariant validation after random operations
* heap_sort against ``sorted``
"""

import random
import unittest
from typing import Any, List, Tuple

from container_errors import (
    DuplicateItemError,
    EmptyStructureError,
    IndexOutOfRangeError,
    NotFoundError,
    NullActionError,
    PopFromEmptyError,
)
from func_types import compare_string, reverse
from priority_queue import PriorityQueue, heap_sort


class TestPriorityQueue(unittest.TestCase):

    # ------------------------------------------------------------------
    #  Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _sorted_by_priority(pairs: List[Tuple[Any, int]]) -> List[Any]:
        """Return items sorted by priority (ascending, stable)."""
        return [item for item, _ in sorted(pairs, key=lambda x: x[1])]

    # ------------------------------------------------------------------
    #  Basic functionality
    # ------------------------------------------------------------------
    def test_push_peek_pop_len_bool(self):
        pq = PriorityQueue[int, int]()
        items = [(5, 10), (2, 3), (7, 8), (1, 2)]  # (item, priority)

        for i, (itm, prio) in enumerate(items, start=1):
            pq.push(itm, prio)
            self.assertEqual(len(pq), i)
            self.assertTrue(pq)

        # the smallest priority is 2 (item 1)
        self.assertEqual(pq.peek(), 1)
        self.assertEqual(pq.peek_priority(), 2)

        expected_order = self._sorted_by_priority(items)
        popped = [pq.pop() for _ in range(len(pq))]
        self.assertEqual(popped, expected_order)

        self.assertEqual(len(pq), 0)
        self.assertFalse(pq)

        # pop / peek on an empty queue raise the correct exception
        with self.assertRaises(PopFromEmptyError):
            pq.pop()
        with self.assertRaises(IndexError):
            pq.peek()
        with self.assertRaises(EmptyStructureError):
            pq.peek_priority()

    def test_duplicate_insert_raises(self):
        pq = PriorityQueue[str, int]()
        pq.push("a", 1)
        with self.assertRaises(DuplicateItemError):
            pq.push("a", 2)
        with self.assertRaises(ValueError):
            pq.push("a", 3)

    # ------------------------------------------------------------------
    #  Update (decrease / increase) and arbitrary removal
    # ------------------------------------------------------------------
    def test_update_decrease_and_increase(self):
        pq = PriorityQueue[str, int]()
        pq.push("x", 30)
        pq.push("y", 20)
        pq.push("z", 40)

        # Decrease priority of 'z' → it should become the new top
        pq.update("z", 5)
        self.assertEqual(pq.peek(), "z")
        # Increase priority of 'x' → it should sink below 'y'
        pq.update("x", 50)
        self.assertEqual(pq.pop(), "z")
        self.assertEqual(pq.pop(), "y")
        self.assertEqual(pq.pop(), "x")

    def test_update_missing_raises(self):
        pq = PriorityQueue[int, int]()
        with self.assertRaises(NotFoundError):
            pq.update(99, 1)

    def test_change_priority_by_index(self):
        pq = PriorityQueue[str, int]()
        for name, prio in (("a", 1), ("b", 2), ("c", 3)):
            pq.push(name, prio)
        pq.change_priority(pq.find_index("c"), 0)
        self.assertEqual(pq.peek(), "c")
        self.assertTrue(pq._is_valid())
        with self.assertRaises(IndexOutOfRangeError):
            pq.change_priority(3, 0)
        with self.assertRaises(IndexError):
            pq.change_priority(-1, 0)

    def test_remove(self):
        destroyed = []
        pq = PriorityQueue[int, int](destroy=destroyed.append)
        for i in range(5):
            pq.push(i, i * 10)

        # Remove a middle element
        pq.remove(2)
        self.assertNotIn(2, pq)
        self.assertEqual(len(pq), 4)
        self.assertNotIn(2, pq.items())

        # Remove the element at the end of the internal list
        last = pq.items()[-1]
        pq.remove(last)
        self.assertNotIn(last, pq)
        self.assertTrue(pq._is_valid())
        self.assertEqual(destroyed, [2, last])

        with self.assertRaises(KeyError):
            pq.remove(999)

    # ------------------------------------------------------------------
    #  Lookup helpers and traversal
    # ------------------------------------------------------------------
    def test_find_helpers(self):
        pq = PriorityQueue[str, int]()
        pq.push("a", 4)
        pq.push("b", 1)
        self.assertEqual(pq.find_index("b"), 0)
        self.assertEqual(pq.find_index("zz"), -1)
        self.assertEqual(pq.find_priority_index(4), pq.find_index("a"))
        self.assertEqual(pq.find_priority_index(99), -1)

    def test_traverse(self):
        pq = PriorityQueue[str, int]()
        pq.push("a", 2)
        pq.push("b", 1)
        seen = []
        pq.traverse(seen.append)
        self.assertEqual(sorted(seen), [("a", 2), ("b", 1)])
        with self.assertRaises(NullActionError):
            pq.traverse(None)

    def test_free_destroys_remaining(self):
        destroyed = []
        pq = PriorityQueue[int, int](destroy=destroyed.append)
        pq.extend([(1, 1), (2, 2), (3, 3)])
        self.assertEqual(pq.pop(), 1)
        pq.free()
        self.assertEqual(sorted(destroyed), [2, 3])
        self.assertEqual(len(pq), 0)

    def test_free_survives_failing_destructor(self):
        destroyed = []

        def destroy(item):
            destroyed.append(item)
            raise ValueError(item)

        pq = PriorityQueue[str, int](destroy=destroy)
        pq.extend([("a", 1), ("b", 2), ("c", 3)])
        with self.assertRaises(ValueError):
            pq.free()
        self.assertEqual(sorted(destroyed), ["a", "b", "c"])
        self.assertEqual(len(pq), 0)

    # ------------------------------------------------------------------
    #  Membership / containment, __len__, __bool__
    # ------------------------------------------------------------------
    def test_contains_and_len_bool(self):
        pq = PriorityQueue[int, int]()
        self.assertFalse(pq)
        self.assertEqual(len(pq), 0)

        for i in range(3):
            pq.push(i, i)
        self.assertTrue(pq)
        self.assertEqual(len(pq), 3)

        for i in range(3):
            self.assertIn(i, pq)
        self.assertNotIn(42, pq)

    # ------------------------------------------------------------------
    #  Max‑heap mode and comparators
    # ------------------------------------------------------------------
    def test_max_heap(self):
        maxpq = PriorityQueue[int, int](max_heap=True)
        data = [(10, 1), (5, 9), (7, 4), (2, 8)]
        for item, prio in data:
            maxpq.push(item, prio)

        self.assertEqual(maxpq.pop(), 5)
        self.assertEqual(maxpq.pop(), 2)
        self.assertEqual(maxpq.pop(), 7)
        self.assertEqual(maxpq.pop(), 10)

    def test_reverse_comparator_matches_max_heap(self):
        pq = PriorityQueue[str, int](compare=reverse(lambda a, b: a - b))
        pq.extend([("low", 1), ("high", 9), ("mid", 5)])
        self.assertEqual([pq.pop() for _ in range(3)], ["high", "mid", "low"])

    def test_string_priorities(self):
        pq = PriorityQueue[int, str](compare=compare_string)
        pq.extend([(1, "pear"), (2, "fig"), (3, "apple")])
        self.assertEqual([pq.pop() for _ in range(3)], [2, 1, 3])

    # ------------------------------------------------------------------
    #  Custom key function + automatic priority extraction
    # ------------------------------------------------------------------
    def test_custom_key(self):
        class Task:
            def __init__(self, name: str, value: int):
                self.name = name
                self.value = value

            def __repr__(self):
                return f"<Task {self.name}:{self.value}>"

            def __hash__(self):
                return hash(self.name)

            def __eq__(self, other):
                return isinstance(other, Task) and self.name == other.name

        pq = PriorityQueue[Task, int](key=lambda t: t.value)
        for t in (Task("A", 30), Task("B", 10), Task("C", 20)):
            pq.push(t)

        self.assertEqual(pq.pop().name, "B")
        self.assertEqual(pq.pop().name, "C")
        self.assertEqual(pq.pop().name, "A")

    # ------------------------------------------------------------------
    #  Stable tie‑breaking (FIFO for equal priorities)
    # ------------------------------------------------------------------
    def test_stable_ordering(self):
        pq = PriorityQueue[str, int]()
        pq.push("first", 5)
        pq.push("second", 5)
        pq.push("third", 5)

        self.assertEqual(pq.pop(), "first")
        self.assertEqual(pq.pop(), "second")
        self.assertEqual(pq.pop(), "third")

    # ------------------------------------------------------------------
    #  Bulk insertion via extend() and from_pairs()
    # ------------------------------------------------------------------
    def test_extend_bulk(self):
        random.seed(3)
        pq = PriorityQueue[int, int]()
        bulk = [(i, random.randint(1, 1000)) for i in range(50)]
        pq.extend(bulk)

        self.assertEqual(len(pq), 50)
        for i, _ in bulk:
            self.assertIn(i, pq)

        reference = self._sorted_by_priority(bulk)
        popped = [pq.pop() for _ in range(len(pq))]
        self.assertEqual(popped, reference)

    def test_from_pairs_heapifies(self):
        random.seed(4)
        pairs = [(i, random.randint(0, 100)) for i in range(300)]
        pq = PriorityQueue.from_pairs(pairs)
        self.assertTrue(pq._is_valid())
        popped = [pq.pop() for _ in range(len(pq))]
        self.assertEqual(popped, self._sorted_by_priority(pairs))

        with self.assertRaises(DuplicateItemError):
            PriorityQueue.from_pairs([(1, 1), (1, 2)])

    # ------------------------------------------------------------------
    #  Internal validation after random operations
    # ------------------------------------------------------------------
    def test_random_operations_and_internal_validation(self):
        random.seed(0)
        pq = PriorityQueue[int, int]()
        reference = {}  # dict item → priority (single copy)

        items_range = range(0, 500)

        for _ in range(5000):
            op_type = random.choices(
                ["push", "pop", "update", "remove"],
                weights=[0.4, 0.3, 0.2, 0.1],
                k=1,
            )[0]

            if op_type == "push" or not reference:
                while True:
                    candidate = random.choice(items_range)
                    if candidate not in reference:
                        break
                prio = random.randint(0, 1000)
                pq.push(candidate, prio)
                reference[candidate] = prio

            elif op_type == "pop":
                popped = pq.pop()
                self.assertEqual(reference[popped], min(reference.values()))
                del reference[popped]

            elif op_type == "update":
                item = random.choice(list(reference.keys()))
                new_prio = random.randint(0, 1000)
                pq.update(item, new_prio)
                reference[item] = new_prio

            elif op_type == "remove":
                item = random.choice(list(reference.keys()))
                pq.remove(item)
                del reference[item]

            self.assertTrue(pq._is_valid())

        remaining = [pq.pop() for _ in range(len(pq))]
        self.assertEqual(
            [reference[item] for item in remaining], sorted(reference.values())
        )


class TestHeapSort(unittest.TestCase):
    def test_matches_sorted(self):
        random.seed(11)
        for size in (0, 1, 2, 7, 100):
            values = [random.randint(-50, 50) for _ in range(size)]
            expected = sorted(values)
            heap_sort(values)
            self.assertEqual(values, expected)

    def test_custom_comparator(self):
        words = ["pear", "fig", "apple", "kiwi"]
        heap_sort(words, compare_string)
        self.assertEqual(words, ["fig", "kiwi", "pear", "apple"])

        numbers = [3, 1, 2]
        heap_sort(numbers, reverse(lambda a, b: a - b))
        self.assertEqual(numbers, [3, 2, 1])


# ----------------------------------------------------------------------
# If you execute this file directly, run the tests.
# ----------------------------------------------------------------------
if __name__ == "__main__":
    unittest.main(verbosity=2)
