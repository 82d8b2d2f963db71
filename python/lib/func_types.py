#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
func_types.py
-------------

Function kinds shared by the containers and a family of ready-made
comparators.

A *comparator* takes two elements and returns a negative number, zero or a
positive number (``a < b``, ``a == b``, ``a > b``).  Only the sign of the
result is ever used.  A *destructor* is called once on every element that
leaves a container, and a *visitor* is called on every element during a
traversal.

>>> compare_string("pear", "fig")
1
>>> compare_string_lexi("pear", "fig")
1
>>> reverse(compare_int)(1, 2)
1
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, TypeVar

from container_errors import NullInputError

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")

Comparator = Callable[[Any, Any], int]
Destructor = Callable[[Any], None]
Visitor = Callable[[Any], None]


def sign(value: int) -> int:
    """Canonicalise a comparator result to -1, 0 or 1."""
    return (value > 0) - (value < 0)


def natural_compare(a: Any, b: Any) -> int:
    """Compare using the elements' own ``<`` (the default ordering)."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


# Numeric comparators share the natural ordering.
compare_int = natural_compare
compare_float = natural_compare


def compare_string_lexi(a: str, b: str) -> int:
    """Plain lexicographic order."""
    return natural_compare(a, b)


def compare_string_size(a: str, b: str) -> int:
    """Order strings by length only; equal lengths compare equal."""
    return natural_compare(len(a), len(b))


def compare_string(a: str, b: str) -> int:
    """Order by length first, then lexicographically."""
    return compare_string_size(a, b) or compare_string_lexi(a, b)


def reverse(compare: Comparator) -> Comparator:
    """Return a comparator inducing the opposite order of *compare*."""

    def reversed_compare(a: Any, b: Any) -> int:
        return compare(b, a)

    return reversed_compare


def by_key(key: Callable[[T], K], compare: Comparator = natural_compare) -> Comparator:
    """
    Build a comparator that orders elements by ``key(element)``.

    Useful when the stored elements carry ancillary fields that must not take
    part in the ordering, e.g. ``by_key(lambda rec: rec.id)``.
    """

    def keyed_compare(a: T, b: T) -> int:
        return compare(key(a), key(b))

    return keyed_compare


def require_callable(func: Any, name: str) -> None:
    """Raise ``NullInputError`` unless *func* is callable or ``None``."""
    if func is None:
        return
    if not callable(func):
        raise NullInputError(
            f"{name} must be callable, got {func!r}", context={"argument": name}
        )


def destroy_all(destroy: Destructor, items: Iterable[Any]) -> None:
    """
    Call *destroy* on every item, even when some calls raise.

    The first exception is re-raised once every item has been handed over.
    """
    failure: Optional[Exception] = None
    for item in items:
        try:
            destroy(item)
        except Exception as exc:
            if failure is None:
                failure = exc
            else:
                logger.warning("destructor failed on %r: %s", item, exc)
    if failure is not None:
        raise failure
