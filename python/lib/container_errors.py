#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
container_errors.py
-------------------

Error taxonomy shared by every container in this package.

Each failure kind has its own exception class.  All of them derive from
``ContainerError`` (so callers can catch everything at once) *and* from the
builtin exception a Python caller would naturally expect: a missing key is a
``KeyError``, an empty container is an ``IndexError`` and so on.

>>> from container_errors import NotFoundError
>>> try:
...     raise NotFoundError("key 7 not found", context={"key": 7})
... except KeyError as exc:
...     print(exc, exc.context)
key 7 not found {'key': 7}
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(Enum):
    """Failure kinds reported by container operations."""

    NULL_INPUT = "null input"
    EMPTY_STRUCTURE = "empty structure"
    NOT_FOUND = "not found"
    INVALID_INPUT = "invalid input"
    POP_FROM_EMPTY = "pop from empty"
    ALLOC_FAILED = "allocation failed"
    NULL_ACTION = "null action"
    INDEX_OUT_OF_RANGE = "index out of range"
    FREE_NULL = "free of null"


class ContainerError(Exception):
    """
    Base class of every container error.

    Parameters
    ----------
    message : str
        Human readable description.
    context : dict, optional
        Extra data about the failure (the offending key, sizes, ...).
    """

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = context or {}

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return self.message


class NullInputError(ContainerError, TypeError):
    """A required handle or callable is missing."""

    kind = ErrorKind.NULL_INPUT


class NullActionError(NullInputError):
    """A traversal was requested without a visitor."""

    kind = ErrorKind.NULL_ACTION


class EmptyStructureError(ContainerError, IndexError):
    """The container holds no elements."""

    kind = ErrorKind.EMPTY_STRUCTURE


class PopFromEmptyError(EmptyStructureError):
    """Removal was requested on an empty container."""

    kind = ErrorKind.POP_FROM_EMPTY


class NotFoundError(ContainerError, KeyError):
    """The requested key (or neighbour of a key) does not exist."""

    kind = ErrorKind.NOT_FOUND


class InvalidInputError(ContainerError, KeyError):
    """An operation needs key(s) that are not stored in the container."""

    kind = ErrorKind.INVALID_INPUT


class InvalidArgumentError(ContainerError, ValueError):
    """An argument value is not one the operation accepts."""

    kind = ErrorKind.INVALID_INPUT


class DuplicateItemError(ContainerError, ValueError):
    """An item that must be unique is already present."""

    kind = ErrorKind.INVALID_INPUT


class IndexOutOfRangeError(ContainerError, IndexError):
    """A positional index does not address a stored entry."""

    kind = ErrorKind.INDEX_OUT_OF_RANGE


class AllocFailedError(ContainerError, MemoryError):
    """Memory ran out while creating a node."""

    kind = ErrorKind.ALLOC_FAILED
