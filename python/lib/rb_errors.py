#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""Exceptions raised by the red-black tree."""


class RedBlackTreeError(Exception):
    """Base class for every error raised by this library."""


class KeyNotFound(RedBlackTreeError, KeyError):
    """``delete`` was asked to remove a key that is not in the tree."""

    def __init__(self, key: int) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Key not found: {self.key!r}"


class EmptyTree(RedBlackTreeError, ValueError):
    """A query that needs at least one node was made on an empty tree."""

    def __init__(self, message: str = "Tree is empty") -> None:
        super().__init__(message)


class InvariantViolation(RedBlackTreeError, AssertionError):
    """The tree no longer satisfies a red-black or ordering invariant."""
