#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
rb_node.py
----------

Node model shared by the red-black tree and its invariant checker.

Colours are plain booleans and every tree owns exactly one sentinel node
(see :func:`make_sentinel`) that stands in for "no node here".
"""

from __future__ import annotations

from typing import Optional

# ----------------------------------------------------------------------
#  Node colour constants – using simple booleans is fastest
# ----------------------------------------------------------------------
RED = True
BLACK = False


class Node:
    """Internal node object – not meant to be created directly by callers."""

    __slots__ = ("key", "color", "left", "right", "parent")

    def __init__(
        self,
        key: int = 0,
        color: bool = BLACK,
        left: Optional["Node"] = None,
        right: Optional["Node"] = None,
        parent: Optional["Node"] = None,
    ) -> None:
        self.key = key
        self.color = color
        self.left = left
        self.right = right
        self.parent = parent

    def __repr__(self) -> str:
        col = "R" if self.color == RED else "B"
        return f"<{col} {self.key!r}>"


def make_sentinel() -> Node:
    """Return a BLACK node whose parent and children all point at itself."""
    nil = Node(color=BLACK)
    nil.left = nil.right = nil.parent = nil
    return nil
