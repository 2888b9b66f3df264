#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
rb_validation.py
----------------

Invariant checker for :class:`red_black_tree.RedBlackTree`.

The checker never trusts the shape of the tree it is given: the walk is
iterative, the depth is capped at the bound every valid red-black tree
obeys (``2 * log2(n + 1)``) and visiting more nodes than the tree claims
to hold is reported as a cycle.  A damaged tree therefore always produces
an :class:`InvariantViolation` instead of a ``RecursionError`` or an
endless loop.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from rb_errors import InvariantViolation
from rb_node import BLACK, RED, Node

# Frame layout: (node, lower bound, upper bound, depth, children done?)
_Frame = Tuple[Node, Optional[int], Optional[int], int, bool]


def max_depth(size: int) -> int:
    """Deepest node level (root = 1) allowed for a valid tree of *size* nodes."""
    return 2 * (size + 1).bit_length()


def check_tree(tree) -> int:
    """
    Verify every invariant of *tree* and return its black-height.

    The black-height counts the sentinel as one black node, so an empty
    tree reports ``1``.  Raises :class:`InvariantViolation` describing the
    first problem found.
    """
    nil = tree.sentinel
    root = tree.root_node()

    if nil.color != BLACK:
        raise InvariantViolation("Sentinel is not black")
    if nil.left is not nil or nil.right is not nil or nil.parent is not nil:
        raise InvariantViolation("Sentinel links do not point at itself")

    if not isinstance(root, Node):
        raise InvariantViolation(f"Root link is broken: {root!r}")

    if root is nil:
        if len(tree) != 0:
            raise InvariantViolation(
                f"Tree is empty but records {len(tree)} nodes"
            )
        return 1

    if root.color != BLACK:
        raise InvariantViolation("Root is not black")
    if root.parent is not nil:
        raise InvariantViolation("Root has a parent")

    size = len(tree)
    depth_limit = max_depth(size)
    visited = 0
    heights: List[int] = []
    stack: List[_Frame] = [(root, None, None, 1, False)]

    while stack:
        node, lo, hi, depth, done = stack.pop()

        if node is nil:
            heights.append(1)
            continue

        if done:
            right_bh = heights.pop()
            left_bh = heights.pop()
            if left_bh != right_bh:
                raise InvariantViolation(
                    f"Black-height mismatch below {node.key!r}: "
                    f"{left_bh} on the left, {right_bh} on the right"
                )
            heights.append(left_bh + (1 if node.color == BLACK else 0))
            continue

        visited += 1
        if visited > size:
            raise InvariantViolation(
                f"More than {size} nodes reachable (cycle or stray node)"
            )
        if depth > depth_limit:
            raise InvariantViolation(
                f"Depth {depth} exceeds the bound {depth_limit} "
                f"for {size} nodes"
            )

        if node.color is not RED and node.color is not BLACK:
            raise InvariantViolation(f"Node {node.key!r} has no valid colour")

        # Equal keys may sit on either side once rotations have moved them.
        if lo is not None and node.key < lo:
            raise InvariantViolation(
                f"Ordering violated: {node.key!r} is below {lo!r}"
            )
        if hi is not None and node.key > hi:
            raise InvariantViolation(
                f"Ordering violated: {node.key!r} is above {hi!r}"
            )

        for child in (node.left, node.right):
            if not isinstance(child, Node):
                raise InvariantViolation(
                    f"Node {node.key!r} has a broken child link: {child!r}"
                )
            if child is not nil and child.parent is not node:
                raise InvariantViolation(
                    f"Node {child.key!r} does not point back to "
                    f"its parent {node.key!r}"
                )

        if node.color == RED and (
            node.left.color == RED or node.right.color == RED
        ):
            raise InvariantViolation(f"Red node {node.key!r} has a red child")

        stack.append((node, lo, hi, depth, True))
        stack.append((node.right, node.key, hi, depth + 1, False))
        stack.append((node.left, lo, node.key, depth + 1, False))

    if visited != size:
        raise InvariantViolation(
            f"Tree records {size} nodes but {visited} are reachable"
        )

    return heights.pop()
