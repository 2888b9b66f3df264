#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
red_black_tree.py
-----------------

A self‑balancing ordered container of integer keys based on the
**Red‑Black** algorithm.  Insert, delete and membership search all run in
O(log n), under any interleaving of inserts and deletes.

Features
~~~~~~~~
* `tree.insert(key)`       – always succeeds; duplicates are kept and
  routed to the right of their equal predecessor
* `tree.delete(key)`       – removes one occurrence (KeyNotFound if missing)
* `tree.search(key)` / `key in tree` – membership test
* `tree.root_key()`        – key stored at the root (EmptyTree if empty)
* `len(tree)`, iteration in ascending order, `min_key()`, `max_key()`
* `tree.is_valid()` / `tree.validate()` – check the red‑black invariants
* read‑only structural accessors (`root_node`, `left_child`,
  `right_child`, `is_red`, `node_key`, `sentinel`) for code that draws
  the tree

The implementation uses a **single shared sentinel node** (`self._nil`) to
represent all leafs, which eliminates `None` checks everywhere.

Typical usage
~~~~~~~~~~~~~
>>> from red_black_tree import RedBlackTree
>>> rbt = RedBlackTree()
>>> for key in (10, 15, 20):
...     rbt.insert(key)
>>> rbt.root_key()
15
>>> rbt.search(20)
True
>>> rbt.delete(15)
>>> 15 in rbt
False
>>> list(rbt)
[10, 20]
"""

from __future__ import annotations

import logging
import os
from typing import Generator, Iterable, List, Optional

from rb_errors import EmptyTree, InvariantViolation, KeyNotFound
from rb_node import BLACK, RED, Node, make_sentinel
from rb_validation import check_tree

logger = logging.getLogger(__name__)

# Run the full invariant checker after every insert/delete.
CHECK_INVARIANTS = bool(os.getenv("RBTREE_CHECK_INVARIANTS"))


class RedBlackTree:
    """
    An ordered multiset of integers kept in a red‑black binary search tree.

    The tree owns every node and the sentinel; callers only ever see nodes
    through the read‑only accessors at the bottom of the class.
    """

    __slots__ = ("_root", "_nil", "_size")

    # ------------------------------------------------------------------
    #   Construction / basic container protocol
    # ------------------------------------------------------------------
    def __init__(self, keys: Optional[Iterable[int]] = None) -> None:
        """
        Create an empty tree or optionally fill it from an iterable of keys.

        Parameters
        ----------
        keys : iterable of int   optional
            If supplied, each key is passed to ``insert`` (i.e. the whole
            operation is O(n log n)).
        """
        # The sentinel leaf node – shared by every leaf in the tree.
        self._nil: Node = make_sentinel()
        self._root: Node = self._nil
        self._size: int = 0

        if keys is not None:
            for key in keys:
                self.insert(key)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: object) -> bool:
        return self._search_node(key) is not self._nil  # type: ignore[arg-type]

    def __iter__(self) -> Generator[int, None, None]:
        """Yield keys in ascending order (in‑order traversal)."""
        stack: List[Node] = []
        cur = self._root
        while stack or cur is not self._nil:
            while cur is not self._nil:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            yield cur.key
            cur = cur.right

    def __repr__(self) -> str:
        return f"RedBlackTree({list(self)!r})"

    # ------------------------------------------------------------------
    #   Search
    # ------------------------------------------------------------------
    def _search_node(self, key: int) -> Node:
        """Return the first node holding *key* on descent, or the sentinel."""
        cur = self._root
        while cur is not self._nil:
            if key == cur.key:
                return cur
            elif key < cur.key:
                cur = cur.left
            else:
                cur = cur.right
        return self._nil

    def search(self, key: int) -> bool:
        """Return True if at least one node holds *key*."""
        return self._search_node(key) is not self._nil

    def root_key(self) -> int:
        """Return the key stored at the root; raise EmptyTree if there is none."""
        if self._root is self._nil:
            raise EmptyTree()
        return self._root.key

    # ------------------------------------------------------------------
    #   Minimum / maximum helpers
    # ------------------------------------------------------------------
    def _minimum_node(self, start: Node) -> Node:
        """Return the leftmost node of the subtree rooted at *start*."""
        node = start
        while node.left is not self._nil:
            node = node.left
        return node

    def min_key(self) -> int:
        """Return the smallest key stored in the tree."""
        if self._root is self._nil:
            raise EmptyTree()
        return self._minimum_node(self._root).key

    def max_key(self) -> int:
        """Return the largest key stored in the tree."""
        if self._root is self._nil:
            raise EmptyTree()
        node = self._root
        while node.right is not self._nil:
            node = node.right
        return node.key

    # ------------------------------------------------------------------
    #   Insertion
    # ------------------------------------------------------------------
    def insert(self, key: int) -> None:
        """Insert *key*; an equal key already present keeps its place."""
        parent = self._nil
        cur = self._root

        while cur is not self._nil:
            parent = cur
            if key < cur.key:
                cur = cur.left
            else:
                # Ties continue to the right.
                if key == cur.key:
                    logger.debug("Inserting duplicate key %r", key)
                cur = cur.right

        new_node = Node(
            key=key,
            color=RED,
            left=self._nil,
            right=self._nil,
            parent=parent,
        )

        if parent is self._nil:
            self._root = new_node
        elif key < parent.key:
            parent.left = new_node
        else:
            parent.right = new_node

        self._size += 1
        self._fix_insert(new_node)
        self._check_invariants()

    def _fix_insert(self, z: Node) -> None:
        """Restore red‑black properties after inserting node `z` (which is RED)."""
        while z.parent.color == RED:
            # A red parent is never the root, so the grandparent is real.
            grandparent = z.parent.parent
            if grandparent is self._nil:
                raise RuntimeError("red parent without a grandparent")
            if z.parent is grandparent.left:
                y = grandparent.right  # uncle
                if y.color == RED:
                    # Uncle red – recolour and move the violation up
                    z.parent.color = BLACK
                    y.color = BLACK
                    grandparent.color = RED
                    z = grandparent
                else:
                    if z is z.parent.right:
                        # Triangle – straighten into a line
                        z = z.parent
                        self._rotate_left(z)
                    # Line – rotate the grandparent
                    z.parent.color = BLACK
                    z.parent.parent.color = RED
                    self._rotate_right(z.parent.parent)
            else:  # Mirror of the above (parent is a right child)
                y = grandparent.left  # uncle
                if y.color == RED:
                    z.parent.color = BLACK
                    y.color = BLACK
                    grandparent.color = RED
                    z = grandparent
                else:
                    if z is z.parent.left:
                        z = z.parent
                        self._rotate_right(z)
                    z.parent.color = BLACK
                    z.parent.parent.color = RED
                    self._rotate_left(z.parent.parent)
        self._root.color = BLACK

    # ------------------------------------------------------------------
    #   Left / right rotations – helper primitives
    # ------------------------------------------------------------------
    def _rotate_left(self, x: Node) -> None:
        """Left‑rotate the subtree rooted at `x`."""
        y = x.right
        if y is self._nil:
            raise RuntimeError("rotate_left called on a node with nil right child")
        # Turn y's left subtree into x's right subtree
        x.right = y.left
        if y.left is not self._nil:
            y.left.parent = x
        # Link x's parent to y
        y.parent = x.parent
        if x.parent is self._nil:
            self._root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        # Put x on y's left
        y.left = x
        x.parent = y

    def _rotate_right(self, y: Node) -> None:
        """Right‑rotate the subtree rooted at `y`."""
        x = y.left
        if x is self._nil:
            raise RuntimeError("rotate_right called on a node with nil left child")
        y.left = x.right
        if x.right is not self._nil:
            x.right.parent = y
        x.parent = y.parent
        if y.parent is self._nil:
            self._root = x
        elif y is y.parent.right:
            y.parent.right = x
        else:
            y.parent.left = x
        x.right = y
        y.parent = x

    # ------------------------------------------------------------------
    #   Deletion
    # ------------------------------------------------------------------
    def _transplant(self, u: Node, v: Node) -> None:
        """Put `v` in `u`'s slot under `u`'s parent; `v`'s children are untouched."""
        if u.parent is self._nil:
            self._root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        v.parent = u.parent

    def delete(self, key: int) -> None:
        """Remove one occurrence of *key*; raise KeyNotFound if it is absent."""
        node = self._search_node(key)
        if node is self._nil:
            raise KeyNotFound(key)
        self._delete_node(node)
        self._check_invariants()

    def _delete_node(self, z: Node) -> None:
        """Splice node `z` out of the tree and fix up any colour violations."""
        y = z  # node physically removed from its position
        y_original_color = y.color
        if z.left is self._nil:
            x = z.right
            self._transplant(z, z.right)
        elif z.right is self._nil:
            x = z.left
            self._transplant(z, z.left)
        else:
            # z has two children: its in‑order successor takes its place
            y = self._minimum_node(z.right)
            y_original_color = y.color
            x = y.right
            if y.parent is z:
                # x may be the sentinel; fixup reads its parent
                x.parent = y
            else:
                self._transplant(y, y.right)
                y.right = z.right
                y.right.parent = y
            self._transplant(z, y)
            y.left = z.left
            y.left.parent = y
            y.color = z.color

        self._size -= 1

        if y_original_color == BLACK:
            self._fix_delete(x)

        # The sentinel may have carried a parent link through the fixup.
        self._nil.parent = self._nil
        z.left = z.right = z.parent = None

    def _fix_delete(self, x: Node) -> None:
        """
        Restore red‑black properties after removing a black node.
        `x` is the node that moved into the removed node's position (could
        be the sentinel, whose parent link then says where it stands).
        """
        while x is not self._root and x.color == BLACK:
            if x is x.parent.left:
                w = x.parent.right  # sibling
                if w.color == RED:
                    # Sibling red – turn it into a black‑sibling case
                    w.color = BLACK
                    x.parent.color = RED
                    self._rotate_left(x.parent)
                    w = x.parent.right
                if w.left.color == BLACK and w.right.color == BLACK:
                    # Both of the sibling's children black – push up
                    w.color = RED
                    x = x.parent
                else:
                    if w.right.color == BLACK:
                        # Near child red, far child black
                        w.left.color = BLACK
                        w.color = RED
                        self._rotate_right(w)
                        w = x.parent.right
                    # Far child red
                    w.color = x.parent.color
                    x.parent.color = BLACK
                    w.right.color = BLACK
                    self._rotate_left(x.parent)
                    x = self._root
            else:
                # Mirror of the above, with "left" and "right" swapped
                w = x.parent.left
                if w.color == RED:
                    w.color = BLACK
                    x.parent.color = RED
                    self._rotate_right(x.parent)
                    w = x.parent.left
                if w.right.color == BLACK and w.left.color == BLACK:
                    w.color = RED
                    x = x.parent
                else:
                    if w.left.color == BLACK:
                        w.right.color = BLACK
                        w.color = RED
                        self._rotate_left(w)
                        w = x.parent.left
                    w.color = x.parent.color
                    x.parent.color = BLACK
                    w.left.color = BLACK
                    self._rotate_right(x.parent)
                    x = self._root
        x.color = BLACK

    # ------------------------------------------------------------------
    #   Validation
    # ------------------------------------------------------------------
    def validate(self) -> int:
        """
        Verify that the tree satisfies all red‑black invariants.

        Returns the black‑height of the root (the sentinel counts as one).
        Raises ``InvariantViolation`` with a descriptive message if
        something is broken.
        """
        return check_tree(self)

    def is_valid(self) -> bool:
        """Return True if every red‑black and ordering invariant holds."""
        try:
            check_tree(self)
        except InvariantViolation as exc:
            logger.debug("Red-black check failed: %s", exc)
            return False
        return True

    def _check_invariants(self) -> None:
        if CHECK_INVARIANTS:
            check_tree(self)

    # ------------------------------------------------------------------
    #   Read‑only structural accessors (for renderers)
    # ------------------------------------------------------------------
    @property
    def sentinel(self) -> Node:
        """The node that stands for "no child" / "no parent"."""
        return self._nil

    def root_node(self) -> Node:
        """Return the root node, or the sentinel when the tree is empty."""
        return self._root

    def left_child(self, node: Node) -> Node:
        """Return the left child of *node* (the sentinel if it has none)."""
        return node.left

    def right_child(self, node: Node) -> Node:
        """Return the right child of *node* (the sentinel if it has none)."""
        return node.right

    def is_red(self, node: Node) -> bool:
        """Return True if *node* is coloured RED."""
        return node.color == RED

    def node_key(self, node: Node) -> int:
        """Return the key stored in *node*."""
        return node.key
