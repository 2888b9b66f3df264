#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
test_rb_validation.py
---------------------

Corrupts trees by hand and checks that the invariant checker reports each
kind of damage, terminates on degenerate shapes, and that the optional
post-operation check fails fast.
"""

import unittest

import red_black_tree
from red_black_tree import RedBlackTree
from rb_errors import InvariantViolation
from rb_node import BLACK, RED, Node, make_sentinel
from rb_validation import check_tree, max_depth


def _build():
    """Return the tree 10(B) -> 5(B), 15(B) -> 2(R), 7(R), 12(R), 20(R)."""
    return RedBlackTree([10, 5, 15, 2, 7, 12, 20])


class TestSentinel(unittest.TestCase):
    def test_make_sentinel_links_to_itself(self):
        nil = make_sentinel()
        self.assertIs(nil.left, nil)
        self.assertIs(nil.right, nil)
        self.assertIs(nil.parent, nil)
        self.assertEqual(nil.color, BLACK)

    def test_node_repr(self):
        self.assertEqual(repr(Node(3, RED)), "<R 3>")
        self.assertEqual(repr(Node(4)), "<B 4>")


class TestCheckTree(unittest.TestCase):
    def setUp(self):
        self.tree = _build()
        self.root = self.tree.root_node()
        self.five = self.root.left
        self.two = self.five.left
        self.seven = self.five.right

    def test_valid_tree(self):
        self.assertTrue(self.tree.is_valid())
        self.assertEqual(check_tree(self.tree), 3)

    def test_red_root(self):
        self.root.color = RED
        self.assertFalse(self.tree.is_valid())
        with self.assertRaisesRegex(InvariantViolation, "Root is not black"):
            self.tree.validate()
        # Still an AssertionError for callers that treat it as one
        with self.assertRaises(AssertionError):
            self.tree.validate()

    def test_red_red(self):
        self.five.color = RED
        with self.assertRaisesRegex(InvariantViolation, "red child"):
            self.tree.validate()

    def test_black_height_mismatch(self):
        self.two.color = BLACK
        with self.assertRaisesRegex(InvariantViolation, "Black-height mismatch"):
            self.tree.validate()

    def test_ordering(self):
        self.two.key = 50
        with self.assertRaisesRegex(InvariantViolation, "Ordering violated"):
            self.tree.validate()

    def test_ordering_at_integer_extremes(self):
        tree = RedBlackTree([-(2**63), 0, 2**63 - 1])
        self.assertTrue(tree.is_valid())

    def test_broken_parent_link(self):
        self.seven.parent = self.root
        with self.assertRaisesRegex(InvariantViolation, "point back"):
            self.tree.validate()

    def test_cycle(self):
        self.two.left = self.root
        self.assertFalse(self.tree.is_valid())

    def test_more_nodes_than_recorded(self):
        tree = RedBlackTree([10, 5, 15])
        tree._size -= 1
        with self.assertRaisesRegex(InvariantViolation, "nodes reachable"):
            tree.validate()

    def test_fewer_nodes_than_recorded(self):
        tree = RedBlackTree([10, 5, 15])
        tree._size += 1
        with self.assertRaisesRegex(InvariantViolation, "are reachable"):
            tree.validate()

    def test_none_child_link(self):
        self.two.left = None
        self.assertFalse(self.tree.is_valid())
        with self.assertRaisesRegex(InvariantViolation, "broken child link"):
            self.tree.validate()

    def test_non_node_child_link(self):
        self.root.right = object()
        self.assertFalse(self.tree.is_valid())
        with self.assertRaisesRegex(InvariantViolation, "broken child link"):
            self.tree.validate()

    def test_reattached_deleted_node(self):
        tree = RedBlackTree([10, 5, 15, 2])
        five = tree.root_node().left
        stale = five.left
        tree.delete(2)
        five.left = stale
        stale.parent = five
        self.assertFalse(tree.is_valid())
        with self.assertRaisesRegex(InvariantViolation, "broken child link"):
            tree.validate()

    def test_broken_root_link(self):
        tree = RedBlackTree([1])
        tree._root = None
        self.assertFalse(tree.is_valid())

    def test_invalid_colour(self):
        self.five.color = None
        with self.assertRaisesRegex(InvariantViolation, "no valid colour"):
            self.tree.validate()

    def test_red_sentinel(self):
        self.tree.sentinel.color = RED
        with self.assertRaisesRegex(InvariantViolation, "Sentinel is not black"):
            self.tree.validate()

    def test_empty_tree_with_wrong_size(self):
        tree = RedBlackTree()
        tree._size = 2
        with self.assertRaisesRegex(InvariantViolation, "records 2 nodes"):
            tree.validate()

    def test_degenerate_chain_hits_depth_cap(self):
        tree = RedBlackTree()
        nil = tree.sentinel
        size = 5_000
        parent = nil
        for key in range(size):
            node = Node(key, BLACK, nil, nil, parent)
            if parent is nil:
                tree._root = node
            else:
                parent.right = node
            parent = node
        tree._size = size

        with self.assertRaisesRegex(InvariantViolation, "exceeds the bound"):
            tree.validate()
        self.assertFalse(tree.is_valid())

    def test_is_valid_logs_reason(self):
        self.root.color = RED
        with self.assertLogs("red_black_tree", level="DEBUG") as cm:
            self.assertFalse(self.tree.is_valid())
        self.assertIn("Root is not black", cm.output[0])

    def test_max_depth_bound(self):
        self.assertEqual(max_depth(0), 2)
        self.assertEqual(max_depth(1), 4)
        self.assertEqual(max_depth(7), 8)
        # Sequential inserts build the deepest shapes; they stay in bounds.
        tree = RedBlackTree(range(1000))
        self.assertTrue(tree.is_valid())


class TestStructuralPrimitives(unittest.TestCase):
    def test_rotate_around_missing_child_fails_fast(self):
        tree = RedBlackTree([1])
        with self.assertRaises(RuntimeError):
            tree._rotate_left(tree.root_node())
        with self.assertRaises(RuntimeError):
            tree._rotate_right(tree.root_node())

    def test_rotation_keeps_in_order_sequence(self):
        tree = RedBlackTree([10, 5, 15, 12, 20])
        root = tree.root_node()
        tree._rotate_left(root)
        self.assertEqual(tree.root_key(), 15)
        self.assertEqual(list(tree), [5, 10, 12, 15, 20])
        self.assertIs(tree.root_node().parent, tree.sentinel)
        self.assertIs(root.right.parent, root)
        tree._rotate_right(tree.root_node())
        self.assertIs(tree.root_node(), root)
        self.assertEqual(list(tree), [5, 10, 12, 15, 20])

    def test_transplant_leaves_children_alone(self):
        tree = RedBlackTree([10, 5, 15])
        root = tree.root_node()
        five = root.left
        tree._transplant(root, five)
        self.assertIs(tree.root_node(), five)
        self.assertIs(five.parent, tree.sentinel)
        self.assertIs(five.left, tree.sentinel)
        self.assertIs(five.right, tree.sentinel)


class TestCheckInvariantsFlag(unittest.TestCase):
    def setUp(self):
        self._saved = red_black_tree.CHECK_INVARIANTS

    def tearDown(self):
        red_black_tree.CHECK_INVARIANTS = self._saved

    def _corrupted(self):
        tree = RedBlackTree([10, 5, 15])
        tree.root_node().left.key = 50
        return tree

    def test_enabled_check_fails_fast(self):
        red_black_tree.CHECK_INVARIANTS = True
        tree = self._corrupted()
        with self.assertRaises(InvariantViolation):
            tree.insert(1)

    def test_disabled_check_stays_silent(self):
        red_black_tree.CHECK_INVARIANTS = False
        tree = self._corrupted()
        tree.insert(1)
        self.assertFalse(tree.is_valid())


if __name__ == "__main__":
    unittest.main(verbosity=2)
