"""Property-based tests for BinaryTree."""

import sys
import os
import unittest

from hypothesis import given, strategies as st

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from binary_tree import BinaryTree

values = st.lists(st.integers(min_value=-50, max_value=50), max_size=60)


def _naive(items):
    tree = BinaryTree()
    for item in items:
        tree.naive_insert(item)
    return tree


def _bounded(tree, low=None, high=None):
    """Every value under ``tree`` lies in [low, high)."""
    return all(
        (low is None or value >= low) and (high is None or value < high)
        for value in tree
    )


def _ordered_everywhere(tree):
    if tree.is_empty():
        return True
    return (
        _bounded(tree.left, high=tree.value)
        and _bounded(tree.right, low=tree.value)
        and _ordered_everywhere(tree.left)
        and _ordered_everywhere(tree.right)
    )


class TestBinaryTreeProperties(unittest.TestCase):

    @given(values)
    def test_invariant_holds_after_insertion(self, items):
        tree = BinaryTree.from_values(items)
        self.assertTrue(tree.is_valid())
        self.assertTrue(_ordered_everywhere(tree))

    @given(values)
    def test_in_order_is_sorted_multiset(self, items):
        seen = []
        BinaryTree.from_values(items).traverse_in_order(seen.append)
        self.assertEqual(seen, sorted(items))

    @given(values)
    def test_count_is_number_of_insertions(self, items):
        self.assertEqual(BinaryTree.from_values(items).count(), len(items))
        self.assertEqual(_naive(items).count(), len(items))

    @given(values, st.integers(min_value=-60, max_value=60))
    def test_search_finds_exactly_inserted_values(self, items, probe):
        tree = BinaryTree.from_values(items)
        found = tree.search(probe)
        if probe in items:
            self.assertIsNotNone(found)
            self.assertEqual(found.value, probe)
        else:
            self.assertIsNone(found)

    @given(values)
    def test_insertion_strategies_agree(self, items):
        naive = _naive(items)
        persistent = BinaryTree.from_values(items)
        self.assertEqual(naive, persistent)
        self.assertEqual(naive.pre_order(), persistent.pre_order())
        self.assertEqual(str(naive), str(persistent))

    @given(values, values)
    def test_old_versions_survive_later_insertions(self, first, second):
        tree = BinaryTree.from_values(first)
        before = tree.copy()
        for item in second:
            tree.insert(item)
        self.assertEqual(before.count(), len(first))
        self.assertEqual(before.in_order(), sorted(first))
        self.assertEqual(tree.in_order(), sorted(first + second))

    @given(values, values)
    def test_naive_insert_respects_shared_structure(self, first, second):
        tree = _naive(first)
        before = tree.copy()
        for item in second:
            tree.naive_insert(item)
        self.assertEqual(before, BinaryTree.from_values(first))
        self.assertEqual(tree, BinaryTree.from_values(first + second))

    @given(values)
    def test_traversals_visit_every_value_once(self, items):
        tree = BinaryTree.from_values(items)
        for order in (tree.pre_order(), tree.post_order(), list(tree)):
            self.assertEqual(sorted(order), sorted(items))

    @given(st.lists(st.integers(), min_size=1, max_size=40))
    def test_pre_order_starts_with_first_insertion(self, items):
        tree = BinaryTree.from_values(items)
        self.assertEqual(tree.pre_order()[0], items[0])
        self.assertEqual(tree.post_order()[-1], items[0])


if __name__ == "__main__":
    unittest.main()
