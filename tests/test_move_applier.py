"""Tests for applying move operations.

Includes the reference scenarios, structural sharing by identity, inverse
moves and the no-partial-application guarantee.
"""

import copy
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from treepatchlib import (
    MappingAdapter,
    MoveApplier,
    MoveOperation,
    InvalidPath,
    OutOfRange,
)


def node(key, *children):
    return {"key": key, "children": list(children)}


def keys(tree):
    """Nested (key, [children]) view for content comparison."""
    return [(n["key"], keys(n.get("children") or [])) for n in tree]


@pytest.fixture
def applier():
    return MoveApplier(MappingAdapter("children"))


@pytest.fixture
def tree():
    # [A{children:[B, C]}, D{children:[]}]
    return [node("A", node("B"), node("C")), node("D")]


def move(from_path, to_path, desired_index=-1):
    return MoveOperation.create(from_path, to_path, desired_index)


class TestScenarios:
    """Concrete reorder scenarios."""

    def test_move_child_to_other_root_appends(self, applier, tree):
        result = applier.apply(tree, move([0, 0], [1], None))

        assert keys(result) == [("A", [("C", [])]), ("D", [("B", [])])]

    def test_move_root_into_first_position_of_other_root(self, applier, tree):
        result = applier.apply(tree, move([1], [0], 0))

        assert keys(result) == [("A", [("D", []), ("B", []), ("C", [])])]
        assert len(result) == 1

    def test_insert_in_middle(self, applier, tree):
        result = applier.apply(tree, move([1], [0], 1))
        assert keys(result) == [("A", [("B", []), ("D", []), ("C", [])])]

    def test_insert_at_length_appends(self, applier, tree):
        result = applier.apply(tree, move([1], [0], 2))
        assert keys(result) == [("A", [("B", []), ("C", []), ("D", [])])]

    def test_to_path_read_after_removal(self, applier):
        tree = [node("A"), node("B"), node("C")]
        # after removing A, [1] is C
        result = applier.apply(tree, move([0], [1]))
        assert keys(result) == [("B", []), ("C", [("A", [])])]

    def test_target_without_children_field(self, applier):
        tree = [{"key": "A", "payload": 1}, {"key": "B"}]
        result = applier.apply(tree, move([1], [0]))

        assert result == [{"key": "A", "payload": 1, "children": [{"key": "B"}]}]
        assert "children" not in tree[0]

    def test_reorder_within_same_parent(self, applier):
        tree = [node("P", node("a"), node("b"), node("c"))]
        # move c in front of a: remove [0,2], insert under [0] at 0
        result = applier.apply(tree, move([0, 2], [0], 0))
        assert keys(result) == [("P", [("c", []), ("a", []), ("b", [])])]

    def test_deep_move(self, applier):
        tree = [node("A", node("B", node("C", node("X")))), node("D", node("E"))]
        result = applier.apply(tree, move([0, 0, 0, 0], [1, 0], 0))
        assert keys(result) == [
            ("A", [("B", [("C", [])])]),
            ("D", [("E", [("X", [])])]),
        ]


class TestNoOps:

    def test_same_path_returns_input(self, applier, tree):
        for path in ([0], [0, 1], [1]):
            assert applier.apply(tree, move(path, path)) is tree

    def test_empty_target_returns_input(self, applier, tree):
        assert applier.apply(tree, move([0, 0], [])) is tree

    def test_empty_source_rejected(self, applier, tree):
        with pytest.raises(InvalidPath):
            applier.apply(tree, move([], [1]))


class TestStructuralSharing:

    def test_untouched_nodes_keep_identity(self, applier):
        left = node("L", node("L1", node("L11")), node("L2"))
        mid = node("M", node("M1"))
        right = node("R", node("R1"), node("R2"))
        tree = [left, mid, right]

        result = applier.apply(tree, move([2, 0], [0, 1]))

        # unrelated root
        assert result[1] is mid
        # siblings on the chains
        assert result[0]["children"][0] is left["children"][0]
        assert result[2]["children"][0] is right["children"][1]
        # moved node's subtree
        moved = result[0]["children"][1]["children"][0]
        assert moved["key"] == "R1"
        assert moved["children"] is right["children"][0]["children"]

    def test_chain_nodes_are_fresh(self, applier, tree):
        result = applier.apply(tree, move([0, 0], [1]))

        assert result is not tree
        assert result[0] is not tree[0]
        assert result[1] is not tree[1]
        assert result[1]["children"][0] is not tree[0]["children"][0]

    def test_input_never_mutated(self, applier, tree):
        before = copy.deepcopy(tree)
        applier.apply(tree, move([0, 1], [1], 0))
        applier.apply(tree, move([1], [0], 0))
        assert tree == before


class TestInverse:

    def test_inverse_restores_ordering(self, applier, tree):
        moved = applier.apply(tree, move([0, 0], [1]))
        restored = applier.apply(moved, move([1, 0], [0], 0))
        assert keys(restored) == keys(tree)

    def test_inverse_within_parent(self, applier):
        tree = [node("P", node("a"), node("b"), node("c"))]
        moved = applier.apply(tree, move([0, 0], [0]))
        assert keys(moved) == [("P", [("b", []), ("c", []), ("a", [])])]

        restored = applier.apply(moved, move([0, 2], [0], 0))
        assert keys(restored) == keys(tree)

    def test_empty_target_cannot_reach_root_level(self, applier, tree):
        moved = applier.apply(tree, move([1], [0], 0))
        assert applier.apply(moved, move([0, 0], [], None)) is moved


class TestFailures:

    def test_out_of_range_source(self, applier, tree):
        before = copy.deepcopy(tree)
        with pytest.raises(OutOfRange):
            applier.apply(tree, move([0, 5], [1]))
        assert tree == before

    def test_out_of_range_target_after_removal(self, applier, tree):
        before = copy.deepcopy(tree)
        # [1] exists before removing root 0, not after
        with pytest.raises(OutOfRange):
            applier.apply(tree, move([0], [1]))
        assert tree == before

    def test_desired_index_past_end(self, applier, tree):
        with pytest.raises(OutOfRange) as excinfo:
            applier.apply(tree, move([1], [0], 3))
        assert excinfo.value.index == 3
        assert excinfo.value.size == 2

    def test_invalid_desired_index_type(self):
        with pytest.raises(InvalidPath):
            move([0], [1], "0")


class TestDirectConstruction:
    """MoveOperation built without create() behaves the same."""

    def test_list_paths_are_normalized(self):
        op = MoveOperation([0, 1], [2], 0)
        assert op.from_path == (0, 1)
        assert op.to_path == (2,)
        assert op == MoveOperation.create((0, 1), (2,), 0)

    def test_onto_itself_with_mixed_sequences_is_noop(self, applier, tree):
        assert applier.apply(tree, MoveOperation([0, 1], (0, 1))) is tree

    def test_desired_index_past_end_raises_out_of_range(self, applier, tree):
        with pytest.raises(OutOfRange) as excinfo:
            applier.apply(tree, MoveOperation([1], [0], 9))
        assert excinfo.value.path == (0, 9)

    def test_bad_values_rejected(self):
        with pytest.raises(InvalidPath):
            MoveOperation([0], [1], True)
        with pytest.raises(InvalidPath):
            MoveOperation("01", [1])
