"""Tests for expansion and selection state."""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from treepatchlib import ExpansionState, SelectionState, SelectionMode, StateCell
from treepatchlib.api import open_key, toggle_key


class TestExpansionState(unittest.TestCase):

    def test_toggle_adds_then_removes(self):
        state = ExpansionState()
        self.assertEqual(state.toggle(5), frozenset({5}))
        self.assertEqual(state.toggle(5), frozenset())

    def test_toggle_is_an_involution(self):
        for start in (set(), {1}, {1, 2, 3}):
            for key in (1, 4, "x"):
                with self.subTest(start=start, key=key):
                    state = ExpansionState(start)
                    state.toggle(key)
                    state.toggle(key)
                    self.assertEqual(state.keys, frozenset(start))

    def test_open_is_idempotent(self):
        state = ExpansionState({1})
        once = state.open(2)
        twice = state.open(2)
        self.assertEqual(once, twice)
        self.assertEqual(state, {1, 2})

    def test_open_existing_key_does_not_notify(self):
        changes = []
        state = ExpansionState({1}, on_change=changes.append)
        state.open(1)
        state.close(7)
        self.assertEqual(changes, [])

    def test_notifications_carry_new_keys(self):
        changes = []
        state = ExpansionState(on_change=changes.append)
        state.toggle("a")
        state.open("b")
        state.close("a")
        self.assertEqual(changes, [frozenset({"a"}), frozenset({"a", "b"}), frozenset({"b"})])

    def test_unknown_keys_are_accepted(self):
        state = ExpansionState()
        state.toggle(("stale", 1))
        self.assertIn(("stale", 1), state)

    def test_controlled_state_waits_for_sync(self):
        changes = []
        state = ExpansionState({1}, on_change=changes.append, controlled=True)
        state.toggle(2)

        self.assertEqual(changes, [frozenset({1, 2})])
        self.assertEqual(state.keys, frozenset({1}))

        state.sync(changes[-1])
        self.assertEqual(state.keys, frozenset({1, 2}))

    def test_functional_helpers(self):
        self.assertEqual(toggle_key(set(), 5), {5})
        self.assertEqual(toggle_key({5}, 5), frozenset())
        self.assertEqual(open_key(open_key({1}, 2), 2), open_key({1}, 2))


class TestSelectionState(unittest.TestCase):

    def test_multiple_mode(self):
        state = SelectionState()
        state.add(1)
        state.add(2)
        self.assertEqual(state.keys, frozenset({1, 2}))
        state.remove(1)
        self.assertEqual(state.keys, frozenset({2}))
        state.clear()
        self.assertEqual(len(state), 0)

    def test_single_mode_replaces(self):
        state = SelectionState(mode=SelectionMode.SINGLE)
        state.add(1)
        state.add(2)
        self.assertEqual(state.keys, frozenset({2}))

    def test_single_mode_select_all_keeps_last(self):
        state = SelectionState(mode=SelectionMode.SINGLE)
        state.select_all(["a", "b", "c"])
        self.assertEqual(state.keys, frozenset({"c"}))

    def test_single_mode_initial_keys_keep_last(self):
        state = SelectionState(["x", "y", "z"], mode=SelectionMode.SINGLE)
        self.assertEqual(state.keys, frozenset({"z"}))
        state.replace(("p", "q"))
        self.assertEqual(state.keys, frozenset({"q"}))

    def test_single_mode_rejects_unordered_keys(self):
        with self.assertRaises(ValueError):
            SelectionState({"x", "y"}, mode=SelectionMode.SINGLE)
        state = SelectionState(frozenset({"x"}), mode=SelectionMode.SINGLE)
        self.assertEqual(state.keys, frozenset({"x"}))
        with self.assertRaises(ValueError):
            state.select_all(frozenset({1, 2}))
        self.assertEqual(state.keys, frozenset({"x"}))

    def test_toggle(self):
        state = SelectionState({1})
        state.toggle(1)
        state.toggle(3)
        self.assertEqual(state.keys, frozenset({3}))

    def test_no_notification_without_change(self):
        changes = []
        state = SelectionState({1}, on_change=changes.append)
        state.add(1)
        state.remove(9)
        state.replace([1])
        self.assertEqual(changes, [])
        state.clear()
        self.assertEqual(changes, [frozenset()])

    def test_is_selected(self):
        state = SelectionState(["x"])
        self.assertTrue(state.is_selected("x"))
        self.assertFalse(state.is_selected("y"))


class TestStateCell(unittest.TestCase):

    def test_uncontrolled_stores_updates(self):
        seen = []
        cell = StateCell(initial=1, on_change=seen.append)
        cell.set(2)
        self.assertEqual(cell.value, 2)
        self.assertEqual(seen, [2])
        self.assertFalse(cell.controlled)

    def test_controlled_only_notifies(self):
        seen = []
        cell = StateCell(value=1, on_change=seen.append)
        cell.set(2)
        self.assertEqual(cell.value, 1)
        self.assertEqual(seen, [2])
        self.assertTrue(cell.controlled)

    def test_listener_errors_propagate(self):
        def boom(value):
            raise RuntimeError("listener failed")

        cell = StateCell(initial=0, on_change=boom)
        with self.assertRaises(RuntimeError):
            cell.set(1)


if __name__ == "__main__":
    unittest.main()
