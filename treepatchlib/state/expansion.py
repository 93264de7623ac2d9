"""Expansion state: the set of node keys currently shown open."""

from typing import Callable, FrozenSet, Hashable, Iterable, Iterator, Optional

from .cell import StateCell


def toggle_key(keys: Iterable[Hashable], key: Hashable) -> FrozenSet[Hashable]:
    """Symmetric difference of keys with {key}."""
    return frozenset(keys) ^ {key}


def open_key(keys: Iterable[Hashable], key: Hashable) -> FrozenSet[Hashable]:
    """keys with key added; unchanged if already present."""
    keys = frozenset(keys)
    if key in keys:
        return keys
    return keys | {key}


class ExpansionState:
    """Key-indexed expansion set, independent of tree shape.

    Keys are identities, not positions, so the state survives reorders.
    Operations are total: unknown or stale keys are accepted silently.
    """

    def __init__(self,
                 keys: Iterable[Hashable] = (),
                 on_change: Optional[Callable[[FrozenSet[Hashable]], None]] = None,
                 controlled: bool = False):
        initial = frozenset(keys)
        if controlled:
            self._cell = StateCell(value=initial, on_change=on_change)
        else:
            self._cell = StateCell(initial=initial, on_change=on_change)

    @property
    def keys(self) -> FrozenSet[Hashable]:
        return self._cell.value

    @property
    def controlled(self) -> bool:
        return self._cell.controlled

    def toggle(self, key: Hashable) -> FrozenSet[Hashable]:
        """Collapse key if expanded, expand it otherwise."""
        self._cell.set(toggle_key(self.keys, key))
        return self.keys

    def open(self, key: Hashable) -> FrozenSet[Hashable]:
        if key not in self.keys:
            self._cell.set(open_key(self.keys, key))
        return self.keys

    def close(self, key: Hashable) -> FrozenSet[Hashable]:
        if key in self.keys:
            self._cell.set(self.keys - {key})
        return self.keys

    def sync(self, keys: Iterable[Hashable]) -> None:
        self._cell.sync(frozenset(keys))

    def __contains__(self, key: Hashable) -> bool:
        return key in self.keys

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ExpansionState):
            return self.keys == other.keys
        if isinstance(other, (set, frozenset)):
            return self.keys == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ExpansionState({set(self.keys)!r})"
