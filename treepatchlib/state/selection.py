"""Multi-selection state keyed by node identity."""

from enum import Enum
from typing import Callable, FrozenSet, Hashable, Iterable, Iterator, Optional

from .cell import StateCell


class SelectionMode(Enum):
    """How many keys may be selected at once."""
    SINGLE = "single"
    MULTIPLE = "multiple"


class SelectionState:
    """Set of selected keys with add/remove/clear/select-all.

    In SINGLE mode every addition replaces the current selection, and bulk
    input (initial keys, select_all, replace, sync) keeps only its last key.
    That needs an ordered iterable: a set or frozenset holding more than one
    key is rejected with ValueError. All operations accept arbitrary keys,
    including keys no longer in the tree.
    """

    def __init__(self,
                 keys: Iterable[Hashable] = (),
                 mode: SelectionMode = SelectionMode.MULTIPLE,
                 on_change: Optional[Callable[[FrozenSet[Hashable]], None]] = None,
                 controlled: bool = False):
        self.mode = mode
        initial = self._restrict(keys)
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

    def is_selected(self, key: Hashable) -> bool:
        return key in self.keys

    def add(self, key: Hashable) -> FrozenSet[Hashable]:
        if key in self.keys:
            return self.keys
        if self.mode is SelectionMode.SINGLE:
            self._update(frozenset((key,)))
        else:
            self._update(self.keys | {key})
        return self.keys

    def remove(self, key: Hashable) -> FrozenSet[Hashable]:
        if key in self.keys:
            self._update(self.keys - {key})
        return self.keys

    def toggle(self, key: Hashable) -> FrozenSet[Hashable]:
        if key in self.keys:
            return self.remove(key)
        return self.add(key)

    def clear(self) -> FrozenSet[Hashable]:
        if self.keys:
            self._update(frozenset())
        return self.keys

    def select_all(self, keys: Iterable[Hashable]) -> FrozenSet[Hashable]:
        """Select every key given; in SINGLE mode only the last one is kept."""
        return self.replace(keys)

    def replace(self, keys: Iterable[Hashable]) -> FrozenSet[Hashable]:
        new_keys = self._restrict(keys)
        if new_keys != self.keys:
            self._update(new_keys)
        return self.keys

    def sync(self, keys: Iterable[Hashable]) -> None:
        self._cell.sync(self._restrict(keys))

    def _restrict(self, keys: Iterable[Hashable]) -> FrozenSet[Hashable]:
        if self.mode is SelectionMode.SINGLE:
            if isinstance(keys, (set, frozenset)) and len(keys) > 1:
                raise ValueError(
                    f"SINGLE selection needs ordered keys, got a set of {len(keys)}")
            keys = list(keys)
            return frozenset(keys[-1:])
        return frozenset(keys)

    def _update(self, keys: FrozenSet[Hashable]) -> None:
        self._cell.set(keys)

    def __contains__(self, key: Hashable) -> bool:
        return key in self.keys

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __repr__(self) -> str:
        return f"SelectionState({set(self.keys)!r}, mode={self.mode.value})"
