"""Tree engine façade for TreePatchLib.

The TreeEngine bundles the three pieces of tree-view state (the items, the
expanded keys and the selected keys) and exposes the operations a
presentation layer calls: reorder, toggle, open and the selection
pass-throughs. Every call is synchronous and returns the new snapshot.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Hashable, Iterable, Optional, Sequence

from .config import TreeConfig
from .core.patch import APPEND, MoveApplier, PatchQueue
from .core.traverser import find_path, iter_keys, visible_nodes
from .errors import ConfigurationError, TreePatchError
from .state.cell import StateCell
from .state.expansion import ExpansionState
from .state.selection import SelectionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeSnapshot:
    """Read-only view of the engine state after a call.

    tree is the engine's own root tuple, so it cannot be appended to or
    reordered in place. The nodes inside are shared with the engine and
    must not be mutated.
    """
    tree: Sequence[Any]
    expanded_keys: FrozenSet[Hashable]
    selected_keys: FrozenSet[Hashable]


class ReorderSession:
    """Moves collected during one gesture, committed as a single update.

    Nothing reaches the engine until commit(), so observers never see the
    intermediate trees. As a context manager the session commits on a
    clean exit and is discarded if the block raises.

    Example:
        with engine.session() as session:
            session.move([0, 1], [2])
            session.move([1], [0], 0)
    """

    def __init__(self, engine: 'TreeEngine'):
        self._engine = engine
        self.queue = PatchQueue()
        self.closed = False

    def move(self,
             from_path: Sequence[int],
             to_path: Sequence[int],
             desired_index: Optional[int] = APPEND) -> 'ReorderSession':
        if self.closed:
            raise TreePatchError("Cannot add moves to a committed or cancelled session")
        self.queue.produce(from_path, to_path, desired_index)
        return self

    def commit(self) -> TreeSnapshot:
        snapshot = self._engine._commit(self.queue)
        self.closed = True
        return snapshot

    def cancel(self) -> None:
        self.queue.cancel()
        self.closed = True

    def __len__(self) -> int:
        return len(self.queue)

    def __enter__(self) -> 'ReorderSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.cancel()
        elif not self.closed:
            self.commit()
        return None


class TreeEngine:
    """Façade over the patch engine and the expansion/selection states.

    Each piece of state is uncontrolled by default: the engine stores
    updates and reports them through the matching on_*_change listener.
    With controlled=True the engine only reports; the caller owns the state
    and pushes accepted values back with sync().
    """

    def __init__(self,
                 items: Optional[Sequence[Any]] = None,
                 config: Optional[TreeConfig] = None,
                 expanded_keys: Iterable[Hashable] = (),
                 selected_keys: Iterable[Hashable] = (),
                 on_items_change: Optional[Callable[[Sequence[Any]], None]] = None,
                 on_expanded_change: Optional[Callable[[FrozenSet[Hashable]], None]] = None,
                 on_selection_change: Optional[Callable[[FrozenSet[Hashable]], None]] = None,
                 controlled: bool = False):
        """
        Args:
            items: Root nodes, stored as a tuple (empty if omitted)
            config: Adapter, key function, selection mode and error policy
            expanded_keys: Initially expanded keys
            selected_keys: Initially selected keys
            on_items_change: Called with every new tree
            on_expanded_change: Called with every new expanded key set
            on_selection_change: Called with every new selected key set
            controlled: Caller owns all three pieces of state

        Raises:
            ConfigurationError: If config.validate() reports problems
        """
        self.config = config or TreeConfig()
        config_errors = self.config.validate()
        if config_errors:
            raise ConfigurationError(f"Invalid configuration: {'; '.join(config_errors)}")

        tree = tuple(items) if items is not None else ()
        if controlled:
            self._items = StateCell(value=tree, on_change=on_items_change)
        else:
            self._items = StateCell(initial=tree, on_change=on_items_change)

        self.expansion = ExpansionState(expanded_keys, on_change=on_expanded_change,
                                        controlled=controlled)
        self.selection = SelectionState(selected_keys, mode=self.config.selection_mode,
                                        on_change=on_selection_change, controlled=controlled)
        self._applier = MoveApplier(self.config.adapter)

    # State access

    @property
    def items(self) -> Sequence[Any]:
        return self._items.value

    @property
    def expanded_keys(self) -> FrozenSet[Hashable]:
        return self.expansion.keys

    @property
    def selected_keys(self) -> FrozenSet[Hashable]:
        return self.selection.keys

    @property
    def snapshot(self) -> TreeSnapshot:
        return TreeSnapshot(self.items, self.expansion.keys, self.selection.keys)

    def sync(self,
             items: Optional[Sequence[Any]] = None,
             expanded_keys: Optional[Iterable[Hashable]] = None,
             selected_keys: Optional[Iterable[Hashable]] = None) -> TreeSnapshot:
        """Push caller-owned state into the engine without notifications."""
        if items is not None:
            self._items.sync(tuple(items))
        if expanded_keys is not None:
            self.expansion.sync(expanded_keys)
        if selected_keys is not None:
            self.selection.sync(selected_keys)
        return self.snapshot

    # Reordering

    def reorder(self,
                from_path: Sequence[int],
                to_path: Sequence[int],
                desired_index: Optional[int] = APPEND) -> TreeSnapshot:
        """Move the node at from_path under the node at to_path.

        Builds a one-move queue and commits it immediately.

        Args:
            from_path: Path of the node to move
            to_path: Path of the new parent, read after the removal
            desired_index: Position among the new siblings; -1/None appends

        Returns:
            The snapshot after the move

        Raises:
            InvalidPath, OutOfRange: Under the default FailFastPolicy
        """
        queue = PatchQueue()
        queue.produce(from_path, to_path, desired_index)
        return self._commit(queue)

    def session(self) -> ReorderSession:
        """Start a batch of moves that is committed as one update."""
        return ReorderSession(self)

    def _commit(self, queue: PatchQueue) -> TreeSnapshot:
        tree = self.items
        operations = queue.operations
        try:
            new_tree = self._applier.commit(tree, queue)
        except TreePatchError as error:
            new_tree = self.config.error_policy.handle(error, operations, tree)
            queue.cancel()

        if new_tree is not tree:
            logger.debug("Tree updated by %d move(s)", len(operations))
            self._items.set(tuple(new_tree))
        return self.snapshot

    # Expansion

    def toggle(self, key: Hashable) -> TreeSnapshot:
        self.expansion.toggle(key)
        return self.snapshot

    def open(self, key: Hashable) -> TreeSnapshot:
        self.expansion.open(key)
        return self.snapshot

    def close(self, key: Hashable) -> TreeSnapshot:
        self.expansion.close(key)
        return self.snapshot

    # Selection pass-through

    def select(self, key: Hashable) -> TreeSnapshot:
        self.selection.add(key)
        return self.snapshot

    def deselect(self, key: Hashable) -> TreeSnapshot:
        self.selection.remove(key)
        return self.snapshot

    def toggle_selection(self, key: Hashable) -> TreeSnapshot:
        self.selection.toggle(key)
        return self.snapshot

    def select_all(self) -> TreeSnapshot:
        """Select every key in the current tree."""
        self.selection.select_all(iter_keys(self.items, self.config.adapter, self.config.key))
        return self.snapshot

    def clear_selection(self) -> TreeSnapshot:
        self.selection.clear()
        return self.snapshot

    # Lookups for the presentation layer

    def path_of(self, key: Hashable):
        """Current path of the node with this key, or None."""
        return find_path(self.items, key, self.config.adapter, self.config.key)

    def visible(self):
        """(path, node) rows visible with the current expansion."""
        return list(visible_nodes(self.items, self.config.adapter, self.config.key,
                                  self.expansion.keys))

    def __repr__(self) -> str:
        return (f"TreeEngine(roots={len(self.items)}, expanded={len(self.expanded_keys)}, "
                f"selected={len(self.selected_keys)})")
