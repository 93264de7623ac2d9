"""Move operations, the patch queue and the move applier.

A move relocates the node at one path so that it becomes a child of the
node at another path. It behaves like a remove at ``from_path`` followed by
an insert under ``to_path``, where ``to_path`` is read against the tree as
it looks after the removal.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from ..errors import InvalidPath, OutOfRange
from .adapter import ChildrenAdapter
from .resolver import PathResolver, TreePath, normalize_path

logger = logging.getLogger(__name__)

APPEND = -1


@dataclass(frozen=True)
class MoveOperation:
    """Move the node at from_path under the node at to_path.

    desired_index is the insert position in the target's children;
    None or APPEND (-1) appends.
    """
    from_path: TreePath
    to_path: TreePath
    desired_index: Optional[int] = APPEND

    def __post_init__(self):
        # frozen: normalized values go in through object.__setattr__
        object.__setattr__(self, "from_path", normalize_path(self.from_path, allow_empty=True))
        object.__setattr__(self, "to_path", normalize_path(self.to_path, allow_empty=True))
        index = self.desired_index
        if index is not None and (isinstance(index, bool) or not isinstance(index, int)):
            raise InvalidPath(f"desired_index must be an int or None, got {index!r}")

    @classmethod
    def create(cls,
               from_path: Sequence[int],
               to_path: Sequence[int],
               desired_index: Optional[int] = APPEND) -> 'MoveOperation':
        """Build an operation; paths may be any int sequence."""
        return cls(from_path, to_path, desired_index)

    @property
    def appends(self) -> bool:
        return self.desired_index is None or self.desired_index == APPEND

    def is_noop(self) -> bool:
        """True for moves that leave the tree untouched (no target, or onto itself)."""
        return not self.to_path or self.from_path == self.to_path


class PatchQueue:
    """Ordered buffer of moves collected during one interaction.

    The queue is a transient builder: produce() records moves, a
    MoveApplier.commit() applies and clears them, cancel() drops them.
    Used as a context manager, pending moves are dropped if the block
    raises.
    """

    def __init__(self):
        self._operations: List[MoveOperation] = []

    def produce(self,
                from_path: Sequence[int],
                to_path: Sequence[int],
                desired_index: Optional[int] = APPEND) -> MoveOperation:
        """Queue a move and return the recorded operation."""
        operation = MoveOperation.create(from_path, to_path, desired_index)
        self._operations.append(operation)
        return operation

    def push(self, operation: MoveOperation) -> None:
        """Queue an already built operation."""
        if not isinstance(operation, MoveOperation):
            raise TypeError(f"Expected a MoveOperation, got {type(operation).__name__}")
        self._operations.append(operation)

    @property
    def operations(self) -> Tuple[MoveOperation, ...]:
        return tuple(self._operations)

    def clear(self) -> None:
        self._operations.clear()

    def cancel(self) -> None:
        """Discard pending moves. Nothing was applied, so nothing is undone."""
        if self._operations:
            logger.debug("Discarding %d pending move(s)", len(self._operations))
        self.clear()

    def __len__(self) -> int:
        return len(self._operations)

    def __bool__(self) -> bool:
        return bool(self._operations)

    def __iter__(self) -> Iterator[MoveOperation]:
        return iter(tuple(self._operations))

    def __enter__(self) -> 'PatchQueue':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            self.cancel()
        return None

    def __repr__(self) -> str:
        return f"PatchQueue({list(self._operations)!r})"


class MoveApplier:
    """Applies move operations to a tree with structural sharing."""

    def __init__(self, adapter: ChildrenAdapter):
        self.adapter = adapter
        self.resolver = PathResolver(adapter)

    def apply(self, tree: Sequence[Any], operation: MoveOperation) -> Sequence[Any]:
        """Apply a single move and return the new tree.

        The input tree is returned as-is for no-op moves. Otherwise a new
        root list is returned in which only the nodes on the from/to chains
        are new objects.

        Raises:
            InvalidPath: If from_path is empty while to_path is not
            OutOfRange: If either path, or desired_index, is out of bounds
        """
        if operation.is_noop():
            logger.debug("Skipping no-op move %s", operation)
            return tree
        if not operation.from_path:
            raise InvalidPath("Cannot move from an empty path", operation.from_path)

        removal = self.resolver.locate(tree, operation.from_path)
        moved = removal.node
        del removal.siblings[removal.index]

        target = self.resolver.locate(removal.tree, operation.to_path)
        children = self.adapter.child_list(target.node)

        if operation.appends:
            children.append(moved)
        else:
            index = operation.desired_index
            if not 0 <= index <= len(children):
                raise OutOfRange(operation.to_path + (index,), len(operation.to_path),
                                 index, len(children))
            children.insert(index, moved)

        target.siblings[target.index] = self.adapter.with_children(target.node, children)
        logger.debug("Applied move %s -> %s at %s",
                     list(operation.from_path), list(operation.to_path),
                     "end" if operation.appends else operation.desired_index)
        return target.tree

    def commit(self, tree: Sequence[Any], queue: PatchQueue) -> Sequence[Any]:
        """Apply every queued move in order and clear the queue.

        Each move sees the tree produced by the previous one. If a move
        fails the error propagates and the queue is left intact; the
        caller's tree is never modified either way.
        """
        result = tree
        for operation in queue:
            result = self.apply(result, operation)
        logger.debug("Committed %d move(s)", len(queue))
        queue.clear()
        return result
