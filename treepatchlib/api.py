"""High-level API for TreePatchLib.

Simple functional wrappers for callers that keep their own state and just
want a new tree (or key set) back. They use the same components as the
TreeEngine.
"""

from typing import Any, Callable, Hashable, Iterable, Iterator, Optional, Sequence, Tuple

from .config import default_key
from .core.adapter import ChildrenAdapter, MappingAdapter
from .core.patch import APPEND, MoveApplier, MoveOperation, PatchQueue
from .core.resolver import PathResolver, Resolution, TreePath
from .core.traverser import create_traverser, find_path
from .state.expansion import open_key, toggle_key


def _adapter(adapter: Optional[ChildrenAdapter]) -> ChildrenAdapter:
    return adapter if adapter is not None else MappingAdapter("children")


def reorder(tree: Sequence[Any],
            from_path: Sequence[int],
            to_path: Sequence[int],
            desired_index: Optional[int] = APPEND,
            adapter: Optional[ChildrenAdapter] = None) -> Sequence[Any]:
    """Return a new tree with the node at from_path moved under to_path.

    Args:
        tree: Root list of nodes (never modified)
        from_path: Path of the node to move
        to_path: Path of the new parent, read after the removal
        desired_index: Position among the new siblings; -1/None appends
        adapter: Children accessor (dicts with a "children" entry by default)

    Returns:
        The new tree; untouched subtrees are shared with the input

    Example:
        >>> tree = [{"key": "a", "children": [{"key": "b"}]}, {"key": "d"}]
        >>> reorder(tree, [0, 0], [1])
        [{'key': 'a', 'children': []}, {'key': 'd', 'children': [{'key': 'b'}]}]
    """
    operation = MoveOperation.create(from_path, to_path, desired_index)
    return MoveApplier(_adapter(adapter)).apply(tree, operation)


def apply_moves(tree: Sequence[Any],
                moves: Iterable[Tuple],
                adapter: Optional[ChildrenAdapter] = None) -> Sequence[Any]:
    """Apply (from_path, to_path[, desired_index]) moves in order, all or nothing."""
    queue = PatchQueue()
    for move in moves:
        queue.produce(*move)
    return MoveApplier(_adapter(adapter)).commit(tree, queue)


def locate(tree: Sequence[Any],
           path: Sequence[int],
           adapter: Optional[ChildrenAdapter] = None) -> Resolution:
    """Resolve path with copy-on-write (see PathResolver.locate)."""
    return PathResolver(_adapter(adapter)).locate(tree, path)


def get_node(tree: Sequence[Any],
             path: Sequence[int],
             adapter: Optional[ChildrenAdapter] = None) -> Any:
    """Return the node at path without copying anything."""
    return PathResolver(_adapter(adapter)).get(tree, path)


def iter_tree(tree: Sequence[Any],
              strategy: str = "dfs",
              max_depth: Optional[int] = None,
              adapter: Optional[ChildrenAdapter] = None) -> Iterator[Tuple[TreePath, Any]]:
    """Yield (path, node) pairs in the requested order."""
    return create_traverser(strategy, _adapter(adapter)).traverse(tree, max_depth=max_depth)


def path_of(tree: Sequence[Any],
            key_value: Hashable,
            key: Callable[[Any], Hashable] = default_key,
            adapter: Optional[ChildrenAdapter] = None) -> Optional[TreePath]:
    """Path of the first node whose key equals key_value, or None."""
    return find_path(tree, key_value, _adapter(adapter), key)


__all__ = [
    'reorder',
    'apply_moves',
    'locate',
    'get_node',
    'iter_tree',
    'path_of',
    'toggle_key',
    'open_key',
]
