"""Tree traversal strategies for TreePatchLib.

Traversers walk a root list of nodes through a ChildrenAdapter and yield
(path, node) pairs. The paths they yield are exactly the paths accepted by
the resolver and the move applier, which is how the presentation layer maps
a row under the cursor to a move operation.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Any, Callable, Collection, Deque, Hashable, Iterator, Optional, Sequence, Tuple

from .adapter import ChildrenAdapter
from .resolver import TreePath


class TreeTraverser(ABC):
    """Abstract base class for tree traversal strategies."""

    def __init__(self, adapter: ChildrenAdapter):
        """Initialize traverser with an adapter.

        Args:
            adapter: ChildrenAdapter for reading child lists
        """
        self.adapter = adapter

    @abstractmethod
    def traverse(self,
                 tree: Sequence[Any],
                 max_depth: Optional[int] = None) -> Iterator[Tuple[TreePath, Any]]:
        """Traverse every root of tree.

        Args:
            tree: Root sequence of nodes
            max_depth: Deepest level to visit (0 = roots only, None = unlimited)

        Yields:
            Tuples of (path, node)
        """
        pass

    def _should_explore(self, depth: int, max_depth: Optional[int]) -> bool:
        if max_depth is None:
            return True
        return depth < max_depth


class DepthFirstTraverser(TreeTraverser):
    """Pre-order traversal: a node, then its subtree, then its next sibling.

    This is the order rows appear in a rendered tree view.
    """

    def traverse(self,
                 tree: Sequence[Any],
                 max_depth: Optional[int] = None) -> Iterator[Tuple[TreePath, Any]]:
        # Explicit stack so deep trees don't hit the recursion limit
        stack = [((index,), node) for index, node in enumerate(tree)]
        stack.reverse()

        while stack:
            path, node = stack.pop()
            yield (path, node)

            if self._should_explore(len(path) - 1, max_depth):
                children = self.adapter.get_children(node) or ()
                for index in range(len(children) - 1, -1, -1):
                    stack.append((path + (index,), children[index]))


class BreadthFirstTraverser(TreeTraverser):
    """Level-order traversal: all roots, then all depth-1 nodes, and so on."""

    def traverse(self,
                 tree: Sequence[Any],
                 max_depth: Optional[int] = None) -> Iterator[Tuple[TreePath, Any]]:
        queue: Deque[Tuple[TreePath, Any]] = deque(
            ((index,), node) for index, node in enumerate(tree)
        )

        while queue:
            path, node = queue.popleft()
            yield (path, node)

            if self._should_explore(len(path) - 1, max_depth):
                for index, child in enumerate(self.adapter.get_children(node) or ()):
                    queue.append((path + (index,), child))


def iter_keys(tree: Sequence[Any],
              adapter: ChildrenAdapter,
              key: Callable[[Any], Hashable]) -> Iterator[Hashable]:
    """Yield the key of every node in pre-order."""
    for _, node in DepthFirstTraverser(adapter).traverse(tree):
        yield key(node)


def find_path(tree: Sequence[Any],
              key_value: Hashable,
              adapter: ChildrenAdapter,
              key: Callable[[Any], Hashable]) -> Optional[TreePath]:
    """Return the path of the first node whose key equals key_value, or None."""
    for path, node in DepthFirstTraverser(adapter).traverse(tree):
        if key(node) == key_value:
            return path
    return None


def visible_nodes(tree: Sequence[Any],
                  adapter: ChildrenAdapter,
                  key: Callable[[Any], Hashable],
                  expanded: Collection[Hashable]) -> Iterator[Tuple[TreePath, Any]]:
    """Yield the rows a tree view shows: roots, plus children of expanded nodes."""
    stack = [((index,), node) for index, node in enumerate(tree)]
    stack.reverse()

    while stack:
        path, node = stack.pop()
        yield (path, node)

        if key(node) in expanded:
            children = adapter.get_children(node) or ()
            for index in range(len(children) - 1, -1, -1):
                stack.append((path + (index,), children[index]))


def create_traverser(strategy: str, adapter: ChildrenAdapter) -> TreeTraverser:
    """Create a traverser instance by strategy name.

    Args:
        strategy: Name of traversal strategy (dfs, bfs...)
        adapter: ChildrenAdapter for the node type

    Returns:
        TreeTraverser instance

    Raises:
        ValueError: If strategy name is not recognized
    """
    strategies = {
        'dfs': DepthFirstTraverser,
        'dfs_pre': DepthFirstTraverser,
        'depth_first': DepthFirstTraverser,
        'bfs': BreadthFirstTraverser,
        'breadth_first': BreadthFirstTraverser,
        'level': BreadthFirstTraverser,
    }

    strategy_lower = strategy.lower()
    if strategy_lower not in strategies:
        raise ValueError(
            f"Unknown traversal strategy: {strategy}. "
            f"Choose from: {', '.join(strategies.keys())}"
        )

    return strategies[strategy_lower](adapter)
