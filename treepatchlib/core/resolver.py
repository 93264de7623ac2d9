"""Copy-on-write path resolution for TreePatchLib.

A path is a tuple of indices, root index first. Resolving a path copies
only the containers and nodes along that path; every sibling and every
unrelated subtree is shared with the input tree.
"""

import logging
from typing import Any, List, NamedTuple, Optional, Sequence, Tuple

from ..errors import InvalidPath, OutOfRange
from .adapter import ChildrenAdapter

logger = logging.getLogger(__name__)

TreePath = Tuple[int, ...]


def normalize_path(path: Sequence[int], allow_empty: bool = False) -> TreePath:
    """Convert a path-like sequence to a tuple of ints.

    Args:
        path: Sequence of indices (list, tuple...)
        allow_empty: Accept an empty path instead of raising

    Returns:
        The path as a tuple

    Raises:
        InvalidPath: If the path is None, empty (unless allowed), or holds
            anything other than ints
    """
    if path is None or isinstance(path, (str, bytes)):
        raise InvalidPath(f"Path must be a sequence of ints, got {path!r}")
    try:
        items = tuple(path)
    except TypeError:
        raise InvalidPath(f"Path must be a sequence of ints, got {path!r}") from None

    for item in items:
        # bool is an int subclass but never a meaningful index
        if isinstance(item, bool) or not isinstance(item, int):
            raise InvalidPath(f"Path elements must be ints, got {item!r}", items)

    if not items and not allow_empty:
        raise InvalidPath("Path must not be empty", items)
    return items


class Resolution(NamedTuple):
    """Result of PathResolver.locate.

    tree is the new working root list. node is the (copied) located node,
    parent its (copied) parent or None at root level, index its position in
    siblings. siblings is the working list that holds node: the root list or
    the parent's freshly copied child list. Both lists are owned by the
    working tree, so callers may edit them in place.
    """
    tree: List[Any]
    node: Any
    parent: Optional[Any]
    index: int
    siblings: List[Any]


class PathResolver:
    """Locates nodes by path while duplicating only the affected chain."""

    def __init__(self, adapter: ChildrenAdapter):
        self.adapter = adapter

    def locate(self, tree: Sequence[Any], path: Sequence[int]) -> Resolution:
        """Resolve path against tree, copying the ancestor chain.

        Top-down walk: at each depth the container list is copied, then the
        referenced node is copied with that new list threaded in as its
        children. The input tree is never modified.

        Args:
            tree: Root sequence of nodes
            path: Index path, root index first

        Returns:
            Resolution with the new working tree and the located node

        Raises:
            InvalidPath: If path is empty or malformed
            OutOfRange: If an index exceeds the sequence at its depth
        """
        path = normalize_path(path)
        root = list(tree)
        container = root
        parent = None
        last = len(path) - 1

        for depth, index in enumerate(path):
            self._check_index(path, depth, index, container)
            node = container[index]

            if depth == last:
                node = self.adapter.copy(node)
                container[index] = node
                return Resolution(root, node, parent, index, container)

            children = self.adapter.child_list(node)
            node = self.adapter.with_children(node, children)
            container[index] = node
            parent = node
            container = children

        # unreachable: normalize_path rejects empty paths
        raise InvalidPath("Path must not be empty", path)

    def get(self, tree: Sequence[Any], path: Sequence[int]) -> Any:
        """Read-only lookup of the node at path, without copying anything.

        Raises:
            InvalidPath: If path is empty or malformed
            OutOfRange: If an index exceeds the sequence at its depth
        """
        path = normalize_path(path)
        container: Sequence[Any] = tree
        node = None
        for depth, index in enumerate(path):
            self._check_index(path, depth, index, container)
            node = container[index]
            container = self.adapter.get_children(node) or ()
        return node

    def exists(self, tree: Sequence[Any], path: Sequence[int]) -> bool:
        """True if path resolves to a node in tree."""
        try:
            self.get(tree, path)
        except OutOfRange:
            return False
        return True

    @staticmethod
    def _check_index(path: TreePath, depth: int, index: int, container: Sequence[Any]) -> None:
        size = len(container)
        if not 0 <= index < size:
            logger.debug("Path %s out of range at depth %d (size %d)", list(path), depth, size)
            raise OutOfRange(path, depth, index, size)
