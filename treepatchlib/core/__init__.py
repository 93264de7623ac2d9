"""Core building blocks for TreePatchLib.

The adapter reads and rewrites children, the resolver walks paths with
copy-on-write, and the applier turns move operations into new trees.
"""

from .adapter import ChildrenAdapter, MappingAdapter, AttributeAdapter, CallableAdapter
from .resolver import PathResolver, Resolution, TreePath, normalize_path
from .patch import APPEND, MoveOperation, PatchQueue, MoveApplier
from .traverser import (
    TreeTraverser,
    DepthFirstTraverser,
    BreadthFirstTraverser,
    create_traverser,
    find_path,
    iter_keys,
    visible_nodes,
)

__all__ = [
    "ChildrenAdapter",
    "MappingAdapter",
    "AttributeAdapter",
    "CallableAdapter",
    "PathResolver",
    "Resolution",
    "TreePath",
    "normalize_path",
    "APPEND",
    "MoveOperation",
    "PatchQueue",
    "MoveApplier",
    "TreeTraverser",
    "DepthFirstTraverser",
    "BreadthFirstTraverser",
    "create_traverser",
    "find_path",
    "iter_keys",
    "visible_nodes",
]
