"""TreePatchLib - Copy-on-write reordering for nested records.

TreePatchLib moves nodes around an ordered, nested collection of records
(e.g. the items of a tree view during drag-and-drop) without mutating the
caller's data and without copying anything off the affected path.

Two ways in:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Functional:
    from treepatchlib.api import reorder
    new_tree = reorder(tree, [0, 1], [2], desired_index=0)

Stateful (tree + expanded + selected keys):
    from treepatchlib import TreeEngine
    engine = TreeEngine(tree)
    engine.reorder([0, 1], [2])
    engine.toggle("node-key")
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from . import api
from .errors import TreePatchError, InvalidPath, OutOfRange, ConfigurationError
from .core import (
    ChildrenAdapter,
    MappingAdapter,
    AttributeAdapter,
    CallableAdapter,
    PathResolver,
    Resolution,
    APPEND,
    MoveOperation,
    PatchQueue,
    MoveApplier,
    DepthFirstTraverser,
    BreadthFirstTraverser,
    create_traverser,
)
from .state import ExpansionState, SelectionState, SelectionMode, StateCell
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    CollectErrorsPolicy,
    LoggingPolicy,
    ThresholdPolicy,
)
from .config import TreeConfig, default_key
from .engine import TreeEngine, TreeSnapshot, ReorderSession

__all__ = [
    "__version__",
    "api",
    # Errors
    "TreePatchError",
    "InvalidPath",
    "OutOfRange",
    "ConfigurationError",
    # Core
    "ChildrenAdapter",
    "MappingAdapter",
    "AttributeAdapter",
    "CallableAdapter",
    "PathResolver",
    "Resolution",
    "APPEND",
    "MoveOperation",
    "PatchQueue",
    "MoveApplier",
    "DepthFirstTraverser",
    "BreadthFirstTraverser",
    "create_traverser",
    # State
    "ExpansionState",
    "SelectionState",
    "SelectionMode",
    "StateCell",
    # Policies
    "ErrorPolicy",
    "FailFastPolicy",
    "CollectErrorsPolicy",
    "LoggingPolicy",
    "ThresholdPolicy",
    # Config / façade
    "TreeConfig",
    "default_key",
    "TreeEngine",
    "TreeSnapshot",
    "ReorderSession",
]
