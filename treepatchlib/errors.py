"""Exception hierarchy for TreePatchLib.

Every failure raised by the engine derives from TreePatchError, so callers
can catch the whole family at once. The path errors also derive from the
matching builtin (ValueError / IndexError) so generic handlers keep working.
"""

from typing import Optional, Sequence


class TreePatchError(Exception):
    """Base class for all TreePatchLib errors."""
    pass


class InvalidPath(TreePatchError, ValueError):
    """Raised when a path is empty or contains something other than ints."""

    def __init__(self, message: str, path: Optional[Sequence] = None):
        super().__init__(message)
        self.path = tuple(path) if path is not None else None


class OutOfRange(TreePatchError, IndexError):
    """Raised when a path index falls outside the sequence at its depth.

    Attributes:
        path: The full path being resolved
        depth: Position within the path that failed
        index: The offending index
        size: Length of the sequence the index was applied to
    """

    def __init__(self, path: Sequence[int], depth: int, index: int, size: int):
        self.path = tuple(path)
        self.depth = depth
        self.index = index
        self.size = size
        super().__init__(
            f"Index {index} at depth {depth} of path {list(self.path)} "
            f"is out of range for a sequence of {size} item(s)"
        )


class ConfigurationError(TreePatchError):
    """Raised when a TreeConfig or adapter is not usable."""
    pass
