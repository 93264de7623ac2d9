"""
Error handling policies for TreePatchLib.

The engine hands reorder failures to a policy, which either re-raises or
records the failure and lets the caller keep the unchanged tree. Moves are
never applied partially, so "continue" always means "keep the tree as it
was before the failed commit".
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from .errors import TreePatchError

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses decide whether a failed reorder should propagate.
    """

    @abstractmethod
    def handle(self, error: Exception, operations: Sequence[Any], tree: Sequence[Any]) -> Sequence[Any]:
        """
        Handle an error raised while committing moves.

        Args:
            error: The exception that was raised
            operations: The MoveOperations of the failed commit
            tree: The tree as it was before the commit

        Returns:
            The tree the engine should keep, or re-raises to stop.
        """
        pass

    @staticmethod
    def _record(error: Exception, operations: Sequence[Any]) -> Dict[str, Any]:
        return {
            'operations': tuple(operations),
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        }


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error.

    This is the default: the caller sees every failure synchronously.
    """

    def handle(self, error: Exception, operations: Sequence[Any], tree: Sequence[Any]) -> Sequence[Any]:
        raise error


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that silently collects errors and keeps the previous tree.

    Useful for drag-and-drop handlers that should ignore drops onto invalid
    targets but still report them later.
    """

    def __init__(self):
        self.errors: List[Dict[str, Any]] = []

    def handle(self, error: Exception, operations: Sequence[Any], tree: Sequence[Any]) -> Sequence[Any]:
        self.errors.append(self._record(error, operations))
        return tree

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'out_of_range': sum(1 for e in self.errors if e['error_type'] == 'OutOfRange'),
            'invalid_path': sum(1 for e in self.errors if e['error_type'] == 'InvalidPath'),
            'errors': self.errors,
        }


class LoggingPolicy(CollectErrorsPolicy):
    """
    Policy that logs a warning for each error, collects it and continues.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        super().__init__()
        self.log = log or logger

    def handle(self, error: Exception, operations: Sequence[Any], tree: Sequence[Any]) -> Sequence[Any]:
        self.log.warning("Reorder rejected (%s): %s", type(error).__name__, error)
        return super().handle(error, operations, tree)


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails fast.

    Useful when a few rejected drops are expected but many indicate the
    presentation layer is producing stale paths.
    """

    def __init__(self, max_errors: int = 10):
        """
        Args:
            max_errors: Maximum errors to tolerate before failing
        """
        self.max_errors = max_errors
        self.error_count = 0
        self.errors: List[Exception] = []

    def handle(self, error: Exception, operations: Sequence[Any], tree: Sequence[Any]) -> Sequence[Any]:
        self.error_count += 1
        self.errors.append(error)

        if self.error_count > self.max_errors:
            raise TreePatchError(f"Error threshold exceeded ({self.max_errors} errors)") from error

        logger.debug("Tolerating reorder error %d/%d: %s", self.error_count, self.max_errors, error)
        return tree

    def reset(self) -> None:
        self.error_count = 0
        self.errors.clear()
