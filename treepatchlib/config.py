"""Configuration system for TreePatchLib.

A TreeConfig tells the engine how to read nodes (the children adapter and
the key function), how selection behaves, and what to do when a reorder
fails.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, List

from .core.adapter import AttributeAdapter, ChildrenAdapter, MappingAdapter
from .error_policies import ErrorPolicy, FailFastPolicy
from .state.selection import SelectionMode


def default_key(node: Any) -> Hashable:
    """Key of a node: node["key"] for mappings, node.key otherwise."""
    if isinstance(node, Mapping):
        return node["key"]
    return node.key


@dataclass
class TreeConfig:
    """Complete configuration for a TreeEngine."""

    # Where children live
    adapter: ChildrenAdapter = field(default_factory=MappingAdapter)

    # Node identity for expansion/selection
    key: Callable[[Any], Hashable] = default_key

    # Selection behaviour
    selection_mode: SelectionMode = SelectionMode.MULTIPLE

    # Reorder failures
    error_policy: ErrorPolicy = field(default_factory=FailFastPolicy)

    @classmethod
    def for_mappings(cls, field: str = "children", key_field: str = "key", **kwargs) -> 'TreeConfig':
        """Config for dict nodes.

        Args:
            field: Name of the children entry
            key_field: Name of the identity entry
        """
        return cls(
            adapter=MappingAdapter(field),
            key=lambda node: node[key_field],
            **kwargs
        )

    @classmethod
    def for_objects(cls, field: str = "children", key_attr: str = "key", **kwargs) -> 'TreeConfig':
        """Config for dataclass / attribute nodes.

        Args:
            field: Name of the children attribute
            key_attr: Name of the identity attribute
        """
        return cls(
            adapter=AttributeAdapter(field),
            key=lambda node: getattr(node, key_attr),
            **kwargs
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.adapter, ChildrenAdapter):
            errors.append("adapter must be a ChildrenAdapter instance")

        if not callable(self.key):
            errors.append("key must be callable")

        if not isinstance(self.selection_mode, SelectionMode):
            errors.append("selection_mode must be a SelectionMode")

        if not isinstance(self.error_policy, ErrorPolicy):
            errors.append("error_policy must be an ErrorPolicy instance")

        return errors
