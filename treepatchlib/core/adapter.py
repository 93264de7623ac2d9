"""ChildrenAdapter abstraction for TreePatchLib.

Nodes are opaque records. The only thing the engine needs to know about them
is where their ordered children live and how to build a copy with a different
child list. The ChildrenAdapter captures exactly that, so the same engine can
patch dicts, dataclasses or any custom record type.
"""

import copy
import dataclasses
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, List, Optional

from ..errors import ConfigurationError


class ChildrenAdapter(ABC):
    """Abstract accessor for the children field of a node.

    Implementations must never mutate the node they are given. Every write
    goes through with_children(), which returns a fresh shallow copy, so
    subtrees that are not touched keep their identity.
    """

    @abstractmethod
    def get_children(self, node: Any) -> Optional[List[Any]]:
        """Return the ordered child list of a node.

        Args:
            node: The node to inspect

        Returns:
            The child sequence, or None if the node has no children field
        """
        pass

    @abstractmethod
    def with_children(self, node: Any, children: List[Any]) -> Any:
        """Return a shallow copy of node whose children field is children.

        Args:
            node: The node to copy
            children: The new child list

        Returns:
            A new node object; the input is left untouched
        """
        pass

    def copy(self, node: Any) -> Any:
        """Shallow copy of a node that keeps the same child list object."""
        return self.with_children(node, self.get_children(node))

    def is_leaf(self, node: Any) -> bool:
        """True if the node has no children field or an empty one."""
        return not self.get_children(node)

    def child_list(self, node: Any) -> List[Any]:
        """Children as a list, treating a missing field as empty."""
        children = self.get_children(node)
        return list(children) if children is not None else []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class MappingAdapter(ChildrenAdapter):
    """Adapter for dict-like nodes, e.g. ``{"key": 1, "children": [...]}``."""

    def __init__(self, field: str = "children"):
        if not field:
            raise ConfigurationError("MappingAdapter requires a non-empty field name")
        self.field = field

    def get_children(self, node: Mapping) -> Optional[List[Any]]:
        return node.get(self.field)

    def with_children(self, node: Mapping, children: Optional[List[Any]]) -> Mapping:
        # dict subclasses (OrderedDict, defaultdict...) keep their type
        if isinstance(node, dict) and type(node) is not dict:
            new_node = copy.copy(node)
        else:
            new_node = dict(node)
        # None keeps an absent field absent; a present field is kept as None
        if children is not None or self.field in new_node:
            new_node[self.field] = children
        return new_node

    def __repr__(self) -> str:
        return f"MappingAdapter(field={self.field!r})"


class AttributeAdapter(ChildrenAdapter):
    """Adapter for nodes that keep their children in an attribute.

    Dataclasses (including frozen ones) are copied with dataclasses.replace;
    any other object is copied with copy.copy and the attribute set on the
    copy.
    """

    def __init__(self, field: str = "children"):
        if not field:
            raise ConfigurationError("AttributeAdapter requires a non-empty field name")
        self.field = field

    def get_children(self, node: Any) -> Optional[List[Any]]:
        return getattr(node, self.field, None)

    def with_children(self, node: Any, children: Optional[List[Any]]) -> Any:
        if dataclasses.is_dataclass(node) and not isinstance(node, type):
            return dataclasses.replace(node, **{self.field: children})
        new_node = copy.copy(node)
        setattr(new_node, self.field, children)
        return new_node

    def __repr__(self) -> str:
        return f"AttributeAdapter(field={self.field!r})"


class CallableAdapter(ChildrenAdapter):
    """Adapter built from a getter and a copy-producing setter.

    Example:
        adapter = CallableAdapter(
            getter=lambda node: node.items,
            setter=lambda node, items: node._replace(items=items),
        )
    """

    def __init__(self,
                 getter: Callable[[Any], Optional[List[Any]]],
                 setter: Callable[[Any, List[Any]], Any]):
        if not callable(getter) or not callable(setter):
            raise ConfigurationError("CallableAdapter requires callable getter and setter")
        self._getter = getter
        self._setter = setter

    def get_children(self, node: Any) -> Optional[List[Any]]:
        return self._getter(node)

    def with_children(self, node: Any, children: List[Any]) -> Any:
        new_node = self._setter(node, children)
        if new_node is node:
            raise ConfigurationError(
                "CallableAdapter setter must return a new node, not mutate its input"
            )
        return new_node
