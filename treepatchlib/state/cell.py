"""Controlled / uncontrolled state holder.

A StateCell either owns its value (uncontrolled) or mirrors a value owned by
the caller (controlled). In both modes every update is reported to the
change listener; only uncontrolled cells store the update themselves. A
controlled caller decides whether to accept it and pushes it back with
sync().
"""

from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class StateCell(Generic[T]):
    """Single piece of observable state."""

    def __init__(self,
                 initial: Optional[T] = None,
                 value: T = _UNSET,
                 on_change: Optional[Callable[[T], None]] = None):
        """
        Args:
            initial: Starting value for an uncontrolled cell
            value: Caller-owned value; passing it makes the cell controlled
            on_change: Listener called with every new value
        """
        self.controlled = value is not _UNSET
        self._value = value if self.controlled else initial
        self.on_change = on_change

    @property
    def value(self) -> T:
        return self._value

    def set(self, new_value: T) -> None:
        if not self.controlled:
            self._value = new_value
        if self.on_change is not None:
            self.on_change(new_value)

    def sync(self, new_value: T) -> None:
        """Overwrite the stored value without notifying (caller pushes its own state)."""
        self._value = new_value

    def __repr__(self) -> str:
        mode = "controlled" if self.controlled else "uncontrolled"
        return f"StateCell({self._value!r}, {mode})"
