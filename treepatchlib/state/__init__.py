"""Identity-keyed UI state that travels alongside a tree.

None of these classes look at tree positions, so moves never invalidate
them.
"""

from .cell import StateCell
from .expansion import ExpansionState, toggle_key, open_key
from .selection import SelectionState, SelectionMode

__all__ = [
    'StateCell',
    'ExpansionState',
    'toggle_key',
    'open_key',
    'SelectionState',
    'SelectionMode',
]
