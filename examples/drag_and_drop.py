#!/usr/bin/env python3
"""
Drag-and-drop reordering example for TreePatchLib.

This example demonstrates:
- Driving a TreeEngine the way a tree-view widget would
- Batching the moves of one gesture into a session
- Expansion state surviving reorders
"""

import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from treepatchlib import TreeEngine, TreeConfig, LoggingPolicy


def render(engine):
    """Print the visible rows with indentation."""
    for path, node in engine.visible():
        marker = "-" if node["key"] in engine.expanded_keys else "+"
        if not node.get("children"):
            marker = " "
        print(f"{'  ' * (len(path) - 1)}{marker} {node['name']}")
    print("-" * 30)


def main():
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.WARNING)

    items = [
        {"key": 1, "name": "Documents", "children": [
            {"key": 2, "name": "report.pdf"},
            {"key": 3, "name": "notes.txt"},
        ]},
        {"key": 4, "name": "Pictures", "children": []},
        {"key": 5, "name": "todo.md"},
    ]
    engine = TreeEngine(
        items,
        config=TreeConfig(error_policy=LoggingPolicy()),
        expanded_keys={1},
        on_items_change=lambda tree: print(f"items changed ({len(tree)} roots)"),
    )
    render(engine)

    # Drop report.pdf onto Pictures
    engine.reorder([0, 0], [1])
    engine.open(4)
    render(engine)

    # One gesture that hovers over two targets before the drop
    with engine.session() as session:
        session.move([2], [0], 0)      # todo.md to the top of Documents
        session.move([1, 0], [0])      # report.pdf back into Documents
    render(engine)

    # Dropping onto a row that no longer exists is logged and ignored
    engine.reorder([0, 0], [7])
    render(engine)


if __name__ == "__main__":
    main()
