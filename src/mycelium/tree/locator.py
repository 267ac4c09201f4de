"""Lookup over the whole tree, collapsed subtrees included.

Every function here walks both `children` and `hidden_children`, so a node
stays addressable no matter how much of the tree is currently folded away.
"""

from collections import Counter
from collections.abc import Iterator

from mycelium.models import Node


def find(root: Node, node_id: str) -> Node | None:
    """Depth-first search for node_id. Returns None if it isn't in the tree."""
    stack = [root]
    while stack:
        current = stack.pop()
        if current.id == node_id:
            return current
        # Reversed so that visible children are visited before hidden ones,
        # each in document order
        stack.extend(reversed(current.all_children()))
    return None


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield every node exactly once, visible and hidden, in pre-order."""
    stack = [root]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.all_children()))


def find_parent(root: Node, node_id: str) -> Node | None:
    """Parent of node_id, or None for the root itself or an unknown id."""
    for node in iter_nodes(root):
        if any(child.id == node_id for child in node.all_children()):
            return node
    return None


def path_to(root: Node, node_id: str) -> list[str]:
    """Ids from root down to node_id inclusive; empty if node_id is unknown."""
    stack: list[tuple[Node, list[str]]] = [(root, [root.id])]
    while stack:
        current, path = stack.pop()
        if current.id == node_id:
            return path
        for child in reversed(current.all_children()):
            stack.append((child, path + [child.id]))
    return []


def duplicate_ids(root: Node) -> list[str]:
    """Ids occurring more than once anywhere in the tree."""
    counts = Counter(node.id for node in iter_nodes(root))
    return sorted(node_id for node_id, n in counts.items() if n > 1)


def count_nodes(root: Node) -> int:
    return sum(1 for _ in iter_nodes(root))
