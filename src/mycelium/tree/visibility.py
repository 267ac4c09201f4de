"""Collapse/expand semantics.

Each node is either expanded (children visible) or collapsed (children moved
to hidden_children). The in-place helpers work on a node directly and are
used as mutate() callbacks; the snapshot-level functions return new trees.
"""

import logging

from mycelium.models import Node
from mycelium.tree.mutator import mutate

logger = logging.getLogger(__name__)


def expand_subtree(node: Node) -> None:
    """Force node and every descendant to expanded, in place."""
    stack = [node]
    while stack:
        current = stack.pop()
        current.expand()
        if current.children:
            stack.extend(current.children)


def collapse_subtree(node: Node) -> None:
    """Force every strict descendant of node to collapsed, in place.

    node itself stays as it is; only its descendants fold up.
    """
    stack: list[tuple[Node, bool]] = [(node, True)]
    while stack:
        current, is_subtree_root = stack.pop()
        if not is_subtree_root:
            current.collapse()
        targets = current.children or current.hidden_children or []
        stack.extend((child, False) for child in targets)


def toggle(tree: Node, node_id: str) -> Node:
    """Flip one node between expanded and collapsed."""
    return mutate(tree, node_id, lambda node: node.toggle())


def expand(tree: Node, node_id: str) -> Node:
    """Force one node to expanded (no effect on its descendants)."""
    return mutate(tree, node_id, lambda node: node.expand())


def expand_all(tree: Node, subtree_root_id: str) -> Node:
    return mutate(tree, subtree_root_id, expand_subtree)


def collapse_all(tree: Node, subtree_root_id: str) -> Node:
    return mutate(tree, subtree_root_id, collapse_subtree)


def collapse_below_root(tree: Node) -> Node:
    """Initial view of a freshly loaded document.

    Level-1 children of the root stay visible, everything below them starts
    collapsed.
    """
    logger.debug("Collapsing document below level 1")
    return collapse_all(tree, tree.id)
