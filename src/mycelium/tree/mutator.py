"""Copy-on-write mutations of the mind map tree.

Every function takes a tree snapshot and returns a new one. The input
snapshot is never touched: the tree is cloned first and edits are applied to
the clone, so anyone still holding the old root keeps seeing the old tree.
"""

import logging
import time
from collections.abc import Callable

from mycelium.errors import OperationRejected
from mycelium.models import NEW_NODE_DESCRIPTION, NEW_NODE_LABEL, ROOT_ID, Node, NodeMetadata, NodePatch
from mycelium.tree.locator import find

logger = logging.getLogger(__name__)


def clone_tree(tree: Node) -> Node:
    """Deep copy of the whole tree."""
    return tree.clone()


def mutate(tree: Node, node_id: str, update_fn: Callable[[Node], None]) -> Node:
    """
    Clone the tree and apply update_fn to the node with node_id in the clone.

    The traversal covers hidden children too. If node_id isn't found the
    clone is returned unmodified.

    Args:
        tree: Current snapshot (left untouched)
        node_id: Node to edit
        update_fn: Called once with the cloned node; edits it in place

    Returns:
        New snapshot
    """
    new_tree = clone_tree(tree)
    stack = [new_tree]
    while stack:
        current = stack.pop()
        if current.id == node_id:
            update_fn(current)
            return new_tree
        if current.children:
            stack.extend(current.children)
        if current.hidden_children:
            stack.extend(current.hidden_children)

    logger.debug(f"mutate: node {node_id} not found, snapshot unchanged")
    return new_tree


def new_node_id(tree: Node) -> str:
    """Time-based id that is not yet used anywhere in the tree."""
    base = f"node-{int(time.time() * 1000)}"
    candidate = base
    suffix = 1
    while find(tree, candidate) is not None:
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def new_node(
    tree: Node,
    label: str = NEW_NODE_LABEL,
    description: str = NEW_NODE_DESCRIPTION,
) -> Node:
    """Fresh leaf node with default metadata and an id unique within tree."""
    return Node(
        id=new_node_id(tree),
        label=label,
        description=description,
        metadata=NodeMetadata(type="concept", status="active", tags=[]),
    )


def _append_child(child: Node) -> Callable[[Node], None]:
    def update(node: Node) -> None:
        if node.collapsed:
            # Adding to a collapsed node reveals it
            node.hidden_children.append(child.clone())
            node.expand()
            return

        if node.children is None:
            node.children = []
        node.children.append(child.clone())
        if node.hidden_children == []:
            node.hidden_children = None

    return update


def add_child(tree: Node, target_id: str, child: Node) -> Node:
    """
    Append child under target_id.

    If the target is collapsed the child goes into its hidden children, which
    are then promoted to visible.

    Raises:
        ValueError: child's id already exists in the tree
    """
    if find(tree, child.id) is not None:
        raise ValueError(f"Node id already exists: {child.id}")
    return mutate(tree, target_id, _append_child(child))


def _remove_from(parent: Node, node_id: str) -> bool:
    """Splice node_id out of parent's subtree, checking each level before recursing."""
    for attr in ("children", "hidden_children"):
        siblings: list[Node] | None = getattr(parent, attr)
        if not siblings:
            continue
        for index, child in enumerate(siblings):
            if child.id == node_id:
                del siblings[index]
                return True
        if any(_remove_from(child, node_id) for child in siblings):
            return True
    return False


def delete_node(tree: Node, node_id: str) -> Node:
    """
    Remove node_id and its subtree.

    An unknown id yields an unchanged clone.

    Raises:
        OperationRejected: node_id is the root
    """
    if node_id == ROOT_ID:
        raise OperationRejected(node_id, "The root node cannot be deleted.")

    new_tree = clone_tree(tree)
    if not _remove_from(new_tree, node_id):
        logger.debug(f"delete: node {node_id} not found, snapshot unchanged")
    return new_tree


def update_node(tree: Node, node_id: str, patch: NodePatch) -> Node:
    """Apply a partial patch; metadata is merged key-wise."""
    return mutate(tree, node_id, patch.apply)
