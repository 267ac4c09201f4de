"""Tree locator, copy-on-write mutator and visibility controller."""

from mycelium.tree.locator import (
    count_nodes,
    duplicate_ids,
    find,
    find_parent,
    iter_nodes,
    path_to,
)
from mycelium.tree.mutator import (
    add_child,
    clone_tree,
    delete_node,
    mutate,
    new_node,
    new_node_id,
    update_node,
)
from mycelium.tree.visibility import (
    collapse_all,
    collapse_below_root,
    collapse_subtree,
    expand,
    expand_all,
    expand_subtree,
    toggle,
)

__all__ = [
    # Locator
    "find",
    "find_parent",
    "iter_nodes",
    "path_to",
    "duplicate_ids",
    "count_nodes",
    # Mutator
    "mutate",
    "clone_tree",
    "new_node",
    "new_node_id",
    "add_child",
    "delete_node",
    "update_node",
    # Visibility
    "toggle",
    "expand",
    "expand_all",
    "collapse_all",
    "expand_subtree",
    "collapse_subtree",
    "collapse_below_root",
]
