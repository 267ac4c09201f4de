"""Mind map session - the single controller behind the UI.

Owns the current tree snapshot, the drill path and the selection, and maps
every UI event to one operation. Each mutating event computes a new
snapshot and swaps it in with a single assignment, so readers always see
either the old or the new tree in full.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mycelium.config import Settings, settings as default_settings
from mycelium.errors import OperationRejected
from mycelium.models import ROOT_ID, Node, NodePatch
from mycelium.navigation import Breadcrumb, NavigationController, Selection
from mycelium.storage import export_document, load_document, read_document, seed_document, write_document
from mycelium.tree import (
    add_child,
    collapse_all,
    collapse_below_root,
    delete_node,
    expand_all,
    find,
    new_node,
    toggle,
    update_node,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionView:
    """What a renderer needs: the focus root plus navigation and selection state."""

    focus_root: Node
    drill_path: tuple[str, ...]
    breadcrumbs: list[Breadcrumb]
    selected_id: str | None
    selected: Node | None
    hovered_id: str | None
    can_drill_up: bool


class MindMapSession:
    """
    Interactive state for one mind map.

    Example:
        session = MindMapSession.from_document(seed_document())
        session.double_click("c2")      # drill into c2
        session.click("c2-1")
        session.add()                   # new child under c2-1
        session.drill_up()
    """

    def __init__(
        self,
        tree: Node,
        navigation: NavigationController | None = None,
        selection: Selection | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._tree = tree
        self.navigation = navigation or NavigationController()
        self.selection = selection or Selection()
        self.settings = settings or default_settings

    @classmethod
    def from_document(
        cls,
        data: dict[str, Any],
        collapse_on_load: bool = True,
        settings: Settings | None = None,
    ) -> "MindMapSession":
        tree = load_document(data)
        if collapse_on_load:
            tree = collapse_below_root(tree)
        return cls(tree, settings=settings)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "MindMapSession":
        """Load the configured seed document (or the built-in one)."""
        settings = settings or default_settings
        if settings.seed_document_path:
            tree = read_document(settings.seed_document_path)
        else:
            tree = load_document(seed_document())
        if settings.collapse_on_load:
            tree = collapse_below_root(tree)
        return cls(tree, settings=settings)

    # ------------------------------------------------------------------
    # Snapshot access
    # ------------------------------------------------------------------

    @property
    def tree(self) -> Node:
        """Current snapshot. Never mutated in place; replaced on every edit."""
        return self._tree

    def _commit(self, new_tree: Node) -> None:
        self._tree = new_tree
        self.selection.reconcile(new_tree)

    @property
    def drill_path(self) -> tuple[str, ...]:
        return self.navigation.drill_path.ids

    @property
    def focus_root(self) -> Node:
        return self.navigation.focus_root(self._tree)

    @property
    def selected_node(self) -> Node | None:
        return self.selection.selected(self._tree)

    @property
    def hovered_node(self) -> Node | None:
        return self.selection.hovered(self._tree)

    def view(self) -> SessionView:
        return SessionView(
            focus_root=self.focus_root,
            drill_path=self.drill_path,
            breadcrumbs=self.navigation.breadcrumbs(self._tree),
            selected_id=self.selection.selected_id,
            selected=self.selected_node,
            hovered_id=self.selection.hovered_id,
            can_drill_up=self.navigation.can_drill_up,
        )

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def click(self, node_id: str) -> Node | None:
        """Select a node. Unknown ids are ignored."""
        node = find(self._tree, node_id)
        if node is None:
            logger.debug(f"click: node {node_id} not found")
            return None
        self.selection.select(node_id)
        return node

    def deselect(self) -> None:
        self.selection.clear()

    def hover(self, node_id: str | None) -> Node | None:
        if node_id is not None and find(self._tree, node_id) is None:
            node_id = None
        self.selection.hover(node_id)
        return self.hovered_node

    def double_click(self, node_id: str) -> None:
        self.drill_into(node_id)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def drill_into(self, node_id: str) -> None:
        """Focus on node_id's subtree and clear the selection."""
        if find(self._tree, node_id) is None:
            logger.debug(f"drill_into: node {node_id} not found")
            return
        self._commit(self.navigation.drill_into(self._tree, node_id))
        self.selection.clear()

    def drill_down(self) -> None:
        """Drill into the selected node (toolbar action)."""
        if self.selection.selected_id is None:
            return
        self.drill_into(self.selection.selected_id)

    def drill_up(self) -> None:
        self._commit(self.navigation.drill_up(self._tree))

    def breadcrumb_jump(self, index: int) -> None:
        if not self.navigation.drill_to(index):
            logger.debug(f"breadcrumb_jump: index {index} out of range")

    # ------------------------------------------------------------------
    # Visibility
    # ------------------------------------------------------------------

    def toggle_collapse(self, node_id: str) -> None:
        self._commit(toggle(self._tree, node_id))

    def expand_all(self) -> None:
        """Expand everything under the current focus root."""
        self._commit(expand_all(self._tree, self.focus_root.id))

    def collapse_all(self) -> None:
        """Collapse everything below the current focus root."""
        self._commit(collapse_all(self._tree, self.focus_root.id))

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add(self) -> str | None:
        """
        Add a child under the selected node, or the focus root if nothing is selected.

        Returns:
            Id of the new node, or None if the target no longer exists
        """
        selected = self.selected_node
        target_id = selected.id if selected is not None else self.focus_root.id

        child = new_node(
            self._tree,
            label=self.settings.new_node_label,
            description=self.settings.new_node_description,
        )
        new_tree = add_child(self._tree, target_id, child)
        if find(new_tree, child.id) is None:
            logger.debug(f"add: target {target_id} not found")
            return None

        self._commit(new_tree)
        logger.debug(f"Added {child.id} under {target_id}")
        return child.id

    def delete(self) -> str | None:
        """
        Delete the selected node and its subtree.

        Returns:
            Id of the deleted node, or None if nothing was selected

        Raises:
            OperationRejected: selected node is the root or on the drill path
        """
        node_id = self.selection.selected_id
        if node_id is None:
            return None

        if node_id == ROOT_ID:
            logger.warning("Rejected delete of the root node")
            raise OperationRejected(node_id, "The root node cannot be deleted.")
        if node_id in self.navigation.drill_path:
            logger.warning(f"Rejected delete of {node_id}: on the current navigation path")
            raise OperationRejected(
                node_id,
                "Cannot delete a node that is part of the current navigation path.",
            )

        self._commit(delete_node(self._tree, node_id))
        self.selection.clear()
        logger.debug(f"Deleted {node_id}")
        return node_id

    def update(self, node_id: str, patch: NodePatch) -> Node | None:
        """Apply a partial update. Returns the updated node, or None if not found."""
        if patch.is_empty():
            return find(self._tree, node_id)
        self._commit(update_node(self._tree, node_id, patch))
        return find(self._tree, node_id)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self) -> dict:
        """Whole tree as a document, collapsed subtrees included."""
        return export_document(self._tree)

    def save(self, path: str | Path | None = None) -> Path:
        return write_document(
            self._tree,
            path or self.settings.export_path,
            indent=self.settings.export_indent,
        )
