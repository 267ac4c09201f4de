"""Selected and hovered node tracking."""

from dataclasses import dataclass

from mycelium.models import Node
from mycelium.tree.locator import find


@dataclass
class Selection:
    """
    Ids of the selected and hovered nodes.

    Only ids are stored: every mutation produces new node objects, so the
    node itself is looked up again in the latest snapshot when needed.
    """

    selected_id: str | None = None
    hovered_id: str | None = None

    def select(self, node_id: str) -> None:
        self.selected_id = node_id

    def clear(self) -> None:
        self.selected_id = None

    def hover(self, node_id: str | None) -> None:
        self.hovered_id = node_id

    def selected(self, tree: Node) -> Node | None:
        if self.selected_id is None:
            return None
        return find(tree, self.selected_id)

    def hovered(self, tree: Node) -> Node | None:
        if self.hovered_id is None:
            return None
        return find(tree, self.hovered_id)

    def reconcile(self, tree: Node) -> None:
        """Drop ids that no longer resolve in tree."""
        if self.selected_id is not None and find(tree, self.selected_id) is None:
            self.selected_id = None
        if self.hovered_id is not None and find(tree, self.hovered_id) is None:
            self.hovered_id = None
