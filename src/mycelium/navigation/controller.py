"""Drill-down focus navigation.

The controller owns the DrillPath and resolves the current focus root from
whatever tree snapshot it is handed. Drilling can reveal nodes, so the
drill operations take a snapshot and return the (possibly new) snapshot.
"""

import logging
from dataclasses import dataclass

from mycelium.models import Node
from mycelium.navigation.drill_path import DrillPath
from mycelium.tree import visibility
from mycelium.tree.locator import find

logger = logging.getLogger(__name__)


@dataclass
class Breadcrumb:
    """One entry of the drill path, resolved for display."""

    index: int
    id: str
    label: str


class NavigationController:
    """Drill into / up / to, and focus root resolution."""

    def __init__(self, drill_path: DrillPath | None = None) -> None:
        self.drill_path = drill_path or DrillPath()

    @property
    def can_drill_up(self) -> bool:
        return len(self.drill_path) > 1

    def focus_root(self, tree: Node) -> Node:
        """Node at the top of the drill path, falling back to the absolute root."""
        return find(tree, self.drill_path.current) or tree

    def drill_into(self, tree: Node, node_id: str) -> Node:
        """
        Make node_id the focus root.

        A collapsed target is expanded first so its children are shown.
        Unknown ids are ignored.
        """
        target = find(tree, node_id)
        if target is None:
            logger.debug(f"drill_into: node {node_id} not found")
            return tree

        if target.collapsed:
            tree = visibility.expand(tree, node_id)

        self.drill_path.push(node_id)
        logger.debug(f"Drilled into {node_id}, path={self.drill_path.ids}")
        return tree

    def drill_up(self, tree: Node) -> Node:
        """
        Return to the previous focus root.

        The node being left is expanded so the parent view shows where the
        user was.
        """
        if not self.can_drill_up:
            return tree

        leaving = self.drill_path.current
        node = find(tree, leaving)
        if node is not None and node.collapsed:
            tree = visibility.expand(tree, leaving)

        self.drill_path.pop()
        logger.debug(f"Drilled up from {leaving}, path={self.drill_path.ids}")
        return tree

    def drill_to(self, index: int) -> bool:
        """Breadcrumb jump: truncate the path to [0..index]."""
        return self.drill_path.truncate(index)

    def breadcrumbs(self, tree: Node) -> list[Breadcrumb]:
        crumbs = []
        for index, node_id in enumerate(self.drill_path):
            node = find(tree, node_id)
            crumbs.append(Breadcrumb(index=index, id=node_id, label=node.label if node else node_id))
        return crumbs
