"""Focus navigation and selection state."""

from mycelium.navigation.controller import Breadcrumb, NavigationController
from mycelium.navigation.drill_path import DrillPath
from mycelium.navigation.selection import Selection

__all__ = [
    "Breadcrumb",
    "DrillPath",
    "NavigationController",
    "Selection",
]
