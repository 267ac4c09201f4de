"""Mycelium data models."""

from mycelium.models.node import (
    HIDDEN_KEYS,
    NEW_NODE_DESCRIPTION,
    NEW_NODE_LABEL,
    NODE_STATUSES,
    NODE_TYPES,
    ROOT_ID,
    Node,
    NodeMetadata,
    NodePatch,
    NodeStatus,
    NodeType,
    Visibility,
    parse_datetime,
    raw_hidden_children,
)

__all__ = [
    "Node",
    "NodeMetadata",
    "NodePatch",
    "NodeType",
    "NodeStatus",
    "Visibility",
    "NODE_TYPES",
    "NODE_STATUSES",
    "ROOT_ID",
    "HIDDEN_KEYS",
    "NEW_NODE_LABEL",
    "NEW_NODE_DESCRIPTION",
    "parse_datetime",
    "raw_hidden_children",
]
