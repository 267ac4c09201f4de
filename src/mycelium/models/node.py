"""Mind map node model - the recursive entity every other component works on."""

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Literal, get_args

NodeType = Literal["concept", "task", "note", "root"]
NodeStatus = Literal["active", "completed", "pending"]
Visibility = Literal["expanded", "collapsed"]

ROOT_ID = "root"

# Document keys for hidden children; the first one holding a list wins
HIDDEN_KEYS = ("_children", "hiddenChildren")

NEW_NODE_LABEL = "New Node"
NEW_NODE_DESCRIPTION = "Newly created node."

NODE_TYPES: tuple[str, ...] = get_args(NodeType)
NODE_STATUSES: tuple[str, ...] = get_args(NodeStatus)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def raw_hidden_children(data: dict) -> Any:
    """Hidden children of a raw document node, whichever key carries them."""
    return next((data[key] for key in HIDDEN_KEYS if data.get(key) is not None), None)


def parse_datetime(value: Any) -> datetime | None:
    """Parse datetime from an ISO string (JS-style trailing 'Z' accepted) or datetime."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass
class NodeMetadata:
    """Classification and bookkeeping attached to every node."""

    type: NodeType = "concept"
    status: NodeStatus = "active"
    tags: list[str] = field(default_factory=list)
    created: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if self.type not in NODE_TYPES:
            raise ValueError(f"Unknown node type: {self.type!r}")
        if self.status not in NODE_STATUSES:
            raise ValueError(f"Unknown node status: {self.status!r}")

    def merged(self, patch: dict[str, Any]) -> "NodeMetadata":
        """Return a copy with patch keys overlaid; keys absent from patch are kept."""
        values = {
            "type": self.type,
            "status": self.status,
            "tags": list(self.tags),
            "created": self.created,
        }
        for key, value in patch.items():
            if value is None:
                continue
            if key == "tags":
                value = list(value)
            elif key == "created":
                value = parse_datetime(value)
            values[key] = value
        return NodeMetadata(**values)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "status": self.status,
            "tags": list(self.tags),
            "created": self.created.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "NodeMetadata":
        """Create from a document mapping. `type` and `status` are required."""
        return cls(
            type=data["type"],
            status=data["status"],
            tags=list(data.get("tags") or []),
            created=parse_datetime(data.get("created")) or utc_now(),
        )


METADATA_FIELDS = frozenset(f.name for f in fields(NodeMetadata))


@dataclass
class Node:
    """
    A mind map node owning its subtree.

    Visible children live in `children`, collapsed ones in `hidden_children`.
    Only one of the two lists is ever populated; `collapsed` is derived from
    them so it can't drift out of sync.
    """

    id: str
    label: str
    description: str = ""
    metadata: NodeMetadata = field(default_factory=NodeMetadata)

    # None means "absent"; an empty list is a present-but-empty sequence
    children: list["Node"] | None = None
    hidden_children: list["Node"] | None = None

    # Carried through from the document format, not interpreted
    inputs: list[str] | None = None
    outputs: list[str] | None = None

    @property
    def collapsed(self) -> bool:
        return bool(self.hidden_children) and not self.children

    @property
    def visibility(self) -> Visibility:
        return "collapsed" if self.collapsed else "expanded"

    @property
    def has_children(self) -> bool:
        return bool(self.children) or bool(self.hidden_children)

    def all_children(self) -> list["Node"]:
        """Visible children followed by hidden ones."""
        return [*(self.children or []), *(self.hidden_children or [])]

    def collapse(self) -> bool:
        """Expanded -> Collapsed. Returns False if there was nothing visible to hide."""
        if not self.children:
            return False
        self.hidden_children = self.children
        self.children = None
        return True

    def expand(self) -> bool:
        """Collapsed -> Expanded, appending hidden children after any visible ones."""
        if not self.hidden_children:
            return False
        if self.children:
            self.children = [*self.children, *self.hidden_children]
        else:
            self.children = self.hidden_children
        self.hidden_children = None
        return True

    def toggle(self) -> bool:
        """Flip between the two states. No-op for nodes without children."""
        if self.children:
            return self.collapse()
        return self.expand()

    def clone(self) -> "Node":
        """Full structural copy; shares nothing mutable with the original."""
        return Node(
            id=self.id,
            label=self.label,
            description=self.description,
            metadata=NodeMetadata(
                type=self.metadata.type,
                status=self.metadata.status,
                tags=list(self.metadata.tags),
                created=self.metadata.created,
            ),
            children=[c.clone() for c in self.children] if self.children is not None else None,
            hidden_children=(
                [c.clone() for c in self.hidden_children]
                if self.hidden_children is not None
                else None
            ),
            inputs=list(self.inputs) if self.inputs is not None else None,
            outputs=list(self.outputs) if self.outputs is not None else None,
        )

    def to_dict(self, include_hidden: bool = True) -> dict:
        """
        Convert to the document format.

        With include_hidden=False only the visible projection is produced and
        hidden subtrees are summarized as `hiddenCount`.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "metadata": self.metadata.to_dict(),
        }
        if self.children is not None:
            data["children"] = [c.to_dict(include_hidden) for c in self.children]
        if self.hidden_children is not None:
            if include_hidden:
                data["_children"] = [c.to_dict(include_hidden) for c in self.hidden_children]
            else:
                data["hiddenCount"] = len(self.hidden_children)
        data["collapsed"] = self.collapsed
        if self.inputs is not None:
            data["inputs"] = list(self.inputs)
        if self.outputs is not None:
            data["outputs"] = list(self.outputs)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        """Create from a document mapping (recursive).

        Raises KeyError/TypeError/ValueError on malformed input; see
        mycelium.storage.document for the validating loader.
        """
        children = data.get("children")
        hidden = raw_hidden_children(data)
        return cls(
            id=str(data["id"]),
            label=str(data["label"]),
            description=str(data.get("description") or ""),
            metadata=NodeMetadata.from_dict(data["metadata"]),
            children=[cls.from_dict(c) for c in children] if children is not None else None,
            hidden_children=[cls.from_dict(c) for c in hidden] if hidden is not None else None,
            inputs=list(data["inputs"]) if data.get("inputs") is not None else None,
            outputs=list(data["outputs"]) if data.get("outputs") is not None else None,
        )

    def __repr__(self) -> str:
        return (
            f"Node(id={self.id!r}, label={self.label!r}, "
            f"children={len(self.children or [])}, hidden={len(self.hidden_children or [])})"
        )


@dataclass
class NodePatch:
    """
    Partial update for a node. Fields left as None are not touched.

    `metadata` is merged key-wise into the node's existing metadata.
    """

    label: str | None = None
    description: str | None = None
    metadata: dict[str, Any] | None = None
    inputs: list[str] | None = None
    outputs: list[str] | None = None

    def __post_init__(self) -> None:
        if self.metadata is None:
            return
        unknown = set(self.metadata) - METADATA_FIELDS
        if unknown:
            raise ValueError(f"Unknown metadata fields: {sorted(unknown)}")
        # Validates literals and timestamps up front
        NodeMetadata().merged(self.metadata)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def apply(self, node: Node) -> None:
        """Apply in place. Only ever called on a cloned snapshot."""
        if self.label is not None:
            node.label = self.label
        if self.description is not None:
            node.description = self.description
        if self.metadata is not None:
            node.metadata = node.metadata.merged(self.metadata)
        if self.inputs is not None:
            node.inputs = list(self.inputs)
        if self.outputs is not None:
            node.outputs = list(self.outputs)
