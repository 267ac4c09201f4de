"""Loading and exporting mind map documents.

Document format (JSON):

    {
      "id": "root", "label": "...", "description": "...",
      "metadata": {"type": "root", "status": "active", "tags": [], "created": "<ISO-8601>"},
      "children": [...],        # visible children (optional)
      "_children": [...],       # hidden children of a collapsed node (optional)
      "collapsed": false,       # informational, recomputed on load
      "inputs": [...], "outputs": [...]   # optional, passed through
    }

`hiddenChildren` is accepted as an alias of `_children` on load. Exports
always contain the whole tree, hidden subtrees included.
"""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from mycelium.errors import MalformedDocumentError
from mycelium.models import NODE_STATUSES, NODE_TYPES, ROOT_ID, Node, raw_hidden_children
from mycelium.tree.locator import count_nodes, duplicate_ids

logger = logging.getLogger(__name__)


def _check_string_list(value: Any, where: str) -> None:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise MalformedDocumentError(f"{where} must be a list of strings")


def _validate_node(data: Any, where: str) -> list[tuple[Any, str]]:
    """Check one raw node; return its raw children with their locations."""
    if not isinstance(data, Mapping):
        raise MalformedDocumentError(f"{where}: node must be an object, got {type(data).__name__}")

    for key in ("id", "label", "metadata"):
        if key not in data or data[key] is None:
            raise MalformedDocumentError(f"{where}: missing required field '{key}'")
    if not isinstance(data["id"], str) or not data["id"]:
        raise MalformedDocumentError(f"{where}: 'id' must be a non-empty string")

    where = f"{where}[{data['id']}]"
    metadata = data["metadata"]
    if not isinstance(metadata, Mapping):
        raise MalformedDocumentError(f"{where}: 'metadata' must be an object")
    if metadata.get("type") not in NODE_TYPES:
        raise MalformedDocumentError(
            f"{where}: metadata.type must be one of {NODE_TYPES}, got {metadata.get('type')!r}"
        )
    if metadata.get("status") not in NODE_STATUSES:
        raise MalformedDocumentError(
            f"{where}: metadata.status must be one of {NODE_STATUSES}, got {metadata.get('status')!r}"
        )
    if metadata.get("tags") is not None:
        _check_string_list(metadata["tags"], f"{where}: metadata.tags")
    for key in ("inputs", "outputs"):
        if data.get(key) is not None:
            _check_string_list(data[key], f"{where}: '{key}'")

    children = data.get("children")
    hidden = raw_hidden_children(data)
    for key, value in (("children", children), ("_children", hidden)):
        if value is not None and not isinstance(value, list):
            raise MalformedDocumentError(f"{where}: '{key}' must be a list")
    if children and hidden:
        raise MalformedDocumentError(f"{where}: node has both visible and hidden children")

    return [(child, f"{where}.children") for child in (children or [])] + [
        (child, f"{where}._children") for child in (hidden or [])
    ]


def load_document(data: Any) -> Node:
    """
    Build a tree from a document mapping.

    Raises:
        MalformedDocumentError: missing fields, bad metadata, wrong root id,
            duplicate ids or a node that is expanded and collapsed at once
    """
    pending = [(data, "$")]
    while pending:
        raw, where = pending.pop()
        pending.extend(_validate_node(raw, where))

    if data["id"] != ROOT_ID:
        raise MalformedDocumentError(f"Root node id must be {ROOT_ID!r}, got {data['id']!r}")

    try:
        tree = Node.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedDocumentError(f"Invalid document: {e}") from e

    duplicates = duplicate_ids(tree)
    if duplicates:
        raise MalformedDocumentError(f"Duplicate node ids: {', '.join(duplicates)}")

    logger.info(f"Loaded mind map with {count_nodes(tree)} nodes")
    return tree


def read_document(path: str | Path) -> Node:
    """Load a document from a JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"{path}: invalid JSON: {e}") from e
    logger.info(f"Reading mind map document from {path}")
    return load_document(data)


def export_document(tree: Node) -> dict:
    """Full structural dump, hidden subtrees included."""
    return tree.to_dict(include_hidden=True)


def dumps_document(tree: Node, indent: int | None = 2) -> str:
    return json.dumps(export_document(tree), indent=indent, ensure_ascii=False)


def write_document(tree: Node, path: str | Path, indent: int | None = 2) -> Path:
    """Write the full document to path and return the path."""
    path = Path(path)
    path.write_text(dumps_document(tree, indent=indent), encoding="utf-8")
    logger.info(f"Exported mind map to {path}")
    return path
