"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from mycelium.config import Settings
from mycelium.models import Node, NodeMetadata
from mycelium.session import MindMapSession
from mycelium.storage import load_document, seed_document


def doc_node(node_id: str, *children: dict, hidden: list[dict] | None = None, **extra) -> dict:
    """Raw document node; positional args are visible children."""
    data = {
        "id": node_id,
        "label": node_id.upper(),
        "description": f"{node_id} description",
        "metadata": {
            "type": "root" if node_id == "root" else "concept",
            "status": "active",
            "tags": [node_id],
            "created": "2024-01-01T00:00:00Z",
        },
    }
    if children:
        data["children"] = list(children)
    if hidden is not None:
        data["_children"] = hidden
    data.update(extra)
    return data


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Test settings with defaults."""
    return Settings(
        seed_document_path=None,
        collapse_on_load=True,
        export_path=str(tmp_path / "export.json"),
    )


@pytest.fixture
def make_node() -> Callable[..., Node]:
    """Factory for in-memory nodes: make_node("a", make_node("a1"), ...)."""

    def factory(node_id: str, *children: Node, hidden: list[Node] | None = None) -> Node:
        return Node(
            id=node_id,
            label=node_id.upper(),
            description="",
            metadata=NodeMetadata(type="root" if node_id == "root" else "concept"),
            children=list(children) if children else None,
            hidden_children=hidden,
        )

    return factory


@pytest.fixture
def scenario_document() -> dict:
    """root -> {A -> {A1, A2}, B}."""
    return doc_node(
        "root",
        doc_node("A", doc_node("A1"), doc_node("A2")),
        doc_node("B"),
    )


@pytest.fixture
def scenario_tree(scenario_document: dict) -> Node:
    """Fully expanded scenario tree."""
    return load_document(scenario_document)


@pytest.fixture
def deep_document() -> dict:
    """root -> A -> B -> C, plus a sibling branch root -> D -> D1."""
    return doc_node(
        "root",
        doc_node("A", doc_node("B", doc_node("C"))),
        doc_node("D", doc_node("D1")),
    )


@pytest.fixture
def seed_tree() -> Node:
    """Built-in seed document, fully expanded."""
    return load_document(seed_document())


@pytest.fixture
def session(test_settings: Settings) -> MindMapSession:
    """Session over the built-in seed with the initial collapse applied."""
    return MindMapSession.from_document(seed_document(), settings=test_settings)


@pytest.fixture
def deep_session(deep_document: dict, test_settings: Settings) -> MindMapSession:
    """Session over the deep document, nothing collapsed."""
    return MindMapSession.from_document(deep_document, collapse_on_load=False, settings=test_settings)


@pytest.fixture
def doc() -> Callable[..., dict]:
    """The doc_node builder, for tests that assemble their own documents."""
    return doc_node
