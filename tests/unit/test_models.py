"""Unit tests for data models."""

from datetime import datetime, timezone

import pytest

from mycelium.models import Node, NodeMetadata, NodePatch, parse_datetime


class TestNodeMetadata:
    """Tests for NodeMetadata."""

    def test_defaults(self) -> None:
        """Test default metadata for new nodes."""
        meta = NodeMetadata()
        assert meta.type == "concept"
        assert meta.status == "active"
        assert meta.tags == []
        assert meta.created.tzinfo is not None

    def test_invalid_type_rejected(self) -> None:
        """Test that unknown node types fail on construction."""
        with pytest.raises(ValueError):
            NodeMetadata(type="idea")

    def test_invalid_status_rejected(self) -> None:
        """Test that unknown statuses fail on construction."""
        with pytest.raises(ValueError):
            NodeMetadata(status="archived")

    def test_merged_overlays_only_patched_keys(self) -> None:
        """Test key-wise metadata merge."""
        meta = NodeMetadata(type="task", status="pending", tags=["a"])
        merged = meta.merged({"status": "completed"})
        assert merged.type == "task"
        assert merged.status == "completed"
        assert merged.tags == ["a"]
        assert merged.created == meta.created
        # Original is untouched
        assert meta.status == "pending"

    def test_from_dict_parses_js_timestamp(self) -> None:
        """Test ISO timestamps with a trailing Z."""
        meta = NodeMetadata.from_dict(
            {"type": "note", "status": "active", "created": "2024-05-01T10:00:00.000Z"}
        )
        assert meta.created == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        assert meta.tags == []

    def test_parse_datetime_passthrough(self) -> None:
        """Test that datetimes and None pass through."""
        now = datetime.now(timezone.utc)
        assert parse_datetime(now) is now
        assert parse_datetime(None) is None


class TestNodeVisibility:
    """Tests for the per-node expanded/collapsed state machine."""

    def test_leaf_is_expanded(self) -> None:
        """Test that a childless node is expanded and has no children."""
        node = Node(id="x", label="X")
        assert node.visibility == "expanded"
        assert not node.collapsed
        assert not node.has_children

    def test_collapse_moves_children(self) -> None:
        """Test collapsing swaps children into hidden_children."""
        kids = [Node(id="a", label="A"), Node(id="b", label="B")]
        node = Node(id="x", label="X", children=kids)

        assert node.collapse() is True
        assert node.children is None
        assert node.hidden_children == kids
        assert node.collapsed
        assert node.visibility == "collapsed"

    def test_expand_appends_hidden_after_visible(self) -> None:
        """Test that expand keeps existing children first."""
        node = Node(
            id="x",
            label="X",
            children=[Node(id="a", label="A")],
            hidden_children=[Node(id="b", label="B")],
        )
        node.expand()
        assert [c.id for c in node.children] == ["a", "b"]
        assert node.hidden_children is None

    def test_toggle_without_children_is_noop(self) -> None:
        """Test toggling a leaf changes nothing."""
        node = Node(id="x", label="X")
        assert node.toggle() is False
        assert node.children is None
        assert node.hidden_children is None

    def test_collapsed_false_when_hidden_list_empty(self) -> None:
        """Test collapsed flag requires non-empty hidden children."""
        node = Node(id="x", label="X", hidden_children=[])
        assert not node.collapsed
        assert not node.has_children


class TestNodeSerialization:
    """Tests for Node to_dict/from_dict and clone."""

    def test_to_dict_uses_document_keys(self) -> None:
        """Test hidden children export under _children."""
        node = Node(id="x", label="X", hidden_children=[Node(id="a", label="A")])
        data = node.to_dict()
        assert data["_children"][0]["id"] == "a"
        assert data["collapsed"] is True
        assert "children" not in data

    def test_visible_projection_summarizes_hidden(self) -> None:
        """Test include_hidden=False replaces hidden subtrees with a count."""
        node = Node(id="x", label="X", hidden_children=[Node(id="a", label="A")])
        data = node.to_dict(include_hidden=False)
        assert "_children" not in data
        assert data["hiddenCount"] == 1

    def test_from_dict_accepts_hidden_children_alias(self) -> None:
        """Test that hiddenChildren is read like _children."""
        node = Node.from_dict(
            {
                "id": "x",
                "label": "X",
                "metadata": {"type": "concept", "status": "active"},
                "hiddenChildren": [
                    {"id": "a", "label": "A", "metadata": {"type": "note", "status": "pending"}}
                ],
            }
        )
        assert node.collapsed
        assert node.hidden_children[0].metadata.status == "pending"
        assert node.description == ""

    def test_inputs_outputs_round_trip(self) -> None:
        """Test inputs/outputs survive conversion."""
        node = Node(id="x", label="X", inputs=["in"], outputs=["out"])
        restored = Node.from_dict(node.to_dict())
        assert restored.inputs == ["in"]
        assert restored.outputs == ["out"]

    def test_clone_shares_nothing_mutable(self) -> None:
        """Test clone is a deep structural copy."""
        node = Node(
            id="x",
            label="X",
            metadata=NodeMetadata(tags=["t"]),
            children=[Node(id="a", label="A")],
        )
        copy = node.clone()
        assert copy == node

        copy.children[0].label = "changed"
        copy.metadata.tags.append("u")
        assert node.children[0].label == "A"
        assert node.metadata.tags == ["t"]


class TestNodePatch:
    """Tests for NodePatch."""

    def test_apply_partial(self) -> None:
        """Test that only given fields are changed."""
        node = Node(id="x", label="X", description="old", metadata=NodeMetadata(tags=["a"]))
        NodePatch(description="new", metadata={"status": "completed"}).apply(node)
        assert node.label == "X"
        assert node.description == "new"
        assert node.metadata.status == "completed"
        assert node.metadata.tags == ["a"]

    def test_unknown_metadata_field_rejected(self) -> None:
        """Test that unknown metadata keys fail before any mutation."""
        with pytest.raises(ValueError):
            NodePatch(metadata={"colour": "green"})

    def test_invalid_metadata_value_rejected(self) -> None:
        """Test that invalid literal values fail on construction."""
        with pytest.raises(ValueError):
            NodePatch(metadata={"type": "idea"})

    def test_is_empty(self) -> None:
        """Test empty patch detection."""
        assert NodePatch().is_empty()
        assert not NodePatch(label="x").is_empty()
