"""Unit tests for API endpoints."""

import json

import pytest
from fastapi.testclient import TestClient

from mycelium.api.main import create_app
from mycelium.api.routes import (
    HealthResponse,
    MetadataPatchModel,
    UpdateNodeRequest,
    ViewResponse,
)
from mycelium.session import MindMapSession


class TestRequestModels:
    """Tests for request/response models."""

    def test_update_request_to_patch(self) -> None:
        """Test only sent metadata fields make it into the patch."""
        req = UpdateNodeRequest(label="x", metadata=MetadataPatchModel(status="completed"))
        patch = req.to_patch()
        assert patch.label == "x"
        assert patch.description is None
        assert patch.metadata == {"status": "completed"}

    def test_update_request_without_metadata(self) -> None:
        """Test metadata stays None when not sent."""
        assert UpdateNodeRequest(description="d").to_patch().metadata is None

    def test_health_response(self) -> None:
        """Test health response model."""
        resp = HealthResponse(status="healthy", node_count=3)
        assert resp.version == "0.1.0"

    def test_view_response_defaults(self) -> None:
        """Test view response defaults."""
        resp = ViewResponse(focus_root={"id": "root"}, drill_path=["root"], breadcrumbs=[])
        assert resp.selected_id is None
        assert resp.can_drill_up is False


class TestEndpoints:
    """Tests for the event endpoints."""

    @pytest.fixture
    def client(self, session: MindMapSession, test_settings):
        """Test client over the seed session."""
        app = create_app(settings=test_settings, session=session)
        with TestClient(app, raise_server_exceptions=False) as client:
            yield client

    def test_health(self, client: TestClient) -> None:
        """Test health check."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["node_count"] == 10

    def test_view_is_visible_projection(self, client: TestClient) -> None:
        """Test the focus root excludes hidden subtrees."""
        data = client.get("/v1/view").json()
        assert data["drill_path"] == ["root"]
        c1 = data["focus_root"]["children"][0]
        assert c1["collapsed"] is True
        assert "_children" not in c1
        assert c1["hiddenCount"] == 2

    def test_get_node(self, client: TestClient) -> None:
        """Test node details include hidden children; unknown ids 404."""
        data = client.get("/v1/nodes/c2").json()
        assert [c["id"] for c in data["_children"]] == ["c2-1", "c2-2"]
        assert client.get("/v1/nodes/nope").status_code == 404

    def test_click_and_hover(self, client: TestClient) -> None:
        """Test selection and hover state."""
        data = client.post("/v1/nodes/c1/click").json()
        assert data["selected_id"] == "c1"
        assert data["selected"]["label"] == "Neural Plasticity"

        data = client.put("/v1/hover", json={"node_id": "c3"}).json()
        assert data["hovered_id"] == "c3"
        data = client.put("/v1/hover", json={"node_id": None}).json()
        assert data["hovered_id"] is None

        data = client.post("/v1/selection/clear").json()
        assert data["selected_id"] is None

    def test_drill_navigation(self, client: TestClient) -> None:
        """Test double click, drill up, breadcrumbs."""
        data = client.post("/v1/nodes/c2/double-click").json()
        assert data["drill_path"] == ["root", "c2"]
        assert data["can_drill_up"] is True
        assert data["focus_root"]["id"] == "c2"
        assert [c["id"] for c in data["focus_root"]["children"]] == ["c2-1", "c2-2"]

        client.post("/v1/nodes/c2-2/click")
        data = client.post("/v1/drill-down").json()
        assert [b["label"] for b in data["breadcrumbs"]] == [
            "Central Spore",
            "Substrate Synthesis",
            "Pattern Matching",
        ]

        data = client.post("/v1/drill-up").json()
        assert data["drill_path"] == ["root", "c2"]

        data = client.post("/v1/breadcrumbs/0").json()
        assert data["drill_path"] == ["root"]

    def test_toggle_and_bulk(self, client: TestClient) -> None:
        """Test toggle, expand all and collapse all."""
        data = client.post("/v1/nodes/c1/toggle").json()
        assert data["focus_root"]["children"][0]["collapsed"] is False

        data = client.post("/v1/expand-all").json()
        assert all(not c["collapsed"] for c in data["focus_root"]["children"])

        data = client.post("/v1/collapse-all").json()
        assert data["focus_root"]["collapsed"] is False
        assert all(c["collapsed"] for c in data["focus_root"]["children"])

    def test_add_node(self, client: TestClient) -> None:
        """Test adding under a collapsed selection reveals it."""
        client.post("/v1/nodes/c3/click")
        data = client.post("/v1/nodes").json()
        assert data["id"].startswith("node-")
        c3 = data["view"]["focus_root"]["children"][2]
        assert c3["collapsed"] is False
        assert c3["children"][-1]["id"] == data["id"]

    def test_delete_selected(self, client: TestClient) -> None:
        """Test delete, no-selection delete and rejections."""
        data = client.delete("/v1/selection").json()
        assert data["deleted"] is False

        client.post("/v1/nodes/c1-1/click")
        data = client.delete("/v1/selection").json()
        assert data["deleted"] is True
        assert data["node_id"] == "c1-1"
        assert client.get("/v1/nodes/c1-1").status_code == 404

        client.post("/v1/nodes/root/click")
        response = client.delete("/v1/selection")
        assert response.status_code == 409
        assert "root" in response.json()["detail"]

        client.post("/v1/nodes/c2/double-click")
        client.post("/v1/nodes/c2/click")
        response = client.delete("/v1/selection")
        assert response.status_code == 409

    def test_update_node(self, client: TestClient) -> None:
        """Test partial update with metadata merge."""
        response = client.patch(
            "/v1/nodes/c1-1",
            json={"label": "Pruning", "metadata": {"status": "completed"}},
        )
        assert response.status_code == 200
        node = response.json()["node"]
        assert node["label"] == "Pruning"
        assert node["metadata"]["status"] == "completed"
        assert node["metadata"]["type"] == "task"
        assert node["metadata"]["tags"] == ["optimization"]

    def test_update_invalid_metadata(self, client: TestClient) -> None:
        """Test bad literal values are rejected by validation."""
        response = client.patch("/v1/nodes/c1", json={"metadata": {"type": "idea"}})
        assert response.status_code == 422

    def test_update_missing_node(self, client: TestClient) -> None:
        """Test update of an unknown node is a no-op."""
        data = client.patch("/v1/nodes/nope", json={"label": "x"}).json()
        assert data["updated"] is False

    def test_export_download(self, client: TestClient) -> None:
        """Test the export contains hidden subtrees and is an attachment."""
        response = client.get("/v1/export")
        assert response.status_code == 200
        assert "attachment" in response.headers["content-disposition"]
        data = json.loads(response.content)
        assert data["children"][1]["_children"][1]["_children"][0]["id"] == "c2-2-1"

    def test_admin_export(self, client: TestClient, test_settings) -> None:
        """Test writing the export to disk."""
        data = client.post("/admin/export").json()
        assert data["path"] == test_settings.export_path
        assert data["node_count"] == 10
