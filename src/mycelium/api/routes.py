"""API routes for Mycelium.

Provides:
- /v1/view render state (focus root, drill path, breadcrumbs, selection)
- /v1 event endpoints, one per UI action
- /v1/export full document download and /admin/export to disk
"""

import logging
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response
from pydantic import BaseModel

from mycelium.errors import OperationRejected
from mycelium.models import NodePatch, NodeStatus, NodeType
from mycelium.session import MindMapSession
from mycelium.storage import dumps_document
from mycelium.tree import count_nodes, find

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# View Models
# ============================================================================


class BreadcrumbInfo(BaseModel):
    """One drill path entry."""

    index: int
    id: str
    label: str


class ViewResponse(BaseModel):
    """Everything a renderer needs to draw the current state."""

    focus_root: dict
    drill_path: list[str]
    breadcrumbs: list[BreadcrumbInfo]
    selected_id: str | None = None
    selected: dict | None = None
    hovered_id: str | None = None
    can_drill_up: bool = False


# ============================================================================
# Event Models
# ============================================================================


class HoverRequest(BaseModel):
    """Hover target; null clears it."""

    node_id: str | None = None


class MetadataPatchModel(BaseModel):
    """Partial metadata; only the fields sent are merged."""

    type: NodeType | None = None
    status: NodeStatus | None = None
    tags: list[str] | None = None
    created: datetime | None = None


class UpdateNodeRequest(BaseModel):
    """Partial node update from the property editor."""

    label: str | None = None
    description: str | None = None
    metadata: MetadataPatchModel | None = None
    inputs: list[str] | None = None
    outputs: list[str] | None = None

    def to_patch(self) -> NodePatch:
        return NodePatch(
            label=self.label,
            description=self.description,
            metadata=self.metadata.model_dump(exclude_unset=True) if self.metadata else None,
            inputs=self.inputs,
            outputs=self.outputs,
        )


class AddNodeResponse(BaseModel):
    """Result of adding a node."""

    id: str | None
    view: ViewResponse


class DeleteNodeResponse(BaseModel):
    """Result of deleting the selected node."""

    deleted: bool
    node_id: str | None = None
    view: ViewResponse


class UpdateNodeResponse(BaseModel):
    """Result of updating a node."""

    updated: bool
    node: dict | None = None
    view: ViewResponse


# ============================================================================
# Admin Models
# ============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    node_count: int
    version: str = "0.1.0"


class ExportResponse(BaseModel):
    """Result of writing the document to disk."""

    path: str
    node_count: int


# ============================================================================
# Helper Functions
# ============================================================================


def get_session(request: Request) -> MindMapSession:
    """Get mind map session from app state."""
    return request.app.state.session


def build_view(session: MindMapSession) -> ViewResponse:
    view = session.view()
    return ViewResponse(
        focus_root=view.focus_root.to_dict(include_hidden=False),
        drill_path=list(view.drill_path),
        breadcrumbs=[
            BreadcrumbInfo(index=c.index, id=c.id, label=c.label) for c in view.breadcrumbs
        ],
        selected_id=view.selected_id,
        selected=view.selected.to_dict(include_hidden=False) if view.selected else None,
        hovered_id=view.hovered_id,
        can_drill_up=view.can_drill_up,
    )


# ============================================================================
# View Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Health check endpoint."""
    session = get_session(request)
    return HealthResponse(status="healthy", node_count=count_nodes(session.tree))


@router.get("/v1/view", response_model=ViewResponse)
async def get_view(request: Request) -> ViewResponse:
    """Current focus root, drill path and selection."""
    return build_view(get_session(request))


@router.get("/v1/nodes/{node_id}")
async def get_node(request: Request, node_id: str) -> dict:
    """Full node including hidden children (tooltip / side panel)."""
    node = find(get_session(request).tree, node_id)
    if node is None:
        raise HTTPException(status_code=404, detail="Node not found")
    return node.to_dict()


# ============================================================================
# Pointer Events
# ============================================================================


@router.post("/v1/nodes/{node_id}/click", response_model=ViewResponse)
async def click_node(request: Request, node_id: str) -> ViewResponse:
    """Select a node."""
    session = get_session(request)
    session.click(node_id)
    return build_view(session)


@router.post("/v1/nodes/{node_id}/double-click", response_model=ViewResponse)
async def double_click_node(request: Request, node_id: str) -> ViewResponse:
    """Drill into a node."""
    session = get_session(request)
    session.double_click(node_id)
    return build_view(session)


@router.post("/v1/selection/clear", response_model=ViewResponse)
async def clear_selection(request: Request) -> ViewResponse:
    """Click on empty canvas."""
    session = get_session(request)
    session.deselect()
    return build_view(session)


@router.put("/v1/hover", response_model=ViewResponse)
async def hover_node(request: Request, body: HoverRequest) -> ViewResponse:
    """Set or clear the hovered node."""
    session = get_session(request)
    session.hover(body.node_id)
    return build_view(session)


# ============================================================================
# Visibility Events
# ============================================================================


@router.post("/v1/nodes/{node_id}/toggle", response_model=ViewResponse)
async def toggle_node(request: Request, node_id: str) -> ViewResponse:
    """Collapse or expand one node."""
    session = get_session(request)
    session.toggle_collapse(node_id)
    return build_view(session)


@router.post("/v1/expand-all", response_model=ViewResponse)
async def expand_all(request: Request) -> ViewResponse:
    """Expand the whole focus subtree."""
    session = get_session(request)
    session.expand_all()
    return build_view(session)


@router.post("/v1/collapse-all", response_model=ViewResponse)
async def collapse_all(request: Request) -> ViewResponse:
    """Collapse everything below the focus root."""
    session = get_session(request)
    session.collapse_all()
    return build_view(session)


# ============================================================================
# Navigation Events
# ============================================================================


@router.post("/v1/drill-down", response_model=ViewResponse)
async def drill_down(request: Request) -> ViewResponse:
    """Drill into the selected node."""
    session = get_session(request)
    session.drill_down()
    return build_view(session)


@router.post("/v1/drill-up", response_model=ViewResponse)
async def drill_up(request: Request) -> ViewResponse:
    """Go back to the parent focus root."""
    session = get_session(request)
    session.drill_up()
    return build_view(session)


@router.post("/v1/breadcrumbs/{index}", response_model=ViewResponse)
async def breadcrumb_jump(request: Request, index: int) -> ViewResponse:
    """Jump to a drill path entry."""
    session = get_session(request)
    session.breadcrumb_jump(index)
    return build_view(session)


# ============================================================================
# Editing Events
# ============================================================================


@router.post("/v1/nodes", response_model=AddNodeResponse)
async def add_node(request: Request) -> AddNodeResponse:
    """Add a child under the selection (or the focus root)."""
    session = get_session(request)
    node_id = session.add()
    return AddNodeResponse(id=node_id, view=build_view(session))


@router.delete("/v1/selection", response_model=DeleteNodeResponse)
async def delete_selected(request: Request) -> DeleteNodeResponse:
    """Delete the selected node."""
    session = get_session(request)

    try:
        node_id = session.delete()
        return DeleteNodeResponse(
            deleted=node_id is not None,
            node_id=node_id,
            view=build_view(session),
        )

    except OperationRejected as e:
        raise HTTPException(status_code=409, detail=e.reason)
    except Exception as e:
        logger.exception(f"Error deleting node: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to delete node: {str(e)}",
        )


@router.patch("/v1/nodes/{node_id}", response_model=UpdateNodeResponse)
async def update_node(
    request: Request,
    node_id: str,
    body: UpdateNodeRequest,
) -> UpdateNodeResponse:
    """Apply a partial update to a node."""
    session = get_session(request)

    try:
        patch = body.to_patch()
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    node = session.update(node_id, patch)
    return UpdateNodeResponse(
        updated=node is not None,
        node=node.to_dict(include_hidden=False) if node else None,
        view=build_view(session),
    )


# ============================================================================
# Export Endpoints
# ============================================================================


@router.get("/v1/export")
async def export_document(request: Request) -> Response:
    """Download the whole tree, hidden subtrees included."""
    session = get_session(request)
    return Response(
        content=dumps_document(session.tree, indent=session.settings.export_indent),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="mindmap_data.json"'},
    )


@router.post("/admin/export", response_model=ExportResponse)
async def write_export(request: Request) -> ExportResponse:
    """Write the document to the configured export path."""
    session = get_session(request)

    try:
        path: Path = session.save()
        return ExportResponse(path=str(path), node_count=count_nodes(session.tree))

    except Exception as e:
        logger.exception(f"Error writing export: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Export failed: {str(e)}",
        )
