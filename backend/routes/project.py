"""
Designer project routes.

A project persists one designer session: the room list, the connectivity
edges between rooms and the boundary rectangles drawn on the canvas.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from config import BOUNDARY_POINT_TOLERANCE
from database import get_db
from schemas import (
    BoundaryVerticesResponse,
    ConnectionOut,
    ConnectionRequest,
    LayoutDescription,
    ProjectCreate,
    ProjectOut,
    RectangleIn,
    RectangleOut,
    RoomCreate,
    RoomOut,
)
from services.boundary import extract_boundary_vertices_as_dicts
from services.projects import (
    add_project_rectangle,
    add_project_room,
    clear_project_rectangles,
    create_project,
    delete_project,
    export_project_layout,
    get_project,
    link_project_rooms,
    project_to_dict,
    rectangles_of,
    toggle_project_connection,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/projects", tags=["projects"])


async def _load(db: AsyncSession, project_id: str):
    project = await get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


@router.post("", response_model=ProjectOut)
async def post_project(req: ProjectCreate, db: AsyncSession = Depends(get_db)):
    """Start a new designer session."""
    try:
        project = await create_project(db, req.session_id)
        return project_to_dict(project)
    except Exception as e:
        logger.error(f"Project creation failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{project_id}", response_model=ProjectOut)
async def read_project(project_id: str, db: AsyncSession = Depends(get_db)):
    project = await _load(db, project_id)
    return project_to_dict(project)


@router.delete("/{project_id}")
async def remove_project(project_id: str, db: AsyncSession = Depends(get_db)):
    project = await _load(db, project_id)
    await delete_project(db, project)
    return {"deleted": project_id}


# ---------- Rooms / Connectivity ----------

@router.post("/{project_id}/rooms", response_model=RoomOut)
async def post_room(project_id: str, req: RoomCreate, db: AsyncSession = Depends(get_db)):
    """Add a room; it gets an unconnected edge from every existing room."""
    project = await _load(db, project_id)
    try:
        return await add_project_room(db, project, req.type, req.number, req.size)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{project_id}/connectivity/toggle", response_model=list[ConnectionOut])
async def post_toggle(project_id: str, req: ConnectionRequest, db: AsyncSession = Depends(get_db)):
    """Flip an edge between connected (1) and not connected (-1)."""
    project = await _load(db, project_id)
    try:
        return await toggle_project_connection(db, project, req.source, req.target)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{project_id}/connectivity/link", response_model=list[ConnectionOut])
async def post_link(project_id: str, req: ConnectionRequest, db: AsyncSession = Depends(get_db)):
    """Drag-to-connect: add a connected edge, or remove it if present."""
    project = await _load(db, project_id)
    try:
        return await link_project_rooms(db, project, req.source, req.target)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# ---------- Boundary ----------

@router.post("/{project_id}/boundary", response_model=RectangleOut)
async def post_rectangle(project_id: str, req: RectangleIn, db: AsyncSession = Depends(get_db)):
    """Append a rectangle committed by the boundary canvas."""
    project = await _load(db, project_id)
    return await add_project_rectangle(db, project, req.model_dump())


@router.delete("/{project_id}/boundary")
async def delete_rectangles(project_id: str, db: AsyncSession = Depends(get_db)):
    project = await _load(db, project_id)
    await clear_project_rectangles(db, project)
    return {"cleared": True}


@router.get("/{project_id}/boundary/vertices", response_model=BoundaryVerticesResponse)
async def project_vertices(project_id: str, db: AsyncSession = Depends(get_db)):
    """Boundary vertices recomputed from the stored rectangles."""
    project = await _load(db, project_id)
    vertices = extract_boundary_vertices_as_dicts(rectangles_of(project), BOUNDARY_POINT_TOLERANCE)
    return {"vertices": vertices, "num_vertices": len(vertices)}


@router.get("/{project_id}/layout", response_model=LayoutDescription)
async def project_layout(project_id: str, db: AsyncSession = Depends(get_db)):
    """Export the layout description for the generation backend."""
    project = await _load(db, project_id)
    try:
        return await export_project_layout(db, project, BOUNDARY_POINT_TOLERANCE)
    except Exception as e:
        logger.error(f"Layout export failed for {project_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
