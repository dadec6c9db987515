"""
Stateless boundary routes.

Endpoints:
  POST /api/boundary/vertices — union boundary vertices of drawn rectangles
  POST /api/boundary/polygon  — traversal-ordered union outline
  GET  /api/rooms/categories  — room category table
"""

import logging
from fastapi import APIRouter, HTTPException

from config import BOUNDARY_POINT_TOLERANCE
from schemas import (
    BoundaryPolygonResponse,
    BoundaryRequest,
    BoundaryVerticesResponse,
    RoomCategoryOut,
)
from services.boundary import extract_boundary_vertices_as_dicts, union_polygon
from services.layout_constants import list_categories

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["boundary"])


@router.post("/boundary/vertices", response_model=BoundaryVerticesResponse)
async def boundary_vertices(req: BoundaryRequest):
    """Vertices on the boundary of the union of the given rectangles."""
    rectangles = [r.model_dump() for r in req.rectangles]
    vertices = extract_boundary_vertices_as_dicts(rectangles, BOUNDARY_POINT_TOLERANCE)
    return {"vertices": vertices, "num_vertices": len(vertices)}


@router.post("/boundary/polygon", response_model=BoundaryPolygonResponse)
async def boundary_polygon(req: BoundaryRequest):
    """Ordered outline (with holes) of the union of the given rectangles."""
    try:
        return union_polygon([r.model_dump() for r in req.rectangles])
    except Exception as e:
        logger.error(f"Union polygon failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/rooms/categories", response_model=list[RoomCategoryOut])
async def room_categories():
    """Closed set of room categories with their class ids and colours."""
    return list_categories()
