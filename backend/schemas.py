"""Pydantic schemas for API request/response validation."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


# ---------- Boundary ----------
# Keeps x + width and y + height finite.
MAX_COORDINATE = 1e12


class RectangleIn(BaseModel):
    x: float = Field(..., ge=-MAX_COORDINATE, le=MAX_COORDINATE)
    y: float = Field(..., ge=-MAX_COORDINATE, le=MAX_COORDINATE)
    width: float = Field(..., ge=0, le=MAX_COORDINATE)
    height: float = Field(..., ge=0, le=MAX_COORDINATE)

    class Config:
        allow_inf_nan = False


class RectangleOut(BaseModel):
    x: float
    y: float
    width: float
    height: float

    class Config:
        from_attributes = True


class PointOut(BaseModel):
    x: float
    y: float


class BoundaryRequest(BaseModel):
    rectangles: list[RectangleIn] = []


class BoundaryVerticesResponse(BaseModel):
    vertices: list[PointOut]
    num_vertices: int


class UnionPolygon(BaseModel):
    exterior: list[list[float]]
    interiors: list[list[list[float]]] = []


class BoundaryPolygonResponse(BaseModel):
    polygons: list[UnionPolygon]
    area: float
    perimeter: float
    num_polygons: int


# ---------- Rooms / Connectivity ----------
class RoomCreate(BaseModel):
    type: str = Field(..., description="Room category tag, e.g. 'bedroom'")
    number: str
    size: str


class RoomOut(BaseModel):
    id: int
    x: float
    y: float
    type: str
    number: str
    size: str


class ConnectionRequest(BaseModel):
    source: int
    target: int


class ConnectionOut(BaseModel):
    source: int
    target: int
    value: int


class RoomCategoryOut(BaseModel):
    type: str
    class_id: int
    color: str


# ---------- Project ----------
class ProjectCreate(BaseModel):
    session_id: str


class ProjectOut(BaseModel):
    id: str
    session_id: str
    created_at: datetime
    status: str
    rooms: list[RoomOut] = []
    connectivity: list[ConnectionOut] = []
    boundary: list[RectangleOut] = []


class LayoutDescription(BaseModel):
    rooms: list[RoomOut]
    connectivity: list[ConnectionOut]
    boundary: list[PointOut]
    room_classes: dict[str, int] = {}
    project_id: Optional[str] = None
