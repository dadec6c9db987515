"""Persisted designer sessions: rooms, connectivity and boundary rectangles."""

import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from models import BoundaryRectangle, Connection, Project, ProjectStatus, Room
from services.boundary import POINT_TOLERANCE
from services.designer import add_room, link_rooms, serialize_layout, toggle_connection

logger = logging.getLogger(__name__)


def rooms_of(project: Project) -> list:
    return [
        {"id": r.room_index, "x": r.x, "y": r.y, "type": r.room_type,
         "number": r.number, "size": r.size}
        for r in project.rooms
    ]


def connectivity_of(project: Project) -> list:
    return [{"source": c.source, "target": c.target, "value": c.value} for c in project.connections]


def rectangles_of(project: Project) -> list:
    return [
        {"x": r.x, "y": r.y, "width": r.width, "height": r.height}
        for r in project.boundary_rectangles
    ]


def project_to_dict(project: Project) -> dict:
    return {
        "id": project.id,
        "session_id": project.session_id,
        "created_at": project.created_at,
        "status": project.status.value,
        "rooms": rooms_of(project),
        "connectivity": connectivity_of(project),
        "boundary": rectangles_of(project),
    }


async def create_project(db: AsyncSession, session_id: str) -> Project:
    project = Project(session_id=session_id)
    db.add(project)
    await db.commit()
    logger.info("Created project %s for session %s", project.id, session_id)
    return await get_project(db, project.id)


async def get_project(db: AsyncSession, project_id: str):
    """Project with rooms, edges and rectangles loaded, or None."""
    result = await db.execute(
        select(Project)
        .where(Project.id == project_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def delete_project(db: AsyncSession, project: Project) -> None:
    await db.delete(project)
    await db.commit()


def _append_connections(project: Project, edges: list) -> None:
    start = len(project.connections)
    for i, edge in enumerate(edges, start=start):
        project.connections.append(Connection(
            position=i,
            source=edge["source"], target=edge["target"], value=edge["value"],
        ))


def _replace_connections(project: Project, connectivity: list) -> None:
    project.connections.clear()
    _append_connections(project, connectivity)


async def add_project_room(db: AsyncSession, project: Project, room_type: str,
                           number: str, size: str) -> dict:
    """Add a room and its unconnected edges to every existing room."""
    _, connectivity, new_room = add_room(
        rooms_of(project), connectivity_of(project), room_type, number, size,
    )
    project.rooms.append(Room(
        room_index=new_room["id"], room_type=room_type,
        number=number, size=size, x=new_room["x"], y=new_room["y"],
    ))
    _append_connections(project, connectivity[len(project.connections):])
    await db.commit()
    return new_room


async def toggle_project_connection(db: AsyncSession, project: Project,
                                    source: int, target: int) -> list:
    connectivity = toggle_connection(connectivity_of(project), source, target)
    for row in project.connections:
        if row.source == source and row.target == target:
            row.value = next(
                e["value"] for e in connectivity
                if e["source"] == source and e["target"] == target
            )
    await db.commit()
    return connectivity


async def link_project_rooms(db: AsyncSession, project: Project,
                             source: int, target: int) -> list:
    known = {r.room_index for r in project.rooms}
    if source not in known or target not in known:
        raise ValueError(f"Unknown room id in link {source} -> {target}")
    connectivity = link_rooms(connectivity_of(project), source, target)
    _replace_connections(project, connectivity)
    await db.commit()
    return connectivity


async def add_project_rectangle(db: AsyncSession, project: Project, rect: dict) -> dict:
    """Append a committed canvas rectangle in draw order."""
    project.boundary_rectangles.append(BoundaryRectangle(
        position=len(project.boundary_rectangles),
        x=rect["x"], y=rect["y"], width=rect["width"], height=rect["height"],
    ))
    await db.commit()
    return rect


async def clear_project_rectangles(db: AsyncSession, project: Project) -> None:
    project.boundary_rectangles.clear()
    await db.commit()


async def export_project_layout(db: AsyncSession, project: Project,
                                tolerance: float = POINT_TOLERANCE) -> dict:
    """Serialize the layout description and mark the project completed."""
    layout = serialize_layout(
        rooms_of(project), connectivity_of(project), rectangles_of(project), tolerance,
    )
    project.status = ProjectStatus.COMPLETED
    await db.commit()
    layout["project_id"] = project.id
    return layout
