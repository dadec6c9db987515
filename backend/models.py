"""SQLAlchemy ORM models for persisted designer sessions."""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Float, Integer, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship
from database import Base
import enum


def generate_uuid():
    return str(uuid.uuid4())


class ProjectStatus(enum.Enum):
    DRAFTING = "drafting"
    COMPLETED = "completed"


class Project(Base):
    __tablename__ = "projects"

    id = Column(String, primary_key=True, default=generate_uuid)
    session_id = Column(String, index=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    status = Column(SAEnum(ProjectStatus), default=ProjectStatus.DRAFTING)

    rooms = relationship(
        "Room", back_populates="project", cascade="all, delete-orphan",
        order_by="Room.room_index", lazy="selectin",
    )
    connections = relationship(
        "Connection", back_populates="project", cascade="all, delete-orphan",
        order_by="Connection.position", lazy="selectin",
    )
    boundary_rectangles = relationship(
        "BoundaryRectangle", back_populates="project", cascade="all, delete-orphan",
        order_by="BoundaryRectangle.position", lazy="selectin",
    )


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (UniqueConstraint("project_id", "room_index", name="uq_room_project_index"),)

    id = Column(String, primary_key=True, default=generate_uuid)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False)
    room_index = Column(Integer, nullable=False)  # graph node id, sequential per project
    room_type = Column(String, nullable=False)
    number = Column(String, nullable=False)
    size = Column(String, nullable=False)
    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)

    project = relationship("Project", back_populates="rooms")


class Connection(Base):
    __tablename__ = "connections"

    id = Column(String, primary_key=True, default=generate_uuid)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False)
    position = Column(Integer, nullable=False)
    source = Column(Integer, nullable=False)
    target = Column(Integer, nullable=False)
    value = Column(Integer, nullable=False, default=-1)

    project = relationship("Project", back_populates="connections")


class BoundaryRectangle(Base):
    __tablename__ = "boundary_rectangles"

    id = Column(String, primary_key=True, default=generate_uuid)
    project_id = Column(String, ForeignKey("projects.id"), nullable=False)
    position = Column(Integer, nullable=False)  # draw order
    x = Column(Float, nullable=False)
    y = Column(Float, nullable=False)
    width = Column(Float, nullable=False)
    height = Column(Float, nullable=False)

    project = relationship("Project", back_populates="boundary_rectangles")
