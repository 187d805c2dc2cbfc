"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel

from roomshell.core.directions import ElementKind
from roomshell.models import (
    CornerDirection, DoorOperation, HistoryEntry, RoomRecord,
    SolidMesh, Transform, Vector3, Volume, WallDirection,
)


class AnalyzeRequest(BaseModel):
    """Request body for the /analyze endpoint."""
    mesh: SolidMesh
    angle_threshold: float | None = None


class CornerOutput(BaseModel):
    position: Vector3
    angle: float
    normal: Vector3
    direction: CornerDirection


class WallOutput(BaseModel):
    start: Vector3
    end: Vector3
    center: Vector3
    length: float
    face_normal: Vector3
    direction: WallDirection


class AnalyzeResponse(BaseModel):
    """Response from the /analyze endpoint."""
    corners: list[CornerOutput]
    walls: list[WallOutput]


class ClassifyRequest(BaseModel):
    normal: Vector3
    kind: ElementKind = ElementKind.WALL


class ClassifyResponse(BaseModel):
    direction: str


class MeshCreateRequest(BaseModel):
    """A freeform solid added to the scene, as a room source or a door."""
    mesh: SolidMesh
    name: str = "Mesh"


class RoomCreateRequest(BaseModel):
    mesh_id: str


class DoorCreateRequest(BaseModel):
    door_id: str


class DoorMoveRequest(BaseModel):
    transform: Transform


class SceneResponse(BaseModel):
    volumes: list[Volume]
    rooms: list[RoomRecord]
    doors: list[DoorOperation]


class HistoryResponse(BaseModel):
    entries: list[HistoryEntry]
