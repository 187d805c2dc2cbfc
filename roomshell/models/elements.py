"""Room element models: boundary edges, detected corners and walls, directions."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel, ConfigDict

from .geometry import Vector3


class WallDirection(str, Enum):
    NORTH = "North"  # +Z
    EAST = "East"    # +X
    SOUTH = "South"  # -Z
    WEST = "West"    # -X


class CornerDirection(str, Enum):
    NORTH_EAST = "NorthEast"  # +X, +Z
    SOUTH_EAST = "SouthEast"  # +X, -Z
    SOUTH_WEST = "SouthWest"  # -X, -Z
    NORTH_WEST = "NorthWest"  # -X, +Z


class BackDirection(str, Enum):
    """Quadrant treated as the back of the room for isometric viewing."""
    NORTH_EAST = "NorthEast"
    SOUTH_EAST = "SouthEast"
    SOUTH_WEST = "SouthWest"
    NORTH_WEST = "NorthWest"


class BoundaryEdge(BaseModel):
    """A base-rim edge: source vertex indices plus world positions."""
    model_config = ConfigDict(frozen=True)

    a: int
    b: int
    start: Vector3
    end: Vector3

    def key(self) -> tuple[int, int]:
        return (min(self.a, self.b), max(self.a, self.b))

    def flipped(self) -> BoundaryEdge:
        return BoundaryEdge(a=self.b, b=self.a, start=self.end, end=self.start)

    def midpoint(self) -> Vector3:
        return self.start.lerp(self.end, 0.5)


class DetectedCorner(BaseModel):
    """A corner found on the perimeter loop."""
    model_config = ConfigDict(frozen=True)

    position: Vector3
    angle: float     # Undirected angle between the two edges, degrees
    normal: Vector3  # Outward, horizontal, unit length


class DetectedWall(BaseModel):
    """A wall chord between two consecutive corners."""
    model_config = ConfigDict(frozen=True)

    start: Vector3
    end: Vector3
    center: Vector3
    direction: Vector3   # Unit vector start -> end
    length: float
    face_normal: Vector3  # Outward, world space

    @classmethod
    def between(cls, start: Vector3, end: Vector3, face_normal: Vector3) -> DetectedWall:
        return cls(
            start=start,
            end=end,
            center=start.lerp(end, 0.5),
            direction=(end - start).normalized(),
            length=start.distance_to(end),
            face_normal=face_normal,
        )
