"""Direction classification: maps outward normals to compass labels."""

from __future__ import annotations
from enum import Enum

from roomshell.models import CornerDirection, Vector3, WallDirection


# Table order is the tie-break order: the first entry among equal minima wins
WALL_SECTORS: list[tuple[WallDirection, Vector3]] = [
    (WallDirection.NORTH, Vector3(x=0.0, y=0.0, z=1.0)),
    (WallDirection.EAST, Vector3(x=1.0, y=0.0, z=0.0)),
    (WallDirection.SOUTH, Vector3(x=0.0, y=0.0, z=-1.0)),
    (WallDirection.WEST, Vector3(x=-1.0, y=0.0, z=0.0)),
]

# (x > 0, z > 0) -> quadrant; any zero component falls through to the default
CORNER_QUADRANTS: dict[tuple[bool, bool], CornerDirection] = {
    (True, True): CornerDirection.NORTH_EAST,
    (True, False): CornerDirection.SOUTH_EAST,
    (False, False): CornerDirection.SOUTH_WEST,
    (False, True): CornerDirection.NORTH_WEST,
}

WALL_FALLBACK = WallDirection.NORTH
CORNER_FALLBACK = CornerDirection.NORTH_WEST

SECTOR_HALF_ANGLE = 45.0
ANGLE_EPSILON = 1e-6


class ElementKind(str, Enum):
    WALL = "wall"
    CORNER = "corner"


class DirectionClassifier:
    """Stateless lookup of wall and corner directions from sector tables."""

    def wall_direction(self, normal: Vector3) -> WallDirection:
        flat = normal.horizontal().normalized()
        if flat.length() == 0.0:
            return WALL_FALLBACK

        angles = [(direction, flat.angle_to(axis)) for direction, axis in WALL_SECTORS]
        best = min(angle for _, angle in angles)
        if best > SECTOR_HALF_ANGLE + ANGLE_EPSILON:
            return WALL_FALLBACK

        # acos noise can split an exact tie; treat near-equal minima as equal
        for direction, angle in angles:
            if angle - best <= ANGLE_EPSILON:
                return direction
        return WALL_FALLBACK

    def corner_direction(self, normal: Vector3) -> CornerDirection:
        if normal.x == 0.0 or normal.z == 0.0:
            return CORNER_FALLBACK
        return CORNER_QUADRANTS[(normal.x > 0.0, normal.z > 0.0)]

    def classify_direction(
        self,
        normal: Vector3,
        kind: ElementKind = ElementKind.WALL,
    ) -> WallDirection | CornerDirection:
        if kind == ElementKind.CORNER:
            return self.corner_direction(normal)
        return self.wall_direction(normal)


_default = DirectionClassifier()


def classify_direction(
    normal: Vector3,
    kind: ElementKind = ElementKind.WALL,
) -> WallDirection | CornerDirection:
    """Module-level shortcut over a shared classifier."""
    return _default.classify_direction(normal, kind)
