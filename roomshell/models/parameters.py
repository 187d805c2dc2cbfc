"""Analysis tolerances and room construction settings."""

from __future__ import annotations
from pydantic import BaseModel

from .elements import BackDirection, CornerDirection, WallDirection


class AnalysisParams(BaseModel):
    """Thresholds for perimeter extraction, loop walking and segmentation."""
    side_face_max_normal_y: float = 0.3   # |normal.y| above this = floor/ceiling face
    rim_tolerance: float = 0.01           # Distance from minY that counts as base rim
    position_tolerance: float = 0.001     # Vertex matching while walking the loop
    max_walk_iterations: int = 100
    corner_angle_threshold: float = 165.0  # Degrees
    straight_deviation: float = 30.0       # Min deviation from 180 deg for a corner
    min_wall_length: float = 0.1
    normal_match_tolerance: float = 0.01

    # Back-face silhouette test
    sample_spacing: float = 0.5
    min_samples: int = 3
    camera_distance: float = 1000.0
    ray_margin: float = 100.0
    back_corner_tolerance: float = 0.1


class DoorParams(BaseModel):
    """Thresholds for detecting that a door has moved."""
    position_threshold: float = 0.0001
    rotation_threshold: float = 0.01  # Degrees
    scale_threshold: float = 0.0001


class ElementSize(BaseModel):
    width: float
    height: float
    depth: float


class RoomSettings(BaseModel):
    """User-adjustable settings for building a room shell."""
    back_direction: BackDirection = BackDirection.NORTH_EAST

    enable_floor: bool = True
    floor_height: float = 0.1       # Slab thickness
    enable_ceiling: bool = True
    ceiling_height: float = 0.1

    wall_width: float = 1.0
    wall_height: float = 1.0
    wall_depth: float = 0.2
    wall_back_height: float = 1.0   # Added to the room height for back walls

    corner_width: float = 1.0
    corner_height: float = 1.0
    corner_depth: float = 0.2
    corner_back_height: float = 1.0

    # Per-direction overrides; missing entries use the defaults above
    wall_sizes: dict[WallDirection, ElementSize] = {}
    corner_sizes: dict[CornerDirection, ElementSize] = {}

    def wall_size(self, direction: WallDirection) -> ElementSize:
        size = self.wall_sizes.get(direction)
        if size is not None:
            return size
        return ElementSize(width=self.wall_width, height=self.wall_height, depth=self.wall_depth)

    def corner_size(self, direction: CornerDirection) -> ElementSize:
        size = self.corner_sizes.get(direction)
        if size is not None:
            return size
        return ElementSize(width=self.corner_width, height=self.corner_height, depth=self.corner_depth)
