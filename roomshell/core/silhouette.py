"""Back-face silhouette test: which walls and corners sit at the back of a room."""

from __future__ import annotations
import logging
import math

from roomshell.models import (
    AnalysisParams, BackDirection, DetectedCorner, DetectedWall, Vector3,
)
from roomshell.core.raycast import RayQuery

logger = logging.getLogger(__name__)


_ISOMETRIC_VIEWS = {
    BackDirection.NORTH_EAST: Vector3(x=-1.0, y=-1.0, z=-1.0),
    BackDirection.NORTH_WEST: Vector3(x=1.0, y=-1.0, z=-1.0),
    BackDirection.SOUTH_EAST: Vector3(x=-1.0, y=-1.0, z=1.0),
    BackDirection.SOUTH_WEST: Vector3(x=1.0, y=-1.0, z=1.0),
}


def isometric_view_direction(back: BackDirection) -> Vector3:
    """Camera direction looking down from the `back` quadrant across the room."""
    return _ISOMETRIC_VIEWS[back].normalized()


class BackfaceSilhouetteClassifier:
    """
    A wall is "front" when some ray from a distant camera through its raised
    top edge reaches the room's floor. Otherwise it is "back".
    """

    def __init__(self, ray_query: RayQuery, params: AnalysisParams | None = None) -> None:
        self.ray_query = ray_query
        self.params = params or AnalysisParams()

    def sample_count(self, length: float) -> int:
        return max(self.params.min_samples, math.ceil(length / self.params.sample_spacing))

    def is_back_wall(
        self,
        wall: DetectedWall,
        view_direction: Vector3,
        floor_id: str,
        height: float,
    ) -> bool:
        lift = Vector3(x=0.0, y=height, z=0.0)
        top_start = wall.start + lift
        top_end = wall.end + lift

        view = view_direction.normalized()
        camera = top_start.lerp(top_end, 0.5) - view * self.params.camera_distance
        max_distance = self.params.camera_distance + self.params.ray_margin

        n = self.sample_count(wall.length)
        for i in range(n):
            sample = top_start.lerp(top_end, i / (n - 1))
            direction = (sample - camera).normalized()
            for hit in self.ray_query.cast(camera, direction, max_distance):
                if hit.entity_id == floor_id:
                    return False
        return True

    def classify_walls(
        self,
        walls: list[DetectedWall],
        view_direction: Vector3,
        floor_id: str | None,
        height: float,
    ) -> set[DetectedWall]:
        if floor_id is None:
            logger.debug("Room has no floor; treating every wall as front")
            return set()

        back = {w for w in walls if self.is_back_wall(w, view_direction, floor_id, height)}
        logger.debug("%d of %d walls are back walls", len(back), len(walls))
        return back

    def classify_corners(
        self,
        corners: list[DetectedCorner],
        back_walls: set[DetectedWall] | list[DetectedWall],
    ) -> set[DetectedCorner]:
        tol = self.params.back_corner_tolerance
        endpoints = [p.horizontal() for w in back_walls for p in (w.start, w.end)]

        back: set[DetectedCorner] = set()
        for corner in corners:
            flat = corner.position.horizontal()
            if any(flat.distance_to(p) <= tol for p in endpoints):
                back.add(corner)
        return back
