"""Corner and wall segmentation of an ordered perimeter loop."""

from __future__ import annotations
import logging

from roomshell.models import (
    AnalysisParams, BoundaryEdge, DetectedCorner, DetectedWall, SolidMesh, Vector3,
)

logger = logging.getLogger(__name__)


class CornerWallSegmenter:
    """
    Walks an ordered loop, marks corners where the edge direction turns,
    and derives a wall chord between each pair of consecutive corners.

    Outward corner normals point away from the loop centroid, which is
    only correct for star-shaped outlines.
    """

    def __init__(self, params: AnalysisParams | None = None) -> None:
        self.params = params or AnalysisParams()

    def segment(
        self,
        loop: list[BoundaryEdge],
        mesh: SolidMesh,
        angle_threshold: float | None = None,
    ) -> tuple[list[DetectedCorner], list[DetectedWall]]:
        if not loop:
            return [], []
        threshold = self.params.corner_angle_threshold if angle_threshold is None else angle_threshold

        corners = self.detect_corners(loop, threshold)
        walls = self.derive_walls(corners, mesh)
        return corners, walls

    # -- Corners ---------------------------------------------------------

    def detect_corners(self, loop: list[BoundaryEdge], threshold: float) -> list[DetectedCorner]:
        centroid = _loop_centroid(loop)
        corners: list[DetectedCorner] = []

        for i, current in enumerate(loop):
            following = loop[(i + 1) % len(loop)]
            shared = self.shared_vertex(current, following)

            d1 = self.direction_away(current, shared)
            d2 = self.direction_away(following, shared)
            angle = d1.angle_to(d2)

            if angle >= threshold:
                continue
            # Tessellation leaves near-straight vertices along a flat wall
            if abs(angle - 180.0) <= self.params.straight_deviation:
                continue

            outward = (shared - centroid).normalized().horizontal().normalized()
            corners.append(DetectedCorner(position=shared, angle=angle, normal=outward))

        logger.debug("Detected %d corners on a %d-edge loop", len(corners), len(loop))
        return corners

    def shared_vertex(self, first: BoundaryEdge, second: BoundaryEdge) -> Vector3:
        """Vertex common to both edges; midpoint of `first` when none matches."""
        tol = self.params.position_tolerance
        for candidate in (first.start, first.end):
            if candidate.distance_to(second.start) < tol or candidate.distance_to(second.end) < tol:
                return candidate
        return first.midpoint()

    def direction_away(self, edge: BoundaryEdge, vertex: Vector3) -> Vector3:
        """Unit direction along `edge` pointing away from `vertex`."""
        d_start = edge.start.distance_to(vertex)
        d_end = edge.end.distance_to(vertex)
        tol = self.params.position_tolerance

        if d_start < tol:
            return (edge.end - edge.start).normalized()
        if d_end < tol:
            return (edge.start - edge.end).normalized()
        # Neither end matches exactly; measure from the closer one
        if d_start < d_end:
            return (edge.end - edge.start).normalized()
        return (edge.start - edge.end).normalized()

    # -- Walls -----------------------------------------------------------

    def derive_walls(self, corners: list[DetectedCorner], mesh: SolidMesh) -> list[DetectedWall]:
        walls: list[DetectedWall] = []
        if not corners:
            return walls

        mesh_center = mesh.world_centroid()
        for i, corner in enumerate(corners):
            following = corners[(i + 1) % len(corners)]
            normal = self.face_normal_for_chord(corner.position, following.position, mesh, mesh_center)
            wall = DetectedWall.between(corner.position, following.position, normal)

            if wall.length < self.params.min_wall_length:
                logger.debug("Dropping %.4f-long wall at %s", wall.length, wall.center.as_tuple())
                continue
            walls.append(wall)

        return walls

    def face_normal_for_chord(
        self,
        start: Vector3,
        end: Vector3,
        mesh: SolidMesh,
        mesh_center: Vector3,
    ) -> Vector3:
        """
        World-space outward normal of the side face owning the chord.

        Falls back to cross(direction, up) when no face edge matches.
        """
        tol = self.params.normal_match_tolerance
        transform = mesh.transform

        for face in mesh.faces:
            if not mesh.face_in_range(face):
                continue
            local_normal = mesh.face_normal(face)
            if abs(local_normal.y) > self.params.side_face_max_normal_y:
                continue

            for edge in face.edges:
                a = mesh.world_point(edge.a)
                b = mesh.world_point(edge.b)
                matches = (
                    (a.distance_to(start) < tol and b.distance_to(end) < tol)
                    or (a.distance_to(end) < tol and b.distance_to(start) < tol)
                )
                if not matches:
                    continue

                normal = transform.transform_direction(local_normal).normalized()
                loop_points = [mesh.world_point(e.a) for e in face.edges]
                face_center = Vector3.zero()
                for p in loop_points:
                    face_center = face_center + p
                face_center = face_center / len(loop_points)
                return _point_outward(normal, face_center, mesh_center)

        direction = (end - start).normalized()
        fallback = direction.cross(Vector3.up()).normalized()
        return _point_outward(fallback, start.lerp(end, 0.5), mesh_center)


def _loop_centroid(loop: list[BoundaryEdge]) -> Vector3:
    total = Vector3.zero()
    for edge in loop:
        total = total + edge.start + edge.end
    return total / (len(loop) * 2)


def _point_outward(normal: Vector3, origin: Vector3, center: Vector3) -> Vector3:
    """Flip `normal` if it points from `origin` toward `center`."""
    if normal.dot((center - origin).normalized()) > 0:
        return -normal
    return normal
