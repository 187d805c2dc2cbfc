"""Base-rim extraction: the candidate boundary edges of a solid's floor outline."""

from __future__ import annotations
import logging

from roomshell.models import AnalysisParams, BoundaryEdge, SolidMesh

logger = logging.getLogger(__name__)


class PerimeterExtractor:
    """
    Collects the bottom edges of side-facing faces.

    Using side faces instead of the bottom face avoids triangulation
    diagonals and keeps concave outlines intact.
    """

    def __init__(self, params: AnalysisParams | None = None) -> None:
        self.params = params or AnalysisParams()

    def extract(self, mesh: SolidMesh) -> list[BoundaryEdge]:
        """Return the unordered rim edges, or [] when fewer than 3 exist."""
        positions = mesh.positions
        if not positions:
            return []

        min_y = min(p.y for p in positions)
        tol = self.params.rim_tolerance

        edges: list[BoundaryEdge] = []
        seen: set[tuple[int, int]] = set()

        for face in mesh.faces:
            if not mesh.face_in_range(face):
                logger.warning("Skipping a face with out-of-range vertex indices")
                continue
            normal = mesh.face_normal(face)
            if abs(normal.y) > self.params.side_face_max_normal_y:
                continue

            for edge in face.edges:
                if abs(positions[edge.a].y - min_y) >= tol or abs(positions[edge.b].y - min_y) >= tol:
                    continue
                key = edge.key()
                if key in seen:
                    continue
                seen.add(key)
                edges.append(BoundaryEdge(
                    a=key[0],
                    b=key[1],
                    start=mesh.world_point(key[0]),
                    end=mesh.world_point(key[1]),
                ))

        if len(edges) < 3:
            logger.warning("Only %d rim edge(s) found; cannot build walls for this shape", len(edges))
            return []

        logger.debug("Extracted %d rim edges at local y=%.4f", len(edges), min_y)
        return edges
