"""Loop sorting: orders an unordered rim edge set into a traversal."""

from __future__ import annotations
import logging

from roomshell.models import AnalysisParams, BoundaryEdge, Vector3

logger = logging.getLogger(__name__)


def _position_key(p: Vector3) -> str:
    # `or 0.0` folds -0.0 into 0.0 so mirrored zeros share a key
    return f"{round(p.x, 3) or 0.0:.3f},{round(p.y, 3) or 0.0:.3f},{round(p.z, 3) or 0.0:.3f}"


def dedupe_by_position(edges: list[BoundaryEdge]) -> list[BoundaryEdge]:
    """
    Drop edges whose endpoints (in either order) match an earlier edge.

    Adjacent faces with coincident but unwelded vertices contribute the
    same rim edge twice; positions quantised to 3 decimals collapse them.
    """
    unique: list[BoundaryEdge] = []
    seen: set[str] = set()
    for edge in edges:
        forward = f"{_position_key(edge.start)}-{_position_key(edge.end)}"
        backward = f"{_position_key(edge.end)}-{_position_key(edge.start)}"
        if forward in seen or backward in seen:
            continue
        seen.add(forward)
        unique.append(edge)
    return unique


class LoopSorter:
    """
    Greedy walk over rim edges by vertex position.

    Closed rims come back as a true cycle. Malformed input may stop early
    and yield a partial, open sequence.
    """

    def __init__(self, params: AnalysisParams | None = None) -> None:
        self.params = params or AnalysisParams()

    def sort(self, edges: list[BoundaryEdge]) -> list[BoundaryEdge]:
        unique = dedupe_by_position(edges)
        if not unique:
            return []

        start_index = self._start_index(unique)
        first = unique[start_index]
        ordered = [first]
        remaining = unique[:start_index] + unique[start_index + 1:]
        current = first.end

        tol = self.params.position_tolerance
        iteration = 0
        while remaining and iteration < self.params.max_walk_iterations:
            iteration += 1
            found = False
            for i, candidate in enumerate(remaining):
                if candidate.start.distance_to(current) < tol:
                    ordered.append(candidate)
                    current = candidate.end
                elif candidate.end.distance_to(current) < tol:
                    ordered.append(candidate.flipped())
                    current = candidate.start
                else:
                    continue
                del remaining[i]
                found = True
                break

            if not found:
                logger.warning(
                    "Loop walk dead-ended after %d of %d edges", len(ordered), len(unique),
                )
                break

        return ordered

    def is_closed(self, loop: list[BoundaryEdge], edges: list[BoundaryEdge]) -> bool:
        """True when `loop` visits every unique edge and ends where it began."""
        if len(loop) < 3 or len(loop) != len(dedupe_by_position(edges)):
            return False
        return loop[-1].end.distance_to(loop[0].start) < self.params.position_tolerance

    def _start_index(self, edges: list[BoundaryEdge]) -> int:
        """Edge whose farthest endpoint lies farthest from the endpoint centroid."""
        total = Vector3.zero()
        for e in edges:
            total = total + e.start + e.end
        center = total / (len(edges) * 2)

        best_index = 0
        best_distance = 0.0
        for i, e in enumerate(edges):
            d = max(e.start.distance_to(center), e.end.distance_to(center))
            if d > best_distance:
                best_distance = d
                best_index = i
        return best_index
