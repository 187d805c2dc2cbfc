"""Solid mesh model: the volume data the analysis passes read."""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, model_validator

from roomshell.errors import InvalidGeometryError
from .geometry import Bounds, Transform, Vector3


class Edge(BaseModel):
    """Pair of vertex indices."""
    model_config = ConfigDict(frozen=True)

    a: int
    b: int

    def key(self) -> tuple[int, int]:
        """Undirected identity: (a, b) and (b, a) share a key."""
        return (min(self.a, self.b), max(self.a, self.b))


class Face(BaseModel):
    """A polygon described by an ordered loop of edges."""
    edges: list[Edge]

    @classmethod
    def from_loop(cls, indices: list[int]) -> Face:
        n = len(indices)
        return cls(edges=[Edge(a=indices[i], b=indices[(i + 1) % n]) for i in range(n)])

    def vertex_loop(self) -> list[int]:
        return [e.a for e in self.edges]

    def distinct_indices(self, limit: int = 4) -> list[int]:
        unique: list[int] = []
        for e in self.edges:
            if len(unique) >= limit:
                break
            if e.a not in unique:
                unique.append(e.a)
            if e.b not in unique:
                unique.append(e.b)
        return unique


class SolidMesh(BaseModel):
    """
    Vertex positions (local space), faces, and a local-to-world transform.

    Vertices need not be welded: adjacent faces may each carry their own
    copy of a shared corner.
    """
    positions: list[Vector3]
    faces: list[Face]
    transform: Transform = Transform()

    @model_validator(mode="after")
    def _indices_in_range(self) -> SolidMesh:
        self.check_indices()
        return self

    def check_indices(self) -> None:
        """Raise InvalidGeometryError for the first edge that indexes past `positions`."""
        count = len(self.positions)
        for face in self.faces:
            for edge in face.edges:
                if not (0 <= edge.a < count and 0 <= edge.b < count):
                    raise InvalidGeometryError(f"edge ({edge.a}, {edge.b}) indexes past {count} vertices")

    def face_in_range(self, face: Face) -> bool:
        """Faces edited after validation may still hold stale indices."""
        count = len(self.positions)
        return all(0 <= e.a < count and 0 <= e.b < count for e in face.edges)

    def face_normal(self, face: Face) -> Vector3:
        """Local-space normal from the first three distinct vertices of the face."""
        if not self.face_in_range(face):
            return Vector3.up()
        unique = face.distinct_indices()
        if len(unique) < 3:
            return Vector3.up()
        a = self.positions[unique[0]]
        b = self.positions[unique[1]]
        c = self.positions[unique[2]]
        return (b - a).cross(c - a).normalized()

    def world_point(self, index: int) -> Vector3:
        return self.transform.transform_point(self.positions[index])

    def world_positions(self) -> list[Vector3]:
        return [self.transform.transform_point(p) for p in self.positions]

    def world_bounds(self) -> Bounds:
        return Bounds.from_points(self.world_positions())

    def world_centroid(self) -> Vector3:
        points = self.world_positions()
        if not points:
            return Vector3.zero()
        total = Vector3.zero()
        for p in points:
            total = total + p
        return total / len(points)


def make_prism(
    outline: list[tuple[float, float]],
    height: float,
    base_y: float = 0.0,
    transform: Transform | None = None,
) -> SolidMesh:
    """
    Extrude a floor-plane outline (x, z pairs) upward by `height`.

    Every face gets its own vertices, the way modelling tools emit
    unwelded quads.
    """
    positions: list[Vector3] = []
    faces: list[Face] = []
    n = len(outline)
    top_y = base_y + height

    for i in range(n):
        px, pz = outline[i]
        qx, qz = outline[(i + 1) % n]
        start = len(positions)
        positions.extend([
            Vector3(x=px, y=base_y, z=pz),
            Vector3(x=qx, y=base_y, z=qz),
            Vector3(x=qx, y=top_y, z=qz),
            Vector3(x=px, y=top_y, z=pz),
        ])
        faces.append(Face.from_loop([start, start + 1, start + 2, start + 3]))

    bottom_start = len(positions)
    positions.extend(Vector3(x=x, y=base_y, z=z) for x, z in outline)
    faces.append(Face.from_loop(list(range(bottom_start, bottom_start + n))))

    top_start = len(positions)
    positions.extend(Vector3(x=x, y=top_y, z=z) for x, z in outline)
    faces.append(Face.from_loop(list(reversed(range(top_start, top_start + n)))))

    return SolidMesh(positions=positions, faces=faces, transform=transform or Transform())


def make_box(
    size: Vector3,
    center: Vector3 | None = None,
    transform: Transform | None = None,
) -> SolidMesh:
    """Axis-aligned box of `size` centred on `center` (local space)."""
    c = center or Vector3.zero()
    hx, hz = size.x * 0.5, size.z * 0.5
    outline = [
        (c.x - hx, c.z - hz),
        (c.x + hx, c.z - hz),
        (c.x + hx, c.z + hz),
        (c.x - hx, c.z + hz),
    ]
    return make_prism(outline, size.y, base_y=c.y - size.y * 0.5, transform=transform)
