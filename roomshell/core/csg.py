"""Trimesh bridge: SolidMesh conversion and the default boolean engine."""

from __future__ import annotations
import logging

import numpy as np
import trimesh
from mapbox_earcut import triangulate_float64

from roomshell.models import Face, SolidMesh, Transform, Vector3

logger = logging.getLogger(__name__)

BOOLEAN_ENGINE = "manifold"


def triangulate_face(points: np.ndarray) -> np.ndarray:
    """
    Ear-clip one planar polygon (k x 3) into triangles.

    The polygon is projected onto the coordinate plane its Newell normal
    is most aligned with, so concave outlines triangulate correctly.
    Returned rows index into `points`.
    """
    if len(points) == 3:
        return np.array([[0, 1, 2]])
    normal = np.cross(points, np.roll(points, -1, axis=0)).sum(axis=0)
    flat = np.delete(points, int(np.argmax(np.abs(normal))), axis=1)
    rings = np.array([len(flat)], dtype=np.uint32)
    return triangulate_float64(flat, rings).reshape(-1, 3)


def to_trimesh(mesh: SolidMesh, process: bool = True) -> trimesh.Trimesh:
    """World-space triangle mesh. With `process`, coincident vertices are welded."""
    vertices = np.array([p.as_tuple() for p in mesh.world_positions()], dtype=np.float64).reshape(-1, 3)

    triangles: list[np.ndarray] = []
    for face in mesh.faces:
        loop = np.array(face.vertex_loop(), dtype=np.int64)
        if len(loop) < 3 or not mesh.face_in_range(face):
            continue
        triangles.append(loop[triangulate_face(vertices[loop])])

    faces = np.vstack(triangles) if triangles else np.zeros((0, 3), dtype=np.int64)
    return trimesh.Trimesh(vertices=vertices, faces=faces, process=process)


def from_trimesh(result: trimesh.Trimesh, transform: Transform) -> SolidMesh:
    """SolidMesh placed by `transform`, with the world-space result moved into its local space."""
    positions = [
        transform.inverse_transform_point(Vector3.from_tuple(v)) for v in result.vertices.tolist()
    ]
    faces = [Face.from_loop(triangle) for triangle in result.faces.tolist()]
    return SolidMesh(positions=positions, faces=faces, transform=transform)


def subtract(target: SolidMesh, cutter: SolidMesh) -> SolidMesh:
    """
    `target` minus `cutter`, computed by manifold through trimesh.

    Both inputs are welded and re-wound outward first; unwelded quads
    from a modelling tool are not watertight until then. Raises when the
    engine rejects the input.
    """
    solid = to_trimesh(target)
    tool = to_trimesh(cutter)
    solid.fix_normals()
    tool.fix_normals()

    result = solid.difference(tool, engine=BOOLEAN_ENGINE)
    logger.debug(
        "Subtracted %d-face cutter: %d -> %d faces", len(tool.faces), len(solid.faces), len(result.faces),
    )
    return from_trimesh(result, target.transform.model_copy(deep=True))
