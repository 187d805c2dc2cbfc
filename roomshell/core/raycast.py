"""Ray queries against the volumes of a scene."""

from __future__ import annotations
from typing import TYPE_CHECKING, Protocol

import numpy as np
import trimesh
from pydantic import BaseModel

from roomshell.models import Vector3
from roomshell.core.csg import to_trimesh

if TYPE_CHECKING:
    from roomshell.core.scene import Scene


class RayHit(BaseModel):
    entity_id: str
    distance: float
    point: Vector3


class RayQuery(Protocol):
    def cast(self, origin: Vector3, direction: Vector3, max_distance: float) -> list[RayHit]: ...


class SceneRayCaster:
    """
    Casts rays against every active, collidable volume in a scene.

    Volumes are triangulated into one combined trimesh, rebuilt only when
    the set of collidable meshes changes. Returns at most one hit per
    volume (the nearest), ordered by distance.
    """

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self._key: tuple = ()
        self._owners: list[str] = []
        self._face_owner = np.zeros(0, dtype=np.int64)
        self._combined: trimesh.Trimesh | None = None

    def cast(self, origin: Vector3, direction: Vector3, max_distance: float) -> list[RayHit]:
        d = direction.normalized()
        if d.length() == 0.0:
            return []

        combined = self._collidable()
        if combined is None:
            return []

        origins = np.array([origin.as_tuple()], dtype=np.float64)
        directions = np.array([d.as_tuple()], dtype=np.float64)
        locations, _, index_tri = combined.ray.intersects_location(
            ray_origins=origins, ray_directions=directions, multiple_hits=True,
        )
        if len(locations) == 0:
            return []

        distances = np.linalg.norm(locations - origins[0], axis=1)
        nearest: dict[int, int] = {}
        for hit, owner in enumerate(self._face_owner[index_tri].tolist()):
            if distances[hit] > max_distance:
                continue
            best = nearest.get(owner)
            if best is None or distances[hit] < distances[best]:
                nearest[owner] = hit

        hits = [
            RayHit(
                entity_id=self._owners[owner],
                distance=float(distances[hit]),
                point=Vector3.from_tuple(locations[hit].tolist()),
            )
            for owner, hit in nearest.items()
        ]
        hits.sort(key=lambda h: h.distance)
        return hits

    def _collidable(self) -> trimesh.Trimesh | None:
        volumes = [
            v for v in self.scene.volumes()
            if v.active and v.collider_enabled and v.mesh is not None
        ]
        # Meshes are replaced, never edited, when a volume moves
        key = tuple((v.id, v.mesh) for v in volumes)
        if len(key) == len(self._key) and all(
            a[0] == b[0] and a[1] is b[1] for a, b in zip(key, self._key)
        ):
            return self._combined

        vertices: list[np.ndarray] = []
        faces: list[np.ndarray] = []
        owners: list[np.ndarray] = []
        offset = 0
        for index, volume in enumerate(volumes):
            part = to_trimesh(volume.mesh, process=False)
            if len(part.faces) == 0:
                continue
            vertices.append(part.vertices)
            faces.append(part.faces + offset)
            owners.append(np.full(len(part.faces), index, dtype=np.int64))
            offset += len(part.vertices)

        self._key = key
        self._owners = [v.id for v in volumes]
        if not faces:
            self._combined = None
            self._face_owner = np.zeros(0, dtype=np.int64)
        else:
            self._combined = trimesh.Trimesh(
                vertices=np.vstack(vertices), faces=np.vstack(faces), process=False,
            )
            self._face_owner = np.concatenate(owners)
        return self._combined
