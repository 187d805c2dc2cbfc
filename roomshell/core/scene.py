"""Editing scene: the volume store every room and door action works against."""

from __future__ import annotations
import logging

from roomshell.errors import UnknownEntityError
from roomshell.models import SolidMesh, Transform, Volume, VolumeKind
from roomshell.core.history import HistoryJournal, HistoryLog

logger = logging.getLogger(__name__)


class Scene:
    """
    Flat store of volumes keyed by id.

    Parent links only organise the hierarchy; every mesh carries its own
    world transform. Each mutation is written to the history log as it
    happens.
    """

    def __init__(self, history: HistoryLog | None = None) -> None:
        self.history = history if history is not None else HistoryJournal()
        self._volumes: dict[str, Volume] = {}
        self._counter = 0

    # -- Creation / destruction -----------------------------------------

    def create_volume(
        self,
        name: str,
        kind: VolumeKind,
        mesh: SolidMesh | None = None,
        parent_id: str | None = None,
        **metadata,
    ) -> Volume:
        if parent_id is not None:
            self.get(parent_id)
        self._counter += 1
        volume = Volume(
            id=f"{kind.value}-{self._counter}",
            name=name,
            kind=kind,
            mesh=mesh,
            parent_id=parent_id,
            **metadata,
        )
        self._volumes[volume.id] = volume
        self.history.record_created(volume.id, name)
        return volume

    def destroy(self, volume_id: str) -> list[str]:
        """Destroy a volume and its descendants. Returns destroyed ids, leaves first."""
        volume = self.get(volume_id)
        destroyed: list[str] = []
        for child in self.children(volume_id):
            destroyed.extend(self.destroy(child.id))

        del self._volumes[volume_id]
        self.history.record_destroyed(volume_id, volume.name)
        destroyed.append(volume_id)
        return destroyed

    # -- Lookup ----------------------------------------------------------

    def get(self, volume_id: str) -> Volume:
        volume = self._volumes.get(volume_id)
        if volume is None:
            raise UnknownEntityError(volume_id, "volume")
        return volume

    def find(self, volume_id: str | None) -> Volume | None:
        if volume_id is None:
            return None
        return self._volumes.get(volume_id)

    def exists(self, volume_id: str | None) -> bool:
        return volume_id is not None and volume_id in self._volumes

    def volumes(self, kind: VolumeKind | None = None) -> list[Volume]:
        if kind is None:
            return list(self._volumes.values())
        return [v for v in self._volumes.values() if v.kind == kind]

    def children(self, volume_id: str) -> list[Volume]:
        return [v for v in self._volumes.values() if v.parent_id == volume_id]

    def roots(self) -> list[Volume]:
        return [v for v in self._volumes.values() if v.parent_id is None]

    def find_root_by_name(self, name: str) -> Volume | None:
        for volume in self.roots():
            if volume.name == name:
                return volume
        return None

    def is_descendant_of(self, volume_id: str, ancestor_id: str) -> bool:
        current = self.find(volume_id)
        seen: set[str] = set()
        while current is not None and current.parent_id is not None:
            if current.parent_id == ancestor_id:
                return True
            if current.parent_id in seen:
                break
            seen.add(current.parent_id)
            current = self.find(current.parent_id)
        return False

    # -- Mutation --------------------------------------------------------

    def set_active(self, volume_id: str, active: bool) -> None:
        volume = self.get(volume_id)
        volume.active = active
        self.history.record_mutation(volume_id, "active")

    def set_renderer_enabled(self, volume_id: str, enabled: bool) -> None:
        volume = self.get(volume_id)
        volume.renderer_enabled = enabled
        self.history.record_mutation(volume_id, "renderer_enabled")

    def set_collider_enabled(self, volume_id: str, enabled: bool) -> None:
        volume = self.get(volume_id)
        volume.collider_enabled = enabled
        self.history.record_mutation(volume_id, "collider_enabled")

    def set_parent(self, volume_id: str, parent_id: str | None) -> None:
        volume = self.get(volume_id)
        if parent_id is not None:
            self.get(parent_id)
            if parent_id == volume_id or self.is_descendant_of(parent_id, volume_id):
                raise ValueError(f"cannot parent {volume_id} under its own descendant {parent_id}")
        volume.parent_id = parent_id
        self.history.record_mutation(volume_id, "parent_id")

    def rename(self, volume_id: str, name: str) -> None:
        volume = self.get(volume_id)
        volume.name = name
        self.history.record_mutation(volume_id, "name")

    def set_transform(self, volume_id: str, transform: Transform) -> None:
        volume = self.get(volume_id)
        if volume.mesh is None:
            logger.warning("Volume %s has no mesh; transform not applied", volume_id)
            return
        volume.mesh = volume.mesh.model_copy(update={"transform": transform})
        self.history.record_mutation(volume_id, "transform")
