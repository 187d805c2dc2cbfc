"""Editing session: wires the engine together and exposes user actions."""

from __future__ import annotations
import logging

from roomshell.errors import InvalidGeometryError
from roomshell.models import (
    AnalysisParams, DoorOperation, DoorParams, OperationResult, RoomSettings,
    SolidMesh, Transform, Volume, VolumeKind,
)
from roomshell.core.analyzer import RoomAnalyzer
from roomshell.core.boolean import BooleanCapability
from roomshell.core.directions import DirectionClassifier
from roomshell.core.doors import DoorCutOrchestrator
from roomshell.core.history import HistoryJournal
from roomshell.core.raycast import SceneRayCaster
from roomshell.core.registry import DoorRegistry
from roomshell.core.rooms import RoomBuilder
from roomshell.core.scene import Scene
from roomshell.core.silhouette import BackfaceSilhouetteClassifier

logger = logging.getLogger(__name__)

DOORS_GROUP = "Doors"


class EditingSession:
    """
    One scene plus everything that acts on it.

    Actions run synchronously, one at a time. Ids passed in must name live
    volumes (`UnknownEntityError` otherwise); every other problem comes
    back as an unsuccessful `OperationResult`.
    """

    def __init__(
        self,
        settings: RoomSettings | None = None,
        boolean: BooleanCapability | None = None,
        params: AnalysisParams | None = None,
        door_params: DoorParams | None = None,
        corner_angle: float | None = None,
    ) -> None:
        self.settings = settings or RoomSettings()
        self.params = params or AnalysisParams()
        self.history = HistoryJournal()
        self.scene = Scene(self.history)
        self.registry = DoorRegistry(self.history)
        self.boolean = boolean or BooleanCapability()
        self.ray_caster = SceneRayCaster(self.scene)
        self.analyzer = RoomAnalyzer(self.params)
        self.directions = DirectionClassifier()
        self.silhouette = BackfaceSilhouetteClassifier(self.ray_caster, self.params)
        self.doors = DoorCutOrchestrator(self.scene, self.registry, self.boolean, door_params)
        self.rooms = RoomBuilder(
            self.scene,
            self.analyzer,
            self.silhouette,
            self.directions,
            self.settings,
            self.doors,
            corner_angle=corner_angle,
        )

    # -- Meshes ----------------------------------------------------------

    def add_mesh(self, mesh: SolidMesh, name: str = "Mesh") -> Volume:
        mesh.check_indices()
        return self.scene.create_volume(name, VolumeKind.MESH, mesh=mesh)

    # -- Rooms -----------------------------------------------------------

    def build_room(self, mesh_id: str) -> OperationResult:
        self.scene.get(mesh_id)
        record = self.rooms.build(mesh_id)
        if not record.wall_ids:
            return OperationResult(
                success=False,
                message="No walls detected; the mesh outline could not be analysed",
                entity_id=record.id,
            )
        return OperationResult(
            success=True,
            message="Room created successfully",
            entity_id=record.id,
            affected=record.wall_ids + record.corner_ids,
        )

    def reset_room(self, room_id: str) -> OperationResult:
        record = self.rooms.get(room_id)
        self.rooms.reset(room_id)
        return OperationResult(
            success=True,
            message="Room reset. Original mesh is now active.",
            entity_id=record.mesh_id,
        )

    # -- Doors -----------------------------------------------------------

    def build_door(self, door_id: str) -> OperationResult:
        door = self.scene.get(door_id)
        if door.mesh is None:
            raise InvalidGeometryError(f"volume {door_id} has no mesh to cut with")

        if door_id in self.registry:
            self.doors.reset(door_id, discard=True)

        if not self.boolean.available:
            return OperationResult(success=False, message="Boolean engine unavailable", entity_id=door_id)

        overlapping = self.doors.find_overlapping_walls(door_id)
        if not overlapping:
            return OperationResult(
                success=False,
                message="No overlapping walls found. The door must overlap with room walls.",
                entity_id=door_id,
            )

        first = self.scene.get(overlapping[0])
        door_name = f"{first.wall_direction.value} Door" if first.wall_direction else "Door"

        group = self.scene.find_root_by_name(DOORS_GROUP)
        if group is None:
            group = self.scene.create_volume(DOORS_GROUP, VolumeKind.CONTAINER)
        container = self.scene.create_volume(door_name, VolumeKind.CONTAINER, parent_id=group.id)
        self.scene.set_parent(door_id, container.id)
        self.scene.rename(door_id, "Door Mesh")

        operation = self.registry.register(DoorOperation(door_id=door_id, container_id=container.id))
        if not self.doors.create(door_id, overlapping):
            return OperationResult(success=False, message="Failed to create door", entity_id=door_id)

        return OperationResult(
            success=True,
            message=f"Door created successfully! Modified {len(operation.new_walls)} wall(s).",
            entity_id=door_id,
            affected=list(operation.new_walls),
        )

    def reset_door(self, door_id: str) -> OperationResult:
        self.scene.get(door_id)
        if not self.doors.reset(door_id, discard=True):
            return OperationResult(success=False, message="Door has no cut to reset", entity_id=door_id)
        return OperationResult(success=True, message="Door reset successfully!", entity_id=door_id)

    def move_door(self, door_id: str, transform: Transform) -> OperationResult:
        self.scene.get(door_id)
        self.scene.set_transform(door_id, transform)

        operation = self.registry.get(door_id)
        if operation is None or not operation.auto_rebuild_on_move:
            return OperationResult(success=True, message="Door moved", entity_id=door_id)
        if not self.doors.has_moved(door_id):
            return OperationResult(success=True, message="Door unchanged", entity_id=door_id)

        self.doors.rebuild(door_id, self.doors.candidate_walls())
        return OperationResult(
            success=True,
            message="Door moved and rebuilt",
            entity_id=door_id,
            affected=list(operation.new_walls),
        )

    def set_auto_rebuild(self, door_id: str, enabled: bool) -> OperationResult:
        operation = self.registry.get(door_id)
        if operation is None:
            return OperationResult(success=False, message="Door has no operation", entity_id=door_id)
        operation.auto_rebuild_on_move = enabled
        self.history.record_mutation(door_id, "auto_rebuild_on_move")
        return OperationResult(success=True, message="Auto rebuild updated", entity_id=door_id)

    def delete_door(self, door_id: str) -> OperationResult:
        """Restore the walls, then remove the door and its container from the scene."""
        self.scene.get(door_id)
        operation = self.registry.get(door_id)
        if operation is not None:
            self.doors.reset(door_id, discard=False)

        self.scene.destroy(door_id)
        if operation is not None:
            if self.scene.exists(operation.container_id):
                self.scene.destroy(operation.container_id)
            self.registry.unregister(door_id)

        return OperationResult(success=True, message="Door deleted", entity_id=door_id)

    def close(self) -> None:
        self.registry.clear()
        logger.debug("Session closed")
