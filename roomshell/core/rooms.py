"""Room construction: turns a freeform solid into floor, walls, corners and ceiling."""

from __future__ import annotations
import logging

from roomshell.errors import InvalidGeometryError, UnknownEntityError
from roomshell.models import (
    DetectedCorner, DetectedWall, Quaternion, RoomRecord, RoomSettings,
    SolidMesh, Transform, Vector3, Volume, VolumeKind, make_box,
)
from roomshell.core.analyzer import RoomAnalyzer
from roomshell.core.directions import DirectionClassifier
from roomshell.core.doors import DoorCutOrchestrator
from roomshell.core.scene import Scene
from roomshell.core.silhouette import BackfaceSilhouetteClassifier, isometric_view_direction

logger = logging.getLogger(__name__)

SLAB_TOLERANCE = 0.01


class RoomBuilder:
    """
    Builds and tears down room shells in a scene.

    Pipeline per build:
    1. Group the source mesh under a new "Room" container
    2. Floor slab (needed by the back-face test)
    3. Perimeter analysis -> corners and walls
    4. Back-face classification
    5. Wall and corner volumes, then the ceiling slab
    6. Re-apply registered doors that overlap the new walls
    """

    def __init__(
        self,
        scene: Scene,
        analyzer: RoomAnalyzer,
        classifier: BackfaceSilhouetteClassifier,
        directions: DirectionClassifier,
        settings: RoomSettings | None = None,
        doors: DoorCutOrchestrator | None = None,
        corner_angle: float | None = None,
    ) -> None:
        self.scene = scene
        self.analyzer = analyzer
        self.classifier = classifier
        self.directions = directions
        self.settings = settings or RoomSettings()
        self.doors = doors
        self.corner_angle = corner_angle
        self._rooms: dict[str, RoomRecord] = {}

    # -- Lookup ----------------------------------------------------------

    def get(self, room_id: str) -> RoomRecord:
        record = self._rooms.get(room_id)
        if record is None:
            raise UnknownEntityError(room_id, "room")
        return record

    def find_by_mesh(self, mesh_id: str) -> RoomRecord | None:
        for record in self._rooms.values():
            if record.mesh_id == mesh_id:
                return record
        return None

    def rooms(self) -> list[RoomRecord]:
        return list(self._rooms.values())

    # -- Build -----------------------------------------------------------

    def build(self, mesh_id: str) -> RoomRecord:
        source = self.scene.get(mesh_id)
        if source.mesh is None or not source.mesh.positions:
            raise InvalidGeometryError(f"volume {mesh_id} has no mesh to build a room from")

        existing = self.find_by_mesh(mesh_id)
        if existing is not None:
            logger.info("Mesh %s already belongs to room %s; rebuilding", mesh_id, existing.id)
            self.reset(existing.id)
            source = self.scene.get(mesh_id)

        mesh = source.mesh
        container = self.scene.create_volume("Room", VolumeKind.CONTAINER)
        record = RoomRecord(id=container.id, mesh_id=mesh_id, mesh_name=source.name)
        self._rooms[record.id] = record

        self.scene.set_parent(mesh_id, container.id)
        self.scene.rename(mesh_id, "Room Mesh")

        bounds = mesh.world_bounds()
        bottom = bounds.min.y
        room_height = bounds.size.y

        if self.settings.enable_floor:
            floor = self.scene.create_volume(
                "Floor", VolumeKind.FLOOR,
                mesh=self._slab(mesh, from_top=False, thickness=self.settings.floor_height),
                parent_id=container.id, room_id=container.id,
            )
            record.floor_id = floor.id

        corners, walls = self.analyzer.analyze_loop(mesh, self.corner_angle)
        if not walls:
            logger.warning("No walls detected for mesh %s; room has no walls", mesh_id)

        view = isometric_view_direction(self.settings.back_direction)
        back_walls = self.classifier.classify_walls(
            walls, view, record.floor_id, room_height + self.settings.wall_back_height,
        )
        back_corners = self.classifier.classify_corners(corners, back_walls)

        walls_group = self.scene.create_volume("Walls", VolumeKind.CONTAINER, parent_id=container.id)
        corners_group = self.scene.create_volume("Corners", VolumeKind.CONTAINER, parent_id=container.id)
        record.walls_group_id = walls_group.id
        record.corners_group_id = corners_group.id

        for index, corner in enumerate(corners):
            volume = self._create_corner(
                index, corner, corner in back_corners, corners_group.id, container.id, bottom, room_height,
            )
            record.corner_ids.append(volume.id)
            if volume.is_back:
                record.back_corner_ids.append(volume.id)

        for index, wall in enumerate(walls):
            volume = self._create_wall(
                index, wall, wall in back_walls, walls_group.id, container.id, bottom, room_height,
            )
            record.wall_ids.append(volume.id)
            if volume.is_back:
                record.back_wall_ids.append(volume.id)

        if self.settings.enable_ceiling:
            ceiling = self.scene.create_volume(
                "Ceiling", VolumeKind.CEILING,
                mesh=self._slab(mesh, from_top=True, thickness=self.settings.ceiling_height),
                parent_id=container.id, room_id=container.id,
            )
            record.ceiling_id = ceiling.id

        self.scene.set_renderer_enabled(mesh_id, False)
        self.scene.set_collider_enabled(mesh_id, False)

        self._auto_build_doors(record)

        logger.info(
            "Built room %s: %d walls (%d back), %d corners (%d back)",
            record.id, len(record.wall_ids), len(record.back_wall_ids),
            len(record.corner_ids), len(record.back_corner_ids),
        )
        return record

    def _create_wall(
        self,
        index: int,
        wall: DetectedWall,
        is_back: bool,
        group_id: str,
        room_id: str,
        bottom: float,
        room_height: float,
    ) -> Volume:
        direction = self.directions.wall_direction(wall.face_normal)
        size = self.settings.wall_size(direction)
        height = room_height + self.settings.wall_back_height if is_back else size.height

        facing = wall.direction.cross(Vector3.up())
        rotation = Quaternion.look_rotation(facing) if facing.length() > 0.001 else Quaternion.identity()
        transform = Transform(
            position=Vector3(x=wall.center.x, y=bottom + height * 0.5, z=wall.center.z),
            rotation=rotation,
        )
        mesh = make_box(Vector3(x=wall.length, y=height, z=size.depth), transform=transform)

        logger.debug("Wall %d: %s, length %.3f, back=%s", index, direction.value, wall.length, is_back)
        return self.scene.create_volume(
            f"Wall {index}", VolumeKind.WALL,
            mesh=mesh, parent_id=group_id, room_id=room_id,
            wall_direction=direction, is_back=is_back,
        )

    def _create_corner(
        self,
        index: int,
        corner: DetectedCorner,
        is_back: bool,
        group_id: str,
        room_id: str,
        bottom: float,
        room_height: float,
    ) -> Volume:
        direction = self.directions.corner_direction(corner.normal)
        size = self.settings.corner_size(direction)
        height = room_height + self.settings.corner_back_height if is_back else size.height

        transform = Transform(
            position=Vector3(x=corner.position.x, y=bottom + height * 0.5, z=corner.position.z),
        )
        mesh = make_box(Vector3(x=size.width, y=height, z=size.depth), transform=transform)

        return self.scene.create_volume(
            f"Corner {index}", VolumeKind.CORNER,
            mesh=mesh, parent_id=group_id, room_id=room_id,
            corner_direction=direction, is_back=is_back,
        )

    def _slab(self, mesh: SolidMesh, from_top: bool, thickness: float) -> SolidMesh:
        """
        Copy of `mesh` flattened to a slab at its bottom (or top).

        Vertices off the kept face are moved to `thickness` from it, so the
        slab keeps the outline of the source.
        """
        ys = [p.y for p in mesh.positions]
        scale_y = mesh.transform.scale.y or 1.0
        local_thickness = thickness / scale_y

        positions: list[Vector3] = []
        if from_top:
            top = max(ys)
            for p in mesh.positions:
                y = p.y if abs(p.y - top) < SLAB_TOLERANCE else top - local_thickness
                positions.append(Vector3(x=p.x, y=y, z=p.z))
        else:
            low = min(ys)
            for p in mesh.positions:
                y = p.y if abs(p.y - low) < SLAB_TOLERANCE else low + local_thickness
                positions.append(Vector3(x=p.x, y=y, z=p.z))

        return mesh.model_copy(update={"positions": positions}, deep=True)

    def _auto_build_doors(self, record: RoomRecord) -> None:
        if self.doors is None or not record.wall_ids:
            return
        for operation in self.doors.registry.list_operations():
            overlapping = self.doors.find_overlapping_walls(operation.door_id, record.wall_ids)
            if not overlapping:
                continue
            logger.info("Re-applying door %s to room %s", operation.door_id, record.id)
            self.doors.create(operation.door_id, overlapping)

    # -- Reset -----------------------------------------------------------

    def reset(self, room_id: str) -> None:
        """Tear a room down and hand the source mesh back to the scene root."""
        record = self.get(room_id)
        room_walls = set(record.wall_ids)

        if self.doors is not None:
            for operation in self.doors.registry.list_operations():
                touched = [(o, n) for o, n in operation.pairs() if o in room_walls]
                if not touched:
                    continue
                for _, new_id in touched:
                    if self.scene.exists(new_id):
                        self.scene.destroy(new_id)
                self.doors.drop_walls(operation, {o for o, _ in touched})
                if not operation.original_walls and self.scene.exists(operation.door_id):
                    self.scene.set_renderer_enabled(operation.door_id, True)

        for volume_id in (record.walls_group_id, record.corners_group_id, record.floor_id, record.ceiling_id):
            if self.scene.exists(volume_id):
                self.scene.destroy(volume_id)

        if self.scene.exists(record.mesh_id):
            self.scene.set_parent(record.mesh_id, None)
            if record.mesh_name:
                self.scene.rename(record.mesh_id, record.mesh_name)
            self.scene.set_renderer_enabled(record.mesh_id, True)
            self.scene.set_collider_enabled(record.mesh_id, True)

        if self.scene.exists(record.id):
            self.scene.destroy(record.id)
        del self._rooms[room_id]
        logger.info("Room %s reset", room_id)
