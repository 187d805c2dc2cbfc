"""High-level room shell service: facade for the API layer."""

from __future__ import annotations
import logging

from roomshell.config import AppSettings
from roomshell.models import (
    CornerDirection, DetectedCorner, DetectedWall, DoorOperation, HistoryEntry,
    OperationResult, RoomRecord, SolidMesh, Transform, Vector3, Volume, WallDirection,
)
from roomshell.core.boolean import BooleanCapability, resolve_boolean_engine
from roomshell.core.directions import ElementKind
from roomshell.core.session import EditingSession

logger = logging.getLogger(__name__)


class ShellService:
    """Owns one editing session and delegates every call to it."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        boolean: BooleanCapability | None = None,
    ) -> None:
        self.settings = settings or AppSettings()
        if boolean is None:
            boolean = resolve_boolean_engine(self.settings.boolean_engine)
        self.session = EditingSession(
            settings=self.settings.room,
            boolean=boolean,
            corner_angle=self.settings.corner_angle,
        )

    # -- Stateless analysis ----------------------------------------------

    def analyze(
        self,
        mesh: SolidMesh,
        angle_threshold: float | None = None,
    ) -> tuple[list[tuple[DetectedCorner, CornerDirection]], list[tuple[DetectedWall, WallDirection]]]:
        threshold = self.settings.corner_angle if angle_threshold is None else angle_threshold
        corners, walls = self.session.analyzer.analyze_loop(mesh, threshold)
        directions = self.session.directions
        return (
            [(c, directions.corner_direction(c.normal)) for c in corners],
            [(w, directions.wall_direction(w.face_normal)) for w in walls],
        )

    def classify(self, normal: Vector3, kind: ElementKind) -> WallDirection | CornerDirection:
        return self.session.directions.classify_direction(normal, kind)

    # -- Scene actions ---------------------------------------------------

    def add_mesh(self, mesh: SolidMesh, name: str) -> Volume:
        return self.session.add_mesh(mesh, name)

    def build_room(self, mesh_id: str) -> OperationResult:
        return self.session.build_room(mesh_id)

    def reset_room(self, room_id: str) -> OperationResult:
        return self.session.reset_room(room_id)

    def build_door(self, door_id: str) -> OperationResult:
        return self.session.build_door(door_id)

    def move_door(self, door_id: str, transform: Transform) -> OperationResult:
        return self.session.move_door(door_id, transform)

    def remove_door(self, door_id: str, delete: bool = False) -> OperationResult:
        if delete:
            return self.session.delete_door(door_id)
        return self.session.reset_door(door_id)

    # -- Inspection ------------------------------------------------------

    def volumes(self) -> list[Volume]:
        return self.session.scene.volumes()

    def rooms(self) -> list[RoomRecord]:
        return self.session.rooms.rooms()

    def doors(self) -> list[DoorOperation]:
        return self.session.registry.list_operations()

    def history(self) -> list[HistoryEntry]:
        return self.session.history.entries()

    @property
    def boolean_available(self) -> bool:
        return self.session.boolean.available

    def close(self) -> None:
        self.session.close()
