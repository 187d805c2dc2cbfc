"""Scene entity models: volumes, rooms, door operations, history entries."""

from __future__ import annotations
from enum import Enum
from pydantic import BaseModel

from .elements import CornerDirection, WallDirection
from .geometry import Bounds, Transform
from .mesh import SolidMesh


class VolumeKind(str, Enum):
    MESH = "mesh"            # Freeform solid supplied by the user
    CONTAINER = "container"  # Grouping node without geometry
    FLOOR = "floor"
    CEILING = "ceiling"
    WALL = "wall"
    CORNER = "corner"


class Volume(BaseModel):
    """An entity in the editing scene. Parents are organisational only."""
    id: str
    name: str
    kind: VolumeKind
    mesh: SolidMesh | None = None
    parent_id: str | None = None
    active: bool = True
    renderer_enabled: bool = True
    collider_enabled: bool = True

    # Room element metadata
    room_id: str | None = None
    wall_direction: WallDirection | None = None
    corner_direction: CornerDirection | None = None
    is_back: bool = False
    source_id: str | None = None  # Wall this volume replaced after a door cut

    def world_bounds(self) -> Bounds | None:
        if self.mesh is None:
            return None
        return self.mesh.world_bounds()

    @property
    def transform(self) -> Transform | None:
        return self.mesh.transform if self.mesh is not None else None


class RoomRecord(BaseModel):
    """A built room shell and the volumes it owns."""
    id: str                 # Room container volume
    mesh_id: str            # Source solid, renamed "Room Mesh"
    mesh_name: str = ""     # Name restored on reset
    floor_id: str | None = None
    ceiling_id: str | None = None
    walls_group_id: str | None = None
    corners_group_id: str | None = None
    wall_ids: list[str] = []
    corner_ids: list[str] = []
    back_wall_ids: list[str] = []
    back_corner_ids: list[str] = []


class DoorOperation(BaseModel):
    """
    Reversible cut state for one door.

    `original_walls[i]` was replaced by `new_walls[i]`. The two lists are
    only ever replaced together.
    """
    door_id: str
    container_id: str | None = None
    original_walls: list[str] = []
    new_walls: list[str] = []
    auto_rebuild_on_move: bool = True
    last_transform: Transform | None = None

    def pairs(self) -> list[tuple[str, str]]:
        return list(zip(self.original_walls, self.new_walls))

    def replace_pairs(self, originals: list[str], replacements: list[str]) -> None:
        if len(originals) != len(replacements):
            raise ValueError(
                f"door {self.door_id}: {len(originals)} original walls "
                f"but {len(replacements)} replacements"
            )
        self.original_walls, self.new_walls = list(originals), list(replacements)

    def append_pair(self, original: str, replacement: str) -> None:
        self.replace_pairs(self.original_walls + [original], self.new_walls + [replacement])

    def clear_pairs(self) -> None:
        self.replace_pairs([], [])


class HistoryAction(str, Enum):
    CREATED = "created"
    DESTROYED = "destroyed"
    MUTATED = "mutated"


class HistoryEntry(BaseModel):
    sequence: int
    action: HistoryAction
    entity_id: str
    field: str | None = None
    label: str = ""


class OperationResult(BaseModel):
    """Status of a user action. Failures are reported, not raised."""
    success: bool
    message: str
    entity_id: str | None = None
    affected: list[str] = []
