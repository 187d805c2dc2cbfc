"""Door cut orchestration: reversible boolean cuts of doors into walls."""

from __future__ import annotations
import logging

from roomshell.models import DoorOperation, DoorParams, Transform, Volume, VolumeKind
from roomshell.core.boolean import BooleanCapability
from roomshell.core.registry import DoorRegistry
from roomshell.core.scene import Scene

logger = logging.getLogger(__name__)


class DoorCutOrchestrator:
    """
    Cuts a door volume out of the walls it overlaps.

    Each cut hides the original wall and adds a replacement beside it, so
    the whole operation can be reversed by destroying replacements and
    reactivating originals.
    """

    def __init__(
        self,
        scene: Scene,
        registry: DoorRegistry,
        boolean: BooleanCapability,
        params: DoorParams | None = None,
    ) -> None:
        self.scene = scene
        self.registry = registry
        self.boolean = boolean
        self.params = params or DoorParams()

    # -- Queries ---------------------------------------------------------

    def candidate_walls(self) -> list[str]:
        """Every room wall that is not itself the product of a cut."""
        return [
            v.id for v in self.scene.volumes(VolumeKind.WALL)
            if v.room_id is not None and v.source_id is None
        ]

    def find_overlapping_walls(self, door_id: str, candidates: list[str] | None = None) -> list[str]:
        door = self.scene.find(door_id)
        if door is None or door.mesh is None:
            return []
        door_bounds = door.mesh.world_bounds()

        overlapping: list[str] = []
        for wall_id in self.candidate_walls() if candidates is None else candidates:
            wall = self.scene.find(wall_id)
            if wall is None or wall.mesh is None:
                continue
            if wall.mesh.world_bounds().intersects(door_bounds):
                overlapping.append(wall_id)
        return overlapping

    def has_moved(self, door_id: str) -> bool:
        operation = self.registry.get(door_id)
        door = self.scene.find(door_id)
        if operation is None or door is None or door.transform is None:
            return False
        previous = operation.last_transform
        if previous is None:
            return True

        current = door.transform
        return (
            current.position.distance_to(previous.position) > self.params.position_threshold
            or current.rotation.angle_to(previous.rotation) > self.params.rotation_threshold
            or current.scale.distance_to(previous.scale) > self.params.scale_threshold
        )

    def snapshot(self, door_id: str) -> None:
        operation = self.registry.get(door_id)
        door = self.scene.find(door_id)
        if operation is None or door is None or door.transform is None:
            return
        operation.last_transform = Transform.model_validate(door.transform.model_dump())

    # -- Actions ---------------------------------------------------------

    def create(self, door_id: str, candidate_walls: list[str]) -> bool:
        """
        Cut the door into every overlapping candidate wall.

        Failed subtractions leave that wall untouched. Returns True when
        at least one candidate wall was supplied, whether or not any cut
        succeeded.
        """
        door = self.scene.find(door_id)
        if door is None or door.mesh is None:
            logger.warning("Door %s not found; nothing to cut", door_id)
            return False

        operation = self.registry.get(door_id)
        if operation is None:
            operation = self.registry.register(DoorOperation(door_id=door_id))

        door_bounds = door.mesh.world_bounds()
        cut = 0
        for wall_id in candidate_walls:
            wall = self.scene.find(wall_id)
            if wall is None or wall.mesh is None:
                logger.warning("Wall %s no longer exists; skipped", wall_id)
                continue
            if not wall.mesh.world_bounds().intersects(door_bounds):
                continue
            if self._cut(operation, door, wall):
                cut += 1

        if cut:
            self.scene.set_renderer_enabled(door_id, False)
        self.snapshot(door_id)

        logger.info("Door %s cut into %d of %d wall(s)", door_id, cut, len(candidate_walls))
        return len(candidate_walls) > 0

    def rebuild(self, door_id: str, candidate_walls: list[str]) -> bool:
        """Reverse the current cuts, then cut again at the door's current position."""
        operation = self.registry.get(door_id)
        if operation is None:
            logger.warning("Door %s has no operation to rebuild", door_id)
            return False
        self._reverse(operation)
        return self.create(door_id, candidate_walls)

    def reset(self, door_id: str, discard: bool = True) -> bool:
        """
        Restore the walls a door was cut into.

        With `discard`, the door's grouping container is removed and the
        operation forgotten; the door mesh itself stays in the scene.
        """
        operation = self.registry.get(door_id)
        if operation is None:
            logger.warning("Door %s has no operation to reset", door_id)
            return False

        self._reverse(operation)
        if discard:
            if self.scene.exists(door_id):
                self.scene.set_parent(door_id, None)
            if self.scene.exists(operation.container_id):
                self.scene.destroy(operation.container_id)
            self.registry.unregister(door_id)

        logger.info("Door %s reset", door_id)
        return True

    def drop_walls(self, operation: DoorOperation, wall_ids: set[str]) -> None:
        """Forget pairs whose original or replacement is in `wall_ids`."""
        kept = [(o, n) for o, n in operation.pairs() if o not in wall_ids and n not in wall_ids]
        if len(kept) == len(operation.original_walls):
            return
        operation.replace_pairs([o for o, _ in kept], [n for _, n in kept])
        self._record_pairs(operation)

    # -- Internals -------------------------------------------------------

    def _cut(self, operation: DoorOperation, door: Volume, wall: Volume) -> bool:
        result = self.boolean.subtract(wall.mesh, door.mesh)
        if result is None:
            logger.warning("Subtraction of door %s from wall %s failed; wall not cut", door.id, wall.id)
            return False

        replacement = self.scene.create_volume(
            wall.name,
            VolumeKind.WALL,
            mesh=result,
            parent_id=wall.parent_id,
            room_id=wall.room_id,
            wall_direction=wall.wall_direction,
            is_back=wall.is_back,
            source_id=wall.id,
        )
        operation.append_pair(wall.id, replacement.id)
        self._record_pairs(operation)
        self.scene.set_active(wall.id, False)

        logger.debug("Wall %s replaced by %s", wall.id, replacement.id)
        return True

    def _reverse(self, operation: DoorOperation) -> None:
        for new_id in operation.new_walls:
            if self.scene.exists(new_id):
                self.scene.destroy(new_id)
        for original_id in operation.original_walls:
            if self.scene.exists(original_id):
                self.scene.set_active(original_id, True)
        if self.scene.exists(operation.door_id):
            self.scene.set_renderer_enabled(operation.door_id, True)

        if operation.original_walls:
            operation.clear_pairs()
            self._record_pairs(operation)

    def _record_pairs(self, operation: DoorOperation) -> None:
        self.scene.history.record_mutation(operation.door_id, "wall_pairs")
