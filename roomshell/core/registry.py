"""Door registry: stores the cut state of every door in a session."""

from __future__ import annotations
import logging

from roomshell.models import DoorOperation
from roomshell.core.history import HistoryLog

logger = logging.getLogger(__name__)


class DoorRegistry:
    """
    Central registry of door operations, keyed by door volume id.

    Owned by the editing session; there is no process-wide instance.
    """

    def __init__(self, history: HistoryLog | None = None) -> None:
        self.history = history
        self._operations: dict[str, DoorOperation] = {}

    def register(self, operation: DoorOperation) -> DoorOperation:
        """Register a door operation, replacing any previous one for the door."""
        self._operations[operation.door_id] = operation
        if self.history is not None:
            self.history.record_created(f"door-op:{operation.door_id}", "Door operation")
        return operation

    def unregister(self, door_id: str) -> DoorOperation | None:
        """Remove a door's operation from the registry."""
        operation = self._operations.pop(door_id, None)
        if operation is not None and self.history is not None:
            self.history.record_destroyed(f"door-op:{door_id}", "Door operation")
        return operation

    def get(self, door_id: str) -> DoorOperation | None:
        return self._operations.get(door_id)

    def list_operations(self) -> list[DoorOperation]:
        """Return all registered operations."""
        return list(self._operations.values())

    def operations_referencing(self, wall_id: str) -> list[DoorOperation]:
        """Operations that list `wall_id` as an original or a replacement."""
        return [
            op for op in self._operations.values()
            if wall_id in op.original_walls or wall_id in op.new_walls
        ]

    def clear(self) -> None:
        for door_id in list(self._operations):
            self.unregister(door_id)

    def __contains__(self, door_id: str) -> bool:
        return door_id in self._operations

    def __len__(self) -> int:
        return len(self._operations)
