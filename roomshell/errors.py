"""Exceptions raised at the service boundary.

The engine itself reports failures through `OperationResult`; these are
for input the caller got wrong.
"""


class RoomShellError(Exception):
    """Base class for all room shell errors."""


class UnknownEntityError(RoomShellError, KeyError):
    """An id does not name a live entity."""

    def __init__(self, entity_id: str, kind: str = "entity") -> None:
        super().__init__(entity_id)
        self.entity_id = entity_id
        self.kind = kind

    def __str__(self) -> str:
        return f"unknown {self.kind}: {self.entity_id}"


class InvalidGeometryError(RoomShellError, ValueError):
    """Mesh data that cannot be interpreted (bad indices, empty faces)."""
