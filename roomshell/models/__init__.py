from .geometry import Vector3, Quaternion, Transform, Bounds
from .mesh import Edge, Face, SolidMesh, make_box, make_prism
from .elements import (
    WallDirection, CornerDirection, BackDirection,
    BoundaryEdge, DetectedCorner, DetectedWall,
)
from .parameters import AnalysisParams, DoorParams, ElementSize, RoomSettings
from .scene import (
    VolumeKind, Volume, RoomRecord, DoorOperation,
    HistoryAction, HistoryEntry, OperationResult,
)
from .context import AnalysisContext

__all__ = [
    "Vector3", "Quaternion", "Transform", "Bounds",
    "Edge", "Face", "SolidMesh", "make_box", "make_prism",
    "WallDirection", "CornerDirection", "BackDirection",
    "BoundaryEdge", "DetectedCorner", "DetectedWall",
    "AnalysisParams", "DoorParams", "ElementSize", "RoomSettings",
    "VolumeKind", "Volume", "RoomRecord", "DoorOperation",
    "HistoryAction", "HistoryEntry", "OperationResult",
    "AnalysisContext",
]
