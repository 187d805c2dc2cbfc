"""Analysis context: accumulates state during one perimeter analysis pass."""

from __future__ import annotations
from pydantic import BaseModel, Field

from .elements import BoundaryEdge, DetectedCorner, DetectedWall
from .mesh import SolidMesh
from .parameters import AnalysisParams


class AnalysisContext(BaseModel):
    """
    Holds all state during a single analysis pass.

    The extractor fills `edges`, the sorter fills `loop`, the segmenter
    fills `corners` and `walls`. Nothing here outlives the call.
    """
    # Input
    mesh: SolidMesh
    params: AnalysisParams = Field(default_factory=AnalysisParams)
    angle_threshold: float | None = None

    # Analysis results
    edges: list[BoundaryEdge] = []
    loop: list[BoundaryEdge] = []
    corners: list[DetectedCorner] = []
    walls: list[DetectedWall] = []

    @property
    def threshold(self) -> float:
        if self.angle_threshold is not None:
            return self.angle_threshold
        return self.params.corner_angle_threshold

    @property
    def is_degenerate(self) -> bool:
        return len(self.walls) == 0
