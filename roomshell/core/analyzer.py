"""Perimeter analysis: rim extraction, loop ordering, corner/wall segmentation."""

from __future__ import annotations
import logging

from roomshell.models import (
    AnalysisContext, AnalysisParams, DetectedCorner, DetectedWall, SolidMesh,
)
from roomshell.core.loop import LoopSorter
from roomshell.core.perimeter import PerimeterExtractor
from roomshell.core.segmenter import CornerWallSegmenter

logger = logging.getLogger(__name__)


class RoomAnalyzer:
    """Runs the analysis passes in order and populates the context."""

    def __init__(self, params: AnalysisParams | None = None) -> None:
        self.params = params or AnalysisParams()
        self.extractor = PerimeterExtractor(self.params)
        self.sorter = LoopSorter(self.params)
        self.segmenter = CornerWallSegmenter(self.params)

    def analyze(self, context: AnalysisContext) -> None:
        """Run all analysis passes and populate the context."""
        context.edges = self.extractor.extract(context.mesh)
        if not context.edges:
            return

        context.loop = self.sorter.sort(context.edges)
        if not self.sorter.is_closed(context.loop, context.edges):
            logger.warning(
                "Rim walk covered %d of %d edges without closing; no walls built",
                len(context.loop), len(context.edges),
            )
            return

        context.corners, context.walls = self.segmenter.segment(
            context.loop, context.mesh, context.threshold,
        )

        if context.is_degenerate:
            logger.warning("No walls found on a %d-edge loop", len(context.loop))
        else:
            logger.debug(
                "Analysed perimeter: %d edges, %d corners, %d walls",
                len(context.loop), len(context.corners), len(context.walls),
            )

    def analyze_loop(
        self,
        mesh: SolidMesh,
        angle_threshold: float | None = None,
    ) -> tuple[list[DetectedCorner], list[DetectedWall]]:
        context = AnalysisContext(mesh=mesh, params=self.params, angle_threshold=angle_threshold)
        self.analyze(context)
        return context.corners, context.walls
