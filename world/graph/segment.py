import math
from dataclasses import dataclass, field

from core.geo import Point
from core.types import UNASSIGNED_SEGMENT_ID, RouteMetric, SegmentID


@dataclass
class Segment:
    """A directed road link between two coordinates.

    ``id`` is assigned by ``Graph.add_segment`` and ``edges`` is filled in by
    ``Graph.link``; neither should be set by callers.
    """

    start: Point
    end: Point
    length: float
    name: str
    speed: float | None = None  # m/s, None = no flow measurement
    id: SegmentID = UNASSIGNED_SEGMENT_ID
    edges: list[SegmentID] = field(default_factory=list)

    def travel_time(self) -> float:
        """Seconds needed to traverse the segment at its current speed."""
        if self.speed is None or self.speed <= 0:
            return math.inf
        return self.length / self.speed

    def weight(self, metric: RouteMetric) -> float:
        if metric is RouteMetric.TIME:
            return self.travel_time()
        return self.length

    def is_degenerate(self) -> bool:
        return self.start == self.end
