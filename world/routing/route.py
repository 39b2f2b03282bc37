from dataclasses import dataclass, field

from core.geo import Point
from core.types import RouteMetric
from world.graph.segment import Segment


@dataclass
class Route:
    """Result of a waypoint route query.

    ``segments`` excludes the segment the route starts on. ``missed`` holds
    the waypoints that could not be reached; the route then continues from
    the last waypoint that was.
    """

    segments: list[Segment]
    length: float
    metric: RouteMetric = RouteMetric.LENGTH
    complete: bool = True
    missed: list[Point] = field(default_factory=list)

    def names(self) -> list[str]:
        """Road names along the route with consecutive repeats collapsed."""
        names: list[str] = []
        for segment in self.segments:
            if not names or names[-1] != segment.name:
                names.append(segment.name)
        return names
