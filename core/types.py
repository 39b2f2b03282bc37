from enum import Enum
from typing import NewType

# IDs
SegmentID = NewType("SegmentID", int)

# Sentinel for a segment that has not been added to a graph yet
UNASSIGNED_SEGMENT_ID = SegmentID(-1)


class RouteMetric(str, Enum):
    """Weight used when comparing candidate routes."""

    LENGTH = "length"  # metres, as reported by the flow link
    TIME = "time"  # seconds, link length over current flow speed

    @property
    def unit(self) -> str:
        return "m" if self is RouteMetric.LENGTH else "s"
