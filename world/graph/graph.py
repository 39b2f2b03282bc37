import logging
import math
from collections.abc import Callable, Iterator

from core.geo import Point, distance_m
from core.types import SegmentID
from world.graph.segment import Segment
from world.graph.spatial import SegmentIndex

logger = logging.getLogger(__name__)


class GraphError(RuntimeError):
    """Raised when a graph is used outside its build/finalize lifecycle."""


class GraphFinalizedError(GraphError):
    pass


class GraphNotFinalizedError(GraphError):
    pass


def coordinate_key(point: Point, precision: int | None = None) -> str:
    """Key used to join segment endpoints.

    With no precision the float pair is keyed verbatim, so only bit-identical
    coordinates collide. A precision rounds both coordinates to that many
    decimals first.
    """
    latitude = float(point.latitude)
    longitude = float(point.longitude)
    if precision is not None:
        # + 0.0 folds -0.0 into 0.0
        latitude = round(latitude, precision) + 0.0
        longitude = round(longitude, precision) + 0.0
    return f"{latitude!r},{longitude!r}"


class Graph:
    """Directed graph of road segments joined by coincident endpoints."""

    def __init__(self, precision: int | None = None) -> None:
        self.precision = precision
        self.segments: dict[SegmentID, Segment] = {}
        self.by_start: dict[str, list[Segment]] = {}  # coordinate key -> segments starting there
        self.finalized = False
        self._index: SegmentIndex | None = None

    def add_segment(self, segment: Segment) -> SegmentID:
        """Add a segment, assigning it the next sequential id."""
        if self.finalized:
            raise GraphFinalizedError("Cannot add segments to a linked graph")

        segment_id = SegmentID(len(self.segments))
        segment.id = segment_id

        key = coordinate_key(segment.start, self.precision)
        self.by_start.setdefault(key, []).append(segment)
        self.segments[segment_id] = segment
        return segment_id

    def get_segment(self, segment_id: SegmentID) -> Segment | None:
        """Get a segment by id."""
        return self.segments.get(segment_id)

    def get_segments(self, point: Point) -> list[Segment]:
        """Get all segments starting at ``point``."""
        return list(self.by_start.get(coordinate_key(point, self.precision), []))

    def for_each(self, fn: Callable[[Segment], None]) -> None:
        for segment in self.segments.values():
            fn(segment)

    def link(self) -> None:
        """Derive adjacency and freeze the graph.

        Every segment's ``edges`` becomes the ids of the segments starting where
        it ends. Runs once, after all segments are added.
        """
        if self.finalized:
            raise GraphFinalizedError("Graph is already linked")

        def connect(segment: Segment) -> None:
            segment.edges = [neighbour.id for neighbour in self.get_segments(segment.end)]

        self.for_each(connect)
        self.finalized = True

        logger.info(
            f"Linked graph: {len(self.segments)} segments, "
            f"{len(self.by_start)} start points, {len(self.sinks())} sinks"
        )

    def build_index(self) -> None:
        """Build a spatial index to speed up ``find_closest``."""
        if not self.finalized:
            raise GraphNotFinalizedError("Link the graph before indexing it")
        self._index = SegmentIndex(list(self.segments.values()))
        logger.debug(f"Built spatial index over {len(self._index)} segment starts")

    @property
    def has_index(self) -> bool:
        return self._index is not None

    def find_closest(self, point: Point, max_distance_m: float | None = None) -> Segment | None:
        """Find the segment whose start point is nearest to ``point``.

        Ties go to the segment added first. Returns None for an empty graph,
        a non-finite query, or when the nearest start is farther than ``max_distance_m``.
        """
        if not point.is_finite():
            return None

        if self._index is not None:
            return self._index.nearest(point, max_distance_m)

        min_distance = math.inf
        closest: Segment | None = None
        for segment in self.segments.values():
            distance = distance_m(point, segment.start)
            if distance < min_distance:
                min_distance = distance
                closest = segment

        if max_distance_m is not None and min_distance > max_distance_m:
            return None
        return closest

    def sinks(self) -> list[Segment]:
        """Segments with no outgoing adjacency."""
        return [s for s in self.segments.values() if not s.edges]

    def get_segment_count(self) -> int:
        return len(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments.values())

    def __str__(self) -> str:
        return f"Graph(segments={len(self.segments)}, start_points={len(self.by_start)})"

    def __repr__(self) -> str:
        return (
            f"Graph(segments={list(self.segments.keys())}, "
            f"precision={self.precision}, finalized={self.finalized}, indexed={self.has_index})"
        )
