"""Dijkstra route search over segment graphs."""

import heapq
import logging
import math
from collections.abc import Sequence

from core.geo import Point
from core.types import RouteMetric, SegmentID
from world.graph.graph import Graph, GraphNotFinalizedError
from world.graph.segment import Segment
from world.routing.params import RoutingParams
from world.routing.route import Route

logger = logging.getLogger(__name__)


class Navigator:
    """Finds routes between arbitrary coordinates on a linked Graph.

    The navigator holds only its parameters, so one instance can serve
    concurrent searches over the same read-only graph.
    """

    def __init__(self, params: RoutingParams | None = None) -> None:
        self.params = params or RoutingParams()

    def resolve(self, graph: Graph, point: Point) -> Segment | None:
        """Snap a coordinate to the segment starting closest to it."""
        return graph.find_closest(point, self.params.max_snap_distance_m)

    def find_route(
        self,
        graph: Graph,
        start: Point,
        end: Point,
        metric: RouteMetric | None = None,
    ) -> list[Segment] | None:
        """Find the cheapest segment sequence from ``start`` to ``end``.

        Args:
            graph: Linked graph to search
            start: Origin coordinate, snapped to its nearest segment
            end: Destination coordinate, snapped to its nearest segment
            metric: Weight to minimise (defaults to the navigator's params)

        Returns:
            Segments after the origin segment up to and including the
            destination segment; an empty list when both snap to the same
            segment. None when an endpoint cannot be snapped or the
            destination is unreachable.
        """
        if not graph.finalized:
            raise GraphNotFinalizedError("Link the graph before searching it")

        start_segment = self.resolve(graph, start)
        end_segment = self.resolve(graph, end)
        if start_segment is None or end_segment is None:
            logger.debug(f"No route: cannot resolve endpoints {start} -> {end}")
            return None

        logger.debug(f"Searching from segment {start_segment.id} to segment {end_segment.id}")
        result = self._search(graph, start_segment, end_segment, metric or self.params.metric)
        if result is None:
            return None
        return result[0]

    def find_route_via(
        self,
        graph: Graph,
        waypoints: Sequence[Point],
        metric: RouteMetric | None = None,
    ) -> Route | None:
        """Chain routes through consecutive waypoints.

        A waypoint that cannot be snapped or reached is recorded in
        ``Route.missed`` and the next leg starts from the last waypoint that
        was reached. Returns None with fewer than two waypoints or when the
        first waypoint cannot be snapped.
        """
        if not graph.finalized:
            raise GraphNotFinalizedError("Link the graph before searching it")
        if len(waypoints) < 2:
            return None

        metric = metric or self.params.metric
        current = self.resolve(graph, waypoints[0])
        if current is None:
            logger.debug(f"No route: cannot resolve origin {waypoints[0]}")
            return None

        segments: list[Segment] = []
        length = 0.0
        missed: list[Point] = []

        for point in waypoints[1:]:
            target = self.resolve(graph, point)
            result = None if target is None else self._search(graph, current, target, metric)
            if target is None or result is None:
                missed.append(point)
                continue

            path, cost = result
            segments.extend(path)
            length += cost
            current = target

        if missed:
            logger.info(f"Route missed {len(missed)} of {len(waypoints) - 1} waypoints")

        return Route(
            segments=segments,
            length=length,
            metric=metric,
            complete=not missed,
            missed=missed,
        )

    def _search(
        self, graph: Graph, start: Segment, goal: Segment, metric: RouteMetric
    ) -> tuple[list[Segment], float] | None:
        """Dijkstra between two segments.

        The cost of reaching a segment is the summed weight of every segment
        before it on the path, so the origin's own weight counts and the
        goal's does not.
        """
        # Priority queue: (cost, counter, segment_id)
        counter = 0
        frontier: list[tuple[float, int, SegmentID]] = [(0.0, counter, start.id)]
        counter += 1

        cost: dict[SegmentID, float] = {start.id: 0.0}
        came_from: dict[SegmentID, SegmentID] = {}

        while frontier:
            current_cost, _, current_id = heapq.heappop(frontier)
            if current_cost > cost[current_id]:
                continue  # stale entry

            if current_id == goal.id:
                return self._reconstruct(graph, came_from, current_id), current_cost

            current = graph.segments[current_id]
            weight = current.weight(metric)
            if math.isinf(weight):
                continue

            candidate = current_cost + weight
            for neighbour_id in current.edges:
                if neighbour_id not in cost or candidate < cost[neighbour_id]:
                    cost[neighbour_id] = candidate
                    came_from[neighbour_id] = current_id
                    heapq.heappush(frontier, (candidate, counter, neighbour_id))
                    counter += 1

        logger.debug(f"No route: frontier exhausted before segment {goal.id}")
        return None

    @staticmethod
    def _reconstruct(
        graph: Graph, came_from: dict[SegmentID, SegmentID], goal_id: SegmentID
    ) -> list[Segment]:
        path: list[Segment] = []
        current_id = goal_id
        while current_id in came_from:
            path.append(graph.segments[current_id])
            current_id = came_from[current_id]
        path.reverse()
        return path
