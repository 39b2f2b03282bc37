"""KD-tree acceleration for nearest-segment lookups."""

import math

import numpy as np
from scipy.spatial import cKDTree

from core.geo import Point, distance_m, to_unit_vector
from world.graph.segment import Segment

# Slack on the unit sphere (~6 mm on the ground) when collecting near-ties
CHORD_TOLERANCE = 1e-9


class SegmentIndex:
    """Spatial index over segment start points.

    Answers the same question as ``Graph.find_closest``'s linear scan: the
    segment whose start is nearest by haversine distance, with ties going to
    the lowest segment id.
    """

    def __init__(self, segments: list[Segment]) -> None:
        # Sorted by id so tree indices follow insertion order
        self._segments = sorted(segments, key=lambda s: s.id)
        self._tree: cKDTree | None = None
        if self._segments:
            vectors = np.array([to_unit_vector(s.start) for s in self._segments], dtype=float)
            self._tree = cKDTree(vectors)

    def __len__(self) -> int:
        return len(self._segments)

    def nearest(self, point: Point, max_distance_m: float | None = None) -> Segment | None:
        """Find the segment whose start is closest to ``point``."""
        if self._tree is None:
            return None

        if not point.is_finite():
            return None

        query = np.array(to_unit_vector(point), dtype=float)
        if not np.isfinite(query).all():
            return None
        chord, _ = self._tree.query(query, k=1)
        candidates = self._tree.query_ball_point(query, r=float(chord) + CHORD_TOLERANCE)

        closest: Segment | None = None
        min_distance = math.inf
        for index in sorted(candidates):
            segment = self._segments[index]
            distance = distance_m(point, segment.start)
            if distance < min_distance:
                min_distance = distance
                closest = segment

        if max_distance_m is not None and min_distance > max_distance_m:
            return None
        return closest
