"""Geographic primitives shared by the graph and routing layers."""

import math
from dataclasses import dataclass

EARTH_RADIUS_M = 6371e3


@dataclass(frozen=True)
class Point:
    latitude: float
    longitude: float

    @classmethod
    def parse(cls, text: str) -> "Point":
        """Parse a ``"lat,lng"`` string."""
        parts = text.split(",")
        if len(parts) != 2:
            raise ValueError(f"Expected 'lat,lng', got {text!r}")
        point = cls(latitude=float(parts[0]), longitude=float(parts[1]))
        if not point.is_finite():
            raise ValueError(f"Coordinates must be finite, got {text!r}")
        return point

    def is_finite(self) -> bool:
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)


def distance_m(a: Point, b: Point) -> float:
    """Great-circle (haversine) distance between two points in metres."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_phi / 2) * math.sin(d_phi / 2)
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) * math.sin(d_lambda / 2)
    )
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c


def to_unit_vector(point: Point) -> tuple[float, float, float]:
    """Project a point onto the unit sphere.

    Chord length between two such vectors grows monotonically with the
    great-circle distance, so nearest neighbours agree with ``distance_m``.
    """
    lat = math.radians(point.latitude)
    lng = math.radians(point.longitude)
    return (
        math.cos(lat) * math.cos(lng),
        math.cos(lat) * math.sin(lng),
        math.sin(lat),
    )
