"""DTOs for exporting computed routes."""

from typing import TYPE_CHECKING

import orjson
from pydantic import BaseModel, ConfigDict, Field

from core.types import RouteMetric

if TYPE_CHECKING:
    from world.graph.segment import Segment
    from world.routing.route import Route


class RouteSegmentDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    start: tuple[float, float]
    end: tuple[float, float]
    length: float
    speed: float | None = None

    @classmethod
    def from_segment(cls, segment: "Segment") -> "RouteSegmentDTO":
        return cls(
            id=segment.id,
            name=segment.name,
            start=(segment.start.latitude, segment.start.longitude),
            end=(segment.end.latitude, segment.end.longitude),
            length=segment.length,
            speed=segment.speed,
        )


class RouteDTO(BaseModel):
    """Serializable form of a Route."""

    model_config = ConfigDict(frozen=True)

    metric: RouteMetric
    unit: str
    length: float
    complete: bool
    segments: list[RouteSegmentDTO] = Field(default_factory=list)
    missed: list[tuple[float, float]] = Field(default_factory=list)
    roads: list[str] = Field(default_factory=list)

    @classmethod
    def from_route(cls, route: "Route") -> "RouteDTO":
        return cls(
            metric=route.metric,
            unit=route.metric.unit,
            length=route.length,
            complete=route.complete,
            segments=[RouteSegmentDTO.from_segment(s) for s in route.segments],
            missed=[(p.latitude, p.longitude) for p in route.missed],
            roads=route.names(),
        )

    def to_json(self) -> bytes:
        return orjson.dumps(self.model_dump(mode="json"), option=orjson.OPT_INDENT_2)
