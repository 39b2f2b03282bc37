"""DTOs for traffic-flow responses.

The shape follows the HERE flow endpoint:
- FlowResponseDTO: top level, a list of location results
- FlowResultDTO: one road location plus its current flow measurement
- LocationDTO / ShapeDTO / LinkDTO / FlowPointDTO: the location's polyline

The builder reads the link polylines, link lengths, location descriptions
and current speeds. A few extra metadata fields (location length, free-flow
speed, jam factor, source timestamp) are declared for validation and
inspection; anything else in the payload is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field

from core.geo import Point


class FlowPointDTO(BaseModel):
    """A single WGS84 coordinate of a link polyline."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)

    def to_point(self) -> Point:
        return Point(latitude=self.lat, longitude=self.lng)


class LinkDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: list[FlowPointDTO] = Field(default_factory=list)
    length: float = Field(ge=0.0, description="Link length in metres")


class ShapeDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    links: list[LinkDTO] = Field(default_factory=list)


class LocationDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str | None = None
    length: float | None = Field(default=None, ge=0.0)
    shape: ShapeDTO = Field(default_factory=ShapeDTO)


class CurrentFlowDTO(BaseModel):
    """Current flow measurement of a location (speeds in m/s)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    speed: float | None = Field(default=None, ge=0.0)
    free_flow: float | None = Field(default=None, alias="freeFlow", ge=0.0)
    jam_factor: float | None = Field(default=None, alias="jamFactor")


class FlowResultDTO(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    location: LocationDTO
    current_flow: CurrentFlowDTO | None = Field(default=None, alias="currentFlow")


class FlowResponseDTO(BaseModel):
    """Traffic-flow response used as graph input."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_updated: str | None = Field(default=None, alias="sourceUpdated")
    results: list[FlowResultDTO] = Field(default_factory=list)

    def link_count(self) -> int:
        return sum(len(r.location.shape.links) for r in self.results)
