"""Pydantic model for route search parameters."""

from pydantic import BaseModel, ConfigDict, Field

from core.types import RouteMetric


class RoutingParams(BaseModel):
    """Parameters for graph building and route search.

    Defaults reproduce the plain behaviour: exact endpoint joins, linear
    nearest-segment scan, no snap radius, routes weighted by link length.
    """

    model_config = ConfigDict(frozen=True)

    metric: RouteMetric = Field(
        default=RouteMetric.LENGTH, description="Weight minimised by the search"
    )
    coordinate_precision: int | None = Field(
        default=None,
        ge=0,
        le=15,
        description="Decimals used to join segment endpoints (None = exact match)",
    )
    max_snap_distance_m: float | None = Field(
        default=None,
        gt=0,
        description="Maximum distance from a query point to its segment start in metres",
    )
    spatial_index: bool = Field(
        default=False, description="Use a KD-tree for nearest-segment lookups"
    )
