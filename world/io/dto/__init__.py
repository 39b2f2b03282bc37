"""DTOs for flow input and route output."""

from .flow_dto import (
    CurrentFlowDTO,
    FlowPointDTO,
    FlowResponseDTO,
    FlowResultDTO,
    LinkDTO,
    LocationDTO,
    ShapeDTO,
)
from .route_dto import RouteDTO, RouteSegmentDTO

__all__ = [
    "FlowResponseDTO",
    "FlowResultDTO",
    "LocationDTO",
    "ShapeDTO",
    "LinkDTO",
    "FlowPointDTO",
    "CurrentFlowDTO",
    "RouteDTO",
    "RouteSegmentDTO",
]
