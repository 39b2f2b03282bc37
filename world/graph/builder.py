"""Build segment graphs from traffic-flow responses."""

import logging
from pathlib import Path

from world.graph.graph import Graph
from world.graph.segment import Segment
from world.io.dto.flow_dto import FlowResponseDTO
from world.io.flow_loader import load_flow_response

logger = logging.getLogger(__name__)


def build_graph(
    response: FlowResponseDTO, precision: int | None = None, spatial_index: bool = False
) -> Graph:
    """Turn every flow link into a segment and link the result.

    Only the first and last point of a link are kept. A single-point link
    becomes a degenerate hop (start == end). Links with no points at all are
    the one exception to keeping every link: there is no coordinate to anchor
    a segment on, so they are skipped with a warning.

    Args:
        response: Validated flow response
        precision: Decimal places used to join endpoints (None = exact match)
        spatial_index: Build a KD-tree for nearest-segment lookups

    Returns:
        Linked, read-only Graph
    """
    graph = Graph(precision=precision)
    degenerate = 0

    for result in response.results:
        location = result.location
        name = location.description or ""
        speed = result.current_flow.speed if result.current_flow is not None else None

        for link in location.shape.links:
            if not link.points:
                logger.warning(f"Skipping link without points on '{name}'")
                continue

            segment = Segment(
                start=link.points[0].to_point(),
                end=link.points[-1].to_point(),
                length=link.length,
                name=name,
                speed=speed,
            )
            graph.add_segment(segment)
            if segment.is_degenerate():
                degenerate += 1

    graph.link()
    if spatial_index:
        graph.build_index()

    if degenerate:
        logger.warning(f"{degenerate} links collapsed to degenerate segments (start == end)")
    logger.info(
        f"Built {graph} from {len(response.results)} flow results "
        f"({response.link_count()} links, indexed={graph.has_index})"
    )
    return graph


def build_graph_from_file(
    filepath: str | Path, precision: int | None = None, spatial_index: bool = False
) -> Graph:
    """Load a flow response file and build its graph."""
    return build_graph(load_flow_response(filepath), precision, spatial_index)
