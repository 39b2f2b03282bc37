"""Command-line entry point for route queries over a saved flow response."""

import argparse
import logging
import sys

from pydantic import ValidationError

from core.geo import Point
from core.types import RouteMetric
from world.graph.builder import build_graph_from_file
from world.io.dto.route_dto import RouteDTO
from world.io.flow_loader import FlowFileError, export_route
from world.routing.navigator import Navigator
from world.routing.params import RoutingParams


def setup_logging(log_level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Route search over a traffic-flow response")
    parser.add_argument("flow_file", help="Path to a saved flow response (JSON)")
    parser.add_argument("--start", required=True, type=Point.parse, help="Origin as lat,lng")
    parser.add_argument("--end", required=True, type=Point.parse, help="Destination as lat,lng")
    parser.add_argument(
        "--via",
        action="append",
        default=[],
        type=Point.parse,
        help="Intermediate waypoint as lat,lng (repeatable)",
    )
    parser.add_argument(
        "--metric",
        choices=[m.value for m in RouteMetric],
        default=RouteMetric.LENGTH.value,
        help="Weight to minimise",
    )
    parser.add_argument("--precision", type=int, default=None, help="Endpoint join decimals")
    parser.add_argument(
        "--max-snap-distance", type=float, default=None, help="Snap radius in metres"
    )
    parser.add_argument("--spatial-index", action="store_true", help="Use a KD-tree lookup")
    parser.add_argument("--output", default=None, help="Write the route JSON to this file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        params = RoutingParams(
            metric=RouteMetric(args.metric),
            coordinate_precision=args.precision,
            max_snap_distance_m=args.max_snap_distance,
            spatial_index=args.spatial_index,
        )
        graph = build_graph_from_file(
            args.flow_file, params.coordinate_precision, params.spatial_index
        )
    except (FileNotFoundError, FlowFileError, ValidationError) as e:
        logger.error(f"Cannot build graph: {e}")
        return 1

    navigator = Navigator(params)
    route = navigator.find_route_via(graph, [args.start, *args.via, args.end])
    if route is None or not route.complete:
        logger.error(f"No route found from {args.start} to {args.end}")
        return 1

    dto = RouteDTO.from_route(route)
    if args.output:
        export_route(dto, args.output)
        logger.info(f"Route written to {args.output}")
    else:
        sys.stdout.write(dto.to_json().decode() + "\n")

    logger.info(f"Route length: {route.length:.1f} {route.metric.unit}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
