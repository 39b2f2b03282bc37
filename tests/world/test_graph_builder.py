"""Tests for building graphs from flow responses."""

import logging
from typing import Any

import pytest

from core.geo import Point
from core.types import SegmentID
from world.graph.builder import build_graph
from world.io.dto.flow_dto import FlowResponseDTO


def link(*points: tuple[float, float], length: float = 10.0) -> dict[str, Any]:
    return {"points": [{"lat": lat, "lng": lng} for lat, lng in points], "length": length}


def result(
    description: str | None, *links: dict[str, Any], speed: float | None = None
) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "location": {"description": description, "shape": {"links": list(links)}}
    }
    if speed is not None:
        entry["currentFlow"] = {"speed": speed, "freeFlow": speed, "jamFactor": 0.0}
    return entry


def response(*results: dict[str, Any]) -> FlowResponseDTO:
    return FlowResponseDTO.model_validate(
        {"sourceUpdated": "2024-03-01T08:00:00Z", "results": list(results)}
    )


def test_one_segment_per_link() -> None:
    graph = build_graph(
        response(
            result("Essingeleden", link((0, 0), (0.5, 0.5), (1, 1)), link((1, 1), (2, 2))),
            result("Södra länken", link((2, 2), (3, 3), length=25.0)),
        )
    )

    assert len(graph) == 3
    first = graph.get_segment(SegmentID(0))
    assert first.start == Point(0, 0)
    assert first.end == Point(1, 1)
    assert first.name == "Essingeleden"
    assert graph.get_segment(SegmentID(2)).length == 25.0
    assert graph.get_segment(SegmentID(2)).name == "Södra länken"


def test_intermediate_points_are_dropped() -> None:
    graph = build_graph(response(result("r", link((0, 0), (5, 5), (6, 6), (1, 1)))))
    segment = graph.get_segment(SegmentID(0))
    assert (segment.start, segment.end) == (Point(0, 0), Point(1, 1))


def test_adjacency_across_locations() -> None:
    graph = build_graph(
        response(
            result("a", link((0, 0), (1, 1))),
            result("b", link((1, 1), (2, 2)), link((1, 1), (3, 3))),
        )
    )

    assert graph.finalized
    assert graph.get_segment(SegmentID(0)).edges == [1, 2]
    assert [s.id for s in graph.sinks()] == [1, 2]


def test_location_without_links_contributes_nothing() -> None:
    graph = build_graph(response(result("empty"), result("r", link((0, 0), (1, 1)))))
    assert len(graph) == 1


def test_single_point_link_is_degenerate() -> None:
    graph = build_graph(response(result("r", link((4, 4)))))
    segment = graph.get_segment(SegmentID(0))
    assert segment.is_degenerate()
    assert segment.start == segment.end == Point(4, 4)
    # A degenerate segment joins itself
    assert segment.edges == [0]


def test_link_without_points_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        graph = build_graph(response(result("r", link(), link((0, 0), (1, 1)))))

    assert len(graph) == 1
    assert "without points" in caplog.text


def test_missing_description_and_flow() -> None:
    graph = build_graph(response(result(None, link((0, 0), (1, 1)))))
    segment = graph.get_segment(SegmentID(0))
    assert segment.name == ""
    assert segment.speed is None


def test_speed_from_current_flow() -> None:
    graph = build_graph(response(result("r", link((0, 0), (1, 1), length=100.0), speed=25.0)))
    assert graph.get_segment(SegmentID(0)).travel_time() == 4.0


def test_precision_and_index_options() -> None:
    graph = build_graph(
        response(result("r", link((0, 0), (1.0000000001, 1)), link((1, 1), (2, 2)))),
        precision=6,
        spatial_index=True,
    )
    assert graph.get_segment(SegmentID(0)).edges == [1]
    assert graph.has_index


def test_empty_response() -> None:
    graph = build_graph(response())
    assert len(graph) == 0
    assert graph.finalized


def test_degenerate_links_are_reported(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        build_graph(response(result("r", link((4, 4)), link((0, 0), (1, 1)))))

    assert "1 links collapsed to degenerate segments" in caplog.text
