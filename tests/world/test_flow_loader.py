"""Tests for flow DTOs, loading and route export."""

import tempfile
import unittest
from pathlib import Path

import orjson
from pydantic import ValidationError

from core.geo import Point
from world.graph.builder import build_graph_from_file
from world.io.dto.flow_dto import FlowResponseDTO
from world.io.dto.route_dto import RouteDTO
from world.io.flow_loader import (
    FlowFileError,
    export_route,
    load_flow_response,
    parse_flow_response,
)
from world.routing.navigator import Navigator

SAMPLE_RESPONSE = {
    "sourceUpdated": "2024-03-01T08:00:00Z",
    "results": [
        {
            "location": {
                "description": "Essingeleden",
                "length": 20.0,
                "hash": "abc",
                "shape": {
                    "links": [
                        {
                            "points": [{"lat": 59.30, "lng": 18.00}, {"lat": 59.31, "lng": 18.01}],
                            "length": 10.0,
                        },
                        {
                            "points": [{"lat": 59.31, "lng": 18.01}, {"lat": 59.32, "lng": 18.02}],
                            "length": 10.0,
                        },
                    ]
                },
            },
            "currentFlow": {
                "speed": 16.5,
                "speedUncapped": 17.0,
                "freeFlow": 22.0,
                "jamFactor": 2.1,
                "confidence": 0.9,
                "traversability": "open",
            },
        }
    ],
}


class TestFlowLoader(unittest.TestCase):
    """Test flow response parsing and file loading."""

    def test_parse_dict(self) -> None:
        response = parse_flow_response(SAMPLE_RESPONSE)
        self.assertEqual(response.source_updated, "2024-03-01T08:00:00Z")
        self.assertEqual(response.link_count(), 2)
        self.assertEqual(response.results[0].current_flow.speed, 16.5)
        self.assertEqual(response.results[0].current_flow.free_flow, 22.0)

    def test_parse_bytes(self) -> None:
        response = parse_flow_response(orjson.dumps(SAMPLE_RESPONSE))
        link = response.results[0].location.shape.links[0]
        self.assertEqual(link.points[0].to_point(), Point(59.30, 18.00))

    def test_invalid_json(self) -> None:
        with self.assertRaises(FlowFileError):
            parse_flow_response(b"{not json")

    def test_non_object_json(self) -> None:
        with self.assertRaises(FlowFileError):
            parse_flow_response(b"[1, 2, 3]")

    def test_negative_link_length_rejected(self) -> None:
        bad = {"results": [{"location": {"shape": {"links": [{"points": [], "length": -1}]}}}]}
        with self.assertRaises(ValidationError):
            FlowResponseDTO.model_validate(bad)

    def test_out_of_range_latitude_rejected(self) -> None:
        link = {"points": [{"lat": 91, "lng": 0}], "length": 1}
        bad = {"results": [{"location": {"shape": {"links": [link]}}}]}
        with self.assertRaises(ValidationError):
            FlowResponseDTO.model_validate(bad)

    def test_missing_file(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_flow_response("/nonexistent/flow.json")

    def test_load_file_and_route(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            filepath = Path(tmp) / "flow.json"
            filepath.write_bytes(orjson.dumps(SAMPLE_RESPONSE))

            graph = build_graph_from_file(filepath)
            route = Navigator().find_route_via(graph, [Point(59.30, 18.00), Point(59.31, 18.01)])

            self.assertEqual(len(graph), 2)
            self.assertIsNotNone(route)
            self.assertEqual([s.id for s in route.segments], [1])

            out = Path(tmp) / "routes" / "route.json"
            export_route(RouteDTO.from_route(route), out)
            exported = orjson.loads(out.read_bytes())

            self.assertEqual(exported["metric"], "length")
            self.assertEqual(exported["unit"], "m")
            self.assertEqual(exported["length"], 10.0)
            self.assertTrue(exported["complete"])
            self.assertEqual(exported["roads"], ["Essingeleden"])
            self.assertEqual(exported["segments"][0]["start"], [59.31, 18.01])
            self.assertEqual(exported["segments"][0]["speed"], 16.5)
