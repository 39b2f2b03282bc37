"""Reading flow responses and writing routes to disk."""

import os
from pathlib import Path
from typing import Any

import orjson

from world.io.dto.flow_dto import FlowResponseDTO
from world.io.dto.route_dto import RouteDTO


class FlowFileError(ValueError):
    """Raised when a flow file cannot be read as JSON."""


def parse_flow_response(data: bytes | str | dict[str, Any]) -> FlowResponseDTO:
    """Validate a raw flow response.

    Args:
        data: JSON bytes/str, or an already decoded dictionary

    Returns:
        Validated FlowResponseDTO

    Raises:
        FlowFileError: If the payload is not valid JSON
        pydantic.ValidationError: If the payload does not have the flow shape
    """
    if isinstance(data, dict):
        return FlowResponseDTO.model_validate(data)

    try:
        decoded = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise FlowFileError(f"Invalid flow JSON: {e}") from e

    if not isinstance(decoded, dict):
        raise FlowFileError(f"Flow response must be a JSON object, got {type(decoded).__name__}")
    return FlowResponseDTO.model_validate(decoded)


def load_flow_response(filepath: str | Path) -> FlowResponseDTO:
    """Load a flow response saved by the collection layer.

    Raises:
        FileNotFoundError: If the file doesn't exist
        FlowFileError: If the file is not valid JSON
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Flow file not found: {filepath}")

    with open(filepath, "rb") as f:
        return parse_flow_response(f.read())


def export_route(route: RouteDTO, filepath: str | Path) -> None:
    """Write a route as indented JSON, creating parent directories."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(route.to_json())
