import math
import numbers
from typing import Any, List, Mapping, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import DuplicateNode, InvalidEdge, NetworkError

EARTH_RADIUS_M = 6371000.0  # Earth mean radius in meters


def normalize_weight(value: Any) -> int:
    """Turn a raw edge cost into the integer the solver compares and sums.

    Fractional costs are truncated toward zero. Numeric strings are accepted
    since exported networks and form inputs often carry them.

    Raises:
        InvalidEdge: for missing, boolean, non-numeric, NaN or infinite values.
    """
    if value is None or isinstance(value, bool):
        raise InvalidEdge(f"Edge weight must be a number, got {value!r}")

    if isinstance(value, numbers.Integral):
        return int(value)

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError as e:
            raise InvalidEdge(f"Edge weight must be a number, got {value!r}") from e

    if not isinstance(value, numbers.Real):
        raise InvalidEdge(f"Edge weight must be a number, got {value!r}")

    if not math.isfinite(value):
        raise InvalidEdge(f"Edge weight must be finite, got {value!r}")

    return int(value)


def _coerce_id(value: Any) -> Any:
    # ids travel as strings, but hand-written JSON often uses numbers
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return str(value)
    return value


class Node(BaseModel):
    """A building on the map.

    Args:
        id: Unique identifier within one graph.
        name: Display name.
        lat: Optional latitude in degrees, only used by callers.
        lng: Optional longitude in degrees, only used by callers.
    """
    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lng: Optional[float] = Field(default=None, ge=-180, le=180)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _coerce_id(value)

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lng is not None


class Edge(BaseModel):
    """An undirected candidate connection between two buildings.

    The weight is normalized here (see :func:`normalize_weight`), on
    construction and on assignment, so the solver only ever sees integers.
    Unknown keys are kept so a copied edge carries everything the caller
    attached to it.
    """
    model_config = ConfigDict(extra="allow", validate_assignment=True)

    id: str = ""
    source: str
    target: str
    weight: int

    @field_validator("id", "source", "target", mode="before")
    @classmethod
    def coerce_ids(cls, value: Any) -> Any:
        return _coerce_id(value)

    @field_validator("weight", mode="before")
    @classmethod
    def check_weight(cls, value: Any) -> int:
        return normalize_weight(value)

    @model_validator(mode="before")
    @classmethod
    def default_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("id") and "source" in data and "target" in data:
            data = {**data, "id": f"{_coerce_id(data['source'])}-{_coerce_id(data['target'])}"}
        return data

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


class NetworkRequest(BaseModel):
    """Payload accepted by the optimize endpoint and the CLI."""
    nodes: List[Node] = Field(default_factory=list)
    edges: List[Edge] = Field(default_factory=list)

    @field_validator("nodes")
    @classmethod
    def unique_ids(cls, nodes: List[Node]) -> List[Node]:
        seen = set()
        for node in nodes:
            if node.id in seen:
                raise DuplicateNode(node.id)
            seen.add(node.id)
        return nodes


class NetworkResponse(BaseModel):
    """Payload returned by the optimize endpoint."""
    minimumSpanningTree: List[Edge]
    totalCost: int


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into one line suitable for an error payload."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ()))
        message = item.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def parse_input(payload: Mapping[str, Any]) -> NetworkRequest:
    """
    Validates a raw request body (or an exported network document) into a
    :class:`NetworkRequest`.

    Args:
        payload: Decoded JSON with ``nodes`` and ``edges`` arrays.

    Returns:
        NetworkRequest: validated nodes and edges, weights already normalized.

    Raises:
        NetworkError: if the payload is not an object or fails validation.
    """
    if not isinstance(payload, Mapping):
        raise NetworkError("Request body must be a JSON object with 'nodes' and 'edges'")

    try:
        return NetworkRequest.model_validate(dict(payload))
    except ValidationError as e:
        raise NetworkError(describe_validation_error(e)) from e


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Calculate the great-circle distance between two points on Earth in meters.

    Uses the Haversine formula to compute distance between two latitude/longitude pairs.

    Args:
        lat1 (float): Latitude of the first point in degrees.
        lng1 (float): Longitude of the first point in degrees.
        lat2 (float): Latitude of the second point in degrees.
        lng2 (float): Longitude of the second point in degrees.

    Returns:
        float: Distance in meters.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def round_meters(distance: float) -> int:
    """Round a distance to whole meters, halves going up (250.5 -> 251)."""
    return math.floor(distance + 0.5)


def haversine_vec(A, B):
    # A, B: (n, 2) arrays of [lat, lng]
    lat1, lng1 = np.radians(A[:, 0]), np.radians(A[:, 1])
    lat2, lng2 = np.radians(B[:, 0]), np.radians(B[:, 1])
    dlat = lat2 - lat1[:, None]
    dlng = lng2 - lng1[:, None]
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1[:, None]) * np.cos(lat2) * np.sin(dlng / 2) ** 2
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_M * c  # shape (len(A), len(B))


def node_coords(nodes: List[Node]) -> np.ndarray:
    """Stack node coordinates into an (n, 2) array of [lat, lng].

    Raises:
        NetworkError: if any node has no location.
    """
    missing = [n.id for n in nodes if not n.has_location]
    if missing:
        raise NetworkError(f"Nodes without coordinates: {', '.join(missing)}")
    return np.array([[n.lat, n.lng] for n in nodes], dtype=np.float64).reshape(-1, 2)
