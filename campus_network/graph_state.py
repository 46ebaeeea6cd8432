"""The campus graph being edited in one session."""

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from .errors import DuplicateNode, InvalidEdge, NetworkError, UnknownNodeReference
from .mst import SpanningTreeResult, compute_mst
from .utils import (
    Edge, Node, describe_validation_error, haversine_meters, normalize_weight, parse_input,
    round_meters,
)

logger = logging.getLogger(__name__)

# Columbia University campus
SAMPLE_NODES = [
    {"id": "1", "name": "Butler Library", "lat": 40.8064, "lng": -73.9631},
    {"id": "2", "name": "Low Memorial", "lat": 40.8087, "lng": -73.9624},
    {"id": "3", "name": "Pupin Hall", "lat": 40.8100, "lng": -73.9612},
    {"id": "4", "name": "Havemeyer Hall", "lat": 40.8093, "lng": -73.9620},
    {"id": "5", "name": "Uris Hall", "lat": 40.8091, "lng": -73.9605},
]

SAMPLE_EDGES = [
    {"id": "1-2", "source": "1", "target": "2", "weight": 250},
    {"id": "1-3", "source": "1", "target": "3", "weight": 400},
    {"id": "2-3", "source": "2", "target": "3", "weight": 180},
    {"id": "2-4", "source": "2", "target": "4", "weight": 120},
    {"id": "3-4", "source": "3", "target": "4", "weight": 100},
    {"id": "3-5", "source": "3", "target": "5", "weight": 90},
    {"id": "4-5", "source": "4", "target": "5", "weight": 150},
]


def _check_connection(nodes_by_id: Dict[str, Node], edges: List[Edge], edge_id: str, source: str, target: str):
    """Apply the connection rules shared by manual edits and imports.

    Returns:
        Tuple[Node, Node]: the source and target buildings.
    """
    if source == target:
        raise InvalidEdge("Source and target buildings cannot be the same")

    source_node = nodes_by_id.get(source)
    target_node = nodes_by_id.get(target)
    for node_id, node in ((source, source_node), (target, target_node)):
        if node is None:
            raise UnknownNodeReference(edge_id, node_id)

    for edge in edges:
        if {edge.source, edge.target} == {source, target}:
            raise InvalidEdge(f"Connection between {source_node.name} and {target_node.name} already exists")
        if edge.id == edge_id:
            raise InvalidEdge(f"Connection id '{edge_id}' is already in use")

    return source_node, target_node


class GraphState:
    """Owns the buildings, connections and last optimization result.

    All edits go through the methods below so the graph stays consistent:
    node and connection ids are unique, every edge points at existing
    buildings, and no two edges join the same pair.
    """

    def __init__(self):
        self.nodes: List[Node] = []
        self.edges: List[Edge] = []
        self.result: Optional[SpanningTreeResult] = None

    @property
    def mst(self) -> List[Edge]:
        return self.result.tree if self.result is not None else []

    def get_node(self, node_id: str) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def _invalidate(self) -> None:
        self.result = None

    # ─── Buildings ──────────────────────────────────────────────────────────

    def add_node(
            self,
            name: Optional[str] = None,
            lat: Optional[float] = None,
            lng: Optional[float] = None,
            node_id: Optional[str] = None,
    ) -> Node:
        """Add a building, named ``Building <n>`` when no name is given."""
        node_id = str(node_id) if node_id is not None else uuid.uuid4().hex
        if self.get_node(node_id) is not None:
            raise DuplicateNode(node_id)

        name = (name or "").strip() or f"Building {len(self.nodes) + 1}"
        try:
            node = Node(id=node_id, name=name, lat=lat, lng=lng)
        except ValidationError as e:
            raise NetworkError(describe_validation_error(e)) from e

        self.nodes.append(node)
        self._invalidate()
        logger.info("Added building %s (%s) at %s, %s", node.name, node.id, lat, lng)
        return node

    def move_node(self, node_id: str, lat: float, lng: float) -> Node:
        node = self.get_node(node_id)
        if node is None:
            raise KeyError(node_id)

        try:
            moved = Node(id=node.id, name=node.name, lat=lat, lng=lng)
        except ValidationError as e:
            raise NetworkError(describe_validation_error(e)) from e

        node.lat, node.lng = moved.lat, moved.lng
        logger.debug("Moved building %s to %s, %s", node_id, lat, lng)
        return node

    def remove_node(self, node_id: str) -> None:
        """Remove a building together with every connection touching it."""
        if self.get_node(node_id) is None:
            raise KeyError(node_id)

        self.nodes = [n for n in self.nodes if n.id != node_id]
        self.edges = [e for e in self.edges if e.source != node_id and e.target != node_id]
        self._invalidate()
        logger.info("Removed building %s", node_id)

    # ─── Connections ────────────────────────────────────────────────────────

    def add_edge(self, source: str, target: str, weight: Any = None) -> Edge:
        """
        Connect two buildings.

        Without an explicit weight the cost is the distance between the two
        buildings in whole meters.

        Args:
            source: Id of the first building.
            target: Id of the second building.
            weight: Optional manual cost, must be positive.

        Returns:
            Edge: the new connection, with id ``<source>-<target>``.

        Raises:
            InvalidEdge: self-loop, duplicate pair or id, bad weight, or no
                weight and no coordinates to derive it from.
            UnknownNodeReference: if either building does not exist.
        """
        edge_id = f"{source}-{target}"
        source_node, target_node = _check_connection(
            {n.id: n for n in self.nodes}, self.edges, edge_id, source, target
        )

        if weight is None:
            if not (source_node.has_location and target_node.has_location):
                raise InvalidEdge(
                    f"Cannot derive a cost between {source_node.name} and {target_node.name} without coordinates"
                )
            weight = round_meters(
                haversine_meters(source_node.lat, source_node.lng, target_node.lat, target_node.lng)
            )
        else:
            weight = normalize_weight(weight)
            if weight <= 0:
                raise InvalidEdge("Cost must be greater than 0")

        edge = Edge(id=edge_id, source=source, target=target, weight=weight)
        self.edges.append(edge)
        self._invalidate()
        logger.info("Connected %s -> %s, weight: %d", source, target, weight)
        return edge

    def remove_edge(self, edge_id: str) -> None:
        if not any(e.id == edge_id for e in self.edges):
            raise KeyError(edge_id)

        self.edges = [e for e in self.edges if e.id != edge_id]
        self._invalidate()
        logger.info("Removed connection %s", edge_id)

    # ─── Optimization ───────────────────────────────────────────────────────

    def optimize(self) -> SpanningTreeResult:
        """Compute the cheapest network over the current buildings."""
        if len(self.nodes) < 2:
            raise NetworkError("Please add at least 2 buildings")
        if len(self.edges) < 1:
            raise NetworkError("Please add at least 1 connection")

        self.result = compute_mst(self.nodes, self.edges)
        logger.info("Optimization complete: Total cost %d", self.result.total_cost)
        return self.result

    def clear(self) -> None:
        self.nodes = []
        self.edges = []
        self._invalidate()
        logger.info("All data cleared")

    def load_sample(self) -> None:
        self.load({"nodes": SAMPLE_NODES, "edges": SAMPLE_EDGES})
        logger.info("Sample Columbia University campus data loaded")

    # ─── Import / export ────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.model_dump(exclude_none=True) for n in self.nodes],
            "edges": [e.model_dump() for e in self.edges],
            "mst": [e.model_dump() for e in self.mst],
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def load(self, data: Dict[str, Any]) -> None:
        """Replace the whole graph with an exported document.

        Imported connections follow the same rules as :meth:`add_edge`. The
        saved ``mst`` is kept only when every one of its edges is an imported
        connection (matched by id); otherwise it is dropped.

        Raises:
            NetworkError: if ``nodes`` or ``edges`` is missing or invalid.
            UnknownNodeReference: if a connection names a missing building.
            InvalidEdge: for self-loops, repeated pairs or repeated ids.
        """
        if not isinstance(data, dict) or "nodes" not in data or "edges" not in data:
            raise NetworkError("Invalid data format")

        request = parse_input({"nodes": data["nodes"], "edges": data["edges"]})
        try:
            tree = [Edge.model_validate(e) for e in data.get("mst") or []]
        except ValidationError as e:
            raise NetworkError(describe_validation_error(e)) from e

        nodes_by_id = {n.id: n for n in request.nodes}
        edges = []
        for edge in request.edges:
            _check_connection(nodes_by_id, edges, edge.id, edge.source, edge.target)
            edges.append(edge)

        edges_by_id = {e.id: e for e in edges}
        result = None
        if tree and all(e.id in edges_by_id for e in tree):
            tree = [edges_by_id[e.id].model_copy(deep=True) for e in tree]
            result = SpanningTreeResult(tree=tree, total_cost=sum(e.weight for e in tree))
        elif tree:
            logger.warning("Dropping saved tree: it references connections that were not imported")

        self.nodes = request.nodes
        self.edges = edges
        self.result = result
        logger.info("Imported %d buildings and %d connections", len(self.nodes), len(self.edges))

    @classmethod
    def from_json(cls, text: str) -> "GraphState":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise NetworkError(f"Error importing data: {e}") from e

        state = cls()
        state.load(data)
        return state

    def export_file(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.write_text(self.to_json(), encoding="utf-8")
        logger.info("Network data exported to %s", path)
        return path

    @classmethod
    def import_file(cls, path: Union[str, Path]) -> "GraphState":
        return cls.from_json(Path(path).read_text(encoding="utf-8"))
