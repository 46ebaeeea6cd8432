# campus_network/mst.py
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Union

from pydantic import ValidationError

from .disjoint_set import DisjointSet
from .errors import DuplicateNode, InvalidEdge, NetworkError, UnknownNodeReference
from .utils import Edge, NetworkRequest, NetworkResponse, Node, describe_validation_error, parse_input

logger = logging.getLogger(__name__)

NodeLike = Union[Node, Mapping[str, Any]]
EdgeLike = Union[Edge, Mapping[str, Any]]


@dataclass
class SpanningTreeResult:
    """Accepted edges in processing order plus the sum of their weights.

    Edges in ``tree`` are copies; changing them never touches the caller's input.
    """
    tree: List[Edge] = field(default_factory=list)
    total_cost: int = 0

    def is_spanning(self, node_count: int) -> bool:
        """True when the tree connects all ``node_count`` buildings.

        A disconnected input yields a spanning forest, which has fewer edges.
        """
        return len(self.tree) == max(node_count - 1, 0)

    def to_response(self) -> Dict[str, Any]:
        return NetworkResponse(minimumSpanningTree=self.tree, totalCost=self.total_cost).model_dump()


def _as_node(node: NodeLike) -> Node:
    if isinstance(node, Node):
        return node
    try:
        return Node.model_validate(node)
    except ValidationError as e:
        raise NetworkError(describe_validation_error(e)) from e


def _as_edge(edge: EdgeLike) -> Edge:
    if isinstance(edge, Edge):
        return edge
    try:
        return Edge.model_validate(edge)
    except ValidationError as e:
        raise InvalidEdge(describe_validation_error(e)) from e


def compute_mst(nodes: Iterable[NodeLike], edges: Iterable[EdgeLike]) -> SpanningTreeResult:
    """Compute a minimum spanning tree (or forest) with Kruskal's algorithm.

    Edges are processed in ascending weight; equal weights keep their input
    order, so the output is reproducible. An edge is accepted when its two
    endpoints are still in different components. Self-loops always share a
    component with themselves and are therefore never accepted.

    Args:
        nodes: Buildings. Their position in this sequence is their union-find index.
        edges: Candidate connections referencing node ids.

    Returns:
        SpanningTreeResult: Copies of the accepted edges and their total weight.

    Raises:
        UnknownNodeReference: if an edge names a node that is not in ``nodes``.
        DuplicateNode: if two nodes share an id.
        InvalidEdge: if a raw edge mapping cannot be validated.
    """
    # ─── Validate input ─────────────────────────────────────────────────────
    nodes = [_as_node(n) for n in nodes]
    edges = [_as_edge(e) for e in edges]

    node_index = {}
    for i, node in enumerate(nodes):
        if node.id in node_index:
            raise DuplicateNode(node.id)
        node_index[node.id] = i

    # checked up front so that no partial tree is ever built
    for edge in edges:
        for node_id in (edge.source, edge.target):
            if node_id not in node_index:
                raise UnknownNodeReference(edge.id, node_id)

    # ─── Kruskal ────────────────────────────────────────────────────────────
    sorted_edges = sorted(edges, key=lambda e: e.weight)
    ds = DisjointSet(len(nodes))
    result = SpanningTreeResult()
    skipped = 0

    for edge in sorted_edges:
        source_idx = node_index[edge.source]
        target_idx = node_index[edge.target]

        if ds.find(source_idx) == ds.find(target_idx):
            skipped += 1
            continue

        result.tree.append(edge.model_copy(deep=True))
        result.total_cost += edge.weight
        ds.union(source_idx, target_idx)

    logger.debug(
        "MST over %d nodes / %d edges: accepted %d, skipped %d, cost %d, components %d",
        len(nodes), len(edges), len(result.tree), skipped, result.total_cost, ds.component_count,
    )
    return result


def optimize_network(request: Union[NetworkRequest, Mapping[str, Any]]) -> Dict[str, Any]:
    """Run the engine for an API or CLI caller.

    Args:
        request (NetworkRequest | Mapping): Validated request or raw decoded JSON.

    Returns:
        Dict[str, Any]: ``{"minimumSpanningTree": [...], "totalCost": int}``.
    """
    if not isinstance(request, NetworkRequest):
        request = parse_input(request)

    result = compute_mst(request.nodes, request.edges)
    return result.to_response()
