"""Campus network optimizer: minimum-cost connections between buildings."""

from .candidate_generation import generate_candidate_edges
from .disjoint_set import DisjointSet
from .errors import DuplicateNode, InvalidEdge, NetworkError, UnknownNodeReference
from .graph_state import GraphState
from .mst import SpanningTreeResult, compute_mst, optimize_network
from .utils import Edge, NetworkRequest, Node, haversine_meters

__all__ = [
    "DisjointSet",
    "compute_mst",
    "optimize_network",
    "SpanningTreeResult",
    "GraphState",
    "generate_candidate_edges",
    "Node",
    "Edge",
    "NetworkRequest",
    "haversine_meters",
    "NetworkError",
    "UnknownNodeReference",
    "InvalidEdge",
    "DuplicateNode",
]
