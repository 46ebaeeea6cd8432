from typing import Any, Dict, List

import networkx as nx

from .mst import SpanningTreeResult
from .utils import Edge, Node


def to_networkx(nodes: List[Node], edges: List[Edge]) -> nx.Graph:
    """
    Builds an undirected networkx graph from buildings and connections.

    Nodes keep their name and coordinates as attributes and edges keep their
    id and weight. networkx stores a single edge per pair, so when parallel
    edges are supplied the lighter one wins. Self-loops are kept as networkx
    self-loops.

    Args:
        nodes: Buildings, keyed by id in the resulting graph.
        edges: Connections between building ids.

    Returns:
        nx.Graph: A graph with the defined nodes and edges.
    """
    G = nx.Graph()
    for node in nodes:
        G.add_node(node.id, name=node.name, lat=node.lat, lng=node.lng)

    for edge in edges:
        if G.has_edge(edge.source, edge.target) and G[edge.source][edge.target]["weight"] <= edge.weight:
            continue
        G.add_edge(edge.source, edge.target, id=edge.id, weight=edge.weight)

    return G


def tree_summary(nodes: List[Node], result: SpanningTreeResult) -> Dict[str, Any]:
    """Describe how much of the campus the computed tree connects.

    Returns:
        Dict[str, Any]: ``edgeCount``, ``componentCount`` (1 for a spanning
        tree, more for a forest, 0 for an empty campus) and ``isSpanningTree``.
    """
    G = to_networkx(nodes, result.tree)
    return {
        "edgeCount": len(result.tree),
        "componentCount": nx.number_connected_components(G),
        "isSpanningTree": result.is_spanning(len(nodes)),
    }
