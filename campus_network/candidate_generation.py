import logging
from itertools import combinations
from typing import List, Optional, Set, Tuple

import numpy as np
from scipy.spatial import Delaunay, QhullError

from .errors import NetworkError
from .utils import Edge, Node, haversine_vec, node_coords, round_meters

logger = logging.getLogger(__name__)

CANDIDATE_METHODS = ("complete", "delaunay")


def distance_matrix(nodes: List[Node]) -> np.ndarray:
    """Pairwise great-circle distances between buildings, in meters.

    Args:
        nodes: Buildings with coordinates.

    Returns:
        np.ndarray: (n, n) symmetric matrix with a zero diagonal.
    """
    coords = node_coords(nodes)
    return haversine_vec(coords, coords)


def _complete_pairs(n: int) -> Set[Tuple[int, int]]:
    return set(combinations(range(n), 2))


def _delaunay_pairs(coords: np.ndarray) -> Set[Tuple[int, int]]:
    """
    Index pairs along the sides of the Delaunay triangles of ``coords``.

    The Euclidean minimum spanning tree is a subgraph of the Delaunay
    triangulation, so these pairs are enough for campus-scale networks while
    growing linearly instead of quadratically. Falls back to all pairs when
    there are fewer than 3 points or the points are degenerate (collinear or
    repeated), where Qhull cannot triangulate.
    """
    if len(coords) < 3:
        return _complete_pairs(len(coords))

    try:
        tri = Delaunay(coords)
    except QhullError:
        logger.info("Delaunay triangulation failed for %d points, using all pairs", len(coords))
        return _complete_pairs(len(coords))

    # Qhull drops duplicate input points, which would leave them unconnected
    if len(tri.coplanar):
        logger.info("Delaunay skipped %d duplicate points, using all pairs", len(tri.coplanar))
        return _complete_pairs(len(coords))

    pairs = set()
    for simplex in tri.simplices:
        for i, j in combinations(simplex, 2):
            i, j = int(i), int(j)
            pairs.add((min(i, j), max(i, j)))
    return pairs


def generate_candidate_edges(
        nodes: List[Node],
        method: str = "complete",
        max_length: Optional[float] = None,
) -> List[Edge]:
    """
    Generates candidate connections between geolocated buildings.

    Each candidate is weighted by the rounded distance between its endpoints
    in meters, the same cost the map assigns when two buildings are connected
    by hand.

    Args:
        nodes: Buildings with coordinates.
        method: ``"complete"`` for every pair, ``"delaunay"`` for the sides of the
            Delaunay triangulation only.
        max_length: Optional cutoff in meters; longer candidates are dropped.

    Returns:
        List[Edge]: candidates ordered by (source index, target index).

    Raises:
        NetworkError: for an unknown method or nodes without coordinates.
    """
    if method not in CANDIDATE_METHODS:
        raise NetworkError(f"Unknown candidate method '{method}', expected one of {CANDIDATE_METHODS}")

    if len(nodes) < 2:
        return []

    dist_matrix = distance_matrix(nodes)

    if method == "delaunay":
        pairs = _delaunay_pairs(node_coords(nodes))
    else:
        pairs = _complete_pairs(len(nodes))

    edges = []
    for i, j in sorted(pairs):
        d = float(dist_matrix[i, j])
        if max_length is not None and d > max_length:
            continue
        source, target = nodes[i].id, nodes[j].id
        edges.append(Edge(id=f"{source}-{target}", source=source, target=target, weight=round_meters(d)))

    logger.info("Generated %d %s candidate connections for %d buildings", len(edges), method, len(nodes))
    return edges
