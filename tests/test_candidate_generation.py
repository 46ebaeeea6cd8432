import pytest

from campus_network.candidate_generation import distance_matrix, generate_candidate_edges
from campus_network.errors import NetworkError
from campus_network.mst import compute_mst
from campus_network.utils import Node, haversine_meters


@pytest.fixture
def square_with_center():
    # near the equator degrees are roughly square, so Delaunay on lat/lng is sound
    return [
        Node(id="sw", lat=0.0, lng=0.0),
        Node(id="se", lat=0.0, lng=0.01),
        Node(id="nw", lat=0.01, lng=0.0),
        Node(id="ne", lat=0.01, lng=0.01),
        Node(id="c", lat=0.005, lng=0.005),
    ]


def test_distance_matrix_matches_haversine(square_with_center):
    matrix = distance_matrix(square_with_center)
    assert matrix.shape == (5, 5)
    assert matrix[0, 0] == 0
    assert matrix[0, 1] == pytest.approx(haversine_meters(0.0, 0.0, 0.0, 0.01))
    assert matrix[1, 0] == pytest.approx(matrix[0, 1])


def test_complete_candidates(square_with_center):
    edges = generate_candidate_edges(square_with_center)
    assert len(edges) == 10
    assert edges[0].id == "sw-se"
    assert edges[0].weight == round(haversine_meters(0.0, 0.0, 0.0, 0.01))


def test_delaunay_candidates_are_sparser_with_same_tree_cost(square_with_center):
    complete = generate_candidate_edges(square_with_center, method="complete")
    delaunay = generate_candidate_edges(square_with_center, method="delaunay")
    assert len(delaunay) == 8
    assert {e.id for e in delaunay} <= {e.id for e in complete}
    assert compute_mst(square_with_center, delaunay).total_cost == compute_mst(square_with_center, complete).total_cost


def test_delaunay_falls_back_for_collinear_points():
    nodes = [Node(id=str(i), lat=0.0, lng=0.001 * i) for i in range(3)]
    assert len(generate_candidate_edges(nodes, method="delaunay")) == 3


def test_delaunay_two_points():
    nodes = [Node(id="a", lat=0.0, lng=0.0), Node(id="b", lat=0.0, lng=0.001)]
    assert [e.id for e in generate_candidate_edges(nodes, method="delaunay")] == ["a-b"]


def test_max_length_drops_long_candidates(square_with_center):
    edges = generate_candidate_edges(square_with_center, max_length=1000)
    assert sorted(e.id for e in edges) == ["ne-c", "nw-c", "se-c", "sw-c"]


def test_fewer_than_two_nodes():
    assert generate_candidate_edges([]) == []
    assert generate_candidate_edges([Node(id="a", lat=0, lng=0)]) == []


def test_missing_coordinates():
    with pytest.raises(NetworkError, match="b"):
        generate_candidate_edges([Node(id="a", lat=0, lng=0), Node(id="b")])


def test_unknown_method(square_with_center):
    with pytest.raises(NetworkError):
        generate_candidate_edges(square_with_center, method="voronoi")
