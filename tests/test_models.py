import math

import pytest
from pydantic import ValidationError

from campus_network.errors import InvalidEdge, NetworkError
from campus_network.utils import Edge, Node, haversine_meters, normalize_weight, parse_input, round_meters


@pytest.mark.parametrize(
    "raw, expected",
    [(5, 5), (5.99, 5), (-2.5, -2), ("12", 12), (" 7.8 ", 7), (0, 0)],
)
def test_normalize_weight_truncates_toward_zero(raw, expected):
    assert normalize_weight(raw) == expected


@pytest.mark.parametrize("raw", [None, True, "", "12abc", float("nan"), float("-inf"), [3]])
def test_normalize_weight_rejects_garbage(raw):
    with pytest.raises(InvalidEdge):
        normalize_weight(raw)


def test_edge_defaults_id_from_endpoints():
    edge = Edge(source="1", target="2", weight=3)
    assert edge.id == "1-2"


def test_numeric_ids_become_strings():
    edge = Edge.model_validate({"id": 7, "source": 1, "target": 2, "weight": 3})
    assert (edge.id, edge.source, edge.target) == ("7", "1", "2")
    assert Node.model_validate({"id": 1}).id == "1"


def test_node_location():
    assert Node(id="a", lat=40.8, lng=-73.9).has_location
    assert not Node(id="a", lat=40.8).has_location


def test_parse_input_rejects_duplicate_nodes():
    with pytest.raises(NetworkError, match="Duplicate node id 'A'"):
        parse_input({"nodes": [{"id": "A"}, {"id": "A"}], "edges": []})


def test_parse_input_rejects_bad_coordinates():
    with pytest.raises(NetworkError, match="lat"):
        parse_input({"nodes": [{"id": "A", "lat": 91, "lng": 0}], "edges": []})


def test_parse_input_reports_missing_weight():
    with pytest.raises(NetworkError, match="edges.0.weight"):
        parse_input({"nodes": [{"id": "A"}, {"id": "B"}], "edges": [{"source": "A", "target": "B"}]})


def test_parse_input_rejects_non_object():
    with pytest.raises(NetworkError):
        parse_input([1, 2, 3])


def test_parse_input_defaults_to_empty_lists():
    request = parse_input({})
    assert request.nodes == []
    assert request.edges == []


def test_haversine_one_degree_latitude():
    # one degree of latitude is about 111.2 km
    assert math.isclose(haversine_meters(0, 0, 1, 0), 111194.9, rel_tol=1e-4)
    assert haversine_meters(40.8, -73.9, 40.8, -73.9) == 0


def test_edge_weight_is_normalized_on_assignment():
    edge = Edge(source="a", target="b", weight=3)
    edge.weight = "7.9"
    assert edge.weight == 7
    with pytest.raises(ValidationError):
        edge.weight = "x"
    assert edge.weight == 7
    assert edge.id == "a-b"


@pytest.mark.parametrize("distance, expected", [(250.5, 251), (249.5, 250), (250.49, 250), (0.0, 0)])
def test_round_meters_rounds_halves_up(distance, expected):
    assert round_meters(distance) == expected
