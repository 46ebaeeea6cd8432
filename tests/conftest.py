import pytest


@pytest.fixture
def abcd_nodes():
    return [{"id": node_id, "name": f"Building {node_id}"} for node_id in "ABCD"]


@pytest.fixture
def abcd_edges():
    return [
        {"id": "A-B", "source": "A", "target": "B", "weight": 4},
        {"id": "A-C", "source": "A", "target": "C", "weight": 2},
        {"id": "B-C", "source": "B", "target": "C", "weight": 1},
        {"id": "B-D", "source": "B", "target": "D", "weight": 5},
        {"id": "C-D", "source": "C", "target": "D", "weight": 3},
    ]
