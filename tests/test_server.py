import pytest
from fastapi.testclient import TestClient

from campus_network import server


@pytest.fixture
def client():
    return TestClient(server.app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_optimize(client, abcd_nodes, abcd_edges):
    response = client.post("/api/optimize", json={"nodes": abcd_nodes, "edges": abcd_edges})
    assert response.status_code == 200
    body = response.json()
    assert body["totalCost"] == 6
    assert [e["id"] for e in body["minimumSpanningTree"]] == ["B-C", "A-C", "C-D"]


def test_optimize_empty(client):
    response = client.post("/api/optimize", json={"nodes": [], "edges": []})
    assert response.status_code == 200
    assert response.json() == {"minimumSpanningTree": [], "totalCost": 0}


def test_unknown_node_is_client_error(client, abcd_nodes):
    edges = [{"id": "A-Z", "source": "A", "target": "Z", "weight": 1}]
    response = client.post("/api/optimize", json={"nodes": abcd_nodes, "edges": edges})
    assert response.status_code == 400
    assert "unknown node 'Z'" in response.json()["error"]


def test_invalid_weight_is_client_error(client, abcd_nodes):
    edges = [{"id": "A-B", "source": "A", "target": "B", "weight": "lots"}]
    response = client.post("/api/optimize", json={"nodes": abcd_nodes, "edges": edges})
    assert response.status_code == 400
    assert "weight" in response.json()["error"]


def test_malformed_json_is_client_error(client):
    response = client.post(
        "/api/optimize",
        content=b"{nodes: ",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_non_object_body_is_client_error(client):
    response = client.post("/api/optimize", json=[1, 2, 3])
    assert response.status_code == 400


def test_unexpected_failure_is_server_error(client, monkeypatch):
    def boom(payload):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(server, "optimize_network", boom)
    response = client.post("/api/optimize", json={"nodes": [], "edges": []})
    assert response.status_code == 500
    assert response.json() == {"error": "An error occurred while processing the request"}
