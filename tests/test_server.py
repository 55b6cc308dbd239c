"""Tests for the FastAPI endpoints."""

import pytest
from fastapi.testclient import TestClient

from app.server import _capped, app
from em_solver.config import CFG
from em_solver.samples import SOLVABLE_2X2, UNSOLVABLE_2X2, sample_records


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def sample_puzzle():
    size, records = sample_records()
    return {"size": size, "pieces": [list(r) for r in records]}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_sample(client, sample_puzzle):
    assert client.get("/api/sample").json() == sample_puzzle


class TestCheck:
    def test_valid(self, client, sample_puzzle):
        data = client.post("/api/check", json=sample_puzzle).json()
        assert data["success"]
        assert (data["corner"], data["border"], data["full"]) == (4, 8, 4)

    def test_bad_piece(self, client):
        data = client.post("/api/check", json={"size": 2, "pieces": [[0, 0, 0, 1]] * 4}).json()
        assert not data["success"]
        assert "piece 0" in data["error"]

    def test_wrong_count(self, client):
        data = client.post("/api/check", json={"size": 3, "pieces": [[0, 0, 1, 1]] * 4}).json()
        assert not data["success"]


class TestSolve:
    def test_sample(self, client, sample_puzzle):
        data = client.post("/api/solve", json=sample_puzzle).json()
        assert data["success"]
        assert data["outcome"] == "solved"
        assert len(data["placements"]) == 16
        first = data["placements"][0]
        assert (first["row"], first["col"]) == (0, 0)
        assert first["rotation"] is None
        assert first["faces"][0] == "#"
        inner = [p for p in data["placements"] if 0 < p["row"] < 3 and 0 < p["col"] < 3]
        assert all(p["rotation"] in ("NORTH", "EAST", "SOUTH", "WEST") for p in inner)

    def test_unsolvable(self, client):
        data = client.post("/api/solve", json={"size": 2, "pieces": [list(r) for r in UNSOLVABLE_2X2]}).json()
        assert not data["success"]
        assert data["outcome"] == "unsolvable"
        assert data["placements"] == []

    def test_node_limit(self, client, sample_puzzle):
        data = client.post("/api/solve", json={**sample_puzzle, "node_limit": 2}).json()
        assert data["outcome"] == "limit_reached"

    def test_bad_order(self, client, sample_puzzle):
        data = client.post("/api/solve", json={**sample_puzzle, "order": "zigzag"}).json()
        assert not data["success"]
        assert "zigzag" in data["error"]

    def test_malformed_body(self, client):
        assert client.post("/api/solve", json={"size": "big"}).status_code == 422


def test_svg(client):
    response = client.post("/api/svg", json={"size": 2, "pieces": [list(r) for r in SOLVABLE_2X2]})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.text.startswith("<svg")


def test_svg_bad_puzzle(client):
    response = client.post("/api/svg", json={"size": 2, "pieces": [[0, 0, 1, 1]]})
    assert response.status_code == 422


def test_generate(client):
    data = client.post("/api/generate", json={"size": 3, "seed": 5}).json()
    assert data["size"] == 3
    assert len(data["pieces"]) == 9
    solved = client.post("/api/solve", json=data).json()
    assert solved["success"]


def test_generate_rejects_small(client):
    assert client.post("/api/generate", json={"size": 1}).status_code == 422


class TestLimits:
    def test_oversized_generate(self, client):
        assert client.post("/api/generate", json={"size": 10**6}).status_code == 422
        assert client.post("/api/generate", json={"size": CFG.MAX_SIZE + 1}).status_code == 422

    def test_oversized_solve(self, client):
        body = {"size": 10**6, "pieces": [[0, 0, 1, 1]] * 4}
        assert client.post("/api/solve", json=body).status_code == 422
        assert client.post("/api/svg", json=body).status_code == 422

    def test_too_many_pieces(self, client):
        body = {"size": 2, "pieces": [[1, 1, 1, 1]] * (CFG.MAX_SIZE ** 2 + 1)}
        assert client.post("/api/check", json=body).status_code == 422

    def test_bad_palette(self, client):
        assert client.post("/api/generate", json={"size": 3, "inner_colors": 0}).status_code == 422

    def test_zero_limits_fall_back_to_caps(self, client, sample_puzzle, monkeypatch):
        monkeypatch.setattr(CFG, "NODE_LIMIT", 2)
        body = {**sample_puzzle, "node_limit": 0, "time_limit": 0}
        data = client.post("/api/solve", json=body).json()
        assert data["outcome"] == "limit_reached"
        assert data["attempts"] == 2

    def test_client_cannot_raise_node_cap(self, client, sample_puzzle, monkeypatch):
        monkeypatch.setattr(CFG, "NODE_LIMIT", 2)
        data = client.post("/api/solve", json={**sample_puzzle, "node_limit": 10**9}).json()
        assert data["outcome"] == "limit_reached"

    def test_capped(self):
        assert _capped(None, 30.0) == 30.0
        assert _capped(0, 30.0) == 30.0
        assert _capped(-1, 30.0) == 30.0
        assert _capped(5.0, 30.0) == 5.0
        assert _capped(100.0, 30.0) == 30.0
        assert _capped(7, 0) == 7
        assert _capped(None, 0) is None
