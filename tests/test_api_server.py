"""Tests for the mind map API server."""

import json

import pytest
from fastapi.testclient import TestClient

from mindmap import __version__, api_server


@pytest.fixture
def data_dir(tmp_path, monkeypatch, payload):
    monkeypatch.setattr(api_server, "DATA_DIR", str(tmp_path))
    monkeypatch.setattr(api_server, "API_TOKEN", None)
    (tmp_path / "42.json").write_text(json.dumps({"matterName": "Acme Matter", "data": payload}))
    (tmp_path / "43.json").write_text(json.dumps(payload))
    (tmp_path / "44.json").write_text(json.dumps({"matterName": "Empty", "data": {"entities": {}}}))
    (tmp_path / "45.json").write_text(json.dumps({"entities": {"companies": "oops"}}))
    return tmp_path


@pytest.fixture
def client(data_dir):
    return TestClient(api_server.app)


class TestInfo:
    def test_root(self, client):
        body = client.get("/").json()
        assert body["version"] == __version__
        assert "/api/matters/{matter_id}/mind-map" in body["endpoints"]

    def test_health(self, client, data_dir):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["matters_count"] == 4
        assert body["data_dir"] == str(data_dir)


class TestMindMap:
    def test_envelope_file(self, client):
        response = client.get("/api/matters/42/mind-map")
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Mind map loaded"
        assert body["matterId"] == 42
        assert body["matterName"] == "Acme Matter"
        assert len(body["data"]["entities"]["companies"]) == 4
        assert body["data"]["relationships"][0]["from"] == "C1"
        assert body["data"]["relationships"][0]["to"] == "P1"
        assert body["data"]["entities"]["bankruptcies"][0]["from"] == "2020-01-15"
        assert body["data"]["stats"]["totalCompanies"] == 4

    def test_bare_data_file(self, client):
        body = client.get("/api/matters/43/mind-map").json()
        assert body["success"] is True
        assert body["matterName"] is None

    def test_no_companies(self, client):
        body = client.get("/api/matters/44/mind-map").json()
        assert body["success"] is True
        assert body["message"] == "No company data found for this matter"

    def test_not_found(self, client):
        response = client.get("/api/matters/999/mind-map")
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "MATTER_NOT_FOUND",
            "message": "Matter not found",
        }

    def test_invalid_data(self, client):
        response = client.get("/api/matters/45/mind-map")
        assert response.status_code == 500
        assert response.json()["error"] == "MIND_MAP_GENERATION_FAILED"


class TestStatus:
    def test_available(self, client):
        body = client.get("/api/matters/42/mind-map/status").json()
        assert body == {
            "success": True,
            "available": True,
            "reportCount": 4,
            "message": "Mind map available with 4 companies",
        }

    def test_without_companies(self, client):
        body = client.get("/api/matters/44/mind-map/status").json()
        assert body["available"] is False
        assert body["reportCount"] == 0

    def test_missing(self, client):
        response = client.get("/api/matters/999/mind-map/status")
        assert response.status_code == 200
        assert response.json()["available"] is False


class TestGraph:
    def test_full_graph(self, client):
        body = client.get("/api/matters/42/graph").json()
        assert body["matterName"] == "Acme Matter"
        assert body["nodeCount"] == len(body["nodes"]) == 13
        assert body["edgeCount"] == len(body["edges"]) == 13
        assert body["componentCount"] == 2
        assert body["hidden"] == []
        assert all("x" in node and "y" in node for node in body["nodes"])

    def test_hidden_category(self, client):
        body = client.get("/api/matters/42/graph", params={"persons": "false"}).json()
        assert body["hidden"] == ["persons"]
        assert not [n for n in body["nodes"] if n["category"] == "person"]
        assert not [e for e in body["edges"] if e["to"] in ("P1", "P2")]

    def test_not_found(self, client):
        assert client.get("/api/matters/999/graph").status_code == 404


class TestCorruptFiles:
    ENDPOINTS = ["/api/matters/{}/mind-map", "/api/matters/{}/mind-map/status", "/api/matters/{}/graph"]

    @pytest.mark.parametrize("endpoint", ENDPOINTS)
    def test_malformed_json(self, client, data_dir, endpoint):
        (data_dir / "46.json").write_text("{not json")
        response = client.get(endpoint.format(46))
        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "MIND_MAP_GENERATION_FAILED",
            "message": "Mind map data for this matter is invalid",
        }

    @pytest.mark.parametrize("endpoint", ENDPOINTS)
    def test_non_object_root(self, client, data_dir, endpoint):
        (data_dir / "47.json").write_text(json.dumps([1, 2]))
        response = client.get(endpoint.format(47))
        assert response.status_code == 500
        assert response.json()["error"] == "MIND_MAP_GENERATION_FAILED"


class TestToken:
    @pytest.fixture(autouse=True)
    def token(self, data_dir, monkeypatch):
        monkeypatch.setattr(api_server, "API_TOKEN", "secret")

    @pytest.mark.parametrize("path", ["/api/matters/42/mind-map", "/api/matters/42/mind-map/status", "/api/matters/42/graph"])
    def test_missing_token(self, client, path):
        response = client.get(path)
        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "UNAUTHORIZED",
            "message": "Please log in to continue",
        }

    def test_wrong_token(self, client):
        response = client.get("/api/matters/42/mind-map", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 403
        assert response.json() == {
            "success": False,
            "error": "INVALID_TOKEN",
            "message": "Invalid or expired token",
        }

    def test_valid_token(self, client):
        response = client.get("/api/matters/42/mind-map/status", headers={"Authorization": "Bearer secret"})
        assert response.status_code == 200
        assert response.json()["reportCount"] == 4

    def test_info_routes_stay_open(self, client):
        assert client.get("/health").status_code == 200
        assert client.get("/").status_code == 200
