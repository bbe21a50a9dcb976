"""Tests for API endpoints."""
import pytest
from fastapi.testclient import TestClient
from mazegen.main import app
from mazegen.models.schemas import ErrorResponse


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sample_level():
    """Sample level JSON for testing: one slide right reaches the finish."""
    cells = [["wall"] * 5 for _ in range(5)]
    cells[1][1] = "player"
    cells[1][2] = "empty"
    cells[1][3] = "finish"
    return {
        "level_number": 1,
        "grid_size": 5,
        "cells": cells,
        "start": "1_1",
        "finish": "3_1",
        "moving_spikes": [],
        "portal_pairs": {},
        "switch_targets": {},
    }


class TestRootEndpoint:
    """Tests for root endpoint."""

    def test_root_returns_info(self, client):
        """Test root endpoint returns API info."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert "name" in data
        assert "version" in data
        assert "endpoints" in data


class TestHealthEndpoint:
    """Tests for health endpoint."""

    def test_health_check(self, client):
        """Test health endpoint returns healthy status."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"


class TestLevelEndpoints:
    """Tests for level endpoints."""

    def test_get_level(self, client):
        """Test generating a level."""
        response = client.get("/api/levels/5")

        assert response.status_code == 200
        data = response.json()
        assert data["level_json"]["level_number"] == 5
        assert data["level_json"]["grid_size"] == 15
        assert data["level_json"]["start"] == "1_1"
        assert data["level_json"]["finish"] == "13_13"
        assert data["diagnostics"]["seed"] == 5 ^ 0x5EC6E1DE
        assert data["generation_time_ms"] >= 0

    def test_get_level_is_deterministic(self, client):
        """Test that two requests return the same level."""
        first = client.get("/api/levels/12").json()
        second = client.get("/api/levels/12").json()

        assert first["level_json"] == second["level_json"]

    def test_level_below_range(self, client):
        """Test that level 0 fails validation."""
        response = client.get("/api/levels/0")

        assert response.status_code == 422

    def test_level_above_range(self, client):
        """Test that levels past the maximum are not found."""
        response = client.get("/api/levels/101")

        assert response.status_code == 404

    def test_difficulty(self, client):
        """Test the difficulty profile endpoint."""
        response = client.get("/api/levels/30/difficulty")

        assert response.status_code == 200
        data = response.json()
        assert data["level"] == 30
        assert data["min_moves"] == 6
        assert data["hazard_density"] == pytest.approx(0.13)

    def test_solution(self, client):
        """Test that generated levels come with a solution."""
        response = client.get("/api/levels/7/solution")

        assert response.status_code == 200
        data = response.json()
        assert data["solvable"]
        assert data["min_moves"] == len(data["moves"])
        assert data["min_moves"] >= 1

    def test_play_solution(self, client):
        """Test that replaying the solution completes the level."""
        moves = client.get("/api/levels/33/solution").json()["moves"]

        response = client.post("/api/levels/33/play", json={"moves": moves})

        assert response.status_code == 200
        data = response.json()
        assert data["is_complete"]
        assert not data["is_dead"]
        assert data["position"] == "13_13"
        assert data["moves_used"] == len(moves)

    def test_play_invalid_direction(self, client):
        """Test that unknown directions are rejected."""
        response = client.post("/api/levels/3/play", json={"moves": ["up", "north"]})

        assert response.status_code == 400

    def test_play_missing_moves(self, client):
        """Test playing with a missing move list."""
        response = client.post("/api/levels/3/play", json={})

        assert response.status_code == 422


class TestSolveEndpoint:
    """Tests for solve endpoint."""

    def test_solve_valid_level(self, client, sample_level):
        """Test solving a submitted level."""
        response = client.post("/api/solve", json={"level_json": sample_level})

        assert response.status_code == 200
        data = response.json()
        assert data["solvable"]
        assert data["min_moves"] == 1
        assert data["moves"] == ["right"]

    def test_solve_unsolvable_level(self, client, sample_level):
        """Test that a blocked finish is reported as unsolvable."""
        sample_level["cells"][1][2] = "hole"

        response = client.post("/api/solve", json={"level_json": sample_level})

        assert response.status_code == 200
        data = response.json()
        assert not data["solvable"]
        assert data["min_moves"] is None

    def test_solve_invalid_level(self, client, sample_level):
        """Test that malformed level JSON is rejected."""
        sample_level["cells"][2][2] = "lava"

        response = client.post("/api/solve", json={"level_json": sample_level})

        assert response.status_code == 400
        assert "Invalid level" in response.json()["detail"]

    def test_solve_bad_spike_speed(self, client, sample_level):
        """Test that a non-numeric patrol speed is a client error."""
        sample_level["moving_spikes"] = [{"start": "2_1", "end": "3_1", "speed": None}]

        response = client.post("/api/solve", json={"level_json": sample_level})

        assert response.status_code == 400

    def test_solve_nested_cell(self, client, sample_level):
        """Test that a list in place of a cell value is a client error."""
        sample_level["cells"][2][2] = ["wall"]

        response = client.post("/api/solve", json={"level_json": sample_level})

        assert response.status_code == 400

    def test_solve_pressure_plate_level(self, client):
        """Test that submitted levels with switches are solved through the plate."""
        cells = [["wall"] * 5 for _ in range(5)]
        cells[1][1] = "player"
        cells[1][2] = "empty"
        cells[1][3] = "pressure_plate"
        cells[2][3] = "toggle_wall"
        cells[3][3] = "finish"
        level_json = {
            "grid_size": 5,
            "cells": cells,
            "start": "1_1",
            "finish": "3_3",
            "switch_targets": {"3_1": ["3_2"]},
        }

        response = client.post("/api/solve", json={"level_json": level_json})

        assert response.status_code == 200
        assert response.json()["moves"] == ["right", "up"]

    def test_solve_empty_request(self, client):
        """Test solving with missing level_json."""
        response = client.post("/api/solve", json={})

        assert response.status_code == 422  # Validation error


class TestErrorResponses:
    """Tests for documented error bodies."""

    def test_error_schema_documented(self, client):
        """Test that 400 responses reference the error schema in OpenAPI."""
        paths = client.get("/openapi.json").json()["paths"]

        solve_400 = paths["/api/solve"]["post"]["responses"]["400"]
        play_400 = paths["/api/levels/{level_number}/play"]["post"]["responses"]["400"]
        for documented in (solve_400, play_400):
            ref = documented["content"]["application/json"]["schema"]["$ref"]
            assert ref.endswith("/ErrorResponse")

    def test_error_body_matches_schema(self, client):
        """Test that a 400 body parses as ErrorResponse."""
        response = client.post("/api/levels/3/play", json={"moves": ["north"]})

        assert response.status_code == 400
        error = ErrorResponse(**response.json())
        assert "north" in error.detail
