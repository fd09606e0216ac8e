"""
Tests for the Life Weeks HTTP API.

Each test gets a fresh app bound to a temporary SQLite file.
"""

import pytest
from fastapi.testclient import TestClient

NOW = "2024-01-01T00:00:00"


@pytest.fixture
def client(tmp_path):
    """Create test client with a throwaway preferences database."""
    from life_weeks.main import create_app

    app = create_app(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'life_weeks.db'}",
        configure_logging=False,
    )
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


class TestRootAndHealth:
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "running"
        assert "version" in data

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"
        assert data["uptime_seconds"] >= 0


class TestStatsEndpoint:
    def test_stats(self, client):
        response = client.post("/api/stats", json={"birthdate": "2000-01-01", "now": NOW})
        assert response.status_code == 200
        stats = response.json()["stats"]
        assert stats["days_lived"] == 8766
        assert stats["weeks_lived"] == 1252
        assert stats["total_weeks"] == 4680
        assert stats["percentage_lived"] == 27
        assert stats["earth_orbits"] == 24.0

    def test_stats_default_now(self, client):
        response = client.post("/api/stats", json={"birthdate": "2000-01-01"})
        assert response.status_code == 200
        assert response.json()["stats"]["days_lived"] > 8766

    def test_unparseable_birthdate_is_422(self, client):
        response = client.post("/api/stats", json={"birthdate": "not-a-date", "now": NOW})
        assert response.status_code == 422
        assert response.json()["error"]["type"] == "InvalidInput"

    def test_future_birthdate_is_422(self, client):
        response = client.post("/api/stats", json={"birthdate": "2030-01-01", "now": NOW})
        assert response.status_code == 422
        assert "future" in response.json()["error"]["message"]


class TestGridEndpoints:
    def test_grid_summary(self, client):
        response = client.get("/api/grid", params={"birthdate": "2000-01-01", "now": NOW})
        assert response.status_code == 200
        data = response.json()
        assert data["rows"] == 90
        assert data["counts"] == {"past": 1252, "current": 1, "future": 3427}

    def test_current_week(self, client):
        response = client.get(
            "/api/grid/1252", params={"birthdate": "2000-01-01", "now": NOW}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "current"
        assert data["label"] == "Current week"

    def test_last_week_is_future(self, client):
        response = client.get(
            "/api/grid/4679", params={"birthdate": "2000-01-01", "now": NOW}
        )
        assert response.status_code == 200
        assert response.json()["state"] == "future"

    def test_out_of_range_is_404(self, client):
        response = client.get(
            "/api/grid/4680", params={"birthdate": "2000-01-01", "now": NOW}
        )
        assert response.status_code == 404
        assert response.json()["error"]["type"] == "IndexOutOfRange"


class TestFactsEndpoint:
    def test_basic_facts(self, client):
        response = client.get("/api/facts")
        assert response.status_code == 200
        data = response.json()
        assert len(data["facts"]) == 15
        assert data["current"] == data["facts"][0]
        assert data["rotation_seconds"] == 6

    def test_personalized_facts(self, client):
        response = client.get("/api/facts", params={"birthdate": "2000-01-01", "now": NOW})
        facts = response.json()["facts"]
        assert "You have witnessed 297 full moon cycles" in facts


class TestShareImageEndpoint:
    def test_png_download(self, client):
        response = client.get(
            "/api/share.png",
            params={"birthdate": "2000-01-01", "now": NOW, "dark_mode": "true"},
        )
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert "my-life-in-weeks-2024-01-01.png" in response.headers["content-disposition"]
        assert response.content.startswith(b"\x89PNG")


class TestPreferencesEndpoints:
    def test_empty_preferences(self, client):
        response = client.get("/api/preferences")
        assert response.status_code == 200
        assert response.json() == {"profile": "default", "birthdate": None, "dark_mode": False}

    def test_save_and_reset(self, client):
        response = client.put(
            "/api/preferences", json={"birthdate": "1990-05-15", "dark_mode": True}
        )
        assert response.status_code == 200
        assert response.json()["birthdate"] == "1990-05-15"
        assert response.json()["dark_mode"] is True

        response = client.delete("/api/preferences")
        assert response.status_code == 200
        assert response.json()["birthdate"] is None
        assert response.json()["dark_mode"] is True

    def test_toggle_dark_mode(self, client):
        response = client.post("/api/preferences/toggle-dark-mode")
        assert response.json()["dark_mode"] is True
        response = client.post("/api/preferences/toggle-dark-mode")
        assert response.json()["dark_mode"] is False

    def test_future_birthdate_not_stored(self, client):
        response = client.put("/api/preferences", json={"birthdate": "2999-01-01"})
        assert response.status_code == 422
        assert client.get("/api/preferences").json()["birthdate"] is None
