"""
Tests for the dashboard HTTP service.

The sheet is swapped out through FastAPI's dependency overrides, so these
run without credentials or network.
"""
import runpy

import pytest
import uvicorn
from fastapi.testclient import TestClient

from inventory_dashboard import app as app_module
from inventory_dashboard import settings
from inventory_dashboard.app import app, get_row_source
from inventory_dashboard.schemas import InventoryRecord


class StaticSource:
    def __init__(self, rows):
        self.rows = rows

    def fetch_rows(self):
        return self.rows


class BrokenSource:
    def fetch_rows(self):
        raise ValueError("Spreadsheet ID is missing in environment variables")


ROWS = [
    ["ITEM", "KG", "BATCH"],
    ["Beef Brisket", "1.5", "B-01"],
    ["Smoked Beef Brisket", "3"],
    ["Beef Angus", "2"],
    ["Pork Ribs", "0.75", "R-9"],
]


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_source(source):
    app.dependency_overrides[get_row_source] = lambda: source


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestInventoryEndpoint:
    def test_returns_normalized_rows(self, client):
        use_source(StaticSource(ROWS))

        response = client.get("/api/inventory")

        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 4
        assert data[0] == {
            "BATCH": "B-01",
            "ITEM": "Smoked Beef Brisket",
            "KG": 1.5,
            "UNIT": 3300.0,
            "SRP": 4950.0,
        }
        assert data[2]["ITEM"] == 'Smoked Angus "Bri-Steak"'
        assert data[3]["UNIT"] == 0
        assert data[3]["SRP"] == 0

    def test_empty_sheet_is_success(self, client):
        use_source(StaticSource([]))

        response = client.get("/api/inventory")

        assert response.status_code == 200
        assert response.json() == {"data": []}

    def test_fetch_failure_is_generic_500(self, client):
        use_source(BrokenSource())

        response = client.get("/api/inventory")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch inventory data"}

    def test_overlong_weight_is_served_as_zero(self, client):
        use_source(StaticSource([["ITEM", "KG"], ["Beef Brisket", "9" * 400]]))

        response = client.get("/api/inventory")

        assert response.status_code == 200
        [row] = response.json()["data"]
        assert row["KG"] == 0
        assert row["SRP"] == 0

    def test_unserializable_records_give_error_payload(self, client, monkeypatch):
        """Serialization runs inside the error handling, not after it."""
        monkeypatch.setattr(
            app_module,
            "load_inventory",
            lambda source: [InventoryRecord(item="X", kg=float("inf"))],
        )

        response = client.get("/api/inventory")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch inventory data"}

    def test_missing_configuration_is_500(self, client, monkeypatch):
        """The default source validates settings at fetch time."""
        monkeypatch.setattr(settings, "SPREADSHEET_ID", None)
        monkeypatch.setattr(settings, "GOOGLE_PRIVATE_KEY", "key")
        monkeypatch.setattr(settings, "GOOGLE_CLIENT_EMAIL", "a@b.c")

        response = client.get("/api/inventory")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch inventory data"}


class TestDashboardPage:
    def test_default_view(self, client):
        use_source(StaticSource(ROWS))

        response = client.get("/")

        assert response.status_code == 200
        html = response.text
        assert "Smoked Beef Brisket" in html
        assert "Smoked Angus &quot;Bri-Steak&quot;" in html
        assert "Other Items" in html
        assert "PHP 3,300.00" in html
        assert "Showing 4 of 4 items" in html
        # Largest brisket first
        assert html.index("3.000 kg") < html.index("1.500 kg")

    def test_ascending_sort(self, client):
        use_source(StaticSource(ROWS))

        html = client.get("/", params={"sort": "asc"}).text

        assert html.index("1.500 kg") < html.index("3.000 kg")

    def test_filter_and_search(self, client):
        use_source(StaticSource(ROWS))

        html = client.get("/", params={"filter": "angus"}).text
        assert "Showing 1 of 4 items" in html
        assert "Other Items" not in html

        html = client.get("/", params={"search": "ribs"}).text
        assert "Showing 1 of 4 items" in html

    def test_no_matches_message(self, client):
        use_source(StaticSource(ROWS))

        html = client.get("/", params={"search": "wagyu"}).text

        assert "No items found" in html
        assert "Try adjusting your search or filter criteria" in html

    def test_fetch_failure_shows_banner(self, client):
        use_source(BrokenSource())

        response = client.get("/")

        assert response.status_code == 200
        assert settings.FETCH_ERROR_MESSAGE in response.text
        assert "Showing 0 of 0 items" in response.text
        assert "Your inventory appears to be empty." in response.text

    def test_invalid_filter_is_rejected(self, client):
        use_source(StaticSource(ROWS))
        assert client.get("/", params={"filter": "pork"}).status_code == 422


class TestServerEntryPoint:
    def test_runs_uvicorn_with_configured_address(self, monkeypatch):
        calls = []
        monkeypatch.setattr(uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
        monkeypatch.setattr(settings, "API_HOST", "0.0.0.0")
        monkeypatch.setattr(settings, "API_PORT", 9001)

        runpy.run_module("inventory_dashboard.app", run_name="__main__")

        assert calls == [
            (
                "inventory_dashboard.app:app",
                {"host": "0.0.0.0", "port": 9001, "log_level": settings.LOG_LEVEL.lower()},
            )
        ]
