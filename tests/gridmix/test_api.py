"""Tests for the energy API routes."""
from datetime import date, datetime, timezone

import pytest
from fastapi.testclient import TestClient

from gridmix.api.dependencies import (
    get_charging_window_service,
    get_energy_mix_service,
    get_generation_client,
)
from gridmix.exceptions import DataInconsistencyError, FetchError
from gridmix.main import app
from gridmix.models.generation import ChargingWindow, DailyMix
from gridmix.services.charging_window_optimizer import validate_hours


class StubEnergyMixService:
    def __init__(self, result=None, error=None):
        self.result = result or []
        self.error = error

    def get_daily_mix_for_horizon(self):
        if self.error is not None:
            raise self.error
        return self.result


class StubChargingWindowService:
    def __init__(self, error=None):
        self.error = error
        self.requested = []

    def get_optimal_window(self, hours):
        self.requested.append(hours)
        validate_hours(hours)
        if self.error is not None:
            raise self.error
        return ChargingWindow(
            start=datetime(2025, 12, 6, 12, 0, tzinfo=timezone.utc),
            end=datetime(2025, 12, 6, 12 + hours, 0, tzinfo=timezone.utc),
            clean_energy_share=75.0 + hours,
        )


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def override_mix(service):
    app.dependency_overrides[get_energy_mix_service] = lambda: service


def override_window(service):
    app.dependency_overrides[get_charging_window_service] = lambda: service


class TestEnergyMixRoute:
    """Tests for GET /api/energy-mix."""

    def test_returns_daily_mix(self, client):
        """Test daily mixes are serialized with camelCase names."""
        override_mix(StubEnergyMixService([
            DailyMix(date=date(2025, 12, 5), mix={"biomass": 10.5, "nuclear": 20.0, "wind": 30.5}, clean_percentage=61.0),
            DailyMix(date=date(2025, 12, 6), mix={"wind": 80.0, "gas": 20.0}, clean_percentage=80.0),
        ]))

        response = client.get("/api/energy-mix")

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 2
        assert body[0]["date"] == "2025-12-05"
        assert body[0]["cleanPercentage"] == 61.0
        assert body[0]["mix"] == {"biomass": 10.5, "nuclear": 20.0, "wind": 30.5}
        assert body[1]["date"] == "2025-12-06"
        assert body[1]["cleanPercentage"] == 80.0

    def test_empty_day(self, client):
        """Test an empty day is serialized with an empty mix."""
        override_mix(StubEnergyMixService([
            DailyMix(date=date(2025, 12, 7), mix={}, clean_percentage=0.0),
        ]))

        response = client.get("/api/energy-mix")

        assert response.status_code == 200
        assert response.json() == [{"date": "2025-12-07", "mix": {}, "cleanPercentage": 0.0}]

    def test_upstream_failure(self, client):
        """Test upstream failures map to 503."""
        override_mix(StubEnergyMixService(error=FetchError("Generation API error 500: boom", status_code=500)))

        response = client.get("/api/energy-mix")

        assert response.status_code == 503
        body = response.json()
        assert body["status"] == 503
        assert body["error"] == "External API Unavailable"
        assert "Generation API error 500" in body["message"]
        assert "timestamp" in body

    def test_inconsistent_data(self, client):
        """Test inconsistent upstream data maps to 502."""
        override_mix(StubEnergyMixService(
            error=DataInconsistencyError("Clean energy percentage 110.00% exceeds 100%", value=110.0),
        ))

        response = client.get("/api/energy-mix")

        assert response.status_code == 502
        assert response.json()["error"] == "Inconsistent Upstream Data"


class TestChargingWindowRoute:
    """Tests for GET /api/charging-window."""

    def test_returns_window(self, client):
        """Test the optimal window is serialized."""
        override_window(StubChargingWindowService())

        response = client.get("/api/charging-window", params={"hours": 3})

        assert response.status_code == 200
        body = response.json()
        assert body["start"] == "2025-12-06T12:00:00Z"
        assert body["end"] == "2025-12-06T15:00:00Z"
        assert body["cleanEnergyShare"] == 78.0

    def test_default_hours(self, client):
        """Test hours defaults to 3."""
        service = StubChargingWindowService()
        override_window(service)

        response = client.get("/api/charging-window")

        assert response.status_code == 200
        assert service.requested == [3]

    @pytest.mark.parametrize("hours", [1, 2, 3, 4, 5, 6])
    def test_all_valid_hours(self, client, hours):
        """Test every duration from 1 to 6 succeeds."""
        override_window(StubChargingWindowService())

        response = client.get("/api/charging-window", params={"hours": hours})

        assert response.status_code == 200
        assert response.json()["cleanEnergyShare"] == 75.0 + hours

    @pytest.mark.parametrize("hours, message", [
        (0, "Hours must be at least 1"),
        (-1, "Hours must be at least 1"),
        (7, "Hours must be at most 6"),
        (100, "Hours must be at most 6"),
    ])
    def test_invalid_hours(self, client, hours, message):
        """Test out of range durations map to 400."""
        override_window(StubChargingWindowService())

        response = client.get("/api/charging-window", params={"hours": hours})

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == 400
        assert body["error"] == "Validation Failed"
        assert message in body["message"]

    def test_non_numeric_hours(self, client):
        """Test a non-numeric duration maps to 400."""
        override_window(StubChargingWindowService())

        response = client.get("/api/charging-window", params={"hours": "abc"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid Parameter"
        assert "hours" in response.json()["message"]

    def test_upstream_failure(self, client):
        """Test upstream failures map to 503."""
        override_window(StubChargingWindowService(error=FetchError("Failed to fetch generation data: refused")))

        response = client.get("/api/charging-window", params={"hours": 2})

        assert response.status_code == 503
        assert "Failed to fetch generation data" in response.json()["message"]

    def test_insufficient_samples(self, client):
        """Test a short forecast maps to 502."""
        override_window(StubChargingWindowService(error=DataInconsistencyError("Need 6 samples")))

        response = client.get("/api/charging-window", params={"hours": 3})

        assert response.status_code == 502


class TestRootRoutes:
    """Tests for root and health endpoints."""

    def test_root(self, client):
        """Test root returns API metadata."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["docs"] == "/docs"

    def test_health(self, client):
        """Test health check."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestLifespan:
    """Tests for application startup and shutdown."""

    def test_upstream_pool_shared_and_closed(self):
        """Test requests share one upstream pool that shutdown closes."""
        with TestClient(app):
            generation_client = get_generation_client()
            assert get_generation_client() is generation_client
            http_client = generation_client._client
            assert not http_client.is_closed

        assert http_client.is_closed
        assert get_generation_client() is not generation_client
        get_generation_client().close()
        get_generation_client.cache_clear()
