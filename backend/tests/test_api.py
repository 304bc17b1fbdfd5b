"""
API Tests für System-Endpoints und Fehlerbehandlung
"""
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.main import app


class TestHealth:
    """Health Check Tests"""

    def test_health_endpoint(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Grow Ledger" in response.json()["message"]


class TestErrorHandling:

    def test_database_error_returns_generic_500(self, client):
        error = OperationalError("SELECT", {}, Exception("no such table"))
        with patch("app.api.v1.dashboard.DashboardService.room_utilization", side_effect=error):
            response = TestClient(app, raise_server_exceptions=False).get(
                "/api/v1/dashboard/room-utilization"
            )
        assert response.status_code == 500
        assert response.json()["detail"] == "Datenbankfehler. Bitte erneut versuchen."

    def test_persistence_error_on_batch_create(self, client, sample_room, sample_strains):
        error = OperationalError("COMMIT", {}, Exception("database is locked"))
        with patch("app.services.batch_service.Session.commit", side_effect=error):
            response = client.post("/api/v1/batches", json={
                "room_id": sample_room["id"],
                "start_date": "2025-01-01",
                "strains": [
                    {"strain_id": sample_strains[0]["id"], "lights_assigned": 2, "percentage": 20}
                ],
            })
        assert response.status_code == 500
        assert "Bitte erneut versuchen" in response.json()["detail"]
