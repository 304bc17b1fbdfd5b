"""
API Tests für Chargen, Statuswechsel und Ernte
"""
import uuid
from datetime import date

from sqlalchemy import select

from app.models import HarvestSummary, BatchStrain


HARVEST = {
    "entries": [
        {
            "bigs_lbs": 10, "smalls_lbs": 5, "micros_lbs": 2,
            "bigs_price_per_lb": 20, "smalls_price_per_lb": 10, "micros_price_per_lb": 5,
        }
    ],
    "harvest_date": "2025-03-01",
}


def harvest_payload(strain_id):
    payload = {**HARVEST, "entries": [dict(HARVEST["entries"][0], strain_id=strain_id)]}
    return payload


class TestCreateBatch:
    """Anlegen von Chargen mit Sortenzuteilung"""

    def test_create_batch_with_strains(self, client, sample_batch, sample_strains):
        assert sample_batch["status"] == "planned"
        assert sample_batch["batch_code"] == f"R7-{date.today().year}-01"
        assert sample_batch["lights_assigned"] == 10
        assert float(sample_batch["strain_percentage"]) == 100.0
        assert sample_batch["strain_names"] == "Blue Dream, OG Kush"
        assert sample_batch["strain_id"] == sample_strains[0]["id"]
        assert sample_batch["room_name"] == "Flower Room 7"
        assert len(sample_batch["strain_assignments"]) == 2

    def test_second_batch_gets_next_code(self, client, sample_room, sample_strains, sample_batch):
        response = client.post("/api/v1/batches", json={
            "room_id": sample_room["id"],
            "start_date": date.today().isoformat(),
            "strains": [{"strain_id": sample_strains[0]["id"], "lights_assigned": 2, "percentage": 20}],
        })
        assert response.status_code == 201
        assert response.json()["batch_code"] == f"R7-{date.today().year}-02"

    def test_explicit_code_kept(self, client, sample_room, sample_strains):
        response = client.post("/api/v1/batches", json={
            "room_id": sample_room["id"],
            "batch_code": "CUSTOM-1",
            "start_date": "2025-01-01",
            "status": "active",
            "strains": [{"strain_id": sample_strains[0]["id"], "lights_assigned": 2, "percentage": 20}],
        })
        assert response.status_code == 201
        assert response.json()["batch_code"] == "CUSTOM-1"
        assert response.json()["status"] == "active"
        # Flip nach 14 Tagen
        assert response.json()["flip_date"] == "2025-01-15"

    def test_lights_over_capacity_rejected(self, client, sample_room, sample_strains):
        response = client.post("/api/v1/batches", json={
            "room_id": sample_room["id"],
            "start_date": "2025-01-01",
            "strains": [
                {"strain_id": sample_strains[0]["id"], "lights_assigned": 8, "percentage": 50},
                {"strain_id": sample_strains[1]["id"], "lights_assigned": 5, "percentage": 50},
            ],
        })
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "lights_exceed_capacity"

    def test_without_strains_rejected(self, client, sample_room):
        response = client.post("/api/v1/batches", json={
            "room_id": sample_room["id"],
            "start_date": "2025-01-01",
            "strains": [],
        })
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "empty"

    def test_initial_status_harvested_rejected(self, client, sample_room, sample_strains):
        response = client.post("/api/v1/batches", json={
            "room_id": sample_room["id"],
            "start_date": "2025-01-01",
            "status": "harvested",
            "strains": [{"strain_id": sample_strains[0]["id"], "lights_assigned": 2, "percentage": 20}],
        })
        assert response.status_code == 400

    def test_unknown_strain(self, client, sample_room):
        response = client.post("/api/v1/batches", json={
            "room_id": sample_room["id"],
            "start_date": "2025-01-01",
            "strains": [{"strain_id": str(uuid.uuid4()), "lights_assigned": 2, "percentage": 20}],
        })
        assert response.status_code == 404


class TestAllocationEndpoints:

    def test_validate_allocation_ok(self, client, sample_room, sample_strains):
        response = client.post("/api/v1/batches/validate-allocation", json={
            "room_id": sample_room["id"],
            "strains": [{"strain_id": sample_strains[0]["id"], "lights_assigned": 7, "percentage": 70}],
        })
        data = response.json()
        assert response.status_code == 200
        assert data["valid"] is True
        assert data["room_capacity"] == 10
        assert data["remaining_lights"] == 3

    def test_validate_allocation_duplicate(self, client, sample_strains):
        strain_id = sample_strains[0]["id"]
        response = client.post("/api/v1/batches/validate-allocation", json={
            "room_capacity": 10,
            "strains": [
                {"strain_id": strain_id, "lights_assigned": 2, "percentage": 20},
                {"strain_id": strain_id, "lights_assigned": 2, "percentage": 20},
            ],
        })
        data = response.json()
        assert data["valid"] is False
        assert data["error_code"] == "duplicate_strain"

    def test_add_strain_checks_combined_allocation(self, client, sample_batch, sample_strains):
        response = client.post(f"/api/v1/batches/{sample_batch['id']}/strains", json={
            "strain_id": str(uuid.uuid4()), "lights_assigned": 1, "percentage": 0,
        })
        # 10 + 1 Lampen > 10
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "lights_exceed_capacity"

    def test_next_code(self, client, sample_room, sample_batch):
        response = client.get("/api/v1/batches/next-code", params={"room_id": sample_room["id"]})
        assert response.status_code == 200
        assert response.json()["batch_code"] == f"R7-{date.today().year}-02"


class TestStatusTransitions:
    """Statuswechsel inkl. Ernte-Gate"""

    def test_planned_to_active(self, client, sample_batch):
        response = client.post(f"/api/v1/batches/{sample_batch['id']}/status/active")
        assert response.status_code == 200
        data = response.json()
        assert data["harvest_required"] is False
        assert data["batch"]["status"] == "active"

    def test_any_transition_allowed(self, client, sample_batch):
        response = client.post(f"/api/v1/batches/{sample_batch['id']}/status/archived")
        assert response.json()["batch"]["status"] == "archived"

        response = client.post(f"/api/v1/batches/{sample_batch['id']}/status/planned")
        assert response.json()["batch"]["status"] == "planned"

    def test_harvested_requires_harvest(self, client, sample_batch):
        batch_id = sample_batch["id"]
        client.post(f"/api/v1/batches/{batch_id}/status/active")

        response = client.post(f"/api/v1/batches/{batch_id}/status/harvested")
        data = response.json()
        assert data["harvest_required"] is True
        assert len(data["harvest_draft"]) == 2
        assert data["batch"]["status"] == "active"

        # Status unverändert, bis die Ernte gespeichert ist
        assert client.get(f"/api/v1/batches/{batch_id}").json()["status"] == "active"

    def test_record_harvest_sets_harvested(self, client, sample_batch, sample_strains):
        batch_id = sample_batch["id"]
        response = client.put(
            f"/api/v1/batches/{batch_id}/harvest",
            json=harvest_payload(sample_strains[0]["id"]),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["batch_status"] == "harvested"
        assert float(data["economics"]["total_harvest_lbs"]) == 17.0
        assert float(data["economics"]["total_revenue"]) == 260.0
        assert client.get(f"/api/v1/batches/{batch_id}").json()["status"] == "harvested"

        loaded = client.get(f"/api/v1/batches/{batch_id}/harvest").json()
        assert loaded["prices_estimated"] is False
        assert float(loaded["economics"]["total_revenue"]) == 260.0
        assert loaded["economics"]["harvest_data"][0]["strain_name"] == "Blue Dream"

    def test_harvest_requires_entries(self, client, sample_batch):
        response = client.put(
            f"/api/v1/batches/{sample_batch['id']}/harvest", json={"entries": []}
        )
        assert response.status_code == 422

    def test_harvest_draft_endpoint(self, client, sample_batch):
        response = client.get(f"/api/v1/batches/{sample_batch['id']}/harvest/draft")
        names = {e["strain_name"] for e in response.json()}
        assert names == {"Blue Dream", "OG Kush"}

    def test_harvest_not_found(self, client, sample_batch):
        response = client.get(f"/api/v1/batches/{sample_batch['id']}/harvest")
        assert response.status_code == 404


class TestBatchQueries:

    def test_list_ordered_and_filtered(self, client, sample_batch):
        client.post(f"/api/v1/batches/{sample_batch['id']}/status/active")

        response = client.get("/api/v1/batches")
        assert response.json()["total"] == 1

        response = client.get("/api/v1/batches", params={"status": "planned"})
        assert response.json()["total"] == 0

        response = client.get("/api/v1/batches", params={"status": "active"})
        assert response.json()["items"][0]["id"] == sample_batch["id"]

    def test_update_batch(self, client, sample_batch):
        response = client.patch(
            f"/api/v1/batches/{sample_batch['id']}",
            json={"expected_harvest": "2030-01-01"},
        )
        assert response.status_code == 200
        assert response.json()["expected_harvest"] == "2030-01-01"
        assert response.json()["days_remaining"] > 0

    def test_update_to_smaller_room_rejected(self, client, sample_batch):
        small = client.post("/api/v1/rooms", json={"name": "Veg Room 2", "lights": 4}).json()
        response = client.patch(
            f"/api/v1/batches/{sample_batch['id']}", json={"room_id": small["id"]}
        )
        assert response.status_code == 400

    def test_clearing_start_date_rejected(self, client, sample_batch):
        response = client.patch(
            f"/api/v1/batches/{sample_batch['id']}", json={"start_date": None}
        )
        assert response.status_code == 400
        assert "Startdatum" in response.json()["detail"]

        batch = client.get(f"/api/v1/batches/{sample_batch['id']}").json()
        assert batch["start_date"] == sample_batch["start_date"]

    def test_cost_to_grow(self, client, sample_batch):
        response = client.get(f"/api/v1/batches/{sample_batch['id']}/cost-to-grow")
        assert response.status_code == 200
        data = response.json()
        # Start heute: angefangener Tag zählt, 10 Lampen * 2.70
        assert data["days_active"] in (0, 1)
        assert float(data["recorded_costs"]) == 0.0
        assert float(data["cost_to_grow"]) == data["days_active"] * 27.0

    def test_get_unknown_batch(self, client):
        response = client.get(f"/api/v1/batches/{uuid.uuid4()}")
        assert response.status_code == 404


class TestDeleteBatch:

    def test_delete_keeps_harvest(self, client, db, sample_batch, sample_strains):
        batch_id = sample_batch["id"]
        client.put(f"/api/v1/batches/{batch_id}/harvest", json=harvest_payload(sample_strains[0]["id"]))

        response = client.delete(f"/api/v1/batches/{batch_id}")
        assert response.status_code == 204
        assert client.get(f"/api/v1/batches/{batch_id}").status_code == 404

        # Zuteilung gelöscht, Ernte ohne Chargenbezug erhalten
        assert db.execute(select(BatchStrain)).scalars().all() == []
        summaries = db.execute(select(HarvestSummary)).scalars().all()
        assert len(summaries) == 1
        assert summaries[0].batch_id is None
