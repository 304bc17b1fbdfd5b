"""
Pytest Konfiguration und gemeinsame Fixtures
"""
import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.models import Room, Strain, Batch, BatchStrain, BatchStatus, RoomStatus


# Test-Datenbank (SQLite in-memory)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Test-DB Session"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


# Dependency Override
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(scope="function")
def db():
    """Datenbankverbindung für Tests"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client():
    """Test Client mit frischer Datenbank"""
    Base.metadata.create_all(bind=engine)
    yield TestClient(app)
    Base.metadata.drop_all(bind=engine)


# ============== API Fixtures ==============

@pytest.fixture
def sample_room(client):
    """Erstellt einen Test-Raum mit 10 Lampen"""
    response = client.post("/api/v1/rooms", json={
        "name": "Flower Room 7",
        "area": 400,
        "lights": 10,
    })
    return response.json()


@pytest.fixture
def sample_strains(client):
    """Erstellt zwei Test-Sorten"""
    strains = []
    for config in [
        {"name": "Blue Dream", "strain_class": "Sativa", "abbreviation": "BD"},
        {"name": "OG Kush", "strain_class": "Indica", "abbreviation": "OGK"},
    ]:
        response = client.post("/api/v1/strains", json=config)
        strains.append(response.json())
    return strains


@pytest.fixture
def sample_batch(client, sample_room, sample_strains):
    """Erstellt eine geplante Charge mit zwei Sorten (6 + 4 Lampen)"""
    response = client.post("/api/v1/batches", json={
        "room_id": sample_room["id"],
        "start_date": date.today().isoformat(),
        "strains": [
            {"strain_id": sample_strains[0]["id"], "lights_assigned": 6, "percentage": 60},
            {"strain_id": sample_strains[1]["id"], "lights_assigned": 4, "percentage": 40},
        ],
    })
    return response.json()


# ============== Model Fixtures ==============

@pytest.fixture
def room_model(db):
    """Erstellt einen Test-Raum direkt in der DB"""
    room = Room(name="Flower Room 7", lights=10, status=RoomStatus.ACTIVE)
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


@pytest.fixture
def strain_models(db):
    """Erstellt zwei Test-Sorten direkt in der DB"""
    strains = [Strain(name="Blue Dream"), Strain(name="OG Kush")]
    db.add_all(strains)
    db.commit()
    for strain in strains:
        db.refresh(strain)
    return strains


@pytest.fixture
def batch_model(db, room_model, strain_models):
    """Aktive Charge mit zwei Sorten (6 + 4 Lampen) direkt in der DB"""
    batch = Batch(
        room_id=room_model.id,
        strain_id=strain_models[0].id,
        batch_code="R7-2025-01",
        start_date=date(2025, 1, 1),
        status=BatchStatus.ACTIVE,
    )
    batch.strain_assignments = [
        BatchStrain(strain_id=strain_models[0].id, lights_assigned=6, percentage=Decimal("60")),
        BatchStrain(strain_id=strain_models[1].id, lights_assigned=4, percentage=Decimal("40")),
    ]
    db.add(batch)
    db.commit()
    db.refresh(batch)
    return batch
