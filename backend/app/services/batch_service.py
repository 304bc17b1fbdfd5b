"""
Chargen-Service - Anlage, Sortenzuteilung und Statuswechsel
"""
import logging
from datetime import date
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.config import Settings, get_settings
from app.core.exceptions import BatchValidationError, NotFoundError, PersistenceError
from app.models.batch import Batch, BatchStrain
from app.models.enums import BatchStatus
from app.models.room import Room
from app.models.strain import Strain
from app.schemas.batch import BatchCreate, BatchUpdate, BatchStrainCreate, BatchResponse
from app.schemas.harvest import HarvestEntry
from app.services.allocation import validate_allocation
from app.services.batch_codes import generate_batch_code
from app.services.harvest_service import HarvestService

logger = logging.getLogger(__name__)

INITIAL_STATUSES = (BatchStatus.PLANNED, BatchStatus.ACTIVE)


class BatchIndex:
    """
    In-Memory-Index bereits geladener Chargen (nach ID).

    Änderungen werden direkt in den Index übernommen, statt die ganze
    Liste neu zu laden.
    """

    def __init__(self, batches: Iterable[BatchResponse] = ()):
        self._items: dict[UUID, BatchResponse] = {b.id: b for b in batches}

    def merge(self, batch: BatchResponse) -> None:
        self._items[batch.id] = batch

    def remove(self, batch_id: UUID) -> None:
        self._items.pop(batch_id, None)

    def apply_status(self, batch_id: UUID, status: BatchStatus) -> None:
        item = self._items.get(batch_id)
        if item is not None:
            self._items[batch_id] = item.model_copy(update={"status": status})

    def get(self, batch_id: UUID) -> Optional[BatchResponse]:
        return self._items.get(batch_id)

    def values(self) -> list[BatchResponse]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, batch_id: UUID) -> bool:
        return batch_id in self._items


class BatchService:
    """Service für Chargen-Operationen"""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    # ---------- Lesen ----------

    def get_batch(self, batch_id: UUID) -> Batch:
        batch = self.db.get(Batch, batch_id)
        if not batch:
            raise NotFoundError("Charge nicht gefunden")
        return batch

    def list_batches(self, status: Optional[BatchStatus] = None) -> list[Batch]:
        """Alle Chargen, sortiert nach Status und Startdatum"""
        query = select(Batch).options(
            selectinload(Batch.room),
            selectinload(Batch.strain),
            selectinload(Batch.strain_assignments).selectinload(BatchStrain.strain),
        )
        if status:
            query = query.where(Batch.status == status)
        query = query.order_by(Batch.status, Batch.start_date)
        return list(self.db.execute(query).scalars().all())

    def load_index(self, status: Optional[BatchStatus] = None) -> BatchIndex:
        return BatchIndex(self.to_view(b) for b in self.list_batches(status))

    @staticmethod
    def to_view(batch: Batch) -> BatchResponse:
        return BatchResponse.model_validate(batch)

    # ---------- Zuteilung ----------

    def get_room(self, room_id: Optional[UUID]) -> Optional[Room]:
        if room_id is None:
            return None
        room = self.db.get(Room, room_id)
        if not room:
            raise NotFoundError("Raum nicht gefunden")
        return room

    def _check_strains_exist(self, assignments: Iterable[BatchStrainCreate]) -> None:
        for assignment in assignments:
            if not self.db.get(Strain, assignment.strain_id):
                raise NotFoundError(f"Sorte {assignment.strain_id} nicht gefunden")

    def validate_for_room(self, assignments: list, room: Optional[Room]) -> list:
        capacity = room.lights if room else None
        return validate_allocation(assignments, capacity, self.settings.percentage_tolerance)

    def next_code(self, room_id: UUID, today: Optional[date] = None) -> str:
        room = self.get_room(room_id)
        return generate_batch_code(self.db, room.name, room.id, today=today)

    # ---------- Schreiben ----------

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Fehler beim {action}: {e}")
            raise PersistenceError(f"Fehler beim {action}. Bitte erneut versuchen.") from e

    def create_batch(self, data: BatchCreate, today: Optional[date] = None) -> Batch:
        """
        Legt eine Charge mit Sortenzuteilung an.

        Ohne Code wird einer aus dem Raumnamen erzeugt. Die erste Sorte wird
        primäre Sorte der Charge.
        """
        if data.status not in INITIAL_STATUSES:
            raise BatchValidationError("Neue Chargen können nur 'planned' oder 'active' sein")

        room = self.get_room(data.room_id)
        self.validate_for_room(data.strains, room)
        self._check_strains_exist(data.strains)

        batch_code = data.batch_code
        if not batch_code and room:
            batch_code = generate_batch_code(self.db, room.name, room.id, today=today)

        batch = Batch(
            room_id=data.room_id,
            strain_id=data.strains[0].strain_id,
            batch_code=batch_code,
            start_date=data.start_date,
            expected_harvest=data.expected_harvest,
            status=data.status,
        )
        batch.strain_assignments = [
            BatchStrain(
                strain_id=s.strain_id,
                lights_assigned=s.lights_assigned,
                percentage=s.percentage,
            )
            for s in data.strains
        ]
        self.db.add(batch)
        self._commit("Anlegen der Charge")
        self.db.refresh(batch)

        logger.info(f"Charge {batch.batch_code} angelegt ({len(data.strains)} Sorten)")
        return batch

    def add_strain(self, batch_id: UUID, data: BatchStrainCreate) -> BatchStrain:
        """Fügt einer bestehenden Charge eine Sorte hinzu (Prüfung gegen Gesamtzuteilung)"""
        batch = self.get_batch(batch_id)
        self.validate_for_room([*batch.strain_assignments, data], batch.room)
        self._check_strains_exist([data])

        assignment = BatchStrain(
            batch_id=batch.id,
            strain_id=data.strain_id,
            lights_assigned=data.lights_assigned,
            percentage=data.percentage,
        )
        self.db.add(assignment)
        if batch.strain_id is None:
            batch.strain_id = data.strain_id
        self._commit("Zuteilen der Sorte")
        self.db.refresh(assignment)
        return assignment

    def update_batch(self, batch_id: UUID, data: BatchUpdate) -> Batch:
        """Ändert Stammdaten einer Charge; bei Raumwechsel wird die Zuteilung neu geprüft"""
        batch = self.get_batch(batch_id)
        update_data = data.model_dump(exclude_unset=True)

        if "start_date" in update_data and update_data["start_date"] is None:
            raise BatchValidationError("Startdatum ist ein Pflichtfeld")

        if "room_id" in update_data and update_data["room_id"] != batch.room_id:
            room = self.get_room(update_data["room_id"])
            if batch.strain_assignments:
                self.validate_for_room(batch.strain_assignments, room)

        for field, value in update_data.items():
            setattr(batch, field, value)

        self._commit("Aktualisieren der Charge")
        self.db.refresh(batch)
        return batch

    def transition_status(
        self, batch_id: UUID, new_status: BatchStatus
    ) -> tuple[Batch, bool, list[HarvestEntry]]:
        """
        Statuswechsel einer Charge.

        'harvested' wird nicht direkt gesetzt: zurückgegeben wird eine leere
        Ernteerfassung, der Status ändert sich erst beim Speichern der Ernte.
        Alle anderen Wechsel werden ohne Prüfung des Vorgängerstatus gesetzt.
        """
        batch = self.get_batch(batch_id)

        if new_status == BatchStatus.HARVESTED:
            draft = HarvestService(self.db, self.settings).initial_entries(batch)
            return batch, True, draft

        previous = batch.status
        batch.status = new_status
        self._commit("Ändern des Chargenstatus")
        self.db.refresh(batch)

        logger.info(f"Charge {batch_id}: Status {previous.value} -> {new_status.value}")
        return batch, False, []

    def delete_batch(self, batch_id: UUID) -> None:
        """Löscht eine Charge inkl. Sortenzuteilung; Erntedaten bleiben erhalten"""
        batch = self.get_batch(batch_id)
        self.db.delete(batch)
        self._commit("Löschen der Charge")
        logger.info(f"Charge {batch_id} gelöscht")
