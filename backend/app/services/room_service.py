"""
Raum-Service - Räume und Belegung
"""
import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import NotFoundError, RoomInUseError
from app.models.batch import Batch
from app.models.enums import RoomStatus, BatchStatus
from app.models.room import Room
from app.schemas.room import RoomCreate, RoomUpdate

logger = logging.getLogger(__name__)

# Chargen in diesen Status blockieren das Löschen eines Raums
BLOCKING_STATUSES = (BatchStatus.PLANNED, BatchStatus.ACTIVE)


class RoomService:
    """Service für Raum-Operationen"""

    def __init__(self, db: Session):
        self.db = db

    def list_rooms(
        self,
        status: Optional[RoomStatus] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> tuple[list[Room], int]:
        query = select(Room)
        if status:
            query = query.where(Room.status == status)

        total = self.db.execute(
            select(func.count()).select_from(query.subquery())
        ).scalar() or 0

        query = query.options(selectinload(Room.batches), selectinload(Room.strain))
        query = query.order_by(Room.name).offset(offset)
        if limit:
            query = query.limit(limit)
        return list(self.db.execute(query).scalars().all()), total

    def get_room(self, room_id: UUID) -> Room:
        room = self.db.get(Room, room_id)
        if not room:
            raise NotFoundError("Raum nicht gefunden")
        return room

    def create_room(self, data: RoomCreate) -> Room:
        room = Room(**data.model_dump())
        self.db.add(room)
        self.db.commit()
        self.db.refresh(room)
        logger.info(f"Raum '{room.name}' angelegt ({room.lights} Lampen)")
        return room

    def update_room(self, room_id: UUID, data: RoomUpdate) -> Room:
        room = self.get_room(room_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(room, field, value)
        self.db.commit()
        self.db.refresh(room)
        return room

    def blocking_batches(self, room_id: UUID) -> list[Batch]:
        return list(self.db.execute(
            select(Batch).where(
                Batch.room_id == room_id, Batch.status.in_(BLOCKING_STATUSES)
            )
        ).scalars().all())

    def delete_room(self, room_id: UUID) -> None:
        """
        Löscht einen Raum.

        Nicht möglich, solange geplante oder aktive Chargen dem Raum zugeordnet
        sind. Geerntete/archivierte Chargen und Kostenbuchungen verlieren den
        Raumbezug.
        """
        room = self.get_room(room_id)
        blocking = self.blocking_batches(room_id)
        if blocking:
            codes = ", ".join(b.batch_code or str(b.id) for b in blocking)
            raise RoomInUseError(
                f"Raum '{room.name}' hat noch laufende oder geplante Chargen: {codes}"
            )

        self.db.delete(room)
        self.db.commit()
        logger.info(f"Raum '{room.name}' gelöscht")
