"""
Kosten-Service - Cost-to-Grow einer Charge
"""
import logging
import math
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import select, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.models.cost import CostEntry
from app.models.room import Room

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def days_active(start_date: date, now: datetime) -> int:
    """Angefangene Tage seit Start (aufgerundet, nie negativ)"""
    elapsed = (now - datetime.combine(start_date, time.min)).total_seconds()
    return max(0, math.ceil(elapsed / SECONDS_PER_DAY))


class CostService:
    """Service für Anbaukosten"""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    def recorded_costs(
        self,
        batch_id: UUID,
        room_id: Optional[UUID],
        start_date: date,
        end_date: date,
    ) -> Decimal:
        """
        Summe der Kostenbuchungen für Charge ODER Raum im Zeitraum.
        """
        conditions = [CostEntry.batch_id == batch_id]
        if room_id:
            conditions.append(CostEntry.room_id == room_id)

        amounts = self.db.execute(
            select(CostEntry.amount)
            .where(
                or_(*conditions),
                CostEntry.date >= start_date,
                CostEntry.date <= end_date,
            )
        ).scalars().all()

        return sum((Decimal(str(a)) for a in amounts), Decimal("0"))

    def electricity_cost(self, lights: int, days: int) -> Decimal:
        """Geschätzte Stromkosten: Lampen * Satz pro Lampe und Tag * Tage"""
        return Decimal(lights) * self.settings.electricity_cost_per_light_per_day * Decimal(days)

    def cost_breakdown(
        self,
        batch_id: UUID,
        room_id: Optional[UUID],
        start_date: date,
        now: Optional[datetime] = None,
    ) -> dict:
        """
        Aufschlüsselung der Anbaukosten bis heute.

        Können die Kostenbuchungen nicht gelesen werden, ist das Ergebnis 0,
        damit die Ernteerfassung nicht blockiert.
        """
        now = now or datetime.now()
        days = days_active(start_date, now)

        try:
            room = self.db.get(Room, room_id) if room_id else None
            lights = (room.lights or 0) if room else 0
            recorded = self.recorded_costs(batch_id, room_id, start_date, now.date())
        except SQLAlchemyError as e:
            logger.error(f"Kosten für Charge {batch_id} nicht lesbar: {e}")
            self.db.rollback()
            return {
                "batch_id": batch_id,
                "days_active": days,
                "recorded_costs": Decimal("0"),
                "electricity_cost": Decimal("0"),
                "cost_to_grow": Decimal("0"),
            }

        electricity = self.electricity_cost(lights, days)
        return {
            "batch_id": batch_id,
            "days_active": days,
            "recorded_costs": recorded,
            "electricity_cost": electricity,
            "cost_to_grow": recorded + electricity,
        }

    def calculate_cost_to_grow(
        self,
        batch_id: UUID,
        room_id: Optional[UUID],
        start_date: date,
        now: Optional[datetime] = None,
    ) -> Decimal:
        """Kostenbuchungen + geschätzte Stromkosten seit Start"""
        return self.cost_breakdown(batch_id, room_id, start_date, now)["cost_to_grow"]
