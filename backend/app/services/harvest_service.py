"""
Ernte-Service - Ernteerfassung und Wirtschaftlichkeit einer Charge
"""
import logging
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import TYPE_CHECKING, Optional, Sequence
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.core.exceptions import BatchValidationError, NotFoundError, PersistenceError
from app.models.batch import Batch
from app.models.enums import BatchStatus
from app.models.harvest import HarvestSummary, HarvestDetail
from app.models.strain import Strain
from app.schemas.harvest import HarvestEntry, HarvestEconomics
from app.services.cost_service import CostService

if TYPE_CHECKING:
    from app.services.batch_service import BatchIndex

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
YIELD_PRECISION = Decimal("0.0001")


def _round(value: Decimal, precision: Decimal = CENT) -> Decimal:
    return value.quantize(precision, rounding=ROUND_HALF_UP)


def _price(value: Optional[Decimal], fallback: Optional[Decimal]) -> Decimal:
    if value is None:
        return fallback if fallback is not None else ZERO
    return value


def compute_harvest_economics(
    entries: Sequence[HarvestEntry],
    total_lights: Optional[int],
    cost_to_grow: Decimal,
    fallback_price: Optional[Decimal] = None,
) -> HarvestEconomics:
    """
    Berechnet die Kennzahlen einer Ernte.

    - Gesamtgewicht = Summe Bigs + Smalls + Micros aller Sorten
    - Umsatz = Summe Gewicht * Preis je Größenklasse
    - Ertrag/Umsatz pro Lampe: ohne zugeteilte Lampen wird durch 1 geteilt
    - Kosten/Gewinn pro lb und Gewinnquote sind 0, wenn der Nenner 0 ist

    fallback_price ersetzt fehlende Preise (gespeicherte Ernten ohne Preise).
    """
    total_harvest = sum(
        (e.bigs_lbs + e.smalls_lbs + e.micros_lbs for e in entries), ZERO
    )
    total_revenue = sum(
        (
            e.bigs_lbs * _price(e.bigs_price_per_lb, fallback_price)
            + e.smalls_lbs * _price(e.smalls_price_per_lb, fallback_price)
            + e.micros_lbs * _price(e.micros_price_per_lb, fallback_price)
            for e in entries
        ),
        ZERO,
    )

    divisor = Decimal(total_lights or 1)
    yield_per_light = total_harvest / divisor
    revenue_per_light = total_revenue / divisor

    profit_loss = total_revenue - cost_to_grow
    cost_per_lb = cost_to_grow / total_harvest if total_harvest > 0 else ZERO
    net_income_per_lb = profit_loss / total_harvest if total_harvest > 0 else ZERO
    net_income_sales_ratio = (
        profit_loss / total_revenue * 100 if total_revenue > 0 else ZERO
    )

    return HarvestEconomics(
        total_harvest_lbs=_round(total_harvest),
        total_revenue=_round(total_revenue),
        total_lights=total_lights or 0,
        yield_per_light=_round(yield_per_light, YIELD_PRECISION),
        revenue_per_light=_round(revenue_per_light),
        cost_to_grow=_round(cost_to_grow),
        profit_loss=_round(profit_loss),
        cost_per_lb=_round(cost_per_lb),
        net_income_per_lb=_round(net_income_per_lb),
        net_income_sales_ratio=_round(net_income_sales_ratio),
        harvest_data=list(entries),
    )


class HarvestService:
    """Service für Ernte-Operationen"""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()
        self.costs = CostService(db, self.settings)

    def _get_batch(self, batch_id: UUID) -> Batch:
        batch = self.db.get(Batch, batch_id)
        if not batch:
            raise NotFoundError("Charge nicht gefunden")
        return batch

    def initial_entries(self, batch: Batch) -> list[HarvestEntry]:
        """
        Leere Ernteerfassung: eine Zeile pro zugeteilter Sorte,
        bei Chargen ohne Zuteilung die primäre Sorte.
        """
        if batch.strain_assignments:
            return [
                HarvestEntry(
                    strain_id=a.strain_id,
                    strain_name=a.strain_name or "Unknown Strain",
                )
                for a in batch.strain_assignments
            ]
        if batch.strain:
            return [HarvestEntry(strain_id=batch.strain_id, strain_name=batch.strain.name)]
        return []

    def _check_entries(self, batch: Batch, entries: Sequence[HarvestEntry]) -> None:
        """Je Sorte höchstens ein Eintrag, nur Sorten der Charge"""
        allowed = {a.strain_id for a in batch.strain_assignments}
        if not allowed and batch.strain_id:
            allowed = {batch.strain_id}

        seen = set()
        for entry in entries:
            if entry.strain_id in seen:
                raise BatchValidationError("Jede Sorte darf nur einmal erfasst werden")
            seen.add(entry.strain_id)
            if allowed and entry.strain_id not in allowed:
                raise BatchValidationError("Sorte ist dieser Charge nicht zugeteilt")

    def _resolve_strain_names(self, entries: Sequence[HarvestEntry]) -> list[HarvestEntry]:
        resolved = []
        for entry in entries:
            if entry.strain_name is None and entry.strain_id is not None:
                strain = self.db.get(Strain, entry.strain_id)
                if strain:
                    entry = entry.model_copy(update={"strain_name": strain.name})
            resolved.append(entry)
        return resolved

    def calculate(
        self,
        batch: Batch,
        entries: Sequence[HarvestEntry],
        now: Optional[datetime] = None,
    ) -> HarvestEconomics:
        """Kennzahlen für eine (noch nicht gespeicherte) Ernte"""
        cost_to_grow = self.costs.calculate_cost_to_grow(
            batch.id, batch.room_id, batch.start_date, now=now
        )
        return compute_harvest_economics(entries, batch.lights_assigned, cost_to_grow)

    def _delete_existing(self, batch_id: UUID) -> int:
        """Entfernt bisherige Ernte der Charge (erst Details, dann Zusammenfassung)"""
        summary_ids = self.db.execute(
            select(HarvestSummary.id).where(HarvestSummary.batch_id == batch_id)
        ).scalars().all()

        if summary_ids:
            self.db.execute(
                delete(HarvestDetail).where(HarvestDetail.harvest_summary_id.in_(summary_ids))
            )
            self.db.execute(
                delete(HarvestSummary).where(HarvestSummary.id.in_(summary_ids))
            )
        return len(summary_ids)

    def _insert_summary(
        self,
        batch: Batch,
        economics: HarvestEconomics,
        total_lights: int,
        harvest_date: date,
    ) -> HarvestSummary:
        summary = HarvestSummary(
            batch_id=batch.id,
            total_harvest_lbs=economics.total_harvest_lbs,
            yield_per_light=economics.yield_per_light,
            total_lights=total_lights,
            harvest_date=harvest_date,
        )
        self.db.add(summary)
        # ID wird für die Details benötigt
        self.db.flush()
        return summary

    def _insert_details(
        self, summary: HarvestSummary, entries: Sequence[HarvestEntry]
    ) -> list[HarvestDetail]:
        details = [
            HarvestDetail(
                harvest_summary_id=summary.id,
                strain_id=e.strain_id,
                strain_name=e.strain_name,
                bigs_lbs=e.bigs_lbs,
                smalls_lbs=e.smalls_lbs,
                micros_lbs=e.micros_lbs,
                bigs_price_per_lb=e.bigs_price_per_lb,
                smalls_price_per_lb=e.smalls_price_per_lb,
                micros_price_per_lb=e.micros_price_per_lb,
            )
            for e in entries
        ]
        self.db.add_all(details)
        self.db.flush()
        return details

    def record_harvest(
        self,
        batch_id: UUID,
        entries: Sequence[HarvestEntry],
        harvest_date: Optional[date] = None,
        index: Optional["BatchIndex"] = None,
        now: Optional[datetime] = None,
    ) -> tuple[HarvestSummary, HarvestEconomics]:
        """
        Speichert die Ernte einer Charge und setzt den Status auf 'harvested'.

        Bestehende Erntedaten der Charge werden ersetzt. Löschen, Einfügen und
        Statuswechsel laufen in einer Transaktion; bei einem Fehler bleibt der
        bisherige Stand (inkl. Status) erhalten.
        """
        batch = self._get_batch(batch_id)
        self._check_entries(batch, entries)
        entries = self._resolve_strain_names(entries)

        economics = self.calculate(batch, entries, now=now)
        # Lampenzahl zum Zeitpunkt des Lesens der Charge
        total_lights = batch.lights_assigned
        harvest_date = harvest_date or date.today()

        try:
            replaced = self._delete_existing(batch.id)
            summary = self._insert_summary(batch, economics, total_lights, harvest_date)
            self._insert_details(summary, entries)
            batch.status = BatchStatus.HARVESTED
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Ernte für Charge {batch_id} konnte nicht gespeichert werden: {e}")
            raise PersistenceError("Ernte konnte nicht gespeichert werden. Bitte erneut versuchen.") from e

        if replaced:
            logger.info(f"Ernte für Charge {batch_id} ersetzt ({replaced} alte Einträge)")
        logger.info(
            f"Ernte gespeichert: Charge {batch_id}, {economics.total_harvest_lbs} lbs, "
            f"Umsatz {economics.total_revenue}"
        )

        if index is not None:
            index.apply_status(batch_id, BatchStatus.HARVESTED)

        self.db.refresh(summary)
        return summary, economics

    def get_summary(self, batch_id: UUID) -> HarvestSummary:
        summary = self.db.execute(
            select(HarvestSummary)
            .where(HarvestSummary.batch_id == batch_id)
            .order_by(HarvestSummary.created_at.desc())
        ).scalars().first()
        if not summary:
            raise NotFoundError("Keine Erntedaten für diese Charge")
        return summary

    def load_harvest(
        self, batch_id: UUID, now: Optional[datetime] = None
    ) -> tuple[HarvestSummary, HarvestEconomics, bool]:
        """
        Lädt eine gespeicherte Ernte und berechnet die Kennzahlen neu.

        Details ohne Preise werden mit dem Pauschalpreis bewertet;
        das dritte Ergebnis zeigt an, ob das der Fall war.
        """
        batch = self._get_batch(batch_id)
        summary = self.get_summary(batch_id)

        entries = [HarvestEntry.model_validate(d) for d in summary.details]
        prices_estimated = any(not d.has_prices for d in summary.details)

        cost_to_grow = self.costs.calculate_cost_to_grow(
            batch.id, batch.room_id, batch.start_date, now=now
        )
        economics = compute_harvest_economics(
            entries,
            summary.total_lights,
            cost_to_grow,
            fallback_price=self.settings.harvest_fallback_price_per_lb,
        )
        return summary, economics, prices_estimated
