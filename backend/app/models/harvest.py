"""
Ernte-Models: HarvestSummary und HarvestDetail
"""
import uuid
from datetime import datetime, date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Integer, Numeric, DateTime, Date, ForeignKey
from sqlalchemy.types import Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.batch import Batch


class HarvestSummary(Base):
    """
    Ernte-Zusammenfassung einer Charge.
    Pro Charge existiert höchstens eine; erneutes Speichern ersetzt sie.
    """
    __tablename__ = "harvest_summaries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    batch_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("batches.id", ondelete="SET NULL"), index=True
    )

    total_harvest_lbs: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    yield_per_light: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)
    total_lights: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    harvest_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    batch: Mapped[Optional["Batch"]] = relationship("Batch", back_populates="harvest_summaries")
    details: Mapped[list["HarvestDetail"]] = relationship(
        "HarvestDetail", back_populates="summary", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<HarvestSummary(batch_id={self.batch_id}, lbs={self.total_harvest_lbs})>"


class HarvestDetail(Base):
    """
    Ernte pro Sorte, aufgeteilt nach Größenklassen (Bigs/Smalls/Micros).
    Preise sind optional; ältere Datensätze haben keine.
    """
    __tablename__ = "harvest_details"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    harvest_summary_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("harvest_summaries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    strain_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid)
    strain_name: Mapped[Optional[str]] = mapped_column(String(100))

    # Gewichte in lbs
    bigs_lbs: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    smalls_lbs: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    micros_lbs: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))

    # Verkaufspreise in $/lb
    bigs_price_per_lb: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    smalls_price_per_lb: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))
    micros_price_per_lb: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))

    summary: Mapped["HarvestSummary"] = relationship("HarvestSummary", back_populates="details")

    @property
    def total_lbs(self) -> Decimal:
        return (self.bigs_lbs or 0) + (self.smalls_lbs or 0) + (self.micros_lbs or 0)

    @property
    def has_prices(self) -> bool:
        return None not in (self.bigs_price_per_lb, self.smalls_price_per_lb, self.micros_price_per_lb)

    def __repr__(self) -> str:
        return f"<HarvestDetail(strain='{self.strain_name}', lbs={self.total_lbs})>"
