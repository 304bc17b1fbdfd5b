"""
Chargen-Models: Batch und BatchStrain
"""
import uuid
from datetime import datetime, date, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Integer, Numeric, DateTime, Date, ForeignKey, Enum as SQLEnum, CheckConstraint
from sqlalchemy.types import Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.config import get_settings
from app.database import Base
from app.models.enums import BatchStatus

if TYPE_CHECKING:
    from app.models.room import Room
    from app.models.strain import Strain
    from app.models.harvest import HarvestSummary
    from app.models.cost import CostEntry


class Batch(Base):
    """
    Charge - ein Anbaudurchlauf in einem Raum.
    Kann auf mehrere Sorten mit eigener Lampenzuteilung aufgeteilt sein.
    """
    __tablename__ = "batches"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    room_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("rooms.id", ondelete="SET NULL"), index=True
    )
    # Primäre Sorte = erste zugeteilte Sorte
    strain_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("strains.id", ondelete="SET NULL")
    )

    batch_code: Mapped[Optional[str]] = mapped_column(String(50), index=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    expected_harvest: Mapped[Optional[date]] = mapped_column(Date)

    status: Mapped[BatchStatus] = mapped_column(
        SQLEnum(BatchStatus), default=BatchStatus.PLANNED, index=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Beziehungen
    room: Mapped[Optional["Room"]] = relationship("Room", back_populates="batches")
    strain: Mapped[Optional["Strain"]] = relationship("Strain")
    strain_assignments: Mapped[list["BatchStrain"]] = relationship(
        "BatchStrain", back_populates="batch", cascade="all, delete-orphan",
        order_by="BatchStrain.created_at"
    )
    # Ernten bleiben beim Löschen erhalten (batch_id wird NULL)
    harvest_summaries: Mapped[list["HarvestSummary"]] = relationship(
        "HarvestSummary", back_populates="batch"
    )
    cost_entries: Mapped[list["CostEntry"]] = relationship(
        "CostEntry", back_populates="batch"
    )

    @property
    def flip_date(self) -> date:
        """Umstellung auf Blütebeleuchtung"""
        return self.start_date + timedelta(days=get_settings().flip_days)

    @property
    def lights_assigned(self) -> int:
        """Summe der zugeteilten Lampen, ohne Zuteilung die Lampen des Raums"""
        if self.strain_assignments:
            return sum(a.lights_assigned or 0 for a in self.strain_assignments)
        return (self.room.lights or 0) if self.room else 0

    @property
    def strain_percentage(self) -> Decimal:
        """Summe der Raumanteile (nicht normalisiert)"""
        if self.strain_assignments:
            return sum((a.percentage or Decimal("0") for a in self.strain_assignments), Decimal("0"))
        return Decimal("100")

    @property
    def strain_names(self) -> str:
        if self.strain_assignments:
            return ", ".join(a.strain.name for a in self.strain_assignments if a.strain)
        return self.strain.name if self.strain else ""

    @property
    def room_name(self) -> Optional[str]:
        return self.room.name if self.room else None

    @property
    def days_remaining(self) -> Optional[int]:
        """Tage bis zur erwarteten Ernte"""
        if not self.expected_harvest:
            return None
        return (self.expected_harvest - date.today()).days

    def __repr__(self) -> str:
        return f"<Batch(code={self.batch_code}, status={self.status.value})>"


class BatchStrain(Base):
    """
    Sortenzuteilung innerhalb einer Charge.
    Lampen und Raumanteil werden beim Anlegen gegen die Raumkapazität geprüft.
    """
    __tablename__ = "batch_strains"
    __table_args__ = (
        CheckConstraint("lights_assigned >= 0", name="batch_strains_lights_check"),
        CheckConstraint("percentage >= 0 AND percentage <= 100", name="batch_strains_percentage_check"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    batch_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("batches.id", ondelete="CASCADE"), nullable=False, index=True
    )
    strain_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("strains.id", ondelete="CASCADE"), nullable=False, index=True
    )

    lights_assigned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False, default=Decimal("0"))

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    batch: Mapped["Batch"] = relationship("Batch", back_populates="strain_assignments")
    strain: Mapped["Strain"] = relationship("Strain")

    @property
    def strain_name(self) -> Optional[str]:
        return self.strain.name if self.strain else None

    def __repr__(self) -> str:
        return f"<BatchStrain(strain_id={self.strain_id}, lights={self.lights_assigned})>"
