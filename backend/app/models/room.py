"""
Raum-Model - Räume mit Lampenkapazität
"""
import uuid
from datetime import datetime, date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Integer, Numeric, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.types import Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.enums import RoomStatus, BatchStatus

if TYPE_CHECKING:
    from app.models.batch import Batch
    from app.models.strain import Strain
    from app.models.cost import CostEntry


class Room(Base):
    """
    Raum - Anbaufläche mit einer festen Anzahl Lampen.
    Die Lampenzahl begrenzt die Zuteilung von Sorten innerhalb einer Charge.
    """
    __tablename__ = "rooms"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    area: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2))

    # Kapazität (None = unbekannt)
    lights: Mapped[Optional[int]] = mapped_column(Integer)

    status: Mapped[RoomStatus] = mapped_column(
        SQLEnum(RoomStatus), default=RoomStatus.ACTIVE
    )

    # Standard-Sorte des Raums
    strain_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("strains.id", ondelete="SET NULL")
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Beziehungen
    strain: Mapped[Optional["Strain"]] = relationship("Strain")
    batches: Mapped[list["Batch"]] = relationship("Batch", back_populates="room")
    cost_entries: Mapped[list["CostEntry"]] = relationship("CostEntry", back_populates="room")

    @property
    def current_batch(self) -> Optional["Batch"]:
        """Aktive Charge im Raum (falls vorhanden)"""
        return next(
            (b for b in self.batches if b.status == BatchStatus.ACTIVE), None
        )

    @property
    def has_current_batch(self) -> bool:
        return self.current_batch is not None

    @property
    def current_batch_code(self) -> Optional[str]:
        batch = self.current_batch
        return batch.batch_code if batch else None

    @property
    def batch_start_date(self) -> Optional[date]:
        batch = self.current_batch
        return batch.start_date if batch else None

    @property
    def batch_end_date(self) -> Optional[date]:
        batch = self.current_batch
        return batch.expected_harvest if batch else None

    @property
    def strain_name(self) -> Optional[str]:
        return self.strain.name if self.strain else None

    def __repr__(self) -> str:
        return f"<Room(name='{self.name}', lights={self.lights})>"
