"""
Kosten-Model
"""
import uuid
import datetime as dt
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, Numeric, DateTime, Date, ForeignKey, Text
from sqlalchemy.types import Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

if TYPE_CHECKING:
    from app.models.room import Room
    from app.models.batch import Batch


class CostEntry(Base):
    """
    Kostenbuchung - datiert, mit Kategorie und optionalem Raum-/Chargenbezug.
    Fließt in die Cost-to-Grow-Berechnung ein.
    """
    __tablename__ = "cost_entries"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    room_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("rooms.id", ondelete="SET NULL"), index=True
    )
    batch_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("batches.id", ondelete="SET NULL"), index=True
    )

    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=dt.datetime.utcnow)

    room: Mapped[Optional["Room"]] = relationship("Room", back_populates="cost_entries")
    batch: Mapped[Optional["Batch"]] = relationship("Batch", back_populates="cost_entries")

    @property
    def room_name(self) -> Optional[str]:
        return self.room.name if self.room else None

    @property
    def batch_code(self) -> Optional[str]:
        return self.batch.batch_code if self.batch else None

    def __repr__(self) -> str:
        return f"<CostEntry(category='{self.category}', amount={self.amount})>"
