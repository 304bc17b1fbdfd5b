"""
Sorten-Model (Stammdaten)
"""
import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import String, DateTime
from sqlalchemy.types import Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Strain(Base):
    """Sorte - Referenzdaten für Chargen und Ernten"""
    __tablename__ = "strains"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    strain_code: Mapped[Optional[str]] = mapped_column(String(50))
    strain_class: Mapped[Optional[str]] = mapped_column(String(50))
    abbreviation: Mapped[Optional[str]] = mapped_column(String(20))

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Strain(name='{self.name}')>"
