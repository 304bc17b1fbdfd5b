"""
Pydantic Schemas für Räume und Sorten
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict

from app.models.enums import RoomStatus


# ============== Strain ==============

class StrainBase(BaseModel):
    """Basis-Schema für Sorte"""
    name: str = Field(..., min_length=1, max_length=100, description="Name der Sorte")
    strain_code: Optional[str] = Field(None, max_length=50, description="Interner Sortencode")
    strain_class: Optional[str] = Field(None, max_length=50, description="Indica/Sativa/Hybrid")
    abbreviation: Optional[str] = Field(None, max_length=20, description="Kürzel")


class StrainCreate(StrainBase):
    """Schema zum Erstellen einer Sorte"""
    pass


class StrainUpdate(BaseModel):
    """Schema zum Aktualisieren einer Sorte"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    strain_code: Optional[str] = None
    strain_class: Optional[str] = None
    abbreviation: Optional[str] = None


class StrainResponse(StrainBase):
    """Schema für Sorten-Antwort"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime


# ============== Room ==============

class RoomBase(BaseModel):
    """Basis-Schema für Raum"""
    name: str = Field(..., min_length=1, max_length=100, description="Raumname, z.B. 'Flower Room 7'")
    area: Optional[Decimal] = Field(None, ge=0, description="Fläche in sq ft")
    lights: Optional[int] = Field(None, ge=0, description="Anzahl Lampen (Kapazität)")
    strain_id: Optional[UUID] = Field(None, description="Standard-Sorte des Raums")


class RoomCreate(RoomBase):
    """Schema zum Erstellen eines Raums"""
    status: RoomStatus = RoomStatus.ACTIVE


class RoomUpdate(BaseModel):
    """Schema zum Aktualisieren eines Raums"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    area: Optional[Decimal] = Field(None, ge=0)
    lights: Optional[int] = Field(None, ge=0)
    strain_id: Optional[UUID] = None
    status: Optional[RoomStatus] = None


class RoomResponse(RoomBase):
    """Schema für Raum-Antwort"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: RoomStatus
    created_at: datetime
    updated_at: datetime

    # Berechnete Felder
    strain_name: Optional[str] = None
    current_batch_code: Optional[str] = None
    has_current_batch: bool = False
    batch_start_date: Optional[date] = None
    batch_end_date: Optional[date] = None


class RoomListResponse(BaseModel):
    """Schema für Raum-Liste"""
    items: list[RoomResponse]
    total: int
