"""
Pydantic Schemas für Chargen und Sortenzuteilung
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict

from app.models.enums import BatchStatus
from app.schemas.harvest import HarvestEntry


class BatchStrainCreate(BaseModel):
    """Sortenzuteilung für eine Charge"""
    strain_id: UUID = Field(..., description="ID der Sorte")
    lights_assigned: int = Field(..., ge=0, description="Zugeteilte Lampen")
    percentage: Decimal = Field(..., ge=0, le=100, description="Anteil am Raum in Prozent")


class BatchStrainResponse(BatchStrainCreate):
    """Schema für Sortenzuteilung-Antwort"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    batch_id: UUID
    strain_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BatchBase(BaseModel):
    """Basis-Schema für Charge"""
    batch_code: Optional[str] = Field(None, max_length=50, description="Chargencode, z.B. R7-2025-01")
    start_date: date = Field(..., description="Startdatum")
    expected_harvest: Optional[date] = Field(None, description="Erwartetes Erntedatum")


class BatchCreate(BatchBase):
    """
    Schema zum Erstellen einer Charge.
    Ohne batch_code wird ein Code aus dem Raumnamen erzeugt.
    """
    room_id: Optional[UUID] = Field(None, description="ID des Raums")
    status: BatchStatus = Field(BatchStatus.PLANNED, description="planned oder active")
    strains: list[BatchStrainCreate] = Field(default_factory=list, description="Sortenzuteilung")


class BatchUpdate(BaseModel):
    """Schema zum Aktualisieren einer Charge (Status über /status)"""
    batch_code: Optional[str] = Field(None, max_length=50)
    start_date: Optional[date] = None
    expected_harvest: Optional[date] = None
    room_id: Optional[UUID] = None


class BatchResponse(BatchBase):
    """Schema für Chargen-Antwort"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    room_id: Optional[UUID] = None
    strain_id: Optional[UUID] = None
    status: BatchStatus
    created_at: datetime
    updated_at: datetime

    # Berechnete Felder
    flip_date: date
    lights_assigned: int
    strain_percentage: Decimal
    strain_names: str
    room_name: Optional[str] = None
    days_remaining: Optional[int] = None

    strain_assignments: list[BatchStrainResponse] = []


class BatchListResponse(BaseModel):
    """Schema für Chargen-Liste"""
    items: list[BatchResponse]
    total: int


class AllocationRequest(BaseModel):
    """Prüfung einer geplanten Sortenzuteilung"""
    room_id: Optional[UUID] = Field(None, description="Raum, dessen Lampenzahl gilt")
    room_capacity: Optional[int] = Field(None, ge=0, description="Kapazität, falls kein Raum angegeben")
    strains: list[BatchStrainCreate]


class AllocationResponse(BaseModel):
    """Ergebnis der Zuteilungsprüfung"""
    valid: bool
    error_code: Optional[str] = None
    message: Optional[str] = None
    total_lights: int
    total_percentage: Decimal
    room_capacity: Optional[int] = None
    remaining_lights: Optional[int] = None


class StatusTransitionResponse(BaseModel):
    """
    Ergebnis eines Statuswechsels.
    Bei 'harvested' bleibt der Status unverändert, bis die Ernte gespeichert ist.
    """
    batch: BatchResponse
    harvest_required: bool = False
    harvest_draft: list[HarvestEntry] = []


class BatchCodeResponse(BaseModel):
    batch_code: str
