"""
Pydantic Schemas für Ernte und Ernte-Wirtschaftlichkeit
"""
from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict

from app.models.enums import BatchStatus


class HarvestEntry(BaseModel):
    """Erntemengen und Preise einer Sorte"""
    model_config = ConfigDict(from_attributes=True)

    strain_id: Optional[UUID] = Field(None, description="ID der Sorte")
    strain_name: Optional[str] = Field(None, max_length=100)
    bigs_lbs: Decimal = Field(default=Decimal("0"), ge=0, description="Bigs in lbs")
    smalls_lbs: Decimal = Field(default=Decimal("0"), ge=0, description="Smalls in lbs")
    micros_lbs: Decimal = Field(default=Decimal("0"), ge=0, description="Micros in lbs")
    bigs_price_per_lb: Optional[Decimal] = Field(None, ge=0, description="Preis Bigs $/lb")
    smalls_price_per_lb: Optional[Decimal] = Field(None, ge=0, description="Preis Smalls $/lb")
    micros_price_per_lb: Optional[Decimal] = Field(None, ge=0, description="Preis Micros $/lb")


class HarvestRecordRequest(BaseModel):
    """Schema zum Speichern einer Ernte"""
    entries: list[HarvestEntry] = Field(..., min_length=1, description="Ernte pro Sorte")
    harvest_date: Optional[date] = Field(None, description="Erntedatum (Standard: heute)")


class HarvestEconomics(BaseModel):
    """Berechnete Kennzahlen einer Ernte"""
    total_harvest_lbs: Decimal
    total_revenue: Decimal
    total_lights: int
    yield_per_light: Decimal
    revenue_per_light: Decimal
    cost_to_grow: Decimal
    profit_loss: Decimal
    cost_per_lb: Decimal
    net_income_per_lb: Decimal
    net_income_sales_ratio: Decimal
    harvest_data: list[HarvestEntry] = []


class HarvestResponse(BaseModel):
    """Gespeicherte Ernte einer Charge"""
    summary_id: UUID
    batch_id: Optional[UUID] = None
    harvest_date: date
    batch_status: Optional[BatchStatus] = None
    # True wenn Umsatz (teilweise) über den Pauschalpreis geschätzt wurde
    prices_estimated: bool = False
    economics: HarvestEconomics


class CostToGrowResponse(BaseModel):
    """Aufschlüsselung der Anbaukosten einer Charge"""
    batch_id: UUID
    days_active: int
    recorded_costs: Decimal
    electricity_cost: Decimal
    cost_to_grow: Decimal
