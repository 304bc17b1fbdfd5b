"""
Pydantic Schemas für Kostenerfassung und Dashboard
"""
import datetime as dt
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field, ConfigDict

from app.models.enums import CostCategory


class CostEntryBase(BaseModel):
    """Basis-Schema für Kostenbuchung"""
    date: dt.date = Field(..., description="Buchungsdatum")
    amount: Decimal = Field(..., ge=0, description="Betrag in $")
    room_id: Optional[UUID] = Field(None, description="Raumbezug")
    batch_id: Optional[UUID] = Field(None, description="Chargenbezug")
    notes: Optional[str] = Field(None, description="Notizen")


class CostEntryCreate(CostEntryBase):
    """Schema zum Erfassen einer Kostenbuchung"""
    category: CostCategory


class CostEntryResponse(CostEntryBase):
    """Schema für Kostenbuchung-Antwort"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    category: str
    created_at: dt.datetime
    room_name: Optional[str] = None
    batch_code: Optional[str] = None


class CostEntryListResponse(BaseModel):
    """Schema für Kostenbuchungs-Liste"""
    items: list[CostEntryResponse]
    total: int


# ============== Dashboard ==============

class DashboardSummary(BaseModel):
    total_cost_this_month: Decimal
    active_batches: int
    next_harvest_date: Optional[dt.date] = None
    total_rooms: int
    active_rooms: int


class CostBreakdownItem(BaseModel):
    category: str
    amount: float


class MonthlyCost(BaseModel):
    month: str
    amount: float


class RoomUtilization(BaseModel):
    name: str
    active: int
    inactive: int
    archived: int


class CategoryTrend(BaseModel):
    """Monatliche Kosten je Kostengruppe"""
    month: str
    cost_of_goods_sold: float
    expenses: float
    other_expenses: float
    net_income: float
