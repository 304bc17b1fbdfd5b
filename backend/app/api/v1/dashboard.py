"""
API Endpoints für Dashboard-Kennzahlen
"""
from fastapi import APIRouter, Query

from app.api.deps import DBSession
from app.schemas.cost import (
    DashboardSummary, CostBreakdownItem, MonthlyCost, RoomUtilization, CategoryTrend
)
from app.services.dashboard import DashboardService

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
def get_summary(db: DBSession):
    """Kosten im laufenden Monat, aktive Chargen, nächste Ernte, Räume."""
    return DashboardService(db).summary()


@router.get("/cost-breakdown", response_model=list[CostBreakdownItem])
def get_cost_breakdown(db: DBSession):
    """Kosten je Kategorie."""
    return DashboardService(db).cost_breakdown()


@router.get("/monthly-costs", response_model=list[MonthlyCost])
def get_monthly_costs(db: DBSession, months: int = Query(12, ge=1, le=60)):
    """Kostensumme je Monat."""
    return DashboardService(db).monthly_costs(months=months)


@router.get("/room-utilization", response_model=list[RoomUtilization])
def get_room_utilization(db: DBSession):
    """Status je Raum (active/inactive/archived)."""
    return DashboardService(db).room_utilization()


@router.get("/category-trends", response_model=list[CategoryTrend])
def get_category_trends(db: DBSession, months: int = Query(12, ge=1, le=60)):
    """
    Monatliche Kosten je Kostengruppe.

    Net Income ist ein geschätzter Anteil der Monatssumme.
    """
    return DashboardService(db).category_trends(months=months)
