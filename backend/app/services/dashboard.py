"""
Dashboard-Auswertungen über Kostenbuchungen, Chargen und Räume
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

import pandas as pd
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.models.batch import Batch
from app.models.cost import CostEntry
from app.models.enums import BatchStatus, RoomStatus, CostGroup, category_group
from app.models.room import Room
from app.schemas.cost import (
    DashboardSummary, CostBreakdownItem, MonthlyCost, RoomUtilization, CategoryTrend
)

logger = logging.getLogger(__name__)

GROUP_COLUMNS = {
    CostGroup.COST_OF_GOODS_SOLD: "cost_of_goods_sold",
    CostGroup.EXPENSES: "expenses",
    CostGroup.OTHER_EXPENSES: "other_expenses",
}


class DashboardService:
    """Kennzahlen für das Dashboard"""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        self.db = db
        self.settings = settings or get_settings()

    def _cost_frame(self, since: Optional[date] = None) -> pd.DataFrame:
        """Kostenbuchungen als DataFrame (date, category, amount)"""
        query = select(CostEntry.date, CostEntry.category, CostEntry.amount)
        if since:
            query = query.where(CostEntry.date >= since)

        rows = self.db.execute(query.order_by(CostEntry.date)).all()
        if not rows:
            return pd.DataFrame(columns=["date", "category", "amount"])

        df = pd.DataFrame(
            [{"date": r.date, "category": r.category, "amount": float(r.amount)} for r in rows]
        )
        df["date"] = pd.to_datetime(df["date"])
        return df

    def summary(self, today: Optional[date] = None) -> DashboardSummary:
        today = today or date.today()
        month_start = today.replace(day=1)

        total_cost = self.db.execute(
            select(func.coalesce(func.sum(CostEntry.amount), 0))
            .where(CostEntry.date >= month_start, CostEntry.date <= today)
        ).scalar()

        active_batches = self.db.execute(
            select(func.count(Batch.id)).where(Batch.status == BatchStatus.ACTIVE)
        ).scalar() or 0

        next_harvest = self.db.execute(
            select(func.min(Batch.expected_harvest))
            .where(Batch.status == BatchStatus.ACTIVE, Batch.expected_harvest >= today)
        ).scalar()

        total_rooms = self.db.execute(select(func.count(Room.id))).scalar() or 0
        active_rooms = self.db.execute(
            select(func.count(Room.id)).where(Room.status == RoomStatus.ACTIVE)
        ).scalar() or 0

        return DashboardSummary(
            total_cost_this_month=Decimal(str(total_cost or 0)),
            active_batches=active_batches,
            next_harvest_date=next_harvest,
            total_rooms=total_rooms,
            active_rooms=active_rooms,
        )

    def cost_breakdown(self) -> list[CostBreakdownItem]:
        """Kosten je Kategorie, absteigend nach Betrag"""
        rows = self.db.execute(
            select(CostEntry.category, func.sum(CostEntry.amount).label("amount"))
            .group_by(CostEntry.category)
            .order_by(func.sum(CostEntry.amount).desc())
        ).all()
        return [CostBreakdownItem(category=r.category, amount=float(r.amount)) for r in rows]

    def monthly_costs(self, months: int = 12, today: Optional[date] = None) -> list[MonthlyCost]:
        """Kostensumme je Monat (YYYY-MM) der letzten Monate"""
        since = self._months_back(today or date.today(), months)
        df = self._cost_frame(since)
        if df.empty:
            return []

        monthly = df.groupby(df["date"].dt.strftime("%Y-%m"))["amount"].sum()
        return [MonthlyCost(month=month, amount=round(amount, 2)) for month, amount in monthly.items()]

    def room_utilization(self) -> list[RoomUtilization]:
        rooms = self.db.execute(select(Room).order_by(Room.name)).scalars().all()
        return [
            RoomUtilization(
                name=room.name,
                active=int(room.status == RoomStatus.ACTIVE),
                inactive=int(room.status == RoomStatus.INACTIVE),
                archived=int(room.status == RoomStatus.ARCHIVED),
            )
            for room in rooms
        ]

    def category_trends(self, months: int = 12, today: Optional[date] = None) -> list[CategoryTrend]:
        """
        Monatliche Kosten je Kostengruppe.

        Net Income ist eine Schätzung: Anteil (Standard 15%) der Monatssumme.
        Ohne Buchungen ist das Ergebnis leer.
        """
        since = self._months_back(today or date.today(), months)
        df = self._cost_frame(since)
        if df.empty:
            return []

        df["month"] = df["date"].dt.strftime("%Y-%m")
        df["group"] = df["category"].map(lambda c: GROUP_COLUMNS[category_group(c)])

        pivot = df.pivot_table(
            index="month", columns="group", values="amount", aggfunc="sum", fill_value=0.0
        ).reindex(columns=list(GROUP_COLUMNS.values()), fill_value=0.0)

        ratio = float(self.settings.dashboard_net_income_ratio)
        pivot["net_income"] = pivot.sum(axis=1) * ratio

        return [
            CategoryTrend(month=month, **{k: round(float(v), 2) for k, v in row.items()})
            for month, row in pivot.sort_index().iterrows()
        ]

    @staticmethod
    def _months_back(today: date, months: int) -> date:
        """Erster Tag des Monats, der months-1 Monate vor today liegt"""
        index = today.year * 12 + (today.month - 1) - (months - 1)
        return date(index // 12, index % 12 + 1, 1)
