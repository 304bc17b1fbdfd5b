"""
Tests für die Cost-to-Grow-Berechnung
"""
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from app.config import get_settings
from app.models import CostEntry
from app.services.cost_service import CostService, days_active


class TestDaysActive:

    def test_full_days(self):
        assert days_active(date(2025, 1, 1), datetime(2025, 1, 11)) == 10

    def test_started_day_counts(self):
        assert days_active(date(2025, 1, 1), datetime(2025, 1, 11, 1, 0)) == 11

    def test_future_start_is_zero(self):
        assert days_active(date(2025, 2, 1), datetime(2025, 1, 11)) == 0


class TestCostToGrow:

    def test_default_electricity_rate(self):
        assert get_settings().electricity_cost_per_light_per_day == Decimal("2.70")

    def test_electricity_only(self, db, batch_model):
        """Ohne Kostenbuchungen: Lampen * 2.70 * Tage"""
        service = CostService(db)
        cost = service.calculate_cost_to_grow(
            batch_model.id, batch_model.room_id, batch_model.start_date,
            now=datetime(2025, 1, 11),
        )
        # 10 Lampen * 2.70 * 10 Tage
        assert cost == Decimal("270")

    def test_recorded_costs_for_batch_or_room(self, db, batch_model, room_model):
        db.add_all([
            CostEntry(date=date(2025, 1, 5), category="Nutrients & Coco",
                      batch_id=batch_model.id, amount=Decimal("100")),
            CostEntry(date=date(2025, 1, 6), category="Labor",
                      room_id=room_model.id, amount=Decimal("50")),
            # vor Start der Charge
            CostEntry(date=date(2024, 12, 20), category="Rent",
                      room_id=room_model.id, amount=Decimal("999")),
            # ohne Bezug
            CostEntry(date=date(2025, 1, 7), category="Insurance", amount=Decimal("77")),
        ])
        db.commit()

        breakdown = CostService(db).cost_breakdown(
            batch_model.id, batch_model.room_id, batch_model.start_date,
            now=datetime(2025, 1, 11),
        )

        assert breakdown["days_active"] == 10
        assert breakdown["recorded_costs"] == Decimal("150")
        assert breakdown["electricity_cost"] == Decimal("270")
        assert breakdown["cost_to_grow"] == Decimal("420")

    def test_room_without_lights(self, db, batch_model, room_model):
        room_model.lights = None
        db.commit()

        cost = CostService(db).calculate_cost_to_grow(
            batch_model.id, room_model.id, batch_model.start_date,
            now=datetime(2025, 1, 11),
        )
        assert cost == Decimal("0")

    def test_read_failure_returns_zero(self, db, batch_model):
        """Fehler beim Lesen der Kosten blockieren nicht: Ergebnis 0"""
        error = OperationalError("SELECT amount", {}, Exception("connection lost"))
        with patch.object(CostService, "recorded_costs", side_effect=error):
            breakdown = CostService(db).cost_breakdown(
                batch_model.id, batch_model.room_id, batch_model.start_date,
                now=datetime(2025, 1, 11),
            )

        assert breakdown["cost_to_grow"] == Decimal("0")
        assert breakdown["days_active"] == 10
