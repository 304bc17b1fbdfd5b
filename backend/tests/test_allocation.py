"""
Tests für die Prüfung der Sortenzuteilung
"""
import uuid
import pytest
from decimal import Decimal

from app.core.exceptions import AllocationError
from app.schemas.batch import BatchStrainCreate
from app.services.allocation import validate_allocation, allocation_totals


def assignment(lights, percentage, strain_id=None):
    return BatchStrainCreate(
        strain_id=strain_id or uuid.uuid4(),
        lights_assigned=lights,
        percentage=Decimal(str(percentage)),
    )


class TestValidateAllocation:
    """Tests für validate_allocation"""

    def test_valid_allocation(self):
        assignments = [assignment(6, 60), assignment(4, 40)]
        assert validate_allocation(assignments, room_capacity=10) == assignments

    def test_empty_rejected(self):
        with pytest.raises(AllocationError) as exc:
            validate_allocation([], room_capacity=10)
        assert exc.value.code == "empty"

    def test_duplicate_strain_rejected(self):
        strain_id = uuid.uuid4()
        with pytest.raises(AllocationError) as exc:
            validate_allocation(
                [assignment(2, 20, strain_id), assignment(3, 30, strain_id)],
                room_capacity=10,
            )
        assert exc.value.code == "duplicate_strain"

    def test_lights_exceed_capacity(self):
        with pytest.raises(AllocationError) as exc:
            validate_allocation([assignment(8, 50), assignment(3, 50)], room_capacity=10)
        assert exc.value.code == "lights_exceed_capacity"
        assert "11" in str(exc.value)

    def test_lights_equal_capacity_allowed(self):
        validate_allocation([assignment(10, 100)], room_capacity=10)

    def test_unknown_capacity_is_unbounded(self):
        """Kapazität None oder 0: keine Lampenprüfung"""
        validate_allocation([assignment(500, 100)], room_capacity=None)
        validate_allocation([assignment(500, 100)], room_capacity=0)

    def test_percentage_tolerance(self):
        """Bis 100.1% wird akzeptiert (Rundung)"""
        validate_allocation(
            [assignment(3, "33.37"), assignment(3, "33.37"), assignment(3, "33.36")],
            room_capacity=10,
        )

    def test_percentage_exceeds_limit(self):
        with pytest.raises(AllocationError) as exc:
            validate_allocation([assignment(5, 60), assignment(5, "40.2")], room_capacity=10)
        assert exc.value.code == "percentage_exceeds_limit"

    def test_percentages_not_normalized(self):
        """Zuteilung unter 100% bleibt unverändert"""
        assignments = [assignment(2, 30), assignment(2, 30)]
        result = validate_allocation(assignments, room_capacity=10)
        assert [a.percentage for a in result] == [Decimal("30"), Decimal("30")]

    def test_duplicate_checked_before_capacity(self):
        strain_id = uuid.uuid4()
        with pytest.raises(AllocationError) as exc:
            validate_allocation(
                [assignment(20, 50, strain_id), assignment(20, 50, strain_id)],
                room_capacity=10,
            )
        assert exc.value.code == "duplicate_strain"


class TestAllocationTotals:

    def test_totals(self):
        lights, percentage = allocation_totals([assignment(6, "60.5"), assignment(4, "39.5")])
        assert lights == 10
        assert percentage == Decimal("100.0")

    def test_totals_empty(self):
        assert allocation_totals([]) == (0, Decimal("0"))
