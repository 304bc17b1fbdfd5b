"""
Prüfung der Sortenzuteilung einer Charge gegen die Lampenkapazität des Raums
"""
from decimal import Decimal
from typing import Optional, Sequence

from app.core.exceptions import AllocationError

PERCENTAGE_LIMIT = Decimal("100")
DEFAULT_TOLERANCE = Decimal("0.1")


def allocation_totals(assignments: Sequence) -> tuple[int, Decimal]:
    """Summe der Lampen und der Raumanteile einer Zuteilung"""
    total_lights = sum(int(a.lights_assigned or 0) for a in assignments)
    total_percentage = sum(
        (Decimal(str(a.percentage or 0)) for a in assignments), Decimal("0")
    )
    return total_lights, total_percentage


def validate_allocation(
    assignments: Sequence,
    room_capacity: Optional[int],
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> Sequence:
    """
    Prüft eine geplante Sortenzuteilung.

    Abgelehnt wird, wenn
    - keine Sorte angegeben ist,
    - eine Sorte doppelt vorkommt,
    - die Lampensumme die Raumkapazität übersteigt (nur bei bekannter Kapazität > 0),
    - die Prozentsumme 100 + Toleranz übersteigt.

    Die Zuteilung wird unverändert zurückgegeben; Prozentwerte werden
    nicht auf 100 normalisiert.
    """
    if not assignments:
        raise AllocationError(
            "Bitte mindestens eine Sorte zur Charge hinzufügen", code="empty"
        )

    seen = set()
    for assignment in assignments:
        if assignment.strain_id in seen:
            raise AllocationError(
                "Diese Sorte ist der Charge bereits zugeteilt", code="duplicate_strain"
            )
        seen.add(assignment.strain_id)

    total_lights, total_percentage = allocation_totals(assignments)

    # Kapazität unbekannt (None/0) = keine Begrenzung
    if room_capacity and total_lights > room_capacity:
        raise AllocationError(
            f"Zugeteilte Lampen ({total_lights}) überschreiten die Raumkapazität ({room_capacity})",
            code="lights_exceed_capacity",
        )

    if total_percentage > PERCENTAGE_LIMIT + tolerance:
        raise AllocationError(
            f"Gesamtanteil ({total_percentage}%) darf 100% nicht überschreiten",
            code="percentage_exceeds_limit",
        )

    return assignments
