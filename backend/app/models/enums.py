from enum import Enum


class RoomStatus(str, Enum):
    """Betriebsstatus eines Raums"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class BatchStatus(str, Enum):
    """Lebenszyklus einer Charge"""
    PLANNED = "planned"       # Geplant, noch nicht gestartet
    ACTIVE = "active"         # Läuft im Raum
    HARVESTED = "harvested"   # Ernte erfasst
    ARCHIVED = "archived"     # Abgeschlossen

    @property
    def is_terminal(self) -> bool:
        """Geerntete und archivierte Chargen belegen keinen Raum mehr"""
        return self in (BatchStatus.HARVESTED, BatchStatus.ARCHIVED)


class CostCategory(str, Enum):
    """Kostenkategorien der Kostenerfassung"""
    CLONES = "Clones"
    NUTRIENTS_COCO = "Nutrients & Coco"
    TESTING = "Testing"
    UTILITIES = "Utilities"
    LABOR = "Labor"
    TRIMMING = "Trimming"
    SUPPLIES = "Supplies"
    SECURITY = "Security"
    EQUIPMENT = "Equipment"
    INSURANCE = "Insurance"
    TAXES = "Taxes"
    RENT = "Rent"
    OTHER = "Other"

    @property
    def group(self) -> "CostGroup":
        """Zuordnung zur Kostengruppe für die Trend-Auswertung"""
        return COST_GROUPS.get(self, CostGroup.OTHER_EXPENSES)


class CostGroup(str, Enum):
    """Kostengruppen im Dashboard"""
    COST_OF_GOODS_SOLD = "Cost of Goods Sold"
    EXPENSES = "Expenses"
    OTHER_EXPENSES = "Other Expenses"


COST_GROUPS = {
    CostCategory.CLONES: CostGroup.COST_OF_GOODS_SOLD,
    CostCategory.NUTRIENTS_COCO: CostGroup.COST_OF_GOODS_SOLD,
    CostCategory.TESTING: CostGroup.COST_OF_GOODS_SOLD,
    CostCategory.UTILITIES: CostGroup.EXPENSES,
    CostCategory.LABOR: CostGroup.EXPENSES,
    CostCategory.TRIMMING: CostGroup.EXPENSES,
    CostCategory.SUPPLIES: CostGroup.EXPENSES,
    CostCategory.SECURITY: CostGroup.EXPENSES,
    CostCategory.EQUIPMENT: CostGroup.OTHER_EXPENSES,
    CostCategory.INSURANCE: CostGroup.OTHER_EXPENSES,
    CostCategory.TAXES: CostGroup.OTHER_EXPENSES,
    CostCategory.RENT: CostGroup.OTHER_EXPENSES,
    CostCategory.OTHER: CostGroup.OTHER_EXPENSES,
}


def category_group(category: str) -> CostGroup:
    """Kostengruppe zu einer Kategorie; unbekannte Kategorien -> Other Expenses"""
    try:
        return CostCategory(category).group
    except ValueError:
        return CostGroup.OTHER_EXPENSES
