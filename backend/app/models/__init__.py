"""
SQLAlchemy Models für das Grow-Ledger Backend
"""
from app.models.enums import RoomStatus, BatchStatus, CostCategory, CostGroup, COST_GROUPS
from app.models.strain import Strain
from app.models.room import Room
from app.models.batch import Batch, BatchStrain
from app.models.harvest import HarvestSummary, HarvestDetail
from app.models.cost import CostEntry

__all__ = [
    # Enums
    "RoomStatus",
    "BatchStatus",
    "CostCategory",
    "CostGroup",
    "COST_GROUPS",
    # Stammdaten
    "Strain",
    "Room",
    # Chargen
    "Batch",
    "BatchStrain",
    # Ernte
    "HarvestSummary",
    "HarvestDetail",
    # Kosten
    "CostEntry",
]
