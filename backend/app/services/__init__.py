"""
Business Logic Services für das Grow-Ledger Backend
"""
from app.services.allocation import validate_allocation, allocation_totals
from app.services.batch_codes import generate_batch_code
from app.services.batch_service import BatchService, BatchIndex
from app.services.cost_service import CostService
from app.services.dashboard import DashboardService
from app.services.harvest_service import HarvestService, compute_harvest_economics
from app.services.room_service import RoomService

__all__ = [
    "validate_allocation",
    "allocation_totals",
    "generate_batch_code",
    "BatchService",
    "BatchIndex",
    "CostService",
    "DashboardService",
    "HarvestService",
    "compute_harvest_economics",
    "RoomService",
]
