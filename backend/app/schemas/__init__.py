"""
Pydantic Schemas für die Grow-Ledger API
"""
# Räume & Sorten
from app.schemas.room import (
    StrainBase, StrainCreate, StrainUpdate, StrainResponse,
    RoomBase, RoomCreate, RoomUpdate, RoomResponse, RoomListResponse,
)

# Ernte
from app.schemas.harvest import (
    HarvestEntry, HarvestRecordRequest, HarvestEconomics, HarvestResponse,
    CostToGrowResponse,
)

# Chargen
from app.schemas.batch import (
    BatchStrainCreate, BatchStrainResponse,
    BatchBase, BatchCreate, BatchUpdate, BatchResponse, BatchListResponse,
    AllocationRequest, AllocationResponse, StatusTransitionResponse, BatchCodeResponse,
)

# Kosten & Dashboard
from app.schemas.cost import (
    CostEntryBase, CostEntryCreate, CostEntryResponse, CostEntryListResponse,
    DashboardSummary, CostBreakdownItem, MonthlyCost, RoomUtilization, CategoryTrend,
)
