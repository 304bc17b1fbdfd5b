"""
API Endpoints für Kostenerfassung
"""
from datetime import date
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload

from app.api.deps import DBSession, Pagination
from app.models.batch import Batch
from app.models.cost import CostEntry
from app.models.enums import CostCategory
from app.models.room import Room
from app.schemas.cost import CostEntryCreate, CostEntryResponse, CostEntryListResponse

router = APIRouter()


@router.get("/categories", response_model=list[str])
async def list_categories():
    """Zulässige Kostenkategorien."""
    return [c.value for c in CostCategory]


@router.get("", response_model=CostEntryListResponse)
async def list_cost_entries(
    db: DBSession,
    pagination: Pagination,
    category: Optional[CostCategory] = None,
    room_id: Optional[UUID] = None,
    batch_id: Optional[UUID] = None,
    von: Optional[date] = None,
    bis: Optional[date] = None,
):
    """
    Kostenbuchungen, neueste zuerst.

    - **category**: Optional - Filter nach Kategorie
    - **room_id** / **batch_id**: Optional - Filter nach Raum/Charge
    - **von** / **bis**: Optional - Zeitraum
    """
    query = select(CostEntry)

    if category:
        query = query.where(CostEntry.category == category.value)
    if room_id:
        query = query.where(CostEntry.room_id == room_id)
    if batch_id:
        query = query.where(CostEntry.batch_id == batch_id)
    if von:
        query = query.where(CostEntry.date >= von)
    if bis:
        query = query.where(CostEntry.date <= bis)

    count_query = select(func.count()).select_from(query.subquery())
    total = db.execute(count_query).scalar() or 0

    query = (
        query.options(selectinload(CostEntry.room), selectinload(CostEntry.batch))
        .order_by(CostEntry.date.desc(), CostEntry.created_at.desc())
        .offset(pagination.offset)
        .limit(pagination.page_size)
    )
    entries = db.execute(query).scalars().all()

    return CostEntryListResponse(
        items=[CostEntryResponse.model_validate(e) for e in entries],
        total=total,
    )


@router.post("", response_model=CostEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_cost_entry(entry_data: CostEntryCreate, db: DBSession):
    """Kostenbuchung erfassen (optional mit Raum- oder Chargenbezug)."""
    if entry_data.room_id and not db.get(Room, entry_data.room_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Raum nicht gefunden"
        )
    if entry_data.batch_id and not db.get(Batch, entry_data.batch_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Charge nicht gefunden"
        )

    data = entry_data.model_dump()
    data["category"] = entry_data.category.value
    entry = CostEntry(**data)
    db.add(entry)
    db.commit()
    db.refresh(entry)

    return CostEntryResponse.model_validate(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cost_entry(entry_id: UUID, db: DBSession):
    """Kostenbuchung löschen."""
    entry = db.get(CostEntry, entry_id)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Kostenbuchung nicht gefunden"
        )
    db.delete(entry)
    db.commit()
