"""
API Endpoints für Chargen, Sortenzuteilung und Ernte
"""
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Query, status

from app.api.deps import DBSession, DomainError, to_http_error
from app.core.exceptions import AllocationError
from app.models.enums import BatchStatus
from app.schemas.batch import (
    BatchCreate, BatchUpdate, BatchResponse, BatchListResponse,
    BatchStrainCreate, BatchStrainResponse,
    AllocationRequest, AllocationResponse, StatusTransitionResponse, BatchCodeResponse,
)
from app.schemas.harvest import (
    HarvestEntry, HarvestRecordRequest, HarvestResponse, CostToGrowResponse
)
from app.services.allocation import allocation_totals, validate_allocation
from app.services.batch_service import BatchService
from app.services.cost_service import CostService
from app.services.harvest_service import HarvestService

router = APIRouter()


# ============== Chargen ==============

@router.get("", response_model=BatchListResponse)
async def list_batches(
    db: DBSession,
    batch_status: Optional[BatchStatus] = Query(None, alias="status"),
):
    """
    Liste aller Chargen, sortiert nach Status und Startdatum.

    - **status**: Optional - nur Chargen mit diesem Status
    """
    batches = BatchService(db).list_batches(batch_status)
    return BatchListResponse(
        items=[BatchService.to_view(b) for b in batches],
        total=len(batches),
    )


@router.post("/validate-allocation", response_model=AllocationResponse)
async def check_allocation(request: AllocationRequest, db: DBSession):
    """
    Prüft eine geplante Sortenzuteilung, ohne sie zu speichern.

    Kapazität: Lampen des Raums (room_id) oder room_capacity.
    """
    service = BatchService(db)
    capacity = request.room_capacity
    if request.room_id:
        try:
            room = service.get_room(request.room_id)
        except DomainError as e:
            raise to_http_error(e)
        capacity = room.lights

    total_lights, total_percentage = allocation_totals(request.strains)
    result = AllocationResponse(
        valid=True,
        total_lights=total_lights,
        total_percentage=total_percentage,
        room_capacity=capacity,
        remaining_lights=capacity - total_lights if capacity else None,
    )

    try:
        validate_allocation(request.strains, capacity, service.settings.percentage_tolerance)
    except AllocationError as e:
        result.valid = False
        result.error_code = e.code
        result.message = str(e)

    return result


@router.get("/next-code", response_model=BatchCodeResponse)
async def next_batch_code(room_id: UUID, db: DBSession):
    """Vorschlag für den nächsten Chargencode eines Raums."""
    try:
        code = BatchService(db).next_code(room_id)
    except DomainError as e:
        raise to_http_error(e)
    return BatchCodeResponse(batch_code=code)


@router.get("/{batch_id}", response_model=BatchResponse)
async def get_batch(batch_id: UUID, db: DBSession):
    """Einzelne Charge mit Sortenzuteilung abrufen."""
    try:
        batch = BatchService(db).get_batch(batch_id)
    except DomainError as e:
        raise to_http_error(e)
    return BatchService.to_view(batch)


@router.post("", response_model=BatchResponse, status_code=status.HTTP_201_CREATED)
async def create_batch(batch_data: BatchCreate, db: DBSession):
    """
    Neue Charge anlegen.

    Validiert automatisch:
    - mindestens eine Sorte, keine Sorte doppelt
    - Lampensumme <= Lampen des Raums
    - Prozentsumme <= 100%
    """
    try:
        batch = BatchService(db).create_batch(batch_data)
    except DomainError as e:
        raise to_http_error(e)
    return BatchService.to_view(batch)


@router.patch("/{batch_id}", response_model=BatchResponse)
async def update_batch(batch_id: UUID, batch_data: BatchUpdate, db: DBSession):
    """Charge aktualisieren (Status über /status)."""
    try:
        batch = BatchService(db).update_batch(batch_id, batch_data)
    except DomainError as e:
        raise to_http_error(e)
    return BatchService.to_view(batch)


@router.delete("/{batch_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_batch(batch_id: UUID, db: DBSession):
    """Charge löschen. Sortenzuteilung wird mitgelöscht, Erntedaten bleiben."""
    try:
        BatchService(db).delete_batch(batch_id)
    except DomainError as e:
        raise to_http_error(e)


@router.post(
    "/{batch_id}/strains",
    response_model=BatchStrainResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_batch_strain(batch_id: UUID, assignment: BatchStrainCreate, db: DBSession):
    """Sorte zu einer bestehenden Charge hinzufügen."""
    try:
        created = BatchService(db).add_strain(batch_id, assignment)
    except DomainError as e:
        raise to_http_error(e)
    return BatchStrainResponse.model_validate(created)


@router.post("/{batch_id}/status/{new_status}", response_model=StatusTransitionResponse)
async def change_batch_status(batch_id: UUID, new_status: BatchStatus, db: DBSession):
    """
    Status einer Charge ändern.

    Für 'harvested' wird der Status nicht gesetzt, sondern eine
    Ernteerfassung zurückgegeben (harvest_required). Der Status wechselt
    mit PUT /{batch_id}/harvest.
    """
    try:
        batch, harvest_required, draft = BatchService(db).transition_status(batch_id, new_status)
    except DomainError as e:
        raise to_http_error(e)

    return StatusTransitionResponse(
        batch=BatchService.to_view(batch),
        harvest_required=harvest_required,
        harvest_draft=draft,
    )


@router.get("/{batch_id}/cost-to-grow", response_model=CostToGrowResponse)
async def get_cost_to_grow(batch_id: UUID, db: DBSession):
    """Kostenbuchungen + geschätzte Stromkosten seit Start der Charge."""
    try:
        batch = BatchService(db).get_batch(batch_id)
    except DomainError as e:
        raise to_http_error(e)

    breakdown = CostService(db).cost_breakdown(batch.id, batch.room_id, batch.start_date)
    return CostToGrowResponse(**breakdown)


# ============== Ernte ==============

@router.get("/{batch_id}/harvest/draft", response_model=list[HarvestEntry])
async def get_harvest_draft(batch_id: UUID, db: DBSession):
    """Leere Ernteerfassung: eine Zeile pro zugeteilter Sorte."""
    try:
        batch = BatchService(db).get_batch(batch_id)
    except DomainError as e:
        raise to_http_error(e)
    return HarvestService(db).initial_entries(batch)


@router.put("/{batch_id}/harvest", response_model=HarvestResponse)
async def record_harvest(batch_id: UUID, request: HarvestRecordRequest, db: DBSession):
    """
    Ernte speichern und Charge auf 'harvested' setzen.

    Bestehende Erntedaten der Charge werden ersetzt.
    """
    try:
        summary, economics = HarvestService(db).record_harvest(
            batch_id, request.entries, harvest_date=request.harvest_date
        )
    except DomainError as e:
        raise to_http_error(e)

    return HarvestResponse(
        summary_id=summary.id,
        batch_id=summary.batch_id,
        harvest_date=summary.harvest_date,
        batch_status=BatchStatus.HARVESTED,
        economics=economics,
    )


@router.get("/{batch_id}/harvest", response_model=HarvestResponse)
async def get_harvest(batch_id: UUID, db: DBSession):
    """Gespeicherte Ernte mit neu berechneten Kennzahlen."""
    try:
        summary, economics, prices_estimated = HarvestService(db).load_harvest(batch_id)
    except DomainError as e:
        raise to_http_error(e)

    return HarvestResponse(
        summary_id=summary.id,
        batch_id=summary.batch_id,
        harvest_date=summary.harvest_date,
        batch_status=summary.batch.status if summary.batch else None,
        prices_estimated=prices_estimated,
        economics=economics,
    )
