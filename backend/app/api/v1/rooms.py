"""
API Endpoints für Raum-Verwaltung
"""
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Query, status

from app.api.deps import DBSession, Pagination, DomainError, to_http_error
from app.models.enums import RoomStatus
from app.schemas.room import RoomCreate, RoomUpdate, RoomResponse, RoomListResponse
from app.services.room_service import RoomService

router = APIRouter()


@router.get("", response_model=RoomListResponse)
async def list_rooms(
    db: DBSession,
    pagination: Pagination,
    room_status: Optional[RoomStatus] = Query(None, alias="status"),
):
    """
    Liste aller Räume mit aktueller Charge.

    - **status**: Optional - nur Räume mit diesem Status
    """
    rooms, total = RoomService(db).list_rooms(
        status=room_status, offset=pagination.offset, limit=pagination.page_size
    )
    return RoomListResponse(
        items=[RoomResponse.model_validate(r) for r in rooms],
        total=total,
    )


@router.get("/{room_id}", response_model=RoomResponse)
async def get_room(room_id: UUID, db: DBSession):
    """Einzelnen Raum abrufen."""
    try:
        room = RoomService(db).get_room(room_id)
    except DomainError as e:
        raise to_http_error(e)
    return RoomResponse.model_validate(room)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(room_data: RoomCreate, db: DBSession):
    """Neuen Raum anlegen."""
    room = RoomService(db).create_room(room_data)
    return RoomResponse.model_validate(room)


@router.patch("/{room_id}", response_model=RoomResponse)
async def update_room(room_id: UUID, room_data: RoomUpdate, db: DBSession):
    """Raum aktualisieren."""
    try:
        room = RoomService(db).update_room(room_id, room_data)
    except DomainError as e:
        raise to_http_error(e)
    return RoomResponse.model_validate(room)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(room_id: UUID, db: DBSession):
    """
    Raum löschen.

    Schlägt mit 409 fehl, solange geplante oder aktive Chargen im Raum sind.
    """
    try:
        RoomService(db).delete_room(room_id)
    except DomainError as e:
        raise to_http_error(e)
