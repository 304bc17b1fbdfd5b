"""
API Endpoints für Sorten (Stammdaten)
"""
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select, func, update

from app.api.deps import DBSession
from app.models.batch import Batch, BatchStrain
from app.models.room import Room
from app.models.strain import Strain
from app.schemas.room import StrainCreate, StrainUpdate, StrainResponse

router = APIRouter()


def _get_or_404(db, strain_id: UUID) -> Strain:
    strain = db.get(Strain, strain_id)
    if not strain:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Sorte nicht gefunden"
        )
    return strain


@router.get("", response_model=list[StrainResponse])
async def list_strains(db: DBSession, search: Optional[str] = None):
    """Alle Sorten, alphabetisch."""
    query = select(Strain)
    if search:
        query = query.where(Strain.name.ilike(f"%{search}%"))
    strains = db.execute(query.order_by(Strain.name)).scalars().all()
    return [StrainResponse.model_validate(s) for s in strains]


@router.get("/{strain_id}", response_model=StrainResponse)
async def get_strain(strain_id: UUID, db: DBSession):
    return StrainResponse.model_validate(_get_or_404(db, strain_id))


@router.post("", response_model=StrainResponse, status_code=status.HTTP_201_CREATED)
async def create_strain(strain_data: StrainCreate, db: DBSession):
    """Neue Sorte anlegen."""
    strain = Strain(**strain_data.model_dump())
    db.add(strain)
    db.commit()
    db.refresh(strain)
    return StrainResponse.model_validate(strain)


@router.patch("/{strain_id}", response_model=StrainResponse)
async def update_strain(strain_id: UUID, strain_data: StrainUpdate, db: DBSession):
    strain = _get_or_404(db, strain_id)
    for field, value in strain_data.model_dump(exclude_unset=True).items():
        setattr(strain, field, value)
    db.commit()
    db.refresh(strain)
    return StrainResponse.model_validate(strain)


@router.delete("/{strain_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_strain(strain_id: UUID, db: DBSession):
    """
    Sorte löschen.

    Nicht möglich, solange die Sorte einer Charge zugeteilt ist.
    Als Standard-Sorte von Räumen und Chargen wird sie entfernt.
    """
    strain = _get_or_404(db, strain_id)

    in_use = db.execute(
        select(func.count(BatchStrain.id)).where(BatchStrain.strain_id == strain_id)
    ).scalar() or 0
    if in_use:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Sorte ist {in_use} Chargen zugeteilt und kann nicht gelöscht werden"
        )

    db.execute(update(Batch).where(Batch.strain_id == strain_id).values(strain_id=None))
    db.execute(update(Room).where(Room.strain_id == strain_id).values(strain_id=None))
    db.delete(strain)
    db.commit()
