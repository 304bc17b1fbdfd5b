"""Chargencode-Erzeugung.

Format: R{Raumnummer}-{Jahr}-{Laufnummer:2}, z.B. "Flower Room 7" -> R7-2025-03.
Die Raumnummer ist die erste Ziffernfolge im Raumnamen (Standard "1").
Die Laufnummer zählt bestehende Codes des Raums im laufenden Jahr.

Ohne Sperre: zwei gleichzeitige Anlagen für denselben Raum können denselben
Code erhalten.
"""
import logging
import re
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.batch import Batch

logger = logging.getLogger(__name__)

ROOM_NUMBER_PATTERN = re.compile(r"(\d+)")


def room_code(room_name: str) -> str:
    """'Flower Room 7' -> 'R7', ohne Ziffern 'R1'"""
    match = ROOM_NUMBER_PATTERN.search(room_name or "")
    return f"R{match.group(1) if match else '1'}"


def _count_existing(db: Session, room_id: UUID, prefix: str) -> int:
    """Anzahl bestehender Codes des Raums mit diesem Präfix"""
    return db.execute(
        select(func.count(Batch.id))
        .where(Batch.room_id == room_id, Batch.batch_code.like(f"{prefix}%"))
    ).scalar() or 0


def generate_batch_code(
    db: Session,
    room_name: str,
    room_id: UUID,
    today: Optional[date] = None,
) -> str:
    """
    Erzeugt den nächsten Chargencode für einen Raum.

    Schlägt die Abfrage fehl, wird mit Laufnummer 01 fortgefahren, damit
    die Anlage der Charge nicht blockiert.
    """
    today = today or date.today()
    prefix = f"{room_code(room_name)}-{today.year}-"

    try:
        count = _count_existing(db, room_id, prefix)
    except SQLAlchemyError as e:
        logger.warning(f"Chargencodes für Raum {room_id} nicht lesbar, verwende 01: {e}")
        db.rollback()
        count = 0

    return f"{prefix}{count + 1:02d}"
