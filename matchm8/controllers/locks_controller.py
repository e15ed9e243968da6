"""
Controlador de cierres - Estado de bloqueo de una jornada
"""

from fastapi import APIRouter, Query

from matchm8.core.dependencies import Database
from matchm8.models import LockStatus
from matchm8.services.lock_service import LockService


router = APIRouter(prefix="/locks", tags=["locks"])


@router.get("", response_model=LockStatus)
async def get_lock_status(
    db: Database,
    week: int = Query(..., ge=1, description="Week number")
):
    """
    Estado de cierre de la jornada en este momento.

    En modo `first_kickoff` indica si la jornada entera está cerrada;
    en `per_match` cada partido lleva su propio estado.
    """
    return await LockService(db).get_lock_status(week)
