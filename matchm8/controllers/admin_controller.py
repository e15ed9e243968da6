"""
Controlador de Admin - Mantenimiento de la liga
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from matchm8.core.dependencies import CurrentAdmin, Database
from matchm8.models import WeekWipe
from matchm8.services.scoring_service import ScoringService


router = APIRouter(prefix="/admin", tags=["admin"])


# ============================================
# REQUEST SCHEMAS
# ============================================

class WipeWeekRequest(BaseModel):
    """Request para vaciar una jornada"""
    week: int = Field(..., ge=1)


# ============================================
# MAINTENANCE ENDPOINTS
# ============================================

@router.post("/wipe/week", response_model=WeekWipe)
async def wipe_week(
    request: WipeWeekRequest,
    admin: CurrentAdmin,
    db: Database
):
    """
    Borrar todas las predicciones y resultados de una jornada.
    Los partidos importados se conservan y los totales de temporada se recalculan.

    ADVERTENCIA: no se puede deshacer.
    Solo administradores.
    """
    return await ScoringService(db).wipe_week(request.week)
