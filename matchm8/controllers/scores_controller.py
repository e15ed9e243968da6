"""
Controlador de puntuaciones - Tabla de la jornada, cálculo y detalle por jugador
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from matchm8.core.dependencies import CurrentAdmin, Database
from matchm8.models import ComputedWeek, PlayerWeekBreakdown, SavedWeek, ScoresSummary, WeekScores
from matchm8.services.scoring_service import NoResultsError, PlayerNotFoundError, ScoringService


router = APIRouter(prefix="/scores", tags=["scores"])


class ComputeRequest(BaseModel):
    week: int = Field(..., ge=1)


@router.get("", response_model=WeekScores)
async def preview_week(
    db: Database,
    week: int = Query(..., ge=1, description="Week number")
):
    """
    Tabla de la jornada calculada al vuelo, sin guardar nada.
    """
    return await ScoringService(db).preview_week(week)


@router.post("/compute", response_model=ComputedWeek)
async def compute_week(
    request: ComputeRequest,
    admin: CurrentAdmin,
    db: Database
):
    """
    Calcular y guardar la jornada, y reconstruir los totales de temporada (solo admin).

    Se puede repetir sin problema: recalcular reemplaza lo guardado.
    """
    try:
        return await ScoringService(db).compute_and_persist(request.week)
    except NoResultsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "no_results", "message": str(e)}
        )


@router.get("/week", response_model=SavedWeek)
async def get_week(
    db: Database,
    week: int = Query(..., ge=1)
):
    """
    Tabla guardada de la jornada; si nunca se calculó, se calcula al vuelo (`saved=false`).
    """
    return await ScoringService(db).get_week(week)


@router.get("/summary", response_model=ScoresSummary)
async def get_summary(
    db: Database,
    week: Optional[int] = Query(None, ge=1)
):
    """
    Totales de temporada y, si se pide, la tabla guardada de una jornada.
    """
    return await ScoringService(db).get_summary(week)


@router.get("/player-week", response_model=PlayerWeekBreakdown)
async def get_player_week(
    db: Database,
    week: int = Query(..., ge=1),
    player_id: str = Query(..., min_length=1)
):
    """
    Detalle partido a partido de la jornada de un jugador.
    """
    try:
        return await ScoringService(db).get_player_week(week, player_id)
    except PlayerNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
