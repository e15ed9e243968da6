"""
Controlador de leaderboards - Clasificación de temporada y matriz de jornadas

Se sirve desde las tablas guardadas; se regeneran cada vez que se calcula una jornada.
"""

from typing import Optional

from fastapi import APIRouter, Query

from matchm8.core.dependencies import Database
from matchm8.engine.leaderboard import MAX_MATRIX_WINDOW
from matchm8.models import LeaderboardMatrix, SeasonStanding
from matchm8.services.leaderboard_service import LeaderboardService


router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/season", response_model=list[SeasonStanding])
async def get_season_leaderboard(
    db: Database,
    limit: Optional[int] = Query(None, ge=1, le=500)
):
    """
    Clasificación general de la temporada (empates comparten puesto).
    """
    return await LeaderboardService(db).get_season_leaderboard(limit)


@router.get("/matrix", response_model=LeaderboardMatrix)
async def get_matrix(
    db: Database,
    window: int = Query(5, ge=1, le=MAX_MATRIX_WINDOW, description="Number of weeks"),
    end_week: Optional[int] = Query(None, ge=1)
):
    """
    Puntos por jornada de las últimas `window` jornadas hasta `end_week`.

    El total es la suma de la ventana, no de toda la temporada.
    """
    return await LeaderboardService(db).get_matrix(window, end_week)
