"""
Controlador de predicciones - Envío y consulta de pronósticos

Aquí es donde se aplica el cierre: una predicción fuera de plazo
responde 423 y no se guarda nada.
"""

from typing import Any

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from matchm8.core.dependencies import Database
from matchm8.models import PlayerPredictions, PredictionSubmission
from matchm8.services.fixture_service import WeekNotFoundError
from matchm8.services.prediction_service import (
    AllFixturesLockedError,
    InvalidPredictionError,
    PlayerNotFoundError,
    PredictionService,
    WeekLockedError
)


router = APIRouter(prefix="/predictions", tags=["predictions"])


class PredictionSubmitRequest(BaseModel):
    """Filas `{id, home, away}`; los marcadores se recortan a 0..99."""
    week: int = Field(..., ge=1)
    player_id: str = Field(..., min_length=1)
    predictions: list[Any]


@router.get("", response_model=PlayerPredictions)
async def get_predictions(
    db: Database,
    week: int = Query(..., ge=1, description="Week number"),
    player_id: str = Query(..., min_length=1)
):
    """
    Obtener las predicciones guardadas de un jugador para una jornada.
    """
    return await PredictionService(db).get_player_predictions(week, player_id)


@router.post("", response_model=PredictionSubmission)
async def submit_predictions(
    request: PredictionSubmitRequest,
    db: Database
):
    """
    Guardar predicciones (se fusionan con las anteriores por partido).

    - `first_kickoff`: si la jornada está cerrada, 423 `week_locked`.
    - `per_match`: los partidos cerrados se omiten (`skipped_ids`);
      si todos están cerrados, 423 `all_rows_locked`.
    """
    prediction_service = PredictionService(db)

    try:
        return await prediction_service.submit(request.week, request.player_id, request.predictions)
    except WeekLockedError as e:
        raise HTTPException(
            status_code=status.HTTP_423_LOCKED,
            detail={
                "error": "week_locked",
                "message": str(e),
                "lock_at": e.lock_at.isoformat() if e.lock_at else None,
            }
        )
    except AllFixturesLockedError as e:
        raise HTTPException(
            status_code=status.HTTP_423_LOCKED,
            detail={
                "error": "all_rows_locked",
                "message": str(e),
                "skipped_ids": e.skipped_ids,
            }
        )
    except (PlayerNotFoundError, WeekNotFoundError) as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except InvalidPredictionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
