from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from .config import DeadlineMode


class Prediction(BaseModel):
    """Marcador predicho por un jugador para un partido"""

    fixture_id: str
    home: int = Field(0, ge=0, le=99)
    away: int = Field(0, ge=0, le=99)

    class Config:
        populate_by_name = True


class PlayerPredictions(BaseModel):
    """Todas las predicciones de un jugador en una jornada, indexadas por partido"""

    player_id: str
    week: int
    predictions: dict[str, Prediction] = {}
    submitted_at: Optional[datetime] = None

    class Config:
        populate_by_name = True


class PredictionSubmission(BaseModel):
    """Resultado de guardar predicciones: qué se aceptó y qué se saltó por cierre"""

    week: int
    player_id: str
    mode: DeadlineMode
    week_locked: Optional[bool] = None
    week_lock_at: Optional[datetime] = None

    accepted_ids: list[str] = []
    skipped_ids: list[str] = []
    saved_count: int = 0

    dev_bypass_lock: bool = False
