from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class WeeklyScoreRow(BaseModel):
    """Puntos de un jugador en una jornada (derivado, se puede recalcular)"""

    player_id: str
    name: str = ""
    week_points: int = 0


class SeasonTotal(BaseModel):
    """Acumulado de temporada de un jugador"""

    player_id: str
    name: str = ""
    total_points: int = 0
    weeks_played: int = 0


class MatrixRow(BaseModel):
    player_id: str
    name: str
    weekly: dict[int, int]
    total: int
    rank: int


class LeaderboardMatrix(BaseModel):
    """Vista de las últimas N jornadas (total = suma de la ventana)"""

    start_week: int
    end_week: int
    weeks: list[int]
    rows: list[MatrixRow]


class ScoreLine(BaseModel):
    home: int
    away: int


class PlayerWeekRow(BaseModel):
    fixture_id: str
    home_team: str
    away_team: str
    kickoff: Optional[datetime] = None

    prediction: Optional[ScoreLine] = None
    result: Optional[ScoreLine] = None
    points: Optional[int] = None  # None = pendiente o sin predicción


class PlayerWeekTotals(BaseModel):
    week_points: int = 0
    exact_count: int = 0
    outcome_count: int = 0
    pending_count: int = 0
    missed_count: int = 0


class PlayerWeekBreakdown(BaseModel):
    """Detalle partido a partido de la jornada de un jugador"""

    player_id: str
    rows: list[PlayerWeekRow]
    totals: PlayerWeekTotals


class WeekSummary(BaseModel):
    week: int
    fixtures_count: int
    fixtures_with_result: int
    player_count: int


class WeekScores(BaseModel):
    """Tabla de la jornada calculada al vuelo (sin guardar)"""

    summary: WeekSummary
    rows: list[WeeklyScoreRow]


class WeeklyScoreWithSeason(WeeklyScoreRow):
    season_total: int = 0


class ComputedWeek(BaseModel):
    """Jornada calculada y guardada, con los totales de temporada ya reconstruidos"""

    week: int
    saved: int
    weekly: list[WeeklyScoreWithSeason]
    season_totals: list[SeasonTotal]


class SavedWeek(BaseModel):
    week: int
    saved: bool  # False = calculada al vuelo porque no estaba guardada
    rows: list[WeeklyScoreRow]


class SeasonStanding(SeasonTotal):
    rank: int


class ScoresSummary(BaseModel):
    week: Optional[int] = None
    updated_at: Optional[datetime] = None
    season_totals: list[SeasonTotal]
    weekly: Optional[list[WeeklyScoreRow]] = None


class WeekWipe(BaseModel):
    """Lo que se borró al vaciar una jornada"""

    week: int
    predictions_deleted: int = 0
    results_deleted: int = 0
    scores_deleted: bool = False
