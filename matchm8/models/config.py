from enum import Enum
from pydantic import BaseModel


class DeadlineMode(str, Enum):
    FIRST_KICKOFF = "first_kickoff"  # toda la jornada cierra con el primer partido
    PER_MATCH = "per_match"          # cada partido cierra por separado


class LeagueConfig(BaseModel):
    """Reglas de la liga. Se leen en cada request, nunca se cachean"""

    season: int = 2025
    total_weeks: int = 38
    current_week: int = 1

    deadline_mode: DeadlineMode = DeadlineMode.FIRST_KICKOFF
    lock_offset_minutes: int = 0  # minutos antes del kickoff en que se cierran picks
    timezone: str = "UTC"  # IANA, solo para interpretar horas sin zona

    class Config:
        populate_by_name = True
