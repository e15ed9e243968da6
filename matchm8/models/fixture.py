from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Fixture(BaseModel):
    """Partido de una jornada (forma canónica, ya normalizada)"""

    id: str  # único dentro de la jornada
    home: str
    away: str

    kickoff: Optional[datetime] = None  # sin kickoff = nunca se bloquea

    class Config:
        populate_by_name = True
