from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Result(BaseModel):
    """Resultado real de un partido (cargado por un admin)"""

    fixture_id: str
    home: int = Field(..., ge=0, le=99)
    away: int = Field(..., ge=0, le=99)

    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
