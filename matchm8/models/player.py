from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class Player(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    email: Optional[str] = None

    is_active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        populate_by_name = True


class PlayerCreate(BaseModel):
    id: str
    name: str
    email: Optional[str] = None


class PlayerUpdate(BaseModel):
    """Cambios del admin; email vacío lo borra"""
    name: Optional[str] = None
    email: Optional[str] = None
