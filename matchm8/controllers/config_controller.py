"""
Controlador de configuración - Reglas de la liga (modo de cierre, margen, zona horaria)
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from matchm8.core.dependencies import CurrentAdmin, Database
from matchm8.engine.normalization import MAX_LOCK_OFFSET_MINUTES
from matchm8.models import DeadlineMode, LeagueConfig
from matchm8.services.config_service import ConfigService, InvalidConfigError


router = APIRouter(prefix="/config", tags=["config"])


class ConfigUpdateRequest(BaseModel):
    """Cambios parciales: solo se aplican los campos enviados."""
    season: Optional[int] = Field(None, ge=1)
    total_weeks: Optional[int] = Field(None, ge=1)
    current_week: Optional[int] = Field(None, ge=1)
    deadline_mode: Optional[DeadlineMode] = None
    lock_offset_minutes: Optional[int] = Field(None, ge=0, le=MAX_LOCK_OFFSET_MINUTES)
    timezone: Optional[str] = None


@router.get("", response_model=LeagueConfig)
async def get_config(db: Database):
    """
    Obtener la configuración actual de la liga, con los valores por defecto aplicados.
    """
    return await ConfigService(db).get_config()


@router.put("", response_model=LeagueConfig)
async def update_config(
    request: ConfigUpdateRequest,
    admin: CurrentAdmin,
    db: Database
):
    """
    Actualizar la configuración de la liga (solo admin).

    Los cambios se aplican al momento: el siguiente envío de predicciones
    ya usa el nuevo modo de cierre.
    """
    config_service = ConfigService(db)

    try:
        return await config_service.update_config(request.model_dump(exclude_none=True))
    except InvalidConfigError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
