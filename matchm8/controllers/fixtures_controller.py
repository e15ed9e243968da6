"""
Controlador de partidos - Partidos de cada jornada
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Query, status

from matchm8.core.dependencies import CurrentAdmin, Database
from matchm8.models import Fixture
from matchm8.services.fixture_service import FixtureService, InvalidFixturesError, WeekNotFoundError


router = APIRouter(prefix="/fixtures", tags=["fixtures"])


@router.get("", response_model=list[Fixture])
async def get_fixtures(
    db: Database,
    week: int = Query(..., ge=1, description="Week number")
):
    """
    Obtener los partidos de una jornada (ids, equipos y kickoff en UTC).
    """
    try:
        return await FixtureService(db).get_week(week)
    except WeekNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.put("/{week}", response_model=list[Fixture])
async def import_fixtures(
    week: int,
    admin: CurrentAdmin,
    db: Database,
    payload: Any = Body(...)
):
    """
    Importar los partidos de una jornada (solo admin).

    Acepta una lista de partidos, un mapa `{id: partido}` o `{fixtures: [...]}`,
    con los nombres de campo de cualquier proveedor. Sustituye la jornada completa.
    """
    try:
        return await FixtureService(db).import_week(week, payload)
    except InvalidFixturesError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
