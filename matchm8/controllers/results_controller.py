"""
Controlador de resultados - Marcadores reales cargados por el admin
"""

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from matchm8.core.dependencies import CurrentAdmin, Database
from matchm8.models import Result
from matchm8.services.fixture_service import WeekNotFoundError
from matchm8.services.result_service import ResultNotFoundError, ResultService, UnknownFixtureError


router = APIRouter(prefix="/results", tags=["results"])


class ResultUpsertRequest(BaseModel):
    week: int = Field(..., ge=1)
    fixture_id: str = Field(..., min_length=1)
    home: int
    away: int


@router.get("", response_model=list[Result])
async def get_results(
    db: Database,
    week: int = Query(..., ge=1, description="Week number")
):
    """
    Resultados cargados de una jornada (los partidos pendientes no aparecen).
    """
    results = await ResultService(db).get_results(week)
    return list(results.values())


@router.put("/upsert", response_model=Result)
async def upsert_result(
    request: ResultUpsertRequest,
    admin: CurrentAdmin,
    db: Database
):
    """
    Crear o corregir el resultado de un partido (solo admin).

    Volver a enviarlo sobrescribe el anterior; hay que recalcular la
    jornada para que cambien los puntos.
    """
    try:
        return await ResultService(db).upsert_result(
            request.week, request.fixture_id, request.home, request.away
        )
    except WeekNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except UnknownFixtureError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.delete("/{week}/{fixture_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_result(
    week: int,
    fixture_id: str,
    admin: CurrentAdmin,
    db: Database
):
    """
    Borrar un resultado; el partido vuelve a quedar pendiente (solo admin).
    """
    try:
        await ResultService(db).delete_result(week, fixture_id)
    except ResultNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
