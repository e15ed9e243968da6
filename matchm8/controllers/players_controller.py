"""
Controlador de jugadores - Directorio de participantes de la liga
"""

from fastapi import APIRouter, HTTPException, status

from matchm8.core.dependencies import CurrentAdmin, Database
from matchm8.models import Player, PlayerCreate, PlayerUpdate
from matchm8.services.player_service import PlayerAlreadyExistsError, PlayerNotFoundError, PlayerService


router = APIRouter(prefix="/players", tags=["players"])


@router.get("", response_model=list[Player])
async def list_players(db: Database):
    """
    Listar todos los jugadores ordenados por nombre.
    """
    return await PlayerService(db).list_players()


@router.post("", response_model=Player, status_code=status.HTTP_201_CREATED)
async def create_player(
    player_data: PlayerCreate,
    admin: CurrentAdmin,
    db: Database
):
    """
    Dar de alta un jugador (solo admin).
    """
    try:
        return await PlayerService(db).create_player(player_data)
    except PlayerAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )


@router.put("/{player_id}", response_model=Player)
async def update_player(
    player_id: str,
    changes: PlayerUpdate,
    admin: CurrentAdmin,
    db: Database
):
    """
    Cambiar nombre o email de un jugador (solo admin).
    Un email vacío lo elimina.
    """
    try:
        return await PlayerService(db).update_player(player_id, changes)
    except PlayerNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )


@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_player(
    player_id: str,
    admin: CurrentAdmin,
    db: Database
):
    """
    Dar de baja un jugador (solo admin).
    Sus predicciones y puntos ya calculados se conservan.
    """
    try:
        await PlayerService(db).delete_player(player_id)
    except PlayerNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
