"""
PlayerService - player directory.

Season totals list every player in the directory, so renames and removals
rebuild them for the current season.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from matchm8.models import Player, PlayerCreate, PlayerUpdate
from matchm8.repositories.player_repository import PlayerRepository
from matchm8.repositories.score_repository import ScoreRepository
from matchm8.services.config_service import ConfigService
from matchm8.services.leaderboard_service import LeaderboardService

logger = logging.getLogger(__name__)


class PlayerServiceError(Exception):
    """Base exception for player service errors."""
    pass


class PlayerAlreadyExistsError(PlayerServiceError):
    """Raised when creating a player whose id is already taken."""
    pass


class PlayerNotFoundError(PlayerServiceError):
    """Raised when updating or deleting a player not in the directory."""
    pass


class PlayerService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.player_repo = PlayerRepository(db)
        self.score_repo = ScoreRepository(db)
        self.config_service = ConfigService(db)
        self.leaderboard_service = LeaderboardService(db)

    async def list_players(self) -> list[Player]:
        return await self.player_repo.get_all()

    async def create_player(self, player_data: PlayerCreate) -> Player:
        try:
            return await self.player_repo.create(player_data)
        except ValueError as e:
            raise PlayerAlreadyExistsError(str(e))

    async def update_player(self, player_id: str, changes: PlayerUpdate) -> Player:
        """
        Rename a player and/or change their email.

        A new name is written into the stored weekly tables too, so the
        rebuilt season totals show it.
        """
        player = await self.player_repo.update(player_id, changes)
        if player is None:
            raise PlayerNotFoundError(f"Player {player_id} not found")

        if changes.name is not None:
            renamed = await self.score_repo.rename_player(player_id, player.name)
            config = await self.config_service.get_config()
            await self.leaderboard_service.rebuild_season_totals(config.season)
            logger.info(f"✏️ Player {player_id} renamed to {player.name} ({renamed} weekly tables)")

        return player

    async def delete_player(self, player_id: str) -> None:
        """
        Remove a player from the directory.

        Their predictions and stored weekly rows stay; only the zero row the
        directory added to the season totals goes away.
        """
        if not await self.player_repo.delete(player_id):
            raise PlayerNotFoundError(f"Player {player_id} not found")

        config = await self.config_service.get_config()
        await self.leaderboard_service.rebuild_season_totals(config.season)
        logger.info(f"🗑️ Player {player_id} removed")
