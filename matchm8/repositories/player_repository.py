"""
PlayerRepository - directorio de jugadores (id -> nombre)
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from matchm8.models.player import Player, PlayerCreate, PlayerUpdate


class PlayerRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["players"]

    async def get_all(self) -> list[Player]:
        cursor = self.collection.find({}).sort("name", 1)
        docs = await cursor.to_list(length=None)
        return [Player(**doc) for doc in docs]

    async def get_by_id(self, player_id: str) -> Optional[Player]:
        doc = await self.collection.find_one({"_id": player_id})
        return Player(**doc) if doc else None

    async def get_directory(self) -> dict[str, str]:
        """{player_id: name} de todos los jugadores"""
        cursor = self.collection.find({}, {"name": 1})
        docs = await cursor.to_list(length=None)
        return {str(doc["_id"]): doc.get("name") or "" for doc in docs}

    async def create(self, player_data: PlayerCreate) -> Player:
        doc = {
            "_id": player_data.id,
            "name": player_data.name,
            "email": player_data.email,
            "is_active": True,
            "created_at": datetime.now(timezone.utc),
        }

        try:
            await self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ValueError(f"Player {player_data.id} already exists")

        return Player(**doc)

    async def update(self, player_id: str, changes: PlayerUpdate) -> Optional[Player]:
        """Aplica los campos enviados; None si el jugador no existe"""
        set_fields = {}
        unset_fields = {}

        if changes.name is not None:
            set_fields["name"] = changes.name.strip()
        if changes.email is not None:
            email = changes.email.strip()
            if email:
                set_fields["email"] = email
            else:
                unset_fields["email"] = ""

        update = {}
        if set_fields:
            update["$set"] = set_fields
        if unset_fields:
            update["$unset"] = unset_fields

        if not update:
            return await self.get_by_id(player_id)

        doc = await self.collection.find_one_and_update(
            {"_id": player_id},
            update,
            return_document=ReturnDocument.AFTER
        )
        return Player(**doc) if doc else None

    async def delete(self, player_id: str) -> bool:
        result = await self.collection.delete_one({"_id": player_id})
        return result.deleted_count > 0

    async def exists(self, player_id: str) -> bool:
        count = await self.collection.count_documents({"_id": player_id}, limit=1)
        return count > 0
