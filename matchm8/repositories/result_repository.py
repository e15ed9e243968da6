"""
ResultRepository - resultados reales, uno por partido

Un upsert sobre el mismo partido corrige el resultado anterior.
"""

from datetime import datetime
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument


class ResultRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["results"]

    @staticmethod
    def result_id(season: int, week: int, fixture_id: str) -> str:
        return f"{season}:{week}:{fixture_id}"

    async def get_week(self, season: int, week: int) -> list[dict]:
        cursor = self.collection.find({"season": season, "week": week})
        return await cursor.to_list(length=None)

    async def get(self, season: int, week: int, fixture_id: str) -> Optional[dict]:
        return await self.collection.find_one({"_id": self.result_id(season, week, fixture_id)})

    async def upsert(
        self,
        season: int,
        week: int,
        fixture_id: str,
        home: int,
        away: int,
        updated_at: datetime
    ) -> dict:
        return await self.collection.find_one_and_update(
            {"_id": self.result_id(season, week, fixture_id)},
            {
                "$set": {
                    "season": season,
                    "week": week,
                    "fixture_id": fixture_id,
                    "home": home,
                    "away": away,
                    "updated_at": updated_at,
                }
            },
            upsert=True,
            return_document=ReturnDocument.AFTER
        )

    async def delete(self, season: int, week: int, fixture_id: str) -> bool:
        result = await self.collection.delete_one({"_id": self.result_id(season, week, fixture_id)})
        return result.deleted_count > 0

    async def delete_week(self, season: int, week: int) -> int:
        result = await self.collection.delete_many({"season": season, "week": week})
        return result.deleted_count
