"""
📅 FixtureRepository - partidos por temporada/jornada

Un documento por jornada; una nueva importación reemplaza la jornada entera.
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase


class FixtureRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["fixtures"]

    @staticmethod
    def week_id(season: int, week: int) -> str:
        return f"{season}:{week}"

    async def get_week(self, season: int, week: int) -> Optional[list[dict]]:
        """Lista de partidos guardada, o None si la jornada no existe"""
        doc = await self.collection.find_one({"_id": self.week_id(season, week)})
        return doc.get("fixtures", []) if doc else None

    async def replace_week(self, season: int, week: int, fixtures: list[dict]) -> int:
        await self.collection.replace_one(
            {"_id": self.week_id(season, week)},
            {
                "_id": self.week_id(season, week),
                "season": season,
                "week": week,
                "fixtures": fixtures,
                "imported_at": datetime.now(timezone.utc),
            },
            upsert=True
        )
        return len(fixtures)
