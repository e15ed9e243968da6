"""
🎯 PredictionRepository - predicciones de los jugadores

Un documento por partido predicho.
ID compuesto: season:week:player_id:fixture_id

Guardar una predicción es un upsert por partido, así que reenviar solo
algunos partidos no borra los demás.
"""

from datetime import datetime

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import UpdateOne

from matchm8.models.prediction import Prediction


class PredictionRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["predictions"]

    @staticmethod
    def prediction_id(season: int, week: int, player_id: str, fixture_id: str) -> str:
        return f"{season}:{week}:{player_id}:{fixture_id}"

    # ============================================
    # 📌 READ
    # ============================================

    async def get_week(self, season: int, week: int) -> list[dict]:
        """Todas las predicciones de la jornada (todos los jugadores)"""
        cursor = self.collection.find({"season": season, "week": week})
        return await cursor.to_list(length=None)

    async def get_player_week(self, season: int, week: int, player_id: str) -> list[dict]:
        cursor = self.collection.find({
            "season": season,
            "week": week,
            "player_id": player_id
        }).sort("fixture_id", 1)
        return await cursor.to_list(length=None)

    # ============================================
    # 📌 UPSERT
    # ============================================

    async def upsert_many(
        self,
        season: int,
        week: int,
        player_id: str,
        predictions: list[Prediction],
        saved_at: datetime
    ) -> int:
        """
        Upsert por partido (last write wins). Devuelve cuántos se escribieron.
        """
        if not predictions:
            return 0

        operations = [
            UpdateOne(
                {"_id": self.prediction_id(season, week, player_id, p.fixture_id)},
                {
                    "$set": {
                        "season": season,
                        "week": week,
                        "player_id": player_id,
                        "fixture_id": p.fixture_id,
                        "home": p.home,
                        "away": p.away,
                        "saved_at": saved_at,
                    }
                },
                upsert=True
            )
            for p in predictions
        ]

        await self.collection.bulk_write(operations, ordered=False)
        return len(operations)

    # ============================================
    # 📌 DELETE
    # ============================================

    async def delete_week(self, season: int, week: int) -> int:
        """Borra las predicciones de la jornada de todos los jugadores"""
        result = await self.collection.delete_many({"season": season, "week": week})
        return result.deleted_count
