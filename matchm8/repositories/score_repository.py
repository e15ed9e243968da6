"""
ScoreRepository - tablas derivadas (puntos por jornada y totales de temporada)

Todo lo que se guarda aquí se puede regenerar desde predicciones + resultados.
"""

from datetime import datetime, timezone
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase


class ScoreRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.weekly = db["weekly_scores"]
        self.season_totals = db["season_totals"]

    # ============================================
    # 📌 WEEKLY
    # ============================================

    async def get_week_rows(self, season: int, week: int) -> Optional[list[dict]]:
        """Filas guardadas de la jornada, o None si nunca se calculó"""
        doc = await self.weekly.find_one({"_id": f"{season}:{week}"})
        return doc.get("rows", []) if doc else None

    async def save_week_rows(self, season: int, week: int, rows: list[dict]) -> None:
        await self.weekly.replace_one(
            {"_id": f"{season}:{week}"},
            {
                "_id": f"{season}:{week}",
                "season": season,
                "week": week,
                "rows": rows,
                "computed_at": datetime.now(timezone.utc),
            },
            upsert=True
        )

    async def delete_week_rows(self, season: int, week: int) -> bool:
        result = await self.weekly.delete_one({"_id": f"{season}:{week}"})
        return result.deleted_count > 0

    async def rename_player(self, player_id: str, name: str) -> int:
        """Actualiza el nombre del jugador en todas las tablas semanales guardadas"""
        result = await self.weekly.update_many(
            {"rows.player_id": player_id},
            {"$set": {"rows.$[row].name": name}},
            array_filters=[{"row.player_id": player_id}]
        )
        return result.modified_count

    async def get_all_weeks(self, season: int) -> dict[int, list[dict]]:
        """{week: rows} de todas las jornadas calculadas de la temporada"""
        cursor = self.weekly.find({"season": season}).sort("week", 1)
        docs = await cursor.to_list(length=None)
        return {int(doc["week"]): doc.get("rows", []) for doc in docs}

    # ============================================
    # 📌 SEASON TOTALS
    # ============================================

    async def get_season_totals(self, season: int) -> Optional[dict]:
        """Documento de totales ({rows, updated_at}) o None"""
        return await self.season_totals.find_one({"_id": season})

    async def save_season_totals(self, season: int, rows: list[dict]) -> datetime:
        updated_at = datetime.now(timezone.utc)
        await self.season_totals.replace_one(
            {"_id": season},
            {"_id": season, "season": season, "rows": rows, "updated_at": updated_at},
            upsert=True
        )
        return updated_at
