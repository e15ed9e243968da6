"""
ConfigRepository - documento único con las reglas de la liga
"""

from motor.motor_asyncio import AsyncIOMotorDatabase


class ConfigRepository:
    DOCUMENT_ID = "league"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["config"]

    async def get_raw(self) -> dict:
        """Config tal cual está guardada (sin defaults). {} si no existe"""
        doc = await self.collection.find_one({"_id": self.DOCUMENT_ID})
        if not doc:
            return {}
        doc.pop("_id", None)
        return doc

    async def save(self, data: dict) -> dict:
        """Reemplaza la config completa"""
        await self.collection.replace_one(
            {"_id": self.DOCUMENT_ID},
            {"_id": self.DOCUMENT_ID, **data},
            upsert=True
        )
        return data
