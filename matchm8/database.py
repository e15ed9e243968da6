"""
🔌 Database Connection Setup - MongoDB

Configuración centralizada para conectar a MongoDB
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from matchm8.core.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """Singleton para la conexión a MongoDB"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls):
        """Conecta a MongoDB"""
        if cls.client is None:
            settings = get_settings()

            if not settings.mongodb_uri:
                raise ValueError("MONGODB_URI not found in environment variables")

            cls.client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
                tz_aware=True,
            )
            cls.db = cls.client[settings.mongodb_db_name]

            # Test de conexión
            await cls.client.admin.command("ping")
            logger.info(f"✅ Connected to MongoDB: {settings.mongodb_db_name}")

    @classmethod
    async def disconnect(cls):
        """Cierra la conexión"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("❌ Disconnected from MongoDB")

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Retorna la instancia de la base de datos"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


# ============================================
# 🎯 DEPENDENCY para FastAPI
# ============================================

async def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency para inyectar la DB

    Uso:
        @router.get("/locks")
        async def get_locks(week: int, db: Database):
            return await LockService(db).get_lock_status(week)
    """
    return Database.get_db()


# ============================================
# 🏗️ CREAR ÍNDICES (run once al deployment)
# ============================================

async def create_indexes():
    """
    Crea los índices necesarios para las queries por temporada/jornada

    Llamar una vez al hacer deploy o en un script de inicialización
    """
    db = Database.get_db()

    # Fixtures: un documento por temporada:jornada
    await db.fixtures.create_index([("season", 1), ("week", 1)], unique=True)

    # Predicciones: un documento por temporada:jornada:jugador:partido
    await db.predictions.create_index([("season", 1), ("week", 1)])
    await db.predictions.create_index([("season", 1), ("week", 1), ("player_id", 1)])
    await db.predictions.create_index(
        [("season", 1), ("week", 1), ("player_id", 1), ("fixture_id", 1)],
        unique=True
    )

    # Resultados: uno por partido
    await db.results.create_index([("season", 1), ("week", 1)])
    await db.results.create_index(
        [("season", 1), ("week", 1), ("fixture_id", 1)],
        unique=True
    )

    # Tablas derivadas
    await db.weekly_scores.create_index([("season", 1), ("week", 1)], unique=True)
    await db.season_totals.create_index("season", unique=True)

    # Jugadores
    await db.players.create_index("name")

    logger.info("✅ Indexes created successfully")
