"""
Entry point de la API
"""

import logging
import re
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

from matchm8.core.config import get_settings
from matchm8.database import Database

from matchm8.controllers.auth_controller import router as auth_router
from matchm8.controllers.config_controller import router as config_router
from matchm8.controllers.players_controller import router as players_router
from matchm8.controllers.fixtures_controller import router as fixtures_router
from matchm8.controllers.locks_controller import router as locks_router
from matchm8.controllers.predictions_controller import router as predictions_router
from matchm8.controllers.results_controller import router as results_router
from matchm8.controllers.scores_controller import router as scores_router
from matchm8.controllers.leaderboard_controller import router as leaderboard_router
from matchm8.controllers.health_controller import router as health_router
from matchm8.controllers.admin_controller import router as admin_router

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

# Parse CORS origins
CORS_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",")]
CORS_ORIGIN_REGEX = re.compile(r"https://.*\.vercel\.app") if settings.app_env == "production" else None


def is_allowed_origin(origin: str) -> bool:
    """Check if origin is allowed by explicit list or regex pattern."""
    if not origin:
        return False
    if origin in CORS_ORIGINS:
        return True
    if CORS_ORIGIN_REGEX and CORS_ORIGIN_REGEX.match(origin):
        return True
    return False


class CORSMiddleware(BaseHTTPMiddleware):
    """
    CORS middleware that answers OPTIONS preflight before routing,
    so query validation on week/player_id never turns a preflight into a 422.
    """

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin", "")

        if request.method == "OPTIONS":
            if is_allowed_origin(origin):
                return Response(
                    status_code=200,
                    headers={
                        "Access-Control-Allow-Origin": origin,
                        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
                        "Access-Control-Allow-Headers": "Authorization, Content-Type, Accept, Origin",
                        "Access-Control-Allow-Credentials": "true",
                        "Access-Control-Max-Age": "86400",
                    }
                )
            return Response(status_code=403, content="Origin not allowed")

        response = await call_next(request)

        if is_allowed_origin(origin):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Credentials"] = "true"

        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Database.connect()
    yield
    await Database.disconnect()

# Creo la app
app = FastAPI(
    title="MatchM8 API",
    description="Backend de la liga de predicciones de fútbol: cierres, puntos y clasificaciones",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(CORSMiddleware)

# Agrego todos los routers de los controllers al app
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(config_router)
app.include_router(players_router)
app.include_router(fixtures_router)
app.include_router(locks_router)
app.include_router(predictions_router)
app.include_router(results_router)
app.include_router(scores_router)
app.include_router(leaderboard_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que la API está levantada
    return {
        "name": "MatchM8 API",
        "version": "1.0.0",
        "docs": "/docs"
    }
