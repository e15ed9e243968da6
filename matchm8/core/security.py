"""
Seguridad: tokens JWT para administradores
"""

import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from matchm8.core.config import get_settings

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"


class AdminAuthError(Exception):
    """Se lanza cuando la clave de admin no es válida"""
    pass


def verify_admin_key(provided: str) -> None:
    """
    Compara la clave recibida con ADMIN_KEY.

    Si ADMIN_KEY no está configurada, nadie puede entrar como admin.
    """
    settings = get_settings()
    expected = settings.admin_key or ""

    if not expected or not hmac.compare_digest(str(provided or ""), expected):
        logger.warning("❌ Intento de login de admin con clave inválida")
        raise AdminAuthError("Clave de admin inválida")


def create_access_token(subject: str, role: str = ADMIN_ROLE) -> str:
    """
    Crea un JWT para requests autenticados de admin
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)

    payload = {
        "sub": subject,
        "role": role,
        "exp": now + timedelta(minutes=settings.jwt_expire_minutes),
        "iat": now,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decodifica y valida un JWT

    Retorna el payload si es válido, None si está expirado o corrupto
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None
