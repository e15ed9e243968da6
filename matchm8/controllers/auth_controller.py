"""
Controlador de autenticación - Login de administrador
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from matchm8.core.dependencies import CurrentAdmin
from matchm8.core.security import AdminAuthError, create_access_token, verify_admin_key

router = APIRouter(prefix="/auth", tags=["auth"])


# Cuerpo del login de admin
class AdminLoginRequest(BaseModel):
    admin_key: str


# Respuesta con JWT
class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post("/admin", response_model=AuthResponse)
async def admin_login(request: AdminLoginRequest):
    """
    Intercambia la clave de admin (ADMIN_KEY) por un JWT.

    El token se envía luego en la cabecera `Authorization: Bearer <token>`
    para importar partidos, cargar resultados, cambiar la config y calcular puntos.
    """
    try:
        verify_admin_key(request.admin_key)
    except AdminAuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e)
        )

    return AuthResponse(access_token=create_access_token("admin"))


@router.get("/me")
async def get_current_admin_info(admin: CurrentAdmin):
    """
    Devuelve el payload del token de admin actual.
    """
    return {"sub": admin.get("sub"), "role": admin.get("role")}
