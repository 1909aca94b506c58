"""Rutas de autenticación: registro, login (usuario/admin), refresh y perfil actual."""
from fastapi import APIRouter, Depends, Request

from vitrina.api.deps import get_current_subject, get_hasher, get_tokens, throttle
from vitrina.api.schemas.auth import (
    AdminLoginPayload,
    AdminTokenOut,
    LoginPayload,
    RefreshPayload,
    RegisterPayload,
    TokenOut,
)
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import auth_service as service
from vitrina.services import user_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=TokenOut,
    summary="Registrar usuario",
    description="Crea un usuario con email y/o teléfono y devuelve su access token.",
)
async def register(payload: RegisterPayload, db=Depends(get_db), hasher=Depends(get_hasher), tokens=Depends(get_tokens)):
    res = await service.register_user(db, hasher, tokens, payload)
    return TokenOut(**res)


@router.post(
    "/login",
    response_model=TokenOut,
    dependencies=[Depends(throttle)],
    summary="Login de usuario",
    description="Email o teléfono + contraseña. Limitado por IP.",
)
async def login(payload: LoginPayload, db=Depends(get_db), hasher=Depends(get_hasher), tokens=Depends(get_tokens)):
    res = await service.login_user(db, hasher, tokens, payload)
    return TokenOut(**res)


@router.post(
    "/login/admin",
    response_model=AdminTokenOut,
    dependencies=[Depends(throttle)],
    summary="Login de admin",
    description="Emite access + refresh token. El refresh anterior queda invalidado.",
)
async def login_admin(payload: AdminLoginPayload, db=Depends(get_db), hasher=Depends(get_hasher), tokens=Depends(get_tokens)):
    res = await service.login_admin(db, hasher, tokens, payload)
    return AdminTokenOut(**res)


@router.post(
    "/refresh-token",
    response_model=TokenOut,
    summary="Nuevo access token de admin",
    description="Cambia el refresh token vigente del admin por un nuevo access token.",
)
async def refresh(payload: RefreshPayload, db=Depends(get_db), tokens=Depends(get_tokens)):
    res = await service.refresh_admin_token(db, tokens, payload.refresh_token)
    return TokenOut(**res)


@router.get(
    "/me",
    response_model=dict,
    summary="Perfil del sujeto autenticado",
)
async def me(request: Request, subject_id: str = Depends(get_current_subject), db=Depends(get_db)):
    return await user_service.get_me(db, subject_id, request.state.role)
