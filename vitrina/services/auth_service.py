"""
Lógica de autenticación: registro, login de usuario, login de admin y
rotación del refresh token de admin.
"""
import logging
from typing import Any, Dict

from vitrina.api.schemas.auth import AdminLoginPayload, LoginPayload, RegisterPayload
from vitrina.core.exceptions import AuthorizationError, DuplicateError, ValidationError
from vitrina.repositories import auth_repo as repo
from vitrina.services.security import PasswordHasher
from vitrina.services.token_service import ROLE_ADMIN, ROLE_USER, TokenService

_log = logging.getLogger("vitrina.auth")


async def register_user(db, hasher: PasswordHasher, tokens: TokenService, payload: RegisterPayload) -> Dict[str, Any]:
    """
    Registra un usuario con email y/o teléfono.

    Si alguno de los dos ya existe no se crea nada ("User already exists").
    """
    if await repo.find_user_by_identity(db, email=payload.email, phone=payload.phone):
        raise DuplicateError("User already exists")
    user = await repo.insert_user(db, hasher, payload.model_dump(exclude_none=True))
    _log.info("Usuario registrado id=%s", user["_id"])
    return {"access_token": tokens.issue_access(user["_id"], ROLE_USER)}


async def login_user(db, hasher: PasswordHasher, tokens: TokenService, payload: LoginPayload) -> Dict[str, Any]:
    if not payload.email and not payload.phone:
        raise ValidationError("Invalid credentials")
    user = await repo.find_user_by_identity(db, email=payload.email, phone=payload.phone)
    if not user or not hasher.verify(payload.password, user.get("password_hash", "")):
        _log.info("Login de usuario fallido")
        raise ValidationError("Invalid credentials")
    return {"access_token": tokens.issue_access(user["_id"], ROLE_USER)}


async def login_admin(db, hasher: PasswordHasher, tokens: TokenService, payload: AdminLoginPayload) -> Dict[str, Any]:
    """
    Emite access + refresh para el admin. El refresh anterior queda
    invalidado porque solo se guarda el hash del último.
    """
    admin = await repo.find_admin_by_username(db, payload.username)
    if not admin or not hasher.verify(payload.password, admin.get("password_hash", "")):
        _log.info("Login de admin fallido username=%s", payload.username)
        raise ValidationError("Invalid credentials")
    access = tokens.issue_access(admin["_id"], ROLE_ADMIN)
    refresh = tokens.issue_refresh(admin["_id"])
    await repo.store_admin_refresh_token(db, admin["_id"], refresh)
    _log.info("Login de admin id=%s", admin["_id"])
    return {"access_token": access, "refresh_token": refresh}


async def refresh_admin_token(db, tokens: TokenService, raw_refresh: str) -> Dict[str, Any]:
    """
    Cambia un refresh token vigente por un nuevo access token de admin.

    - Firma inválida / expirado -> InvalidToken (401).
    - Firma válida pero no es el refresh actual del admin (rotado) -> 403.
    """
    claims = tokens.verify(raw_refresh, expected_type="refresh")
    admin = await repo.find_admin_by_refresh_token(db, claims["sub"], raw_refresh)
    if not admin:
        _log.warning("Refresh token rechazado sub=%s", claims["sub"])
        raise AuthorizationError("Invalid refresh token")
    return {"access_token": tokens.issue_access(admin["_id"], ROLE_ADMIN)}
