"""
Perfiles de usuario y administración de admins.

Las operaciones de escritura sobre un perfil solo las puede hacer su dueño.
"""
import logging
from typing import Any, Dict

from vitrina.api.schemas.auth import PASSWORD_MIN_LENGTH
from vitrina.core.exceptions import AuthorizationError, DuplicateError, NotFoundError, ValidationError
from vitrina.repositories import auth_repo as repo
from vitrina.repositories.resource_repo import public
from vitrina.services.security import PasswordHasher

_log = logging.getLogger("vitrina.auth")


def _ensure_owner(subject_id: str, doc: Dict[str, Any]) -> None:
    if str(doc["_id"]) != str(subject_id):
        raise AuthorizationError("Access denied")


# --- user ---

async def get_user(db, user_id: str) -> Dict[str, Any]:
    user = await repo.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    return public(user)


async def update_user(db, hasher: PasswordHasher, subject_id: str, user_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    user = await repo.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    _ensure_owner(subject_id, user)
    if await repo.identity_taken(
        db, repo.USER_COLL, email=changes.get("email"), phone=changes.get("phone"), exclude_id=user["_id"]
    ):
        raise DuplicateError("User already exists")
    if not changes:
        return public(user)
    updated = await repo.update_user(db, hasher, user["_id"], changes)
    return public(updated)


async def delete_user(db, subject_id: str, user_id: str) -> None:
    user = await repo.get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    _ensure_owner(subject_id, user)
    await repo.delete_user(db, user["_id"])
    _log.info("Usuario eliminado id=%s", user["_id"])


# --- admin ---

ADMIN_REQUIRED = ("username", "fullname", "phone", "password")


async def create_admin(db, hasher: PasswordHasher, data: Dict[str, Any]) -> Dict[str, Any]:
    if any(not data.get(f) for f in ADMIN_REQUIRED):
        raise ValidationError("All fields are required")
    if len(data["password"]) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if await repo.find_admin_by_username(db, data["username"]):
        raise DuplicateError("Admin already exists")
    if await repo.identity_taken(db, repo.ADMIN_COLL, email=data.get("email"), phone=data.get("phone")):
        raise DuplicateError("Admin already exists")
    admin = await repo.insert_admin(db, hasher, data)
    _log.info("Admin creado id=%s username=%s", admin["_id"], admin["username"])
    return public(admin)


async def get_admin(db, admin_id: str) -> Dict[str, Any]:
    admin = await repo.get_admin_by_id(db, admin_id)
    if not admin:
        raise NotFoundError("Admin not found")
    return public(admin)


async def update_admin(db, hasher: PasswordHasher, subject_id: str, admin_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    admin = await repo.get_admin_by_id(db, admin_id)
    if not admin:
        raise NotFoundError("Admin not found")
    _ensure_owner(subject_id, admin)
    username = changes.get("username")
    if username and username != admin["username"] and await repo.find_admin_by_username(db, username):
        raise DuplicateError("Admin already exists")
    if await repo.identity_taken(
        db, repo.ADMIN_COLL, email=changes.get("email"), phone=changes.get("phone"), exclude_id=admin["_id"]
    ):
        raise DuplicateError("Admin already exists")
    if not changes:
        return public(admin)
    updated = await repo.update_admin(db, hasher, admin["_id"], changes)
    return public(updated)


async def delete_admin(db, subject_id: str, admin_id: str) -> None:
    admin = await repo.get_admin_by_id(db, admin_id)
    if not admin:
        raise NotFoundError("Admin not found")
    _ensure_owner(subject_id, admin)
    await repo.delete_admin(db, admin["_id"])
    _log.info("Admin eliminado id=%s", admin["_id"])


async def get_me(db, subject_id: str, role: str) -> Dict[str, Any]:
    """Perfil del sujeto autenticado (user o admin según el rol del token)."""
    if role == "admin":
        doc = await repo.get_admin_by_id(db, subject_id)
    else:
        doc = await repo.get_user_by_id(db, subject_id)
    if not doc:
        raise NotFoundError("User not found")
    return public(doc)
