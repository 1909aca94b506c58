"""Persistencia de credenciales (colecciones `user` y `admin`).

Toda escritura que lleve `password` en texto plano pasa por
`PasswordHasher.apply_password` antes de llegar a Mongo.
"""
from __future__ import annotations

import hashlib
from typing import Any, Dict, Optional

from vitrina.repositories import resource_repo as base
from vitrina.services.security import PasswordHasher

USER_COLL = "user"
ADMIN_COLL = "admin"


def hash_refresh_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _identity_query(email: Optional[str], phone: Optional[str]) -> Optional[Dict[str, Any]]:
    clauses = []
    if email:
        clauses.append({"email": email})
    if phone:
        clauses.append({"phone": phone})
    if not clauses:
        return None
    return {"$or": clauses}


# --- user ---

async def find_user_by_identity(db, *, email: Optional[str] = None, phone: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Busca usuario por email o teléfono (cualquiera de los dos)."""
    query = _identity_query(email, phone)
    if query is None:
        return None
    return await base.find_one(db, USER_COLL, query)


async def identity_taken(db, coll: str, *, email: Optional[str], phone: Optional[str], exclude_id=None) -> bool:
    query = _identity_query(email, phone)
    if query is None:
        return False
    if exclude_id is not None:
        query = {"$and": [query, {"_id": {"$ne": exclude_id}}]}
    return await base.exists(db, coll, query)


async def insert_user(db, hasher: PasswordHasher, data: Dict[str, Any]) -> Dict[str, Any]:
    doc = hasher.apply_password(dict(data))
    doc["role"] = "user"
    return await base.insert(db, USER_COLL, doc)


async def get_user_by_id(db, user_id: Any) -> Optional[Dict[str, Any]]:
    return await base.get_by_id(db, USER_COLL, user_id)


async def update_user(db, hasher: PasswordHasher, user_id: Any, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return await base.update_by_id(db, USER_COLL, user_id, hasher.apply_password(dict(changes)))


async def delete_user(db, user_id: Any) -> Optional[Dict[str, Any]]:
    return await base.delete_by_id(db, USER_COLL, user_id)


# --- admin ---

async def any_admin(db) -> bool:
    return await base.exists(db, ADMIN_COLL, {})


async def find_admin_by_username(db, username: str) -> Optional[Dict[str, Any]]:
    return await base.find_one(db, ADMIN_COLL, {"username": username})


async def get_admin_by_id(db, admin_id: Any) -> Optional[Dict[str, Any]]:
    return await base.get_by_id(db, ADMIN_COLL, admin_id)


async def insert_admin(db, hasher: PasswordHasher, data: Dict[str, Any]) -> Dict[str, Any]:
    doc = hasher.apply_password(dict(data))
    doc["role"] = "admin"
    return await base.insert(db, ADMIN_COLL, doc)


async def update_admin(db, hasher: PasswordHasher, admin_id: Any, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return await base.update_by_id(db, ADMIN_COLL, admin_id, hasher.apply_password(dict(changes)))


async def delete_admin(db, admin_id: Any) -> Optional[Dict[str, Any]]:
    """Borra el admin; su refresh token (hash) vive en el mismo documento y se va con él."""
    return await base.delete_by_id(db, ADMIN_COLL, admin_id)


async def store_admin_refresh_token(db, admin_id: Any, raw_token: str) -> None:
    """Guarda el hash del refresh token, reemplazando el anterior (uno activo por admin)."""
    now = base.utcnow()
    await db[ADMIN_COLL].update_one(
        {"_id": base.to_object_id(admin_id)},
        {"$set": {"refresh_token_hash": hash_refresh_token(raw_token), "last_visit": now, "updated_at": now}},
    )


async def find_admin_by_refresh_token(db, admin_id: Any, raw_token: str) -> Optional[Dict[str, Any]]:
    oid = base.to_object_id(admin_id)
    if oid is None:
        return None
    return await base.find_one(db, ADMIN_COLL, {"_id": oid, "refresh_token_hash": hash_refresh_token(raw_token)})
