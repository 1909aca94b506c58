"""Repositorio genérico de documentos (CRUD + conteo + referencias).

Todas las colecciones de recursos comparten esta capa. Las funciones reciben
la base (`db`) y el nombre de la colección; no hay estado global.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument

# Campos que nunca salen hacia el cliente
PRIVATE_FIELDS = {"password_hash", "refresh_token_hash"}

Sort = Sequence[Tuple[str, int]]


def utcnow() -> datetime:
    """UTC naive con precisión de milisegundos (como lo guarda Mongo)."""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Convierte a ObjectId; devuelve None si el valor no es un id válido."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def public(value: Any) -> Any:
    """Prepara un documento para la respuesta JSON.

    - `_id` pasa a `id` (str) y los ObjectId anidados a str.
    - Elimina campos privados (hashes).
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [public(v) for v in value]
    if isinstance(value, dict):
        out: Dict[str, Any] = {}
        if "_id" in value:
            out["id"] = str(value["_id"])
        for k, v in value.items():
            if k == "_id" or k in PRIVATE_FIELDS:
                continue
            out[k] = public(v)
        return out
    return value


async def insert(db, coll: str, doc: Dict[str, Any]) -> Dict[str, Any]:
    """Inserta con timestamps y devuelve el documento guardado."""
    data = {k: v for k, v in doc.items() if v is not None}
    now = utcnow()
    data.setdefault("created_at", now)
    data["updated_at"] = now
    res = await db[coll].insert_one(data)
    data["_id"] = res.inserted_id
    return data


async def get_by_id(db, coll: str, doc_id: Any, projection: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
    oid = to_object_id(doc_id)
    if oid is None:
        return None
    return await db[coll].find_one({"_id": oid}, projection)


async def find_one(db, coll: str, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    return await db[coll].find_one(query)


async def exists(db, coll: str, query: Dict[str, Any]) -> bool:
    return await db[coll].find_one(query, {"_id": 1}) is not None


async def update_by_id(
    db,
    coll: str,
    doc_id: Any,
    changes: Dict[str, Any],
    unset: Iterable[str] = (),
) -> Optional[Dict[str, Any]]:
    """Aplica `$set` (y `$unset` opcional) y devuelve el documento actualizado."""
    oid = to_object_id(doc_id)
    if oid is None:
        return None
    update: Dict[str, Any] = {"$set": {**changes, "updated_at": utcnow()}}
    unset = list(unset)
    if unset:
        update["$unset"] = {f: "" for f in unset}
    return await db[coll].find_one_and_update(
        {"_id": oid}, update, return_document=ReturnDocument.AFTER
    )


async def delete_by_id(db, coll: str, doc_id: Any) -> Optional[Dict[str, Any]]:
    """Elimina y devuelve el documento borrado (None si no existía)."""
    oid = to_object_id(doc_id)
    if oid is None:
        return None
    return await db[coll].find_one_and_delete({"_id": oid})


async def delete_many(db, coll: str, query: Dict[str, Any]) -> int:
    res = await db[coll].delete_many(query)
    return res.deleted_count


async def count(db, coll: str, query: Dict[str, Any]) -> int:
    return await db[coll].count_documents(query)


async def find_page(
    db,
    coll: str,
    query: Dict[str, Any],
    sort: Sort,
    skip: int = 0,
    limit: int = 0,
    projection: Optional[Dict[str, Any]] = None,
) -> List[Dict[str, Any]]:
    cursor = db[coll].find(query, projection)
    if sort:
        cursor = cursor.sort(list(sort))
    if skip:
        cursor = cursor.skip(skip)
    if limit:
        cursor = cursor.limit(limit)
    return await cursor.to_list(length=None)


async def find_by_ids(
    db,
    coll: str,
    ids: Iterable[ObjectId],
    extra: Optional[Dict[str, Any]] = None,
    projection: Optional[Dict[str, Any]] = None,
) -> Dict[ObjectId, Dict[str, Any]]:
    """Resuelve un conjunto de ids con una sola consulta `$in` (join-on-read)."""
    uniq = list({i for i in ids if isinstance(i, ObjectId)})
    if not uniq:
        return {}
    query: Dict[str, Any] = {"_id": {"$in": uniq}, **(extra or {})}
    docs = await db[coll].find(query, projection).to_list(length=None)
    return {d["_id"]: d for d in docs}


async def push_reference(db, coll: str, doc_id: ObjectId, field: str, value: ObjectId) -> None:
    await db[coll].update_one({"_id": doc_id}, {"$push": {field: value}})


async def pull_reference(db, coll: str, field: str, value: ObjectId, doc_id: Optional[ObjectId] = None) -> int:
    """Quita `value` del array `field` (en un documento o en toda la colección)."""
    query: Dict[str, Any] = {"_id": doc_id} if doc_id is not None else {field: value}
    res = await db[coll].update_many(query, {"$pull": {field: value}})
    return res.modified_count


async def unset_reference(db, coll: str, field: str, value: ObjectId) -> int:
    """Elimina la referencia simple `field == value` en toda la colección."""
    res = await db[coll].update_many({field: value}, {"$unset": {field: ""}})
    return res.modified_count
