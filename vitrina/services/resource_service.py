"""
Servicio genérico de recursos: validación de nombre, unicidad, conversión de
referencias, CRUD y cascadas al borrar.

Los routers pasan el descriptor (`Resource`) y el payload ya validado por
Pydantic; aquí se aplican las reglas de negocio compartidas.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId

from vitrina.core.exceptions import DuplicateError, NotFoundError, ValidationError
from vitrina.repositories import resource_repo as repo
from vitrina.services.query_builder import ListQuery, naive_utc, populate, run_page
from vitrina.services.resources import Resource

_log = logging.getLogger("vitrina.resources")


def _name_query(name: Dict[str, Any], exclude_id: Optional[ObjectId] = None) -> Optional[Dict[str, Any]]:
    clauses = [{f"name.{lang}": v} for lang, v in name.items() if v]
    if not clauses:
        return None
    query: Dict[str, Any] = {"$or": clauses}
    if exclude_id is not None:
        query = {"$and": [query, {"_id": {"$ne": exclude_id}}]}
    return query


def _require_name(resource: Resource, data: Dict[str, Any]) -> Dict[str, Any]:
    name = data.get("name") or {}
    if not any(name.values()):
        raise ValidationError(f"{resource.label} name is required")
    return name


def _convert_refs(resource: Resource, data: Dict[str, Any]) -> Dict[str, Any]:
    """Convierte ids de referencia (str) a ObjectId; id inválido -> 400."""
    for fld, (_, many) in resource.write_refs.items():
        if fld not in data or data[fld] is None:
            continue
        values = data[fld] if many else [data[fld]]
        oids = []
        for v in values:
            oid = repo.to_object_id(v)
            if oid is None:
                raise ValidationError(f"Invalid id in {fld}: {v}")
            oids.append(oid)
        data[fld] = oids if many else oids[0]
    return data


def _normalize_dates(data: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in data.items():
        if isinstance(v, datetime):
            data[k] = naive_utc(v)
    return data


async def _load(db, resource: Resource, doc_id: Any) -> Dict[str, Any]:
    doc = await repo.get_by_id(db, resource.collection, doc_id)
    if not doc:
        raise NotFoundError(resource.not_found())
    return doc


async def create(db, resource: Resource, data: Dict[str, Any]) -> Dict[str, Any]:
    data = _normalize_dates(_convert_refs(resource, dict(data)))
    if resource.unique_name:
        name = _require_name(resource, data)
        if await repo.exists(db, resource.collection, _name_query(name)):
            raise DuplicateError(f"{resource.label} already exists")
    doc = await repo.insert(db, resource.collection, data)
    _log.info("%s creado id=%s", resource.label, doc["_id"])
    return repo.public(doc)


async def get(db, resource: Resource, doc_id: Any) -> Dict[str, Any]:
    doc = await _load(db, resource, doc_id)
    if resource.populate:
        await populate(db, [doc], resource.populate)
    return repo.public(doc)


async def list_page(db, resource: Resource, query: ListQuery) -> Dict[str, Any]:
    return await run_page(db, resource, query)


async def update(db, resource: Resource, doc_id: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
    """Actualización parcial: solo los campos presentes en `changes`."""
    current = await _load(db, resource, doc_id)
    changes = _normalize_dates(_convert_refs(resource, dict(changes)))
    if resource.unique_name:
        name = _require_name(resource, changes)
        if await repo.exists(db, resource.collection, _name_query(name, exclude_id=current["_id"])):
            raise DuplicateError(f"{resource.label} already exists")
    if not changes:
        return repo.public(current)
    doc = await repo.update_by_id(db, resource.collection, current["_id"], changes)
    if not doc:
        raise NotFoundError(resource.not_found())
    return repo.public(doc)


async def _run_cascades(db, resource: Resource, oid: ObjectId) -> None:
    # Secuencial y best-effort: sin transacciones ni rollback
    for c in resource.cascades:
        if c.action == "unset":
            n = await repo.unset_reference(db, c.collection, c.field, oid)
        elif c.action == "pull":
            n = await repo.pull_reference(db, c.collection, c.field, oid)
        else:
            n = await repo.delete_many(db, c.collection, {c.field: oid})
        if n:
            _log.info("Cascada %s %s.%s afectó %s documentos", c.action, c.collection, c.field, n)


async def delete(db, resource: Resource, doc_id: Any) -> Dict[str, Any]:
    doc = await repo.delete_by_id(db, resource.collection, doc_id)
    if not doc:
        raise NotFoundError(resource.not_found())
    await _run_cascades(db, resource, doc["_id"])
    _log.info("%s eliminado id=%s", resource.label, doc["_id"])
    return doc


async def list_active(db, resource: Resource, extra: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    """Todos los documentos activos (sin paginar), más nuevos primero."""
    query = {"is_active": True, **(extra or {})}
    return await repo.find_page(db, resource.collection, query, [("created_at", -1), ("_id", -1)])
