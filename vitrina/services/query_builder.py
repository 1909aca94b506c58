"""
Query builder compartido por todos los listados.

Traduce las opciones reconocidas de un listado (`ListQuery`) a filtro, orden y
ventana de paginación de Mongo, ejecuta la página junto con el conteo total y
resuelve las referencias (populate) de los resultados.

Solo las opciones presentes restringen el resultado.
"""
from __future__ import annotations

import asyncio
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId

from vitrina.core.exceptions import ValidationError
from vitrina.repositories import resource_repo as repo
from vitrina.services.resources import RefSpec, Resource

ASC, DESC = 1, -1

_TRUE = {"true", "1", "yes"}
_FALSE = {"false", "0", "no"}


@dataclass
class ListQuery:
    is_active: Optional[bool] = None
    status: Optional[str] = None
    search: Optional[str] = None
    # campo del documento -> ids
    refs: Dict[str, List[ObjectId]] = field(default_factory=dict)
    # campo del documento -> (desde, hasta), cada extremo opcional
    date_ranges: Dict[str, Tuple[Optional[datetime], Optional[datetime]]] = field(default_factory=dict)
    sort_rate: Optional[str] = None
    sort_by_created_at: str = "desc"
    page: int = 1
    limit: int = 10

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


# --- parsing en el borde de la petición ---

def parse_bool(value: Optional[str], name: str = "isActive") -> Optional[bool]:
    """'true'/'false' (y 1/0, yes/no) -> bool. Vacío -> None. Otro valor -> 400."""
    if value is None or str(value).strip() == "":
        return None
    v = str(value).strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ValidationError(f"{name} must be true or false")


def parse_ids(value: Optional[str], name: str) -> List[ObjectId]:
    """Lista separada por comas -> ObjectIds. Un id inválido -> 400."""
    if not value:
        return []
    ids: List[ObjectId] = []
    for raw in value.split(","):
        raw = raw.strip()
        if not raw:
            continue
        oid = repo.to_object_id(raw)
        if oid is None:
            raise ValidationError(f"Invalid id in {name}: {raw}")
        ids.append(oid)
    return ids


def naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def parse_datetime(value: Optional[str], name: str) -> Optional[datetime]:
    """ISO-8601 (fecha o fecha-hora, 'Z' permitido) -> datetime UTC naive."""
    if value is None or str(value).strip() == "":
        return None
    raw = str(value).strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return naive_utc(datetime.fromisoformat(raw))
    except ValueError:
        raise ValidationError(f"Invalid date in {name}: {value}")


def parse_direction(value: Optional[str], default: str) -> str:
    v = (value or "").strip().lower()
    if not v:
        return default
    return "desc" if v == "desc" else "asc"


# --- construcción de la consulta ---

def build_filter(query: ListQuery, resource: Resource) -> Dict[str, Any]:
    filtro: Dict[str, Any] = {}
    if query.is_active is not None and resource.has_is_active:
        filtro["is_active"] = query.is_active
    if query.status and resource.has_status:
        filtro["status"] = query.status
    for fld, ids in query.refs.items():
        if ids:
            filtro[fld] = {"$in": ids}
    for fld, (start, end) in query.date_ranges.items():
        bounds: Dict[str, Any] = {}
        if start is not None:
            bounds["$gte"] = start
        if end is not None:
            bounds["$lte"] = end
        if bounds:
            filtro[fld] = bounds
    search = (query.search or "").strip()
    if search and resource.searchable:
        # OR explícito por campo: cada idioma/campo es una alternativa
        pattern = re.escape(search)
        filtro["$or"] = [
            {fld: {"$regex": pattern, "$options": "i"}} for fld in resource.searchable
        ]
    return filtro


def build_sort(query: ListQuery, resource: Resource) -> List[Tuple[str, int]]:
    created = ASC if query.sort_by_created_at == "asc" else DESC
    sort: List[Tuple[str, int]] = []
    if resource.rate_sortable and query.sort_rate:
        sort.append(("rate", DESC if query.sort_rate == "desc" else ASC))
    sort.append(("created_at", created))
    sort.append(("_id", created))
    return sort


# --- ejecución ---

async def populate(db, docs: List[Dict[str, Any]], refs: Sequence[RefSpec]) -> List[Dict[str, Any]]:
    """Resuelve referencias (join-on-read) con una consulta `$in` por campo.

    Las referencias a documentos inactivos o inexistentes se descartan
    (las simples quedan en None).
    """
    for ref in refs:
        ids: List[ObjectId] = []
        for d in docs:
            val = d.get(ref.field)
            if ref.many:
                ids.extend(v for v in (val or []) if isinstance(v, ObjectId))
            elif isinstance(val, ObjectId):
                ids.append(val)
        if not ids:
            continue
        projection = {k: 1 for k in ref.display}
        extra = {"is_active": True} if ref.active_only else None
        found = await repo.find_by_ids(db, ref.collection, ids, extra=extra, projection=projection)
        for d in docs:
            val = d.get(ref.field)
            if ref.many:
                d[ref.field] = [found[v] for v in (val or []) if v in found]
            elif val is not None:
                d[ref.field] = found.get(val)
    return docs


async def run_page(db, resource: Resource, query: ListQuery) -> Dict[str, Any]:
    """Página ordenada + conteo total (independiente de la ventana)."""
    filtro = build_filter(query, resource)
    docs, total = await asyncio.gather(
        repo.find_page(
            db,
            resource.collection,
            filtro,
            build_sort(query, resource),
            skip=query.skip,
            limit=query.limit,
        ),
        repo.count(db, resource.collection, filtro),
    )
    if resource.populate:
        docs = await populate(db, docs, resource.populate)
    return {
        "count": total,
        "page": query.page,
        "limit": query.limit,
        "pages": math.ceil(total / query.limit) if query.limit else 0,
        "items": [repo.public(d) for d in docs],
    }
