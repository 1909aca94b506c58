"""
Bootstrap de la base Mongo: asegura colecciones e índices mínimos.
Se ejecuta al inicio de la app. No tumba la app si algo falla; deja warnings.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from pymongo.errors import PyMongoError

_log = logging.getLogger("vitrina.mongo.bootstrap")

# Índices por colección. `sparse` permite varios documentos sin el campo
# (teléfono/email opcionales); nunca se guardan campos con valor None.
INDEXES: Dict[str, List[Dict[str, Any]]] = {
    "user": [
        {"keys": [("email", 1)], "unique": True, "sparse": True, "name": "uniq_email"},
        {"keys": [("phone", 1)], "unique": True, "sparse": True, "name": "uniq_phone"},
    ],
    "admin": [
        {"keys": [("username", 1)], "unique": True, "name": "uniq_username"},
        {"keys": [("email", 1)], "unique": True, "sparse": True, "name": "uniq_email"},
        {"keys": [("phone", 1)], "unique": True, "sparse": True, "name": "uniq_phone"},
    ],
    "post": [
        {"keys": [("published_at", -1)], "name": "ix_published_at"},
        {"keys": [("is_active", 1), ("status", 1)], "name": "ix_active_status"},
    ],
    "comment": [
        {"keys": [("post", 1)], "name": "ix_post"},
        {"keys": [("product", 1)], "name": "ix_product"},
    ],
    "lead": [
        {"keys": [("status", 1)], "name": "ix_status"},
    ],
}


async def _ensure_indexes(db, name: str, indexes: List[Dict[str, Any]]) -> int:
    coll = db[name]
    created = 0
    for ix in indexes:
        spec = dict(ix)
        keys = spec.pop("keys")
        try:
            await coll.create_index(keys, **spec)
            created += 1
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)
    return created


async def ensure_indexes(db) -> int:
    """Garantiza los índices mínimos. Devuelve cuántos se aplicaron."""
    total = 0
    for name, indexes in INDEXES.items():
        total += await _ensure_indexes(db, name, indexes)
    _log.info("Índices asegurados: %s", total)
    return total
