"""Cliente MongoDB asíncrono (Motor).

Toda la persistencia pasa por aquí: cada handler suspende en las llamadas a
Mongo y libera el event loop mientras espera la respuesta.
"""
from __future__ import annotations

import logging

import certifi
from fastapi import FastAPI, Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from vitrina.core.config import Settings

_log = logging.getLogger("vitrina.mongo")


def build_client(settings: Settings) -> AsyncIOMotorClient:
    uri = settings.mongo_uri
    kwargs = dict(serverSelectionTimeoutMS=15000)
    if uri.startswith("mongodb+srv://"):
        # SRV ya implica TLS; proveemos CA bundle para robustez
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        if settings.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
        if settings.mongo_tls_allow_invalid_hostnames:
            kwargs["tlsAllowInvalidHostnames"] = True
    return AsyncIOMotorClient(uri, **kwargs)


async def connect(app: FastAPI, settings: Settings) -> None:
    """Inicializa el cliente y valida conexión (ping). Llamar en el startup."""
    client = build_client(settings)
    await client.admin.command("ping")
    app.state.mongo_client = client
    app.state.db = client[settings.mongo_db]
    _log.info("Motor listo (db=%s)", settings.mongo_db)


def disconnect(app: FastAPI) -> None:
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        app.state.mongo_client = None
        _log.info("Motor cerrado")


def get_db(request: Request) -> AsyncIOMotorDatabase:
    """
    Devuelve la referencia a la base de datos de la app.
    Úsalo como dependencia en routers; los servicios la reciben como argumento.
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Mongo not initialized")
    return db
