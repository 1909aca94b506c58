"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
import logging
from typing import Optional

from fastapi import FastAPI

from vitrina.api.router import api_router
from vitrina.core.config import Settings
from vitrina.core.exceptions import register_exception_handlers
from vitrina.core.logging import setup_logging
from vitrina.core.middleware import add_middlewares
from vitrina.core.rate_limit import RateLimiter
from vitrina.infrastructure.db.bootstrap import ensure_indexes
from vitrina.infrastructure.db.mongo import connect, disconnect
from vitrina.services.security import PasswordHasher
from vitrina.services.token_service import TokenService

_log = logging.getLogger("vitrina.startup")


def create_app(settings: Optional[Settings] = None, db=None) -> FastAPI:
    """
    Construye la app. `db` permite inyectar una base ya abierta (tests);
    si no se pasa, la conexión a Mongo se abre en el startup.
    """
    settings = settings or Settings()
    setup_logging(settings.log_level)
    app = FastAPI(title=settings.app_name)

    app.state.settings = settings
    app.state.tokens = TokenService(settings)
    app.state.hasher = PasswordHasher(settings)
    app.state.rate_limiter = RateLimiter(limit=settings.login_rate_per_min, window_seconds=60)
    app.state.db = db

    add_middlewares(app, settings)
    register_exception_handlers(app)

    @app.on_event("startup")
    async def on_startup():
        if app.state.db is not None:
            return
        await connect(app, settings)
        # Los índices no deben impedir el arranque
        await ensure_indexes(app.state.db)
        if not settings.jwt_secret:
            _log.warning("JWT_SECRET no configurado; no se podrán emitir tokens")

    @app.on_event("shutdown")
    async def on_shutdown():
        disconnect(app)

    # Monta routers bajo el prefijo configurado
    app.include_router(api_router, prefix=settings.api_prefix_normalized)
    return app


app = create_app()
