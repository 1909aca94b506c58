"""
Errores de dominio y handlers globales para respuestas de error consistentes.

Los servicios lanzan subclases de `AppError`; los handlers las convierten en
`{"message": ...}` con el status correspondiente. Nada se propaga más allá
de la petición.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Campo requerido ausente o inválido (también credenciales inválidas)."""
    status_code = 400


class DuplicateError(AppError):
    """Violación de unicidad (email, teléfono, username o nombre ya existentes)."""
    status_code = 400


class AuthenticationError(AppError):
    status_code = 401


class InvalidToken(AuthenticationError):
    """Firma inválida, token expirado o claims incompletos."""


class AuthorizationError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class RateLimitError(AppError):
    status_code = 429


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _body(request: Request, message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"message": message, **extra}
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("vitrina.errors")

    @app.exception_handler(AppError)
    async def _app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            log.error("AppError request_id=%s: %s", _req_id(request), exc.message)
        return JSONResponse(status_code=exc.status_code, content=_body(request, exc.message))

    @app.exception_handler(DuplicateKeyError)
    async def _duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        # Carrera entre la verificación de existencia y el insert
        log.info("Duplicate key request_id=%s", _req_id(request))
        return JSONResponse(status_code=DuplicateError.status_code, content=_body(request, "Already exists"))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=_body(request, exc.detail or "HTTP error"))

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
            for e in exc.errors()
        ]
        return JSONResponse(status_code=400, content=_body(request, "Validation error", errors=errors))

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return JSONResponse(status_code=500, content=_body(request, "Internal server error"))
