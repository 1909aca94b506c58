"""
Dependencias reutilizables para routers (FastAPI Depends).

- Identidad: extrae y valida el Access Token (`get_current_subject`).
- Rol admin: carga el admin y verifica su rol (`require_admin`).
- Listados: construye `ListQuery` desde los query params (`list_query`).
- Mantener esta capa delgada: sin lógica de negocio pesada.
"""
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Header, Query, Request

from vitrina.core.config import Settings
from vitrina.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, RateLimitError
from vitrina.core.rate_limit import RateLimiter
from vitrina.infrastructure.db.mongo import get_db
from vitrina.repositories import auth_repo
from vitrina.services.query_builder import ListQuery, parse_bool, parse_datetime, parse_direction, parse_ids
from vitrina.services.resources import Resource
from vitrina.services.security import PasswordHasher
from vitrina.services.token_service import ROLE_ADMIN, TokenService

# Mantiene `skip` dentro de int64 de BSON
MAX_PAGE = 1_000_000


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_tokens(request: Request) -> TokenService:
    return request.app.state.tokens


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def throttle(request: Request) -> None:
    """Limita intentos de login por IP y ruta (429)."""
    limiter: RateLimiter = request.app.state.rate_limiter
    ip = request.client.host if request.client else ""
    if not limiter.allow((ip, request.url.path)):
        raise RateLimitError("Too many attempts, try again later")


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None


def get_current_subject(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    tokens: TokenService = Depends(get_tokens),
) -> str:
    """Identity Resolution: devuelve el id del sujeto del token (401 si falta o es inválido)."""
    token = _bearer(authorization)
    if token is None:
        raise AuthenticationError("Missing token")
    claims = tokens.verify(token)
    request.state.subject_id = claims["sub"]
    request.state.role = claims.get("role")
    return claims["sub"]


async def _load_admin(db, subject_id: str) -> Dict[str, Any]:
    admin = await auth_repo.get_admin_by_id(db, subject_id)
    if not admin:
        raise NotFoundError("Admin not found")
    if admin.get("role") != ROLE_ADMIN:
        raise AuthorizationError("Access denied")
    return admin


async def require_admin(
    subject_id: str = Depends(get_current_subject),
    db=Depends(get_db),
) -> Dict[str, Any]:
    """Admin Role Check: el sujeto debe existir en `admin` con rol admin."""
    return await _load_admin(db, subject_id)


async def admin_or_bootstrap(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    tokens: TokenService = Depends(get_tokens),
    db=Depends(get_db),
) -> Optional[Dict[str, Any]]:
    """
    Igual que `require_admin`, salvo cuando aún no existe ningún admin:
    entonces deja pasar sin token (alta del primer admin).
    """
    if not await auth_repo.any_admin(db):
        return None
    subject_id = get_current_subject(request, authorization, tokens)
    return await _load_admin(db, subject_id)


def list_query(resource: Resource) -> Callable[..., ListQuery]:
    """
    Fábrica de dependencias de listado para un recurso.

    Los filtros por referencia y por fechas dependen del recurso, por eso se
    leen de `request.query_params` según su descriptor.
    """

    def _dependency(
        request: Request,
        isActive: Optional[str] = Query(default=None, description="true/false"),
        status: Optional[str] = Query(default=None),
        search: Optional[str] = Query(default=None),
        page: int = Query(default=1, ge=1, le=MAX_PAGE),
        limit: Optional[int] = Query(default=None, ge=1),
        sortRate: Optional[str] = Query(default=None, description="asc/desc"),
        sortByCreatedAt: Optional[str] = Query(default=None, description="asc/desc"),
        settings: Settings = Depends(get_settings),
    ) -> ListQuery:
        params = request.query_params
        refs = {
            fld: parse_ids(params.get(param), param)
            for param, fld in resource.ref_filters.items()
            if params.get(param)
        }
        date_ranges = {}
        for fld, (start_param, end_param) in resource.date_filters.items():
            start = parse_datetime(params.get(start_param), start_param)
            end = parse_datetime(params.get(end_param), end_param)
            if start is not None or end is not None:
                date_ranges[fld] = (start, end)
        return ListQuery(
            is_active=parse_bool(isActive),
            status=status or None,
            search=search,
            refs=refs,
            date_ranges=date_ranges,
            sort_rate=parse_direction(sortRate, "asc") if sortRate else None,
            sort_by_created_at=parse_direction(sortByCreatedAt, "desc"),
            page=page,
            limit=min(limit or settings.default_page_size, settings.max_page_size),
        )

    return _dependency
