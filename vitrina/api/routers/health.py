"""Health (sin auth), salidas tipadas y estables."""
import logging

from fastapi import APIRouter, Depends, status
from pymongo.errors import PyMongoError

from vitrina.api.schemas.health import HealthOut, PingOut
from vitrina.infrastructure.db.mongo import get_db

router = APIRouter(tags=["Health"])  # no prefix to keep paths stable

_log = logging.getLogger("vitrina.mongo")


@router.get("/ping", response_model=PingOut, summary="Ping básico")
async def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica con ping a Mongo")
async def health(db=Depends(get_db)) -> HealthOut:
    try:
        await db.command("ping")
        db_ok = True
    except PyMongoError as e:
        _log.warning("Ping a Mongo falló: %s", e)
        db_ok = False
    return HealthOut(ok=True, db=db_ok)
