"""Endpoints de `client` (logos de clientes por marca). Detalle y escritura solo admin."""
from fastapi import APIRouter, Depends, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.api.schemas.crm import ClientCreate, ClientUpdate
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import CLIENT

router = APIRouter(prefix="/clients", tags=["Clients"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ItemOut, summary="Crear cliente")
async def create_client(payload: ClientCreate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.create(db, CLIENT, payload.model_dump(exclude_none=True))
    return ItemOut(message="Client created successfully", item=item)


@router.get("", response_model=PageOut, summary="Listar clientes")
async def list_clients(query: ListQuery = Depends(list_query(CLIENT)), db=Depends(get_db)):
    return await service.list_page(db, CLIENT, query)


@router.get("/{client_id}", response_model=dict, summary="Obtener cliente")
async def get_client(client_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    return await service.get(db, CLIENT, client_id)


@router.put("/{client_id}", response_model=ItemOut, summary="Actualizar cliente")
async def update_client(client_id: str, payload: ClientUpdate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.update(db, CLIENT, client_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Client updated successfully", item=item)


@router.delete("/{client_id}", response_model=MessageOut, summary="Eliminar cliente")
async def delete_client(client_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    await service.delete(db, CLIENT, client_id)
    return MessageOut(message="Client deleted successfully")
