"""Endpoints de `tag`."""
from fastapi import APIRouter, Depends, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.catalog import TagCreate, TagUpdate
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import TAG

router = APIRouter(prefix="/tags", tags=["Tags"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ItemOut, summary="Crear tag")
async def create_tag(payload: TagCreate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.create(db, TAG, payload.model_dump(exclude_none=True))
    return ItemOut(message="Tag created successfully", item=item)


@router.get("", response_model=PageOut, summary="Listar tags")
async def list_tags(query: ListQuery = Depends(list_query(TAG)), db=Depends(get_db)):
    return await service.list_page(db, TAG, query)


@router.get("/{tag_id}", response_model=dict, summary="Obtener tag")
async def get_tag(tag_id: str, db=Depends(get_db)):
    return await service.get(db, TAG, tag_id)


@router.put("/{tag_id}", response_model=ItemOut, summary="Actualizar tag")
async def update_tag(tag_id: str, payload: TagUpdate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.update(db, TAG, tag_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Tag updated successfully", item=item)


@router.delete("/{tag_id}", response_model=MessageOut, summary="Eliminar tag")
async def delete_tag(tag_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    await service.delete(db, TAG, tag_id)
    return MessageOut(message="Tag deleted successfully")
