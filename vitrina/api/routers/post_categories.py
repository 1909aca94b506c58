"""Endpoints de `post_category`."""
from fastapi import APIRouter, Depends, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.catalog import PostCategoryCreate, PostCategoryUpdate
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import POST_CATEGORY

router = APIRouter(prefix="/post-categories", tags=["Post categories"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ItemOut, summary="Crear categoría de post")
async def create_post_category(payload: PostCategoryCreate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.create(db, POST_CATEGORY, payload.model_dump(exclude_none=True))
    return ItemOut(message="Post category created successfully", item=item)


@router.get("", response_model=PageOut, summary="Listar categorías de post")
async def list_post_categories(query: ListQuery = Depends(list_query(POST_CATEGORY)), db=Depends(get_db)):
    return await service.list_page(db, POST_CATEGORY, query)


@router.get("/{category_id}", response_model=dict, summary="Obtener categoría de post")
async def get_post_category(category_id: str, db=Depends(get_db)):
    return await service.get(db, POST_CATEGORY, category_id)


@router.put("/{category_id}", response_model=ItemOut, summary="Actualizar categoría de post")
async def update_post_category(
    category_id: str, payload: PostCategoryUpdate, _admin=Depends(require_admin), db=Depends(get_db)
):
    item = await service.update(db, POST_CATEGORY, category_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Post category updated successfully", item=item)


@router.delete(
    "/{category_id}",
    response_model=MessageOut,
    summary="Eliminar categoría de post",
    description="También la quita de los posts que la referencian.",
)
async def delete_post_category(category_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    await service.delete(db, POST_CATEGORY, category_id)
    return MessageOut(message="Post category deleted successfully")
