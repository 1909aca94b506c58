"""Endpoints de `category` (categorías de producto, ligadas a una marca)."""
from fastapi import APIRouter, Depends, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.catalog import CategoryCreate, CategoryUpdate
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import CATEGORY

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ItemOut, summary="Crear categoría")
async def create_category(payload: CategoryCreate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.create(db, CATEGORY, payload.model_dump(exclude_none=True))
    return ItemOut(message="Category created successfully", item=item)


@router.get(
    "",
    response_model=PageOut,
    summary="Listar categorías",
    description="Filtros: isActive, search, brand (ids separados por coma).",
)
async def list_categories(query: ListQuery = Depends(list_query(CATEGORY)), db=Depends(get_db)):
    return await service.list_page(db, CATEGORY, query)


@router.get("/{category_id}", response_model=dict, summary="Obtener categoría")
async def get_category(category_id: str, db=Depends(get_db)):
    return await service.get(db, CATEGORY, category_id)


@router.put("/{category_id}", response_model=ItemOut, summary="Actualizar categoría")
async def update_category(category_id: str, payload: CategoryUpdate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.update(db, CATEGORY, category_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Category updated successfully", item=item)


@router.delete("/{category_id}", response_model=MessageOut, summary="Eliminar categoría")
async def delete_category(category_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    await service.delete(db, CATEGORY, category_id)
    return MessageOut(message="Category deleted successfully")
