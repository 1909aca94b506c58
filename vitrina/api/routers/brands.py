"""Endpoints de `brand`. Lectura pública; escritura solo admin."""
from typing import List

from fastapi import APIRouter, Depends, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.catalog import BrandCreate, BrandUpdate
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import catalog_service
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import BRAND

router = APIRouter(prefix="/brands", tags=["Brands"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ItemOut,
    summary="Crear marca",
    description="El nombre es obligatorio y único en cualquiera de sus idiomas.",
)
async def create_brand(payload: BrandCreate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.create(db, BRAND, payload.model_dump(exclude_none=True))
    return ItemOut(message="Brand created successfully", item=item)


@router.get("", response_model=PageOut, summary="Listar marcas")
async def list_brands(query: ListQuery = Depends(list_query(BRAND)), db=Depends(get_db)):
    return await service.list_page(db, BRAND, query)


@router.get(
    "/filter",
    response_model=List[dict],
    summary="Marcas activas con sus categorías",
    description="Para menús del sitio: cada marca activa con sus categorías activas.",
)
async def brands_filter(db=Depends(get_db)):
    return await catalog_service.brands_with_categories(db)


@router.get("/{brand_id}", response_model=dict, summary="Obtener marca")
async def get_brand(brand_id: str, db=Depends(get_db)):
    return await service.get(db, BRAND, brand_id)


@router.put("/{brand_id}", response_model=ItemOut, summary="Actualizar marca")
async def update_brand(brand_id: str, payload: BrandUpdate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.update(db, BRAND, brand_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Brand updated successfully", item=item)


@router.delete(
    "/{brand_id}",
    response_model=MessageOut,
    summary="Eliminar marca",
    description="Quita la referencia en categorías, clientes y posts.",
)
async def delete_brand(brand_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    await service.delete(db, BRAND, brand_id)
    return MessageOut(message="Brand deleted successfully")
