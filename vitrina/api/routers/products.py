"""Endpoints de `product`."""
from fastapi import APIRouter, Depends, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.catalog import ProductCreate, ProductUpdate
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import PRODUCT

router = APIRouter(prefix="/products", tags=["Products"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ItemOut, summary="Crear producto")
async def create_product(payload: ProductCreate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.create(db, PRODUCT, payload.model_dump(exclude_none=True))
    return ItemOut(message="Product created successfully", item=item)


@router.get(
    "",
    response_model=PageOut,
    summary="Listar productos",
    description="Filtros: isActive, search, category. Orden: sortRate, sortByCreatedAt.",
)
async def list_products(query: ListQuery = Depends(list_query(PRODUCT)), db=Depends(get_db)):
    return await service.list_page(db, PRODUCT, query)


@router.get("/{product_id}", response_model=dict, summary="Obtener producto")
async def get_product(product_id: str, db=Depends(get_db)):
    return await service.get(db, PRODUCT, product_id)


@router.put("/{product_id}", response_model=ItemOut, summary="Actualizar producto")
async def update_product(product_id: str, payload: ProductUpdate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.update(db, PRODUCT, product_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Product updated successfully", item=item)


@router.delete(
    "/{product_id}",
    response_model=MessageOut,
    summary="Eliminar producto",
    description="Borra también sus comentarios.",
)
async def delete_product(product_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    await service.delete(db, PRODUCT, product_id)
    return MessageOut(message="Product deleted successfully")
