"""Endpoints de `testimonial`."""
from fastapi import APIRouter, Depends, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.api.schemas.crm import TestimonialCreate, TestimonialUpdate
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import TESTIMONIAL

router = APIRouter(prefix="/testimonials", tags=["Testimonials"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ItemOut, summary="Crear testimonio")
async def create_testimonial(payload: TestimonialCreate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.create(db, TESTIMONIAL, payload.model_dump(exclude_none=True))
    return ItemOut(message="Testimonial created successfully", item=item)


@router.get("", response_model=PageOut, summary="Listar testimonios")
async def list_testimonials(query: ListQuery = Depends(list_query(TESTIMONIAL)), db=Depends(get_db)):
    return await service.list_page(db, TESTIMONIAL, query)


@router.get("/{testimonial_id}", response_model=dict, summary="Obtener testimonio")
async def get_testimonial(testimonial_id: str, db=Depends(get_db)):
    return await service.get(db, TESTIMONIAL, testimonial_id)


@router.put("/{testimonial_id}", response_model=ItemOut, summary="Actualizar testimonio")
async def update_testimonial(
    testimonial_id: str, payload: TestimonialUpdate, _admin=Depends(require_admin), db=Depends(get_db)
):
    item = await service.update(db, TESTIMONIAL, testimonial_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Testimonial updated successfully", item=item)


@router.delete("/{testimonial_id}", response_model=MessageOut, summary="Eliminar testimonio")
async def delete_testimonial(testimonial_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    await service.delete(db, TESTIMONIAL, testimonial_id)
    return MessageOut(message="Testimonial deleted successfully")
