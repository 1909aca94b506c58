"""Endpoints de `lead`. Crear es público (formulario del sitio); el resto es admin."""
from fastapi import APIRouter, Depends, Query, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.api.schemas.crm import LeadCreate, LeadStatus, LeadUpdate
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import LEAD

router = APIRouter(prefix="/leads", tags=["Leads"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ItemOut, summary="Crear lead")
async def create_lead(payload: LeadCreate, db=Depends(get_db)):
    item = await service.create(db, LEAD, payload.model_dump(exclude_none=True))
    return ItemOut(message="Lead created successfully", item=item)


@router.get(
    "",
    response_model=PageOut,
    summary="Listar leads",
    description="Filtros: isActive, status, search (nombre, texto, teléfono, email).",
)
async def list_leads(query: ListQuery = Depends(list_query(LEAD)), _admin=Depends(require_admin), db=Depends(get_db)):
    return await service.list_page(db, LEAD, query)


@router.get("/{lead_id}", response_model=dict, summary="Obtener lead")
async def get_lead(lead_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    return await service.get(db, LEAD, lead_id)


@router.put(
    "/status/{lead_id}",
    response_model=ItemOut,
    summary="Cambiar estado del lead",
    description="Solo modifica `status` (new, called, rejected, interested).",
)
async def change_lead_status(
    lead_id: str,
    lead_status: LeadStatus = Query(alias="status"),
    _admin=Depends(require_admin),
    db=Depends(get_db),
):
    item = await service.update(db, LEAD, lead_id, {"status": lead_status})
    return ItemOut(message="Lead status updated successfully", item=item)


@router.put("/{lead_id}", response_model=ItemOut, summary="Actualizar lead")
async def update_lead(lead_id: str, payload: LeadUpdate, _admin=Depends(require_admin), db=Depends(get_db)):
    item = await service.update(db, LEAD, lead_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Lead updated successfully", item=item)


@router.delete("/{lead_id}", response_model=MessageOut, summary="Eliminar lead")
async def delete_lead(lead_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    await service.delete(db, LEAD, lead_id)
    return MessageOut(message="Lead deleted successfully")
