"""Endpoints de `notification`. Todo requiere admin; el remitente es el admin que llama."""
from fastapi import APIRouter, Depends, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.api.schemas.crm import NotificationCreate, NotificationUpdate
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import NOTIFICATION

router = APIRouter(prefix="/notifications", tags=["Notifications"], dependencies=[Depends(require_admin)])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ItemOut, summary="Crear notificación")
async def create_notification(payload: NotificationCreate, admin=Depends(require_admin), db=Depends(get_db)):
    data = payload.model_dump(exclude_none=True)
    data["sender"] = admin["_id"]
    item = await service.create(db, NOTIFICATION, data)
    return ItemOut(message="Notification created successfully", item=item)


@router.get("", response_model=PageOut, summary="Listar notificaciones")
async def list_notifications(query: ListQuery = Depends(list_query(NOTIFICATION)), db=Depends(get_db)):
    return await service.list_page(db, NOTIFICATION, query)


@router.get("/{notification_id}", response_model=dict, summary="Obtener notificación")
async def get_notification(notification_id: str, db=Depends(get_db)):
    return await service.get(db, NOTIFICATION, notification_id)


@router.put("/{notification_id}", response_model=ItemOut, summary="Actualizar notificación")
async def update_notification(notification_id: str, payload: NotificationUpdate, db=Depends(get_db)):
    item = await service.update(db, NOTIFICATION, notification_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Notification updated successfully", item=item)


@router.delete("/{notification_id}", response_model=MessageOut, summary="Eliminar notificación")
async def delete_notification(notification_id: str, db=Depends(get_db)):
    await service.delete(db, NOTIFICATION, notification_id)
    return MessageOut(message="Notification deleted successfully")
