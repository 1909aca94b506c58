"""
Perfiles de usuario y gestión de admins.

Las rutas `/users/admin...` se declaran antes que `/users/{user_id}` para que
"admin" no se interprete como id.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, status

from vitrina.api.deps import admin_or_bootstrap, get_current_subject, get_hasher, require_admin
from vitrina.api.schemas.common import ItemOut, MessageOut
from vitrina.api.schemas.user import AdminCreate, AdminUpdate, UserUpdate
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import user_service as service

router = APIRouter(prefix="/users", tags=["Users"])


# --- admins ---

@router.post(
    "/admin",
    status_code=status.HTTP_201_CREATED,
    response_model=ItemOut,
    summary="Crear admin",
    description="Requiere admin. Mientras no exista ninguno, el primero se crea sin token.",
)
async def create_admin(
    payload: AdminCreate,
    _admin: Optional[Dict[str, Any]] = Depends(admin_or_bootstrap),
    db=Depends(get_db),
    hasher=Depends(get_hasher),
):
    item = await service.create_admin(db, hasher, payload.model_dump(exclude_none=True))
    return ItemOut(message="Admin created successfully", item=item)


@router.get("/admin/{admin_id}", response_model=dict, summary="Obtener admin")
async def get_admin(admin_id: str, _admin=Depends(require_admin), db=Depends(get_db)):
    return await service.get_admin(db, admin_id)


@router.put(
    "/admin/{admin_id}",
    response_model=ItemOut,
    summary="Actualizar admin",
    description="Solo el propio admin puede editar su perfil.",
)
async def update_admin(
    admin_id: str,
    payload: AdminUpdate,
    admin=Depends(require_admin),
    db=Depends(get_db),
    hasher=Depends(get_hasher),
):
    item = await service.update_admin(db, hasher, admin["_id"], admin_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Admin updated successfully", item=item)


@router.delete("/admin/{admin_id}", response_model=MessageOut, summary="Eliminar admin")
async def delete_admin(admin_id: str, admin=Depends(require_admin), db=Depends(get_db)):
    await service.delete_admin(db, admin["_id"], admin_id)
    return MessageOut(message="Admin deleted successfully")


# --- users ---

@router.get("/{user_id}", response_model=dict, summary="Obtener usuario")
async def get_user(user_id: str, _subject: str = Depends(get_current_subject), db=Depends(get_db)):
    return await service.get_user(db, user_id)


@router.put(
    "/{user_id}",
    response_model=ItemOut,
    summary="Actualizar usuario",
    description="Actualización parcial; solo el dueño del perfil.",
)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    subject_id: str = Depends(get_current_subject),
    db=Depends(get_db),
    hasher=Depends(get_hasher),
):
    item = await service.update_user(db, hasher, subject_id, user_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="User updated successfully", item=item)


@router.delete("/{user_id}", response_model=MessageOut, summary="Eliminar usuario")
async def delete_user(user_id: str, subject_id: str = Depends(get_current_subject), db=Depends(get_db)):
    await service.delete_user(db, subject_id, user_id)
    return MessageOut(message="User deleted successfully")
