"""Endpoints de `comment`. Escritura para cualquier sujeto autenticado (autor o admin)."""
from fastapi import APIRouter, Depends, status

from vitrina.api.deps import get_current_subject, list_query
from vitrina.api.schemas.blog import CommentCreate, CommentUpdate
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.infrastructure.db.mongo import get_db
from vitrina.services import blog_service
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import COMMENT

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ItemOut,
    summary="Crear comentario",
    description="El autor es el sujeto del token. Se agrega al post y/o producto indicado.",
)
async def create_comment(payload: CommentCreate, subject_id: str = Depends(get_current_subject), db=Depends(get_db)):
    item = await blog_service.add_comment(db, subject_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Comment created successfully", item=item)


@router.get(
    "",
    response_model=PageOut,
    summary="Listar comentarios",
    description="Filtros: isActive, search, postId, productId, author. Orden: sortRate, sortByCreatedAt.",
)
async def list_comments(query: ListQuery = Depends(list_query(COMMENT)), db=Depends(get_db)):
    return await service.list_page(db, COMMENT, query)


@router.get("/{comment_id}", response_model=dict, summary="Obtener comentario")
async def get_comment(comment_id: str, db=Depends(get_db)):
    return await service.get(db, COMMENT, comment_id)


@router.put(
    "/{comment_id}",
    response_model=ItemOut,
    summary="Actualizar comentario",
    description="Autor o admin; solo un admin cambia is_active.",
)
async def update_comment(
    comment_id: str, payload: CommentUpdate, subject_id: str = Depends(get_current_subject), db=Depends(get_db)
):
    item = await blog_service.update_comment(db, subject_id, comment_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Comment updated successfully", item=item)


@router.delete("/{comment_id}", response_model=MessageOut, summary="Eliminar comentario")
async def delete_comment(comment_id: str, subject_id: str = Depends(get_current_subject), db=Depends(get_db)):
    await blog_service.delete_comment(db, subject_id, comment_id)
    return MessageOut(message="Comment deleted successfully")
