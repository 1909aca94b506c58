"""
Endpoints de `post`.

Si el post tiene autores, solo ellos pueden editarlo o borrarlo.
"""
from fastapi import APIRouter, Depends, status

from vitrina.api.deps import list_query, require_admin
from vitrina.api.schemas.blog import PostCreate, PostUpdate
from vitrina.api.schemas.common import ItemOut, MessageOut, PageOut
from vitrina.infrastructure.db.mongo import get_db
from vitrina.repositories import resource_repo as repo
from vitrina.services import blog_service
from vitrina.services import resource_service as service
from vitrina.services.query_builder import ListQuery
from vitrina.services.resources import POST

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ItemOut,
    summary="Crear post",
    description="Sin autores explícitos, el autor es el admin que lo crea. Sin `published_at`, se usa la fecha de creación.",
)
async def create_post(payload: PostCreate, admin=Depends(require_admin), db=Depends(get_db)):
    data = payload.model_dump(exclude_none=True)
    if not data.get("author"):
        data["author"] = [str(admin["_id"])]
    data.setdefault("published_at", repo.utcnow())
    item = await service.create(db, POST, data)
    return ItemOut(message="Post created successfully", item=item)


@router.get(
    "",
    response_model=PageOut,
    summary="Listar posts",
    description=(
        "Filtros: isActive, status, search, author, category, tag, brand "
        "(ids separados por coma), publishedStartTime/publishedEndTime y "
        "scheduledStartTime/scheduledEndTime (ISO-8601, inclusivos)."
    ),
)
async def list_posts(query: ListQuery = Depends(list_query(POST)), db=Depends(get_db)):
    return await service.list_page(db, POST, query)


@router.get("/{post_id}", response_model=dict, summary="Obtener post con autores y comentarios")
async def get_post(post_id: str, db=Depends(get_db)):
    return await blog_service.get_post(db, post_id)


@router.put("/{post_id}", response_model=ItemOut, summary="Actualizar post")
async def update_post(post_id: str, payload: PostUpdate, admin=Depends(require_admin), db=Depends(get_db)):
    item = await blog_service.update_post(db, admin["_id"], post_id, payload.model_dump(exclude_none=True))
    return ItemOut(message="Post updated successfully", item=item)


@router.delete(
    "/{post_id}",
    response_model=MessageOut,
    summary="Eliminar post",
    description="Borra también sus comentarios.",
)
async def delete_post(post_id: str, admin=Depends(require_admin), db=Depends(get_db)):
    await blog_service.delete_post(db, admin["_id"], post_id)
    return MessageOut(message="Post deleted successfully")
