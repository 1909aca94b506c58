"""
Reglas específicas de posts y comentarios.

- Un post solo lo editan/borran sus autores (si tiene autores).
- Un comentario lo edita/borra su autor o un admin; solo un admin cambia `is_active`.
- Crear/borrar un comentario actualiza `comments` del post/producto
  (secuencial, best-effort, sin rollback).
"""
import logging
from typing import Any, Dict

from vitrina.core.exceptions import AuthorizationError, NotFoundError
from vitrina.repositories import auth_repo
from vitrina.repositories import resource_repo as repo
from vitrina.services import resource_service
from vitrina.services.query_builder import populate
from vitrina.services.resources import COMMENT, POST, PRODUCT

_log = logging.getLogger("vitrina.resources")


def _check_post_author(post: Dict[str, Any], admin_id: Any) -> None:
    authors = post.get("author") or []
    if authors and repo.to_object_id(admin_id) not in authors:
        raise AuthorizationError("Not authorized")


async def get_post(db, post_id: str) -> Dict[str, Any]:
    """Post con referencias pobladas y sus comentarios activos."""
    post = await repo.get_by_id(db, POST.collection, post_id)
    if not post:
        raise NotFoundError(POST.not_found())
    await populate(db, [post], POST.populate)
    comments = await repo.find_page(
        db,
        COMMENT.collection,
        {"post": post["_id"], "is_active": True},
        [("created_at", -1), ("_id", -1)],
    )
    post["comments"] = await populate(db, comments, COMMENT.populate)
    return repo.public(post)


async def update_post(db, admin_id: Any, post_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    post = await repo.get_by_id(db, POST.collection, post_id)
    if not post:
        raise NotFoundError(POST.not_found())
    _check_post_author(post, admin_id)
    return await resource_service.update(db, POST, post["_id"], changes)


async def delete_post(db, admin_id: Any, post_id: str) -> None:
    post = await repo.get_by_id(db, POST.collection, post_id)
    if not post:
        raise NotFoundError(POST.not_found())
    _check_post_author(post, admin_id)
    await resource_service.delete(db, POST, post["_id"])


async def _is_admin(db, subject_id: Any) -> bool:
    admin = await auth_repo.get_admin_by_id(db, subject_id)
    return bool(admin and admin.get("role") == "admin")


async def add_comment(db, subject_id: Any, data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    data["author"] = repo.to_object_id(subject_id)
    data["is_active"] = True
    # Valida ids y existencia del destino antes de insertar
    data = resource_service._convert_refs(COMMENT, data)
    targets = ((POST, data.get("post")), (PRODUCT, data.get("product")))
    for resource, oid in targets:
        if oid is not None and not await repo.exists(db, resource.collection, {"_id": oid}):
            raise NotFoundError(resource.not_found())
    comment = await repo.insert(db, COMMENT.collection, data)
    for resource, oid in targets:
        if oid is not None:
            await repo.push_reference(db, resource.collection, oid, "comments", comment["_id"])
    _log.info("Comentario creado id=%s", comment["_id"])
    return repo.public(comment)


async def _load_comment_for_write(db, subject_id: Any, comment_id: str) -> tuple:
    comment = await repo.get_by_id(db, COMMENT.collection, comment_id)
    if not comment:
        raise NotFoundError(COMMENT.not_found())
    is_admin = await _is_admin(db, subject_id)
    if not is_admin and comment.get("author") != repo.to_object_id(subject_id):
        raise AuthorizationError("Not authorized")
    return comment, is_admin


async def update_comment(db, subject_id: Any, comment_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
    comment, is_admin = await _load_comment_for_write(db, subject_id, comment_id)
    if "is_active" in changes and changes["is_active"] != comment.get("is_active") and not is_admin:
        raise AuthorizationError("Only admins can change comment status")
    return await resource_service.update(db, COMMENT, comment["_id"], changes)


async def delete_comment(db, subject_id: Any, comment_id: str) -> None:
    comment, _ = await _load_comment_for_write(db, subject_id, comment_id)
    await repo.delete_by_id(db, COMMENT.collection, comment["_id"])
    for resource, fld in ((POST, "post"), (PRODUCT, "product")):
        if comment.get(fld) is not None:
            await repo.pull_reference(db, resource.collection, "comments", comment["_id"], doc_id=comment[fld])
    _log.info("Comentario eliminado id=%s", comment["_id"])
