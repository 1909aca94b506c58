"""
Descriptores de recursos: colección, campos de búsqueda, filtros por
referencia y por rango de fechas, referencias a poblar y cascadas al borrar.

El query builder y el servicio genérico de recursos leen estos descriptores;
los routers solo eligen cuál usar.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple


def localized(*names: str) -> Tuple[str, ...]:
    """Expande campos localizados a sus rutas por idioma (name -> name.uz, name.ru, name.en)."""
    return tuple(f"{n}.{lang}" for n in names for lang in ("uz", "ru", "en"))


@dataclass(frozen=True)
class RefSpec:
    """Referencia a resolver en lectura (populate)."""
    field: str
    collection: str
    display: Tuple[str, ...]
    many: bool = False
    # Solo documentos referenciados activos (si la colección tiene is_active)
    active_only: bool = True


@dataclass(frozen=True)
class Cascade:
    """Efecto sobre otra colección al borrar un documento de este recurso."""
    collection: str
    field: str
    action: str  # "unset" | "pull" | "delete"


@dataclass(frozen=True)
class Resource:
    label: str
    collection: str
    searchable: Tuple[str, ...] = ()
    # parámetro de query -> campo del documento (lista de ids separados por coma)
    ref_filters: Dict[str, str] = field(default_factory=dict)
    # campo del documento -> (parámetro inicio, parámetro fin)
    date_filters: Dict[str, Tuple[str, str]] = field(default_factory=dict)
    has_status: bool = False
    has_is_active: bool = True
    rate_sortable: bool = False
    populate: Tuple[RefSpec, ...] = ()
    # campo -> (colección referenciada, es lista)
    write_refs: Dict[str, Tuple[str, bool]] = field(default_factory=dict)
    # Recursos con `name` localizado obligatorio y único
    unique_name: bool = False
    cascades: Tuple[Cascade, ...] = ()

    def not_found(self) -> str:
        return f"{self.label} not found"


BRAND_REF = RefSpec("brand", "brand", ("name",))

BRAND = Resource(
    label="Brand",
    collection="brand",
    searchable=localized("name"),
    unique_name=True,
    cascades=(
        Cascade("category", "brand", "unset"),
        Cascade("client", "brand", "unset"),
        Cascade("post", "brand", "pull"),
    ),
)

CATEGORY = Resource(
    label="Category",
    collection="category",
    searchable=localized("name"),
    ref_filters={"brand": "brand"},
    populate=(BRAND_REF,),
    write_refs={"brand": ("brand", False)},
    unique_name=True,
    cascades=(Cascade("product", "category", "unset"),),
)

POST_CATEGORY = Resource(
    label="Post category",
    collection="post_category",
    searchable=localized("name"),
    unique_name=True,
    cascades=(Cascade("post", "category", "pull"),),
)

TAG = Resource(
    label="Tag",
    collection="tag",
    searchable=localized("name"),
    unique_name=True,
    cascades=(Cascade("post", "tags", "pull"),),
)

PRODUCT = Resource(
    label="Product",
    collection="product",
    searchable=localized("title", "short_description", "description"),
    ref_filters={"category": "category"},
    rate_sortable=True,
    populate=(RefSpec("category", "category", ("name",)),),
    write_refs={"category": ("category", False)},
    cascades=(Cascade("comment", "product", "delete"),),
)

POST = Resource(
    label="Post",
    collection="post",
    searchable=localized("title", "content"),
    ref_filters={"author": "author", "category": "category", "tag": "tags", "brand": "brand"},
    date_filters={
        "published_at": ("publishedStartTime", "publishedEndTime"),
        "scheduled_at": ("scheduledStartTime", "scheduledEndTime"),
    },
    has_status=True,
    populate=(
        RefSpec("author", "admin", ("username", "fullname"), many=True, active_only=False),
        RefSpec("category", "post_category", ("name",), many=True),
        RefSpec("brand", "brand", ("name",), many=True),
        RefSpec("tags", "tag", ("name",), many=True),
    ),
    write_refs={
        "author": ("admin", True),
        "category": ("post_category", True),
        "brand": ("brand", True),
        "tags": ("tag", True),
    },
    cascades=(Cascade("comment", "post", "delete"),),
)

COMMENT = Resource(
    label="Comment",
    collection="comment",
    searchable=("content",),
    ref_filters={"postId": "post", "productId": "product", "author": "author"},
    rate_sortable=True,
    populate=(RefSpec("author", "user", ("fullname", "email", "phone"), active_only=False),),
    write_refs={"post": ("post", False), "product": ("product", False)},
)

LEAD = Resource(
    label="Lead",
    collection="lead",
    searchable=("name", "text", "phone", "email"),
    has_status=True,
)

TESTIMONIAL = Resource(
    label="Testimonial",
    collection="testimonial",
    searchable=localized("fullname", "title", "content"),
    rate_sortable=True,
)

CLIENT = Resource(
    label="Client",
    collection="client",
    searchable=localized("name"),
    ref_filters={"brand": "brand"},
    populate=(BRAND_REF,),
    write_refs={"brand": ("brand", False)},
)

NOTIFICATION = Resource(
    label="Notification",
    collection="notification",
    searchable=("message",),
    has_is_active=False,
    populate=(RefSpec("sender", "admin", ("username", "fullname"), active_only=False),),
)
