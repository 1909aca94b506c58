"""
Esquemas para el catálogo: marcas, categorías, categorías de posts, tags y productos.

Los nombres son `LocalizedText` ({uz, ru, en}). En los recursos con nombre
obligatorio, `name` es opcional en el esquema y la validación la hace el
servicio ("<Entidad> name is required").
"""
from typing import Optional

from pydantic import BaseModel, Field

from vitrina.api.schemas.common import LocalizedText


class NamedCreate(BaseModel):
    name: Optional[LocalizedText] = None
    is_active: bool = True


class NamedUpdate(BaseModel):
    name: Optional[LocalizedText] = None
    is_active: Optional[bool] = None


class BrandCreate(NamedCreate):
    pass


class BrandUpdate(NamedUpdate):
    pass


class CategoryCreate(NamedCreate):
    brand: Optional[str] = None


class CategoryUpdate(NamedUpdate):
    brand: Optional[str] = None


class PostCategoryCreate(NamedCreate):
    pass


class PostCategoryUpdate(NamedUpdate):
    pass


class TagCreate(NamedCreate):
    pass


class TagUpdate(NamedUpdate):
    pass


class ProductCreate(BaseModel):
    title: Optional[LocalizedText] = None
    short_description: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    image: Optional[str] = None
    category: Optional[str] = None
    rate: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: bool = True


class ProductUpdate(BaseModel):
    title: Optional[LocalizedText] = None
    short_description: Optional[LocalizedText] = None
    description: Optional[LocalizedText] = None
    image: Optional[str] = None
    category: Optional[str] = None
    rate: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: Optional[bool] = None
