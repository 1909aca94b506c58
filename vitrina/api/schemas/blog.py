"""
Esquemas para posts y comentarios.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from vitrina.api.schemas.common import LocalizedText

PostStatus = Literal["draft", "published", "scheduled"]


def _require_text(v: Optional[LocalizedText]) -> Optional[LocalizedText]:
    if v is not None and not (v.uz or v.ru or v.en):
        raise ValueError("at least one language is required")
    return v


class PostCreate(BaseModel):
    title: LocalizedText
    content: LocalizedText
    author: List[str] = Field(default_factory=list)
    category: List[str] = Field(default_factory=list)
    brand: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    published_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    status: PostStatus = "draft"
    is_active: bool = True

    @field_validator("title", "content")
    @classmethod
    def _text(cls, v: Optional[LocalizedText]) -> Optional[LocalizedText]:
        return _require_text(v)


class PostUpdate(BaseModel):
    title: Optional[LocalizedText] = None
    content: Optional[LocalizedText] = None
    author: Optional[List[str]] = None
    category: Optional[List[str]] = None
    brand: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    published_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    status: Optional[PostStatus] = None
    is_active: Optional[bool] = None

    @field_validator("title", "content")
    @classmethod
    def _text(cls, v: Optional[LocalizedText]) -> Optional[LocalizedText]:
        return _require_text(v)


class CommentCreate(BaseModel):
    content: str = Field(min_length=1)
    rate: Optional[float] = Field(default=None, ge=0, le=5)
    post: Optional[str] = None
    product: Optional[str] = None


class CommentUpdate(BaseModel):
    content: Optional[str] = Field(default=None, min_length=1)
    rate: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: Optional[bool] = None
