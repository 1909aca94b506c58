"""
Esquemas compartidos: texto localizado, página de resultados y mensajes.
"""
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator


class LocalizedText(BaseModel):
    """Texto en los tres idiomas del sitio. Un único tipo para toda entidad localizada."""
    uz: str = ""
    ru: str = ""
    en: str = ""

    @field_validator("uz", "ru", "en", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> str:
        return str(v).strip() if v is not None else ""


class PageOut(BaseModel):
    count: int = Field(description="Total de coincidencias, independiente de la página")
    page: int
    limit: int
    pages: int
    items: List[Dict[str, Any]]


class MessageOut(BaseModel):
    message: str


class ItemOut(BaseModel):
    message: str
    item: Dict[str, Any]
