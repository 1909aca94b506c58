"""Vistas de catálogo para el sitio público."""
from typing import Any, Dict, List

from vitrina.repositories import resource_repo as repo
from vitrina.services import resource_service
from vitrina.services.resources import BRAND, CATEGORY


async def brands_with_categories(db) -> List[Dict[str, Any]]:
    """Marcas activas, cada una con sus categorías activas (`categories`)."""
    brands = await resource_service.list_active(db, BRAND)
    if not brands:
        return []
    categories = await resource_service.list_active(
        db, CATEGORY, {"brand": {"$in": [b["_id"] for b in brands]}}
    )
    by_brand: Dict[Any, List[Dict[str, Any]]] = {}
    for c in categories:
        by_brand.setdefault(c["brand"], []).append(c)
    for b in brands:
        b["categories"] = by_brand.get(b["_id"], [])
    return repo.public(brands)
