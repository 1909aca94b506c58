"""Agregador de routers de la API."""
from fastapi import APIRouter

from vitrina.api.routers import (
    auth,
    brands,
    categories,
    clients,
    comments,
    health,
    leads,
    notifications,
    post_categories,
    posts,
    products,
    tags,
    testimonials,
    users,
)

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(brands.router)
api_router.include_router(categories.router)
api_router.include_router(post_categories.router)
api_router.include_router(tags.router)
api_router.include_router(products.router)
api_router.include_router(posts.router)
api_router.include_router(comments.router)
api_router.include_router(leads.router)
api_router.include_router(testimonials.router)
api_router.include_router(clients.router)
api_router.include_router(notifications.router)
