"""API route registration."""

from fastapi import APIRouter

from gallery.api.routes import health, media

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(media.router, tags=["media"])
