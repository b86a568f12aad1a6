"""
HTTP API.

Exports:
  - api_router: All routers, mounted under /api/v1 by the application
"""

from fastapi import APIRouter

from .routers import chat_router, health_router, ingest_router, notes_router, visualize_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(notes_router)
api_router.include_router(ingest_router)
api_router.include_router(chat_router)
api_router.include_router(visualize_router)

__all__ = ["api_router"]
