"""API-Router für die EK-Export-API."""

from fastapi import APIRouter

from . import articles

api_router = APIRouter()
api_router.include_router(articles.router, tags=["Artikel"])

__all__ = ["api_router"]
