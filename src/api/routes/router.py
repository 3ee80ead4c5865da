"""Router raiz da API de grades.

    /health, /ready          -> api.routes.health
    /preferences/grid        -> api.routes.preferences
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health.router import router as health_router
from api.routes.preferences import router as preferences_router

PREFERENCES_PREFIX = "/preferences"


def create_api_router() -> APIRouter:
    """Monta o router raiz; probes ficam na raiz, sem prefixo."""
    api_router = APIRouter()
    api_router.include_router(health_router, tags=["health"])
    api_router.include_router(
        preferences_router,
        prefix=PREFERENCES_PREFIX,
        tags=["preferences"],
    )
    return api_router
