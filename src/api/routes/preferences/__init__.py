"""Rotas de preferência de grade."""

from api.routes.preferences.router import router

__all__ = ["router"]
