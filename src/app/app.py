"""Entrypoint do serviço de preferências de grade.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import create_preference_store, initialize_app, validate_runtime_settings
from app.observability import CORRELATION_HEADER, correlation_scope
from config.logging import get_logger
from config.settings import get_base_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import Response

    from app.protocols.preference_store import GridPreferenceStoreProtocol

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


def _build_lifespan(
    store: GridPreferenceStoreProtocol | None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Anexa o store ao app.state no startup e o fecha no shutdown."""
        logger.info("app_starting", extra={"service": "grid-views"})
        if store is None:
            validate_runtime_settings()
            app.state.preference_store = create_preference_store()
        else:
            app.state.preference_store = store

        yield

        logger.info("app_shutting_down", extra={"service": "grid-views"})
        await app.state.preference_store.close()

    return lifespan


async def correlation_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Propaga x-correlation-id (ou gera um) para logs e resposta."""
    with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


def create_app(store: GridPreferenceStoreProtocol | None = None) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        store: Store de preferências já construído (testes). Sem ele, o
            lifespan valida as settings e cria o store conforme env.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="Grid Views",
        description="Preferências de exibição das grades por usuário e recurso",
        version="1.0.0",
        lifespan=_build_lifespan(store),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(get_base_settings().cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    fastapi_app.middleware("http")(correlation_middleware)

    # Registra todas as rotas
    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "grid-views"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting grid-views in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
