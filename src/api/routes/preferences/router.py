"""Endpoints de preferência de grade.

    GET /preferences/grid?resource=<key>  -> documento salvo ou {}
    PUT /preferences/grid                 <- {resource, columns, sort?}

A identidade chega resolvida pela camada de autenticação no header
X-User-Id. Um documento por (usuário, recurso), sobrescrito a cada PUT.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, Response

from app.domain.grid_preference import GridPreferenceWrite
from app.protocols.preference_store import GridPreferenceStoreProtocol
from utils.errors import PreferenceStoreUnavailableError

logger = logging.getLogger(__name__)

router = APIRouter()


def get_preference_store(request: Request) -> GridPreferenceStoreProtocol:
    """Store anexado ao app.state pelo lifespan."""
    store = getattr(request.app.state, "preference_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="preference_store_not_ready")
    return store


def require_user_id(x_user_id: Annotated[str | None, Header()] = None) -> str:
    """Usuário autenticado; ausente -> 401."""
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="missing_user")
    return x_user_id.strip()


@router.get("/grid")
async def get_grid_preference(
    resource: Annotated[str, Query(min_length=1)],
    user_id: Annotated[str, Depends(require_user_id)],
    store: Annotated[GridPreferenceStoreProtocol, Depends(get_preference_store)],
) -> dict[str, Any]:
    """Documento salvo do recurso; ``{}`` quando ainda não existe."""
    try:
        document = await store.get(user_id, resource)
    except PreferenceStoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail="preference_store_unavailable") from exc

    logger.info(
        "grid_preference_read",
        extra={
            "component": "preferences_api",
            "action": "get",
            "result": "found" if document else "empty",
            "resource": resource,
        },
    )
    return document or {}


@router.put("/grid", status_code=204)
async def put_grid_preference(
    body: GridPreferenceWrite,
    user_id: Annotated[str, Depends(require_user_id)],
    store: Annotated[GridPreferenceStoreProtocol, Depends(get_preference_store)],
) -> Response:
    """Upsert do documento inteiro (last write wins)."""
    try:
        await store.upsert(user_id, body.resource, body.document().to_wire())
    except PreferenceStoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail="preference_store_unavailable") from exc

    logger.info(
        "grid_preference_written",
        extra={
            "component": "preferences_api",
            "action": "put",
            "result": "ok",
            "resource": body.resource,
        },
    )
    return Response(status_code=204)
