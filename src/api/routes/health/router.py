"""Liveness e readiness do serviço de preferências."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.views.registry import load_resource_catalog

logger = logging.getLogger(__name__)

router = APIRouter()

STORE_PING_TIMEOUT_SECONDS = 2.0


class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de uma checagem; ``degraded`` não tira o serviço do ar."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None
    detail: dict[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }
        if self.detail is not None:
            data["detail"] = self.detail
        return data


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: o processo responde."""
    return HealthResponse(
        status="healthy",
        service="grid-views",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: o store precisa responder ao ping.

    Catálogo de recursos vazio só degrada (as telas caem nos próprios defaults).
    """
    store_check = await _check_store(getattr(request.app.state, "preference_store", None))
    catalog_check = _check_catalog()
    ready = store_check.status == "ok"
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "preference_store": store_check.as_dict(),
            "resource_catalog": catalog_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_store(store: Any | None) -> DependencyCheck:
    if store is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        alive = await asyncio.wait_for(store.ping(), timeout=STORE_PING_TIMEOUT_SECONDS)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        logger.warning(
            "readiness_store_check_failed",
            extra={"component": "health", "result": "failed", "error_type": type(exc).__name__},
        )
        return DependencyCheck(status="failed", error=type(exc).__name__)
    if not alive:
        return DependencyCheck(status="failed", error="no_pong")
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


def _check_catalog() -> DependencyCheck:
    resources = sorted(load_resource_catalog())
    if not resources:
        return DependencyCheck(status="degraded", error="empty_catalog")
    return DependencyCheck(status="ok", detail={"resources": resources})
