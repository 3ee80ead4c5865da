"""Cliente da API de preferências de grade.

    fetch(resource) -> GET /preferences/grid?resource=<resource>
    save(payload)   -> PUT /preferences/grid
"""

from __future__ import annotations

import logging
from typing import Any

from app.domain.grid_preference import PREFERENCES_PATH
from app.infra.http.base import HttpClient, HttpClientConfig, HttpError
from app.observability import CORRELATION_HEADER, get_correlation_id
from config.settings import PreferenceSyncSettings

logger = logging.getLogger(__name__)


class GridPreferencesClient:
    """Leitura e gravação do documento de preferência do usuário autenticado.

    A identidade do usuário é resolvida pela camada de autenticação; o
    cliente só envia headers default configurados no HttpClient.
    """

    def __init__(self, base_url: str, http_client: HttpClient | None = None) -> None:
        self._url = f"{base_url.rstrip('/')}{PREFERENCES_PATH}"
        self._http = http_client or HttpClient()

    @classmethod
    def from_settings(
        cls,
        settings: PreferenceSyncSettings,
        default_headers: dict[str, str] | None = None,
    ) -> GridPreferencesClient:
        config = HttpClientConfig(
            timeout_seconds=settings.request_timeout_seconds,
            max_retries=settings.max_retries,
            default_headers=dict(default_headers or {}),
        )
        return cls(settings.api_base_url, HttpClient(config))

    def _headers(self) -> dict[str, str]:
        correlation_id = get_correlation_id()
        return {CORRELATION_HEADER: correlation_id} if correlation_id else {}

    async def fetch(self, resource: str) -> dict[str, Any]:
        """Documento salvo do recurso; ``{}`` quando não há documento.

        Raises:
            HttpError: falha de transporte ou status de erro.
        """
        response = await self._http.get(
            self._url, params={"resource": resource}, headers=self._headers()
        )
        if response.status_code == 404:
            return {}
        if response.is_error:
            raise HttpError("preferences_fetch_failed", status_code=response.status_code)
        try:
            data = response.json()
        except ValueError:
            logger.warning(
                "preferences_fetch_invalid_json",
                extra={
                    "component": "preferences_client",
                    "action": "fetch",
                    "result": "ignored",
                    "resource": resource,
                },
            )
            return {}
        return data if isinstance(data, dict) else {}

    async def save(self, payload: dict[str, Any]) -> None:
        """Grava o documento inteiro (idempotente).

        Raises:
            HttpError: falha de transporte ou status de erro.
        """
        response = await self._http.put(self._url, json=payload, headers=self._headers())
        if response.is_error:
            raise HttpError("preferences_save_failed", status_code=response.status_code)
        logger.debug(
            "preferences_saved",
            extra={
                "component": "preferences_client",
                "action": "save",
                "result": "ok",
                "resource": payload.get("resource"),
            },
        )
