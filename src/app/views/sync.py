"""Sincronização do estado de uma grade com o documento do servidor.

Fluxo:
    1. use_resource_view() cria o ResourceView com os defaults da tela e
       aguarda a leitura inicial (cache de consulta ou GET)
    2. a hidratação aplica o documento uma única vez (ver app.views.merge);
       campos alterados na tela antes da leitura chegar ficam travados
    3. cada alteração do usuário rearma o debounce; ao disparar, o snapshot
       inteiro é gravado (PUT) e a leitura cacheada do recurso é invalidada
    4. close() cancela timer e gravações em andamento

Falhas de leitura ou gravação são registradas e descartadas: o estado em
memória continua valendo e não há retry nesta camada.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from app.domain.grid_preference import parse_preference_document
from app.views.debounce import Debouncer
from app.views.merge import build_write_payload, merge_preference
from app.views.query_cache import QueryCache, preference_cache_key
from app.views.store import ViewStateChange, ViewStateStore
from config.logging import log_sync_dropped
from config.settings import PreferenceSyncSettings, get_preference_sync_settings
from utils.errors import InfrastructureError

if TYPE_CHECKING:
    from types import TracebackType

    from app.domain.view_state import ViewState
    from app.protocols.preference_client import GridPreferenceClientProtocol
    from filters.types import FieldRegistry

logger = logging.getLogger(__name__)


class ResourceView(ViewStateStore):
    """ViewStateStore de uma tela, sincronizado com /preferences/grid.

    Args:
        resource: Chave do recurso (ex: "cash_bases")
        defaults: Estado default da tela
        client: Cliente remoto de preferências
        cache: Cache de leituras compartilhado entre telas (default: um
            cache próprio com o TTL das settings)
        registry: Campos filtráveis da tela
        settings: Debounce e demais parâmetros (default: env)
    """

    def __init__(
        self,
        resource: str,
        defaults: ViewState,
        *,
        client: GridPreferenceClientProtocol,
        cache: QueryCache | None = None,
        registry: FieldRegistry | None = None,
        settings: PreferenceSyncSettings | None = None,
    ) -> None:
        super().__init__(defaults, registry)
        self._resource = resource
        self._client = client
        self._settings = settings or get_preference_sync_settings()
        self._cache = cache if cache is not None else QueryCache.from_settings(self._settings)
        self._debouncer = Debouncer(
            self._settings.debounce_seconds,
            self._write,
            name=f"save:{resource}",
        )
        self._locked: set[str] = set()
        self._hydrated = False
        self._loading = False
        # Livre quando não há leitura em andamento; gravações esperam por ele
        self._load_settled = asyncio.Event()
        self._load_settled.set()
        self._closed = False
        self._load_error: Exception | None = None
        self.subscribe(self._on_change)

    @property
    def resource(self) -> str:
        return self._resource

    @property
    def cache(self) -> QueryCache:
        return self._cache

    @property
    def is_hydrated(self) -> bool:
        return self._hydrated

    @property
    def is_syncing(self) -> bool:
        """True com leitura em andamento, gravação agendada ou em andamento."""
        return self._loading or self._debouncer.pending or self._debouncer.in_flight > 0

    @property
    def load_error(self) -> Exception | None:
        return self._load_error

    @property
    def closed(self) -> bool:
        return self._closed

    def _on_change(self, change: ViewStateChange) -> None:
        if change.origin != "user" or self._closed:
            return
        if not self._hydrated:
            self._locked.update(change.fields)
        self._debouncer.trigger()

    async def load(self) -> None:
        """Lê o documento (cache ou GET) e hidrata uma única vez.

        Gravações disparadas pelo debounce durante a leitura aguardam o fim
        dela (com ou sem sucesso) e então gravam o estado já hidratado.
        """
        if self._closed or self._hydrated:
            return

        self._load_settled.clear()
        try:
            await self._load_and_hydrate()
        finally:
            self._load_settled.set()

    async def _load_and_hydrate(self) -> None:
        key = preference_cache_key(self._resource)
        raw = self._cache.get(key)
        if raw is None:
            self._loading = True
            try:
                raw = await self._client.fetch(self._resource)
            except InfrastructureError as exc:
                self._load_error = exc
                log_sync_dropped(logger, self._resource, "load", type(exc).__name__)
                return
            finally:
                self._loading = False
            if self._closed:
                return
            self._cache.set(key, raw)

        document = parse_preference_document(raw, self._resource)
        merged = merge_preference(self.snapshot(), document, self.defaults, self._locked)
        self._hydrated = True
        self._load_error = None
        changed = self.replace(merged, origin="hydration")
        logger.debug(
            "preference_hydrated",
            extra={
                "component": "preference_sync",
                "action": "load",
                "result": "changed" if changed else "unchanged",
                "resource": self._resource,
            },
        )

    async def _write(self) -> None:
        # Gravar antes da hidratação sobrescreveria o documento salvo com defaults
        await self._load_settled.wait()
        if self._closed:
            return
        payload = build_write_payload(self._resource, self.snapshot())
        try:
            await self._client.save(payload)
        except InfrastructureError as exc:
            log_sync_dropped(logger, self._resource, "save", type(exc).__name__)
            return
        self._cache.invalidate(preference_cache_key(self._resource))
        logger.info(
            "preference_written",
            extra={
                "component": "preference_sync",
                "action": "save",
                "result": "ok",
                "resource": self._resource,
            },
        )

    async def flush(self) -> None:
        """Grava agora a alteração pendente e aguarda as gravações em andamento."""
        await self._debouncer.flush()

    async def close(self) -> None:
        """Cancela timer e gravações; a view não grava mais nada."""
        if self._closed:
            return
        self._closed = True
        await self._debouncer.aclose()

    async def __aenter__(self) -> ResourceView:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()


async def use_resource_view(
    resource_key: str,
    defaults: ViewState,
    *,
    client: GridPreferenceClientProtocol,
    cache: QueryCache | None = None,
    registry: FieldRegistry | None = None,
    settings: PreferenceSyncSettings | None = None,
) -> ResourceView:
    """Monta o ResourceView do recurso e aguarda a hidratação inicial.

    Falha de leitura não propaga: a view volta com os defaults e
    ``load_error`` preenchido.
    """
    view = ResourceView(
        resource_key,
        defaults,
        client=client,
        cache=cache,
        registry=registry,
        settings=settings,
    )
    await view.load()
    return view
