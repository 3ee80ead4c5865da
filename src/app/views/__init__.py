"""Estado de exibição das grades e sincronização com o servidor.

Estrutura:
    - store: ViewStateStore (setters, colunas, ordenação, filtros)
    - merge: hidratação do documento e corpo do PUT
    - debounce: timer de gravação sobre asyncio
    - query_cache: cache de leituras com invalidação por chave
    - sync: ResourceView + use_resource_view
    - registry: catálogo YAML de recursos
"""

from app.views.debounce import Debouncer
from app.views.merge import build_write_payload, merge_preference, reconcile_order
from app.views.query_cache import QueryCache, preference_cache_key
from app.views.registry import (
    ResourceDefinition,
    get_resource_definition,
    load_resource_catalog,
)
from app.views.store import ViewStateChange, ViewStateStore
from app.views.sync import ResourceView, use_resource_view

__all__ = [
    "Debouncer",
    "QueryCache",
    "ResourceDefinition",
    "ResourceView",
    "ViewStateChange",
    "ViewStateStore",
    "build_write_payload",
    "get_resource_definition",
    "load_resource_catalog",
    "merge_preference",
    "preference_cache_key",
    "reconcile_order",
    "use_resource_view",
]
