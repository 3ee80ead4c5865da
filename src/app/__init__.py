"""App: estado de exibição das grades, sincronização e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: ViewState e documento de preferência
- views/: store em memória, merge, debounce, cache e sincronização
- infra/: implementações concretas de IO (HTTP, stores)
- protocols/: contratos/interfaces
- observability/: correlation_id para logs estruturados

Padrão: app executa; api adapta; filters calcula; utils apoia.
"""
