"""API: camada de borda HTTP.

Responsabilidades:
- Expor as preferências de grade (GET/PUT /preferences/grid)
- Validar headers, query params e corpo
- Delegar a persistência ao store injetado no app.state

NÃO PODE conter: regras de merge, debounce ou avaliação de filtros.
"""
