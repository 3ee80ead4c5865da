"""Cliente HTTP e cliente da API de preferências."""

from app.infra.http.base import HttpClient, HttpClientConfig, HttpError
from app.infra.http.preferences_client import GridPreferencesClient

__all__ = [
    "GridPreferencesClient",
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
]
