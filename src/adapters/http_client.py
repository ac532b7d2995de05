"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base URL, timeouts, headers y logging de todas las peticiones.
- Traduce cualquier fallo de httpx (status, red, JSON) a `RemoteError`.
- Facilita testeo: se puede inyectar un `httpx.Client` con `MockTransport`.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from core.config import AppSettings
from core.domain.errors import RemoteError

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` apuntando a la API configurada."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def _error_detail(response: httpx.Response) -> str | None:
    # La API devuelve {"error": "..."} en 4xx.
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip()[:200] or None
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return None


class HttpExecutor:
    """Implementación de `Executor` sobre `httpx.Client`.

    Si no recibe un cliente, crea uno propio a partir de `settings` y lo cierra
    en `close()`. Un cliente inyectado nunca se cierra aquí.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)

    def execute(self, method: str, path: str, params: Mapping[str, Any] | None = None) -> Any:
        query = dict(params) if params else None
        logger.debug("%s %s params=%s", method, path, query)

        try:
            response = self._client.request(method, path, params=query)
        except httpx.RequestError as exc:
            logger.debug("%s %s transport failure: %s", method, path, exc)
            raise RemoteError("Request failed", path=path, cause=exc) from exc

        if not response.is_success:
            logger.debug("%s %s -> HTTP %s", method, path, response.status_code)
            raise RemoteError(
                "Unexpected response status",
                status_code=response.status_code,
                path=path,
                detail=_error_detail(response),
            )

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError(
                "Malformed JSON body",
                status_code=response.status_code,
                path=path,
                cause=exc,
            ) from exc

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpExecutor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
