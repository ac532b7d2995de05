"""Contrato del executor HTTP.

El modelo de recursos solo describe peticiones (método, ruta, parámetros);
quién las ejecuta es intercambiable (httpx en producción, un fake en tests).
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class Executor(Protocol):
    """Ejecuta una petición y devuelve el JSON ya parseado.

    Reglas:
    - Síncrono y bloqueante: una llamada, una respuesta.
    - Cualquier fallo (status, red, cuerpo inválido) se reporta como `RemoteError`.
    """

    def execute(self, method: str, path: str, params: Mapping[str, Any] | None = None) -> Any:
        ...
