"""Errores del cliente.

Dos familias, con políticas de propagación distintas:
- `ValidationError`: precondición local violada (id ausente, filtros vacíos,
  argumentos nulos). Se lanza antes de cualquier llamada de red.
- `RemoteError`: el executor HTTP reportó un fallo (status no 2xx, red, JSON
  inválido).
"""

from __future__ import annotations


class ApiError(Exception):
    """Base común de los errores de `rmapi`."""


class ValidationError(ApiError, ValueError):
    """Precondición del llamador no satisfecha."""


class RemoteError(ApiError):
    """Fallo reportado por el executor HTTP.

    Atributos:
    - `status_code`: código HTTP si hubo respuesta.
    - `path`: ruta solicitada.
    - `cause`: excepción de transporte/parsing original, si la hay.
    - `detail`: mensaje de error devuelto por la API (campo `error`), si lo hay.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        path: str | None = None,
        cause: BaseException | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.path = path
        self.cause = cause
        self.detail = detail

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.path:
            parts.append(f"path={self.path}")
        if self.detail:
            parts.append(f"detail={self.detail}")
        if self.cause is not None:
            parts.append(f"cause={type(self.cause).__name__}: {self.cause}")
        return " | ".join(parts)
