"""Modelo genérico de recursos de la API (Pydantic v2).

Un `ApiModel` concreto representa un tipo de recurso (character, location,
episode...) y traduce cuatro operaciones lógicas a peticiones HTTP:

- `get(id)`        -> GET /<recurso>/<id>
- `get_many(ids)`  -> GET /<recurso>/<id1>,<id2>,...
- `query()`        -> GET /<recurso>?<filtros>
- `next_page(n)`   -> GET /<recurso>?<filtros>&page=n

Política de errores:
- `get`/`get_many` propagan `RemoteError`.
- `query`/`next_page` degradan a lista vacía ante `RemoteError` (configurable
  con `using(..., swallow_listing_errors=False)`).
- `ValidationError` nunca se captura aquí.

Los filtros se acumulan entre llamadas y solo se limpian con `reset_filters()`.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, ClassVar, Generic, Iterable, Self, TypeVar

from pydantic import BaseModel, Field, PrivateAttr
from pydantic.config import ConfigDict

from core.domain.errors import RemoteError, ValidationError
from core.interfaces.executor import Executor

logger = logging.getLogger(__name__)

PK = TypeVar("PK")

GET = "GET"

# Campos asignados por el servidor: se leen, nunca se envían.
READ_ONLY_FIELDS = frozenset({"id", "created"})


class ApiModel(BaseModel, Generic[PK]):
    """Base de todos los recursos.

    Cada subclase concreta declara `resource_name`, el segmento de ruta de su
    colección (`/<resource_name>`).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    resource_name: ClassVar[str]

    id: PK | None = Field(
        default=None,
        description="Identificador asignado por la API.",
    )
    created: datetime | None = Field(
        default=None,
        description="Momento de creación del registro en la API (solo lectura).",
    )

    _filters: dict[str, Any] = PrivateAttr(default_factory=dict)
    _executor: Executor | None = PrivateAttr(default=None)
    _swallow_listing_errors: bool = PrivateAttr(default=True)

    def __init__(self, *, executor: Executor | None = None, **data: Any) -> None:
        super().__init__(**data)
        self._executor = executor

    # ------------------------------------------------------------------
    # Estado local
    # ------------------------------------------------------------------

    @property
    def executor(self) -> Executor | None:
        return self._executor

    @property
    def filters(self) -> dict[str, Any]:
        """Copia de los filtros acumulados."""

        return dict(self._filters)

    def using(self, executor: Executor, *, swallow_listing_errors: bool | None = None) -> Self:
        """Asocia un executor (y opcionalmente la política de listados) y devuelve `self`."""

        self._executor = executor
        if swallow_listing_errors is not None:
            self._swallow_listing_errors = swallow_listing_errors
        return self

    def add_filter(self, key: str, value: Any) -> None:
        if key is None or value is None:
            raise ValidationError("Filter key and value must not be None.")
        self._filters[key] = value

    def reset_filters(self) -> None:
        self._filters.clear()

    def copy_from(self, other: Self) -> None:
        """Copia solo `created` desde `other`.

        El id y los filtros del receptor no se tocan: esto sirve para refrescar
        metadata inmutable del servidor, no para transferir estado.
        """

        if type(other) is not type(self):
            raise ValidationError(
                f"Cannot copy from {type(other).__name__} into {type(self).__name__}."
            )
        self.created = other.created

    def to_wire(self) -> dict[str, Any]:
        """Forma de salida (cuerpos HTTP): sin los campos de solo lectura."""

        return self.model_dump(mode="json", by_alias=True, exclude=set(READ_ONLY_FIELDS))

    # ------------------------------------------------------------------
    # Operaciones remotas
    # ------------------------------------------------------------------

    def refresh_model(self) -> dict[str, Any]:
        """Vuelve a pedir el propio recurso. No modifica la instancia."""

        return self.get(self.id)

    def get(self, identifier: PK) -> dict[str, Any]:
        # Se valida el id propio aunque la ruta use el parámetro.
        self._validate_id()
        if identifier is None:
            raise ValidationError("The identifier to fetch must not be None.")
        return self._execute(f"/{self.resource_name}/{identifier}")

    def get_many(self, identifiers: Iterable[PK]) -> list[dict[str, Any]]:
        joined = ",".join(str(identifier) for identifier in identifiers)
        return self._execute(f"/{self.resource_name}/{joined}")

    def query(self) -> list[dict[str, Any]]:
        if not self._filters:
            raise ValidationError("No filter criteria defined.")
        return self._list()

    def next_page(self, page: int | None = None) -> list[dict[str, Any]]:
        if page is None or page <= 0:
            page = 1
        self._filters["page"] = page
        return self._list()

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _validate_id(self) -> None:
        if self.id is None:
            raise ValidationError("The Object ID must be set in order to use this method.")

    def _require_executor(self) -> Executor:
        if self._executor is None:
            raise ValidationError(
                f"No executor bound to {type(self).__name__}; pass executor= or call using()."
            )
        return self._executor

    def _execute(self, path: str, params: dict[str, Any] | None = None) -> Any:
        executor = self._require_executor()
        return executor.execute(GET, path, params)

    def _list(self) -> list[dict[str, Any]]:
        executor = self._require_executor()
        path = f"/{self.resource_name}"
        params = dict(self._filters)
        try:
            response = executor.execute(GET, path, params)
            return _extract_results(path, response)
        except RemoteError as exc:
            if not self._swallow_listing_errors:
                raise
            logger.warning("Listing %s failed, returning no results: %s", path, exc)
            return []


def _extract_results(path: str, response: Any) -> list[dict[str, Any]]:
    results = response.get("results") if isinstance(response, dict) else None
    if not isinstance(results, list):
        raise RemoteError("Listing response has no 'results' array", path=path)
    return results
