"""Typed facade over the resource models.

`ApiModel` only speaks JSON. This module is the layer on top of it that
deserializes responses into concrete models, binds every model to a shared
executor, and implements `refresh` (fetch + `copy_from`) and page walking.
Entry points (CLI, scripts, tests) go through `ResourceClient` instead of
wiring executors by hand.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping, TypeVar

from adapters.http_client import HttpExecutor
from core.config import AppSettings
from core.domain.api_model import ApiModel
from core.domain.errors import RemoteError
from core.interfaces.executor import Executor

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=ApiModel)


class ResourceClient:
    """Builds, fetches and refreshes resource models through one executor."""

    def __init__(self, settings: AppSettings | None = None, *, executor: Executor | None = None) -> None:
        self._settings = settings or AppSettings()
        self._owned: HttpExecutor | None = None
        if executor is None:
            self._owned = HttpExecutor(self._settings)
            executor = self._owned
        self._executor = executor

    @property
    def executor(self) -> Executor:
        return self._executor

    def close(self) -> None:
        if self._owned is not None:
            self._owned.close()

    def __enter__(self) -> ResourceClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def model(self, resource_cls: type[M], **data: Any) -> M:
        """New instance of `resource_cls` bound to this client."""

        return self._bind(resource_cls(**data))

    def fetch(self, resource_cls: type[M], identifier: Any) -> M:
        # The probe carries the id so the stored-id precondition holds.
        probe = self.model(resource_cls, id=identifier)
        return self._load(resource_cls, probe.get(identifier))

    def fetch_many(self, resource_cls: type[M], identifiers: Iterable[Any]) -> list[M]:
        ids = list(identifiers)
        if not ids:
            return []
        payload = self.model(resource_cls).get_many(ids)
        # A single id yields a bare object instead of an array.
        if isinstance(payload, dict):
            payload = [payload] if "id" in payload else []
        return [self._load(resource_cls, item) for item in payload]

    def search(
        self,
        resource_cls: type[M],
        filters: Mapping[str, Any] | None = None,
        page: int | None = None,
    ) -> list[M]:
        """One page of `resource_cls` matching `filters`.

        Without `page` this is a plain `query()`, which requires at least one
        filter. With `page` any filters are optional.
        """

        model = self.model(resource_cls)
        for key, value in (filters or {}).items():
            model.add_filter(key, value)
        results = model.query() if page is None else model.next_page(page)
        return [self._load(resource_cls, item) for item in results]

    def iter_all(self, resource_cls: type[M], filters: Mapping[str, Any] | None = None) -> Iterator[M]:
        """Yield every match, walking pages until one comes back empty."""

        model = self.model(resource_cls)
        for key, value in (filters or {}).items():
            model.add_filter(key, value)

        page = 1
        while True:
            try:
                results = model.next_page(page)
            except RemoteError as exc:
                # Past the last page the API answers 404.
                if page > 1 and exc.status_code == 404:
                    return
                raise
            if not results:
                return
            logger.debug("%s page %s: %s results", resource_cls.resource_name, page, len(results))
            for item in results:
                yield self._load(resource_cls, item)
            page += 1

    def refresh(self, model: M) -> M:
        """Re-fetch `model` and copy its server-assigned metadata back into it."""

        if model.executor is None:
            self._bind(model)
        fresh = type(model).model_validate(model.refresh_model())
        model.copy_from(fresh)
        return model

    def _bind(self, model: M) -> M:
        return model.using(self._executor, swallow_listing_errors=self._settings.swallow_listing_errors)

    def _load(self, resource_cls: type[M], payload: dict[str, Any]) -> M:
        return self._bind(resource_cls.model_validate(payload))
