from __future__ import annotations

import copy
from typing import Any, Callable, Mapping

import httpx
import pytest

from adapters.http_client import HttpExecutor, build_client
from core.config import AppSettings

BASE_URL = "https://api.test/api"

RICK = {
    "id": 1,
    "name": "Rick Sanchez",
    "status": "Alive",
    "species": "Human",
    "type": "",
    "gender": "Male",
    "origin": {"name": "Earth (C-137)", "url": "https://rickandmortyapi.com/api/location/1"},
    "location": {"name": "Citadel of Ricks", "url": "https://rickandmortyapi.com/api/location/3"},
    "image": "https://rickandmortyapi.com/api/character/avatar/1.jpeg",
    "episode": [
        "https://rickandmortyapi.com/api/episode/1",
        "https://rickandmortyapi.com/api/episode/2",
    ],
    "url": "https://rickandmortyapi.com/api/character/1",
    "created": "2017-11-04T18:48:46.250Z",
}

MORTY = {
    "id": 2,
    "name": "Morty Smith",
    "status": "Alive",
    "species": "Human",
    "type": "",
    "gender": "Male",
    "origin": {"name": "unknown", "url": ""},
    "location": {"name": "Citadel of Ricks", "url": "https://rickandmortyapi.com/api/location/3"},
    "image": "https://rickandmortyapi.com/api/character/avatar/2.jpeg",
    "episode": ["https://rickandmortyapi.com/api/episode/1"],
    "url": "https://rickandmortyapi.com/api/character/2",
    "created": "2017-11-04T18:50:21.651Z",
}


class RecordingExecutor:
    """Fake executor: records every call and replays queued responses.

    A queued exception instance is raised instead of returned.
    """

    def __init__(self, *responses: Any) -> None:
        self.calls: list[tuple[str, str, dict[str, Any] | None]] = []
        self._responses = list(responses)

    def queue(self, *responses: Any) -> None:
        self._responses.extend(responses)

    def execute(self, method: str, path: str, params: Mapping[str, Any] | None = None) -> Any:
        self.calls.append((method, path, dict(params) if params is not None else None))
        if not self._responses:
            raise AssertionError(f"unexpected request {method} {path}")
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def rick() -> dict[str, Any]:
    return copy.deepcopy(RICK)


@pytest.fixture
def morty() -> dict[str, Any]:
    return copy.deepcopy(MORTY)


@pytest.fixture
def recorder() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, base_url=BASE_URL)


@pytest.fixture
def mock_executor(settings: AppSettings) -> Callable[[Callable[[httpx.Request], httpx.Response]], HttpExecutor]:
    """Build an `HttpExecutor` whose requests are answered by `handler`."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> HttpExecutor:
        client = build_client(settings, transport=httpx.MockTransport(handler))
        return HttpExecutor(settings, client=client)

    return factory
