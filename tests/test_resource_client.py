from __future__ import annotations

import httpx
import pytest

from core.config import AppSettings
from core.domain.errors import RemoteError, ValidationError
from core.domain.models import Character, Episode
from core.services.resource_client import ResourceClient


@pytest.fixture
def client(settings, recorder):
    return ResourceClient(settings, executor=recorder)


@pytest.fixture
def strict_client(recorder):
    settings = AppSettings(_env_file=None, swallow_listing_errors=False)
    return ResourceClient(settings, executor=recorder)


def test_model_is_bound(client, recorder):
    model = client.model(Character, id=7)
    assert model.executor is recorder
    assert model.id == 7


def test_fetch_returns_typed_model(client, recorder, rick):
    recorder.queue(rick)

    model = client.fetch(Character, 1)

    assert isinstance(model, Character)
    assert model.name == "Rick Sanchez"
    assert model.executor is recorder
    assert recorder.calls == [("GET", "/character/1", None)]


def test_fetch_propagates_remote_error(client, recorder):
    recorder.queue(RemoteError("Unexpected response status", status_code=404, path="/character/9999"))
    with pytest.raises(RemoteError):
        client.fetch(Character, 9999)


def test_fetch_many(client, recorder, rick, morty):
    recorder.queue([rick, morty])

    models = client.fetch_many(Character, [1, 2])

    assert [m.id for m in models] == [1, 2]
    assert recorder.calls == [("GET", "/character/1,2", None)]


def test_fetch_many_normalizes_single_object(client, recorder, rick):
    recorder.queue(rick)
    models = client.fetch_many(Character, [1])
    assert [m.name for m in models] == ["Rick Sanchez"]


def test_fetch_many_without_identifiers_skips_request(client, recorder):
    recorder.queue({"info": {"count": 1, "pages": 1}, "results": [{"id": 1}]})

    assert client.fetch_many(Character, []) == []
    assert client.fetch_many(Character, iter(())) == []
    assert recorder.calls == []


def test_fetch_many_ignores_object_without_id(client, recorder):
    recorder.queue({"info": {"count": 1, "pages": 1}, "results": [{"id": 1}]})
    assert client.fetch_many(Character, [1]) == []


def test_search_filter_keys_do_not_clash_with_arguments(client, recorder):
    recorder.queue({"results": []})
    client.search(Character, {"resource_cls": "x", "filters": "y"})
    assert recorder.calls == [("GET", "/character", {"resource_cls": "x", "filters": "y"})]


def test_search_with_filters(client, recorder, rick):
    recorder.queue({"info": {"count": 1, "pages": 1}, "results": [rick]})

    models = client.search(Character, {"name": "rick", "status": "alive"})

    assert [m.id for m in models] == [1]
    assert recorder.calls == [("GET", "/character", {"name": "rick", "status": "alive"})]


def test_search_without_filters_or_page_fails(client, recorder):
    with pytest.raises(ValidationError):
        client.search(Character)
    assert recorder.calls == []


def test_search_page_without_filters(client, recorder, morty):
    recorder.queue({"results": [morty]})
    models = client.search(Character, page=2)
    assert [m.id for m in models] == [2]
    assert recorder.calls == [("GET", "/character", {"page": 2})]


def test_search_swallows_remote_error_by_default(client, recorder):
    recorder.queue(RemoteError("Unexpected response status", status_code=404, path="/character"))
    assert client.search(Character, {"name": "nobody"}) == []


def test_search_propagates_when_configured(strict_client, recorder):
    recorder.queue(RemoteError("Unexpected response status", status_code=404, path="/character"))
    with pytest.raises(RemoteError):
        strict_client.search(Character, {"name": "nobody"})


def test_iter_all_walks_until_empty_page(client, recorder, rick, morty):
    recorder.queue({"results": [rick]}, {"results": [morty]}, {"results": []})

    models = list(client.iter_all(Character, {"species": "Human"}))

    assert [m.id for m in models] == [1, 2]
    assert [call[2] for call in recorder.calls] == [
        {"species": "Human", "page": 1},
        {"species": "Human", "page": 2},
        {"species": "Human", "page": 3},
    ]


def test_iter_all_stops_on_404_past_last_page(strict_client, recorder, rick):
    recorder.queue(
        {"results": [rick]},
        RemoteError("Unexpected response status", status_code=404, path="/character"),
    )
    assert [m.id for m in strict_client.iter_all(Character)] == [1]


def test_iter_all_propagates_first_page_failure(strict_client, recorder):
    recorder.queue(RemoteError("Unexpected response status", status_code=500, path="/character"))
    with pytest.raises(RemoteError):
        list(strict_client.iter_all(Character))


def test_refresh_only_updates_created(client, recorder, rick):
    recorder.queue(rick)
    model = Character(id=1, name="Local edit")
    model.add_filter("status", "alive")

    refreshed = client.refresh(model)

    assert refreshed is model
    assert model.created is not None
    assert model.created.year == 2017
    assert model.name == "Local edit"
    assert model.id == 1
    assert model.filters == {"status": "alive"}
    assert recorder.calls == [("GET", "/character/1", None)]


def test_end_to_end_over_http(settings, mock_executor):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/episode/1,2":
            return httpx.Response(
                200,
                json=[
                    {"id": 1, "name": "Pilot", "episode": "S01E01", "created": "2017-11-10T12:56:33.798Z"},
                    {"id": 2, "name": "Lawnmower Dog", "episode": "S01E02", "created": "2017-11-10T12:56:33.916Z"},
                ],
            )
        if request.url.path == "/api/episode":
            return httpx.Response(404, json={"error": "There is nothing here"})
        return httpx.Response(500)

    with ResourceClient(settings, executor=mock_executor(handler)) as client:
        episodes = client.fetch_many(Episode, [1, 2])
        assert [e.code for e in episodes] == ["S01E01", "S01E02"]
        assert client.search(Episode, {"name": "nothing"}) == []
