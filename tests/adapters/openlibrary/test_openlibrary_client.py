from __future__ import annotations

import asyncio

import httpx
import pytest

from pocketlibrary.adapters.openlibrary import OpenLibraryCatalogClient
from pocketlibrary.config import ConfigurationError, OpenLibraryConfig, get_openlibrary_config
from pocketlibrary.domain.errors import CatalogFault
from tests.helpers.http import RequestLog, make_client_factory

HOBBIT_PAYLOAD: dict[str, object] = {
    "numFound": 3,
    "docs": [
        {
            "key": "/works/OL27448W",
            "title": "The Hobbit",
            "author_name": ["J.R.R. Tolkien"],
            "first_publish_year": 1937,
            "cover_i": 6979861,
        },
        {"key": "/works/OL2W", "title": "The Hobbit: Graphic Novel"},
        {"title": "No key at all"},
    ],
}


def _client(
    handler: RequestLog,
    config: OpenLibraryConfig | None = None,
) -> OpenLibraryCatalogClient:
    return OpenLibraryCatalogClient(
        config=config or OpenLibraryConfig(),
        client_factory=make_client_factory(handler),
    )


def test_search_returns_records_and_sends_expected_params() -> None:
    handler = RequestLog(lambda _request: httpx.Response(200, json=HOBBIT_PAYLOAD))

    records = asyncio.run(_client(handler).search("Hobbit"))

    assert [record.id for record in records] == ["OL27448W", "OL2W"]
    hobbit = records[0]
    assert hobbit.title == "The Hobbit"
    assert hobbit.author == "J.R.R. Tolkien"
    assert hobbit.year == 1937
    assert hobbit.cover_url == "https://covers.openlibrary.org/b/id/6979861-M.jpg"
    assert records[1].author == "Unknown"

    request = handler.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/search.json"
    assert request.url.params["q"] == "Hobbit"
    assert request.url.params["fields"] == "key,title,author_name,first_publish_year,cover_i"
    assert request.url.params["limit"] == "20"


def test_same_work_maps_to_same_id_across_searches() -> None:
    handler = RequestLog(lambda _request: httpx.Response(200, json=HOBBIT_PAYLOAD))
    client = _client(handler)

    first = asyncio.run(client.search("Hobbit"))
    second = asyncio.run(client.search("tolkien hobbit"))

    assert first[0].id == second[0].id == "OL27448W"


def test_search_with_no_docs_returns_empty_list() -> None:
    handler = RequestLog(lambda _request: httpx.Response(200, json={"numFound": 0, "docs": []}))

    assert asyncio.run(_client(handler).search("zzzz")) == []


def test_search_honours_configured_base_url_and_limit() -> None:
    handler = RequestLog(lambda _request: httpx.Response(200, json={"docs": []}))
    config = OpenLibraryConfig(base_url="https://catalog.example/api/", limit=5)

    asyncio.run(_client(handler, config).search("Dune"))

    request = handler.requests[0]
    assert request.url.host == "catalog.example"
    assert request.url.path == "/api/search.json"
    assert request.url.params["limit"] == "5"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, content=b"<html>not json</html>"),
        httpx.Response(200, json=["unexpected", "list"]),
        httpx.Response(200, json={"docs": "not-a-list"}),
    ],
)
def test_search_failures_raise_catalog_fault(response: httpx.Response) -> None:
    handler = RequestLog(lambda _request: response)

    with pytest.raises(CatalogFault) as exc:
        asyncio.run(_client(handler).search("Hobbit"))

    assert exc.value.query == "Hobbit"


def test_network_error_raises_catalog_fault() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    client = OpenLibraryCatalogClient(client_factory=make_client_factory(handler))

    with pytest.raises(CatalogFault):
        asyncio.run(client.search("Hobbit"))


def test_get_openlibrary_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("POCKETLIBRARY_CATALOG_URL", "https://catalog.example/api")
    monkeypatch.setenv("POCKETLIBRARY_CATALOG_LIMIT", "7")

    config = get_openlibrary_config()

    assert config.base_url == "https://catalog.example/api/"
    assert config.limit == 7
    assert config.resilience.base_url == "https://catalog.example/api/"


def test_get_openlibrary_config_rejects_non_positive_limit(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("POCKETLIBRARY_CATALOG_URL", raising=False)
    monkeypatch.setenv("POCKETLIBRARY_CATALOG_LIMIT", "0")

    with pytest.raises(ConfigurationError):
        get_openlibrary_config()
