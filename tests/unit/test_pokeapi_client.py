from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import httpx
import pytest

from common.pokeapi import (
    MockPokemonSource,
    PokeApiClient,
    PokeApiError,
    PokeApiParseError,
    parse_pokemon_id,
)
from common.pokemon import Pokemon


def _list_payload(results: List[Dict[str, str]]) -> Dict[str, Any]:
    return {
        "count": 1302,
        "next": "https://pokeapi.co/api/v2/pokemon?offset=20&limit=20",
        "previous": None,
        "results": results,
    }


def _fetch_all(handler, **kwargs) -> List[Pokemon]:
    async def go() -> List[Pokemon]:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), timeout=10.0)
        async with PokeApiClient(client=client, **kwargs) as api:
            out = await api.fetch_all()
        await client.aclose()
        return out

    return asyncio.run(go())


def test_fetch_all_parses_single_result():
    calls = {"count": 0, "last_request": None}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        calls["last_request"] = request
        return httpx.Response(
            200,
            json=_list_payload([{"name": "pikachu", "url": "https://pokeapi.co/api/v2/pokemon/25/"}]),
        )

    out = _fetch_all(handler)

    assert calls["count"] == 1
    req = calls["last_request"]
    assert req.method == "GET"
    assert req.url.host == "pokeapi.co"
    assert req.url.path == "/api/v2/pokemon"
    assert "limit" not in req.url.params
    assert out == [Pokemon(id=25, name="pikachu")]


def test_fetch_all_preserves_order_and_ids():
    results = [
        {"name": "bulbasaur", "url": "https://pokeapi.co/api/v2/pokemon/1/"},
        {"name": "ivysaur", "url": "https://pokeapi.co/api/v2/pokemon/2/"},
        {"name": "mew", "url": "https://pokeapi.co/api/v2/pokemon/151"},
    ]

    out = _fetch_all(lambda _: httpx.Response(200, json=_list_payload(results)))

    assert [p.id for p in out] == [1, 2, 151]
    assert [p.name for p in out] == ["bulbasaur", "ivysaur", "mew"]


def test_fetch_all_skips_record_with_unparseable_url(caplog):
    results = [
        {"name": "pikachu", "url": "https://pokeapi.co/api/v2/pokemon/25/"},
        {"name": "missingno", "url": "https://pokeapi.co/api/v2/pokemon/glitch/"},
    ]

    with caplog.at_level("WARNING", logger="common.pokeapi"):
        out = _fetch_all(lambda _: httpx.Response(200, json=_list_payload(results)))

    assert out == [Pokemon(id=25, name="pikachu")]
    assert "missingno" in caplog.text


def test_fetch_all_returns_empty_on_http_error():
    out = _fetch_all(lambda _: httpx.Response(500, text="server error"))
    assert out == []


def test_fetch_all_returns_empty_on_malformed_body():
    out = _fetch_all(lambda _: httpx.Response(200, json={"count": 1, "items": []}))
    assert out == []


def test_fetch_all_returns_empty_on_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    assert _fetch_all(handler) == []


def test_fetch_all_returns_empty_on_corrupt_content_encoding():
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip at all")

    assert _fetch_all(handler) == []


def test_limit_is_sent_as_query_param():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["limit"] = request.url.params.get("limit")
        return httpx.Response(200, json=_list_payload([]))

    out = _fetch_all(handler, limit=151, base_url="https://example.test/api/v2")

    assert out == []
    assert seen["limit"] == "151"


def test_fetch_page_raises_typed_errors():
    async def go(handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        api = PokeApiClient(client=client)
        try:
            return await api.fetch_page()
        finally:
            await client.aclose()

    with pytest.raises(PokeApiError):
        asyncio.run(go(lambda _: httpx.Response(404, text="not found")))
    with pytest.raises(PokeApiParseError):
        asyncio.run(go(lambda _: httpx.Response(200, json={"results": "nope"})))

    page = asyncio.run(go(lambda _: httpx.Response(200, json=_list_payload([]))))
    assert page.count == 1302
    assert page.next is not None
    assert page.previous is None


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://pokeapi.co/api/v2/pokemon/25/", 25),
        ("https://pokeapi.co/api/v2/pokemon/25", 25),
        ("/pokemon/7//", 7),
    ],
)
def test_parse_pokemon_id(url, expected):
    assert parse_pokemon_id(url) == expected


@pytest.mark.parametrize("url", ["", "///", "https://pokeapi.co/api/v2/pokemon/pikachu/"])
def test_parse_pokemon_id_rejects_non_numeric(url):
    with pytest.raises(PokeApiParseError):
        parse_pokemon_id(url)


def test_invalid_limit_rejected():
    with pytest.raises(ValueError):
        PokeApiClient(limit=0)


def test_mock_source_returns_hardcoded_list():
    out = asyncio.run(MockPokemonSource().fetch_all())
    assert [p.name for p in out] == ["Pikachu", "Charmander", "Squirtle", "Bulbasaur"]
    assert [p.id for p in out] == [1, 2, 3, 4]
