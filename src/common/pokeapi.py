from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from .pokemon import Pokemon


DEFAULT_BASE_URL = "https://pokeapi.co/api/v2/"

logger = logging.getLogger(__name__)


class PokeApiError(RuntimeError):
    """Base error for the PokeAPI client."""


class PokeApiParseError(PokeApiError):
    """Response body or a record in it has an unexpected structure."""


class PokemonResult(BaseModel):
    name: str
    url: str


class PokemonListResponse(BaseModel):
    """Envelope returned by `GET /pokemon`.

    `next` and `previous` are pagination cursors; only the first page is read.
    """

    count: int
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[PokemonResult]


def parse_pokemon_id(url: str) -> int:
    """Extract the numeric id from a resource URL such as `.../pokemon/25/`."""
    segments = [s for s in url.split("/") if s.strip()]
    if not segments:
        raise PokeApiParseError(f"Cannot derive pokemon id from url {url!r}")
    try:
        return int(segments[-1])
    except ValueError as ex:
        raise PokeApiParseError(f"Cannot derive pokemon id from url {url!r}") from ex


def to_pokemon(result: PokemonResult) -> Pokemon:
    return Pokemon(id=parse_pokemon_id(result.url), name=result.name)


class PokeApiClient:
    """
    Minimal async client for the PokeAPI listing endpoint.

    Notes
    - Reads the first page of `GET {base_url}/pokemon` only; pagination
      cursors are parsed but not followed.
    - No retries. `fetch_all()` resolves to an empty list when the request
      fails, `fetch_page()` raises instead.
    - An injected `httpx.AsyncClient` is left open on `aclose()`.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        limit: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if limit is not None and limit <= 0:
            raise ValueError("limit must be > 0")
        self._base_url = base_url.rstrip("/") + "/"
        self._timeout = timeout
        self._limit = limit
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "PokeApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # --------------- Public API ---------------
    async def fetch_page(self) -> PokemonListResponse:
        """
        Fetch and validate the first page of the listing.

        Raises PokeApiError on any httpx request failure (transport, timeout,
        redirects, content decoding), non-200 responses or undecodable JSON, and PokeApiParseError when the envelope does not
        match the expected shape.
        """
        params: Dict[str, Any] = {}
        if self._limit is not None:
            params["limit"] = self._limit

        try:
            resp = await self._client.get(f"{self._base_url}pokemon", params=params)
        except httpx.HTTPError as exc:
            raise PokeApiError("Request to PokeAPI failed") from exc

        if resp.status_code != 200:
            raise PokeApiError(f"HTTP {resp.status_code} from PokeAPI: {resp.text[:200]}")

        try:
            payload = resp.json()
        except ValueError as exc:
            raise PokeApiError("Failed to parse JSON from PokeAPI") from exc

        try:
            return PokemonListResponse.model_validate(payload)
        except ValidationError as ve:
            raise PokeApiParseError(f"Failed to parse pokemon list payload: {ve}") from ve

    async def fetch_all(self) -> List[Pokemon]:
        """
        Return every Pokemon on the first page, in response order.

        Records whose url does not end in a numeric id are skipped. Any
        request failure resolves to an empty list.
        """
        try:
            page = await self.fetch_page()
        except PokeApiError:
            logger.warning("Pokemon list fetch failed; returning empty list", exc_info=True)
            return []

        items: List[Pokemon] = []
        for result in page.results:
            try:
                items.append(to_pokemon(result))
            except PokeApiParseError as ex:
                logger.warning("Skipping pokemon %r: %s", result.name, ex)
        logger.debug("Fetched %d of %d pokemon", len(items), page.count)
        return items


class MockPokemonSource:
    """Hardcoded source with the same `fetch_all()` contract as the client."""

    def __init__(self, pokemon: Optional[List[Pokemon]] = None) -> None:
        self._pokemon = list(pokemon) if pokemon is not None else [
            Pokemon(id=1, name="Pikachu"),
            Pokemon(id=2, name="Charmander"),
            Pokemon(id=3, name="Squirtle"),
            Pokemon(id=4, name="Bulbasaur"),
        ]

    async def fetch_all(self) -> List[Pokemon]:
        return list(self._pokemon)


__all__ = [
    "MockPokemonSource",
    "PokeApiClient",
    "PokeApiError",
    "PokeApiParseError",
    "PokemonListResponse",
    "PokemonResult",
    "parse_pokemon_id",
]
