from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

import httpx

from common.config import Settings
from common.pokeapi import MockPokemonSource, PokeApiClient
from state.local_store import LocalFavoritesStore
from sync.coordinator import SyncCoordinator

from .view import PokedexView


logger = logging.getLogger(__name__)


def build_coordinator(
    settings: Settings,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[SyncCoordinator, Optional[PokeApiClient]]:
    """Wire the coordinator from settings.

    Returns the coordinator and the API client it uses (None for the mock
    source) so the caller can close it.
    """
    api: Optional[PokeApiClient] = None
    if settings.use_mock:
        source = MockPokemonSource()
    else:
        api = PokeApiClient(
            base_url=settings.base_url,
            timeout=settings.timeout,
            limit=settings.page_limit,
            client=client,
        )
        source = api

    store = LocalFavoritesStore(settings.favorites_path, fernet_key=settings.fernet_key)
    return SyncCoordinator.create(source=source, favorites=store), api


async def _run(settings: Settings, client: Optional[httpx.AsyncClient]) -> Dict[str, Any]:
    coordinator, api = build_coordinator(settings, client=client)
    view = PokedexView(coordinator)
    try:
        await coordinator.start()
    finally:
        if api is not None:
            await api.aclose()

    lines = view.render()
    view.close()
    out = {
        "ok": True,
        "pokemon": len(view.rows()),
        "favorites": len(view.favorites()),
        "lines": lines,
    }
    logger.info("Loaded %d pokemon, %d favorite(s)", out["pokemon"], out["favorites"])
    return out


def run_once(
    settings: Optional[Settings] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """Load list and favorites once; returns `{ok, pokemon, favorites, lines}` counts and rendered lines."""
    return asyncio.run(_run(settings or Settings.from_env(), client))
