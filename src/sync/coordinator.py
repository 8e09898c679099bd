from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Protocol

from common.observable import ObservableList
from common.pokemon import Pokemon, compute_favorite_flag, favorite_ids
from state.local_store import FavoritesStoreError
from state.models import FavoriteRecord


logger = logging.getLogger(__name__)


class PokemonSource(Protocol):
    async def fetch_all(self) -> List[Pokemon]: ...


class FavoritesRepository(Protocol):
    def get_all(self) -> List[FavoriteRecord]: ...

    def insert(self, record: FavoriteRecord) -> None: ...

    def delete(self, record: FavoriteRecord) -> None: ...


class SyncCoordinator:
    """
    Publishes the full pokemon list and the favorites list as observable state.

    Lifecycle
    - `create(source=..., favorites=...)` wires explicit collaborators.
    - `start()` performs the initial `refresh()`; later calls are no-ops.

    Notes
    - Both collections go Empty -> Loading -> Populated. A failed fetch or an
      unreadable store publishes an empty list rather than an error state.
    - Store calls run in worker threads via `asyncio.to_thread`; the store
      serializes them itself.
    - Concurrent `refresh()` and `mark_favorite()` calls may interleave and
      the last publish to each collection wins.
    - The store supports `delete`, but no unfavorite operation is exposed.
    """

    def __init__(
        self,
        *,
        source: PokemonSource,
        favorites: Optional[FavoritesRepository] = None,
    ) -> None:
        self._source = source
        self._favorites = favorites
        self._started = False
        self.pokemon_list: ObservableList[Pokemon] = ObservableList()
        self.favorite_list: ObservableList[Pokemon] = ObservableList()

    @classmethod
    def create(
        cls,
        *,
        source: PokemonSource,
        favorites: Optional[FavoritesRepository] = None,
    ) -> "SyncCoordinator":
        return cls(source=source, favorites=favorites)

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> None:
        if self._started:
            return
        self._started = True
        await self.refresh()

    async def refresh(self) -> None:
        """Reload both collections; each publishes as soon as it is ready."""
        await asyncio.gather(self._refresh_list(), self._refresh_favorites())

    async def mark_favorite(self, pokemon: Pokemon) -> None:
        """Persist `pokemon` as a favorite, then republish the favorites list."""
        if self._favorites is None:
            logger.warning("Favorites store not configured; ignoring mark_favorite(%d)", pokemon.id)
            return
        await asyncio.to_thread(self._favorites.insert, FavoriteRecord.from_pokemon(pokemon))
        records = await asyncio.to_thread(self._favorites.get_all)
        self.favorite_list.publish(r.to_pokemon() for r in records)
        logger.debug("Marked pokemon %d as favorite; %d favorite(s)", pokemon.id, len(records))

    def is_favorite(self, pokemon: Pokemon) -> bool:
        return compute_favorite_flag(pokemon, favorite_ids(self.favorite_list.items))

    # --------------- Internal ---------------
    async def _refresh_list(self) -> None:
        self.pokemon_list.set_loading()
        items = await self._source.fetch_all()
        self.pokemon_list.publish(items)
        logger.debug("Published %d pokemon", len(items))

    async def _refresh_favorites(self) -> None:
        self.favorite_list.set_loading()
        items = await self._load_favorites()
        self.favorite_list.publish(items)
        logger.debug("Published %d favorite(s)", len(items))

    async def _load_favorites(self) -> List[Pokemon]:
        if self._favorites is None:
            return []
        try:
            records = await asyncio.to_thread(self._favorites.get_all)
        except FavoritesStoreError:
            logger.warning("Favorites store unreadable; publishing empty favorites", exc_info=True)
            return []
        return [r.to_pokemon() for r in records]


__all__ = [
    "FavoritesRepository",
    "PokemonSource",
    "SyncCoordinator",
]
