from __future__ import annotations

from dataclasses import dataclass
from typing import List

from common.observable import LoadStatus, Snapshot
from common.pokemon import Pokemon, compute_favorite_flag, favorite_ids
from sync.coordinator import SyncCoordinator


@dataclass(frozen=True)
class PokemonRow:
    """One rendered list entry.

    Attributes
    - pokemon: the entity shown
    - is_favorite: badge state, derived from the latest favorites snapshot
    """

    pokemon: Pokemon
    is_favorite: bool


class PokedexView:
    """
    Consumer of the coordinator's two observable collections.

    Keeps the latest snapshot of each and forwards the single user intent,
    "mark this pokemon as favorite", back to the coordinator.
    """

    def __init__(self, coordinator: SyncCoordinator) -> None:
        self._coordinator = coordinator
        self._pokemon: Snapshot[Pokemon] = Snapshot(LoadStatus.EMPTY)
        self._favorites: Snapshot[Pokemon] = Snapshot(LoadStatus.EMPTY)
        self._unsubscribe = [
            coordinator.pokemon_list.subscribe(self._on_pokemon),
            coordinator.favorite_list.subscribe(self._on_favorites),
        ]

    def close(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []

    @property
    def list_status(self) -> LoadStatus:
        return self._pokemon.status

    @property
    def favorites_status(self) -> LoadStatus:
        return self._favorites.status

    def rows(self) -> List[PokemonRow]:
        ids = favorite_ids(self._favorites.items)
        return [PokemonRow(p, compute_favorite_flag(p, ids)) for p in self._pokemon.items]

    def favorites(self) -> List[Pokemon]:
        return list(self._favorites.items)

    async def on_like_click(self, pokemon: Pokemon) -> None:
        await self._coordinator.mark_favorite(pokemon)

    def render(self) -> List[str]:
        """Plain-text rendering: favorites strip, then one line per pokemon."""
        strip = " ".join(p.name for p in self._favorites.items)
        lines = [f"Favorites: {strip}" if strip else "Favorites: -"]
        for row in self.rows():
            badge = "[*]" if row.is_favorite else "[ ]"
            lines.append(f"{badge} {row.pokemon.name}")
        return lines

    def _on_pokemon(self, snapshot: Snapshot[Pokemon]) -> None:
        self._pokemon = snapshot

    def _on_favorites(self, snapshot: Snapshot[Pokemon]) -> None:
        self._favorites = snapshot
