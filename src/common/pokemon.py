from __future__ import annotations

from typing import Iterable, Set

from pydantic import BaseModel, ConfigDict


class Pokemon(BaseModel):
    """A single creature shown in the list.

    Identity is `id`. Instances are immutable; whether a Pokemon is a favorite
    is derived at render time with `compute_favorite_flag`, never stored here.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str


def favorite_ids(favorites: Iterable[Pokemon]) -> Set[int]:
    return {p.id for p in favorites}


def compute_favorite_flag(pokemon: Pokemon, favorites: Set[int]) -> bool:
    """Return True when `pokemon` is in the favorites id set."""
    return pokemon.id in favorites


__all__ = [
    "Pokemon",
    "compute_favorite_flag",
    "favorite_ids",
]
