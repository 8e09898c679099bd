from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from common.pokemon import Pokemon


SCHEMA_VERSION = 3


class FavoriteRecord(BaseModel):
    """
    Persisted form of a favorited Pokemon.

    Fields
    - id: Pokemon id, the primary key of the favorites table.
    - name: display name at the time it was favorited.
    - type: reserved; always written as an empty string.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str = ""
    type: str = ""

    @classmethod
    def from_pokemon(cls, pokemon: Pokemon) -> "FavoriteRecord":
        return cls(id=pokemon.id, name=pokemon.name, type="")

    def to_pokemon(self) -> Pokemon:
        return Pokemon(id=self.id, name=self.name)


class FavoritesTable(BaseModel):
    """
    Document written to disk by the local favorites store.

    Notes
    - `records` are kept sorted by id and hold at most one record per id.
    - The stored object is the deterministic JSON encoding of this model,
      optionally encrypted with Fernet.
    """

    schema_version: int = Field(default=SCHEMA_VERSION, description="Layout version of the document")
    records: List[FavoriteRecord] = Field(default_factory=list, description="Favorited pokemon")

    @classmethod
    def empty(cls) -> "FavoritesTable":
        """Convenience constructor for a fresh, empty table."""
        return cls()
