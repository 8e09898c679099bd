"""
Local persistence for favorited pokemon.

This package defines the persisted record schema and a file-backed store
that keeps it as deterministic JSON, optionally encrypted with Fernet.
"""

from .local_store import FavoritesStoreError, LocalFavoritesStore
from .models import FavoriteRecord, FavoritesTable

__all__ = [
    "FavoriteRecord",
    "FavoritesStoreError",
    "FavoritesTable",
    "LocalFavoritesStore",
]
