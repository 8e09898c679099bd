"""
Presentation-side consumers of the coordinator state.

Modules:
- view: row/badge derivation and the "mark favorite" intent
- app: settings-driven wiring and a single-run entrypoint
"""

from .view import PokedexView, PokemonRow

__all__ = ["PokedexView", "PokemonRow"]
