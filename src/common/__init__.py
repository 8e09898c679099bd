"""
Common utilities for the pokedex app.

Modules:
- pokemon: Pokemon entity and the derived favorite flag
- pokeapi: PokeAPI listing client and a hardcoded mock source
- observable: Observable list state (Empty -> Loading -> Populated)
- config: Settings resolved from arguments or environment
"""

__all__ = [
    "config",
    "observable",
    "pokeapi",
    "pokemon",
]
