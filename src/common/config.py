from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .pokeapi import DEFAULT_BASE_URL


ENV_API_BASE = "POKEDEX_API_BASE"
ENV_FAVORITES_PATH = "POKEDEX_FAVORITES_PATH"
ENV_FERNET_KEY = "POKEDEX_FERNET_KEY"
ENV_USE_MOCK = "POKEDEX_USE_MOCK"
ENV_PAGE_LIMIT = "POKEDEX_PAGE_LIMIT"
ENV_HTTP_TIMEOUT = "POKEDEX_HTTP_TIMEOUT"

DEFAULT_FAVORITES_PATH = os.path.join(".cache", "pokemon_favorites.json")


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.environ.get(name)
    return val if val not in (None, "") else default


def _parse_bool(s: Optional[str]) -> bool:
    return (s or "").strip().lower() in ("1", "true", "yes", "on")


def _parse_number(name: str, s: Optional[str], kind):
    if s is None:
        return None
    try:
        return kind(s)
    except ValueError as ex:
        raise RuntimeError(f"Invalid configuration: {name}={s!r}") from ex


@dataclass(frozen=True)
class Settings:
    """
    Wiring options for the remote source and the favorites store.

    Environment variables (optional, see `from_env`)
    - `POKEDEX_API_BASE`:       PokeAPI base url
    - `POKEDEX_FAVORITES_PATH`: path of the local favorites document
    - `POKEDEX_FERNET_KEY`:     urlsafe base64 Fernet key; enables encryption at rest
    - `POKEDEX_USE_MOCK`:       use the hardcoded mock list instead of the API
    - `POKEDEX_PAGE_LIMIT`:     `limit` query parameter for the listing request
    - `POKEDEX_HTTP_TIMEOUT`:   HTTP timeout in seconds
    """

    base_url: str = DEFAULT_BASE_URL
    favorites_path: str = DEFAULT_FAVORITES_PATH
    fernet_key: Optional[str] = None
    use_mock: bool = False
    page_limit: Optional[int] = None
    timeout: float = 15.0

    @classmethod
    def from_env(cls) -> "Settings":
        timeout = _parse_number(ENV_HTTP_TIMEOUT, _getenv(ENV_HTTP_TIMEOUT), float)
        return cls(
            base_url=_getenv(ENV_API_BASE, DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
            favorites_path=_getenv(ENV_FAVORITES_PATH, DEFAULT_FAVORITES_PATH) or DEFAULT_FAVORITES_PATH,
            fernet_key=_getenv(ENV_FERNET_KEY),
            use_mock=_parse_bool(_getenv(ENV_USE_MOCK)),
            page_limit=_parse_number(ENV_PAGE_LIMIT, _getenv(ENV_PAGE_LIMIT), int),
            timeout=timeout if timeout is not None else 15.0,
        )


__all__ = ["Settings"]
