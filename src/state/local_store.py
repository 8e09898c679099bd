from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from cryptography.fernet import Fernet, InvalidToken

from .models import FavoriteRecord, FavoritesTable


logger = logging.getLogger(__name__)


class FavoritesStoreError(ValueError):
    """Raised when the persisted favorites document cannot be read."""


def _to_fernet(key: str | bytes) -> Fernet:
    # Accepts POKEDEX_FERNET_KEY as read from the environment (str) or raw bytes
    return Fernet(key.encode("ascii") if isinstance(key, str) else key)


def _dump_table_json(table: FavoritesTable) -> bytes:
    # Deterministic JSON: stable key order, no extra whitespace
    return json.dumps(
        table.model_dump(), separators=(",", ":"), sort_keys=True
    ).encode("utf-8")


def _load_table_json(data: bytes) -> FavoritesTable:
    raw = json.loads(data.decode("utf-8"))
    return FavoritesTable.model_validate(raw)


class LocalFavoritesStore:
    """
    File-backed favorites table keyed by pokemon id.

    Usage
    - `get_all()` returns every record ordered by id.
    - `insert(record)` / `insert_all(*records)` ignore ids that already exist,
      so the first write for an id wins.
    - `delete(record)` removes the record with the same id, if any.

    Every call reads and rewrites the whole document under a lock, and the
    write lands through a temp file plus `os.replace`, so concurrent callers
    in one process always observe a complete table. When `fernet_key` is
    given the document is encrypted at rest.
    """

    def __init__(
        self,
        path: os.PathLike[str] | str,
        *,
        fernet_key: Optional[str | bytes] = None,
    ) -> None:
        self._path = Path(path)
        self._fernet = _to_fernet(fernet_key) if fernet_key else None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # -------- Core operations --------
    def get_all(self) -> List[FavoriteRecord]:
        with self._lock:
            return list(self._read().records)

    def load_all_by_ids(self, ids: Iterable[int]) -> List[FavoriteRecord]:
        wanted = set(ids)
        with self._lock:
            return [r for r in self._read().records if r.id in wanted]

    def insert(self, record: FavoriteRecord) -> None:
        self.insert_all(record)

    def insert_all(self, *records: FavoriteRecord) -> None:
        with self._lock:
            table = self._read()
            by_id: Dict[int, FavoriteRecord] = {r.id: r for r in table.records}
            added = 0
            for record in records:
                if record.id in by_id:
                    continue
                by_id[record.id] = record
                added += 1
            if not added:
                logger.debug("insert ignored; all %d id(s) already stored", len(records))
                return
            self._write(table.model_copy(update={"records": sorted(by_id.values(), key=lambda r: r.id)}))
            logger.debug("Inserted %d favorite record(s)", added)

    def delete(self, record: FavoriteRecord) -> None:
        with self._lock:
            table = self._read()
            remaining = [r for r in table.records if r.id != record.id]
            if len(remaining) == len(table.records):
                return
            self._write(table.model_copy(update={"records": remaining}))
            logger.debug("Deleted favorite record %d", record.id)

    # -------- Internal --------
    def _read(self) -> FavoritesTable:
        """Load the table; a missing file reads as empty.

        Raises FavoritesStoreError if the file cannot be read, decryption
        fails or content is invalid.
        """
        try:
            body = self._path.read_bytes()
        except FileNotFoundError:
            return FavoritesTable.empty()
        except OSError as ex:
            raise FavoritesStoreError(f"Cannot read favorites document {self._path}") from ex

        if self._fernet is not None:
            try:
                body = self._fernet.decrypt(body)
            except InvalidToken as ex:
                raise FavoritesStoreError("Failed to decrypt favorites: invalid Fernet token") from ex

        try:
            return _load_table_json(body)
        except Exception as ex:
            raise FavoritesStoreError(f"Failed to parse favorites document {self._path}") from ex

    def _write(self, table: FavoritesTable) -> None:
        payload = _dump_table_json(table)
        if self._fernet is not None:
            payload = self._fernet.encrypt(payload)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
