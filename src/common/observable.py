from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Iterable, List, Tuple, TypeVar


T = TypeVar("T")


class LoadStatus(str, Enum):
    EMPTY = "empty"
    LOADING = "loading"
    POPULATED = "populated"


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    status: LoadStatus
    items: Tuple[T, ...] = ()


Subscriber = Callable[[Snapshot[T]], None]


class ObservableList(Generic[T]):
    """
    Holds the latest snapshot of a collection and notifies subscribers.

    - New subscribers immediately receive the current snapshot.
    - Every `publish()` replaces the whole collection; the last publish wins.
    - Callbacks run on the publishing thread, outside the internal lock.
    """

    def __init__(self) -> None:
        self._snapshot: Snapshot[T] = Snapshot(LoadStatus.EMPTY)
        self._subscribers: List[Subscriber] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> Snapshot[T]:
        with self._lock:
            return self._snapshot

    @property
    def items(self) -> List[T]:
        return list(self.value.items)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback` and return a function that unregisters it."""
        with self._lock:
            self._subscribers.append(callback)
            current = self._snapshot
        callback(current)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def set_loading(self) -> None:
        with self._lock:
            items = self._snapshot.items
        self._emit(Snapshot(LoadStatus.LOADING, items))

    def publish(self, items: Iterable[T]) -> None:
        self._emit(Snapshot(LoadStatus.POPULATED, tuple(items)))

    def _emit(self, snapshot: Snapshot[T]) -> None:
        with self._lock:
            self._snapshot = snapshot
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(snapshot)


__all__ = ["LoadStatus", "ObservableList", "Snapshot"]
