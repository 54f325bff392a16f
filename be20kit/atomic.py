"""Thread-safe ordered map and set containers."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from functools import total_ordering
from typing import Any, Callable, Generic, Hashable, TextIO, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@total_ordering
@dataclass(eq=False)
class MapItem(Generic[K, V]):
    """A key/value pair from an AtomicMap; compared by key only."""

    key: K
    value: V

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MapItem):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: "MapItem") -> bool:
        if not isinstance(other, MapItem):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)


class AtomicMap(Generic[K, V]):
    """A key-ordered map that creates missing values on access, like defaultdict."""

    def __init__(self, factory: Callable[[], V]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._data: dict[K, V] = {}

    def __getitem__(self, key: K) -> V:
        with self._lock:
            try:
                return self._data[key]
            except KeyError:
                value = self._factory()
                self._data[key] = value
                return value

    def get(self, key: K) -> V:
        """Return the value for key, raising KeyError if absent."""
        with self._lock:
            return self._data[key]

    def insert(self, key: K, value: V) -> None:
        """Add a new entry; raises KeyError if the key is already present."""
        with self._lock:
            if key in self._data:
                raise KeyError(key)
            self._data[key] = value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            return key in self._data

    def _sorted_pairs(self) -> list[tuple[K, V]]:
        return sorted(self._data.items(), key=lambda kv: kv[0])

    def keys(self) -> list[K]:
        with self._lock:
            return [k for k, _ in self._sorted_pairs()]

    def values(self) -> list[V]:
        with self._lock:
            return [v for _, v in self._sorted_pairs()]

    def items(self) -> list[MapItem[K, V]]:
        with self._lock:
            return [MapItem(k, v) for k, v in self._sorted_pairs()]

    def write(self, stream: TextIO) -> None:
        """Write one ``key: value`` line per entry, in key order."""
        with self._lock:
            for k, v in self._sorted_pairs():
                stream.write(f" {k}: {v}\n")


class AtomicSet(Generic[K]):
    """A thread-safe set whose keys are reported in sorted order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: set[Hashable] = set()

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __contains__(self, item: Any) -> bool:
        with self._lock:
            return item in self._data

    def add(self, item: K) -> None:
        with self._lock:
            self._data.add(item)

    def discard(self, item: K) -> None:
        with self._lock:
            self._data.discard(item)

    def check_for_presence_and_insert(self, item: K) -> bool:
        """Return whether item was present; afterwards it is in the set."""
        with self._lock:
            if item in self._data:
                return True
            self._data.add(item)
            return False

    def check_for_presence_and_erase(self, item: K) -> bool:
        """Return whether item was present; afterwards it is not in the set."""
        with self._lock:
            if item in self._data:
                self._data.discard(item)
                return True
            return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def keys(self) -> list[K]:
        with self._lock:
            return sorted(self._data)