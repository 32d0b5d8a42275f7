"""Bounded LRU cache for pairwise similarity scores."""

import threading
from collections import OrderedDict
from typing import Optional, Tuple

PairKey = Tuple[str, str]


class SimilarityCache:
    """Thread-safe LRU cache keyed by an unordered token pair.

    Passed explicitly into the matcher (there is no shared global cache), so
    each engine or test controls its own cache lifetime.
    """

    def __init__(self, maxsize: int = 4096):
        if maxsize < 0:
            raise ValueError("maxsize must be >= 0")
        self.maxsize = maxsize
        self._data: "OrderedDict[PairKey, float]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def key(a: str, b: str) -> PairKey:
        return (a, b) if a <= b else (b, a)

    def get(self, a: str, b: str) -> Optional[float]:
        pair = self.key(a, b)
        with self._lock:
            value = self._data.get(pair)
            if value is None:
                self.misses += 1
                return None
            self._data.move_to_end(pair)
            self.hits += 1
            return value

    def put(self, a: str, b: str, value: float) -> None:
        if self.maxsize == 0:
            return
        pair = self.key(a, b)
        with self._lock:
            self._data[pair] = value
            self._data.move_to_end(pair)
            while len(self._data) > self.maxsize:
                self._data.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        return (
            f"SimilarityCache(size={len(self)}, maxsize={self.maxsize}, "
            f"hits={self.hits}, misses={self.misses})"
        )
