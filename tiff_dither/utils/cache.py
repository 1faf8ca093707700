"""LRU cache of processed images keyed by (source, settings_hash)."""

from __future__ import annotations

from collections import OrderedDict


class ResultCache:
    """Simple LRU cache for processed images.

    Keys are (source_key, settings_hash) tuples; ``source_key`` is usually
    the resolved input path.
    """

    def __init__(self, max_size: int = 16) -> None:
        self._max_size = max_size
        self._cache: OrderedDict[tuple[str, str], object] = OrderedDict()

    def get(self, source_key: str, settings_hash: str) -> object | None:
        """Get a cached result, or None if not present."""
        key = (source_key, settings_hash)
        if key in self._cache:
            self._cache.move_to_end(key)
            return self._cache[key]
        return None

    def put(self, source_key: str, settings_hash: str, value: object) -> None:
        """Cache a processed result."""
        key = (source_key, settings_hash)
        if key in self._cache:
            self._cache.move_to_end(key)
        elif len(self._cache) >= self._max_size:
            self._cache.popitem(last=False)
        self._cache[key] = value

    @property
    def size(self) -> int:
        return len(self._cache)
