"""Least-recently-used cache of chunk payloads."""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Optional

from lineseek.core.chunk import Chunk
from lineseek.core.loader import ChunkLoader


@dataclass
class CacheStats:
    """Counters for cache activity."""
    hits: int = 0
    misses: int = 0
    restores: int = 0
    evictions: int = 0


class ChunkCache:
    """Bounds the number of resident chunk payloads.

    Evicted chunks are released but kept as empty shells, so the next
    access restores into the same Chunk object instead of allocating a
    new one.
    """

    def __init__(self, loader: ChunkLoader, capacity: Optional[int] = None):
        """Initialize the cache.

        Args:
            loader: Loader used to read and restore chunks
            capacity: Maximum resident chunks (default: loader settings)

        Raises:
            ValueError: If capacity < 1
        """
        self.loader = loader
        self.capacity = capacity if capacity is not None else loader.settings.cache_capacity
        if self.capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {self.capacity}")
        self.stats = CacheStats()
        self._resident: "OrderedDict[int, Chunk]" = OrderedDict()
        self._released: Dict[int, Chunk] = {}

    def __len__(self) -> int:
        return len(self._resident)

    def __contains__(self, idx: int) -> bool:
        return idx in self._resident

    def get(self, idx: int) -> Chunk:
        """Return chunk ``idx`` with its payload loaded.

        Raises:
            ChunkIndexOutOfRangeError: If idx is outside the loader's domain
            ChunkReadError: If the chunk cannot be read
        """
        chunk = self._resident.get(idx)
        if chunk is not None:
            self._resident.move_to_end(idx)
            self.stats.hits += 1
            return chunk

        self.stats.misses += 1
        chunk = self._released.get(idx)
        if chunk is not None:
            self.loader.restore_chunk(chunk, idx)
            del self._released[idx]
            self.stats.restores += 1
        else:
            chunk = self.loader.load_chunk(idx)

        self._resident[idx] = chunk
        self._evict()
        return chunk

    def resident_indices(self) -> List[int]:
        """Resident chunk indices, least recently used first."""
        return list(self._resident)

    def resident_bytes(self) -> int:
        """Total payload bytes currently held in memory."""
        return sum(len(chunk) for chunk in self._resident.values())

    def release_all(self) -> None:
        """Release every resident payload."""
        while self._resident:
            self._release_oldest()

    def _evict(self) -> None:
        while len(self._resident) > self.capacity:
            self._release_oldest()
            self.stats.evictions += 1

    def _release_oldest(self) -> None:
        idx, chunk = self._resident.popitem(last=False)
        chunk.release()
        self._released[idx] = chunk
