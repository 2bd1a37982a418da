"""
In-memory cache of analysis results keyed by (profile id, content hash).

The cache is an injectable component: CodeAnalyzer takes one in its constructor, so
callers own its lifetime. No locking; a host serving concurrent callers wraps it or
gives each caller its own analyzer.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from snippetflow.analysis.data_model import AnalysisResult

_MASK_32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


def rolling_hash(content: str) -> int:
    """
    32-bit signed rolling hash: h = h * 31 + code_unit over UTF-16 code units.
    Empty content hashes to 0.
    """
    data = content.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & _MASK_32
    return h - (1 << 32) if h & _SIGN_BIT else h


def cache_key(profile_id: str, content: str) -> str:
    return f"{profile_id}:{rolling_hash(content)}"


@dataclass(frozen=True)
class CacheStats:
    size: int
    keys: tuple[str, ...]
    hits: int
    misses: int
    max_entries: int | None


class AnalysisCache:
    """
    Result cache with get/put/clear. max_entries=None keeps every entry for the
    cache's lifetime; a positive max_entries evicts least recently used entries.
    """

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be a positive int or None, got {max_entries}")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, tuple[str, AnalysisResult]] = OrderedDict()
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, profile_id: str, content: str) -> AnalysisResult | None:
        """Cached result for exactly this content, or None. A hash collision is a miss."""
        key = cache_key(profile_id, content)
        entry = self._entries.get(key)
        if entry is None or entry[0] != content:
            self._misses += 1
            logger.debug(f"Analysis cache miss: {key}")
            return None
        self._entries.move_to_end(key)
        self._hits += 1
        logger.debug(f"Analysis cache hit: {key}")
        return entry[1]

    def put(self, profile_id: str, content: str, result: AnalysisResult) -> None:
        key = cache_key(profile_id, content)
        self._entries[key] = (content, result)
        self._entries.move_to_end(key)
        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Analysis cache evicted: {evicted}")

    def clear(self) -> None:
        self._entries.clear()
        self._hits = 0
        self._misses = 0

    def stats(self) -> CacheStats:
        return CacheStats(
            size=len(self._entries),
            keys=tuple(self._entries.keys()),
            hits=self._hits,
            misses=self._misses,
            max_entries=self.max_entries,
        )
