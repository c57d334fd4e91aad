"""
Caching layer for compiled patterns.

Each route registry owns a ``PatternCache`` sized from the application
config. ``compile_pattern`` goes through a separate process-wide cache and
is used for routes built outside a registry.
"""

import threading
import time
import logging
from dataclasses import dataclass
from typing import Optional
from collections import OrderedDict

from .compiler.compiler import CompiledPattern, PatternCompiler
from .compiler.parser import parse_pattern

logger = logging.getLogger("atto.patterns")


@dataclass
class CacheStats:
    """Counters kept by a ``PatternCache``."""
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    errors: int = 0
    total_compile_time: float = 0.0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups else 0.0


class PatternCache:
    """
    Thread-safe LRU of compiled patterns, keyed by the raw pattern text.

    Args:
        max_size: Number of patterns kept; 0 compiles without storing
    """

    def __init__(self, max_size: int = 1000):
        self._max_size = max_size
        self._entries: "OrderedDict[str, CompiledPattern]" = OrderedDict()
        self._lock = threading.RLock()
        self._stats = CacheStats()
        self._compiler = PatternCompiler()

    @property
    def max_size(self) -> int:
        return self._max_size

    def compile_with_cache(self, pattern: str) -> CompiledPattern:
        """
        Compile a pattern, reusing a cached result when there is one.

        Raises:
            PatternSyntaxError: Invalid pattern syntax
        """
        with self._lock:
            compiled = self._entries.get(pattern)
            if compiled is not None:
                self._entries.move_to_end(pattern)
                self._stats.hits += 1
                return compiled
            self._stats.misses += 1

        started = time.perf_counter()
        try:
            compiled = self._compiler.compile(parse_pattern(pattern))
        except Exception:
            with self._lock:
                self._stats.errors += 1
            raise

        with self._lock:
            self._stats.total_compile_time += time.perf_counter() - started
            # Another thread may have stored it meanwhile
            if pattern in self._entries:
                return self._entries[pattern]
            if self._max_size > 0:
                self._evict(self._max_size - 1)
                self._entries[pattern] = compiled
        return compiled

    def _evict(self, keep: int) -> None:
        while len(self._entries) > max(keep, 0):
            evicted, _ = self._entries.popitem(last=False)
            self._stats.evictions += 1
            logger.debug("Evicted compiled pattern %r", evicted)

    def get_stats(self) -> CacheStats:
        """Snapshot of the statistics counters."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                evictions=self._stats.evictions,
                errors=self._stats.errors,
                total_compile_time=self._stats.total_compile_time,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, pattern: str) -> bool:
        with self._lock:
            return pattern in self._entries


_global_cache: Optional[PatternCache] = None
_global_lock = threading.Lock()


def get_global_cache() -> PatternCache:
    """Get or create the process-wide cache."""
    global _global_cache
    with _global_lock:
        if _global_cache is None:
            _global_cache = PatternCache()
        return _global_cache


def set_global_cache(cache: Optional[PatternCache]):
    """Replace the process-wide cache (None resets it lazily)."""
    global _global_cache
    with _global_lock:
        _global_cache = cache


def compile_pattern(pattern: str, use_cache: bool = True) -> CompiledPattern:
    """
    Compile a pattern string, through the process-wide cache by default.

    Raises:
        PatternSyntaxError: Invalid pattern syntax
    """
    if use_cache:
        return get_global_cache().compile_with_cache(pattern)
    return PatternCompiler().compile(parse_pattern(pattern))
